"""Render servers as WhatsApp-flavoured text (`*bold*`)."""

from typing import Any, Iterable, Optional

from models import Server, ServerStatus


NOT_AVAILABLE = "N/A"

STATUS_GLYPHS = {
    ServerStatus.RUNNING: "🟢",
    ServerStatus.OFF: "🔴",
    ServerStatus.STARTING: "🟡",
    ServerStatus.STOPPING: "🟡",
}
NEUTRAL_GLYPH = "⚪"


def status_glyph(server: Server) -> str:
    return STATUS_GLYPHS.get(server.state, NEUTRAL_GLYPH)


def or_na(value: Optional[Any]) -> str:
    """Return `value` as text, or N/A when it is missing or empty."""
    if value is None or value == "":
        return NOT_AVAILABLE
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def format_specs(server: Server) -> str:
    server_type = server.server_type
    if server_type is None:
        return NOT_AVAILABLE
    return (
        f"{server_type.cores} vCPU, {or_na(server_type.memory)}GB RAM, "
        f"{server_type.disk}GB Disk"
    )


def format_server_entry(server: Server) -> str:
    """Short block used in the server listing."""
    type_name = server.server_type.name if server.server_type else None
    city = server.location.city if server.location else None
    return "\n".join([
        f"{status_glyph(server)} *{server.name}* (ID: {server.id})",
        f"   Status: {or_na(server.status)}",
        f"   IP: {or_na(server.ipv4)}",
        f"   Type: {or_na(type_name)}",
        f"   Location: {or_na(city)}",
    ])


def format_server_list(servers: Iterable[Server]) -> str:
    entries = [format_server_entry(server) for server in servers]
    if not entries:
        return "No servers found."
    return "*Your Servers:*\n\n" + "\n\n".join(entries)


def format_server_details(server: Server) -> str:
    """Full detail view used by `status`."""
    type_name = server.server_type.name if server.server_type else None
    city = server.location.city if server.location else None
    country = server.location.country if server.location else None
    return "\n".join([
        f"{status_glyph(server)} *{server.name}*",
        "",
        f"*Status:* {or_na(server.status)}",
        f"*ID:* {server.id}",
        f"*IPv4:* {or_na(server.ipv4)}",
        f"*IPv6:* {or_na(server.ipv6)}",
        f"*Type:* {or_na(type_name)}",
        f"*Specs:* {format_specs(server)}",
        f"*Location:* {or_na(city)}, {or_na(country)}",
    ])


__all__ = [
    "NOT_AVAILABLE",
    "status_glyph",
    "or_na",
    "format_specs",
    "format_server_entry",
    "format_server_list",
    "format_server_details",
]

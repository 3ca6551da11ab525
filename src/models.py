"""Server records as returned by the Hetzner Cloud API.

Servers are read-through projections of remote state: they are built from
one API response and discarded once the command that fetched them is done.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


def _as_dict(value: Any) -> Dict[str, Any]:
    # Nested blocks may be null or not objects at all.
    return value if isinstance(value, dict) else {}


class ServerStatus(Enum):
    """Power states the relay distinguishes. Everything else maps to OTHER."""
    RUNNING = "running"
    OFF = "off"
    STARTING = "starting"
    STOPPING = "stopping"
    OTHER = "other"

    @classmethod
    def from_api(cls, value: Optional[str]) -> "ServerStatus":
        try:
            return cls((value or "").lower())
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class ServerType:
    name: str
    cores: int = 0
    memory: float = 0.0
    disk: int = 0

    @classmethod
    def from_api(cls, data: Optional[Dict[str, Any]]) -> Optional["ServerType"]:
        if not isinstance(data, dict) or not data:
            return None
        return cls(
            name=str(data.get("name") or ""),
            cores=int(data.get("cores") or 0),
            memory=float(data.get("memory") or 0),
            disk=int(data.get("disk") or 0),
        )


@dataclass(frozen=True)
class Location:
    city: Optional[str] = None
    country: Optional[str] = None

    @classmethod
    def from_datacenter(cls, data: Optional[Dict[str, Any]]) -> Optional["Location"]:
        """Read the nested datacenter.location block."""
        location = _as_dict(data).get("location")
        if not isinstance(location, dict) or not location:
            return None
        return cls(city=location.get("city") or None, country=location.get("country") or None)


@dataclass(frozen=True)
class Server:
    id: int
    name: str
    status: str
    ipv4: Optional[str] = None
    ipv6: Optional[str] = None
    server_type: Optional[ServerType] = None
    location: Optional[Location] = None

    @property
    def state(self) -> ServerStatus:
        return ServerStatus.from_api(self.status)

    @property
    def is_running(self) -> bool:
        return self.state is ServerStatus.RUNNING

    @property
    def is_off(self) -> bool:
        return self.state is ServerStatus.OFF

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Server":
        """Create a Server from one entry of a /servers response.

        Raises:
            KeyError, TypeError, ValueError: if `id` is missing or not numeric.
        """
        public_net = _as_dict(data.get("public_net"))
        ipv4 = _as_dict(public_net.get("ipv4")).get("ip")
        ipv6 = _as_dict(public_net.get("ipv6")).get("ip")

        return cls(
            id=int(data["id"]),
            name=str(data.get("name") or ""),
            status=str(data.get("status") or ""),
            ipv4=ipv4 or None,
            ipv6=ipv6 or None,
            server_type=ServerType.from_api(data.get("server_type")),
            location=Location.from_datacenter(data.get("datacenter")),
        )


__all__ = ["ServerStatus", "ServerType", "Location", "Server"]

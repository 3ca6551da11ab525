"""Endpoint helpers for the Hetzner Cloud API.

All URLs are built from a base API URL, e.g. https://api.hetzner.cloud/v1
(configured through `HETZNER_API_URL`).

Only the endpoints the relay needs are covered:
- GET  /servers
- GET  /servers/{id}
- POST /servers/{id}/actions/{action}
"""
from errors import ConfigurationError


SERVER_ACTIONS = ("poweron", "poweroff", "shutdown", "reboot")


def get_api_base_url(url: str) -> str:
    """Validate and normalize the base API URL.

    Raises:
        ConfigurationError: if the URL is empty or doesn't look like an
            http(s) URL.
    """
    if not url:
        raise ConfigurationError("Base API URL not configured. Set HETZNER_API_URL.")

    if not (url.startswith("http://") or url.startswith("https://")):
        raise ConfigurationError(
            "Base API URL must start with http:// or https://; got: " + url
        )

    return url.rstrip("/")


def get_servers_endpoint(base_url: str) -> str:
    """Return the /servers endpoint URL."""
    return f"{get_api_base_url(base_url)}/servers"


def get_server_endpoint(base_url: str, server_id: int) -> str:
    """Return the /servers/{id} endpoint URL."""
    return f"{get_servers_endpoint(base_url)}/{server_id}"


def get_server_action_endpoint(base_url: str, server_id: int, action: str) -> str:
    """Return the /servers/{id}/actions/{action} endpoint URL.

    Raises:
        ValueError: if `action` is not one of SERVER_ACTIONS.
    """
    if action not in SERVER_ACTIONS:
        raise ValueError(f"Unsupported server action: {action}")
    return f"{get_server_endpoint(base_url, server_id)}/actions/{action}"


__all__ = [
    "SERVER_ACTIONS",
    "get_api_base_url",
    "get_servers_endpoint",
    "get_server_endpoint",
    "get_server_action_endpoint",
]

"""Hetzner Cloud directory and action client.

Looks servers up (by id or by name) and sends power actions. Every remote
call is a single attempt with an explicit timeout. Actions are accepted or
rejected synchronously but completed by Hetzner in the background; the
returned action object is not polled.
"""
import logging
from typing import Any, Dict, List, Optional

import requests

from endpoints import (
    get_api_base_url,
    get_server_action_endpoint,
    get_server_endpoint,
    get_servers_endpoint,
)
from errors import TransportError
from http_headers import get_common_headers
from models import Server
from settings import Settings


logger = logging.getLogger(__name__)

PAGE_SIZE = 50


class HetznerClient:
    """Thin wrapper around the Hetzner Cloud servers API.

    The client owns one `requests.Session`. Use it as a context manager so
    the connection is released when the command is done:

        with HetznerClient(settings) as client:
            servers = client.list_servers()
    """

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        # Fails fast with ConfigurationError on a missing token or bad URL.
        headers = get_common_headers(settings.hetzner_api_token)
        self.base_url = get_api_base_url(settings.hetzner_api_url)
        self.timeout = settings.hetzner_timeout
        self.session = session or requests.Session()
        self.session.headers.update(headers)

    def __enter__(self) -> "HetznerClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def list_servers(self) -> List[Server]:
        """Return every server in the project, following pagination.

        Raises:
            TransportError: on network failure, a non-success status, or a
                payload that can't be read.
        """
        servers: List[Server] = []
        page: Optional[int] = 1
        while page is not None:
            payload = self._get_json(
                get_servers_endpoint(self.base_url),
                params={"page": page, "per_page": PAGE_SIZE},
            )
            try:
                servers.extend(Server.from_api(item) for item in payload.get("servers", []))
            except (KeyError, TypeError, ValueError, AttributeError) as exc:
                raise TransportError(f"Unexpected server listing payload: {exc}") from exc
            page = _next_page(payload, page)
        return servers

    def get_server(self, server_id: int) -> Optional[Server]:
        """Return the server with `server_id`, or None on any non-success response.

        Raises:
            TransportError: if the request could not be sent at all.
        """
        url = get_server_endpoint(self.base_url, server_id)
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error(f"Failed to get server {server_id} from Hetzner: {exc}")
            raise TransportError(str(exc)) from exc

        if not response.ok:
            logger.info(f"Server {server_id} lookup returned {response.status_code}")
            return None

        try:
            return Server.from_api(response.json()["server"])
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            logger.warning(f"Unreadable payload for server {server_id}: {exc}")
            return None

    def get_server_by_name(self, name: str) -> Optional[Server]:
        """Return the first server whose name matches `name`, ignoring case.

        Raises:
            TransportError: if the listing fails.
        """
        wanted = name.casefold()
        for server in self.list_servers():
            if server.name.casefold() == wanted:
                return server
        return None

    def power_on(self, server_id: int) -> bool:
        return self._execute_action(server_id, "poweron")

    def power_off(self, server_id: int) -> bool:
        return self._execute_action(server_id, "poweroff")

    def shutdown(self, server_id: int) -> bool:
        return self._execute_action(server_id, "shutdown")

    def reboot(self, server_id: int) -> bool:
        return self._execute_action(server_id, "reboot")

    def _execute_action(self, server_id: int, action: str) -> bool:
        url = get_server_action_endpoint(self.base_url, server_id, action)
        try:
            response = self.session.post(url, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error(f"Failed to execute {action} on server {server_id}: {exc}")
            return False

        if not response.ok:
            logger.warning(
                f"Failed to execute {action} on server {server_id}: {response.status_code}"
            )
            return False

        logger.info(f"Accepted {action} for server {server_id}")
        return True

    def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            logger.error(f"Failed to get servers from Hetzner: {exc}")
            raise TransportError(str(exc)) from exc
        except ValueError as exc:
            logger.error(f"Hetzner returned a non-JSON response: {exc}")
            raise TransportError("Invalid JSON in Hetzner response") from exc

        if not isinstance(payload, dict):
            raise TransportError("Unexpected Hetzner response shape")
        return payload


def _next_page(payload: Dict[str, Any], current: int) -> Optional[int]:
    pagination = (payload.get("meta") or {}).get("pagination") or {}
    next_page = pagination.get("next_page")
    if isinstance(next_page, int) and next_page > current:
        return next_page
    return None


__all__ = ["HetznerClient", "PAGE_SIZE"]

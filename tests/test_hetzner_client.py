from __future__ import annotations

import unittest
from unittest.mock import MagicMock

import requests

from errors import ConfigurationError, TransportError
from hetzner import PAGE_SIZE, HetznerClient
from settings import Settings


BASE = "https://api.example.test/v1"


def _settings(**overrides) -> Settings:
    values = dict(hetzner_api_token="secret", hetzner_api_url=BASE, hetzner_timeout=5.0)
    values.update(overrides)
    return Settings(**values)


def _response(status: int = 200, payload=None) -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 400
    response.json.return_value = payload
    if not response.ok:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status} error")
    return response


def _server(server_id: int, name: str, status: str = "running") -> dict:
    return {"id": server_id, "name": name, "status": status}


def _page(servers: list, next_page=None) -> dict:
    return {"servers": servers, "meta": {"pagination": {"next_page": next_page}}}


class ClientConstructionTests(unittest.TestCase):
    def test_missing_token_fails_fast(self) -> None:
        with self.assertRaises(ConfigurationError):
            HetznerClient(_settings(hetzner_api_token=None), session=MagicMock())

    def test_bad_url_fails_fast(self) -> None:
        with self.assertRaises(ConfigurationError):
            HetznerClient(_settings(hetzner_api_url="ftp://nope"), session=MagicMock())

    def test_bearer_header_installed(self) -> None:
        session = MagicMock()
        HetznerClient(_settings(), session=session)
        headers = session.headers.update.call_args.args[0]
        self.assertEqual(headers["Authorization"], "Bearer secret")

    def test_context_manager_closes_session(self) -> None:
        session = MagicMock()
        with HetznerClient(_settings(), session=session):
            pass
        session.close.assert_called_once_with()


class ListServersTests(unittest.TestCase):
    def setUp(self) -> None:
        self.session = MagicMock()
        self.client = HetznerClient(_settings(), session=self.session)

    def test_lists_single_page(self) -> None:
        self.session.get.return_value = _response(payload=_page([_server(1, "a"), _server(2, "b")]))
        servers = self.client.list_servers()
        self.assertEqual([s.name for s in servers], ["a", "b"])
        self.session.get.assert_called_once_with(
            f"{BASE}/servers", params={"page": 1, "per_page": PAGE_SIZE}, timeout=5.0
        )

    def test_follows_pagination(self) -> None:
        self.session.get.side_effect = [
            _response(payload=_page([_server(1, "a")], next_page=2)),
            _response(payload=_page([_server(2, "b")], next_page=None)),
        ]
        servers = self.client.list_servers()
        self.assertEqual([s.id for s in servers], [1, 2])
        self.assertEqual(self.session.get.call_args.kwargs["params"]["page"], 2)

    def test_non_success_raises_transport_error(self) -> None:
        self.session.get.return_value = _response(status=401, payload={})
        with self.assertRaises(TransportError):
            self.client.list_servers()

    def test_network_failure_raises_transport_error(self) -> None:
        self.session.get.side_effect = requests.ConnectionError("unreachable")
        with self.assertRaises(TransportError):
            self.client.list_servers()

    def test_non_json_raises_transport_error(self) -> None:
        response = _response(payload=None)
        response.json.side_effect = ValueError("not json")
        self.session.get.return_value = response
        with self.assertRaises(TransportError):
            self.client.list_servers()

    def test_malformed_entry_raises_transport_error(self) -> None:
        self.session.get.return_value = _response(payload=_page([{"name": "no-id"}]))
        with self.assertRaises(TransportError):
            self.client.list_servers()


class LookupTests(unittest.TestCase):
    def setUp(self) -> None:
        self.session = MagicMock()
        self.client = HetznerClient(_settings(), session=self.session)

    def test_get_server_by_id(self) -> None:
        self.session.get.return_value = _response(payload={"server": _server(42, "web-01")})
        server = self.client.get_server(42)
        self.assertEqual(server.name, "web-01")
        self.session.get.assert_called_once_with(f"{BASE}/servers/42", timeout=5.0)

    def test_get_server_not_found_is_none(self) -> None:
        self.session.get.return_value = _response(status=404, payload={"error": {}})
        self.assertIsNone(self.client.get_server(42))

    def test_get_server_null_payload_is_none(self) -> None:
        self.session.get.return_value = _response(payload={"server": None})
        self.assertIsNone(self.client.get_server(42))

    def test_get_server_malformed_datacenter_is_tolerated(self) -> None:
        self.session.get.return_value = _response(
            payload={"server": {"id": 42, "name": "web-01", "datacenter": "fsn1-dc14"}}
        )
        server = self.client.get_server(42)
        self.assertEqual(server.id, 42)
        self.assertIsNone(server.location)

    def test_get_server_non_object_payload_is_none(self) -> None:
        self.session.get.return_value = _response(payload=["unexpected"])
        self.assertIsNone(self.client.get_server(42))

    def test_get_server_network_failure_raises(self) -> None:
        self.session.get.side_effect = requests.Timeout("slow")
        with self.assertRaises(TransportError):
            self.client.get_server(42)

    def test_get_by_name_is_case_insensitive(self) -> None:
        self.session.get.return_value = _response(payload=_page([_server(1, "web-01")]))
        server = self.client.get_server_by_name("WEB-01")
        self.assertEqual(server.id, 1)

    def test_get_by_name_first_match_wins(self) -> None:
        self.session.get.return_value = _response(
            payload=_page([_server(1, "dup"), _server(2, "Dup")])
        )
        self.assertEqual(self.client.get_server_by_name("dup").id, 1)

    def test_get_by_name_requires_exact_match(self) -> None:
        self.session.get.return_value = _response(payload=_page([_server(1, "web-01")]))
        self.assertIsNone(self.client.get_server_by_name("web"))


class ActionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.session = MagicMock()
        self.client = HetznerClient(_settings(), session=self.session)

    def test_each_action_posts_to_its_endpoint(self) -> None:
        self.session.post.return_value = _response(status=201, payload={"action": {}})
        calls = {
            "poweron": self.client.power_on,
            "poweroff": self.client.power_off,
            "shutdown": self.client.shutdown,
            "reboot": self.client.reboot,
        }
        for action, method in calls.items():
            with self.subTest(action=action):
                self.assertTrue(method(7))
                self.session.post.assert_called_with(
                    f"{BASE}/servers/7/actions/{action}", timeout=5.0
                )
        self.assertEqual(self.session.post.call_count, 4)

    def test_non_success_returns_false(self) -> None:
        self.session.post.return_value = _response(status=409, payload={})
        self.assertFalse(self.client.power_on(7))
        self.session.post.assert_called_once()

    def test_transport_failure_returns_false(self) -> None:
        self.session.post.side_effect = requests.ConnectionError("reset")
        self.assertFalse(self.client.reboot(7))
        self.session.post.assert_called_once()


if __name__ == "__main__":
    unittest.main()

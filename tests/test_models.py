from __future__ import annotations

import unittest

from models import Server, ServerStatus


API_SERVER = {
    "id": 42,
    "name": "web-01",
    "status": "running",
    "public_net": {
        "ipv4": {"ip": "203.0.113.10", "blocked": False},
        "ipv6": {"ip": "2001:db8::/64", "blocked": False},
    },
    "server_type": {"name": "cx22", "cores": 2, "memory": 4.0, "disk": 40},
    "datacenter": {
        "name": "fsn1-dc14",
        "location": {"name": "fsn1", "city": "Falkenstein", "country": "DE"},
    },
}


class ServerFromApiTests(unittest.TestCase):
    def test_maps_snake_case_fields(self) -> None:
        server = Server.from_api(API_SERVER)
        self.assertEqual(server.id, 42)
        self.assertEqual(server.name, "web-01")
        self.assertEqual(server.ipv4, "203.0.113.10")
        self.assertEqual(server.ipv6, "2001:db8::/64")
        self.assertEqual(server.server_type.cores, 2)
        self.assertEqual(server.server_type.memory, 4.0)
        self.assertEqual(server.location.city, "Falkenstein")
        self.assertEqual(server.location.country, "DE")
        self.assertTrue(server.is_running)

    def test_missing_nested_blocks_are_none(self) -> None:
        server = Server.from_api({"id": 1, "name": "bare", "status": "off", "public_net": {"ipv4": None}})
        self.assertIsNone(server.ipv4)
        self.assertIsNone(server.ipv6)
        self.assertIsNone(server.server_type)
        self.assertIsNone(server.location)
        self.assertTrue(server.is_off)

    def test_non_object_nested_blocks_are_ignored(self) -> None:
        server = Server.from_api({
            "id": 3,
            "name": "odd",
            "status": "running",
            "public_net": {"ipv4": "203.0.113.10", "ipv6": None},
            "server_type": "cx22",
            "datacenter": {"location": "fsn1"},
        })
        self.assertIsNone(server.ipv4)
        self.assertIsNone(server.server_type)
        self.assertIsNone(server.location)
        self.assertIsNone(Server.from_api({"id": 4, "datacenter": "fsn1-dc14"}).location)

    def test_missing_id_raises(self) -> None:
        with self.assertRaises(KeyError):
            Server.from_api({"name": "no-id"})


class ServerStatusTests(unittest.TestCase):
    def test_unknown_states_map_to_other(self) -> None:
        self.assertIs(ServerStatus.from_api("migrating"), ServerStatus.OTHER)
        self.assertIs(ServerStatus.from_api(None), ServerStatus.OTHER)

    def test_known_states(self) -> None:
        self.assertIs(ServerStatus.from_api("stopping"), ServerStatus.STOPPING)
        self.assertIs(ServerStatus.from_api("RUNNING"), ServerStatus.RUNNING)


if __name__ == "__main__":
    unittest.main()

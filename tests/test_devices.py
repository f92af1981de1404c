"""Tests for the devices resource."""

import pytest

from mcp_keenetic_router import KeeneticClient
from mcp_keenetic_router.exceptions import NotFoundError
from mcp_keenetic_router.resources.devices import (
    HOSTS_PATH,
    build_delete_commands,
    build_update_commands,
    normalize_device,
    normalize_devices,
)

from .fake_router import FakeRouter

HOSTS = {
    "host": [
        {
            "mac": "aa:bb:cc:dd:ee:01",
            "ip": "192.168.1.50",
            "hostname": "tv",
            "name": "Living Room TV",
            "interface": {"id": "Bridge0", "name": "Home"},
            "via": "aa:bb:cc:dd:ee:01",
            "active": True,
            "registered": "true",
            "access": "permit",
            "schedule": "kids",
            "rxbytes": 1000,
            "txbytes": 2000,
            "uptime": 3600,
            "first-seen": 100,
            "last-seen": 5,
            "link": "up",
            "dhcp": {"static": True},
        },
        {
            "mac": "AA:BB:CC:DD:EE:02",
            "ip": "192.168.1.51",
            "hostname": "phone",
            "active": "false",
            "registered": False,
            "dhcp": {"static": False},
        },
    ]
}


class TestNormalizeDevice:
    """Tests for host record normalization."""

    def test_full_record(self) -> None:
        """Test a complete record maps to canonical fields."""
        device = normalize_device(HOSTS["host"][0])

        assert device.mac == "AA:BB:CC:DD:EE:01"
        assert device.name == "Living Room TV"
        assert device.interface_id == "Bridge0"
        assert device.active is True
        assert device.registered is True
        assert device.access == "permit"
        assert device.rx_bytes == 1000
        assert device.first_seen == 100

    def test_static_ip_from_dhcp_flag(self) -> None:
        """Test static_ip equals ip only when dhcp.static is true."""
        device = normalize_device({"mac": "AA:BB:CC:DD:EE:FF", "ip": "192.168.1.50", "dhcp": {"static": True}})
        assert device.static_ip == "192.168.1.50"
        assert device.ip == "192.168.1.50"

        dynamic = normalize_device({"mac": "AA:BB:CC:DD:EE:FF", "ip": "192.168.1.50", "dhcp": {"static": False}})
        assert dynamic.static_ip is None

        missing = normalize_device({"mac": "AA:BB:CC:DD:EE:FF", "ip": "192.168.1.50"})
        assert missing.static_ip is None

    def test_name_falls_back_to_hostname(self) -> None:
        """Test name uses hostname when the router has no name."""
        device = normalize_device({"mac": "aa:bb:cc:dd:ee:ff", "hostname": "laptop"})
        assert device.name == "laptop"
        assert device.hostname == "laptop"

    def test_string_booleans(self) -> None:
        """Test string booleans decode to native values."""
        device = normalize_device({"mac": "x", "active": "TRUE", "registered": "no"})
        assert device.active is True
        assert device.registered is False

    def test_unknown_access_is_none(self) -> None:
        """Test unexpected access values are dropped."""
        assert normalize_device({"mac": "x", "access": "maybe"}).access is None

    def test_not_a_mapping(self) -> None:
        """Test a non-object record yields None."""
        assert normalize_device("garbage") is None


class TestNormalizeDevices:
    """Tests for host list shape tolerance."""

    def test_wrapped_array(self) -> None:
        """Test {"host": [...]} input."""
        assert len(normalize_devices(HOSTS)) == 2

    def test_bare_array(self) -> None:
        """Test a bare array."""
        assert len(normalize_devices(HOSTS["host"])) == 2

    def test_single_object(self) -> None:
        """Test a single host object is treated as a one-element list."""
        devices = normalize_devices({"host": HOSTS["host"][0]})
        assert [d.mac for d in devices] == ["AA:BB:CC:DD:EE:01"]

    def test_empty(self) -> None:
        """Test missing data yields an empty list."""
        assert normalize_devices(None) == []
        assert normalize_devices({}) == []
        assert normalize_devices({"host": []}) == []

    def test_skips_malformed(self) -> None:
        """Test non-object entries are skipped."""
        assert len(normalize_devices([HOSTS["host"][0], 42, None])) == 1

    def test_mac_set_round_trip(self) -> None:
        """Test the MAC set survives normalization in canonical form."""
        raw_macs = {host["mac"].upper() for host in HOSTS["host"]}
        assert {device.mac for device in normalize_devices(HOSTS)} == raw_macs


class TestBuildUpdateCommands:
    """Tests for device write commands."""

    def test_name(self) -> None:
        """Test a name change goes to known.host with a lowercase MAC."""
        assert build_update_commands("AA:BB:CC:DD:EE:FF", name="TV") == [
            {"known": {"host": {"mac": "aa:bb:cc:dd:ee:ff", "name": "TV"}}}
        ]

    def test_access_and_schedule(self) -> None:
        """Test access and schedule share one ip.hotspot.host command."""
        assert build_update_commands("AA:BB:CC:DD:EE:FF", access="deny", schedule="night") == [
            {"ip": {"hotspot": {"host": {"mac": "aa:bb:cc:dd:ee:ff", "deny": True, "schedule": "night"}}}}
        ]

    def test_permit(self) -> None:
        """Test permit access."""
        assert build_update_commands("aa:bb:cc:dd:ee:ff", access="permit") == [
            {"ip": {"hotspot": {"host": {"mac": "aa:bb:cc:dd:ee:ff", "permit": True}}}}
        ]

    def test_policy(self) -> None:
        """Test assigning a policy."""
        assert build_update_commands("AA:BB:CC:DD:EE:FF", policy="Policy0") == [
            {"ip": {"hotspot": {"host": {"mac": "aa:bb:cc:dd:ee:ff", "policy": "Policy0"}}}}
        ]

    def test_empty_policy_clears(self) -> None:
        """Test an empty policy emits the delete marker."""
        assert build_update_commands("AA:BB:CC:DD:EE:FF", policy="") == [
            {"ip": {"hotspot": {"host": {"mac": "aa:bb:cc:dd:ee:ff", "policy": {"no": True}}}}}
        ]
        assert build_update_commands("AA:BB:CC:DD:EE:FF", policy=None) == [
            {"ip": {"hotspot": {"host": {"mac": "aa:bb:cc:dd:ee:ff", "policy": {"no": True}}}}}
        ]

    def test_omitted_policy_emits_nothing(self) -> None:
        """Test leaving policy out produces no policy command."""
        commands = build_update_commands("AA:BB:CC:DD:EE:FF", name="TV")
        assert all("policy" not in str(c) for c in commands)

    def test_static_ip(self) -> None:
        """Test setting and clearing a reservation."""
        assert build_update_commands("AA:BB:CC:DD:EE:FF", static_ip="192.168.1.50") == [
            {"ip": {"dhcp": {"host": {"mac": "aa:bb:cc:dd:ee:ff", "ip": "192.168.1.50"}}}}
        ]
        assert build_update_commands("AA:BB:CC:DD:EE:FF", static_ip="") == [
            {"ip": {"dhcp": {"host": {"mac": "aa:bb:cc:dd:ee:ff", "no": True}}}}
        ]

    def test_order(self) -> None:
        """Test commands follow name, access, policy, static IP order."""
        commands = build_update_commands(
            "AA:BB:CC:DD:EE:FF",
            static_ip="192.168.1.50",
            policy="Policy1",
            access="permit",
            name="TV",
        )
        assert [next(iter(c)) for c in commands] == ["known", "ip", "ip", "ip"]
        assert "permit" in commands[1]["ip"]["hotspot"]["host"]
        assert commands[2]["ip"]["hotspot"]["host"]["policy"] == "Policy1"
        assert "dhcp" in commands[3]["ip"]

    def test_idempotent(self) -> None:
        """Test identical input builds identical commands."""
        first = build_update_commands("AA:BB:CC:DD:EE:FF", name="TV", policy="")
        second = build_update_commands("AA:BB:CC:DD:EE:FF", name="TV", policy="")
        assert first == second

    def test_no_recognised_attributes(self) -> None:
        """Test unknown attributes produce no commands."""
        assert build_update_commands("AA:BB:CC:DD:EE:FF") == []
        assert build_update_commands("AA:BB:CC:DD:EE:FF", color="red") == []

    def test_delete(self) -> None:
        """Test unregistering a device."""
        assert build_delete_commands("AA:BB:CC:DD:EE:FF") == [
            {"ip": {"hotspot": {"host": {"mac": "aa:bb:cc:dd:ee:ff", "no": True}}}}
        ]


class TestDevicesResource:
    """Tests for client.devices."""

    def test_all(self, client: KeeneticClient, router: FakeRouter) -> None:
        """Test listing devices."""
        router.json(HOSTS_PATH, HOSTS)
        devices = client.devices.all()
        assert [d.mac for d in devices] == ["AA:BB:CC:DD:EE:01", "AA:BB:CC:DD:EE:02"]

    def test_active(self, client: KeeneticClient, router: FakeRouter) -> None:
        """Test only connected devices are returned."""
        router.json(HOSTS_PATH, HOSTS)
        assert [d.mac for d in client.devices.active()] == ["AA:BB:CC:DD:EE:01"]

    def test_find_case_insensitive(self, client: KeeneticClient, router: FakeRouter) -> None:
        """Test find matches MACs regardless of case."""
        router.json(HOSTS_PATH, HOSTS)
        assert client.devices.find("aa:bb:cc:dd:ee:02").hostname == "phone"

    def test_find_missing(self, client: KeeneticClient, router: FakeRouter) -> None:
        """Test a missing MAC raises NotFoundError naming it."""
        router.json(HOSTS_PATH, HOSTS)
        with pytest.raises(NotFoundError, match="00:11:22:33:44:55"):
            client.devices.find("00:11:22:33:44:55")

    def test_update_single_batch(self, client: KeeneticClient, router: FakeRouter) -> None:
        """Test an update with several fields is one batched request."""
        client.devices.update("AA:BB:CC:DD:EE:FF", name="TV", policy="")

        assert router.paths().count("/rci/") == 1
        assert router.batches == [[
            {"known": {"host": {"mac": "aa:bb:cc:dd:ee:ff", "name": "TV"}}},
            {"ip": {"hotspot": {"host": {"mac": "aa:bb:cc:dd:ee:ff", "policy": {"no": True}}}}},
        ]]

    def test_update_noop(self, client: KeeneticClient, router: FakeRouter) -> None:
        """Test an update without recognised attributes makes no request."""
        assert client.devices.update("AA:BB:CC:DD:EE:FF") == []
        assert router.requests == []

    def test_delete(self, client: KeeneticClient, router: FakeRouter) -> None:
        """Test deleting a device."""
        client.devices.delete("AA:BB:CC:DD:EE:FF")
        assert router.batches == [build_delete_commands("aa:bb:cc:dd:ee:ff")]

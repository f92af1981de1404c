"""Tests for the DHCP and routing resources."""

import pytest

from mcp_keenetic_router import KeeneticClient
from mcp_keenetic_router.exceptions import NotFoundError
from mcp_keenetic_router.resources import dhcp, routing

from .fake_router import FakeRouter


class TestDhcpNormalization:
    """Tests for lease and reservation normalization."""

    def test_leases(self) -> None:
        """Test leases from a wrapped array."""
        leases = dhcp.normalize_leases({
            "lease": [
                {"mac": "aa:bb:cc:dd:ee:01", "ip": "192.168.1.20", "hostname": "laptop", "expires": 3600},
                "junk",
            ]
        })
        assert len(leases) == 1
        assert leases[0].mac == "AA:BB:CC:DD:EE:01"
        assert leases[0].expires == 3600

    def test_bindings(self) -> None:
        """Test reservations from the configuration subtree."""
        bindings = dhcp.normalize_bindings([{"mac": "aa:bb:cc:dd:ee:01", "ip": "192.168.1.50", "name": "tv"}])
        assert bindings[0].mac == "AA:BB:CC:DD:EE:01"
        assert bindings[0].name == "tv"

    def test_single_binding(self) -> None:
        """Test a lone reservation object is accepted."""
        assert len(dhcp.normalize_bindings({"mac": "aa:bb:cc:dd:ee:01", "ip": "192.168.1.50"})) == 1
        assert dhcp.normalize_bindings(None) == []


class TestDhcpCommands:
    """Tests for reservation write commands."""

    def test_create(self) -> None:
        """Test creating a reservation with a name."""
        assert dhcp.build_create_commands("AA:BB:CC:DD:EE:01", "192.168.1.50", "tv") == [
            {"ip": {"dhcp": {"host": {"mac": "aa:bb:cc:dd:ee:01", "ip": "192.168.1.50", "name": "tv"}}}}
        ]

    def test_replace_removes_then_adds(self) -> None:
        """Test replacing a reservation deletes before setting."""
        assert dhcp.build_replace_commands("AA:BB:CC:DD:EE:01", "192.168.1.60") == [
            {"ip": {"dhcp": {"host": {"mac": "aa:bb:cc:dd:ee:01", "no": True}}}},
            {"ip": {"dhcp": {"host": {"mac": "aa:bb:cc:dd:ee:01", "ip": "192.168.1.60"}}}},
        ]


    def test_replace_keeps_name(self) -> None:
        """Test a replaced reservation carries its new name."""
        assert dhcp.build_replace_commands("AA:BB:CC:DD:EE:01", "192.168.1.60", "tv")[-1] == {
            "ip": {"dhcp": {"host": {"mac": "aa:bb:cc:dd:ee:01", "ip": "192.168.1.60", "name": "tv"}}}
        }

class TestDhcpResource:
    """Tests for client.dhcp."""

    def test_leases(self, client: KeeneticClient, router: FakeRouter) -> None:
        """Test fetching leases."""
        router.json(dhcp.LEASES_PATH, {"lease": [{"mac": "aa:bb:cc:dd:ee:01", "ip": "192.168.1.20"}]})
        assert client.dhcp.leases()[0].ip == "192.168.1.20"

    def test_all_and_find(self, client: KeeneticClient, router: FakeRouter) -> None:
        """Test listing and finding reservations."""
        router.batch_result = [
            {"show": {"sc": {"ip": {"dhcp": {"host": [{"mac": "AA:BB:CC:DD:EE:01", "ip": "192.168.1.50"}]}}}}}
        ]

        assert len(client.dhcp.all()) == 1
        assert client.dhcp.find("aa:bb:cc:dd:ee:01").ip == "192.168.1.50"
        with pytest.raises(NotFoundError, match="AA:BB:CC:DD:EE:02"):
            client.dhcp.find("AA:BB:CC:DD:EE:02")

    def test_replace_is_one_request(self, client: KeeneticClient, router: FakeRouter) -> None:
        """Test replace submits both commands in one batch."""
        client.dhcp.replace("AA:BB:CC:DD:EE:01", "192.168.1.60")
        assert router.batches == [dhcp.build_replace_commands("aa:bb:cc:dd:ee:01", "192.168.1.60")]

    def test_delete(self, client: KeeneticClient, router: FakeRouter) -> None:
        """Test deleting a reservation."""
        client.dhcp.delete("AA:BB:CC:DD:EE:01")
        assert router.batches == [[{"ip": {"dhcp": {"host": {"mac": "aa:bb:cc:dd:ee:01", "no": True}}}}]]


class TestRoutingNormalization:
    """Tests for route and ARP normalization."""

    def test_routes(self) -> None:
        """Test routes with explicit masks and CIDR destinations."""
        routes = routing.normalize_routes([
            {"destination": "0.0.0.0", "mask": "0.0.0.0", "gateway": "203.0.113.1", "interface": "ISP", "metric": "0"},
            {"destination": "10.8.0.0/24", "interface": "Wireguard0", "auto": True, "flags": "U"},
        ])

        assert routes[0].mask == "0.0.0.0"
        assert routes[0].metric == 0
        assert routes[1].destination == "10.8.0.0"
        assert routes[1].mask == "255.255.255.0"
        assert routes[1].auto is True

    def test_wrapped_routes(self) -> None:
        """Test {"route": [...]} input."""
        assert len(routing.normalize_routes({"route": [{"destination": "10.0.0.0"}]})) == 1

    def test_arp(self) -> None:
        """Test ARP entries."""
        entries = routing.normalize_arp([{"ip": "192.168.1.20", "mac": "aa:bb:cc:dd:ee:01", "interface": "Bridge0", "state": "reachable"}])
        assert entries[0].mac == "AA:BB:CC:DD:EE:01"
        assert entries[0].state == "reachable"

    def test_static_routes(self) -> None:
        """Test configured static routes."""
        static = routing.normalize_static_routes({"network": "10.8.0.0", "mask": "255.255.255.0", "interface": "Wireguard0", "auto": "true"})
        assert static[0].interface == "Wireguard0"
        assert static[0].auto is True


class TestRoutingCommands:
    """Tests for static route write commands."""

    def test_create_network_route(self) -> None:
        """Test a network route via an interface."""
        assert routing.build_create_commands(
            network="10.8.0.0", mask="255.255.255.0", interface="Wireguard0", auto=True, comment="vpn"
        ) == [
            {"ip": {"route": {
                "network": "10.8.0.0",
                "mask": "255.255.255.0",
                "interface": "Wireguard0",
                "auto": True,
                "comment": "vpn",
            }}}
        ]

    def test_create_host_route(self) -> None:
        """Test a host route via a gateway."""
        assert routing.build_create_commands(host="1.2.3.4", gateway="192.168.1.2") == [
            {"ip": {"route": {"host": "1.2.3.4", "gateway": "192.168.1.2"}}}
        ]

    def test_delete(self) -> None:
        """Test deleting appends the delete flag."""
        assert routing.build_delete_commands(host="1.2.3.4", gateway="192.168.1.2") == [
            {"ip": {"route": {"host": "1.2.3.4", "gateway": "192.168.1.2", "no": True}}}
        ]

    def test_requires_destination(self) -> None:
        """Test a route needs a host or a network and mask."""
        with pytest.raises(ValueError, match="host or network"):
            routing.build_create_commands(network="10.0.0.0", gateway="192.168.1.2")

    def test_requires_next_hop(self) -> None:
        """Test a route needs a gateway or an interface."""
        with pytest.raises(ValueError, match="gateway or interface"):
            routing.build_create_commands(host="1.2.3.4")


class TestRoutingResource:
    """Tests for client.routing."""

    def test_reads(self, client: KeeneticClient, router: FakeRouter) -> None:
        """Test reading routes, ARP and static routes."""
        router.json(routing.ROUTES_PATH, [{"destination": "0.0.0.0", "mask": "0.0.0.0"}])
        router.json(routing.ARP_PATH, [{"ip": "192.168.1.20"}])
        router.batch_result = [{"show": {"sc": {"ip": {"route": [{"host": "1.2.3.4", "gateway": "192.168.1.2"}]}}}}]

        assert len(client.routing.all()) == 1
        assert client.routing.arp()[0].ip == "192.168.1.20"
        assert client.routing.static()[0].host == "1.2.3.4"

    def test_create_and_delete(self, client: KeeneticClient, router: FakeRouter) -> None:
        """Test route writes are batched."""
        client.routing.create(host="1.2.3.4", interface="Wireguard0")
        client.routing.delete(host="1.2.3.4", interface="Wireguard0")

        assert router.batches == [
            [{"ip": {"route": {"host": "1.2.3.4", "interface": "Wireguard0"}}}],
            [{"ip": {"route": {"host": "1.2.3.4", "interface": "Wireguard0", "no": True}}}],
        ]

    def test_invalid_route_sends_nothing(self, client: KeeneticClient, router: FakeRouter) -> None:
        """Test an invalid route fails before any request."""
        with pytest.raises(ValueError):
            client.routing.create(host="1.2.3.4")
        assert router.requests == []

"""Tests for command building and batch submission."""

import pytest

from mcp_keenetic_router import KeeneticClient
from mcp_keenetic_router.commands import CommandBatch, command, delete_marker, show_command

from .fake_router import FakeRouter


class TestCommand:
    """Tests for command trees."""

    def test_nested_path(self) -> None:
        """Test a dotted path becomes a nested tree."""
        assert command("ip.hotspot.host", mac="aa:bb:cc:dd:ee:ff", permit=True) == {
            "ip": {"hotspot": {"host": {"mac": "aa:bb:cc:dd:ee:ff", "permit": True}}}
        }

    def test_single_segment(self) -> None:
        """Test a one-segment path."""
        assert command("system", name="router") == {"system": {"name": "router"}}

    def test_no_params(self) -> None:
        """Test a path without parameters ends in an empty object."""
        assert show_command("sc.ip.policy") == {"show": {"sc": {"ip": {"policy": {}}}}}

    def test_empty_path(self) -> None:
        """Test an empty path is rejected."""
        with pytest.raises(ValueError):
            command("")

    def test_delete_marker(self) -> None:
        """Test the explicit delete marker."""
        assert delete_marker() == {"no": True}
        assert delete_marker() is not delete_marker()


class TestCommandBatch:
    """Tests for CommandBatch."""

    def test_keeps_order(self) -> None:
        """Test commands are submitted in insertion order."""
        batch = CommandBatch()
        batch.add("ip.dhcp.host", mac="aa", no=True).add("ip.dhcp.host", mac="aa", ip="10.0.0.2")

        assert len(batch) == 2
        assert batch.to_payload() == [
            {"ip": {"dhcp": {"host": {"mac": "aa", "no": True}}}},
            {"ip": {"dhcp": {"host": {"mac": "aa", "ip": "10.0.0.2"}}}},
        ]

    def test_truthiness(self) -> None:
        """Test an empty batch is falsy."""
        assert not CommandBatch()
        assert CommandBatch([{"a": {}}])

    def test_extend_and_equality(self) -> None:
        """Test extend appends prebuilt commands and batches compare by content."""
        batch = CommandBatch().extend([{"a": {}}, {"b": {}}])
        assert batch == [{"a": {}}, {"b": {}}]
        assert batch == CommandBatch([{"a": {}}, {"b": {}}])

    def test_payload_is_a_copy(self) -> None:
        """Test mutating the payload does not alter the batch."""
        batch = CommandBatch([{"a": {}}])
        batch.to_payload().append({"b": {}})
        assert len(batch) == 1


class TestClientBatch:
    """Tests for KeeneticClient.batch."""

    def test_posts_array_to_rci(self, client: KeeneticClient, router: FakeRouter) -> None:
        """Test a batch is one POST to /rci/ with the commands in order."""
        batch = CommandBatch().add("known.host", mac="aa", name="TV").add("ip.hotspot.host", mac="aa", permit=True)

        result = client.batch(batch)

        assert result == [{}, {}]
        assert router.paths()[-1] == "/rci/"
        assert router.batches == [batch.to_payload()]

    def test_accepts_list(self, client: KeeneticClient, router: FakeRouter) -> None:
        """Test a plain list of commands is accepted."""
        client.batch([command("system", name="x")])
        assert router.batches == [[{"system": {"name": "x"}}]]

    def test_empty_batch_sends_nothing(self, client: KeeneticClient, router: FakeRouter) -> None:
        """Test an empty batch makes no request at all."""
        assert client.batch([]) == []
        assert client.batch(CommandBatch()) == []
        assert router.requests == []

    def test_returns_router_results(self, client: KeeneticClient, router: FakeRouter) -> None:
        """Test per-command results are returned as the router sent them."""
        router.batch_result = [{"status": [{"status": "message", "message": "ok"}]}]
        assert client.batch([command("system", name="x")]) == router.batch_result

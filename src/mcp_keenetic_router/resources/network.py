"""Network interfaces and their counters."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..commands import Command
from ..exceptions import NotFoundError
from ..models import InterfaceStatistics, NetworkInterface
from ..normalize import as_bool, as_int, keyed_items, optional_bool, upper_mac
from .base import Resource

# Configure module logger
logger = logging.getLogger(__name__)

INTERFACES_PATH = "/rci/show/interface"
STATISTICS_PATH = "/rci/show/interface/stat"


def interface_command(interface_id: str, params: Dict[str, Any]) -> Command:
    """Build an ``interface`` command.

    Interface ids such as ``WifiMaster0/AccessPoint0`` are used verbatim
    as a key, so this does not go through the dotted-path builder.
    """
    return {"interface": {interface_id: dict(params)}}


def normalize_interface(interface_id: str, data: Dict[str, Any]) -> NetworkInterface:
    return NetworkInterface(
        id=interface_id,
        description=data.get("description"),
        type=data.get("type"),
        mac=upper_mac(data.get("mac")),
        mtu=as_int(data.get("mtu")),
        state=data.get("state"),
        link=data.get("link"),
        connected=data.get("connected"),
        address=data.get("address"),
        mask=data.get("mask"),
        gateway=data.get("gateway"),
        is_default_gateway=as_bool(data.get("defaultgw")),
        uptime=as_int(data.get("uptime")),
        rx_bytes=data.get("rxbytes"),
        tx_bytes=data.get("txbytes"),
        rx_packets=data.get("rxpackets"),
        tx_packets=data.get("txpackets"),
        last_change=data.get("last-change"),
        speed=data.get("speed"),
        duplex=data.get("duplex"),
        security_level=data.get("security-level"),
        is_global=optional_bool(data.get("global")),
    )


def normalize_interfaces(response: Any) -> List[NetworkInterface]:
    """Normalize ``show interface`` output (id-keyed object or list)."""
    if not isinstance(response, (dict, list)):
        logger.warning("Unexpected interface response: %r", response)
        return []
    return [normalize_interface(interface_id, data) for interface_id, data in keyed_items(response)]


def normalize_statistics(response: Any) -> List[InterfaceStatistics]:
    """Normalize ``show interface stat`` output."""
    if not isinstance(response, (dict, list)):
        logger.warning("Unexpected interface statistics response: %r", response)
        return []

    return [
        InterfaceStatistics(
            id=interface_id,
            description=data.get("description"),
            type=data.get("type"),
            mac=upper_mac(data.get("mac")),
            mtu=as_int(data.get("mtu")),
            state=data.get("state"),
            link=data.get("link"),
            connected=data.get("connected"),
            address=data.get("address"),
            mask=data.get("mask"),
            uptime=as_int(data.get("uptime")),
            rx_bytes=data.get("rxbytes"),
            tx_bytes=data.get("txbytes"),
            rx_packets=data.get("rxpackets"),
            tx_packets=data.get("txpackets"),
            rx_errors=data.get("rxerrors"),
            tx_errors=data.get("txerrors"),
            rx_drops=data.get("rxdrops"),
            tx_drops=data.get("txdrops"),
            collisions=data.get("collisions"),
            media=data.get("media"),
            speed=data.get("speed"),
            duplex=data.get("duplex"),
        )
        for interface_id, data in keyed_items(response)
    ]


def is_wan(interface: NetworkInterface) -> bool:
    return (interface.type or "").lower() == "wan" or interface.is_default_gateway


def is_lan(interface: NetworkInterface) -> bool:
    return (interface.type or "").lower() == "bridge" or interface.id.startswith("Bridge")


class Network(Resource):
    """Router interfaces."""

    def all(self) -> List[NetworkInterface]:
        """Fetch all interfaces."""
        return normalize_interfaces(self._get(INTERFACES_PATH))

    def find(self, interface_id: str) -> NetworkInterface:
        """Find an interface by id.

        Raises:
            NotFoundError: If no interface has that id.
        """
        for interface in self.all():
            if interface.id == interface_id:
                return interface
        raise NotFoundError(f"Interface {interface_id} not found")

    def wan(self) -> List[NetworkInterface]:
        """Fetch WAN interfaces (type ``wan`` or carrying the default route)."""
        return [interface for interface in self.all() if is_wan(interface)]

    def lan(self) -> List[NetworkInterface]:
        """Fetch LAN bridge interfaces."""
        return [interface for interface in self.all() if is_lan(interface)]

    def statistics(self) -> List[InterfaceStatistics]:
        """Fetch counters, including error and drop counts, for all interfaces."""
        return normalize_statistics(self._get(STATISTICS_PATH))

    def find_statistics(self, interface_id: str) -> InterfaceStatistics:
        """Fetch counters of one interface.

        Raises:
            NotFoundError: If no interface has that id.
        """
        for stats in self.statistics():
            if stats.id == interface_id:
                return stats
        raise NotFoundError(f"Interface {interface_id} not found")

    def configure(self, interface_id: str, up: Optional[bool] = None, **options: Any) -> List[Any]:
        """Change interface settings.

        Example:
            >>> client.network.configure("GigabitEthernet0", up=True)

        Args:
            interface_id: Interface id, e.g. ``"GigabitEthernet0"``.
            up: Enable (True) or disable (False); None leaves it unchanged.
            **options: Additional interface parameters passed as-is.

        Returns:
            Per-command results; empty when nothing was given to change.
        """
        params = dict(options)
        if up is not None:
            params["up"] = up
        if not params:
            return []
        return self._batch([interface_command(interface_id, params)])

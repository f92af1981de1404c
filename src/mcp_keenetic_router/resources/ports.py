"""Physical Ethernet, SFP and USB ports."""

from __future__ import annotations

import re
from typing import Any, List, Optional

from ..exceptions import NotFoundError
from ..models import Port
from ..normalize import as_bool, keyed_items
from .base import Resource
from .network import STATISTICS_PATH

PHYSICAL_PORT_PATTERN = re.compile(r"^(Gigabit|Fast)?Ethernet\d+|SFP|USB")
PORT_NUMBER_PATTERN = re.compile(r"(\d+)$")


def port_number(port_id: str) -> Optional[int]:
    match = PORT_NUMBER_PATTERN.search(port_id)
    return int(match.group(1)) if match else None


def port_type(port_id: str) -> str:
    if "GigabitEthernet" in port_id:
        return "gigabit"
    if "FastEthernet" in port_id:
        return "fast"
    if "SFP" in port_id:
        return "sfp"
    if "USB" in port_id:
        return "usb"
    return "unknown"


def _link_up(value: Any) -> bool:
    # Port stats report link as a boolean or as "up"/"down".
    if isinstance(value, str) and value.strip().lower() == "up":
        return True
    return as_bool(value)


def normalize_ports(response: Any) -> List[Port]:
    """Select physical ports from ``show interface stat`` output."""
    return [
        Port(
            id=port_id,
            port=port_number(port_id),
            type=port_type(port_id),
            link=_link_up(data.get("link")),
            speed=data.get("speed"),
            duplex=data.get("duplex"),
            rx_bytes=data.get("rxbytes"),
            tx_bytes=data.get("txbytes"),
            rx_packets=data.get("rxpackets"),
            tx_packets=data.get("txpackets"),
            rx_errors=data.get("rxerrors"),
            tx_errors=data.get("txerrors"),
            media=data.get("media"),
        )
        for port_id, data in keyed_items(response)
        if PHYSICAL_PORT_PATTERN.search(port_id)
    ]


class Ports(Resource):
    """Physical ports and their link state."""

    def all(self) -> List[Port]:
        """Fetch all physical ports."""
        return normalize_ports(self._get(STATISTICS_PATH))

    def find(self, port_id: str) -> Port:
        """Find a port by id, e.g. ``"GigabitEthernet1"``.

        Raises:
            NotFoundError: If no port has that id.
        """
        for port in self.all():
            if port.id == port_id:
                return port
        raise NotFoundError(f"Port {port_id} not found")

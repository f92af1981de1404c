"""DHCP leases and static reservations."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..commands import Command, command
from ..exceptions import NotFoundError
from ..models import DhcpBinding, DhcpLease
from ..normalize import as_list, lower_mac, upper_mac
from .base import Resource

# Configure module logger
logger = logging.getLogger(__name__)

LEASES_PATH = "/rci/show/ip/dhcp/bindings"
BINDINGS_CONFIG = "sc.ip.dhcp.host"


def normalize_leases(response: Any) -> List[DhcpLease]:
    """Normalize ``show ip dhcp bindings`` output (``{"lease": [...]}``)."""
    leases = []
    for lease in as_list(response, "lease"):
        if not isinstance(lease, dict):
            logger.warning("Skipping malformed lease record: %r", lease)
            continue
        leases.append(
            DhcpLease(
                mac=upper_mac(lease.get("mac")),
                ip=lease.get("ip"),
                hostname=lease.get("hostname"),
                name=lease.get("name"),
                expires=lease.get("expires"),
            )
        )
    return leases


def normalize_bindings(config: Any) -> List[DhcpBinding]:
    """Normalize the ``ip dhcp host`` configuration subtree."""
    return [
        DhcpBinding(mac=upper_mac(host.get("mac")), ip=host.get("ip"), name=host.get("name"))
        for host in as_list(config)
        if isinstance(host, dict)
    ]


def build_create_commands(mac: str, ip: str, name: Optional[str] = None) -> List[Command]:
    params: Dict[str, Any] = {"mac": lower_mac(mac), "ip": ip}
    if name:
        params["name"] = name
    return [command("ip.dhcp.host", **params)]


def build_delete_commands(mac: str) -> List[Command]:
    return [command("ip.dhcp.host", mac=lower_mac(mac), no=True)]


def build_replace_commands(mac: str, ip: str, name: Optional[str] = None) -> List[Command]:
    """Build the remove-then-add pair that moves a reservation to a new IP.

    The router rejects a second reservation for the same MAC, so the old
    one is cleared first in the same batch.
    """
    return build_delete_commands(mac) + build_create_commands(mac, ip, name)


class Dhcp(Resource):
    """DHCP server state."""

    def leases(self) -> List[DhcpLease]:
        """Fetch active leases."""
        return normalize_leases(self._get(LEASES_PATH))

    def all(self) -> List[DhcpBinding]:
        """Fetch configured static reservations."""
        return normalize_bindings(self._show(BINDINGS_CONFIG))

    def find(self, mac: str) -> DhcpBinding:
        """Find a static reservation by MAC (case-insensitive).

        Raises:
            NotFoundError: If the MAC has no reservation.
        """
        wanted = mac.strip().lower()
        for binding in self.all():
            if binding.mac and binding.mac.lower() == wanted:
                return binding
        raise NotFoundError(f"DHCP binding for MAC {mac} not found")

    def create(self, mac: str, ip: str, name: Optional[str] = None) -> List[Any]:
        """Reserve ``ip`` for ``mac``."""
        return self._batch(build_create_commands(mac, ip, name))

    def replace(self, mac: str, ip: str, name: Optional[str] = None) -> List[Any]:
        """Move the reservation of ``mac`` to ``ip`` in one request."""
        return self._batch(build_replace_commands(mac, ip, name))

    def delete(self, mac: str) -> List[Any]:
        """Remove the reservation of ``mac``."""
        return self._batch(build_delete_commands(mac))

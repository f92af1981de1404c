"""Hosts registered on the router.

Reads come from ``GET /rci/show/ip/hotspot/host``. Writes are split
across subsystems, each owning different fields:

- name: ``known.host``
- access and schedule: ``ip.hotspot.host``
- routing policy: ``ip.hotspot.host`` with ``policy``
- static IP reservation: ``ip.dhcp.host``

The router reports MACs in uppercase but only accepts lowercase in
commands.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..commands import Command, command, delete_marker
from ..exceptions import NotFoundError
from ..models import Device
from ..normalize import as_bool, as_dict, as_int, as_list, as_str, lower_mac, upper_mac
from .base import Resource

# Configure module logger
logger = logging.getLogger(__name__)

HOSTS_PATH = "/rci/show/ip/hotspot/host"

ACCESS_VALUES = ("permit", "deny")


def normalize_device(host: Any) -> Optional[Device]:
    """Map one raw host record to a :class:`Device`.

    Returns:
        The device, or None if the record is not an object.
    """
    if not isinstance(host, dict):
        return None

    ip = as_str(host.get("ip"))
    is_static = as_bool(as_dict(host.get("dhcp")).get("static"))
    access = host.get("access")

    return Device(
        mac=upper_mac(host.get("mac")),
        name=as_str(host.get("name")) or as_str(host.get("hostname")),
        hostname=as_str(host.get("hostname")),
        ip=ip,
        static_ip=ip if is_static else None,
        interface_id=_interface_id(host.get("interface")),
        via=as_str(host.get("via")),
        active=as_bool(host.get("active")),
        registered=as_bool(host.get("registered")),
        access=access if access in ACCESS_VALUES else None,
        schedule=as_str(host.get("schedule")),
        rx_bytes=host.get("rxbytes"),
        tx_bytes=host.get("txbytes"),
        uptime=as_int(host.get("uptime")),
        first_seen=host.get("first-seen"),
        last_seen=host.get("last-seen"),
        link=as_str(host.get("link")),
    )


def normalize_devices(response: Any) -> List[Device]:
    """Normalize a host list that may be an array, ``{"host": ...}`` or one object."""
    devices = []
    for host in as_list(response, "host"):
        device = normalize_device(host)
        if device is None:
            logger.warning("Skipping malformed host record: %r", host)
            continue
        devices.append(device)
    return devices


def _interface_id(value: Any) -> Optional[str]:
    # Newer firmware nests the interface as {"id": ..., "name": ...}.
    if isinstance(value, dict):
        return as_str(value.get("id")) or as_str(value.get("name"))
    return as_str(value)


def build_update_commands(mac: str, **attributes: Any) -> List[Command]:
    """Build the commands that apply ``attributes`` to a device.

    Only keys present in ``attributes`` produce commands. For ``policy``
    and ``static_ip`` an empty string or None clears the setting with an
    explicit delete marker; leaving the key out leaves it unchanged.

    Args:
        mac: Device MAC address (any case).
        **attributes: Any of ``name``, ``access`` ("permit"/"deny"),
            ``schedule``, ``policy``, ``static_ip``. Other keys are ignored.

    Returns:
        Commands in submission order; empty when nothing applies.
    """
    mac = lower_mac(mac)
    commands: List[Command] = []

    if "name" in attributes:
        commands.append(command("known.host", mac=mac, name=attributes["name"]))

    if "access" in attributes or "schedule" in attributes:
        params: Dict[str, Any] = {"mac": mac}
        access = attributes.get("access")
        if access == "permit":
            params["permit"] = True
        elif access == "deny":
            params["deny"] = True
        if "schedule" in attributes:
            params["schedule"] = attributes["schedule"]
        commands.append(command("ip.hotspot.host", **params))

    if "policy" in attributes:
        policy = attributes["policy"]
        if _is_blank(policy):
            commands.append(command("ip.hotspot.host", mac=mac, policy=delete_marker()))
        else:
            commands.append(command("ip.hotspot.host", mac=mac, policy=policy))

    if "static_ip" in attributes:
        static_ip = attributes["static_ip"]
        if _is_blank(static_ip):
            commands.append(command("ip.dhcp.host", mac=mac, no=True))
        else:
            commands.append(command("ip.dhcp.host", mac=mac, ip=static_ip))

    return commands


def build_delete_commands(mac: str) -> List[Command]:
    """Build the command that unregisters a device."""
    return [command("ip.hotspot.host", mac=lower_mac(mac), no=True)]


def _is_blank(value: Any) -> bool:
    return value is None or not str(value).strip()


class Devices(Resource):
    """Hosts known to the router."""

    def all(self) -> List[Device]:
        """Fetch all registered devices.

        Returns:
            List of devices, with ``static_ip`` set for reserved hosts.
        """
        return normalize_devices(self._get(HOSTS_PATH))

    def find(self, mac: str) -> Device:
        """Find a device by MAC address (case-insensitive).

        Raises:
            NotFoundError: If no device has that MAC.
        """
        wanted = mac.strip().lower()
        for device in self.all():
            if device.mac and device.mac.lower() == wanted:
                return device
        raise NotFoundError(f"Device with MAC {mac} not found")

    def active(self) -> List[Device]:
        """Fetch currently connected devices only."""
        return [device for device in self.all() if device.active]

    def update(self, mac: str, **attributes: Any) -> List[Any]:
        """Update device properties in one batched request.

        Example:
            >>> client.devices.update("AA:BB:CC:DD:EE:FF", name="TV", access="permit")

        Returns:
            Per-command results, or an empty list when no recognised
            attribute was given (no request is made).
        """
        commands = build_update_commands(mac, **attributes)
        if not commands:
            logger.debug("No recognised attributes for %s, nothing to update", mac)
            return []
        return self._batch(commands)

    def delete(self, mac: str) -> List[Any]:
        """Unregister a device. It may reappear when it reconnects."""
        return self._batch(build_delete_commands(mac))

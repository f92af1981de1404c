"""Routing table, neighbour (ARP) table and static routes."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from ..commands import Command, command
from ..models import ArpEntry, Route, StaticRoute
from ..normalize import as_bool, as_int, as_list, prefix_to_mask, upper_mac
from .base import Resource

# Configure module logger
logger = logging.getLogger(__name__)

ROUTES_PATH = "/rci/show/ip/route"
ARP_PATH = "/rci/show/ip/arp"
STATIC_ROUTES_CONFIG = "sc.ip.route"


def _split_destination(destination: Any, mask: Any) -> Tuple[Any, Optional[str]]:
    # Firmware reports either "10.0.0.0" plus a mask or "10.0.0.0/24".
    if isinstance(destination, str) and "/" in destination and not mask:
        network, _, prefix = destination.partition("/")
        prefix_len = as_int(prefix)
        if prefix_len is not None:
            return network, prefix_to_mask(prefix_len)
        return network, None
    return destination, mask


def normalize_routes(response: Any) -> List[Route]:
    """Normalize ``show ip route`` output (list or ``{"route": [...]}``)."""
    routes = []
    for entry in as_list(response, "route"):
        if not isinstance(entry, dict):
            logger.warning("Skipping malformed route record: %r", entry)
            continue
        destination, mask = _split_destination(entry.get("destination"), entry.get("mask"))
        routes.append(
            Route(
                destination=destination,
                mask=mask,
                gateway=entry.get("gateway"),
                interface=entry.get("interface"),
                metric=as_int(entry.get("metric")),
                flags=entry.get("flags"),
                proto=entry.get("proto"),
                auto=as_bool(entry.get("auto")),
            )
        )
    return routes


def normalize_arp(response: Any) -> List[ArpEntry]:
    """Normalize ``show ip arp`` output (list or ``{"arp": [...]}``)."""
    entries = []
    for entry in as_list(response, "arp"):
        if not isinstance(entry, dict):
            logger.warning("Skipping malformed ARP record: %r", entry)
            continue
        entries.append(
            ArpEntry(
                ip=entry.get("ip"),
                mac=upper_mac(entry.get("mac")),
                interface=entry.get("interface"),
                state=entry.get("state"),
            )
        )
    return entries


def normalize_static_routes(config: Any) -> List[StaticRoute]:
    """Normalize the ``ip route`` configuration subtree."""
    return [
        StaticRoute(
            network=entry.get("network"),
            mask=entry.get("mask"),
            host=entry.get("host"),
            gateway=entry.get("gateway"),
            interface=entry.get("interface"),
            auto=as_bool(entry.get("auto")),
            comment=entry.get("comment"),
        )
        for entry in as_list(config)
        if isinstance(entry, dict)
    ]


def _route_params(
    network: Optional[str],
    mask: Optional[str],
    host: Optional[str],
    gateway: Optional[str],
    interface: Optional[str],
) -> Dict[str, Any]:
    params: Dict[str, Any] = {}
    if host:
        params["host"] = host
    elif network and mask:
        params["network"] = network
        params["mask"] = mask
    else:
        raise ValueError("Either host or network and mask are required")

    if not gateway and not interface:
        raise ValueError("Either gateway or interface is required")
    if gateway:
        params["gateway"] = gateway
    if interface:
        params["interface"] = interface
    return params


def build_create_commands(
    network: Optional[str] = None,
    mask: Optional[str] = None,
    host: Optional[str] = None,
    gateway: Optional[str] = None,
    interface: Optional[str] = None,
    auto: bool = False,
    comment: Optional[str] = None,
) -> List[Command]:
    """Build the command that adds a static route.

    Raises:
        ValueError: If neither a host nor a network/mask pair is given, or
            if neither a gateway nor an interface is given.
    """
    params = _route_params(network, mask, host, gateway, interface)
    if auto:
        params["auto"] = True
    if comment:
        params["comment"] = comment
    return [command("ip.route", **params)]


def build_delete_commands(
    network: Optional[str] = None,
    mask: Optional[str] = None,
    host: Optional[str] = None,
    gateway: Optional[str] = None,
    interface: Optional[str] = None,
) -> List[Command]:
    """Build the command that removes a static route."""
    params = _route_params(network, mask, host, gateway, interface)
    params["no"] = True
    return [command("ip.route", **params)]


class Routing(Resource):
    """Routes and neighbours."""

    def all(self) -> List[Route]:
        """Fetch the active routing table."""
        return normalize_routes(self._get(ROUTES_PATH))

    def arp(self) -> List[ArpEntry]:
        """Fetch the ARP table."""
        return normalize_arp(self._get(ARP_PATH))

    def static(self) -> List[StaticRoute]:
        """Fetch configured static routes."""
        return normalize_static_routes(self._show(STATIC_ROUTES_CONFIG))

    def create(self, **route: Any) -> List[Any]:
        """Add a static route.

        Example:
            >>> client.routing.create(network="10.8.0.0", mask="255.255.255.0", interface="Wireguard0")
        """
        return self._batch(build_create_commands(**route))

    def delete(self, **route: Any) -> List[Any]:
        """Remove a static route identified by its destination and next hop."""
        return self._batch(build_delete_commands(**route))

"""WAN connectivity and traffic."""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..models import InternetStatus, WanTraffic
from .base import Resource

# Configure module logger
logger = logging.getLogger(__name__)

STATUS_PATH = "/rci/show/internet/status"


def normalize_status(response: Any) -> InternetStatus:
    """Map ``show internet status`` output.

    ``connected`` is True only for a native ``true`` in the ``internet``
    field; the router reports a failed or pending check as anything else.
    """
    if not isinstance(response, dict):
        logger.warning("Unexpected internet status response: %r", response)
        return InternetStatus()

    dns = response.get("dns")
    return InternetStatus(
        connected=response.get("internet") is True,
        gateway=response.get("gateway"),
        dns=dns if isinstance(dns, list) else [],
        checked=response.get("checked"),
        checking=response.get("checking"),
        interface=response.get("interface"),
        address=response.get("address"),
    )


class Internet(Resource):
    """Internet reachability of the router."""

    def status(self) -> InternetStatus:
        """Fetch the result of the router's connectivity check."""
        return normalize_status(self._get(STATUS_PATH))

    def traffic(self) -> Optional[WanTraffic]:
        """Fetch counters of the primary WAN interface.

        Returns:
            Counters of the interface holding the default route, or None
            when no interface does.
        """
        for interface in self.client.network.all():
            if interface.is_default_gateway:
                return WanTraffic(
                    interface=interface.id,
                    rx_bytes=interface.rx_bytes,
                    tx_bytes=interface.tx_bytes,
                    rx_packets=interface.rx_packets,
                    tx_packets=interface.tx_packets,
                    uptime=interface.uptime,
                )
        logger.debug("No interface carries the default route")
        return None

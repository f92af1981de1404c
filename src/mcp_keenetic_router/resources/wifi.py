"""Wi-Fi access points and associated stations.

There is no dedicated access point endpoint: radios and SSIDs are
interfaces named ``WifiMaster<n>`` and ``WifiMaster<n>/AccessPoint<m>``
in ``show interface``, filtered here by id prefix or type tag.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..exceptions import NotFoundError
from ..models import AccessPoint, WifiClient
from ..normalize import as_int, as_list, keyed_items, optional_bool, upper_mac
from .base import Resource
from .network import INTERFACES_PATH, interface_command

# Configure module logger
logger = logging.getLogger(__name__)

ASSOCIATIONS_PATH = "/rci/show/associations"

WIFI_TYPES = ("AccessPoint", "WifiMaster")


def is_wifi_interface(interface_id: str, data: Dict[str, Any]) -> bool:
    return data.get("type") in WIFI_TYPES or interface_id.startswith(WIFI_TYPES)


def normalize_access_points(response: Any) -> List[AccessPoint]:
    """Select Wi-Fi interfaces from ``show interface`` output."""
    if not isinstance(response, (dict, list)):
        logger.warning("Unexpected interface response: %r", response)
        return []

    return [
        AccessPoint(
            id=interface_id,
            description=data.get("description"),
            type=data.get("type"),
            ssid=data.get("ssid"),
            mac=upper_mac(data.get("mac")),
            state=data.get("state"),
            link=data.get("link"),
            connected=data.get("connected"),
            channel=as_int(data.get("channel")),
            band=data.get("band"),
            security=data.get("authentication"),
            encryption=data.get("encryption"),
            clients_count=as_int(data.get("station-count")),
            txpower=as_int(data.get("txpower")),
            uptime=as_int(data.get("uptime")),
        )
        for interface_id, data in keyed_items(response)
        if is_wifi_interface(interface_id, data)
    ]


def normalize_client(station: Dict[str, Any]) -> WifiClient:
    return WifiClient(
        mac=upper_mac(station.get("mac")),
        ap=station.get("ap"),
        authenticated=optional_bool(station.get("authenticated")),
        txrate=as_int(station.get("txrate")),
        rxrate=as_int(station.get("rxrate")),
        uptime=as_int(station.get("uptime")),
        tx_bytes=station.get("txbytes"),
        rx_bytes=station.get("rxbytes"),
        rssi=as_int(station.get("rssi")),
        mcs=as_int(station.get("mcs")),
        ht=station.get("ht"),
        mode=station.get("mode"),
        gi=station.get("gi"),
    )


def normalize_clients(response: Any) -> List[WifiClient]:
    """Normalize ``show associations`` output (``{"station": ...}``)."""
    if not isinstance(response, dict):
        return []

    clients = []
    for station in as_list(response.get("station")):
        if not isinstance(station, dict):
            logger.warning("Skipping malformed station record: %r", station)
            continue
        clients.append(normalize_client(station))
    return clients


class WiFi(Resource):
    """Wireless radios, SSIDs and clients."""

    def all(self) -> List[AccessPoint]:
        """Fetch all Wi-Fi radios and access points."""
        return normalize_access_points(self._get(INTERFACES_PATH))

    def find(self, ap_id: str) -> AccessPoint:
        """Find an access point by id, e.g. ``"WifiMaster0/AccessPoint0"``.

        Raises:
            NotFoundError: If no access point has that id.
        """
        for access_point in self.all():
            if access_point.id == ap_id:
                return access_point
        raise NotFoundError(f"Access point {ap_id} not found")

    def clients(self) -> List[WifiClient]:
        """Fetch associated Wi-Fi stations."""
        return normalize_clients(self._get(ASSOCIATIONS_PATH))

    def configure(
        self,
        ap_id: str,
        ssid: Optional[str] = None,
        authentication: Optional[str] = None,
        encryption: Optional[str] = None,
        key: Optional[str] = None,
        channel: Optional[int] = None,
        up: Optional[bool] = None,
    ) -> List[Any]:
        """Change access point settings.

        Example:
            >>> client.wifi.configure("WifiMaster0/AccessPoint0", ssid="Home", authentication="wpa2-psk")

        Args:
            ap_id: Access point or radio id.
            ssid: Network name.
            authentication: Security mode, e.g. ``"wpa2-psk"`` or ``"open"``.
            encryption: Cipher, ``"aes"`` or ``"tkip"``.
            key: Pre-shared key.
            channel: Channel number, 0 for auto (radios only).
            up: Enable or disable the access point.

        Returns:
            Per-command results; empty when nothing was given to change.
        """
        params: Dict[str, Any] = {}
        if ssid:
            params["ssid"] = ssid
        if authentication:
            params["authentication"] = authentication
        if encryption:
            params["encryption"] = encryption
        if key:
            params["key"] = key
        if channel is not None:
            params["channel"] = channel
        if up is not None:
            params["up"] = up

        if not params:
            return []
        return self._batch([interface_command(ap_id, params)])

    def enable(self, ap_id: str) -> List[Any]:
        """Bring an access point up."""
        return self._batch([interface_command(ap_id, {"up": True})])

    def disable(self, ap_id: str) -> List[Any]:
        """Bring an access point down."""
        return self._batch([interface_command(ap_id, {"up": False})])

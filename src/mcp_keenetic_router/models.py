"""Canonical data classes produced by the resource normalizers."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


class _Record:
    """Mixin giving data classes a ``to_dict`` method."""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)  # type: ignore[call-overload]


@dataclass
class Device(_Record):
    """A host known to the router's hotspot subsystem.

    ``static_ip`` is only set when the router reports a DHCP reservation
    (``dhcp.static``) for the host, in which case it equals ``ip``.
    """

    mac: Optional[str]
    name: Optional[str] = None
    hostname: Optional[str] = None
    ip: Optional[str] = None
    static_ip: Optional[str] = None
    interface_id: Optional[str] = None
    via: Optional[str] = None
    active: bool = False
    registered: bool = False
    access: Optional[str] = None
    schedule: Optional[str] = None
    rx_bytes: Optional[int] = None
    tx_bytes: Optional[int] = None
    uptime: Optional[int] = None
    first_seen: Optional[Any] = None
    last_seen: Optional[Any] = None
    link: Optional[str] = None


@dataclass
class NetworkInterface(_Record):
    """A router interface from ``show interface``."""

    id: str
    description: Optional[str] = None
    type: Optional[str] = None
    mac: Optional[str] = None
    mtu: Optional[int] = None
    state: Optional[str] = None
    link: Optional[str] = None
    connected: Optional[Any] = None
    address: Optional[str] = None
    mask: Optional[str] = None
    gateway: Optional[str] = None
    is_default_gateway: bool = False
    uptime: Optional[int] = None
    rx_bytes: Optional[int] = None
    tx_bytes: Optional[int] = None
    rx_packets: Optional[int] = None
    tx_packets: Optional[int] = None
    last_change: Optional[Any] = None
    speed: Optional[Any] = None
    duplex: Optional[str] = None
    security_level: Optional[str] = None
    is_global: Optional[bool] = None


@dataclass
class InterfaceStatistics(_Record):
    """Interface counters from ``show interface stat``."""

    id: str
    description: Optional[str] = None
    type: Optional[str] = None
    mac: Optional[str] = None
    mtu: Optional[int] = None
    state: Optional[str] = None
    link: Optional[str] = None
    connected: Optional[Any] = None
    address: Optional[str] = None
    mask: Optional[str] = None
    uptime: Optional[int] = None
    rx_bytes: Optional[int] = None
    tx_bytes: Optional[int] = None
    rx_packets: Optional[int] = None
    tx_packets: Optional[int] = None
    rx_errors: Optional[int] = None
    tx_errors: Optional[int] = None
    rx_drops: Optional[int] = None
    tx_drops: Optional[int] = None
    collisions: Optional[int] = None
    media: Optional[str] = None
    speed: Optional[Any] = None
    duplex: Optional[str] = None


@dataclass
class AccessPoint(_Record):
    """A Wi-Fi radio or access point interface."""

    id: str
    description: Optional[str] = None
    type: Optional[str] = None
    ssid: Optional[str] = None
    mac: Optional[str] = None
    state: Optional[str] = None
    link: Optional[str] = None
    connected: Optional[Any] = None
    channel: Optional[int] = None
    band: Optional[str] = None
    security: Optional[str] = None
    encryption: Optional[str] = None
    clients_count: Optional[int] = None
    txpower: Optional[int] = None
    uptime: Optional[int] = None


@dataclass
class WifiClient(_Record):
    """A station associated with an access point."""

    mac: Optional[str]
    ap: Optional[str] = None
    authenticated: Optional[bool] = None
    txrate: Optional[int] = None
    rxrate: Optional[int] = None
    uptime: Optional[int] = None
    tx_bytes: Optional[int] = None
    rx_bytes: Optional[int] = None
    rssi: Optional[int] = None
    mcs: Optional[int] = None
    ht: Optional[Any] = None
    mode: Optional[str] = None
    gi: Optional[str] = None


@dataclass
class Policy(_Record):
    """A routing (VPN) policy."""

    id: str
    description: str
    name: str
    interfaces: List[str] = field(default_factory=list)

    @property
    def interface_count(self) -> int:
        """Number of active interfaces in the policy."""
        return len(self.interfaces)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, including the interface count."""
        result = asdict(self)
        result["interface_count"] = self.interface_count
        return result


@dataclass
class CpuInfo(_Record):
    """CPU load."""

    load_percent: int


@dataclass
class MemoryInfo(_Record):
    """Memory usage in kilobytes."""

    total: int
    free: int
    used: int
    buffers: int
    cached: int
    used_percent: float


@dataclass
class SwapInfo(_Record):
    """Swap usage in kilobytes."""

    total: int
    free: int
    used: int
    used_percent: float


@dataclass
class SystemResources(_Record):
    """CPU, memory and swap usage."""

    cpu: Optional[CpuInfo] = None
    memory: Optional[MemoryInfo] = None
    swap: Optional[SwapInfo] = None
    uptime: Optional[int] = None


@dataclass
class SystemInfo(_Record):
    """Model and firmware information from ``show version``."""

    model: Optional[str] = None
    device: Optional[str] = None
    manufacturer: Optional[str] = None
    vendor: Optional[str] = None
    hw_version: Optional[str] = None
    hw_id: Optional[str] = None
    firmware: Optional[str] = None
    firmware_version: Optional[str] = None
    ndm_version: Optional[str] = None
    arch: Optional[str] = None
    ndw_version: Optional[str] = None
    components: Optional[Any] = None
    sandbox: Optional[str] = None


@dataclass
class License(_Record):
    """License status and enabled features."""

    valid: Optional[bool] = None
    active: Optional[bool] = None
    expires: Optional[Any] = None
    type: Optional[str] = None
    features: List[Any] = field(default_factory=list)
    services: List[Any] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, excluding None values."""
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass
class InternetStatus(_Record):
    """WAN connectivity check result."""

    connected: bool = False
    gateway: Optional[str] = None
    dns: List[str] = field(default_factory=list)
    checked: Optional[Any] = None
    checking: Optional[bool] = None
    interface: Optional[str] = None
    address: Optional[str] = None


@dataclass
class WanTraffic(_Record):
    """Traffic counters of the primary WAN interface."""

    interface: str
    rx_bytes: Optional[int] = None
    tx_bytes: Optional[int] = None
    rx_packets: Optional[int] = None
    tx_packets: Optional[int] = None
    uptime: Optional[int] = None


@dataclass
class Port(_Record):
    """A physical port."""

    id: str
    port: Optional[int] = None
    type: str = "unknown"
    link: bool = False
    speed: Optional[Any] = None
    duplex: Optional[str] = None
    rx_bytes: Optional[int] = None
    tx_bytes: Optional[int] = None
    rx_packets: Optional[int] = None
    tx_packets: Optional[int] = None
    rx_errors: Optional[int] = None
    tx_errors: Optional[int] = None
    media: Optional[str] = None


@dataclass
class DhcpLease(_Record):
    """An active DHCP lease."""

    mac: Optional[str]
    ip: Optional[str] = None
    hostname: Optional[str] = None
    name: Optional[str] = None
    expires: Optional[Any] = None


@dataclass
class DhcpBinding(_Record):
    """A static DHCP reservation."""

    mac: Optional[str]
    ip: Optional[str] = None
    name: Optional[str] = None


@dataclass
class Route(_Record):
    """An entry of the active routing table."""

    destination: Optional[str]
    mask: Optional[str] = None
    gateway: Optional[str] = None
    interface: Optional[str] = None
    metric: Optional[int] = None
    flags: Optional[str] = None
    proto: Optional[str] = None
    auto: bool = False


@dataclass
class StaticRoute(_Record):
    """A configured static route."""

    network: Optional[str] = None
    mask: Optional[str] = None
    host: Optional[str] = None
    gateway: Optional[str] = None
    interface: Optional[str] = None
    auto: bool = False
    comment: Optional[str] = None


@dataclass
class ArpEntry(_Record):
    """A neighbour table entry."""

    ip: Optional[str]
    mac: Optional[str] = None
    interface: Optional[str] = None
    state: Optional[str] = None

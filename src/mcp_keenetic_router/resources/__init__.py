"""Resource accessors exposed as attributes of :class:`KeeneticClient`."""

from .base import Resource
from .devices import Devices
from .dhcp import Dhcp
from .internet import Internet
from .network import Network
from .policies import Policies
from .ports import Ports
from .routing import Routing
from .system import System
from .wifi import WiFi

__all__ = [
    "Resource",
    "Devices",
    "Dhcp",
    "Internet",
    "Network",
    "Policies",
    "Ports",
    "Routing",
    "System",
    "WiFi",
]

"""Keenetic router RCI client.

Example:
    >>> from mcp_keenetic_router import ClientConfig, KeeneticClient
    >>> config = ClientConfig(host="192.168.1.1", login="admin", password="secret")
    >>> with KeeneticClient(config) as client:
    ...     for device in client.devices.active():
    ...         print(device.mac, device.name)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

import httpx

from .commands import RCI_PATH, Command
from .config import ClientConfig
from .resources import Devices, Dhcp, Internet, Network, Policies, Ports, Routing, System, WiFi
from .session import Session
from .transport import Transport

# Configure module logger
logger = logging.getLogger(__name__)


class KeeneticClient:
    """Client for the Keenetic RCI management API.

    One instance may be shared across threads. The first request from
    any thread performs the login handshake; concurrent callers wait for
    it and then proceed without a second one.

    Attributes:
        config: Validated client configuration.
        session: Cookie jar and authentication state.
        devices: Registered hosts.
        system: CPU, memory, firmware and license.
        network: Interfaces and counters.
        wifi: Access points and associated stations.
        internet: WAN connectivity and traffic.
        ports: Physical ports.
        policies: Routing policies.
        dhcp: DHCP leases and reservations.
        routing: Routes, ARP and static routes.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        http_transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Router address and credentials.
            http_transport: Optional httpx transport, used to route
                requests somewhere other than the network.

        Raises:
            ConfigurationError: If host, login or password is empty.
        """
        config.validate()
        self.config = config
        self.session = Session()
        self.transport = Transport(config, self.session, http_transport=http_transport)

        self.devices = Devices(self)
        self.system = System(self)
        self.network = Network(self)
        self.wifi = WiFi(self)
        self.internet = Internet(self)
        self.ports = Ports(self)
        self.policies = Policies(self)
        self.dhcp = Dhcp(self)
        self.routing = Routing(self)

    @property
    def is_authenticated(self) -> bool:
        """Check if the login handshake has completed."""
        return self.session.is_authenticated

    def authenticate(self) -> None:
        """Run the login handshake now instead of on the first request.

        Raises:
            AuthenticationError: If the router rejected the credentials.
            TimeoutError: If the router did not answer in time.
            ConnectionError: If the router could not be reached.
        """
        self.transport.authenticator.ensure_authenticated()

    def reset_session(self) -> None:
        """Forget cookies so the next request logs in again."""
        self.session.reset()
        logger.info("Session reset for %s", self.config.host)

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Issue an authenticated GET, e.g. ``client.get("/rci/show/version")``."""
        return self.transport.get(path, params)

    def post(self, path: str, body: Any = None) -> Any:
        """Issue an authenticated POST with a JSON body."""
        return self.transport.post(path, body)

    def batch(self, commands: Iterable[Command]) -> List[Any]:
        """Submit commands in one request to ``POST /rci/``.

        The router applies the commands in order and answers with one
        result per command.

        Args:
            commands: A :class:`CommandBatch` or any iterable of command trees.

        Returns:
            Per-command results. An empty batch sends nothing and returns
            an empty list.
        """
        payload = list(commands)
        if not payload:
            return []

        logger.debug("Submitting %d command(s)", len(payload))
        result = self.transport.post(RCI_PATH, payload)
        if result is None:
            return []
        if not isinstance(result, list):
            logger.warning("Unexpected batch response: %r", result)
            return [result]
        return result

    def close(self) -> None:
        """Close the HTTP connection pool."""
        self.transport.close()

    def __enter__(self) -> KeeneticClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

"""Client and MCP server for Keenetic router management.

This package provides a client for the Keenetic RCI management API
(challenge-response login, cookie session, batched commands and
normalized resource models) and an MCP (Model Context Protocol) server
exposing it to AI assistants.

Example usage:
    >>> from mcp_keenetic_router import ClientConfig, KeeneticClient
    >>> client = KeeneticClient(ClientConfig("192.168.1.1", "admin", "my_password"))
    >>> devices = client.devices.active()
    >>> print(f"Found {len(devices)} devices")

For MCP server usage, run:
    $ mcp-keenetic-router
"""

from .client import KeeneticClient
from .commands import CommandBatch, command, delete_marker
from .config import ClientConfig
from .exceptions import (
    ApiError,
    AuthenticationError,
    ConfigurationError,
    ConnectionError,
    NotFoundError,
    RouterError,
    TimeoutError,
    http_status_for,
)
from .models import (
    AccessPoint,
    ArpEntry,
    Device,
    DhcpBinding,
    DhcpLease,
    InterfaceStatistics,
    InternetStatus,
    License,
    NetworkInterface,
    Policy,
    Port,
    Route,
    StaticRoute,
    SystemInfo,
    SystemResources,
    WanTraffic,
    WifiClient,
)
from .session import AuthState, Session
from .transport import RawResponse

__version__ = "0.1.0"

__all__ = [
    # Client
    "KeeneticClient",
    "ClientConfig",
    "Session",
    "AuthState",
    # Commands
    "CommandBatch",
    "command",
    "delete_marker",
    # Data classes
    "AccessPoint",
    "ArpEntry",
    "Device",
    "DhcpBinding",
    "DhcpLease",
    "InterfaceStatistics",
    "InternetStatus",
    "License",
    "NetworkInterface",
    "Policy",
    "Port",
    "RawResponse",
    "Route",
    "StaticRoute",
    "SystemInfo",
    "SystemResources",
    "WanTraffic",
    "WifiClient",
    # Exceptions
    "RouterError",
    "ConfigurationError",
    "ConnectionError",
    "TimeoutError",
    "AuthenticationError",
    "NotFoundError",
    "ApiError",
    "http_status_for",
]

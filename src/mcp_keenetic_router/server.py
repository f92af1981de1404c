"""MCP Server for Keenetic Router Management.

This module provides an MCP (Model Context Protocol) server for managing
Keenetic routers through AI assistants. It exposes the RCI client's
resource accessors as MCP tools.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from .client import KeeneticClient
from .config import ClientConfig
from .exceptions import RouterError, http_status_for

# Load environment variables
load_dotenv()

# Configure module logger
logger = logging.getLogger(__name__)

# Device attributes accepted by update_device
DEVICE_ATTRIBUTES = ("name", "access", "schedule", "policy", "static_ip")

_EMPTY_SCHEMA: Dict[str, Any] = {"type": "object", "properties": {}, "required": []}


class ClientManager:
    """Manages the Keenetic client lifecycle.

    This class provides safe access to a shared KeeneticClient instance,
    with lazy initialization on first use.

    Attributes:
        config: Client configuration.
    """

    def __init__(self, config: Optional[ClientConfig] = None) -> None:
        """Initialize the client manager.

        Args:
            config: Optional client configuration. If not provided,
                    configuration is loaded from environment variables.
        """
        self._config = config or ClientConfig.from_env()
        self._client: Optional[KeeneticClient] = None
        self._lock = asyncio.Lock()

    @property
    def config(self) -> ClientConfig:
        """Get the client configuration."""
        return self._config

    async def get_client(self) -> KeeneticClient:
        """Get or create the Keenetic client.

        Only one client instance is created; it authenticates on first use.

        Returns:
            Configured KeeneticClient instance.

        Raises:
            ConfigurationError: If the configuration lacks credentials.
        """
        async with self._lock:
            if self._client is None:
                logger.debug("Creating new KeeneticClient for %s", self._config.host)
                self._client = KeeneticClient(self._config)
            return self._client

    async def reset_client(self) -> None:
        """Close the client, forcing re-authentication on next use."""
        async with self._lock:
            if self._client:
                self._client.close()
                self._client = None
            logger.debug("Client reset")


# Global client manager instance
_client_manager: Optional[ClientManager] = None


def get_client_manager() -> ClientManager:
    """Get the global client manager.

    Returns:
        The global ClientManager instance.
    """
    global _client_manager
    if _client_manager is None:
        _client_manager = ClientManager()
    return _client_manager


# Initialize MCP server
server = Server("mcp-keenetic-router")


def _mac_schema(description: str = "MAC address of the device") -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": {"mac": {"type": "string", "description": description}},
        "required": ["mac"],
    }


def _get_tool_definitions() -> List[Tool]:
    """Get the list of available tool definitions.

    Returns:
        List of Tool definitions for the MCP server.
    """
    return [
        Tool(
            name="list_devices",
            description="List devices registered on the router",
            inputSchema={
                "type": "object",
                "properties": {
                    "active_only": {
                        "type": "boolean",
                        "description": "Only list currently connected devices"
                    }
                },
                "required": []
            }
        ),
        Tool(
            name="get_device",
            description="Get a device by MAC address",
            inputSchema=_mac_schema()
        ),
        Tool(
            name="update_device",
            description=(
                "Update a device. Only the given fields change; pass an empty "
                "string for policy or static_ip to clear it"
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "mac": {"type": "string", "description": "MAC address of the device"},
                    "name": {"type": "string", "description": "Display name"},
                    "access": {
                        "type": "string",
                        "description": "Internet access",
                        "enum": ["permit", "deny"]
                    },
                    "schedule": {"type": "string", "description": "Access schedule name"},
                    "policy": {"type": "string", "description": "Routing policy id, e.g. Policy0"},
                    "static_ip": {"type": "string", "description": "Reserved IP address"}
                },
                "required": ["mac"]
            }
        ),
        Tool(
            name="delete_device",
            description="Unregister a device",
            inputSchema=_mac_schema()
        ),
        Tool(
            name="system_resources",
            description="Get CPU, memory and swap usage",
            inputSchema=_EMPTY_SCHEMA
        ),
        Tool(
            name="system_info",
            description="Get router model and firmware information",
            inputSchema=_EMPTY_SCHEMA
        ),
        Tool(
            name="system_license",
            description="Get license status and enabled features",
            inputSchema=_EMPTY_SCHEMA
        ),
        Tool(
            name="list_interfaces",
            description="List network interfaces",
            inputSchema={
                "type": "object",
                "properties": {
                    "kind": {
                        "type": "string",
                        "description": "Filter: all (default), wan or lan",
                        "enum": ["all", "wan", "lan"]
                    }
                },
                "required": []
            }
        ),
        Tool(
            name="interface_statistics",
            description="Get interface counters including errors and drops",
            inputSchema={
                "type": "object",
                "properties": {
                    "id": {"type": "string", "description": "Interface id (all interfaces if omitted)"}
                },
                "required": []
            }
        ),
        Tool(
            name="configure_interface",
            description="Bring an interface up or down",
            inputSchema={
                "type": "object",
                "properties": {
                    "id": {"type": "string", "description": "Interface id, e.g. GigabitEthernet0"},
                    "up": {"type": "boolean", "description": "True to enable, false to disable"}
                },
                "required": ["id", "up"]
            }
        ),
        Tool(
            name="list_access_points",
            description="List Wi-Fi radios and access points",
            inputSchema=_EMPTY_SCHEMA
        ),
        Tool(
            name="list_wifi_clients",
            description="List stations associated with Wi-Fi access points",
            inputSchema=_EMPTY_SCHEMA
        ),
        Tool(
            name="configure_wifi",
            description="Change Wi-Fi access point settings",
            inputSchema={
                "type": "object",
                "properties": {
                    "id": {"type": "string", "description": "Access point id, e.g. WifiMaster0/AccessPoint0"},
                    "ssid": {"type": "string", "description": "Network name"},
                    "authentication": {"type": "string", "description": "Security mode, e.g. wpa2-psk"},
                    "encryption": {"type": "string", "description": "Cipher: aes or tkip"},
                    "key": {"type": "string", "description": "Pre-shared key"},
                    "channel": {"type": "integer", "description": "Channel, 0 for auto"},
                    "up": {"type": "boolean", "description": "Enable or disable the access point"}
                },
                "required": ["id"]
            }
        ),
        Tool(
            name="internet_status",
            description="Get internet connectivity and WAN traffic counters",
            inputSchema=_EMPTY_SCHEMA
        ),
        Tool(
            name="list_ports",
            description="List physical ports and their link state",
            inputSchema=_EMPTY_SCHEMA
        ),
        Tool(
            name="list_policies",
            description="List routing policies and which devices use them",
            inputSchema=_EMPTY_SCHEMA
        ),
        Tool(
            name="list_dhcp_leases",
            description="List active DHCP leases",
            inputSchema=_EMPTY_SCHEMA
        ),
        Tool(
            name="list_dhcp_reservations",
            description="List static DHCP reservations",
            inputSchema=_EMPTY_SCHEMA
        ),
        Tool(
            name="add_dhcp_reservation",
            description="Reserve an IP address for a device, replacing any existing reservation",
            inputSchema={
                "type": "object",
                "properties": {
                    "mac": {"type": "string", "description": "MAC address of the device"},
                    "ip": {"type": "string", "description": "IP address to reserve"},
                    "name": {"type": "string", "description": "Optional name for the reservation"}
                },
                "required": ["mac", "ip"]
            }
        ),
        Tool(
            name="delete_dhcp_reservation",
            description="Delete a DHCP reservation by MAC address",
            inputSchema=_mac_schema("MAC address of the reservation to delete")
        ),
        Tool(
            name="list_routes",
            description="List the active routing table",
            inputSchema=_EMPTY_SCHEMA
        ),
        Tool(
            name="list_arp",
            description="List the ARP (neighbour) table",
            inputSchema=_EMPTY_SCHEMA
        ),
        Tool(
            name="list_static_routes",
            description="List configured static routes",
            inputSchema=_EMPTY_SCHEMA
        ),
        Tool(
            name="add_static_route",
            description="Add a static route to a host or network via a gateway or interface",
            inputSchema={
                "type": "object",
                "properties": {
                    "network": {"type": "string", "description": "Destination network address"},
                    "mask": {"type": "string", "description": "Destination netmask"},
                    "host": {"type": "string", "description": "Destination host (instead of network/mask)"},
                    "gateway": {"type": "string", "description": "Next-hop address"},
                    "interface": {"type": "string", "description": "Outgoing interface id"},
                    "auto": {"type": "boolean", "description": "Only add while the interface is up"},
                    "comment": {"type": "string", "description": "Free-form comment"}
                },
                "required": []
            }
        ),
        Tool(
            name="delete_static_route",
            description="Delete a static route",
            inputSchema={
                "type": "object",
                "properties": {
                    "network": {"type": "string", "description": "Destination network address"},
                    "mask": {"type": "string", "description": "Destination netmask"},
                    "host": {"type": "string", "description": "Destination host"},
                    "gateway": {"type": "string", "description": "Next-hop address"},
                    "interface": {"type": "string", "description": "Outgoing interface id"}
                },
                "required": []
            }
        ),
    ]


def _to_json(value: Any) -> Any:
    """Convert results (data classes, lists, dicts) to JSON-compatible values."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, list):
        return [_to_json(item) for item in value]
    if isinstance(value, dict):
        return {key: _to_json(item) for key, item in value.items()}
    return value


def _pick(arguments: Dict[str, Any], keys: Any) -> Dict[str, Any]:
    return {key: arguments[key] for key in keys if key in arguments}


def _handle_tool_call(
    client: KeeneticClient,
    name: str,
    arguments: Dict[str, Any]
) -> Any:
    """Handle a tool call and return the result.

    Args:
        client: The KeeneticClient instance.
        name: The tool name.
        arguments: The tool arguments.

    Returns:
        The result of the tool call.

    Raises:
        ValueError: If the tool name is unknown.
    """
    if name == "list_devices":
        if arguments.get("active_only"):
            return client.devices.active()
        return client.devices.all()

    elif name == "get_device":
        return client.devices.find(arguments["mac"])

    elif name == "update_device":
        attributes = _pick(arguments, DEVICE_ATTRIBUTES)
        if not attributes:
            return {"error": "No device attributes given. Nothing was changed."}
        client.devices.update(arguments["mac"], **attributes)
        return client.devices.find(arguments["mac"])

    elif name == "delete_device":
        return client.devices.delete(arguments["mac"])

    elif name == "system_resources":
        return client.system.resources()

    elif name == "system_info":
        return client.system.info()

    elif name == "system_license":
        return client.system.license()

    elif name == "list_interfaces":
        kind = arguments.get("kind", "all")
        if kind == "wan":
            return client.network.wan()
        if kind == "lan":
            return client.network.lan()
        return client.network.all()

    elif name == "interface_statistics":
        if arguments.get("id"):
            return client.network.find_statistics(arguments["id"])
        return client.network.statistics()

    elif name == "configure_interface":
        return client.network.configure(arguments["id"], up=arguments["up"])

    elif name == "list_access_points":
        return client.wifi.all()

    elif name == "list_wifi_clients":
        return client.wifi.clients()

    elif name == "configure_wifi":
        options = _pick(arguments, ("ssid", "authentication", "encryption", "key", "channel", "up"))
        if not options:
            return {"error": "No Wi-Fi settings given. Nothing was changed."}
        return client.wifi.configure(arguments["id"], **options)

    elif name == "internet_status":
        return {
            "status": client.internet.status(),
            "traffic": client.internet.traffic(),
        }

    elif name == "list_ports":
        return client.ports.all()

    elif name == "list_policies":
        return {
            "policies": client.policies.all(),
            "assignments": client.policies.device_assignments(),
        }

    elif name == "list_dhcp_leases":
        return client.dhcp.leases()

    elif name == "list_dhcp_reservations":
        return client.dhcp.all()

    elif name == "add_dhcp_reservation":
        mac = arguments["mac"]
        existing = {binding.mac.lower() for binding in client.dhcp.all() if binding.mac}
        if mac.lower() in existing:
            return client.dhcp.replace(mac, arguments["ip"], arguments.get("name"))
        return client.dhcp.create(mac, arguments["ip"], arguments.get("name"))

    elif name == "delete_dhcp_reservation":
        return client.dhcp.delete(arguments["mac"])

    elif name == "list_routes":
        return client.routing.all()

    elif name == "list_arp":
        return client.routing.arp()

    elif name == "list_static_routes":
        return client.routing.static()

    elif name == "add_static_route":
        return client.routing.create(
            **_pick(arguments, ("network", "mask", "host", "gateway", "interface", "auto", "comment"))
        )

    elif name == "delete_static_route":
        return client.routing.delete(
            **_pick(arguments, ("network", "mask", "host", "gateway", "interface"))
        )

    else:
        raise ValueError(f"Unknown tool: {name}")


def _error_payload(error: RouterError) -> Dict[str, Any]:
    return {
        "error": type(error).__name__,
        "message": str(error),
        "status": http_status_for(error),
    }


@server.list_tools()
async def list_tools() -> List[Tool]:
    """List available tools.

    Returns:
        List of available Tool definitions.
    """
    return _get_tool_definitions()


@server.call_tool()
async def call_tool(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
    """Handle tool calls.

    Args:
        name: The tool name to call.
        arguments: The arguments for the tool.

    Returns:
        List containing a single TextContent with the JSON result.
    """
    try:
        client = await get_client_manager().get_client()
        result = await asyncio.to_thread(_handle_tool_call, client, name, arguments or {})
        return [TextContent(type="text", text=json.dumps(_to_json(result), indent=2))]
    except RouterError as e:
        logger.warning("Router error in %s: %s", name, e)
        return [TextContent(type="text", text=json.dumps(_error_payload(e), indent=2))]
    except (ValueError, KeyError) as e:
        logger.warning("Invalid tool call: %s", e)
        return [TextContent(type="text", text=json.dumps({"error": str(e)}, indent=2))]
    except Exception as e:
        logger.exception("Tool call error for %s: %s", name, e)
        return [TextContent(type="text", text=json.dumps({"error": str(e)}, indent=2))]


def main() -> None:
    """Main entry point for the MCP server."""
    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    async def run() -> None:
        """Run the MCP server."""
        logger.info("Starting MCP Keenetic Router server")
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options()
            )

    asyncio.run(run())


if __name__ == "__main__":
    main()

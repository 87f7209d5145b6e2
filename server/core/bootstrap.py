"""Wiring shared by the HTTP and MCP entry points."""

import httpx

from shared.clients.extdata.ExtensionDataClientManager import ExtensionDataClientManager
from shared.helper.HelperConfig import HelperConfig
from server.core.ExtensionDataTools import configure_extension_data_tools
from server.core.ToolRegistry import ToolRegistry


def build_tool_registry(
    helper_config: HelperConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[ToolRegistry, ExtensionDataClientManager]:
    """Create the tool registry with all extension data tools registered.

    The client manager is returned so the caller can close it on shutdown.
    """
    client_manager = ExtensionDataClientManager(helper_config=helper_config, transport=transport)
    registry = ToolRegistry(helper_config=helper_config)
    configure_extension_data_tools(
        registry=registry,
        helper_config=helper_config,
        connection_provider=client_manager.get_client,
    )
    return registry, client_manager

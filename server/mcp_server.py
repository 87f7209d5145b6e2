"""MCP stdio entry point for the extension data bridge.

Usage:
    python -m server.mcp_server
"""

import asyncio
from typing import Any

import mcp.types as types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from shared.helper.HelperConfig import HelperConfig
from shared.logging.logging_setup import setup_logging
from server.core.ToolRegistry import ToolRegistry
from server.core.bootstrap import build_tool_registry


def create_mcp_server(registry: ToolRegistry) -> Server:
    """Expose every tool of the registry on a low-level MCP server."""
    server = Server("extdata-bridge")

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(name=tool.name, description=tool.description, inputSchema=tool.inputSchema)
            for tool in registry.list_tools()
        ]

    # argument errors are reported by the tools themselves as error results
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> types.CallToolResult:
        result = await registry.call(name, arguments)
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=item.text) for item in result.content],
            isError=bool(result.isError),
        )

    return server


async def main() -> None:
    """Serve the tools over stdio until the host disconnects."""
    # stdout carries the protocol, so console logs go to stderr
    logger = setup_logging(console_stream="ext://sys.stderr")
    config = HelperConfig(logger=logger)
    registry, client_manager = build_tool_registry(helper_config=config)
    server = create_mcp_server(registry)

    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await client_manager.close()


if __name__ == "__main__":
    asyncio.run(main())

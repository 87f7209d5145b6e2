from typing import Any, Awaitable, Callable

from pydantic import BaseModel

from shared.helper.HelperConfig import HelperConfig
from server.models.responses import ToolDescriptor, ToolResult

ToolHandler = Callable[[dict[str, Any]], Awaitable[ToolResult]]


class RegisteredTool(BaseModel):
    name: str
    description: str
    args_model: type[BaseModel]
    handler: ToolHandler

    def describe(self) -> ToolDescriptor:
        return ToolDescriptor(
            name=self.name,
            description=self.description,
            inputSchema=self.args_model.model_json_schema(),
        )


class ToolRegistry:
    """Named tools callable by an agent host (HTTP router or MCP server)."""

    def __init__(self, helper_config: HelperConfig) -> None:
        self.logging = helper_config.get_logger()
        self._tools: dict[str, RegisteredTool] = {}

    def tool(self, name: str, description: str, args_model: type[BaseModel], handler: ToolHandler) -> None:
        """Register a tool.

        Args:
            name (str): Public tool name.
            description (str): Human readable description shown to the host.
            args_model (type[BaseModel]): Model describing the argument record.
            handler (ToolHandler): Coroutine function taking the raw argument dict.

        Raises:
            ValueError: If a tool with the same name is already registered.
        """
        if name in self._tools:
            raise ValueError(f"Tool '{name}' is already registered.")
        self._tools[name] = RegisteredTool(name=name, description=description, args_model=args_model, handler=handler)
        self.logging.debug("Registered tool: %s", name)

    def get_tool(self, name: str) -> RegisteredTool | None:
        return self._tools.get(name)

    def get_tool_names(self) -> list[str]:
        return list(self._tools)

    def list_tools(self) -> list[ToolDescriptor]:
        return [tool.describe() for tool in self._tools.values()]

    async def call(self, name: str, arguments: dict[str, Any] | None = None) -> ToolResult:
        """Invoke a tool by name. Unknown names yield an error result."""
        tool = self._tools.get(name)
        if tool is None:
            self.logging.warning("Call to unknown tool '%s'.", name)
            return ToolResult.from_error("calling tool", f"Unknown tool '{name}'")
        return await tool.handler(arguments or {})

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request

from server.dependencies.auth import verify_api_key
from server.models.responses import ToolDescriptor

router = APIRouter(prefix="/tools", tags=["tools"])


@router.get("")
async def list_tools(
    request: Request,
    _: None = Depends(verify_api_key),
) -> list[ToolDescriptor]:
    """List all registered tools with their argument schemas.

    Args:
        request (Request): FastAPI request (provides app.state.tool_registry).
        _ (None): Auth dependency result (unused).

    Returns:
        list[ToolDescriptor]: Name, description and input schema per tool.
    """
    return request.app.state.tool_registry.list_tools()


@router.post("/{tool_name}")
async def call_tool(
    request: Request,
    tool_name: str,
    arguments: dict[str, Any] = Body(...),
    _: None = Depends(verify_api_key),
) -> dict:
    """Invoke a tool with a flat JSON argument record.

    Tool failures are part of the result (isError), so they are answered with 200.

    Args:
        request (Request): FastAPI request (provides app.state.tool_registry).
        tool_name (str): Public tool name, e.g. "extensiondata_get_document".
        arguments (dict[str, Any]): The argument record.
        _ (None): Auth dependency result (unused).

    Returns:
        dict: The tool result; "isError" is only present on failure.

    Raises:
        HTTPException: 404 if no tool with this name is registered.
    """
    registry = request.app.state.tool_registry
    if registry.get_tool(tool_name) is None:
        raise HTTPException(status_code=404, detail=f"Unknown tool '{tool_name}'")
    result = await registry.call(tool_name, arguments)
    return result.to_payload()

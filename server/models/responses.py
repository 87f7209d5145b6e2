import json
from typing import Any, Literal

from pydantic import BaseModel


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """
    Uniform result of every tool call: either a success with one text item, or
    an error with one text item and isError set. isError is left out on success.
    """
    content: list[TextContent]
    isError: bool | None = None

    @classmethod
    def from_text(cls, text: str) -> "ToolResult":
        return cls(content=[TextContent(text=text)])

    @classmethod
    def from_json(cls, value: Any) -> "ToolResult":
        """Render a JSON value with two-space indentation, non-ASCII kept as is."""
        return cls.from_text(json.dumps(value, indent=2, ensure_ascii=False))

    @classmethod
    def from_error(cls, action: str, detail: str) -> "ToolResult":
        """Build an error result reading "Error <action>: <detail>"."""
        return cls(content=[TextContent(text=f"Error {action}: {detail}")], isError=True)

    def get_text(self) -> str:
        return "\n".join(item.text for item in self.content)

    def to_payload(self) -> dict:
        return self.model_dump(exclude_none=True)


class ToolDescriptor(BaseModel):
    name: str
    description: str
    inputSchema: dict[str, Any]

import json

from server.models.responses import ToolResult


def test_from_json_pretty_prints_with_two_spaces():
    document = {"id": "doc-1", "tags": ["a", "b"], "__etag": 3}

    result = ToolResult.from_json(document)

    assert result.get_text() == json.dumps(document, indent=2)
    assert result.isError is None


def test_from_json_keeps_non_ascii_characters():
    result = ToolResult.from_json({"name": "Grüße"})
    assert "Grüße" in result.get_text()


def test_success_payload_omits_is_error():
    payload = ToolResult.from_text("done").to_payload()
    assert payload == {"content": [{"type": "text", "text": "done"}]}


def test_from_error_formats_action_and_detail():
    result = ToolResult.from_error("getting document", "Document not found")

    assert result.get_text() == "Error getting document: Document not found"
    assert result.to_payload()["isError"] is True

import json

import pytest
from mcp import types as mcp_types

from client import (
    DEFAULT_SERVER_SCRIPT,
    extract_tool_text,
    gemini_type,
    main,
    mcp_tool_to_gemini_function,
    tool_parameters,
)

COUNT_WORDS_TOOL = mcp_types.Tool(
    name="count_words",
    description="Count words using Unicode word boundaries",
    inputSchema={
        "type": "object",
        "properties": {"text": {"type": "string", "description": "The text to analyze"}},
        "required": ["text"],
    },
)


@pytest.mark.parametrize("schema_type, expected", [
    ("string", "STRING"),
    ("integer", "INTEGER"),
    ("number", "NUMBER"),
    ("boolean", "BOOLEAN"),
    ("array", "ARRAY"),
    ("object", "OBJECT"),
    ("null", "STRING"),
    (None, "STRING"),
])
def test_gemini_type(schema_type, expected):
    assert gemini_type(schema_type) == expected


def test_tool_parameters():
    assert tool_parameters(COUNT_WORDS_TOOL) == {
        "type": "OBJECT",
        "properties": {"text": {"type": "STRING", "description": "The text to analyze"}},
        "required": ["text"],
    }


def test_tool_parameters_without_properties():
    tool = mcp_types.Tool(name="ping", inputSchema={"type": "object"})
    assert tool_parameters(tool) == {"type": "OBJECT", "properties": {}, "required": []}


def test_mcp_tool_to_gemini_function():
    declaration = mcp_tool_to_gemini_function(COUNT_WORDS_TOOL)
    assert declaration.name == "count_words"
    assert declaration.description == "Count words using Unicode word boundaries"


def test_extract_tool_text_plain_number():
    result = mcp_types.CallToolResult(content=[mcp_types.TextContent(type="text", text="5")])
    assert extract_tool_text(result) == "5"


def test_extract_tool_text_pretty_prints_json():
    payload = {"word_count": 2, "letter_count": 10}
    result = mcp_types.CallToolResult(content=[mcp_types.TextContent(type="text", text=json.dumps(payload))])
    assert extract_tool_text(result) == json.dumps(payload, indent=2)


def test_extract_tool_text_error_without_content():
    result = mcp_types.CallToolResult(content=[], isError=True)
    assert extract_tool_text(result) == "Tool execution failed on server."


def test_default_server_script_is_bundled_server():
    assert DEFAULT_SERVER_SCRIPT.endswith("server.py")


def test_main_requires_api_key(monkeypatch, capsys):
    monkeypatch.setattr("client.load_dotenv", lambda: False)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    assert main() == 1
    assert "GEMINI_API_KEY" in capsys.readouterr().out

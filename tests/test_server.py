"""
End-to-end tests: spawn server.py over stdio and talk to it with the MCP client.
"""
import asyncio
import json
import logging
import os
import sys
import time
from contextlib import asynccontextmanager
from pathlib import Path

import pytest
from mcp import ClientSession, StdioServerParameters, types as mcp_types
from mcp.client.stdio import stdio_client

from config import Settings
from server import TOOL_DESCRIPTIONS, build_operations, build_server
from text_analyzer import TextAnalyzer

SERVER_SCRIPT = str(Path(__file__).resolve().parent.parent / "server.py")
COUNT_TOOLS = {"count_words", "count_letters", "count_characters", "count_sentences", "count_paragraphs"}


@asynccontextmanager
async def server_session(**env):
    server_env = dict(os.environ)
    server_env.update({
        "WORDCOUNT_LOCALE": "en-US",
        "WORDCOUNT_LOG_LEVEL": "WARNING",
        "WORDCOUNT_EXPOSE_ANALYZE_TEXT": "false",
    })
    server_env.update(env)
    params = StdioServerParameters(command=sys.executable, args=[SERVER_SCRIPT], env=server_env)
    async with stdio_client(params) as (read_stream, write_stream):
        async with ClientSession(read_stream, write_stream) as session:
            yield session


def first_text(result: mcp_types.CallToolResult) -> str:
    assert len(result.content) == 1
    content = result.content[0]
    assert content.type == "text"
    return content.text


class TestDispatcher:

    def test_operations_map_every_tool(self):
        analyzer = TextAnalyzer()
        operations = build_operations(analyzer)
        assert set(operations) == COUNT_TOOLS == set(TOOL_DESCRIPTIONS)
        assert operations["count_words"]("hello world") == 2
        assert operations["count_letters"]("hello world") == 10

    @pytest.mark.asyncio
    async def test_registers_count_tools(self):
        mcp = build_server(Settings())
        tools = await mcp.list_tools()
        assert {tool.name for tool in tools} == COUNT_TOOLS
        for tool in tools:
            assert tool.inputSchema["required"] == ["text"]
            assert tool.inputSchema["properties"]["text"]["type"] == "string"

    @pytest.mark.asyncio
    async def test_analyze_text_is_opt_in(self):
        mcp = build_server(Settings(expose_analyze_text=True))
        tools = await mcp.list_tools()
        assert {tool.name for tool in tools} == COUNT_TOOLS | {"analyze_text"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("level", [logging.NOTSET, 15])
    async def test_unlisted_log_level_still_builds(self, level):
        mcp = build_server(Settings(log_level=level))
        assert mcp.settings.log_level == "INFO"
        assert {tool.name for tool in await mcp.list_tools()} == COUNT_TOOLS


class TestProtocol:

    @pytest.mark.asyncio
    async def test_initialize_and_list_tools(self):
        async with server_session() as session:
            init = await session.initialize()
            assert init.serverInfo.name == "wordcount-mcp"
            assert init.capabilities.tools is not None

            result = await session.list_tools()
            assert {tool.name for tool in result.tools} == COUNT_TOOLS

    @pytest.mark.asyncio
    async def test_starts_with_notset_log_level(self):
        async with server_session(WORDCOUNT_LOG_LEVEL="NOTSET") as session:
            await session.initialize()
            result = await session.call_tool("count_words", {"text": "still up"})
            assert first_text(result) == "2"

    @pytest.mark.asyncio
    async def test_count_tools(self):
        cases = [
            ("count_words", "Hello world, how are you?", "5"),
            ("count_letters", "Hello world! 123", "10"),
            ("count_characters", "Hello world!", "12"),
            ("count_sentences", "Hello world! How are you? I am fine.", "3"),
            ("count_paragraphs", "First paragraph.\n\nSecond paragraph.\n\nThird paragraph.", "3"),
            ("count_characters", "👍🏽 ok", "4"),
            ("count_words", "", "0"),
        ]
        async with server_session() as session:
            await session.initialize()
            for tool, text, expected in cases:
                result = await session.call_tool(tool, {"text": text})
                assert not result.isError, (tool, result)
                assert first_text(result) == expected, tool

    @pytest.mark.asyncio
    async def test_analyze_text_when_exposed(self):
        async with server_session(WORDCOUNT_EXPOSE_ANALYZE_TEXT="true") as session:
            await session.initialize()
            result = await session.call_tool("analyze_text", {"text": "Hello, world!"})
            assert not result.isError
            assert json.loads(first_text(result)) == {
                "word_count": 2,
                "letter_count": 10,
                "character_count": 13,
                "sentence_count": 1,
                "paragraph_count": 1,
            }


class TestErrors:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("arguments", [{}, {"text": None}, {"text": 42}])
    async def test_invalid_text_argument(self, arguments):
        async with server_session() as session:
            await session.initialize()
            result = await session.call_tool("count_words", arguments)
            assert result.isError

    @pytest.mark.asyncio
    async def test_unknown_tool(self):
        async with server_session() as session:
            await session.initialize()
            result = await session.call_tool("invalid_tool", {"text": "test"})
            assert result.isError


class TestLoad:

    @pytest.mark.asyncio
    async def test_large_text(self):
        async with server_session() as session:
            await session.initialize()
            start = time.monotonic()
            result = await session.call_tool("count_words", {"text": "word " * 1000})
            elapsed = time.monotonic() - start
            assert first_text(result) == "1000"
            assert elapsed < 5

    @pytest.mark.asyncio
    async def test_concurrent_requests(self):
        async with server_session() as session:
            await session.initialize()
            results = await asyncio.gather(
                session.call_tool("count_words", {"text": "hello world"}),
                session.call_tool("count_letters", {"text": "hello world"}),
                session.call_tool("count_characters", {"text": "hello world"}),
            )
            assert [first_text(r) for r in results] == ["2", "10", "11"]

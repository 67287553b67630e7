# server.py
import logging
import signal
import sys
from typing import Annotated, Callable, Dict, Optional

from mcp.server.fastmcp import FastMCP # Import the easy-to-use server framework
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

from config import Settings, load_settings
from text_analyzer import TextAnalyzer

logger = logging.getLogger("wordcount.server")

# Argument schema shared by every tool. FastMCP validates it before the
# analyzer is called, so null or non-string input never reaches the core.
TextArgument = Annotated[str, Field(description="The text to analyze")]

TOOL_DESCRIPTIONS = {
    "count_words": "Count words using Unicode word boundaries (whitespace and punctuation are not words)",
    "count_letters": "Count alphabetic characters (a-z, A-Z)",
    "count_characters": "Count total characters including spaces, treating each emoji or accented letter as one",
    "count_sentences": "Count sentences using Unicode sentence boundaries (. ! ? and their equivalents)",
    "count_paragraphs": "Count paragraphs split by blank lines",
}


def build_operations(analyzer: TextAnalyzer) -> Dict[str, Callable[[str], int]]:
    """Maps each tool name to the analyzer method it runs."""
    return {
        "count_words": analyzer.count_words,
        "count_letters": analyzer.count_letters,
        "count_characters": analyzer.count_characters,
        "count_sentences": analyzer.count_sentences,
        "count_paragraphs": analyzer.count_paragraphs,
    }


def _make_count_tool(name: str, operation: Callable[[str], int]):
    async def count_tool(text: TextArgument) -> str:
        logger.debug("%s: analyzing %d characters: '%s...'", name, len(text), text[:50])
        try:
            result = operation(text)
        except Exception as e:
            logger.exception("Error in %s", name)
            raise ToolError(f"{name} failed: {e}") from e
        logger.debug("%s result: %d", name, result)
        return str(result)

    count_tool.__name__ = name
    return count_tool


def build_server(settings: Optional[Settings] = None, analyzer: Optional[TextAnalyzer] = None) -> FastMCP:
    """
    Creates the MCP server and registers the counting tools.

    Args:
        settings: Server settings; read from the environment when omitted.
        analyzer: Analyzer shared by all tools; built from settings.locale
            when omitted.
    """
    settings = settings or load_settings()
    analyzer = analyzer or TextAnalyzer(settings.locale)
    mcp = FastMCP(settings.server_name, log_level=settings.log_level_name)

    for name, operation in build_operations(analyzer).items():
        mcp.add_tool(_make_count_tool(name, operation), name=name, description=TOOL_DESCRIPTIONS[name])

    if settings.expose_analyze_text:
        async def analyze_text(text: TextArgument) -> dict:
            """
            Analyzes the provided text and returns every count at once.

            Args:
                text: The string of text to analyze.
            """
            logger.debug("analyze_text: analyzing %d characters", len(text))
            try:
                result = analyzer.analyze_text(text)
            except Exception as e:
                logger.exception("Error in analyze_text")
                raise ToolError(f"analyze_text failed: {e}") from e
            # FastMCP serializes the dictionary into a JSON text content item.
            return result.as_dict()

        mcp.add_tool(analyze_text, name="analyze_text")

    return mcp


def configure_logging(level: int = logging.INFO) -> None:
    # stdout carries the MCP stream, so all logging goes to stderr.
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="[Server] %(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _interrupt(signum, frame):
    raise KeyboardInterrupt


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    signal.signal(signal.SIGTERM, _interrupt)

    try:
        mcp = build_server(settings)
    except Exception:
        logger.exception("Failed to start %s server", settings.server_name)
        sys.exit(1)

    logger.info("Starting %s server on stdio (locale=%s)", settings.server_name, settings.locale)
    try:
        mcp.run(transport="stdio")
    except KeyboardInterrupt:
        logger.info("Shutting down %s server...", settings.server_name)
    logger.info("%s server stopped", settings.server_name)


# Entry point to run the server
if __name__ == "__main__":
    main()

# config.py
import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from segmenter import DEFAULT_LOCALE, resolve_locale

SERVER_NAME = "wordcount-mcp"
_TRUTHY = {"1", "true", "yes", "on"}
# The levels the MCP server accepts.
_LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class Settings:
    locale: str = DEFAULT_LOCALE
    log_level: int = logging.INFO
    expose_analyze_text: bool = False
    server_name: str = SERVER_NAME

    @property
    def log_level_name(self) -> str:
        name = logging.getLevelName(self.log_level)
        return name if name in _LOG_LEVELS else "INFO"


def _parse_log_level(value: str) -> int:
    return _LOG_LEVELS.get(value.strip().upper(), logging.INFO)


def load_settings(dotenv: bool = True) -> Settings:
    """
    Reads server settings from the environment.

    Args:
        dotenv: Also load variables from a .env file first (existing
            environment variables win).
    """
    if dotenv:
        load_dotenv()
    return Settings(
        locale=resolve_locale(os.getenv("WORDCOUNT_LOCALE", DEFAULT_LOCALE)),
        log_level=_parse_log_level(os.getenv("WORDCOUNT_LOG_LEVEL", "INFO")),
        expose_analyze_text=os.getenv("WORDCOUNT_EXPOSE_ANALYZE_TEXT", "").strip().lower() in _TRUTHY,
    )

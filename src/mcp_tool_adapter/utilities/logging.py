"""Logging utilities for the MCP tool adapter."""

import logging
from collections.abc import Mapping
from typing import Any, Literal

from rich.console import Console
from rich.logging import RichHandler

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_SENSITIVE_KEYS = frozenset(
    {
        "access_token",
        "api_key",
        "apikey",
        "authorization",
        "client_secret",
        "password",
        "refresh_token",
        "secret",
        "token",
    }
)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for an adapter module.

    Args:
        name: the name of the logger, usually the module's __name__

    Returns:
        a logger instance
    """
    return logging.getLogger(name)


def configure_logging(level: LogLevel | None = None) -> None:
    """Configure logging for the adapter.

    Args:
        level: the log level to use; defaults to the configured `log_level` setting
    """
    if level is None:
        from mcp_tool_adapter.settings import AdapterSettings

        level = AdapterSettings().log_level

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )


def redact_sensitive_data(
    data: Mapping[str, Any] | None,
    sensitive_keys: frozenset[str] | set[str] | None = None,
) -> Mapping[str, Any] | None:
    """Return a shallow copy with sensitive values replaced by "***".

    Used before tool call arguments are written to the debug log.

    Parameters
    ----------
    data:
        Original mapping (typically tool call arguments). If *None* the
        function simply returns *None*.
    sensitive_keys:
        Optional set of lower-case keys that should be hidden; defaults to
        common credential names.
    """

    if data is None:
        return None

    sensitive_keys = sensitive_keys or DEFAULT_SENSITIVE_KEYS

    return {key: "***" if str(key).lower() in sensitive_keys else value for key, value in data.items()}

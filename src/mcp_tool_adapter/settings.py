"""Adapter settings.

All settings can be configured via environment variables with the prefix
MCP_ADAPTER_. For example, MCP_ADAPTER_DEFAULT_TIMEOUT=30 bounds every tool
call to thirty seconds, and MCP_ADAPTER_TRUSTED_SERVERS='["local"]' skips the
confirmation prompt for every tool of the "local" server.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from mcp_tool_adapter.types import LegacyTextPolicy
from mcp_tool_adapter.utilities.logging import LogLevel


class AdapterSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MCP_ADAPTER_",
        env_file=".env",
        extra="ignore",
    )

    log_level: LogLevel = "INFO"

    default_timeout: float | None = Field(default=None, gt=0)
    """Seconds to wait for a tool call when the tool has no timeout of its own."""

    trusted_servers: list[str] = Field(default_factory=list)
    """Servers whose tools never ask for confirmation."""

    legacy_text_policy: LegacyTextPolicy = LegacyTextPolicy.LITERAL

    describe_media: bool = False
    """Precede every binary part with a line naming the tool, media kind and mime type."""

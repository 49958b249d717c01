import pytest

from mcp_tool_adapter.allowlist import default_allowlist


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_default_allowlist():
    """Clear the process-wide allow-list around each test.

    Tools created without an explicit store share one allow-list for the
    whole process, so "always allow" answers given in one test would
    otherwise leak into the next.
    """
    default_allowlist().clear()
    yield
    default_allowlist().clear()


@pytest.fixture(autouse=True)
def isolated_settings_env(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Keep MCP_ADAPTER_* variables and .env files of the developer's shell out of the tests."""
    for name in (
        "MCP_ADAPTER_LOG_LEVEL",
        "MCP_ADAPTER_DEFAULT_TIMEOUT",
        "MCP_ADAPTER_TRUSTED_SERVERS",
        "MCP_ADAPTER_LEGACY_TEXT_POLICY",
        "MCP_ADAPTER_DESCRIBE_MEDIA",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)

"""An MCP server tool exposed to a model runtime.

`McpTool` asks for confirmation through the allow-list gate, calls the tool on
its MCP session, and turns the result into output parts for the model plus a
display string for the user.

Example:
    async with ClientSession(read, write) as session:
        await session.initialize()
        tool = McpTool(session, "files", "read_file", "Read a file", schema)
        result = await tool.run({"path": "README.md"}, confirm=ask_user)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Literal, Protocol

import anyio
from typing_extensions import Self

from mcp_tool_adapter.allowlist import Allowed, AllowlistGate, AllowlistStore, PendingConfirmation
from mcp_tool_adapter.display import summarize_response
from mcp_tool_adapter.exceptions import ToolExecutionCancelled
from mcp_tool_adapter.naming import generate_valid_name
from mcp_tool_adapter.settings import AdapterSettings
from mcp_tool_adapter.transform import ContentTransformer
from mcp_tool_adapter.types import ToolConfirmationOutcome
from mcp_tool_adapter.utilities.logging import get_logger, redact_sensitive_data

logger = get_logger(__name__)


class CallableTool(Protocol):
    """The outbound side of a tool call. An MCP `ClientSession` satisfies it."""

    async def call_tool(
        self,
        name: str,
        arguments: dict[str, Any] | None = None,
        read_timeout_seconds: timedelta | None = None,
    ) -> Any: ...  # pragma: no branch


class ConfirmFnT(Protocol):
    async def __call__(self, details: McpToolConfirmationDetails) -> ToolConfirmationOutcome: ...  # pragma: no branch


# Use dataclass instead of pydantic BaseModel
# because the pending confirmation carries a Protocol field.
@dataclass
class McpToolConfirmationDetails:
    """What the UI needs to ask the user whether an MCP tool may run."""

    server_name: str
    tool_name: str
    tool_display_name: str
    pending: PendingConfirmation = field(repr=False)
    title: str = "Confirm MCP Tool Execution"
    type: Literal["mcp"] = "mcp"

    def resolve(self, outcome: ToolConfirmationOutcome | str) -> None:
        self.pending.resolve(outcome)


@dataclass
class ToolResult:
    llm_content: list[Any] | Any
    """Output parts for the model, or the untouched response when nothing was transformed."""

    return_display: str
    """Human-readable summary of the response."""


class McpTool:
    """A tool discovered on an MCP server."""

    def __init__(
        self,
        session: CallableTool,
        server_name: str,
        server_tool_name: str,
        description: str,
        parameter_schema: dict[str, Any] | None = None,
        timeout: float | None = None,
        trust: bool | None = None,
        name_override: str | None = None,
        *,
        allowlist: AllowlistStore | None = None,
        settings: AdapterSettings | None = None,
    ) -> None:
        self.session = session
        self.server_name = server_name
        self.server_tool_name = server_tool_name
        self.description = description
        self.parameter_schema = parameter_schema
        self.settings = settings or AdapterSettings()
        self.timeout = timeout if timeout is not None else self.settings.default_timeout
        self.trust = trust if trust is not None else server_name in self.settings.trusted_servers
        self.name = name_override or generate_valid_name(server_tool_name)
        self.gate = AllowlistGate(allowlist)
        self.transformer = ContentTransformer(
            server_tool_name,
            server_name,
            legacy_text_policy=self.settings.legacy_text_policy,
            describe_media=self.settings.describe_media,
        )

    @property
    def display_name(self) -> str:
        return f"{self.server_tool_name} ({self.server_name} MCP Server)"

    @property
    def schema(self) -> dict[str, Any]:
        """The function declaration exposed to the model."""
        return {
            "name": self.name,
            "description": self.description,
            "parametersJsonSchema": self.parameter_schema,
        }

    def as_fully_qualified_tool(self) -> Self:
        """Return the same tool named `<server>__<tool>`, sharing this tool's allow-list."""
        return type(self)(
            self.session,
            self.server_name,
            self.server_tool_name,
            self.description,
            self.parameter_schema,
            timeout=self.timeout,
            trust=self.trust,
            name_override=f"{self.server_name}__{self.server_tool_name}",
            allowlist=self.gate.store,
            settings=self.settings,
        )

    def should_confirm_execute(self, params: dict[str, Any] | None = None) -> McpToolConfirmationDetails | None:
        """Return the confirmation to show the user, or None when the tool may run right away."""
        decision = self.gate.decide(self.server_name, self.server_tool_name, trust=self.trust)
        if isinstance(decision, Allowed):
            return None
        return McpToolConfirmationDetails(
            server_name=self.server_name,
            tool_name=self.server_tool_name,
            tool_display_name=self.name,
            pending=decision,
        )

    async def execute(self, params: dict[str, Any] | None = None) -> ToolResult:
        """Call the tool and transform its response.

        Transport errors and timeouts propagate unchanged.
        """
        arguments = dict(params or {})
        logger.debug(
            "Calling tool %s on MCP server %s with arguments %s",
            self.server_tool_name,
            self.server_name,
            redact_sensitive_data(arguments),
        )
        raw = await self._call_tool(arguments)
        return ToolResult(
            llm_content=self.transformer.transform(raw),
            return_display=summarize_response(raw),
        )

    async def run(self, params: dict[str, Any] | None, confirm: ConfirmFnT) -> ToolResult:
        """Confirm with the user when needed, then execute.

        Raises:
            ToolExecutionCancelled: the user answered CANCEL
        """
        details = self.should_confirm_execute(params)
        if details is not None:
            outcome = ToolConfirmationOutcome(await confirm(details))
            details.resolve(outcome)
            if outcome is ToolConfirmationOutcome.CANCEL:
                logger.info("Cancelled tool %s on MCP server %s", self.server_tool_name, self.server_name)
                raise ToolExecutionCancelled(self.server_name, self.server_tool_name)
        return await self.execute(params)

    async def _call_tool(self, arguments: dict[str, Any]) -> Any:
        if self.timeout is None:
            return await self.session.call_tool(self.server_tool_name, arguments)

        with anyio.fail_after(self.timeout):
            return await self.session.call_tool(
                self.server_tool_name,
                arguments,
                read_timeout_seconds=timedelta(seconds=self.timeout),
            )

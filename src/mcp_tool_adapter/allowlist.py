"""Confirmation gate for MCP tool calls.

Tools that are neither trusted nor allow-listed need a confirmation from the
user before they run. The user can extend the allow-list to a whole server or
a single tool while confirming. Membership only grows; nothing is removed or
persisted.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Protocol, TypeAlias

from mcp_tool_adapter.types import ToolConfirmationOutcome
from mcp_tool_adapter.utilities.logging import get_logger

logger = get_logger(__name__)


class AllowlistStore(Protocol):
    def has(self, key: str) -> bool: ...

    def add(self, key: str) -> None: ...


class InMemoryAllowlist:
    """A set-backed allow-list. Adding a key twice is harmless."""

    def __init__(self, keys: Iterable[str] = ()) -> None:
        self._keys: set[str] = set(keys)

    def has(self, key: str) -> bool:
        return key in self._keys

    def add(self, key: str) -> None:
        self._keys.add(key)

    def clear(self) -> None:
        self._keys.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._keys))

    def __len__(self) -> int:
        return len(self._keys)


_default_allowlist = InMemoryAllowlist()


def default_allowlist() -> InMemoryAllowlist:
    """Return the process-wide allow-list shared by adapters that were not given their own."""
    return _default_allowlist


def server_key(server_name: str) -> str:
    return server_name


def tool_key(server_name: str, tool_name: str) -> str:
    return f"{server_name}.{tool_name}"


@dataclass(frozen=True)
class Allowed:
    """The call may proceed without asking the user."""


@dataclass
class PendingConfirmation:
    """The call needs the user's confirmation.

    Each pending confirmation is independent: resolving one never settles
    another one raised for the same server or tool.
    """

    server_name: str
    tool_name: str
    store: AllowlistStore = field(repr=False)

    def resolve(self, outcome: ToolConfirmationOutcome | str) -> None:
        outcome = ToolConfirmationOutcome(outcome)
        if outcome is ToolConfirmationOutcome.PROCEED_ALWAYS_SERVER:
            logger.debug("Allow-listing MCP server %s", self.server_name)
            self.store.add(server_key(self.server_name))
        elif outcome is ToolConfirmationOutcome.PROCEED_ALWAYS_TOOL:
            logger.debug("Allow-listing MCP tool %s on server %s", self.tool_name, self.server_name)
            self.store.add(tool_key(self.server_name, self.tool_name))


Decision: TypeAlias = Allowed | PendingConfirmation


class AllowlistGate:
    def __init__(self, store: AllowlistStore | None = None) -> None:
        self.store: AllowlistStore = store if store is not None else default_allowlist()

    def decide(self, server_name: str, tool_name: str, trust: bool = False) -> Decision:
        """Decide whether a tool call may run without confirmation.

        Trusted tools are always allowed and never touch the store.
        """
        if trust:
            return Allowed()
        if self.store.has(server_key(server_name)) or self.store.has(tool_key(server_name, tool_name)):
            return Allowed()
        return PendingConfirmation(server_name=server_name, tool_name=tool_name, store=self.store)

"""Adapter between an agent runtime and tools served over the Model Context Protocol.

Use the adapter to:

- Ask the user before an untrusted MCP tool runs, remembering "always allow" answers
- Turn MCP content blocks into text and inline-data parts a model can read
- Summarize the same content blocks for display in a CLI

## Example

```python
from mcp_tool_adapter import McpTool, ToolConfirmationOutcome

async def confirm(details):
    return ToolConfirmationOutcome.PROCEED_ALWAYS_TOOL

tool = McpTool(session, "weather", "get_forecast", "Get the forecast", input_schema)
result = await tool.run({"city": "Paris"}, confirm=confirm)
result.llm_content     # [TextPart(...), ...]
result.return_display  # "Sunny, 24°C"
```
"""

from .allowlist import (
    Allowed,
    AllowlistGate,
    AllowlistStore,
    InMemoryAllowlist,
    PendingConfirmation,
    default_allowlist,
)
from .display import summarize_response
from .exceptions import McpToolAdapterError, ToolExecutionCancelled
from .naming import generate_valid_name
from .settings import AdapterSettings
from .tool import CallableTool, McpTool, McpToolConfirmationDetails, ToolResult
from .transform import ContentTransformer, transform_response
from .types import (
    InlineData,
    InlineDataPart,
    LegacyTextPolicy,
    Part,
    TextPart,
    ToolConfirmationOutcome,
    dump_parts,
)

__all__ = [
    "AdapterSettings",
    "Allowed",
    "AllowlistGate",
    "AllowlistStore",
    "CallableTool",
    "ContentTransformer",
    "InMemoryAllowlist",
    "InlineData",
    "InlineDataPart",
    "LegacyTextPolicy",
    "McpTool",
    "McpToolAdapterError",
    "McpToolConfirmationDetails",
    "Part",
    "PendingConfirmation",
    "TextPart",
    "ToolConfirmationOutcome",
    "ToolExecutionCancelled",
    "ToolResult",
    "default_allowlist",
    "dump_parts",
    "generate_valid_name",
    "summarize_response",
    "transform_response",
]

"""Custom exceptions for the MCP tool adapter."""


class McpToolAdapterError(Exception):
    """Base error for the MCP tool adapter."""


class ToolExecutionCancelled(McpToolAdapterError):
    """The user declined to run an MCP tool.

    Attributes:
        server_name: name of the MCP server the tool belongs to
        tool_name: name of the tool on that server
    """

    def __init__(self, server_name: str, tool_name: str):
        super().__init__(f"Execution of {tool_name} ({server_name} MCP Server) was cancelled")
        self.server_name = server_name
        self.tool_name = tool_name

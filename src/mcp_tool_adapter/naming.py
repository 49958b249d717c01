"""Tool name sanitization."""

import re

MAX_TOOL_NAME_LENGTH = 63

_INVALID_NAME_CHARS = re.compile(r"[^a-zA-Z0-9_.-]")


def generate_valid_name(name: str) -> str:
    """Turn an MCP tool name into one a model runtime accepts as a function name.

    Characters outside `[a-zA-Z0-9_.-]` become underscores. Names longer than
    63 characters keep their first 28 and last 32 characters, joined by `___`.
    """
    valid_name = _INVALID_NAME_CHARS.sub("_", name)
    if len(valid_name) > MAX_TOOL_NAME_LENGTH:
        valid_name = valid_name[:28] + "___" + valid_name[-32:]
    return valid_name

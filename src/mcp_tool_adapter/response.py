"""Helpers for walking a raw tools/call response.

A raw response is either a single top-level part or a sequence of them. A
top-level part is an envelope (`{"content": [...], "isError": ...}`), a host
wrapper (`{"functionResponse": {"response": <envelope>}}`), a pydantic model
such as an MCP `CallToolResult`, or something else entirely.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError

from mcp_tool_adapter.types import ToolResponse


def response_parts(raw: Any) -> list[Any]:
    """Return the top-level parts of a raw response."""
    if raw is None:
        return []
    if isinstance(raw, str | bytes | Mapping | BaseModel):
        return [raw]
    if isinstance(raw, Sequence):
        return list(raw)
    return [raw]


def as_mapping(value: Any) -> Mapping[str, Any] | None:
    """Return a content block or part as a mapping, or None when it is not object-shaped."""
    if isinstance(value, BaseModel):
        try:
            return value.model_dump(mode="json", by_alias=True, exclude_none=True)
        except PydanticSerializationError:
            # Fields of arbitrary types stay as Python objects.
            return value.model_dump(by_alias=True, exclude_none=True)
    if isinstance(value, Mapping):
        return value
    return None


def extract_envelope(part: Any) -> ToolResponse | None:
    """Return the envelope carried by a top-level part, or None when it carries none."""
    mapping = as_mapping(part)
    if mapping is None:
        return None
    function_response = mapping.get("functionResponse")
    if isinstance(function_response, Mapping):
        mapping = function_response.get("response")
        if not isinstance(mapping, Mapping):
            return None
    if "content" not in mapping:
        return None
    try:
        return ToolResponse.model_validate(mapping)
    except ValidationError:
        return None


def first_text(content: Sequence[Any]) -> str | None:
    """Return the text of the first text block, typed or legacy."""
    for item in content:
        block = as_mapping(item)
        if block is None:
            continue
        text = block.get("text")
        if block.get("type") in (None, "text") and isinstance(text, str):
            return text
    return None

"""Render MCP tool call results for display in a CLI."""

import json
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from mcp_tool_adapter.response import as_mapping, extract_envelope, response_parts
from mcp_tool_adapter.types import INVALID_MEDIA_TEXT, EmbeddedResource, MediaContent, ResourceLink

_MEDIA_LABELS = {"image": "Image", "audio": "Audio", "video": "Video"}


def summarize_response(raw: Any) -> str:
    """Return a user-friendly string for a raw tools/call response.

    Each content block is reduced to a short string: text as-is, media as
    `[Image: image/png]` and the like, resources and links as one-line
    summaries. An envelope that reduces entirely to strings is joined with
    newlines, and a response made of a single such envelope is returned as
    plain text. Anything else is shown as indented JSON in a markdown code
    block. This function never raises.
    """
    parts = response_parts(raw)
    if not parts:
        return _fenced_json([])

    processed = [_summarize_part(part) for part in parts]
    summary = processed[0] if len(processed) == 1 else processed
    if isinstance(summary, str):
        return summary
    return _fenced_json(summary)


def _summarize_part(part: Any) -> Any:
    envelope = extract_envelope(part)
    if envelope is None:
        mapping = as_mapping(part)
        if mapping is None:
            return part
        function_response = mapping.get("functionResponse")
        return function_response if isinstance(function_response, Mapping) else mapping

    items = [_summarize_block(item) for item in envelope.content]
    if items and all(isinstance(item, str) for item in items):
        return "\n".join(items)
    return items


def _summarize_block(item: Any) -> Any:
    block = as_mapping(item)
    if block is None:
        return item

    tag = block.get("type")
    match tag:
        case None if isinstance(block.get("text"), str):
            return block["text"]
        case None:
            return dict(block)
        case "text":
            text = block.get("text")
            return text if isinstance(text, str) else f"[Unknown content type: {tag}]"
        case "image" | "audio" | "video" | "pdf":
            try:
                media = MediaContent.model_validate(block)
            except ValidationError:
                return INVALID_MEDIA_TEXT
            if media.type == "pdf":
                return "[PDF document]"
            return f"[{_MEDIA_LABELS[media.type]}: {media.mime_type}]"
        case "resource":
            try:
                resource = EmbeddedResource.model_validate(block).resource
            except ValidationError:
                return f"[Unknown content type: {tag}]"
            if resource.text:
                return resource.text
            return f"[Embedded Resource: {resource.mime_type or 'unknown type'}]"
        case "resource_link":
            try:
                link = ResourceLink.model_validate(block)
            except ValidationError:
                return f"[Unknown content type: {tag}]"
            return f"[Link to {link.label}: {link.uri}]"
        case _:
            return f"[Unknown content type: {tag}]"


def _fenced_json(value: Any) -> str:
    try:
        rendered = json.dumps(value, indent=2, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        rendered = repr(value)
    return f"```json\n{rendered}\n```"

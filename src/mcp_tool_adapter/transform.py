"""Transform MCP tool call results into parts a model runtime can consume.

Every content block of a response becomes zero or more `TextPart` /
`InlineDataPart` items, in order. Binary content is carried as inline data so
the model can see it, and a short header naming the tool is placed before the
items of any envelope that carries binary content. When no block in the whole
response yields anything, the original response is returned untouched.
"""

import json
from typing import Any

from pydantic import ValidationError

from mcp_tool_adapter.response import as_mapping, extract_envelope, first_text, response_parts
from mcp_tool_adapter.types import (
    DEFAULT_BLOB_MIME_TYPE,
    INVALID_MEDIA_TEXT,
    EmbeddedResource,
    InlineData,
    InlineDataPart,
    LegacyTextPolicy,
    MediaContent,
    Part,
    ResourceLink,
    TextContent,
    TextPart,
)
from mcp_tool_adapter.utilities.logging import get_logger

logger = get_logger(__name__)


class ContentTransformer:
    """Turns raw tool responses into canonical output parts.

    The transformer holds configuration only; `transform` keeps no state
    between calls. Tool and server names are used for the header and error
    text alone.
    """

    def __init__(
        self,
        tool_name: str,
        server_name: str,
        legacy_text_policy: LegacyTextPolicy = LegacyTextPolicy.LITERAL,
        describe_media: bool = False,
    ) -> None:
        self.tool_name = tool_name
        self.server_name = server_name
        self.legacy_text_policy = LegacyTextPolicy(legacy_text_policy)
        self.describe_media = describe_media

    @property
    def header(self) -> str:
        return f"[Response from {self.tool_name} ({self.server_name} MCP Server)]"

    def transform(self, raw: Any) -> list[Any] | Any:
        """Transform a raw response.

        Returns the list of output parts, or `raw` itself when no block
        produced any content.
        """
        result: list[Any] = []
        transformed = False

        for part in response_parts(raw):
            envelope = extract_envelope(part)
            if envelope is None:
                result.append(part)
                continue

            if envelope.is_error:
                error_text = first_text(envelope.content) or "Unknown error"
                result.append(TextPart(text=f"Error from {self.tool_name}: {error_text}"))
                transformed = True
                continue

            items: list[Part] = []
            for block in envelope.content:
                items.extend(self.transform_block(block))
            if not items:
                continue

            transformed = True
            if any(isinstance(item, InlineDataPart) for item in items):
                result.append(TextPart(text=self.header))
            result.extend(items)

        if not transformed:
            logger.debug("No content transformed for %s, returning the original response", self.tool_name)
            return raw
        return result

    def transform_block(self, item: Any) -> list[Part]:
        """Transform a single content block. Never raises."""
        block = as_mapping(item)
        if block is None:
            logger.debug("Skipping content item of type %s from %s", type(item).__name__, self.tool_name)
            return []

        tag = block.get("type")
        match tag:
            case None if isinstance(block.get("text"), str):
                return self._transform_legacy_text(block["text"])
            case None:
                logger.debug("Skipping untyped content block from %s", self.tool_name)
                return []
            case "text":
                try:
                    content = TextContent.model_validate(block)
                except ValidationError:
                    return [self._unknown(tag)]
                return [TextPart(text=content.text)]
            case "image" | "audio" | "video" | "pdf":
                return self._transform_media(block)
            case "resource":
                return self._transform_resource(block)
            case "resource_link":
                try:
                    link = ResourceLink.model_validate(block)
                except ValidationError:
                    return [self._unknown(tag)]
                return [TextPart(text=f"Resource Link: {link.label} at {link.uri}")]
            case _:
                return [self._unknown(tag)]

    def _transform_legacy_text(self, text: str) -> list[Part]:
        try:
            decoded = json.loads(text)
        except ValueError:
            decoded = None
        if isinstance(decoded, dict) and isinstance(decoded.get("type"), str):
            return self.transform_block(decoded)

        if self.legacy_text_policy is LegacyTextPolicy.PASSTHROUGH:
            return []
        return [TextPart(text=text)]

    def _transform_media(self, block: Any) -> list[Part]:
        try:
            media = MediaContent.model_validate(block)
        except ValidationError:
            logger.debug("Invalid %s content from %s", block.get("type"), self.tool_name)
            return [TextPart(text=INVALID_MEDIA_TEXT)]
        return self._inline(media.type, media.data, media.mime_type)

    def _transform_resource(self, block: Any) -> list[Part]:
        try:
            resource = EmbeddedResource.model_validate(block).resource
        except ValidationError:
            return [self._unknown("resource")]

        if resource.text:
            return [TextPart(text=f"[Resource: {resource.uri}]\n{resource.text}")]
        if resource.blob:
            return self._inline("resource", resource.blob, resource.mime_type or DEFAULT_BLOB_MIME_TYPE)
        return [TextPart(text=f"[Resource: {resource.uri}]")]

    def _inline(self, kind: str, data: str, mime_type: str) -> list[Part]:
        inline = InlineDataPart(inline_data=InlineData(data=data, mime_type=mime_type))
        if self.describe_media:
            return [TextPart(text=f"[{self.tool_name} returned {kind}: {mime_type}]"), inline]
        return [inline]

    def _unknown(self, tag: Any) -> TextPart:
        return TextPart(text=f"[Unknown content type: {tag}]")


def transform_response(
    raw: Any,
    *,
    tool_name: str,
    server_name: str,
    legacy_text_policy: LegacyTextPolicy = LegacyTextPolicy.LITERAL,
    describe_media: bool = False,
) -> list[Any] | Any:
    """Transform a raw tools/call response into output parts. See `ContentTransformer`."""
    transformer = ContentTransformer(
        tool_name,
        server_name,
        legacy_text_policy=legacy_text_policy,
        describe_media=describe_media,
    )
    return transformer.transform(raw)

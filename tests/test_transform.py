"""Tests for transforming MCP tool results into output parts."""

import copy
import json
from typing import Any

import pytest
from pydantic import BaseModel, ConfigDict

from mcp_tool_adapter.transform import ContentTransformer, transform_response
from mcp_tool_adapter.types import (
    INVALID_MEDIA_TEXT,
    InlineData,
    InlineDataPart,
    LegacyTextPolicy,
    TextPart,
    dump_parts,
)

TOOL = "actual-server-tool-name"
SERVER = "mock-mcp-server"
HEADER = TextPart(text=f"[Response from {TOOL} ({SERVER} MCP Server)]")


def function_response(content: Any, **response: Any) -> dict[str, Any]:
    return {"functionResponse": {"name": TOOL, "response": {"content": content, **response}}}


def transform(raw: Any, **kwargs: Any) -> Any:
    return transform_response(raw, tool_name=TOOL, server_name=SERVER, **kwargs)


def inline(data: str, mime_type: str) -> InlineDataPart:
    return InlineDataPart(inline_data=InlineData(data=data, mime_type=mime_type))


class TestText:
    def test_text_only_blocks_keep_order(self):
        raw = [function_response([{"type": "text", "text": t} for t in ("one", "two", "three")])]

        assert transform(raw) == [TextPart(text="one"), TextPart(text="two"), TextPart(text="three")]

    def test_bare_envelope(self):
        raw = {"content": [{"type": "text", "text": "hello"}], "isError": False}
        assert transform(raw) == [TextPart(text="hello")]

    def test_text_block_with_non_string_text(self):
        raw = [function_response([{"type": "text", "text": 42}])]
        assert transform(raw) == [TextPart(text="[Unknown content type: text]")]


class TestMedia:
    def test_single_image(self):
        raw = [function_response([{"type": "image", "data": "AAA", "mimeType": "image/png"}])]

        result = transform_response(raw, tool_name="t", server_name="s")

        assert result == [
            TextPart(text="[Response from t (s MCP Server)]"),
            inline("AAA", "image/png"),
        ]
        assert dump_parts(result) == [
            {"text": "[Response from t (s MCP Server)]"},
            {"inlineData": {"data": "AAA", "mimeType": "image/png"}},
        ]

    def test_all_media_types(self):
        raw = [
            function_response(
                [
                    {"type": "image", "data": "imageData", "mimeType": "image/png"},
                    {"type": "audio", "data": "audioData", "mimeType": "audio/mp3"},
                    {"type": "video", "data": "videoData", "mimeType": "video/mp4"},
                    {"type": "pdf", "data": "pdfData", "mimeType": "application/pdf"},
                ]
            )
        ]

        assert transform(raw) == [
            HEADER,
            inline("imageData", "image/png"),
            inline("audioData", "audio/mp3"),
            inline("videoData", "video/mp4"),
            inline("pdfData", "application/pdf"),
        ]

    def test_mixed_text_and_image(self):
        raw = [
            function_response(
                [
                    {"type": "text", "text": "Here is a screenshot:"},
                    {"type": "image", "data": "base64ImageData", "mimeType": "image/jpeg"},
                ]
            )
        ]

        assert transform(raw) == [
            HEADER,
            TextPart(text="Here is a screenshot:"),
            inline("base64ImageData", "image/jpeg"),
        ]

    @pytest.mark.parametrize(
        "block",
        [
            {"type": "image", "data": "someData", "mimeType": None},
            {"type": "image", "data": None, "mimeType": "image/png"},
            {"type": "audio", "mimeType": "audio/wav"},
            {"type": "video", "data": "someData"},
            {"type": "pdf", "data": 123, "mimeType": "application/pdf"},
            {"type": "image", "data": "", "mimeType": "image/png"},
            {"type": "image", "data": b"AAA", "mimeType": "image/png"},
            {"type": "image", "data": "AAA", "mimeType": b"image/png"},
        ],
    )
    def test_invalid_media(self, block: dict[str, Any]):
        result = transform([function_response([block])])

        assert result == [TextPart(text=INVALID_MEDIA_TEXT)]
        assert not any(isinstance(part, InlineDataPart) for part in result)

    def test_describe_media_adds_informational_line(self):
        raw = [function_response([{"type": "audio", "data": "AAA", "mimeType": "audio/wav"}])]

        assert transform(raw, describe_media=True) == [
            HEADER,
            TextPart(text=f"[{TOOL} returned audio: audio/wav]"),
            inline("AAA", "audio/wav"),
        ]

    def test_snake_case_mime_type_is_accepted(self):
        raw = [function_response([{"type": "image", "data": "AAA", "mime_type": "image/gif"}])]
        assert transform(raw) == [HEADER, inline("AAA", "image/gif")]


class TestResources:
    def test_resource_with_text(self):
        raw = [
            function_response(
                [{"type": "resource", "resource": {"uri": "file:///notes.txt", "text": "File contents here"}}]
            )
        ]

        assert transform(raw) == [TextPart(text="[Resource: file:///notes.txt]\nFile contents here")]

    def test_resource_with_blob(self):
        raw = [
            function_response(
                [
                    {
                        "type": "resource",
                        "resource": {"uri": "file:///doc.pdf", "blob": "base64PdfData", "mimeType": "application/pdf"},
                    }
                ]
            )
        ]

        assert transform(raw) == [HEADER, inline("base64PdfData", "application/pdf")]

    def test_resource_blob_without_mime_type(self):
        raw = [function_response([{"type": "resource", "resource": {"uri": "file:///data.bin", "blob": "AAA"}}])]

        assert transform(raw) == [HEADER, inline("AAA", "application/octet-stream")]

    def test_resource_with_bytes_blob(self):
        raw = [function_response([{"type": "resource", "resource": {"uri": "file:///data.bin", "blob": b"AAA"}}])]
        assert transform(raw) == [TextPart(text="[Unknown content type: resource]")]

    def test_resource_with_only_uri(self):
        raw = [function_response([{"type": "resource", "resource": {"uri": "https://example.com/resource"}}])]

        assert transform(raw) == [TextPart(text="[Resource: https://example.com/resource]")]

    def test_resource_without_uri(self):
        raw = [function_response([{"type": "resource", "resource": {"text": "orphan"}}])]
        assert transform(raw) == [TextPart(text="[Unknown content type: resource]")]

    @pytest.mark.parametrize(
        ("block", "expected"),
        [
            (
                {"type": "resource_link", "uri": "file:///a.md", "title": "A doc", "name": "a.md"},
                "Resource Link: A doc at file:///a.md",
            ),
            ({"type": "resource_link", "uri": "file:///a.md", "name": "a.md"}, "Resource Link: a.md at file:///a.md"),
            ({"type": "resource_link", "uri": "file:///a.md"}, "Resource Link: file:///a.md at file:///a.md"),
        ],
    )
    def test_resource_link(self, block: dict[str, Any], expected: str):
        assert transform([function_response([block])]) == [TextPart(text=expected)]


class TestLegacyText:
    def test_literal_text(self):
        raw = [function_response([{"text": "Simple text response"}])]
        assert transform(raw) == [TextPart(text="Simple text response")]

    def test_json_encoded_block_is_unwrapped(self):
        encoded = json.dumps({"type": "image", "data": "AAA", "mimeType": "image/png"})
        raw = [function_response([{"text": encoded}])]

        assert transform(raw) == [HEADER, inline("AAA", "image/png")]

    def test_json_without_type_is_literal_text(self):
        encoded = json.dumps({"success": True, "details": "executed"})
        raw = [function_response([{"text": encoded}])]

        assert transform(raw) == [TextPart(text=encoded)]

    def test_passthrough_policy_returns_original_response(self):
        raw = [function_response([{"text": "Simple text response"}])]

        result = transform(raw, legacy_text_policy=LegacyTextPolicy.PASSTHROUGH)

        assert result is raw

    def test_passthrough_policy_still_unwraps_encoded_blocks(self):
        encoded = json.dumps({"type": "text", "text": "decoded"})
        raw = [function_response([{"text": encoded}])]

        assert transform(raw, legacy_text_policy="passthrough") == [TextPart(text="decoded")]


class TestErrors:
    def test_error_response(self):
        raw = [function_response([{"type": "text", "text": "not found"}], isError=True)]
        assert transform(raw) == [TextPart(text=f"Error from {TOOL}: not found")]

    def test_error_response_skips_other_blocks(self):
        raw = [
            function_response(
                [
                    {"type": "image", "data": "AAA", "mimeType": "image/png"},
                    {"type": "text", "text": "File not found"},
                    {"type": "text", "text": "second"},
                ],
                isError=True,
            )
        ]

        assert transform(raw) == [TextPart(text=f"Error from {TOOL}: File not found")]

    def test_error_with_null_type_text(self):
        raw = [function_response([{"type": None, "text": "boom"}], isError=True)]
        assert transform(raw) == [TextPart(text=f"Error from {TOOL}: boom")]

    def test_error_without_text(self):
        raw = [function_response([], isError=True)]
        assert transform(raw) == [TextPart(text=f"Error from {TOOL}: Unknown error")]


class TestFallback:
    def test_empty_content_returns_original(self):
        raw = [function_response([])]
        original = copy.deepcopy(raw)

        result = transform(raw)

        assert result is raw
        assert result == original

    def test_empty_response_returns_original(self):
        raw: list[Any] = []
        assert transform(raw) is raw

    def test_inert_items_return_original(self):
        raw = [function_response([None, 42, "loose string", {"no_type": True}])]
        assert transform(raw) is raw

    def test_non_envelope_parts_are_kept_in_place(self):
        raw = [
            {"text": "already a part"},
            function_response([{"type": "text", "text": "transformed"}]),
        ]

        assert transform(raw) == [{"text": "already a part"}, TextPart(text="transformed")]


class TestHeaders:
    def test_only_media_envelope_gets_header(self):
        raw = [
            function_response([{"type": "text", "text": "First response"}]),
            function_response([{"type": "image", "data": "imageData", "mimeType": "image/png"}]),
        ]

        assert transform(raw) == [
            TextPart(text="First response"),
            HEADER,
            inline("imageData", "image/png"),
        ]

    def test_one_header_per_envelope(self):
        raw = [
            function_response([{"type": "image", "data": "a", "mimeType": "image/png"}]),
            function_response([{"type": "image", "data": "b", "mimeType": "image/png"}]),
        ]

        assert transform(raw) == [HEADER, inline("a", "image/png"), HEADER, inline("b", "image/png")]

    def test_invalid_media_does_not_get_header(self):
        raw = [function_response([{"type": "image", "data": None, "mimeType": "image/png"}])]
        assert HEADER not in transform(raw)


class TestUnknown:
    def test_unknown_content_type(self):
        raw = [function_response([{"type": "custom", "data": "someData"}])]
        assert transform(raw) == [TextPart(text="[Unknown content type: custom]")]

    def test_non_string_tag(self):
        raw = [function_response([{"type": 7}])]
        assert transform(raw) == [TextPart(text="[Unknown content type: 7]")]


def test_pydantic_result_is_accepted():
    class CallToolResult(BaseModel):
        content: list[dict[str, Any]]
        isError: bool = False

    raw = CallToolResult(content=[{"type": "image", "data": "AAA", "mimeType": "image/webp"}])

    assert transform(raw) == [HEADER, inline("AAA", "image/webp")]


def test_pydantic_result_with_unserializable_field():
    class Opaque:
        pass

    class CallToolResult(BaseModel):
        model_config = ConfigDict(arbitrary_types_allowed=True)

        content: list[dict[str, Any]]
        meta: Opaque | None = None

    raw = CallToolResult(content=[{"type": "text", "text": "x"}], meta=Opaque())

    assert transform(raw) == [TextPart(text="x")]


def test_transformer_is_stateless():
    transformer = ContentTransformer(TOOL, SERVER)
    media = [function_response([{"type": "image", "data": "AAA", "mimeType": "image/png"}])]
    text = [function_response([{"type": "text", "text": "plain"}])]

    assert transformer.transform(media) == [HEADER, inline("AAA", "image/png")]
    assert transformer.transform(text) == [TextPart(text="plain")]
    assert transformer.transform(media) == [HEADER, inline("AAA", "image/png")]


def test_input_is_not_mutated():
    raw = [
        function_response(
            [
                {"text": json.dumps({"type": "text", "text": "x"})},
                {"type": "resource", "resource": {"uri": "file:///a", "blob": "AAA"}},
            ]
        )
    ]
    original = copy.deepcopy(raw)

    transform(raw)

    assert raw == original

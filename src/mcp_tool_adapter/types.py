"""Content block and output part types used by the MCP tool adapter.

Content blocks arrive from MCP servers loosely typed, so every model here is
validated lazily, one block at a time, by the transformer and the display
summarizer. Output parts are the canonical shapes handed to the model runtime.
"""

from enum import Enum
from typing import Annotated, Any, Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field

INVALID_MEDIA_TEXT = "[Invalid media: missing data or mimeType]"
DEFAULT_BLOB_MIME_TYPE = "application/octet-stream"

MediaType = Literal["image", "audio", "video", "pdf"]
MEDIA_TYPES: tuple[str, ...] = ("image", "audio", "video", "pdf")


class ContentModel(BaseModel):
    """Base class for wire content types. Allows extra fields for forward compatibility."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class TextContent(ContentModel):
    """Text returned by a tool."""

    type: Literal["text"] = "text"
    text: str


class LegacyTextContent(ContentModel):
    """Untyped text wrapper produced by older servers. The text may hold a JSON-encoded block."""

    text: str


class MediaContent(ContentModel):
    """Image, audio, video or PDF data returned by a tool."""

    type: MediaType
    data: Annotated[str, Field(strict=True, min_length=1)]  # base64 encoded
    mime_type: Annotated[str, Field(alias="mimeType", strict=True, min_length=1)]


class ResourceContents(ContentModel):
    """The contents of an embedded resource. Either text or blob may be set."""

    uri: str
    mime_type: Annotated[str | None, Field(alias="mimeType", strict=True)] = None
    text: Annotated[str | None, Field(strict=True)] = None
    blob: Annotated[str | None, Field(strict=True)] = None


class EmbeddedResource(ContentModel):
    """The contents of a resource, embedded into a tool call result."""

    type: Literal["resource"] = "resource"
    resource: ResourceContents


class ResourceLink(ContentModel):
    """A link to a resource the server can provide."""

    type: Literal["resource_link"] = "resource_link"
    uri: str
    name: str | None = None
    title: str | None = None

    @property
    def label(self) -> str:
        return self.title or self.name or self.uri


class ToolResponse(ContentModel):
    """The envelope of a tools/call result."""

    content: list[Any]
    is_error: Annotated[bool | None, Field(alias="isError")] = None


class TextPart(BaseModel):
    """A text part for the model runtime."""

    model_config = ConfigDict(frozen=True)

    text: str


class InlineData(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    data: str
    mime_type: Annotated[str, Field(alias="mimeType")]


class InlineDataPart(BaseModel):
    """A binary part for the model runtime."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    inline_data: Annotated[InlineData, Field(alias="inlineData")]


Part: TypeAlias = TextPart | InlineDataPart


def dump_parts(parts: Any) -> Any:
    """Serialize output parts to their wire shape (`{"text": ...}` / `{"inlineData": ...}`).

    Items that are not output parts, and a response returned untouched by the
    transformer, are passed through unchanged.
    """
    if not isinstance(parts, list):
        return parts
    return [part.model_dump(by_alias=True) if isinstance(part, TextPart | InlineDataPart) else part for part in parts]


class ToolConfirmationOutcome(str, Enum):
    """The user's answer to an MCP tool confirmation prompt."""

    PROCEED_ONCE = "proceed_once"
    PROCEED_ALWAYS_SERVER = "proceed_always_server"
    PROCEED_ALWAYS_TOOL = "proceed_always_tool"
    CANCEL = "cancel"


class LegacyTextPolicy(str, Enum):
    """How an untyped text block that is not a JSON-encoded block is handled.

    `literal` emits the string as a text part. `passthrough` treats the block as
    carrying no content, so a response made only of such blocks is returned to
    the caller untouched.
    """

    LITERAL = "literal"
    PASSTHROUGH = "passthrough"

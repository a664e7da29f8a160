"""Generic chat message schema.

A provider-neutral description of a conversation: role-tagged messages made
of ordered content parts, and the responses (or streamed updates) a chat
client produces for them. Adapters translate these models to and from a
specific provider's wire format.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Roles and finish reasons
# ---------------------------------------------------------------------------


class ChatRole(StrEnum):
    """Well-known message roles.

    ``ChatMessage.role`` is an open string; these are the values every
    client understands.
    """

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class ChatFinishReason(StrEnum):
    """Why the model stopped generating."""

    STOP = "stop"
    LENGTH = "length"
    TOOL_CALLS = "tool_calls"
    CONTENT_FILTER = "content_filter"


# ---------------------------------------------------------------------------
# Content Parts
# ---------------------------------------------------------------------------


class TextContent(BaseModel):
    """Plain text content part."""

    type: Literal["text"] = "text"
    text: str


class DataContent(BaseModel):
    """Inline binary content (images, audio, documents)."""

    type: Literal["data"] = "data"
    data: bytes
    media_type: str


class UriContent(BaseModel):
    """Content referenced by URI rather than carried inline."""

    type: Literal["uri"] = "uri"
    uri: str
    media_type: str


class ReasoningContent(BaseModel):
    """Model reasoning text, kept apart from the visible answer."""

    type: Literal["reasoning"] = "reasoning"
    text: str


class FunctionCallContent(BaseModel):
    """A request from the model to invoke a function."""

    type: Literal["function_call"] = "function_call"
    call_id: str
    name: str
    arguments: dict[str, Any] | None = None


class FunctionResultContent(BaseModel):
    """The result of a function invocation, sent back to the model."""

    type: Literal["function_result"] = "function_result"
    call_id: str
    result: Any = None


ContentPart = Annotated[
    TextContent
    | DataContent
    | UriContent
    | ReasoningContent
    | FunctionCallContent
    | FunctionResultContent,
    Field(discriminator="type"),
]


def _text_of(contents: Iterable[object]) -> str:
    return "".join(part.text for part in contents if isinstance(part, TextContent))


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------


class ChatMessage(BaseModel):
    """A single role-tagged message made of ordered content parts."""

    role: str
    contents: list[ContentPart] = []

    @property
    def text(self) -> str:
        """Concatenated text of all TextContent parts."""
        return _text_of(self.contents)

    @classmethod
    def system(cls, text: str) -> ChatMessage:
        return cls(role=ChatRole.SYSTEM, contents=[TextContent(text=text)])

    @classmethod
    def user(cls, text: str) -> ChatMessage:
        return cls(role=ChatRole.USER, contents=[TextContent(text=text)])

    @classmethod
    def assistant(cls, text: str) -> ChatMessage:
        return cls(role=ChatRole.ASSISTANT, contents=[TextContent(text=text)])

    @classmethod
    def tool(cls, call_id: str, result: Any) -> ChatMessage:
        """Create a tool-role message carrying one function result."""
        return cls(
            role=ChatRole.TOOL,
            contents=[FunctionResultContent(call_id=call_id, result=result)],
        )


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class UsageDetails(BaseModel):
    """Token accounting reported by the provider."""

    input_tokens: int | None = None
    output_tokens: int | None = None
    total_tokens: int | None = None


class ChatResponseUpdate(BaseModel):
    """One incremental piece of a streamed response."""

    role: str | None = None
    contents: list[ContentPart] = []
    finish_reason: ChatFinishReason | None = None
    response_id: str | None = None
    model_id: str | None = None
    usage: UsageDetails | None = None

    @property
    def text(self) -> str:
        return _text_of(self.contents)


class ChatResponse(BaseModel):
    """The complete response to a chat request."""

    messages: list[ChatMessage] = []
    finish_reason: ChatFinishReason | None = None
    response_id: str | None = None
    model_id: str | None = None
    usage: UsageDetails | None = None

    @property
    def text(self) -> str:
        """Concatenated text of every message in the response."""
        return "".join(message.text for message in self.messages)

    @classmethod
    def from_updates(cls, updates: Iterable[ChatResponseUpdate]) -> ChatResponse:
        """Fold a sequence of streamed updates into a single response.

        Consecutive updates with the same role are merged into one message,
        preserving content order. The last reported finish reason and usage
        win; the first reported response and model ids win.
        """
        response = cls()
        for update in updates:
            role = update.role or ChatRole.ASSISTANT
            if response.messages and response.messages[-1].role == role:
                response.messages[-1].contents.extend(update.contents)
            else:
                response.messages.append(ChatMessage(role=role, contents=list(update.contents)))
            if update.finish_reason is not None:
                response.finish_reason = update.finish_reason
            if update.usage is not None:
                response.usage = update.usage
            response.response_id = response.response_id or update.response_id
            response.model_id = response.model_id or update.model_id
        return response

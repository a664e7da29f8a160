"""Response converter — ``generateContent`` responses to chat responses.

The same conversion serves unary responses and each chunk of a stream; a
chunk is simply a partial ``GenerateContentResponse``.
"""

from __future__ import annotations

from gemini_chat.chat.models import (
    ChatFinishReason,
    ChatMessage,
    ChatResponse,
    ChatResponseUpdate,
    ChatRole,
    ContentPart,
    FunctionCallContent,
    TextContent,
    UsageDetails,
)
from gemini_chat.errors import UnexpectedResponseError, UnsupportedFeatureError
from gemini_chat.protocol.models import (
    Candidate,
    Content,
    FinishReason,
    GenerateContentResponse,
    UsageMetadata,
)
from gemini_chat.protocol.values import value_to_object

_FINISH_REASONS: dict[str, ChatFinishReason | None] = {
    FinishReason.FINISH_REASON_UNSPECIFIED: None,
    FinishReason.STOP: ChatFinishReason.STOP,
    FinishReason.MAX_TOKENS: ChatFinishReason.LENGTH,
    FinishReason.SAFETY: ChatFinishReason.CONTENT_FILTER,
    FinishReason.RECITATION: ChatFinishReason.CONTENT_FILTER,
    FinishReason.SPII: ChatFinishReason.CONTENT_FILTER,
    FinishReason.LANGUAGE: ChatFinishReason.CONTENT_FILTER,
    FinishReason.BLOCKLIST: ChatFinishReason.CONTENT_FILTER,
    FinishReason.PROHIBITED_CONTENT: ChatFinishReason.CONTENT_FILTER,
    FinishReason.IMAGE_SAFETY: ChatFinishReason.CONTENT_FILTER,
}

# Finish reasons with no chat equivalent; receiving one fails the call.
_FATAL_FINISH_REASONS: dict[str, str] = {
    FinishReason.MALFORMED_FUNCTION_CALL: "Malformed tool call.",
    FinishReason.UNEXPECTED_TOOL_CALL: "Unexpected tool call.",
    FinishReason.OTHER: "Other finish reason.",
}


def convert_response(response: GenerateContentResponse) -> ChatResponse:
    """Convert a unary ``generateContent`` response."""
    candidate = _single_candidate(response)
    return ChatResponse(
        messages=[
            ChatMessage(
                role=_chat_role(candidate.content),
                contents=_contents(candidate.content),
            )
        ],
        finish_reason=finish_reason(candidate.finish_reason),
        response_id=response.response_id,
        model_id=response.model_version,
        usage=_usage(response.usage_metadata),
    )


def convert_stream_chunk(chunk: GenerateContentResponse) -> ChatResponseUpdate:
    """Convert one chunk of a ``streamGenerateContent`` stream."""
    candidate = _single_candidate(chunk)
    return ChatResponseUpdate(
        role=_chat_role(candidate.content),
        contents=_contents(candidate.content),
        finish_reason=finish_reason(candidate.finish_reason),
        response_id=chunk.response_id,
        model_id=chunk.model_version,
        usage=_usage(chunk.usage_metadata),
    )


def finish_reason(reason: str | None) -> ChatFinishReason | None:
    """Map a provider finish reason; ``None`` means "not finished yet"."""
    if reason is None:
        return None
    if reason in _FATAL_FINISH_REASONS:
        raise UnexpectedResponseError(_FATAL_FINISH_REASONS[reason])
    if reason not in _FINISH_REASONS:
        msg = f"Unexpected finish reason: {reason}"
        raise UnexpectedResponseError(msg)
    return _FINISH_REASONS[reason]


def _single_candidate(response: GenerateContentResponse) -> Candidate:
    if len(response.candidates) != 1:
        msg = f"Unexpected number of candidates: {len(response.candidates)}"
        raise UnexpectedResponseError(msg)
    return response.candidates[0]


def _chat_role(content: Content | None) -> str:
    # A candidate blocked before producing anything carries no content.
    if content is None:
        return ChatRole.ASSISTANT
    if content.role == "user":
        return ChatRole.USER
    if content.role == "model":
        return ChatRole.ASSISTANT
    msg = f"Unexpected role: {content.role}"
    raise UnexpectedResponseError(msg)


def _contents(content: Content | None) -> list[ContentPart]:
    if content is None:
        return []
    result: list[ContentPart] = []
    for part in content.parts:
        kinds = part.kinds
        if len(kinds) != 1:
            msg = f"Unexpected part type: {', '.join(kinds) or 'none'}"
            raise UnexpectedResponseError(msg)
        kind = kinds[0]
        if part.text is not None:
            result.append(TextContent(text=part.text))
        elif part.function_call is not None:
            call = part.function_call
            arguments = {key: value_to_object(value) for key, value in (call.args or {}).items()}
            # No separate call id on the wire; the function name doubles as one.
            result.append(FunctionCallContent(call_id=call.name, name=call.name, arguments=arguments))
        else:
            raise UnsupportedFeatureError("part type", kind)
    return result


def _usage(metadata: UsageMetadata | None) -> UsageDetails | None:
    if metadata is None:
        return None
    return UsageDetails(
        input_tokens=metadata.prompt_token_count,
        output_tokens=metadata.candidates_token_count,
        total_tokens=metadata.total_token_count,
    )

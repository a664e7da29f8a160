"""Gemini adapter — request building, response conversion and the chat client."""

from gemini_chat.adapter.client import GeminiChatClient
from gemini_chat.adapter.request import (
    TOOL_RESULT_NAME,
    box_schema,
    box_value,
    build_request,
)
from gemini_chat.adapter.response import convert_response, convert_stream_chunk, finish_reason

__all__ = [
    "TOOL_RESULT_NAME",
    "GeminiChatClient",
    "box_schema",
    "box_value",
    "build_request",
    "convert_response",
    "convert_stream_chunk",
    "finish_reason",
]

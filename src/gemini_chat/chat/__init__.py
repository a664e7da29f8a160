"""Generic chat schema — messages, options, responses and the client protocol."""

from gemini_chat.chat.client import ChatClient
from gemini_chat.chat.models import (
    ChatFinishReason,
    ChatMessage,
    ChatResponse,
    ChatResponseUpdate,
    ChatRole,
    ContentPart,
    DataContent,
    FunctionCallContent,
    FunctionResultContent,
    ReasoningContent,
    TextContent,
    UriContent,
    UsageDetails,
)
from gemini_chat.chat.options import (
    AITool,
    AutoToolMode,
    ChatOptions,
    CodeInterpreterTool,
    FunctionTool,
    JsonResponseFormat,
    NoneToolMode,
    RequiredToolMode,
    ResponseFormat,
    TextResponseFormat,
    ToolMode,
    WebSearchTool,
)

__all__ = [
    "AITool",
    "AutoToolMode",
    "ChatClient",
    "ChatFinishReason",
    "ChatMessage",
    "ChatOptions",
    "ChatResponse",
    "ChatResponseUpdate",
    "ChatRole",
    "CodeInterpreterTool",
    "ContentPart",
    "DataContent",
    "FunctionCallContent",
    "FunctionResultContent",
    "FunctionTool",
    "JsonResponseFormat",
    "NoneToolMode",
    "ReasoningContent",
    "RequiredToolMode",
    "ResponseFormat",
    "TextContent",
    "TextResponseFormat",
    "ToolMode",
    "UriContent",
    "UsageDetails",
    "WebSearchTool",
]

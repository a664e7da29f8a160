"""Generative Language wire models and protocol-value conversion."""

from gemini_chat.protocol.models import (
    Blob,
    Candidate,
    CodeExecutionResult,
    Content,
    ErrorInfo,
    ExecutableCode,
    FileData,
    FinishReason,
    FunctionCall,
    FunctionCallingConfig,
    FunctionCallingMode,
    FunctionDeclaration,
    FunctionResponse,
    GenerateContentRequest,
    GenerateContentResponse,
    GenerationConfig,
    Part,
    Status,
    Tool,
    ToolConfig,
    UsageMetadata,
)
from gemini_chat.protocol.values import is_struct, json_to_value, object_to_value, value_to_object

__all__ = [
    "Blob",
    "Candidate",
    "CodeExecutionResult",
    "Content",
    "ErrorInfo",
    "ExecutableCode",
    "FileData",
    "FinishReason",
    "FunctionCall",
    "FunctionCallingConfig",
    "FunctionCallingMode",
    "FunctionDeclaration",
    "FunctionResponse",
    "GenerateContentRequest",
    "GenerateContentResponse",
    "GenerationConfig",
    "Part",
    "Status",
    "Tool",
    "ToolConfig",
    "UsageMetadata",
    "is_struct",
    "json_to_value",
    "object_to_value",
    "value_to_object",
]

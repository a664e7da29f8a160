"""Request builder — chat messages and options to a ``generateContent`` request.

Key differences from the generic chat schema:
- Only two turn roles exist: "user" (user and tool messages) and "model"
  (assistant messages). System messages become part of a separate
  system instruction instead of a turn.
- Function results must be objects. Non-object results, and non-object
  declared return schemas, are boxed under ``TOOL_RESULT_NAME``.
- Unset options stay unset; the provider's defaults apply.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from gemini_chat.chat.models import (
    ChatMessage,
    ChatRole,
    ContentPart,
    DataContent,
    FunctionCallContent,
    FunctionResultContent,
    TextContent,
)
from gemini_chat.chat.options import (
    AITool,
    AutoToolMode,
    ChatOptions,
    FunctionTool,
    JsonResponseFormat,
    NoneToolMode,
    RequiredToolMode,
    ResponseFormat,
    TextResponseFormat,
    ToolMode,
)
from gemini_chat.errors import ConfigurationError, InvalidOptionError, UnsupportedFeatureError
from gemini_chat.protocol.models import (
    Blob,
    Content,
    FunctionCall,
    FunctionCallingConfig,
    FunctionCallingMode,
    FunctionDeclaration,
    FunctionResponse,
    GenerateContentRequest,
    GenerationConfig,
    Part,
    Tool,
    ToolConfig,
)
from gemini_chat.protocol.values import is_struct, json_to_value, object_to_value

logger = logging.getLogger(__name__)

TOOL_RESULT_NAME = "result"

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

# Sampling options copied verbatim into GenerationConfig, by field name.
_GENERATION_FIELDS = (
    "temperature",
    "top_p",
    "top_k",
    "frequency_penalty",
    "presence_penalty",
    "max_output_tokens",
)


def build_request(
    messages: Iterable[ChatMessage],
    options: ChatOptions | None,
    default_model_id: str | None,
) -> GenerateContentRequest:
    """Build a ``generateContent`` request from chat messages and options.

    Raises:
        ConfigurationError: No model id in *options* and no default.
        UnsupportedFeatureError: An option, role, tool or content kind this
            adapter does not implement was supplied.
        InvalidOptionError: The seed does not fit the provider's int32 field.
    """
    generation_config = GenerationConfig()
    system_parts: list[Part] = []
    tool_config: ToolConfig | None = None
    tools: list[Tool] = []
    model_id: str | None = None

    if options is not None:
        _reject_unsupported_options(options)
        if options.instructions is not None:
            system_parts.append(Part(text=options.instructions))
        _apply_generation_options(generation_config, options)
        if options.model_id:
            model_id = options.model_id
        if options.tool_mode is not None:
            tool_config = ToolConfig(function_calling_config=_function_calling_config(options.tool_mode))
        for tool in options.tools or []:
            declarations = _function_declarations(tool)
            if declarations:
                tools.append(Tool(function_declarations=declarations))

    model_id = model_id or default_model_id
    if not model_id:
        # The API's own error for a missing model is "Invalid resource field
        # value in the request", so catch it here.
        msg = (
            "Please specify the model id, either in ChatOptions.model_id or as "
            "default_model_id when creating the chat client."
        )
        raise ConfigurationError(msg)

    contents: list[Content] = []
    for message in messages:
        role = _turn_role(message.role)
        parts = [_content_part_to_gemini(part) for part in message.contents]
        if role is None:
            system_parts.extend(parts)
        else:
            contents.append(Content(role=role, parts=parts))

    request = GenerateContentRequest(
        model=model_id,
        contents=contents,
        generation_config=generation_config,
    )
    if system_parts:
        request.system_instruction = Content(parts=system_parts)
    if tool_config is not None:
        request.tool_config = tool_config
    if tools:
        request.tools = tools

    logger.debug(
        "Built request for %s: %d turns, %d system parts, %d tools",
        request.model,
        len(contents),
        len(system_parts),
        len(tools),
    )
    return request


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------


def _reject_unsupported_options(options: ChatOptions) -> None:
    if options.conversation_id is not None:
        raise UnsupportedFeatureError(
            "ChatOptions.conversation_id", "must be None; stateful conversations are not supported"
        )
    if options.allow_multiple_tool_calls is not None:
        raise UnsupportedFeatureError("ChatOptions.allow_multiple_tool_calls")
    if options.raw_representation_factory is not None:
        raise UnsupportedFeatureError("ChatOptions.raw_representation_factory")
    if options.additional_properties is not None:
        raise UnsupportedFeatureError("ChatOptions.additional_properties")


def _apply_generation_options(config: GenerationConfig, options: ChatOptions) -> None:
    for name in _GENERATION_FIELDS:
        value = getattr(options, name)
        if value is not None:
            setattr(config, name, value)
    if options.seed is not None:
        config.seed = _narrow_seed(options.seed)
    if options.stop_sequences is not None:
        config.stop_sequences = list(options.stop_sequences)
    if options.response_format is not None:
        _apply_response_format(config, options.response_format)


def _narrow_seed(seed: int) -> int:
    """The provider's seed is an int32; anything wider is rejected, not truncated."""
    if not INT32_MIN <= seed <= INT32_MAX:
        raise InvalidOptionError("ChatOptions.seed", seed, f"must be within [{INT32_MIN}, {INT32_MAX}]")
    return seed


def _apply_response_format(config: GenerationConfig, response_format: ResponseFormat) -> None:
    if isinstance(response_format, TextResponseFormat):
        config.response_mime_type = "text/plain"
    elif isinstance(response_format, JsonResponseFormat):
        config.response_mime_type = "application/json"
        if response_format.json_schema is not None:
            config.response_json_schema = json_to_value(response_format.json_schema)
    else:
        raise UnsupportedFeatureError("response format", type(response_format).__name__)


def _function_calling_config(tool_mode: ToolMode) -> FunctionCallingConfig:
    if isinstance(tool_mode, AutoToolMode):
        return FunctionCallingConfig(mode=FunctionCallingMode.AUTO)
    if isinstance(tool_mode, NoneToolMode):
        return FunctionCallingConfig(mode=FunctionCallingMode.NONE)
    if isinstance(tool_mode, RequiredToolMode):
        if tool_mode.function_name is None:
            return FunctionCallingConfig(mode=FunctionCallingMode.ANY)
        return FunctionCallingConfig(
            mode=FunctionCallingMode.ANY,
            allowed_function_names=[tool_mode.function_name],
        )
    raise UnsupportedFeatureError("tool mode", type(tool_mode).__name__)


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


def _function_declarations(tool: AITool) -> list[FunctionDeclaration]:
    """Declarations contributed by one tool; hosted tools are not supported yet."""
    if not isinstance(tool, FunctionTool):
        # TODO: map WebSearchTool to google_search and CodeInterpreterTool to code_execution.
        raise UnsupportedFeatureError("tool type", type(tool).__name__)

    if tool.additional_properties:
        raise UnsupportedFeatureError("FunctionTool.additional_properties", tool.name)

    declaration = FunctionDeclaration(name=tool.name)
    if tool.description:
        declaration.description = tool.description
    if tool.json_schema:
        declaration.parameters_json_schema = json_to_value(tool.json_schema)
    if tool.return_json_schema is not None:
        declaration.response_json_schema = box_schema(json_to_value(tool.return_json_schema))
    return [declaration]


def box_schema(schema: Any) -> Any:
    """Wrap a non-object schema as ``{"result": schema}``.

    Function responses must be objects, so a function returning e.g. a string
    declares an object with a single required ``result`` property instead.
    """
    if is_struct(schema) and schema.get("type") == "object":
        return schema
    return {
        "type": "object",
        "properties": {TOOL_RESULT_NAME: schema},
        "required": [TOOL_RESULT_NAME],
    }


def box_value(value: Any) -> dict[str, Any]:
    """Return *value* if it is an object, else ``{"result": value}``."""
    if is_struct(value):
        return value
    return {TOOL_RESULT_NAME: value}


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------


def _turn_role(role: str) -> str | None:
    """Map a chat role to a turn role; ``None`` means "system instruction"."""
    if role in (ChatRole.USER, ChatRole.TOOL):
        return "user"
    if role == ChatRole.ASSISTANT:
        return "model"
    if role == ChatRole.SYSTEM:
        return None
    raise UnsupportedFeatureError("chat role", str(role))


def _content_part_to_gemini(part: ContentPart) -> Part:
    if isinstance(part, TextContent):
        return Part(text=part.text)
    if isinstance(part, DataContent):
        return Part(inline_data=Blob(mime_type=part.media_type, data=part.data))
    if isinstance(part, FunctionCallContent):
        call = FunctionCall(name=part.name)
        if part.arguments is not None:
            call.args = {key: object_to_value(value) for key, value in part.arguments.items()}
        return Part(function_call=call)
    if isinstance(part, FunctionResultContent):
        return Part(
            function_response=FunctionResponse(
                name=part.call_id,
                response=box_value(object_to_value(part.result)),
            )
        )
    raise UnsupportedFeatureError("content type", type(part).__name__)

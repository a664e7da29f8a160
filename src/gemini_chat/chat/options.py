"""Chat options — per-request model, sampling, format and tool settings.

Every field defaults to ``None``, meaning "leave the provider default in
place". Clients must not substitute their own defaults for unset fields.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Literal

from pydantic import BaseModel

# ---------------------------------------------------------------------------
# Response formats
# ---------------------------------------------------------------------------


class TextResponseFormat(BaseModel):
    """Ask the model for free-form text."""

    type: Literal["text"] = "text"


class JsonResponseFormat(BaseModel):
    """Ask the model for JSON, optionally constrained by a JSON Schema."""

    type: Literal["json"] = "json"
    json_schema: dict[str, Any] | None = None
    schema_name: str | None = None
    schema_description: str | None = None

    @classmethod
    def with_schema(cls, schema: dict[str, Any], name: str | None = None) -> JsonResponseFormat:
        return cls(json_schema=schema, schema_name=name)


ResponseFormat = TextResponseFormat | JsonResponseFormat


# ---------------------------------------------------------------------------
# Tool modes
# ---------------------------------------------------------------------------


class AutoToolMode(BaseModel):
    """The model decides whether to call a tool."""

    type: Literal["auto"] = "auto"


class NoneToolMode(BaseModel):
    """The model must not call any tool."""

    type: Literal["none"] = "none"


class RequiredToolMode(BaseModel):
    """The model must call a tool; optionally a specific one."""

    type: Literal["required"] = "required"
    function_name: str | None = None


ToolMode = AutoToolMode | NoneToolMode | RequiredToolMode


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


class FunctionTool(BaseModel):
    """A callable function the model may invoke.

    ``json_schema`` describes the parameters object; an empty dict means the
    function takes no parameters. ``return_json_schema`` describes the value
    the function returns, if known.
    """

    type: Literal["function"] = "function"
    name: str
    description: str = ""
    json_schema: dict[str, Any] = {}
    return_json_schema: dict[str, Any] | None = None
    additional_properties: dict[str, Any] = {}


class WebSearchTool(BaseModel):
    """A provider-hosted web search tool."""

    type: Literal["web_search"] = "web_search"


class CodeInterpreterTool(BaseModel):
    """A provider-hosted code execution tool."""

    type: Literal["code_interpreter"] = "code_interpreter"


AITool = FunctionTool | WebSearchTool | CodeInterpreterTool


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------


class ChatOptions(BaseModel):
    """Optional settings for a single chat request."""

    model_config = {"arbitrary_types_allowed": True, "protected_namespaces": ()}

    model_id: str | None = None
    instructions: str | None = None

    temperature: float | None = None
    top_p: float | None = None
    top_k: int | None = None
    frequency_penalty: float | None = None
    presence_penalty: float | None = None
    seed: int | None = None
    max_output_tokens: int | None = None
    stop_sequences: list[str] | None = None

    response_format: ResponseFormat | None = None
    tools: list[AITool] | None = None
    tool_mode: ToolMode | None = None
    allow_multiple_tool_calls: bool | None = None

    conversation_id: str | None = None
    raw_representation_factory: Callable[[Any], Any] | None = None
    additional_properties: dict[str, Any] | None = None

"""Generative Language (v1beta) wire models.

Pydantic mirrors of the ``generateContent`` request and response messages.
Field names are snake_case in Python and camelCase on the wire. Fields that
were never assigned are left out of the serialized payload, which is how the
API distinguishes "not set" from an explicit value.
"""

from __future__ import annotations

import base64
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, field_serializer, field_validator
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "protected_namespaces": (),
    }


# ---------------------------------------------------------------------------
# Content
# ---------------------------------------------------------------------------


class Blob(_WireModel):
    """Raw bytes with their media type; base64 on the wire."""

    mime_type: str
    data: bytes

    @field_validator("data", mode="before")
    @classmethod
    def _decode_base64(cls, value: Any) -> Any:
        if isinstance(value, str):
            return base64.b64decode(value)
        return value

    @field_serializer("data", when_used="json")
    def _encode_base64(self, value: bytes) -> str:
        return base64.b64encode(value).decode("ascii")


class FileData(_WireModel):
    """A reference to previously uploaded file content."""

    mime_type: str | None = None
    file_uri: str


class FunctionCall(_WireModel):
    name: str
    args: dict[str, Any] | None = None


class FunctionResponse(_WireModel):
    name: str
    response: dict[str, Any] = {}


class ExecutableCode(_WireModel):
    language: str = "PYTHON"
    code: str = ""


class CodeExecutionResult(_WireModel):
    outcome: str = "OUTCOME_UNSPECIFIED"
    output: str | None = None


_PART_DATA_FIELDS = (
    "text",
    "inline_data",
    "function_call",
    "function_response",
    "file_data",
    "executable_code",
    "code_execution_result",
)


class Part(_WireModel):
    """A single piece of content. Exactly one data field is expected to be set."""

    text: str | None = None
    inline_data: Blob | None = None
    function_call: FunctionCall | None = None
    function_response: FunctionResponse | None = None
    file_data: FileData | None = None
    executable_code: ExecutableCode | None = None
    code_execution_result: CodeExecutionResult | None = None
    thought: bool | None = None

    @property
    def kinds(self) -> list[str]:
        """Names of the data fields that are set, in declaration order."""
        return [name for name in _PART_DATA_FIELDS if getattr(self, name) is not None]


class Content(_WireModel):
    """Role-tagged, ordered list of parts. ``role`` is "user" or "model"."""

    role: str | None = None
    parts: list[Part] = []


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------


class GenerationConfig(_WireModel):
    stop_sequences: list[str] | None = None
    response_mime_type: str | None = None
    response_json_schema: Any = None
    candidate_count: int | None = None
    max_output_tokens: int | None = None
    temperature: float | None = None
    top_p: float | None = None
    top_k: int | None = None
    seed: int | None = None
    presence_penalty: float | None = None
    frequency_penalty: float | None = None


class FunctionDeclaration(_WireModel):
    name: str
    description: str | None = None
    parameters_json_schema: Any = None
    response_json_schema: Any = None


class Tool(_WireModel):
    function_declarations: list[FunctionDeclaration] = []


class FunctionCallingMode(StrEnum):
    MODE_UNSPECIFIED = "MODE_UNSPECIFIED"
    AUTO = "AUTO"
    ANY = "ANY"
    NONE = "NONE"
    VALIDATED = "VALIDATED"


class FunctionCallingConfig(_WireModel):
    mode: FunctionCallingMode | None = None
    allowed_function_names: list[str] | None = None


class ToolConfig(_WireModel):
    function_calling_config: FunctionCallingConfig | None = None


class GenerateContentRequest(_WireModel):
    """A single ``generateContent`` call.

    ``model`` is the model id as the caller gave it; it travels in the URL
    (qualified as ``models/<id>`` there when bare), everything else in the body.
    """

    model: str = ""
    contents: list[Content] = []
    system_instruction: Content | None = None
    generation_config: GenerationConfig | None = None
    tool_config: ToolConfig | None = None
    tools: list[Tool] = []

    def to_wire(self) -> dict[str, Any]:
        """Serialize the request body, omitting fields that were never set."""
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude_unset=True,
            exclude={"model"},
        )


# ---------------------------------------------------------------------------
# Response
# ---------------------------------------------------------------------------


class FinishReason(StrEnum):
    FINISH_REASON_UNSPECIFIED = "FINISH_REASON_UNSPECIFIED"
    STOP = "STOP"
    MAX_TOKENS = "MAX_TOKENS"
    SAFETY = "SAFETY"
    RECITATION = "RECITATION"
    LANGUAGE = "LANGUAGE"
    OTHER = "OTHER"
    BLOCKLIST = "BLOCKLIST"
    PROHIBITED_CONTENT = "PROHIBITED_CONTENT"
    SPII = "SPII"
    MALFORMED_FUNCTION_CALL = "MALFORMED_FUNCTION_CALL"
    IMAGE_SAFETY = "IMAGE_SAFETY"
    UNEXPECTED_TOOL_CALL = "UNEXPECTED_TOOL_CALL"


class Candidate(_WireModel):
    content: Content | None = None
    # Kept as a string so values newer than FinishReason still parse.
    finish_reason: str | None = None
    index: int | None = None


class UsageMetadata(_WireModel):
    prompt_token_count: int | None = None
    candidates_token_count: int | None = None
    total_token_count: int | None = None


class GenerateContentResponse(_WireModel):
    candidates: list[Candidate] = []
    usage_metadata: UsageMetadata | None = None
    model_version: str | None = None
    response_id: str | None = None


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class ErrorInfo(_WireModel):
    """``google.rpc.ErrorInfo`` — the machine-readable cause of a failure."""

    reason: str = ""
    domain: str = ""
    metadata: dict[str, str] = {}


class Status(_WireModel):
    """``google.rpc.Status`` as returned in the ``error`` member of a failed call."""

    code: int = 0
    message: str = ""
    status: str = ""
    details: list[dict[str, Any]] = []

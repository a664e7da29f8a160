"""Tests for converting generateContent responses and stream chunks."""

from typing import Any

import pytest

from gemini_chat.adapter.response import convert_response, convert_stream_chunk, finish_reason
from gemini_chat.chat.models import ChatFinishReason, FunctionCallContent, TextContent
from gemini_chat.errors import UnexpectedResponseError, UnsupportedFeatureError
from gemini_chat.protocol.models import GenerateContentResponse


def _response(
    parts: list[dict[str, Any]] | None = None,
    finish: str | None = "STOP",
    role: str = "model",
    **extra: Any,
) -> GenerateContentResponse:
    candidate: dict[str, Any] = {"content": {"role": role, "parts": parts or [{"text": "Hello!"}]}}
    if finish is not None:
        candidate["finishReason"] = finish
    return GenerateContentResponse.model_validate({"candidates": [candidate], **extra})


class TestConvertResponse:
    def test_text_response(self) -> None:
        response = convert_response(_response())
        assert response.finish_reason == ChatFinishReason.STOP
        assert len(response.messages) == 1
        assert response.messages[0].role == "assistant"
        assert response.text == "Hello!"

    def test_metadata(self) -> None:
        raw = _response(
            responseId="resp-1",
            modelVersion="gemini-2.5-flash-lite",
            usageMetadata={"promptTokenCount": 4, "candidatesTokenCount": 2, "totalTokenCount": 6},
        )
        response = convert_response(raw)
        assert response.response_id == "resp-1"
        assert response.model_id == "gemini-2.5-flash-lite"
        assert response.usage is not None
        assert response.usage.input_tokens == 4
        assert response.usage.output_tokens == 2
        assert response.usage.total_tokens == 6

    def test_no_usage(self) -> None:
        assert convert_response(_response()).usage is None

    def test_parts_in_order(self) -> None:
        raw = _response(
            [
                {"text": "Let me check."},
                {"functionCall": {"name": "get_weather", "args": {"city": "Oslo", "units": ["c"]}}},
                {"text": "Done."},
            ]
        )
        contents = convert_response(raw).messages[0].contents
        assert isinstance(contents[0], TextContent)
        assert isinstance(contents[1], FunctionCallContent)
        assert isinstance(contents[2], TextContent)
        call = contents[1]
        assert call.name == "get_weather"
        assert call.call_id == "get_weather"
        assert call.arguments == {"city": "Oslo", "units": ["c"]}

    def test_function_call_without_args(self) -> None:
        raw = _response([{"functionCall": {"name": "now"}}])
        call = convert_response(raw).messages[0].contents[0]
        assert isinstance(call, FunctionCallContent)
        assert call.arguments == {}

    def test_user_role(self) -> None:
        assert convert_response(_response(role="user")).messages[0].role == "user"

    def test_unexpected_role(self) -> None:
        with pytest.raises(UnexpectedResponseError, match="Unexpected role: system"):
            convert_response(_response(role="system"))

    def test_missing_content(self) -> None:
        raw = GenerateContentResponse.model_validate({"candidates": [{"finishReason": "SAFETY"}]})
        response = convert_response(raw)
        assert response.finish_reason == ChatFinishReason.CONTENT_FILTER
        assert response.messages[0].role == "assistant"
        assert response.messages[0].contents == []

    @pytest.mark.parametrize("count", [0, 2])
    def test_candidate_count_must_be_one(self, count: int) -> None:
        candidate = {"content": {"role": "model", "parts": [{"text": "x"}]}, "finishReason": "STOP"}
        raw = GenerateContentResponse.model_validate({"candidates": [candidate] * count})
        with pytest.raises(UnexpectedResponseError, match=f"Unexpected number of candidates: {count}"):
            convert_response(raw)

    @pytest.mark.parametrize(
        ("part", "kind"),
        [
            ({"inlineData": {"mimeType": "image/png", "data": "aGk="}}, "inline_data"),
            ({"fileData": {"fileUri": "gs://b/f"}}, "file_data"),
            ({"functionResponse": {"name": "f", "response": {}}}, "function_response"),
            ({"executableCode": {"language": "PYTHON", "code": "print(1)"}}, "executable_code"),
            ({"codeExecutionResult": {"outcome": "OUTCOME_OK"}}, "code_execution_result"),
        ],
    )
    def test_unsupported_parts(self, part: dict[str, Any], kind: str) -> None:
        with pytest.raises(UnsupportedFeatureError, match=kind):
            convert_response(_response([part]))

    def test_empty_part(self) -> None:
        with pytest.raises(UnexpectedResponseError, match="none"):
            convert_response(_response([{}]))


class TestFinishReason:
    @pytest.mark.parametrize(
        ("reason", "expected"),
        [
            ("STOP", ChatFinishReason.STOP),
            ("MAX_TOKENS", ChatFinishReason.LENGTH),
            ("SAFETY", ChatFinishReason.CONTENT_FILTER),
            ("RECITATION", ChatFinishReason.CONTENT_FILTER),
            ("SPII", ChatFinishReason.CONTENT_FILTER),
            ("LANGUAGE", ChatFinishReason.CONTENT_FILTER),
            ("BLOCKLIST", ChatFinishReason.CONTENT_FILTER),
            ("PROHIBITED_CONTENT", ChatFinishReason.CONTENT_FILTER),
            ("IMAGE_SAFETY", ChatFinishReason.CONTENT_FILTER),
            ("FINISH_REASON_UNSPECIFIED", None),
            (None, None),
        ],
    )
    def test_mapping(self, reason: str | None, expected: ChatFinishReason | None) -> None:
        assert finish_reason(reason) == expected

    @pytest.mark.parametrize(
        ("reason", "message"),
        [
            ("MALFORMED_FUNCTION_CALL", "Malformed tool call"),
            ("UNEXPECTED_TOOL_CALL", "Unexpected tool call"),
            ("OTHER", "Other finish reason"),
            ("SOMETHING_NEW", "Unexpected finish reason: SOMETHING_NEW"),
        ],
    )
    def test_fatal(self, reason: str, message: str) -> None:
        with pytest.raises(UnexpectedResponseError, match=message):
            finish_reason(reason)

    def test_fatal_reason_fails_conversion(self) -> None:
        with pytest.raises(UnexpectedResponseError):
            convert_response(_response(finish="MALFORMED_FUNCTION_CALL"))


class TestConvertStreamChunk:
    def test_mid_stream_chunk(self) -> None:
        update = convert_stream_chunk(_response([{"text": "Hel"}], finish=None, responseId="r-1"))
        assert update.role == "assistant"
        assert update.text == "Hel"
        assert update.finish_reason is None
        assert update.response_id == "r-1"

    def test_final_chunk(self) -> None:
        update = convert_stream_chunk(_response([{"text": "lo"}], finish="MAX_TOKENS"))
        assert update.finish_reason == ChatFinishReason.LENGTH

    def test_chunk_candidate_count(self) -> None:
        with pytest.raises(UnexpectedResponseError):
            convert_stream_chunk(GenerateContentResponse.model_validate({"candidates": []}))

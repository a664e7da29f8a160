"""Tests for decoding structured error details from failed calls."""

from typing import Any

import httpx

from gemini_chat.errors import ProviderError
from gemini_chat.transport.errors import ERROR_INFO_TYPE, decode_error_status, provider_error_from


def _status_error(status_code: int, **kwargs: Any) -> httpx.HTTPStatusError:
    request = httpx.Request("POST", "https://example.test/v1beta/models/m1:generateContent")
    response = httpx.Response(status_code, request=request, **kwargs)
    return httpx.HTTPStatusError("failed", request=request, response=response)


def _error_body(*details: dict[str, Any]) -> dict[str, Any]:
    return {
        "error": {
            "code": 429,
            "message": "Resource has been exhausted",
            "status": "RESOURCE_EXHAUSTED",
            "details": list(details),
        }
    }


class TestDecodeErrorStatus:
    def test_status(self) -> None:
        response = httpx.Response(429, json=_error_body())
        status = decode_error_status(response)
        assert status is not None
        assert status.code == 429
        assert status.status == "RESOURCE_EXHAUSTED"

    def test_not_json(self) -> None:
        assert decode_error_status(httpx.Response(502, text="<html>Bad Gateway</html>")) is None

    def test_no_error_member(self) -> None:
        assert decode_error_status(httpx.Response(400, json={"message": "nope"})) is None


class TestProviderErrorFrom:
    def test_error_info_decoded(self) -> None:
        exc = _status_error(
            429,
            json=_error_body(
                {"@type": "type.googleapis.com/google.rpc.Help", "links": []},
                {
                    "@type": ERROR_INFO_TYPE,
                    "reason": "RATE_LIMIT_EXCEEDED",
                    "domain": "googleapis.com",
                    "metadata": {"quota_limit": "GenerateRequestsPerMinute"},
                },
            ),
        )

        error = provider_error_from(exc)

        assert isinstance(error, ProviderError)
        assert error.error_info.reason == "RATE_LIMIT_EXCEEDED"
        assert error.error_info.metadata == {"quota_limit": "GenerateRequestsPerMinute"}
        assert error.status is not None
        assert error.status.message == "Resource has been exhausted"
        assert "RATE_LIMIT_EXCEEDED" in str(error)
        assert "domain=googleapis.com" in str(error)

    def test_other_details_only(self) -> None:
        exc = _status_error(400, json=_error_body({"@type": "type.googleapis.com/google.rpc.BadRequest"}))
        assert provider_error_from(exc) is None

    def test_no_body(self) -> None:
        assert provider_error_from(_status_error(503)) is None

    def test_malformed_error_info(self) -> None:
        exc = _status_error(
            429,
            json=_error_body({"@type": ERROR_INFO_TYPE, "reason": "RATE_LIMIT_EXCEEDED", "metadata": {"limit": 60}}),
        )
        assert provider_error_from(exc) is None

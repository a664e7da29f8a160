"""Tests for GenerativeServiceClientBuilder and TransportConfig."""

import httpx
import pytest
from pydantic import ValidationError

from gemini_chat.protocol.models import Content, GenerateContentRequest, Part
from gemini_chat.transport.builder import (
    API_KEY_HEADER,
    QUOTA_PROJECT_HEADER,
    GenerativeServiceClientBuilder,
)
from gemini_chat.transport.config import TransportConfig


def _ok(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"candidates": []})


def _request() -> GenerateContentRequest:
    return GenerateContentRequest(model="models/m1", contents=[Content(role="user", parts=[Part(text="x")])])


class TestTransportConfig:
    def test_defaults(self) -> None:
        config = TransportConfig()
        assert config.base_url == "https://generativelanguage.googleapis.com/v1beta"
        assert config.api_key is None
        assert config.timeout == 60.0

    def test_bare_host_gets_https(self) -> None:
        config = TransportConfig(endpoint="generativelanguage.googleapis.com:443")
        assert config.endpoint == "https://generativelanguage.googleapis.com:443"

    def test_trailing_slash_stripped(self) -> None:
        config = TransportConfig(endpoint="http://localhost:8080/", api_version="v1")
        assert config.base_url == "http://localhost:8080/v1"

    def test_invalid_timeout(self) -> None:
        with pytest.raises(ValidationError):
            TransportConfig(timeout="soon")  # type: ignore[arg-type]

    def test_unknown_setting_rejected(self) -> None:
        with pytest.raises(ValidationError, match="apikey"):
            TransportConfig(apikey="secret")  # type: ignore[call-arg]


class TestBuilder:
    def test_headers_without_credentials(self) -> None:
        assert GenerativeServiceClientBuilder().headers() == {}

    def test_headers_with_credentials(self) -> None:
        builder = GenerativeServiceClientBuilder(api_key="k", quota_project="p", headers={"x-extra": "1"})
        assert builder.headers() == {
            "x-extra": "1",
            API_KEY_HEADER: "k",
            QUOTA_PROJECT_HEADER: "p",
        }

    def test_misspelled_setting_rejected(self) -> None:
        with pytest.raises(ValidationError, match="apikey"):
            GenerativeServiceClientBuilder(apikey="secret")

    def test_settings_override_config(self) -> None:
        config = TransportConfig(api_key="old", endpoint="http://a")
        builder = GenerativeServiceClientBuilder(config, api_key="new")
        assert builder.api_key == "new"
        assert builder.endpoint == "http://a"

    def test_property_setters(self) -> None:
        builder = GenerativeServiceClientBuilder()
        builder.endpoint = "localhost:9000"
        builder.api_key = "k"
        builder.quota_project = "proj"
        assert builder.endpoint == "https://localhost:9000"
        assert builder.config.api_key == "k"
        assert builder.config.quota_project == "proj"

    async def test_api_key_header_on_every_call(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return _ok(request)

        builder = GenerativeServiceClientBuilder(api_key="secret", transport=httpx.MockTransport(handler))
        async with builder.build() as service:
            await service.generate_content(_request())
            await service.generate_content(_request())

        assert [r.headers[API_KEY_HEADER] for r in seen] == ["secret", "secret"]

    async def test_no_api_key_header_when_unset(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return _ok(request)

        builder = GenerativeServiceClientBuilder(transport=httpx.MockTransport(handler))
        async with builder.build() as service:
            await service.generate_content(_request())

        assert API_KEY_HEADER not in seen[0].headers

    async def test_interceptor_sees_each_request(self) -> None:
        intercepted: list[str] = []

        async def interceptor(request: httpx.Request) -> None:
            intercepted.append(request.url.path)
            request.headers["x-trace"] = "t-1"

        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if request.url.path.endswith(":streamGenerateContent"):
                return httpx.Response(200, content=b"")
            return _ok(request)

        builder = GenerativeServiceClientBuilder(
            api_key="k",
            interceptor=interceptor,
            transport=httpx.MockTransport(handler),
        )
        async with builder.build() as service:
            await service.generate_content(_request())
            async for _ in service.stream_generate_content(_request()):
                pass

        assert intercepted == [
            "/v1beta/models/m1:generateContent",
            "/v1beta/models/m1:streamGenerateContent",
        ]
        assert all(r.headers["x-trace"] == "t-1" for r in seen)

    def test_build_returns_independent_clients(self) -> None:
        builder = GenerativeServiceClientBuilder()
        assert builder.build() is not builder.build()

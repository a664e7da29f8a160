"""Tests for OpenTelemetry tracing helpers."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from opentelemetry import trace

from gemini_chat.adapter.client import GeminiChatClient
from gemini_chat.chat.models import ChatMessage
from gemini_chat.protocol.models import GenerateContentResponse
from gemini_chat.utils.telemetry import ATTR_FINISH_REASON, ATTR_MODEL, configure_telemetry, get_tracer


class _OneShotService:
    async def generate_content(self, request: object) -> GenerateContentResponse:
        return GenerateContentResponse.model_validate(
            {"candidates": [{"content": {"role": "model", "parts": [{"text": "hi"}]}, "finishReason": "STOP"}]}
        )

    async def stream_generate_content(self, request: object):  # type: ignore[no-untyped-def]
        yield await self.generate_content(request)


class TestGetTracer:
    def test_returns_tracer(self) -> None:
        assert isinstance(get_tracer("test.module"), trace.Tracer)
        assert isinstance(get_tracer(), trace.Tracer)

    def test_noop_span(self) -> None:
        with get_tracer("test.noop").start_as_current_span("test") as span:
            span.set_attribute(ATTR_MODEL, "models/m1")


class TestConfigureTelemetry:
    def test_raises_without_sdk(self) -> None:
        with patch.dict("sys.modules", {"opentelemetry.sdk.resources": None}):
            with pytest.raises(ImportError, match="opentelemetry-sdk"):
                configure_telemetry()

    def test_otlp_raises_without_exporter(self) -> None:
        pytest.importorskip("opentelemetry.sdk.trace")
        with patch.dict(
            "sys.modules",
            {"opentelemetry.exporter.otlp.proto.grpc.trace_exporter": None},
        ):
            with pytest.raises(ImportError, match="opentelemetry-exporter-otlp"):
                configure_telemetry(otlp_endpoint="http://localhost:4317", set_global=False)

    async def test_client_spans_exported(self) -> None:
        pytest.importorskip("opentelemetry.sdk.trace")
        from opentelemetry.sdk.trace.export import SimpleSpanProcessor
        from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

        provider = configure_telemetry(service_name="test-svc", set_global=False)
        exporter = InMemorySpanExporter()
        provider.add_span_processor(SimpleSpanProcessor(exporter))

        with patch("gemini_chat.adapter.client._tracer", provider.get_tracer("test")):
            client = GeminiChatClient(_OneShotService(), "m1")  # type: ignore[arg-type]
            await client.get_response([ChatMessage.user("hi")])
            async for _ in client.get_streaming_response([ChatMessage.user("hi")]):
                pass

        spans = exporter.get_finished_spans()
        assert [s.name for s in spans] == ["chat.get_response", "chat.get_streaming_response"]
        assert all(s.attributes[ATTR_MODEL] == "m1" for s in spans)  # type: ignore[index]
        assert all(s.attributes[ATTR_FINISH_REASON] == "stop" for s in spans)  # type: ignore[index]
        assert spans[0].resource.attributes["service.name"] == "test-svc"
        provider.shutdown()

"""OpenTelemetry tracing helpers.

A thin wrapper around the OpenTelemetry API so the rest of the package can
call ``get_tracer()`` without caring whether the SDK is installed. Without
a configured SDK the API hands out no-op tracers.

Usage::

    from gemini_chat.utils.telemetry import get_tracer

    _tracer = get_tracer(__name__)

    with _tracer.start_as_current_span("chat.get_response") as span:
        span.set_attribute(ATTR_MODEL, "models/gemini-2.5-flash")

To export spans, call :func:`configure_telemetry` once at startup
(requires the ``otel`` extra: ``pip install gemini-chat[otel]``).
"""

from __future__ import annotations

from typing import Any

from opentelemetry import trace

# ---------------------------------------------------------------------------
# Span attribute keys
# ---------------------------------------------------------------------------

ATTR_MODEL = "gemini_chat.model"
ATTR_STREAMING = "gemini_chat.streaming"
ATTR_TURNS = "gemini_chat.turns"
ATTR_CHUNKS = "gemini_chat.chunks"
ATTR_FINISH_REASON = "gemini_chat.finish_reason"
ATTR_TOKENS_INPUT = "gemini_chat.tokens.input"
ATTR_TOKENS_OUTPUT = "gemini_chat.tokens.output"
ATTR_TOKENS_TOTAL = "gemini_chat.tokens.total"
ATTR_ERROR_REASON = "gemini_chat.error.reason"

_INSTRUMENTATION_NAME = "gemini_chat"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return a :class:`~opentelemetry.trace.Tracer` for *name*."""
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(
    *,
    service_name: str = "gemini-chat",
    export_to_console: bool = False,
    otlp_endpoint: str | None = None,
    set_global: bool = True,
) -> Any:
    """Install a ``TracerProvider`` exporting the adapter's spans.

    Requires the ``otel`` extra. Spans go to stdout when
    *export_to_console* is set and to an OTLP/gRPC collector when
    *otlp_endpoint* is given; both may be enabled at once.

    Returns the configured provider so callers can ``shutdown()`` it to
    flush pending spans. With ``set_global=False`` the provider is not
    registered globally; pass it to ``trace.get_tracer`` explicitly.

    Raises
    ------
    ImportError
        If ``opentelemetry-sdk`` (or, for OTLP, the exporter) is missing.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
            BatchSpanProcessor,
            ConsoleSpanExporter,
            SimpleSpanProcessor,
        )
    except ImportError as exc:
        msg = "configure_telemetry() needs opentelemetry-sdk: pip install gemini-chat[otel]"
        raise ImportError(msg) from exc

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    if export_to_console:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
    if otlp_endpoint:
        try:
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # pyright: ignore[reportMissingImports]
                OTLPSpanExporter,
            )
        except ImportError as exc:
            msg = "OTLP export needs opentelemetry-exporter-otlp: pip install gemini-chat[otel]"
            raise ImportError(msg) from exc
        provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint)))

    if set_global:
        trace.set_tracer_provider(provider)
    return provider

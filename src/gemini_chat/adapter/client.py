"""GeminiChatClient — the generic chat contract over a GenerativeService.

The client is stateless apart from its transport handle and default model
id, so one instance can serve any number of concurrent calls.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Iterable
from contextlib import aclosing
from typing import Any

import httpx
from opentelemetry.trace import Span

from gemini_chat.adapter.request import build_request
from gemini_chat.adapter.response import convert_response, convert_stream_chunk
from gemini_chat.chat.models import (
    ChatFinishReason,
    ChatMessage,
    ChatResponse,
    ChatResponseUpdate,
    UsageDetails,
)
from gemini_chat.chat.options import ChatOptions
from gemini_chat.errors import ProviderError
from gemini_chat.transport.builder import GenerativeServiceClientBuilder
from gemini_chat.transport.client import GenerativeService
from gemini_chat.transport.errors import provider_error_from
from gemini_chat.utils.telemetry import (
    ATTR_CHUNKS,
    ATTR_ERROR_REASON,
    ATTR_FINISH_REASON,
    ATTR_MODEL,
    ATTR_STREAMING,
    ATTR_TOKENS_INPUT,
    ATTR_TOKENS_OUTPUT,
    ATTR_TOKENS_TOTAL,
    ATTR_TURNS,
    get_tracer,
)

logger = logging.getLogger(__name__)

_tracer = get_tracer(__name__)


class GeminiChatClient:
    """Chat client for Gemini models.

    Satisfies the :class:`~gemini_chat.chat.client.ChatClient` protocol.

    Usage::

        builder = GenerativeServiceClientBuilder(api_key="...")
        async with GeminiChatClient(builder, "models/gemini-2.5-flash-lite") as client:
            response = await client.get_response([ChatMessage.user("Say hi.")])
            print(response.text)

    *service* is either a builder, from which the client builds (and then
    owns) its transport, or an existing :class:`GenerativeService`, which
    the caller keeps ownership of.
    """

    def __init__(
        self,
        service: GenerativeServiceClientBuilder | GenerativeService,
        default_model_id: str | None = None,
    ) -> None:
        if isinstance(service, GenerativeServiceClientBuilder):
            self._service: GenerativeService = service.build()
            self._owns_service = True
        else:
            self._service = service
            self._owns_service = False
        self._default_model_id = default_model_id

    @property
    def default_model_id(self) -> str | None:
        return self._default_model_id

    async def __aenter__(self) -> GeminiChatClient:
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the transport if this client built it."""
        aclose = getattr(self._service, "aclose", None)
        if self._owns_service and aclose is not None:
            await aclose()

    async def get_response(
        self,
        messages: Iterable[ChatMessage],
        options: ChatOptions | None = None,
    ) -> ChatResponse:
        """Send *messages* and return the model's complete response."""
        with _tracer.start_as_current_span("chat.get_response") as span:
            request = build_request(messages, options, self._default_model_id)
            span.set_attribute(ATTR_MODEL, request.model)
            span.set_attribute(ATTR_STREAMING, False)
            span.set_attribute(ATTR_TURNS, len(request.contents))

            try:
                response = await self._service.generate_content(request)
            except httpx.HTTPStatusError as exc:
                error = provider_error_from(exc)
                if error is None:
                    raise
                _record_error(span, error)
                raise error from exc

            result = convert_response(response)
            _record_result(span, result.finish_reason, result.usage)
            return result

    async def get_streaming_response(
        self,
        messages: Iterable[ChatMessage],
        options: ChatOptions | None = None,
    ) -> AsyncIterator[ChatResponseUpdate]:
        """Send *messages* and yield one update per received chunk.

        Nothing is sent until iteration starts. Cancelling the consuming task,
        or closing the iterator early, closes the underlying stream.
        """
        request = build_request(messages, options, self._default_model_id)
        # Not made current: the context would leak across yields.
        span = _tracer.start_span("chat.get_streaming_response")
        span.set_attribute(ATTR_MODEL, request.model)
        span.set_attribute(ATTR_STREAMING, True)
        span.set_attribute(ATTR_TURNS, len(request.contents))
        chunks = 0
        finish_reason: ChatFinishReason | None = None
        usage: UsageDetails | None = None
        try:
            async with aclosing(self._service.stream_generate_content(request)) as stream:
                try:
                    async for chunk in stream:
                        update = convert_stream_chunk(chunk)
                        chunks += 1
                        finish_reason = update.finish_reason or finish_reason
                        usage = update.usage or usage
                        yield update
                except httpx.HTTPStatusError as exc:
                    error = provider_error_from(exc)
                    if error is None:
                        raise
                    _record_error(span, error)
                    raise error from exc
            _record_result(span, finish_reason, usage)
        finally:
            span.set_attribute(ATTR_CHUNKS, chunks)
            span.end()
            logger.debug("Stream from %s ended after %d chunks", request.model, chunks)

    def get_service(self, service_type: type, service_key: object | None = None) -> Any:
        """Return this client or its transport if either is a *service_type*."""
        if service_key is not None:
            return None
        if isinstance(self, service_type):
            return self
        if isinstance(self._service, service_type):
            return self._service
        return None


def _record_result(span: Span, finish_reason: ChatFinishReason | None, usage: UsageDetails | None) -> None:
    if finish_reason is not None:
        span.set_attribute(ATTR_FINISH_REASON, str(finish_reason))
    if usage is None:
        return
    if usage.input_tokens is not None:
        span.set_attribute(ATTR_TOKENS_INPUT, usage.input_tokens)
    if usage.output_tokens is not None:
        span.set_attribute(ATTR_TOKENS_OUTPUT, usage.output_tokens)
    if usage.total_tokens is not None:
        span.set_attribute(ATTR_TOKENS_TOTAL, usage.total_tokens)


def _record_error(span: Span, error: ProviderError) -> None:
    span.set_attribute(ATTR_ERROR_REASON, error.error_info.reason)

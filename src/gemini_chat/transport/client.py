"""GenerativeService — unary and streaming ``generateContent`` calls.

:class:`GenerativeServiceClient` talks to the Generative Language REST
surface over httpx. Streaming uses server-sent events (``alt=sse``): every
``data:`` line carries one complete ``GenerateContentResponse``.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator, AsyncIterator
from typing import Protocol, runtime_checkable

import httpx

from gemini_chat.protocol.models import GenerateContentRequest, GenerateContentResponse

logger = logging.getLogger(__name__)

_SSE_DATA_PREFIX = "data:"


@runtime_checkable
class GenerativeService(Protocol):
    """Issues ``generateContent`` calls against the provider."""

    async def generate_content(self, request: GenerateContentRequest) -> GenerateContentResponse:
        """Send *request* and return the complete response.

        Raises ``httpx.HTTPStatusError`` on an error status and
        ``httpx.TransportError`` on a network failure.
        """
        ...

    def stream_generate_content(
        self, request: GenerateContentRequest
    ) -> AsyncGenerator[GenerateContentResponse, None]:
        """Send *request* and yield response chunks as they arrive."""
        ...


class GenerativeServiceClient:
    """httpx-backed :class:`GenerativeService`.

    Created by :class:`~gemini_chat.transport.builder.GenerativeServiceClientBuilder`,
    which applies credentials and interceptors to the underlying
    ``httpx.AsyncClient``. The client keeps no per-call state and may be
    shared between concurrent calls.

    Usage::

        async with GenerativeServiceClientBuilder(api_key="...").build() as service:
            response = await service.generate_content(request)
    """

    def __init__(self, http: httpx.AsyncClient) -> None:
        self._http = http

    async def __aenter__(self) -> GenerativeServiceClient:
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()

    @property
    def http(self) -> httpx.AsyncClient:
        return self._http

    async def aclose(self) -> None:
        await self._http.aclose()

    async def generate_content(self, request: GenerateContentRequest) -> GenerateContentResponse:
        model = model_resource_name(request.model)
        logger.debug("POST %s:generateContent", model)
        response = await self._http.post(f"/{model}:generateContent", json=request.to_wire())
        response.raise_for_status()
        return GenerateContentResponse.model_validate(response.json())

    async def stream_generate_content(
        self, request: GenerateContentRequest
    ) -> AsyncGenerator[GenerateContentResponse, None]:
        model = model_resource_name(request.model)
        logger.debug("POST %s:streamGenerateContent", model)
        async with self._http.stream(
            "POST",
            f"/{model}:streamGenerateContent",
            params={"alt": "sse"},
            json=request.to_wire(),
        ) as response:
            if response.is_error:
                # Error details live in the body; read it before raising.
                await response.aread()
                response.raise_for_status()
            async for data in _sse_data(response.aiter_lines()):
                yield GenerateContentResponse.model_validate_json(data)


def model_resource_name(model_id: str) -> str:
    """Qualify a bare model id (``gemini-2.5-flash``) as ``models/<id>`` for the URL path.

    Ids that already name a collection (``models/...``, ``tunedModels/...``)
    are used as given.
    """
    if "/" in model_id:
        return model_id
    return f"models/{model_id}"


async def _sse_data(lines: AsyncIterator[str]) -> AsyncIterator[str]:
    """Yield the data payload of each server-sent event.

    Multi-line ``data:`` fields are joined with newlines; other fields
    (``event:``, ``id:``, comments) are ignored.
    """
    buffer: list[str] = []
    async for line in lines:
        if not line:
            if buffer:
                yield "\n".join(buffer)
                buffer = []
            continue
        if line.startswith(_SSE_DATA_PREFIX):
            buffer.append(line[len(_SSE_DATA_PREFIX) :].removeprefix(" "))
    if buffer:
        yield "\n".join(buffer)

"""GenerativeServiceClientBuilder — assembles a configured transport handle."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from gemini_chat.transport.client import GenerativeServiceClient
from gemini_chat.transport.config import TransportConfig

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-goog-api-key"
QUOTA_PROJECT_HEADER = "x-goog-user-project"

Interceptor = Callable[[httpx.Request], Awaitable[None]]


class GenerativeServiceClientBuilder:
    """Collects transport settings and builds a :class:`GenerativeServiceClient`.

    Settings can be passed as a :class:`TransportConfig`, as keyword
    arguments (which override the config), or assigned on the builder
    before :meth:`build` is called::

        builder = GenerativeServiceClientBuilder(api_key="...")
        builder.interceptor = log_request
        service = builder.build()

    ``interceptor`` is awaited with every outbound request, after the
    credential headers have been applied. ``transport`` replaces httpx's
    network transport (useful with ``httpx.MockTransport``).
    """

    def __init__(
        self,
        config: TransportConfig | None = None,
        *,
        interceptor: Interceptor | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        **settings: Any,
    ) -> None:
        base = config.model_dump() if config is not None else {}
        self.config = TransportConfig.model_validate({**base, **settings})
        self.interceptor = interceptor
        self.transport = transport

    @property
    def endpoint(self) -> str:
        return self.config.endpoint

    @endpoint.setter
    def endpoint(self, value: str) -> None:
        self.config = self.config.model_copy(update={"endpoint": TransportConfig(endpoint=value).endpoint})

    @property
    def api_key(self) -> str | None:
        return self.config.api_key

    @api_key.setter
    def api_key(self, value: str | None) -> None:
        self.config = self.config.model_copy(update={"api_key": value})

    @property
    def quota_project(self) -> str | None:
        return self.config.quota_project

    @quota_project.setter
    def quota_project(self, value: str | None) -> None:
        self.config = self.config.model_copy(update={"quota_project": value})

    def headers(self) -> dict[str, str]:
        """Headers applied to every outbound call."""
        headers = dict(self.config.headers)
        if self.config.api_key:
            headers[API_KEY_HEADER] = self.config.api_key
        if self.config.quota_project:
            headers[QUOTA_PROJECT_HEADER] = self.config.quota_project
        return headers

    def build(self) -> GenerativeServiceClient:
        """Create a new client; each call returns an independent handle."""
        event_hooks: dict[str, list[Callable[..., Any]]] = {}
        if self.interceptor is not None:
            event_hooks["request"] = [self.interceptor]

        http = httpx.AsyncClient(
            base_url=self.config.base_url,
            headers=self.headers(),
            timeout=self.config.timeout,
            event_hooks=event_hooks,
            transport=self.transport,
        )
        logger.debug("Built GenerativeServiceClient for %s", self.config.base_url)
        return GenerativeServiceClient(http)

"""ChatClient protocol — the provider-neutral chat contract.

Every provider adapter satisfies this protocol so callers can swap
providers without touching message construction or response handling.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterable
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from gemini_chat.chat.models import ChatMessage, ChatResponse, ChatResponseUpdate
    from gemini_chat.chat.options import ChatOptions


@runtime_checkable
class ChatClient(Protocol):
    """Sends chat messages to a model and returns its response."""

    async def get_response(
        self,
        messages: Iterable[ChatMessage],
        options: ChatOptions | None = None,
    ) -> ChatResponse:
        """Send *messages* and wait for the complete response."""
        ...

    def get_streaming_response(
        self,
        messages: Iterable[ChatMessage],
        options: ChatOptions | None = None,
    ) -> AsyncIterator[ChatResponseUpdate]:
        """Send *messages* and yield response updates as they arrive.

        The returned iterator is lazy and single-pass: nothing is sent until
        iteration starts.
        """
        ...

    def get_service(self, service_type: type, service_key: object | None = None) -> Any:
        """Return an object of *service_type* held by this client, or ``None``."""
        ...

"""gemini-chat — a generic chat-client adapter for the Gemini generateContent API."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from gemini_chat.adapter.client import GeminiChatClient as GeminiChatClient
    from gemini_chat.transport.builder import (
        GenerativeServiceClientBuilder as GenerativeServiceClientBuilder,
    )

_LAZY_EXPORTS = {
    "GeminiChatClient": "gemini_chat.adapter.client",
    "GenerativeServiceClientBuilder": "gemini_chat.transport.builder",
}


def __getattr__(name: str) -> object:
    module_path = _LAZY_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'gemini_chat' has no attribute {name!r}")

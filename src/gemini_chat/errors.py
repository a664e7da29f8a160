"""Error types raised by the Gemini chat adapter."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gemini_chat.protocol.models import ErrorInfo, Status


class GeminiChatError(Exception):
    """Base error for all adapter failures."""


class ConfigurationError(GeminiChatError, ValueError):
    """The client is missing configuration needed to issue a request."""


class InvalidOptionError(GeminiChatError, ValueError):
    """A chat option holds a value the provider cannot represent."""

    def __init__(self, option: str, value: object, detail: str = "") -> None:
        self.option = option
        self.value = value
        msg = f"Invalid value for {option}: {value!r}"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)


class UnsupportedFeatureError(GeminiChatError, NotImplementedError):
    """The caller asked for something this adapter does not implement."""

    def __init__(self, feature: str, detail: str = "") -> None:
        self.feature = feature
        self.detail = detail
        super().__init__(f"Not implemented: {feature}" + (f": {detail}" if detail else ""))


class UnexpectedResponseError(GeminiChatError):
    """The provider returned a response this adapter cannot interpret."""


class ProviderError(GeminiChatError):
    """The provider rejected a call and attached structured error details."""

    def __init__(self, error_info: ErrorInfo, status: Status | None = None) -> None:
        self.error_info = error_info
        self.status = status
        msg = f"Provider error: {error_info.reason}"
        if error_info.domain:
            msg += f" (domain={error_info.domain})"
        if status is not None and status.message:
            msg += f": {status.message}"
        super().__init__(msg)

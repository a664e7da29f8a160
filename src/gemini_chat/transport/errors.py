"""Decoding of structured error details attached to failed calls.

A failed call returns a ``google.rpc.Status`` in the ``error`` member of the
body. Its ``details`` list may include a ``google.rpc.ErrorInfo`` naming the
machine-readable reason (``API_KEY_INVALID``, ``RATE_LIMIT_EXCEEDED``...).
"""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from gemini_chat.errors import ProviderError
from gemini_chat.protocol.models import ErrorInfo, Status

logger = logging.getLogger(__name__)

ERROR_INFO_TYPE = "type.googleapis.com/google.rpc.ErrorInfo"


def decode_error_status(response: httpx.Response) -> Status | None:
    """Parse the ``error`` member of a failed response, if it has one."""
    try:
        payload = response.json()
        if not isinstance(payload, dict) or not isinstance(payload.get("error"), dict):
            return None
        return Status.model_validate(payload["error"])
    except ValueError:
        return None


def provider_error_from(exc: httpx.HTTPStatusError) -> ProviderError | None:
    """Build a :class:`ProviderError` from *exc*'s ErrorInfo detail.

    Returns ``None`` when the response carries no well-formed ErrorInfo, in which case
    the caller should let *exc* propagate unchanged.
    """
    status = decode_error_status(exc.response)
    if status is None:
        return None
    for detail in status.details:
        if detail.get("@type") == ERROR_INFO_TYPE:
            try:
                error_info = ErrorInfo.model_validate(detail)
            except ValidationError:
                logger.warning("Ignoring malformed ErrorInfo detail: %r", detail)
                return None
            logger.warning(
                "Call failed with HTTP %d: reason=%s domain=%s",
                exc.response.status_code,
                error_info.reason,
                error_info.domain,
            )
            return ProviderError(error_info, status)
    return None

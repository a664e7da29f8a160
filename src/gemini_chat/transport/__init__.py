"""Transport provider — configured handles for ``generateContent`` calls."""

from gemini_chat.transport.builder import (
    API_KEY_HEADER,
    QUOTA_PROJECT_HEADER,
    GenerativeServiceClientBuilder,
    Interceptor,
)
from gemini_chat.transport.client import GenerativeService, GenerativeServiceClient, model_resource_name
from gemini_chat.transport.config import TransportConfig
from gemini_chat.transport.errors import ERROR_INFO_TYPE, decode_error_status, provider_error_from

__all__ = [
    "API_KEY_HEADER",
    "ERROR_INFO_TYPE",
    "QUOTA_PROJECT_HEADER",
    "GenerativeService",
    "GenerativeServiceClient",
    "GenerativeServiceClientBuilder",
    "Interceptor",
    "TransportConfig",
    "decode_error_status",
    "model_resource_name",
    "provider_error_from",
]

"""LLM infrastructure module."""

from civic_ai.infrastructure.llm.factory import (
    close_shared_clients,
    create_transport_selector,
    get_shared_genai_client,
    get_shared_http_client,
)
from civic_ai.infrastructure.llm.rate_limiter import (
    RateLimiter,
    get_shared_rate_limiter,
    reset_shared_rate_limiter,
)
from civic_ai.infrastructure.llm.selector import TransportSelector
from civic_ai.infrastructure.llm.transports import (
    GeminiRestTransport,
    GeminiSdkTransport,
    ModelRequest,
    ModelTransport,
    strip_data_uri_prefix,
)

__all__ = [
    "close_shared_clients",
    "create_transport_selector",
    "get_shared_genai_client",
    "get_shared_http_client",
    "RateLimiter",
    "get_shared_rate_limiter",
    "reset_shared_rate_limiter",
    "TransportSelector",
    "GeminiRestTransport",
    "GeminiSdkTransport",
    "ModelRequest",
    "ModelTransport",
    "strip_data_uri_prefix",
]

"""Transport factory helpers."""

import logging

import httpx
from google import genai
from google.genai import types

from civic_ai.config.settings import Settings
from civic_ai.infrastructure.llm.selector import TransportSelector
from civic_ai.infrastructure.llm.transports import (
    GeminiRestTransport,
    GeminiSdkTransport,
)

logger = logging.getLogger(__name__)

_shared_genai_client: genai.Client | None = None
_shared_http_client: httpx.AsyncClient | None = None


def get_shared_genai_client(settings: Settings) -> genai.Client:
    """
    Get or create a shared google-genai client.

    Created lazily on the first SDK request, so the application starts
    without an API key. The client rejects a missing key with ValueError,
    which the SDK transport reports as its own failure.
    """
    global _shared_genai_client
    if _shared_genai_client is None:
        timeout_ms = int(settings.request_timeout * 1000)
        _shared_genai_client = genai.Client(
            api_key=settings.gemini_api_key,
            http_options=types.HttpOptions(timeout=timeout_ms),
        )
    return _shared_genai_client


def get_shared_http_client(settings: Settings) -> httpx.AsyncClient:
    """Get or create the shared httpx client used by the REST transport."""
    global _shared_http_client
    if _shared_http_client is None or _shared_http_client.is_closed:
        _shared_http_client = httpx.AsyncClient(
            timeout=settings.request_timeout,
            headers={"Content-Type": "application/json"},
        )
    return _shared_http_client


async def close_shared_clients() -> None:
    """
    Close the shared clients.

    Should be called during application shutdown to release connections.
    """
    global _shared_genai_client, _shared_http_client
    if _shared_http_client is not None:
        await _shared_http_client.aclose()
        _shared_http_client = None
    _shared_genai_client = None


def create_transport_selector(settings: Settings) -> TransportSelector:
    """
    Build the SDK-first, REST-fallback transport selector.

    Usage:
        selector = create_transport_selector(settings)
        text = await selector.send(ModelRequest(prompt="..."))
    """
    logger.debug("Creating Gemini transports for model: %s", settings.gemini_model)
    return TransportSelector(
        [
            GeminiSdkTransport(
                lambda: get_shared_genai_client(settings), settings.gemini_model
            ),
            GeminiRestTransport(
                get_shared_http_client(settings),
                endpoint=settings.gemini_rest_endpoint,
                model=settings.gemini_model,
                api_key=settings.gemini_api_key,
            ),
        ]
    )

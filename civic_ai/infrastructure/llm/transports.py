"""
Transports that send one prompt (and optionally one image) to Gemini.

Both transports return the raw model text; neither validates JSON.
"""

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from collections.abc import Callable
from typing import Any, Protocol

import httpx
from google import genai
from google.genai import types

from civic_ai.config.constants import IMAGE_MIME_TYPE
from civic_ai.services.classification.errors import (
    FatalTransportError,
    TransientTransportError,
)

logger = logging.getLogger(__name__)

_DATA_URI_PREFIX = re.compile(r"^data:[^;]+;base64,")


def strip_data_uri_prefix(data: str) -> str:
    """Remove a leading ``data:<mime>;base64,`` prefix if present."""
    return _DATA_URI_PREFIX.sub("", data, count=1)


@dataclass(frozen=True)
class ModelRequest:
    """A single model query: a prompt plus an optional inlined image."""

    prompt: str
    image_base64: str | None = None
    mime_type: str = IMAGE_MIME_TYPE

    @property
    def is_vision(self) -> bool:
        return self.image_base64 is not None

    @property
    def kind(self) -> str:
        return "vision" if self.is_vision else "text"


class ModelTransport(Protocol):
    """One way of sending a ModelRequest to the model."""

    name: str

    async def send(self, request: ModelRequest) -> str:
        ...


class GeminiSdkTransport:
    """Primary transport using the google-genai async client.

    The client is obtained on each send, so a client that cannot be built
    (no API key) fails this transport instead of the caller.
    """

    name = "sdk"

    def __init__(self, client_factory: Callable[[], genai.Client], model: str):
        self._client_factory = client_factory
        self._model = model

    def _build_contents(self, request: ModelRequest) -> list[Any]:
        if not request.is_vision:
            return [request.prompt]
        # Strict decode: anything that is not plain base64 is left to the REST path.
        image_bytes = base64.b64decode(request.image_base64, validate=True)
        return [
            request.prompt,
            types.Part.from_bytes(data=image_bytes, mime_type=request.mime_type),
        ]

    async def send(self, request: ModelRequest) -> str:
        try:
            contents = self._build_contents(request)
        except (binascii.Error, ValueError) as e:
            raise FatalTransportError(
                f"Invalid base64 image payload: {e}", transport=self.name
            ) from e

        try:
            client = self._client_factory()
        except ValueError as e:
            raise FatalTransportError(
                f"Gemini SDK client unavailable: {e}", transport=self.name
            ) from e

        response = await client.aio.models.generate_content(
            model=self._model,
            contents=contents,
        )
        text = response.text or ""
        if not text:
            raise FatalTransportError(
                f"Empty response from Gemini SDK {request.kind}", transport=self.name
            )
        return text


class GeminiRestTransport:
    """Secondary transport posting directly to the generateContent REST endpoint."""

    name = "rest"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        endpoint: str,
        model: str,
        api_key: str,
    ):
        self._http = http_client
        self._endpoint = endpoint.rstrip("/")
        self._model = model
        self._api_key = api_key

    @property
    def url(self) -> str:
        return f"{self._endpoint}/models/{self._model}:generateContent"

    @staticmethod
    def build_body(request: ModelRequest) -> dict[str, Any]:
        """Build the JSON request body for a text or vision request."""
        if not request.is_vision:
            return {"contents": [{"parts": [{"text": request.prompt}]}]}
        return {
            "contents": [
                {
                    "role": "user",
                    "parts": [
                        {"text": request.prompt},
                        {
                            "inline_data": {
                                "mime_type": request.mime_type,
                                "data": strip_data_uri_prefix(request.image_base64),
                            }
                        },
                    ],
                }
            ]
        }

    @staticmethod
    def extract_text(payload: dict[str, Any]) -> str:
        """Return ``candidates[0].content.parts[0].text`` or an empty string."""
        try:
            text = payload["candidates"][0]["content"]["parts"][0].get("text")
        except (KeyError, IndexError, TypeError, AttributeError):
            return ""
        return text or ""

    async def send(self, request: ModelRequest) -> str:
        logger.debug("POST %s (%s request)", self.url, request.kind)
        try:
            response = await self._http.post(
                self.url,
                params={"key": self._api_key},
                json=self.build_body(request),
            )
        except httpx.TransportError as e:
            raise TransientTransportError(
                f"Network error: {e}", transport=self.name
            ) from e

        if not response.is_success:
            status = response.status_code
            message = f"Gemini REST {request.kind} error {status}: {response.text}"
            error_cls = (
                TransientTransportError
                if status == 429 or status >= 500
                else FatalTransportError
            )
            raise error_cls(message, status_code=status, transport=self.name)

        try:
            payload = response.json()
        except ValueError as e:
            raise FatalTransportError(
                f"Gemini REST {request.kind} returned non-JSON body", transport=self.name
            ) from e

        text = self.extract_text(payload)
        if not text:
            raise FatalTransportError(
                f"Empty response from Gemini REST {request.kind}", transport=self.name
            )
        return text

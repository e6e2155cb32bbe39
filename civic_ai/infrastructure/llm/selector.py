"""Ordered transport fallback."""

import logging
from collections.abc import Sequence

from civic_ai.infrastructure.llm.transports import ModelRequest, ModelTransport

logger = logging.getLogger(__name__)


class TransportSelector:
    """Try each transport in order and return the first model answer.

    A transport failure moves on to the next transport with the same request.
    When every transport fails, the last transport's error propagates.
    """

    def __init__(self, transports: Sequence[ModelTransport]):
        if not transports:
            raise ValueError("TransportSelector needs at least one transport")
        self.transports = list(transports)

    async def send(self, request: ModelRequest) -> str:
        last_index = len(self.transports) - 1
        for index, transport in enumerate(self.transports):
            try:
                return await transport.send(request)
            except Exception as e:
                if index == last_index:
                    raise
                logger.warning(
                    "%s transport failed for %s request, falling back to %s: %s",
                    transport.name,
                    request.kind,
                    self.transports[index + 1].name,
                    e,
                )
        raise RuntimeError("unreachable")

"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from civic_ai.api.dependencies import get_classifier, reset_classifier
from civic_ai.api.routers import api_router
from civic_ai.config.settings import Settings, get_settings
from civic_ai.infrastructure.llm.factory import close_shared_clients
from civic_ai.infrastructure.llm.rate_limiter import reset_shared_rate_limiter
from civic_ai.infrastructure.logging.logger import setup_logging

settings = get_settings()

setup_logging(
    level=settings.log_level,
    json_output=not settings.debug,
    silence_noisy_loggers=True,
)

logger = logging.getLogger(__name__)


def _validate_startup_config(settings: Settings) -> bool:
    """Validate required configuration at startup."""
    if not settings.gemini_api_key:
        logger.warning("No Gemini API key configured (GEMINI_API_KEY), image analysis is unavailable")
        return False
    return True


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup and shutdown lifecycle."""
    logger.info("Starting %s %s", settings.app_name, settings.app_version)
    has_key = _validate_startup_config(settings)

    if has_key and settings.check_ai_on_startup:
        try:
            if not await get_classifier(settings).test_connection():
                logger.warning("Gemini AI service may not be available, image analysis might not work properly")
        except Exception as e:
            logger.warning("Gemini connection check failed (non-fatal): %s", e)

    yield
    logger.info("Shutting down %s", settings.app_name)
    try:
        await close_shared_clients()
        logger.info("Shared model clients closed")
    except Exception as e:
        logger.error("Error closing shared model clients: %s", e, exc_info=True)
    reset_classifier()
    reset_shared_rate_limiter()


app = FastAPI(
    title="Civic AI",
    description="AI-assisted categorization of citizen civic issue reports",
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials="*" not in settings.allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["*"])

app.include_router(api_router, prefix="/api")

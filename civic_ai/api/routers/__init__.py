"""API sub-routers assembled into a single api_router."""

from fastapi import APIRouter

from civic_ai.api.routers.classify import router as classify_router
from civic_ai.api.routers.health import router as health_router

api_router = APIRouter()

api_router.include_router(health_router, prefix="/health", tags=["health"])
api_router.include_router(classify_router, prefix="/classify", tags=["classify"])

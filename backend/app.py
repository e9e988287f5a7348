"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from api.v1 import api_router
from core import configure_logging, settings


def create_app() -> FastAPI:
    configure_logging(settings.log_level)
    application = FastAPI(title="Forum notification preferences")
    application.include_router(api_router, prefix=settings.api_prefix)

    @application.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return application

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware

from passkeep.core.config import Settings, get_settings
from passkeep.repositories.json_storage import JsonFileStorage, StorageError
from passkeep.repositories.memory_store import RecordStore
from passkeep.routers import records as records_router
from passkeep.services.record_service import RecordService

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers on every JSON response."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("Content-Security-Policy", "default-src 'none'; frame-ancestors 'none'")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        response.headers.setdefault("Cache-Control", "no-store")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def build_record_service(settings: Settings) -> RecordService:
    return RecordService(RecordStore(), JsonFileStorage(settings.file_path), settings.record_types)


@asynccontextmanager
async def _lifespan(app: FastAPI):
    svc: RecordService = app.state.record_service
    try:
        svc.load_from_file()
    except StorageError as exc:
        logger.warning("Failed to read storage file, starting with current store: %s", exc)
    yield
    try:
        svc.persist_to_file()
    except StorageError as exc:
        logger.error("failed to update file on shutdown: %s", exc)
    else:
        logger.info("successful completion")


def create_app(settings: Optional[Settings] = None, service: Optional[RecordService] = None) -> FastAPI:
    """Build the API around an explicitly constructed RecordService."""
    settings = settings or get_settings()
    app = FastAPI(title="passkeep", lifespan=_lifespan)
    app.state.settings = settings
    app.state.record_service = service or build_record_service(settings)

    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")

    app.include_router(records_router.router)
    return app

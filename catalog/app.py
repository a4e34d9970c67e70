from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from catalog.core.config import Settings, get_settings
from catalog.core.logging import get_logger, setup_logging
from catalog.domain.errors import StartupError
from catalog.domain.schemas import ResourceRegistry, default_registry
from catalog.routers.collections import build_router, request_error_response
from catalog.services.store import StoreContext

logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    registry: Optional[ResourceRegistry] = None,
) -> FastAPI:
    """Factory compatible with uvicorn (``--factory``)."""
    settings = settings or get_settings()
    registry = registry or default_registry()
    setup_logging(settings)

    store = StoreContext(registry, settings.database_dir)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            await store.load()
        except StartupError as exc:
            logger.error("Error while loading data:\n%s", exc)
            raise
        logger.info("Collections loaded: %s", ", ".join(registry))
        yield
        await store.serializer.wait_idle()

    app = FastAPI(title="Catalog Collections API", lifespan=lifespan)
    app.state.store = store
    app.state.settings = settings

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        return request_error_response(registry, request, exc)

    origins = list(settings.cors_origins)
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials="*" not in origins,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )

    for resource in registry.values():
        app.include_router(build_router(resource, settings))
    return app

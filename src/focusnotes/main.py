"""Main application module."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from focusnotes import __version__
from focusnotes.api.api import router as api_router
from focusnotes.api.errors import register_exception_handlers
from focusnotes.core.config import Settings, get_settings
from focusnotes.core.middleware import request_logging_middleware
from focusnotes.core.storage import MemStorage, Storage
from focusnotes.logging_utils import setup_logging

logger = logging.getLogger(__name__)


def create_app(
    storage: Storage | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Build the application around a single store.

    Args:
        storage: Store shared by every request. A fresh ``MemStorage`` when
            omitted.
        settings: Settings to use instead of reading the environment.

    Returns:
        The configured FastAPI application.

    """
    settings = settings or get_settings()
    setup_logging(json_format=settings.log_json)

    app = FastAPI(title="Focusnotes", version=__version__)
    app.state.storage = storage if storage is not None else MemStorage()

    # Allow CORS for the frontend dev server
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=list(settings.allow_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(request_logging_middleware)
    register_exception_handlers(app)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Liveness check."""
        return {"status": "ok", "version": __version__}

    app.include_router(api_router)
    logger.info("Application created with %s", type(app.state.storage).__name__)
    return app

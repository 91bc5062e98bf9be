"""FastAPI application factory."""

from __future__ import annotations
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from edgelabeler.config import settings, configure_logging
from edgelabeler.api.routes import router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        description="Rule-based roof edge classification engine",
        version=settings.APP_VERSION,
    )

    # CORS — allow the map frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router, prefix=settings.API_PREFIX)

    logger.info(f"{settings.APP_NAME} {settings.APP_VERSION} ready")
    return app


app = create_app()

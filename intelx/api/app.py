"""FastAPI application for the console intents."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from intelx import __version__
from intelx.api.routes import conversation_router, folders_router, sessions_router

logger = logging.getLogger(__name__)

SERVICE_NAME = "intelx-console"

API_DESCRIPTION = (
    "Case workspace assistant. Manages conversation threads, the active "
    "conversation with its attachments and the case file tree."
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    logger.info(f"{SERVICE_NAME} {__version__} API up")
    yield
    logger.info(f"{SERVICE_NAME} API stopped")


def create_app() -> FastAPI:
    """Build the API app with CORS and the session, conversation and folder routers."""
    application = FastAPI(
        title="IntelX Console API",
        description=API_DESCRIPTION,
        version=__version__,
        lifespan=lifespan,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    for router in (sessions_router, conversation_router, folders_router):
        application.include_router(router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy", "service": SERVICE_NAME, "version": __version__}

    return application


app = create_app()

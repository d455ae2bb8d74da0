"""FastAPI application factory with lifespan management."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from temporal_rag.api.middleware import RequestContextMiddleware
from temporal_rag.api.routes_health import router as health_router
from temporal_rag.api.routes_ingest import router as ingest_router
from temporal_rag.api.routes_query import router as query_router
from temporal_rag.bootstrap import Components, build_components
from temporal_rag.config.settings import Settings
from temporal_rag.observability.logger import get_logger, setup_logging

logger = get_logger("app")


def create_app(
    settings: Settings | None = None,
    components: Components | None = None,
) -> FastAPI:
    """Build the app; pass `components` to skip wiring real collaborators."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        active = components.settings if components else (settings or Settings())
        setup_logging(active.log_level, active.log_json)
        resolved = components or build_components(active)
        app.state.components = resolved
        logger.info("startup_complete", vector_backend=resolved.settings.vector_backend)
        yield
        logger.info("shutdown_complete")

    app = FastAPI(
        title="Temporal RAG",
        version="0.1.0",
        description="Date-aware retrieval-augmented question answering",
        lifespan=lifespan,
    )
    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(ingest_router, tags=["ingest"])
    app.include_router(query_router, tags=["query"])
    return app

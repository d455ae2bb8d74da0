"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from temporal_rag.api.dependencies import get_components
from temporal_rag.bootstrap import Components
from temporal_rag.exceptions import VectorIndexError
from temporal_rag.models.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(components: Components = Depends(get_components)) -> HealthResponse:
    try:
        size = await components.index.count()
        status = "ok"
    except VectorIndexError:
        size = -1
        status = "degraded"
    return HealthResponse(
        status=status,
        vector_backend=components.settings.vector_backend,
        index_size=size,
    )

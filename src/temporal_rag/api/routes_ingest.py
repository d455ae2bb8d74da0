"""Document ingestion endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from temporal_rag.api.dependencies import get_ingest_pipeline
from temporal_rag.exceptions import TemporalRAGError
from temporal_rag.ingestion.pipeline import IngestionPipeline
from temporal_rag.models.domain import SourceDocument
from temporal_rag.models.schemas import IngestRequest, IngestResponse

router = APIRouter()


@router.post("/ingest", response_model=IngestResponse)
async def ingest(
    request: IngestRequest,
    pipeline: IngestionPipeline = Depends(get_ingest_pipeline),
) -> IngestResponse:
    documents = [
        SourceDocument(
            text=d.text,
            source=d.source,
            title=d.title,
            published=d.date,
            metadata=d.metadata,
        )
        for d in request.documents
    ]
    try:
        return await pipeline.ingest(documents, reset=request.reset)
    except TemporalRAGError as e:
        raise HTTPException(status_code=502, detail=str(e))

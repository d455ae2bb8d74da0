"""Query endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from temporal_rag.api.dependencies import get_query_pipeline
from temporal_rag.exceptions import TemporalRAGError
from temporal_rag.models.domain import QueryResult
from temporal_rag.models.schemas import (
    AnalyzedQueryOut,
    DateRangePayload,
    DebugInfo,
    DocumentOut,
    QueryRequest,
    QueryResponse,
)
from temporal_rag.pipeline.query_pipeline import QueryPipeline

router = APIRouter()


def to_response(result: QueryResult) -> QueryResponse:
    analyzed = result.analyzed
    return QueryResponse(
        answer=result.answer,
        sources=result.sources,
        documents=[DocumentOut(content=d.content, metadata=d.metadata) for d in result.documents],
        analyzed=AnalyzedQueryOut(
            clean_query=analyzed.clean_query,
            date=analyzed.date,
            date_range=(
                DateRangePayload(start=analyzed.date_range.start, end=analyzed.date_range.end)
                if analyzed.date_range
                else None
            ),
            query_type=analyzed.query_type,
        ),
        debug=DebugInfo(
            trace_id=result.trace.trace_id if result.trace else "",
            latency_ms=round(result.trace.latency_ms, 2) if result.trace else 0.0,
            filter_applied=analyzed.filter is not None,
            filter=analyzed.filter.to_where() if analyzed.filter else None,
        ),
    )


@router.post("/query", response_model=QueryResponse)
async def query(
    request: QueryRequest,
    pipeline: QueryPipeline = Depends(get_query_pipeline),
) -> QueryResponse:
    try:
        result = await pipeline.execute(request.query, request.query_type)
    except TemporalRAGError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return to_response(result)

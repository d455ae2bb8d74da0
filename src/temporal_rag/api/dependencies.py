"""FastAPI dependency injection helpers."""

from __future__ import annotations

from fastapi import Request

from temporal_rag.bootstrap import Components
from temporal_rag.ingestion.pipeline import IngestionPipeline
from temporal_rag.pipeline.query_pipeline import QueryPipeline


def get_components(request: Request) -> Components:
    return request.app.state.components


def get_query_pipeline(request: Request) -> QueryPipeline:
    return request.app.state.components.query_pipeline


def get_ingest_pipeline(request: Request) -> IngestionPipeline:
    return request.app.state.components.ingest_pipeline

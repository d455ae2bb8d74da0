"""Pydantic models for LLM payloads and API request/response serialization."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field

from temporal_rag.models.domain import QueryType


class DateRangePayload(BaseModel):
    start: str | None = None
    end: str | None = None


class ParserPayload(BaseModel):
    """Shape the query parser model is instructed to emit.

    `clean_query` must be present as a key but may be null or empty.
    """

    clean_query: str | None
    date: str | None = None
    date_range: DateRangePayload | None = None


class QueryRequest(BaseModel):
    query: str = Field(min_length=1, pattern=r"\S")
    query_type: QueryType | None = None


class DocumentOut(BaseModel):
    content: str
    metadata: dict = Field(default_factory=dict)


class AnalyzedQueryOut(BaseModel):
    clean_query: str
    date: str | None = None
    date_range: DateRangePayload | None = None
    query_type: QueryType


class DebugInfo(BaseModel):
    trace_id: str
    latency_ms: float
    filter_applied: bool
    filter: dict | None = None


class QueryResponse(BaseModel):
    answer: str
    sources: list[str]
    documents: list[DocumentOut]
    analyzed: AnalyzedQueryOut
    debug: DebugInfo


class IngestDocument(BaseModel):
    text: str = Field(min_length=1)
    source: str = Field(min_length=1)
    title: str = ""
    date: dt.date | None = None
    metadata: dict = Field(default_factory=dict)


class IngestRequest(BaseModel):
    documents: list[IngestDocument] = Field(min_length=1)
    reset: bool = False


class IngestResponse(BaseModel):
    documents: int
    chunks_created: int
    status: str


class HealthResponse(BaseModel):
    status: str
    vector_backend: str
    index_size: int

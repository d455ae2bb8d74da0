"""Core domain objects used throughout the system."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from temporal_rag.config.constants import DATE_FIELD


class QueryType(str, Enum):
    BROAD_TEMPORAL = "broad_temporal"
    SPECIFIC_FACT = "specific_fact"


@dataclass(frozen=True)
class DateRange:
    start: str
    end: str


@dataclass(frozen=True)
class TemporalFilter:
    """Inclusive range predicate over an epoch-millisecond metadata field."""

    gte: int
    lte: int
    field: str = DATE_FIELD

    def to_where(self) -> dict:
        """Render as a vector index `where` clause."""
        return {
            "$and": [
                {self.field: {"$gte": self.gte}},
                {self.field: {"$lte": self.lte}},
            ]
        }

    def matches(self, metadata: dict) -> bool:
        value = metadata.get(self.field)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        return self.gte <= value <= self.lte


@dataclass(frozen=True)
class AnalyzedQuery:
    clean_query: str
    date: str | None = None
    date_range: DateRange | None = None
    query_type: QueryType = QueryType.BROAD_TEMPORAL
    query_embedding: list[float] | None = None
    filter: TemporalFilter | None = None

    @property
    def has_temporal_constraint(self) -> bool:
        return self.date is not None or self.date_range is not None


@dataclass(frozen=True)
class ParsedQuery:
    query: AnalyzedQuery


@dataclass(frozen=True)
class QueryFallback:
    query: AnalyzedQuery
    reason: str


ParseOutcome = ParsedQuery | QueryFallback


@dataclass
class SelectedDocument:
    content: str
    metadata: dict = field(default_factory=dict)


@dataclass
class Candidate:
    content: str
    metadata: dict
    embedding: list[float] | None
    distance: float
    id: str | None = None

    def to_document(self) -> SelectedDocument:
        return SelectedDocument(content=self.content, metadata=dict(self.metadata))


@dataclass
class Chunk:
    chunk_id: str
    text: str
    index: int
    metadata: dict
    token_count: int
    embedding: list[float] | None = None


@dataclass
class SourceDocument:
    text: str
    source: str
    title: str = ""
    published: date | None = None
    metadata: dict = field(default_factory=dict)


@dataclass
class Trace:
    trace_id: str
    query: str
    timestamp: datetime
    latency_ms: float
    query_type: str
    filter_applied: bool
    documents_retrieved: int
    spans: list[dict]


@dataclass
class QueryResult:
    question: str
    analyzed: AnalyzedQuery
    answer: str
    documents: list[SelectedDocument]
    sources: list[str]
    trace: Trace | None = None

"""Per-request tracing with named stage spans."""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4

from temporal_rag.models.domain import Trace


@dataclass
class Span:
    name: str
    start_ms: float
    end_ms: float = 0.0
    metadata: dict = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        return self.end_ms - self.start_ms


class TraceContext:
    def __init__(self, trace_id: str | None = None) -> None:
        self.trace_id = trace_id or uuid4().hex
        self.spans: list[Span] = []
        self._started = time.monotonic()
        self._started_at = datetime.now(timezone.utc)

    def _now_ms(self) -> float:
        return (time.monotonic() - self._started) * 1000

    @contextmanager
    def span(self, name: str, **metadata):
        s = Span(name=name, start_ms=self._now_ms(), metadata=metadata)
        try:
            yield s
        finally:
            s.end_ms = self._now_ms()
            self.spans.append(s)

    @property
    def elapsed_ms(self) -> float:
        return self._now_ms()

    def to_trace(
        self,
        query: str,
        query_type: str,
        filter_applied: bool,
        documents_retrieved: int,
    ) -> Trace:
        return Trace(
            trace_id=self.trace_id,
            query=query,
            timestamp=self._started_at,
            latency_ms=self.elapsed_ms,
            query_type=query_type,
            filter_applied=filter_applied,
            documents_retrieved=documents_retrieved,
            spans=[
                {"name": s.name, "duration_ms": round(s.duration_ms, 2), **s.metadata}
                for s in self.spans
            ],
        )

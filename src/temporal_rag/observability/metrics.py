"""Metric recording helpers for traces."""

from __future__ import annotations

from temporal_rag.models.domain import Trace
from temporal_rag.observability.logger import get_logger

logger = get_logger("metrics")


def log_retrieval_metrics(
    trace_id: str,
    query_type: str,
    filter_applied: bool,
    documents: int,
    unique_sources: int,
) -> None:
    logger.info(
        "retrieval_metrics",
        trace_id=trace_id,
        query_type=query_type,
        filter_applied=filter_applied,
        documents=documents,
        unique_sources=unique_sources,
    )


def log_pipeline_trace(trace: Trace) -> None:
    logger.info(
        "pipeline_trace",
        trace_id=trace.trace_id,
        latency_ms=round(trace.latency_ms, 2),
        query_type=trace.query_type,
        filter_applied=trace.filter_applied,
        documents=trace.documents_retrieved,
        stages={s["name"]: s["duration_ms"] for s in trace.spans},
    )

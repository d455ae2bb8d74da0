"""Single over-fetch query against the vector index."""

from __future__ import annotations

from temporal_rag.models.domain import Candidate, TemporalFilter
from temporal_rag.observability.logger import get_logger
from temporal_rag.protocols.vector_index import VectorIndex

logger = get_logger("candidate_fetcher")


def eligible(candidates: list[Candidate]) -> list[Candidate]:
    """Candidates that carry an embedding and can take part in diversity scoring."""
    return [c for c in candidates if c.embedding is not None and len(c.embedding) > 0]


class CandidateFetcher:
    def __init__(self, index: VectorIndex) -> None:
        self._index = index

    async def fetch(
        self,
        query_embedding: list[float],
        temporal_filter: TemporalFilter | None,
        fetch_k: int,
    ) -> list[Candidate]:
        candidates = await self._index.query(
            query_embedding, top_k=fetch_k, temporal_filter=temporal_filter
        )
        logger.info(
            "candidates_fetched",
            requested=fetch_k,
            returned=len(candidates),
            filtered=temporal_filter is not None,
        )
        return candidates

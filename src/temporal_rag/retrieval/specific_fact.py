"""Plain nearest-neighbour strategy for pinpoint questions."""

from __future__ import annotations

from temporal_rag.exceptions import RetrievalError
from temporal_rag.models.domain import AnalyzedQuery, SelectedDocument
from temporal_rag.retrieval.candidate_fetcher import CandidateFetcher


class SpecificFactRetriever:
    def __init__(self, fetcher: CandidateFetcher, top_k: int = 4) -> None:
        self._fetcher = fetcher
        self._top_k = top_k

    async def retrieve(self, query: AnalyzedQuery) -> list[SelectedDocument]:
        if query.query_embedding is None:
            raise RetrievalError("query embedding is required for retrieval")
        candidates = await self._fetcher.fetch(
            query.query_embedding, query.filter, self._top_k
        )
        ranked = sorted(candidates, key=lambda c: c.distance)
        return [c.to_document() for c in ranked[: self._top_k]]

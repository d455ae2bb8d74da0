"""MMR retrieval strategy for broad, date-scoped questions."""

from __future__ import annotations

from temporal_rag.exceptions import RetrievalError
from temporal_rag.models.domain import AnalyzedQuery, SelectedDocument
from temporal_rag.observability.logger import get_logger
from temporal_rag.retrieval.candidate_fetcher import CandidateFetcher, eligible
from temporal_rag.retrieval.mmr import distances_to_relevance, mmr_select

logger = get_logger("broad_temporal_retriever")


class BroadTemporalRetriever:
    """Over-fetches `fetch_k` candidates and keeps a diverse top `k` via MMR."""

    def __init__(
        self,
        fetcher: CandidateFetcher,
        top_k: int = 4,
        fetch_k: int | None = None,
        lambda_mult: float = 0.5,
    ) -> None:
        self._fetcher = fetcher
        self._top_k = top_k
        self._fetch_k = fetch_k if fetch_k is not None else top_k * 4
        self._lambda = lambda_mult

    async def retrieve(self, query: AnalyzedQuery) -> list[SelectedDocument]:
        if query.query_embedding is None:
            raise RetrievalError("query embedding is required for MMR retrieval")

        candidates = await self._fetcher.fetch(
            query.query_embedding, query.filter, self._fetch_k
        )
        pool = eligible(candidates)

        if not pool:
            logger.info("no_eligible_candidates", fetched=len(candidates))
            return []
        if len(pool) <= self._top_k:
            logger.info("mmr_skipped", pool_size=len(pool), k=self._top_k)
            return [c.to_document() for c in pool]

        relevance = distances_to_relevance([c.distance for c in pool])
        order = mmr_select(
            query.query_embedding,
            [c.embedding for c in pool],
            relevance,
            k=self._top_k,
            lambda_mult=self._lambda,
        )
        logger.info(
            "mmr_applied",
            fetched=len(candidates),
            pool_size=len(pool),
            selected=len(order),
            lambda_mult=self._lambda,
        )
        return [pool[i].to_document() for i in order]

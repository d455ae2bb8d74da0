"""Query-type dispatch to retrieval strategies."""

from __future__ import annotations

from temporal_rag.config.settings import Settings
from temporal_rag.exceptions import RetrievalError
from temporal_rag.models.domain import QueryType
from temporal_rag.protocols.retriever import Retriever
from temporal_rag.protocols.vector_index import VectorIndex
from temporal_rag.retrieval.broad_temporal import BroadTemporalRetriever
from temporal_rag.retrieval.candidate_fetcher import CandidateFetcher
from temporal_rag.retrieval.specific_fact import SpecificFactRetriever


class RetrieverRegistry:
    def __init__(self, strategies: dict[QueryType, Retriever]) -> None:
        self._strategies = dict(strategies)

    def get(self, query_type: QueryType) -> Retriever:
        try:
            return self._strategies[query_type]
        except KeyError:
            raise RetrievalError(f"No retriever registered for query type {query_type!r}") from None

    @property
    def query_types(self) -> list[QueryType]:
        return list(self._strategies)


def build_retriever_registry(index: VectorIndex, settings: Settings) -> RetrieverRegistry:
    fetcher = CandidateFetcher(index)
    return RetrieverRegistry(
        {
            QueryType.BROAD_TEMPORAL: BroadTemporalRetriever(
                fetcher,
                top_k=settings.top_k,
                fetch_k=settings.fetch_k,
                lambda_mult=settings.mmr_lambda,
            ),
            QueryType.SPECIFIC_FACT: SpecificFactRetriever(fetcher, top_k=settings.top_k),
        }
    )

"""Tests for candidate fetching and the retrieval strategies."""

from __future__ import annotations

import pytest

from conftest import FakeVectorIndex, make_candidate
from temporal_rag.exceptions import RetrievalError
from temporal_rag.models.domain import AnalyzedQuery, QueryType, TemporalFilter
from temporal_rag.retrieval.broad_temporal import BroadTemporalRetriever
from temporal_rag.retrieval.candidate_fetcher import CandidateFetcher, eligible
from temporal_rag.retrieval.registry import RetrieverRegistry, build_retriever_registry
from temporal_rag.retrieval.specific_fact import SpecificFactRetriever


def _query(embedding=(1.0, 0.0), temporal_filter=None, query_type=QueryType.BROAD_TEMPORAL):
    return AnalyzedQuery(
        clean_query="q",
        query_type=query_type,
        query_embedding=list(embedding) if embedding is not None else None,
        filter=temporal_filter,
    )


def test_eligible_drops_missing_embeddings():
    pool = eligible(
        [
            make_candidate("A", [1.0, 0.0], 0.0),
            make_candidate("B", None, 0.1),
            make_candidate("C", [], 0.2),
        ]
    )
    assert [c.id for c in pool] == ["A"]


async def test_fetcher_issues_single_query_with_filter():
    index = FakeVectorIndex([make_candidate("A", [1.0, 0.0], 0.0)])
    f = TemporalFilter(gte=0, lte=10)
    await CandidateFetcher(index).fetch([1.0, 0.0], f, 16)
    assert index.queries == [{"embedding": [1.0, 0.0], "top_k": 16, "filter": f}]


async def test_broad_temporal_diversifies(abc_candidates):
    index = FakeVectorIndex(abc_candidates)
    retriever = BroadTemporalRetriever(CandidateFetcher(index), top_k=2, lambda_mult=0.5)

    docs = await retriever.retrieve(_query())

    assert [d.content for d in docs] == ["content A", "content C"]
    assert index.queries[0]["top_k"] == 8


async def test_broad_temporal_short_circuits_small_pool():
    index = FakeVectorIndex(
        [make_candidate("B", [0.9, 0.1], 0.5), make_candidate("A", [1.0, 0.0], 0.0)]
    )
    retriever = BroadTemporalRetriever(CandidateFetcher(index), top_k=4)

    docs = await retriever.retrieve(_query())

    # Pool order preserved, no re-ranking.
    assert [d.content for d in docs] == ["content B", "content A"]


async def test_broad_temporal_ignores_rows_without_embeddings():
    index = FakeVectorIndex(
        [
            make_candidate("A", [1.0, 0.0], 0.0),
            make_candidate("X", None, 0.05),
            make_candidate("B", [0.9, 0.1], 0.1),
            make_candidate("C", [0.0, 1.0], 0.9),
        ]
    )
    retriever = BroadTemporalRetriever(CandidateFetcher(index), top_k=2)
    docs = await retriever.retrieve(_query())
    assert "content X" not in [d.content for d in docs]
    assert len(docs) == 2


async def test_broad_temporal_empty_pool():
    retriever = BroadTemporalRetriever(CandidateFetcher(FakeVectorIndex([])), top_k=2)
    assert await retriever.retrieve(_query()) == []


async def test_broad_temporal_respects_filter():
    inside = make_candidate("IN", [1.0, 0.0], 0.0, date_ts=500)
    outside = make_candidate("OUT", [1.0, 0.0], 0.0, date_ts=5_000)
    retriever = BroadTemporalRetriever(CandidateFetcher(FakeVectorIndex([outside, inside])), top_k=2)

    docs = await retriever.retrieve(_query(temporal_filter=TemporalFilter(gte=0, lte=1_000)))

    assert [d.content for d in docs] == ["content IN"]


async def test_broad_temporal_requires_embedding():
    retriever = BroadTemporalRetriever(CandidateFetcher(FakeVectorIndex([])))
    with pytest.raises(RetrievalError):
        await retriever.retrieve(_query(embedding=None))


async def test_specific_fact_is_nearest_first():
    index = FakeVectorIndex(
        [
            make_candidate("far", [0.0, 1.0], 0.9),
            make_candidate("near", [1.0, 0.0], 0.1),
            make_candidate("mid", [0.7, 0.7], 0.4),
        ]
    )
    docs = await SpecificFactRetriever(CandidateFetcher(index), top_k=2).retrieve(_query())
    assert [d.content for d in docs] == ["content near", "content mid"]
    assert index.queries[0]["top_k"] == 2


async def test_registry_from_settings(settings, abc_candidates):
    index = FakeVectorIndex(abc_candidates)
    registry = build_retriever_registry(index, settings)

    assert set(registry.query_types) == {QueryType.BROAD_TEMPORAL, QueryType.SPECIFIC_FACT}
    await registry.get(QueryType.BROAD_TEMPORAL).retrieve(_query())
    assert index.queries[0]["top_k"] == settings.fetch_k == 8


def test_registry_unknown_type():
    with pytest.raises(RetrievalError):
        RetrieverRegistry({}).get(QueryType.SPECIFIC_FACT)

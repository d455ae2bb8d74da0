"""End-to-end tests for the query pipeline with fake collaborators."""

from __future__ import annotations

import pytest

from conftest import FakeEmbedder, FakeLLM, FakeVectorIndex, make_candidate
from temporal_rag.bootstrap import assemble
from temporal_rag.exceptions import VectorIndexError
from temporal_rag.models.domain import QueryType

PARSED = '{"clean_query": "what happened", "date": "2005-06-03", "date_range": null}'
JUNE_3 = 1117756800000


def _pipeline(settings, responses, candidates):
    llm = FakeLLM(responses)
    embedder = FakeEmbedder()
    index = FakeVectorIndex(candidates)
    components = assemble(settings, llm=llm, embedder=embedder, index=index)
    return components.query_pipeline, llm, embedder, index


async def test_broad_temporal_flow(settings):
    candidates = [
        make_candidate("A", [1.0, 0.0], 0.0, source="s1", date_ts=JUNE_3),
        make_candidate("B", [0.9, 0.1], 0.1, source="s1", date_ts=JUNE_3),
        make_candidate("C", [0.0, 1.0], 0.9, source="s2", date_ts=JUNE_3 + 3_600_000),
        make_candidate("OLD", [1.0, 0.0], 0.0, source="s3", date_ts=0),
    ]
    pipeline, llm, embedder, index = _pipeline(settings, [PARSED, "- A\n- C"], candidates)

    result = await pipeline.execute("what happened on June 3, 2005?")

    assert embedder.queries == ["what happened"]
    assert len(index.queries) == 1
    assert index.queries[0]["top_k"] == 8
    assert index.queries[0]["filter"].gte == JUNE_3
    assert [d.content for d in result.documents] == ["content A", "content C"]
    assert result.sources == ["s1", "s2"]
    assert result.answer == "- A\n- C"
    assert result.analyzed.query_embedding == [1.0, 0.0]

    assert len(llm.calls) == 2
    answer_prompt = llm.calls[1]["prompt"]
    assert "content A" in answer_prompt and "content C" in answer_prompt
    assert "content OLD" not in answer_prompt

    assert result.trace.filter_applied is True
    assert [s["name"] for s in result.trace.spans] == [
        "analyze", "embed", "filter", "retrieve", "generate",
    ]


async def test_parser_garbage_runs_unfiltered(settings, abc_candidates):
    pipeline, _, embedder, index = _pipeline(settings, ["not json at all", "answer"], abc_candidates)

    result = await pipeline.execute("  tell me the news  ")

    assert embedder.queries == ["tell me the news"]
    assert index.queries[0]["filter"] is None
    assert result.trace.filter_applied is False
    assert result.answer == "answer"


async def test_invalid_date_runs_unfiltered(settings, abc_candidates):
    parsed = '{"clean_query": "news", "date": "2005-02-30"}'
    pipeline, _, _, index = _pipeline(settings, [parsed, "answer"], abc_candidates)
    await pipeline.execute("news on February 30, 2005")
    assert index.queries[0]["filter"] is None


async def test_no_documents_gives_fixed_answer(settings):
    pipeline, llm, _, _ = _pipeline(settings, [PARSED], [])
    result = await pipeline.execute("what happened on June 3, 2005?")
    assert result.documents == []
    assert result.sources == []
    assert result.answer == "The context has no matching documents."
    assert len(llm.calls) == 1


async def test_specific_fact_override(settings, abc_candidates):
    pipeline, _, _, index = _pipeline(settings, [PARSED, "fact"], abc_candidates)
    result = await pipeline.execute("q", query_type=QueryType.SPECIFIC_FACT)
    assert result.analyzed.query_type == QueryType.SPECIFIC_FACT
    assert index.queries[0]["top_k"] == settings.top_k


async def test_index_failure_propagates(settings):
    class BrokenIndex(FakeVectorIndex):
        async def query(self, embedding, top_k, temporal_filter=None):
            raise VectorIndexError("index unavailable")

    llm = FakeLLM([PARSED])
    components = assemble(settings, llm=llm, embedder=FakeEmbedder(), index=BrokenIndex())
    with pytest.raises(VectorIndexError):
        await components.query_pipeline.execute("q")

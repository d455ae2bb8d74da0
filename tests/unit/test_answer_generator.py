"""Tests for context assembly, source collection and answer generation."""

from __future__ import annotations

import pytest

from conftest import FakeLLM
from temporal_rag.config.constants import CONTEXT_SEPARATOR, NO_DOCUMENTS_ANSWER
from temporal_rag.generation.answer_generator import AnswerGenerator
from temporal_rag.generation.prompt_templates import (
    BROAD_TEMPORAL_PROMPT,
    SPECIFIC_FACT_PROMPT,
    format_context,
    get_answer_prompt,
    unique_sources,
)
from temporal_rag.models.domain import QueryType, SelectedDocument


def _doc(content, source=None, title=None):
    metadata = {}
    if source is not None:
        metadata["source"] = source
    if title is not None:
        metadata["title"] = title
    return SelectedDocument(content=content, metadata=metadata)


def test_context_is_joined_with_separator():
    context = format_context([_doc("one"), _doc("two")])
    assert context == f"one{CONTEXT_SEPARATOR}two"
    assert "\n\n---\n\n" in context


def test_context_prefixes_titles():
    assert format_context([_doc("body", title="Headline")]) == "Title: Headline\nbody"


def test_sources_deduped_in_first_seen_order():
    docs = [_doc("a", "X"), _doc("b", "Y"), _doc("c", "X"), _doc("d", "Z")]
    assert unique_sources(docs) == ["X", "Y", "Z"]


def test_sources_are_case_sensitive_and_skip_blanks():
    docs = [_doc("a", "X"), _doc("b", "x"), _doc("c", ""), _doc("d", "   "), _doc("e")]
    assert unique_sources(docs) == ["X", "x"]


def test_prompt_per_query_type():
    assert get_answer_prompt(QueryType.BROAD_TEMPORAL) is BROAD_TEMPORAL_PROMPT
    assert get_answer_prompt(QueryType.SPECIFIC_FACT) is SPECIFIC_FACT_PROMPT


def test_unknown_prompt_type():
    with pytest.raises(ValueError):
        get_answer_prompt("summary")


async def test_generate_uses_context_and_clean_query():
    llm = FakeLLM(["  - Event one  "])
    generator = AnswerGenerator(llm, temperature=0.0)

    result = await generator.generate(
        "what happened", [_doc("one", "X"), _doc("two", "X")], QueryType.BROAD_TEMPORAL
    )

    assert result.answer == "- Event one"
    assert result.sources == ["X"]
    prompt = llm.calls[0]["prompt"]
    assert f"one{CONTEXT_SEPARATOR}two" in prompt
    assert "Question: what happened" in prompt
    assert llm.calls[0]["temperature"] == 0.0


async def test_generate_without_documents_skips_llm():
    llm = FakeLLM(["should not be used"])
    result = await AnswerGenerator(llm).generate("q", [])
    assert result.answer == NO_DOCUMENTS_ANSWER
    assert result.sources == []
    assert llm.calls == []

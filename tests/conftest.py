"""Shared test fixtures."""

from __future__ import annotations

import pytest

from temporal_rag.config.settings import Settings
from temporal_rag.models.domain import Candidate, Chunk, TemporalFilter


class FakeLLM:
    """Returns scripted completions in order and records every prompt."""

    def __init__(self, responses: list[str] | None = None) -> None:
        self.responses = list(responses or [])
        self.calls: list[dict] = []

    async def complete(self, prompt: str, temperature: float = 0.0, system: str | None = None) -> str:
        self.calls.append({"prompt": prompt, "temperature": temperature, "system": system})
        if not self.responses:
            return ""
        return self.responses.pop(0)


class FakeEmbedder:
    """Deterministic 2-d embeddings keyed by text."""

    def __init__(self, vectors: dict[str, list[float]] | None = None) -> None:
        self.vectors = vectors or {}
        self.queries: list[str] = []

    @property
    def dimensions(self) -> int:
        return 2

    async def embed_query(self, query: str) -> list[float]:
        self.queries.append(query)
        return self.vectors.get(query, [1.0, 0.0])

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        return [self.vectors.get(t, [float(len(t)), 1.0]) for t in texts]


class FakeVectorIndex:
    """Serves a fixed candidate list, honouring the temporal filter and top_k."""

    def __init__(self, candidates: list[Candidate] | None = None) -> None:
        self.candidates = list(candidates or [])
        self.queries: list[dict] = []
        self.upserted: list[Chunk] = []
        self.reset_calls = 0

    async def query(
        self,
        embedding: list[float],
        top_k: int,
        temporal_filter: TemporalFilter | None = None,
    ) -> list[Candidate]:
        self.queries.append({"embedding": embedding, "top_k": top_k, "filter": temporal_filter})
        rows = [
            c for c in self.candidates
            if temporal_filter is None or temporal_filter.matches(c.metadata)
        ]
        return rows[:top_k]

    async def upsert(self, chunks: list[Chunk]) -> int:
        self.upserted.extend(chunks)
        return len(chunks)

    async def count(self) -> int:
        return len(self.candidates) + len(self.upserted)

    async def reset(self) -> None:
        self.reset_calls += 1
        self.candidates = []
        self.upserted = []


def make_candidate(
    name: str,
    embedding: list[float] | None,
    distance: float,
    source: str | None = None,
    date_ts: int = 0,
) -> Candidate:
    return Candidate(
        id=name,
        content=f"content {name}",
        metadata={"source": source or f"src-{name}", "title": name, "date_ts": date_ts},
        embedding=embedding,
        distance=distance,
    )


@pytest.fixture
def settings():
    """Test settings with deterministic retrieval parameters."""
    return Settings(
        openai_api_key="test-key",
        google_api_key="test-key",
        top_k=2,
        fetch_k_multiplier=4,
        mmr_lambda=0.5,
        vector_backend="faiss",
        embedding_dimensions=2,
    )


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def fake_embedder():
    return FakeEmbedder()


@pytest.fixture
def abc_candidates():
    """Query [1, 0]; A is exact, B is a near-duplicate of A, C is orthogonal."""
    return [
        make_candidate("A", [1.0, 0.0], 0.0),
        make_candidate("B", [0.9, 0.1], 0.1),
        make_candidate("C", [0.0, 1.0], 0.9),
    ]

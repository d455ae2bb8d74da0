"""Protocol for the vector index collaborator."""

from __future__ import annotations

from typing import Protocol

from temporal_rag.models.domain import Candidate, Chunk, TemporalFilter


class VectorIndex(Protocol):
    async def query(
        self,
        embedding: list[float],
        top_k: int,
        temporal_filter: TemporalFilter | None = None,
    ) -> list[Candidate]:
        """Nearest neighbours with content, metadata, embedding and distance."""
        ...

    async def upsert(self, chunks: list[Chunk]) -> int: ...

    async def count(self) -> int: ...

    async def reset(self) -> None: ...

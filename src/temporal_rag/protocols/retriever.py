"""Protocol for retrieval strategies."""

from __future__ import annotations

from typing import Protocol

from temporal_rag.models.domain import AnalyzedQuery, SelectedDocument


class Retriever(Protocol):
    async def retrieve(self, query: AnalyzedQuery) -> list[SelectedDocument]: ...

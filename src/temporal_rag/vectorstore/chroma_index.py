"""Chroma HTTP-server vector index."""

from __future__ import annotations

import asyncio
from urllib.parse import urlparse

import chromadb

from temporal_rag.exceptions import VectorIndexError
from temporal_rag.models.domain import Candidate, Chunk, TemporalFilter
from temporal_rag.observability.logger import get_logger

logger = get_logger("chroma_index")

_QUERY_INCLUDE = ["embeddings", "documents", "metadatas", "distances"]


def _first_row(result, key: str) -> list:
    rows = result.get(key)
    if rows is None or len(rows) == 0 or rows[0] is None:
        return []
    return list(rows[0])


def _as_vector(raw) -> list[float] | None:
    if raw is None:
        return None
    return [float(x) for x in raw]


def _scalar_metadata(metadata: dict) -> dict:
    # Chroma only stores str/int/float/bool values and rejects None.
    return {
        k: v for k, v in metadata.items() if isinstance(v, (str, int, float, bool))
    }


class ChromaVectorIndex:
    def __init__(
        self,
        url: str,
        collection_name: str,
        tenant: str | None = None,
        database: str | None = None,
    ) -> None:
        parsed = urlparse(url)
        client_kwargs: dict = {
            "host": parsed.hostname or "localhost",
            "port": parsed.port or (443 if parsed.scheme == "https" else 8000),
            "ssl": parsed.scheme == "https",
        }
        if tenant:
            client_kwargs["tenant"] = tenant
        if database:
            client_kwargs["database"] = database
        self._client_kwargs = client_kwargs
        self._collection_name = collection_name
        self._client = None
        self._collection = None

    def _get_client(self):
        if self._client is None:
            self._client = chromadb.HttpClient(**self._client_kwargs)
        return self._client

    def _get_collection(self):
        if self._collection is None:
            self._collection = self._get_client().get_or_create_collection(
                name=self._collection_name,
                metadata={"hnsw:space": "cosine"},
            )
        return self._collection

    def _query(
        self, embedding: list[float], top_k: int, temporal_filter: TemporalFilter | None
    ) -> list[Candidate]:
        result = self._get_collection().query(
            query_embeddings=[embedding],
            n_results=top_k,
            where=temporal_filter.to_where() if temporal_filter else None,
            include=_QUERY_INCLUDE,
        )
        ids = _first_row(result, "ids")
        documents = _first_row(result, "documents")
        metadatas = _first_row(result, "metadatas")
        embeddings = _first_row(result, "embeddings")
        distances = _first_row(result, "distances")

        candidates = []
        for i, chunk_id in enumerate(ids):
            distance = distances[i] if i < len(distances) else None
            candidates.append(
                Candidate(
                    id=chunk_id,
                    content=(documents[i] if i < len(documents) else None) or "",
                    metadata=dict((metadatas[i] if i < len(metadatas) else None) or {}),
                    embedding=_as_vector(embeddings[i]) if i < len(embeddings) else None,
                    distance=max(0.0, float(distance)) if distance is not None else 0.0,
                )
            )
        return candidates

    async def query(
        self,
        embedding: list[float],
        top_k: int,
        temporal_filter: TemporalFilter | None = None,
    ) -> list[Candidate]:
        try:
            return await asyncio.to_thread(self._query, embedding, top_k, temporal_filter)
        except Exception as e:
            raise VectorIndexError(f"Chroma query failed: {e}") from e

    def _upsert(self, chunks: list[Chunk]) -> None:
        self._get_collection().upsert(
            ids=[c.chunk_id for c in chunks],
            embeddings=[c.embedding for c in chunks],
            documents=[c.text for c in chunks],
            metadatas=[_scalar_metadata(c.metadata) for c in chunks],
        )

    async def upsert(self, chunks: list[Chunk]) -> int:
        if not chunks:
            return 0
        if any(c.embedding is None for c in chunks):
            raise VectorIndexError("every chunk needs an embedding before upsert")
        try:
            await asyncio.to_thread(self._upsert, chunks)
        except Exception as e:
            raise VectorIndexError(f"Chroma upsert failed: {e}") from e
        logger.info("chroma_upserted", count=len(chunks), collection=self._collection_name)
        return len(chunks)

    async def count(self) -> int:
        try:
            return await asyncio.to_thread(lambda: self._get_collection().count())
        except Exception as e:
            raise VectorIndexError(f"Chroma count failed: {e}") from e

    def _reset(self) -> None:
        client = self._get_client()
        try:
            client.delete_collection(name=self._collection_name)
            logger.info("chroma_collection_deleted", collection=self._collection_name)
        except Exception as e:
            # Most often the collection did not exist yet.
            logger.warning(
                "chroma_delete_failed", collection=self._collection_name, error=str(e)
            )
        self._collection = None

    async def reset(self) -> None:
        try:
            await asyncio.to_thread(self._reset)
        except Exception as e:
            raise VectorIndexError(f"Chroma reset failed: {e}") from e

"""In-process FAISS vector index with metadata records and JSON side-car persistence.

Vectors are L2-normalised and searched by inner product, so the returned
distance is the cosine distance ``1 - cos``. Temporal filters are applied
to the stored metadata after an exhaustive search, which keeps results
exact for the flat index.
"""

from __future__ import annotations

import asyncio
import json
import os
from pathlib import Path

import faiss
import numpy as np

from temporal_rag.exceptions import EmbeddingDimensionMismatch, VectorIndexError
from temporal_rag.models.domain import Candidate, Chunk, TemporalFilter
from temporal_rag.observability.logger import get_logger

logger = get_logger("faiss_store")

INDEX_FILE = "index.faiss"
RECORDS_FILE = "records.json"


def _normalized(vectors: np.ndarray) -> np.ndarray:
    vectors = np.ascontiguousarray(vectors, dtype=np.float32)
    faiss.normalize_L2(vectors)
    return vectors


class FaissVectorIndex:
    def __init__(self, dimensions: int, index_path: str | None = None) -> None:
        self._dimensions = dimensions
        self._index_path = index_path
        self._index = faiss.IndexIDMap(faiss.IndexFlatIP(dimensions))
        # int id -> {"chunk_id", "content", "metadata", "embedding"}
        self._records: dict[int, dict] = {}
        self._chunk_id_to_int: dict[str, int] = {}
        self._next_id = 0
        self._write_lock = asyncio.Lock()

        if index_path:
            self._try_load(index_path)

    def _try_load(self, path: str) -> None:
        index_file = os.path.join(path, INDEX_FILE)
        records_file = os.path.join(path, RECORDS_FILE)
        if not (os.path.exists(index_file) and os.path.exists(records_file)):
            return
        self._index = faiss.read_index(index_file)
        with open(records_file) as f:
            data = json.load(f)
        self._records = {int(k): v for k, v in data["records"].items()}
        self._chunk_id_to_int = {r["chunk_id"]: i for i, r in self._records.items()}
        self._next_id = data["next_id"]
        logger.info("faiss_loaded", size=self._index.ntotal, path=path)

    def _check_dim(self, vector_len: int) -> None:
        if vector_len != self._dimensions:
            raise EmbeddingDimensionMismatch(
                f"vector has dimension {vector_len}, index expects {self._dimensions}"
            )

    def add(self, chunks: list[Chunk]) -> int:
        if not chunks:
            return 0
        for c in chunks:
            if c.embedding is None:
                raise VectorIndexError(f"chunk {c.chunk_id} has no embedding")
            self._check_dim(len(c.embedding))

        stale = [self._chunk_id_to_int[c.chunk_id] for c in chunks if c.chunk_id in self._chunk_id_to_int]
        if stale:
            self._index.remove_ids(np.array(stale, dtype=np.int64))

        int_ids = []
        for c in chunks:
            int_id = self._chunk_id_to_int.get(c.chunk_id)
            if int_id is None:
                int_id = self._next_id
                self._next_id += 1
                self._chunk_id_to_int[c.chunk_id] = int_id
            self._records[int_id] = {
                "chunk_id": c.chunk_id,
                "content": c.text,
                "metadata": dict(c.metadata),
                "embedding": [float(x) for x in c.embedding],
            }
            int_ids.append(int_id)

        vectors = _normalized(np.array([c.embedding for c in chunks]))
        self._index.add_with_ids(vectors, np.array(int_ids, dtype=np.int64))
        logger.info("faiss_added", count=len(chunks), total=self._index.ntotal)
        return len(chunks)

    def search(
        self,
        embedding: list[float],
        top_k: int,
        temporal_filter: TemporalFilter | None = None,
    ) -> list[Candidate]:
        self._check_dim(len(embedding))
        total = self._index.ntotal
        if total == 0 or top_k <= 0:
            return []
        # A filter may reject any hit, so scan the whole flat index first.
        depth = total if temporal_filter else min(top_k, total)
        query = _normalized(np.array([embedding]))
        scores, indices = self._index.search(query, depth)

        results: list[Candidate] = []
        for idx, score in zip(indices[0], scores[0]):
            idx = int(idx)
            if idx == -1:
                continue
            record = self._records.get(idx)
            if record is None:
                continue
            if temporal_filter and not temporal_filter.matches(record["metadata"]):
                continue
            results.append(
                Candidate(
                    id=record["chunk_id"],
                    content=record["content"],
                    metadata=dict(record["metadata"]),
                    embedding=list(record["embedding"]),
                    distance=max(0.0, 1.0 - float(score)),
                )
            )
            if len(results) >= top_k:
                break
        return results

    def save(self, path: str | None = None) -> None:
        path = path or self._index_path
        if not path:
            return
        Path(path).mkdir(parents=True, exist_ok=True)
        faiss.write_index(self._index, os.path.join(path, INDEX_FILE))
        with open(os.path.join(path, RECORDS_FILE), "w") as f:
            json.dump({"records": self._records, "next_id": self._next_id}, f)
        logger.info("faiss_saved", path=path, size=self._index.ntotal)

    def clear(self) -> None:
        self._index = faiss.IndexIDMap(faiss.IndexFlatIP(self._dimensions))
        self._records = {}
        self._chunk_id_to_int = {}
        self._next_id = 0
        if self._index_path:
            for name in (INDEX_FILE, RECORDS_FILE):
                Path(self._index_path, name).unlink(missing_ok=True)
        logger.info("faiss_cleared")

    @property
    def size(self) -> int:
        return self._index.ntotal

    # VectorIndex protocol

    async def query(
        self,
        embedding: list[float],
        top_k: int,
        temporal_filter: TemporalFilter | None = None,
    ) -> list[Candidate]:
        return await asyncio.to_thread(self.search, embedding, top_k, temporal_filter)

    async def upsert(self, chunks: list[Chunk]) -> int:
        async with self._write_lock:
            added = await asyncio.to_thread(self.add, chunks)
            await asyncio.to_thread(self.save)
        return added

    async def count(self) -> int:
        return self.size

    async def reset(self) -> None:
        async with self._write_lock:
            await asyncio.to_thread(self.clear)

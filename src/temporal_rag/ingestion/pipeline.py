"""Ingestion pipeline: chunk -> id -> embed -> upsert."""

from __future__ import annotations

import asyncio

from temporal_rag.config.constants import DATE_FIELD, SOURCE_FIELD
from temporal_rag.exceptions import IngestionError
from temporal_rag.ingestion.ids import stable_chunk_id
from temporal_rag.models.domain import Chunk, SourceDocument
from temporal_rag.models.schemas import IngestResponse
from temporal_rag.observability.logger import get_logger
from temporal_rag.protocols.chunker import Chunker
from temporal_rag.protocols.embedder import Embedder
from temporal_rag.protocols.vector_index import VectorIndex
from temporal_rag.query.temporal_filter import day_bounds_ms

logger = get_logger("ingestion")


def document_metadata(doc: SourceDocument, doc_id: str) -> dict:
    """Chunk metadata for `doc`; undated documents get date_ts 0."""
    date_ts = day_bounds_ms(doc.published)[0] if doc.published else 0
    return {
        **doc.metadata,
        SOURCE_FIELD: doc.source,
        "title": doc.title,
        DATE_FIELD: date_ts,
        "doc_id": doc_id,
    }


class IngestionPipeline:
    def __init__(
        self,
        chunker: Chunker,
        embedder: Embedder,
        index: VectorIndex,
    ) -> None:
        self._chunker = chunker
        self._embedder = embedder
        self._index = index

    def _chunk_document(self, doc: SourceDocument) -> list[Chunk]:
        doc_id = stable_chunk_id(doc.source, doc.text)
        chunks = self._chunker.chunk(doc.text, document_metadata(doc, doc_id))
        for chunk in chunks:
            chunk.metadata["chunk_index"] = chunk.index
            chunk.chunk_id = stable_chunk_id(doc.source, chunk.text, chunk.index)
        return chunks

    async def ingest(self, documents: list[SourceDocument], reset: bool = False) -> IngestResponse:
        if reset:
            await self._index.reset()
            logger.info("index_reset")

        if not documents:
            return IngestResponse(documents=0, chunks_created=0, status="no_documents")

        chunks: list[Chunk] = []
        for doc in documents:
            chunks.extend(await asyncio.to_thread(self._chunk_document, doc))
        logger.info("chunked", documents=len(documents), chunks=len(chunks))

        if not chunks:
            return IngestResponse(documents=len(documents), chunks_created=0, status="no_chunks")

        embeddings = await self._embedder.embed_texts([c.text for c in chunks])
        if len(embeddings) != len(chunks):
            raise IngestionError(
                f"embedder returned {len(embeddings)} vectors for {len(chunks)} chunks"
            )
        for chunk, emb in zip(chunks, embeddings):
            chunk.embedding = emb

        upserted = await self._index.upsert(chunks)
        logger.info("ingested", documents=len(documents), chunks=upserted)
        return IngestResponse(documents=len(documents), chunks_created=upserted, status="indexed")

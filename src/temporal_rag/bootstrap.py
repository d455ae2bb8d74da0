"""Composition root: build every component once from Settings."""

from __future__ import annotations

from dataclasses import dataclass

from temporal_rag.config.settings import Settings
from temporal_rag.embeddings.ollama_embedder import OllamaEmbedder
from temporal_rag.embeddings.openai_embedder import OpenAIEmbedder
from temporal_rag.exceptions import ConfigurationError
from temporal_rag.generation.answer_generator import AnswerGenerator
from temporal_rag.generation.gemini_provider import GeminiProvider
from temporal_rag.generation.ollama_provider import OllamaProvider
from temporal_rag.ingestion.pipeline import IngestionPipeline
from temporal_rag.ingestion.splitter import TokenTextSplitter
from temporal_rag.observability.logger import get_logger
from temporal_rag.pipeline.query_pipeline import QueryPipeline
from temporal_rag.protocols.embedder import Embedder
from temporal_rag.protocols.llm import LLMProvider
from temporal_rag.protocols.vector_index import VectorIndex
from temporal_rag.query.analyzer import QueryAnalyzer
from temporal_rag.retrieval.registry import build_retriever_registry
from temporal_rag.vectorstore.chroma_index import ChromaVectorIndex
from temporal_rag.vectorstore.faiss_store import FaissVectorIndex

logger = get_logger("bootstrap")


@dataclass
class Components:
    settings: Settings
    llm: LLMProvider
    embedder: Embedder
    index: VectorIndex
    query_pipeline: QueryPipeline
    ingest_pipeline: IngestionPipeline


def build_llm(settings: Settings) -> LLMProvider:
    if settings.llm_provider == "ollama":
        return OllamaProvider(
            base_url=settings.ollama_base_url,
            model=settings.ollama_chat_model,
            timeout_s=settings.ollama_timeout_s,
        )
    if not settings.google_api_key:
        raise ConfigurationError("RAG_GOOGLE_API_KEY is required for the gemini LLM provider")
    return GeminiProvider(
        api_key=settings.google_api_key,
        model=settings.gemini_model,
        max_tokens=settings.gemini_max_tokens,
    )


def build_embedder(settings: Settings) -> Embedder:
    if settings.embedding_provider == "ollama":
        return OllamaEmbedder(
            base_url=settings.ollama_base_url,
            model=settings.ollama_embed_model,
            dimensions=settings.embedding_dimensions,
            timeout_s=settings.ollama_timeout_s,
        )
    if not settings.openai_api_key:
        raise ConfigurationError("RAG_OPENAI_API_KEY is required for the openai embedding provider")
    return OpenAIEmbedder(
        api_key=settings.openai_api_key,
        model=settings.embedding_model,
        batch_size=settings.embedding_batch_size,
        dimensions=settings.embedding_dimensions,
    )


def build_index(settings: Settings) -> VectorIndex:
    if settings.vector_backend == "faiss":
        return FaissVectorIndex(
            dimensions=settings.embedding_dimensions,
            index_path=settings.faiss_index_path,
        )
    return ChromaVectorIndex(
        url=settings.chroma_url,
        collection_name=settings.chroma_collection,
        tenant=settings.chroma_tenant,
        database=settings.chroma_database,
    )


def assemble(
    settings: Settings,
    llm: LLMProvider,
    embedder: Embedder,
    index: VectorIndex,
) -> Components:
    """Wire the pipelines around already-built collaborators."""
    query_pipeline = QueryPipeline(
        analyzer=QueryAnalyzer(llm, settings),
        embedder=embedder,
        retrievers=build_retriever_registry(index, settings),
        generator=AnswerGenerator(llm, temperature=settings.answer_temperature),
    )
    ingest_pipeline = IngestionPipeline(
        chunker=TokenTextSplitter(
            max_tokens=settings.chunk_max_tokens,
            overlap_tokens=settings.chunk_overlap_tokens,
        ),
        embedder=embedder,
        index=index,
    )
    return Components(
        settings=settings,
        llm=llm,
        embedder=embedder,
        index=index,
        query_pipeline=query_pipeline,
        ingest_pipeline=ingest_pipeline,
    )


def build_components(settings: Settings) -> Components:
    components = assemble(
        settings,
        llm=build_llm(settings),
        embedder=build_embedder(settings),
        index=build_index(settings),
    )
    logger.info(
        "components_built",
        llm_provider=settings.llm_provider,
        embedding_provider=settings.embedding_provider,
        vector_backend=settings.vector_backend,
        top_k=settings.top_k,
        fetch_k=settings.fetch_k,
        mmr_lambda=settings.mmr_lambda,
    )
    return components

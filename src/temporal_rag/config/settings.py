"""Central configuration via Pydantic Settings. All values driven by env vars.

Constructed once at process start and passed into every component; the
model is frozen so no component can mutate shared configuration.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Providers
    llm_provider: Literal["gemini", "ollama"] = "gemini"
    embedding_provider: Literal["openai", "ollama"] = "openai"

    # API Keys
    openai_api_key: str = ""
    google_api_key: str = ""

    # Embedding
    embedding_model: str = "text-embedding-3-small"
    embedding_dimensions: int = Field(default=1536, ge=1)
    embedding_batch_size: int = Field(default=100, ge=1)

    # LLM / Gemini
    gemini_model: str = "gemini-2.0-flash"
    gemini_max_tokens: int = 4096

    # Ollama
    ollama_base_url: str = "http://localhost:11434"
    ollama_chat_model: str = "phi3:mini"
    ollama_embed_model: str = "all-minilm"
    ollama_timeout_s: float = 120.0

    # Temperatures (0.0 is the most deterministic setting)
    parser_temperature: float = Field(default=0.0, ge=0.0, le=2.0)
    answer_temperature: float = Field(default=0.0, ge=0.0, le=2.0)

    # Vector index
    vector_backend: Literal["chroma", "faiss"] = "chroma"
    chroma_url: str = "http://localhost:8000"
    chroma_collection: str = "rag_urls"
    chroma_tenant: str | None = None
    chroma_database: str | None = None
    faiss_index_path: str = "data/faiss_index"

    # Retrieval
    top_k: int = Field(default=4, ge=1)
    fetch_k_multiplier: int = Field(default=4, ge=1)
    mmr_lambda: float = Field(default=0.5, ge=0.0, le=1.0)
    default_query_type: Literal["broad_temporal", "specific_fact"] = "broad_temporal"

    # Ingestion
    chunk_max_tokens: int = Field(default=256, ge=16)
    chunk_overlap_tokens: int = Field(default=50, ge=0)
    wikinews_api_url: str = "https://en.wikinews.org/w/api.php"

    # Server / logging
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    log_json: bool = False

    model_config = {"env_file": ".env", "env_prefix": "RAG_", "frozen": True, "extra": "ignore"}

    @property
    def fetch_k(self) -> int:
        """Candidate pool size requested from the index before MMR."""
        return self.top_k * self.fetch_k_multiplier

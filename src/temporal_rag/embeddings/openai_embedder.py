"""OpenAI embedding provider."""

from __future__ import annotations

from openai import AsyncOpenAI

from temporal_rag.exceptions import EmbeddingError
from temporal_rag.observability.logger import get_logger

logger = get_logger("openai_embedder")


class OpenAIEmbedder:
    def __init__(
        self,
        api_key: str,
        model: str = "text-embedding-3-small",
        batch_size: int = 100,
        dimensions: int = 1536,
        client: AsyncOpenAI | None = None,
    ) -> None:
        self._client = client or AsyncOpenAI(api_key=api_key)
        self._model = model
        self._batch_size = batch_size
        self._dimensions = dimensions

    @property
    def dimensions(self) -> int:
        return self._dimensions

    async def _create(self, batch: list[str]) -> list[list[float]]:
        kwargs: dict = {"input": batch, "model": self._model}
        # Only the text-embedding-3 family accepts a dimensions override.
        if self._model.startswith("text-embedding-3"):
            kwargs["dimensions"] = self._dimensions
        response = await self._client.embeddings.create(**kwargs)
        ordered = sorted(response.data, key=lambda item: item.index)
        return [item.embedding for item in ordered]

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []
        vectors: list[list[float]] = []
        try:
            for start in range(0, len(texts), self._batch_size):
                vectors.extend(await self._create(texts[start : start + self._batch_size]))
        except Exception as e:
            raise EmbeddingError(f"Failed to embed {len(texts)} texts: {e}") from e
        logger.info("embedded_texts", count=len(texts), model=self._model)
        return vectors

    async def embed_query(self, query: str) -> list[float]:
        try:
            return (await self._create([query]))[0]
        except Exception as e:
            raise EmbeddingError(f"Failed to embed query: {e}") from e

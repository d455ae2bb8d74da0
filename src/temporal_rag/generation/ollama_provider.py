"""Ollama LLM provider over its HTTP API."""

from __future__ import annotations

import httpx

from temporal_rag.exceptions import GenerationError
from temporal_rag.observability.logger import get_logger

logger = get_logger("ollama")


class OllamaProvider:
    def __init__(
        self,
        base_url: str = "http://localhost:11434",
        model: str = "phi3:mini",
        timeout_s: float = 120.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout_s)
        self._model = model

    async def complete(
        self,
        prompt: str,
        temperature: float = 0.0,
        system: str | None = None,
    ) -> str:
        body: dict = {
            "model": self._model,
            "prompt": prompt,
            "stream": False,
            "options": {"temperature": temperature},
        }
        if system:
            body["system"] = system
        try:
            response = await self._client.post("/api/generate", json=body)
            response.raise_for_status()
            text = response.json()["response"]
        except (httpx.HTTPError, KeyError, ValueError) as e:
            raise GenerationError(f"Ollama generation failed: {e}") from e
        logger.debug("ollama_completed", model=self._model, chars=len(text))
        return text

    async def aclose(self) -> None:
        await self._client.aclose()

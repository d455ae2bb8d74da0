"""Google Gemini LLM provider using the google-genai SDK."""

from __future__ import annotations

from google import genai
from google.genai import types

from temporal_rag.exceptions import GenerationError
from temporal_rag.observability.logger import get_logger

logger = get_logger("gemini")


class GeminiProvider:
    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        max_tokens: int = 4096,
    ) -> None:
        self._client = genai.Client(api_key=api_key)
        self._model = model
        self._max_tokens = max_tokens

    async def complete(
        self,
        prompt: str,
        temperature: float = 0.0,
        system: str | None = None,
    ) -> str:
        config = types.GenerateContentConfig(
            temperature=temperature,
            max_output_tokens=self._max_tokens,
            system_instruction=system,
        )
        try:
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=prompt,
                config=config,
            )
        except Exception as e:
            raise GenerationError(f"Gemini generation failed: {e}") from e
        text = response.text or ""
        logger.debug("gemini_completed", model=self._model, chars=len(text))
        return text

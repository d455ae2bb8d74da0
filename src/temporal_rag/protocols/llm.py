"""Protocol for language-model completion providers."""

from __future__ import annotations

from typing import Protocol


class LLMProvider(Protocol):
    async def complete(
        self,
        prompt: str,
        temperature: float = 0.0,
        system: str | None = None,
    ) -> str: ...

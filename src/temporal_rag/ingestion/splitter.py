"""Token-bounded recursive text splitter with trailing overlap."""

from __future__ import annotations

import tiktoken

from temporal_rag.config.constants import TIKTOKEN_ENCODING
from temporal_rag.models.domain import Chunk

# Coarsest boundary first: paragraphs, lines, sentences, words.
SEPARATORS = ("\n\n", "\n", ". ", " ")


class TokenTextSplitter:
    def __init__(self, max_tokens: int = 256, overlap_tokens: int = 50) -> None:
        if overlap_tokens >= max_tokens:
            raise ValueError("overlap_tokens must be smaller than max_tokens")
        self._max_tokens = max_tokens
        self._overlap_tokens = overlap_tokens
        self._enc = tiktoken.get_encoding(TIKTOKEN_ENCODING)

    def count_tokens(self, text: str) -> int:
        return len(self._enc.encode(text))

    def split_text(self, text: str) -> list[str]:
        text = text.strip()
        if not text:
            return []
        return self._merge(self._pieces(text, 0))

    def chunk(self, text: str, metadata: dict) -> list[Chunk]:
        """Split `text` into chunks; ids are left for the caller to assign."""
        return [
            Chunk(
                chunk_id="",
                text=piece,
                index=i,
                metadata=dict(metadata),
                token_count=self.count_tokens(piece),
            )
            for i, piece in enumerate(self.split_text(text))
        ]

    def _pieces(self, text: str, level: int) -> list[str]:
        if self.count_tokens(text) <= self._max_tokens:
            return [text]
        if level >= len(SEPARATORS):
            return self._hard_split(text)

        sep = SEPARATORS[level]
        parts = text.split(sep)
        if len(parts) == 1:
            return self._pieces(text, level + 1)

        pieces: list[str] = []
        for i, part in enumerate(parts):
            if i < len(parts) - 1:
                part += sep
            if not part.strip():
                continue
            pieces.extend(self._pieces(part, level + 1))
        return pieces

    def _hard_split(self, text: str) -> list[str]:
        tokens = self._enc.encode(text)
        return [
            self._enc.decode(tokens[i : i + self._max_tokens])
            for i in range(0, len(tokens), self._max_tokens)
        ]

    def _tail(self, text: str) -> str:
        if self._overlap_tokens <= 0:
            return ""
        tokens = self._enc.encode(text)
        return self._enc.decode(tokens[-self._overlap_tokens :])

    def _merge(self, pieces: list[str]) -> list[str]:
        chunks: list[str] = []
        current = ""
        for piece in pieces:
            candidate = current + piece
            if not current or self.count_tokens(candidate) <= self._max_tokens:
                current = candidate
                continue
            chunks.append(current.strip())
            overlap = self._tail(current)
            if overlap and self.count_tokens(overlap + piece) <= self._max_tokens:
                current = overlap + piece
            else:
                current = piece
        if current.strip():
            chunks.append(current.strip())
        return chunks

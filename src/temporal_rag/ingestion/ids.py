"""Deterministic chunk identifiers, so re-ingesting the same text upserts in place."""

from __future__ import annotations

import hashlib


def stable_chunk_id(source: str, content: str, index: int | None = None) -> str:
    digest = hashlib.sha256()
    digest.update(source.encode("utf-8"))
    digest.update(b"\n")
    if index is not None:
        digest.update(str(index).encode("utf-8"))
        digest.update(b"\n")
    digest.update(content.encode("utf-8"))
    return digest.hexdigest()[:32]

"""Maximal Marginal Relevance (MMR) over precomputed embeddings.

MMR picks items one at a time, scoring every remaining candidate as

    MMR = λ * relevance(d) - (1 - λ) * max[cos(d, s) for s in selected]

so that each pick is relevant to the query but unlike what has already
been chosen. λ = 1 reduces to top-k by relevance; λ = 0 to pure novelty
after the first pick.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from temporal_rag.exceptions import EmbeddingDimensionMismatch
from temporal_rag.observability.logger import get_logger

logger = get_logger("mmr")


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity, defined as 0 when either vector has zero norm."""
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    norm_a = np.linalg.norm(va)
    norm_b = np.linalg.norm(vb)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return float(np.dot(va, vb) / (norm_a * norm_b))


def distances_to_relevance(distances: Sequence[float]) -> list[float]:
    """Map "smaller is closer" distances onto [0, 1] relevance scores."""
    if not distances:
        return []
    max_distance = max(distances)
    if max_distance == 0:
        return [0.0] * len(distances)
    return [1.0 - d / max_distance for d in distances]


def _pairwise_cosine(matrix: np.ndarray) -> np.ndarray:
    norms = np.linalg.norm(matrix, axis=1)
    safe = np.where(norms == 0, 1.0, norms)
    unit = matrix / safe[:, None]
    sims = unit @ unit.T
    zero = norms == 0
    sims[zero, :] = 0.0
    sims[:, zero] = 0.0
    return sims


def mmr_select(
    query_embedding: Sequence[float],
    candidate_embeddings: Sequence[Sequence[float]],
    candidate_relevance: Sequence[float],
    k: int,
    lambda_mult: float,
) -> list[int]:
    """Greedy MMR selection.

    Args:
        query_embedding: Query vector; fixes the expected dimensionality.
        candidate_embeddings: One vector per candidate in the pool.
        candidate_relevance: Relevance of each candidate to the query.
        k: Number of items to select.
        lambda_mult: Trade-off, 1.0 = pure relevance, 0.0 = pure diversity.

    Returns:
        Indices into the pool in selection order. Ties go to the earliest index.
        At lambda_mult = 0 every first-round score is 0, so the first pick is
        index 0; callers pass the pool in ascending-distance order so that
        this is the most relevant candidate.
    """
    if not 0.0 <= lambda_mult <= 1.0:
        raise ValueError(f"lambda_mult must be within [0, 1], got {lambda_mult}")
    if len(candidate_embeddings) != len(candidate_relevance):
        raise ValueError(
            f"{len(candidate_embeddings)} embeddings but {len(candidate_relevance)} relevance scores"
        )
    if k <= 0 or not candidate_embeddings:
        return []

    dim = len(query_embedding)
    for i, emb in enumerate(candidate_embeddings):
        if len(emb) != dim:
            raise EmbeddingDimensionMismatch(
                f"candidate {i} has dimension {len(emb)}, query has {dim}"
            )

    matrix = np.asarray(candidate_embeddings, dtype=np.float64)
    relevance = np.asarray(candidate_relevance, dtype=np.float64)
    sims = _pairwise_cosine(matrix)

    pool_size = len(candidate_embeddings)
    available = np.ones(pool_size, dtype=bool)
    # Running max similarity to the selected set; meaningless until the first pick.
    max_sim = np.full(pool_size, -np.inf)
    selected: list[int] = []

    while len(selected) < k and available.any():
        penalty = max_sim if selected else np.zeros(pool_size)
        scores = lambda_mult * relevance - (1.0 - lambda_mult) * penalty
        scores = np.where(available, scores, -np.inf)
        best = int(np.argmax(scores))

        selected.append(best)
        available[best] = False
        max_sim = np.maximum(max_sim, sims[:, best])

    logger.debug("mmr_selected", pool_size=pool_size, k=k, lambda_mult=lambda_mult, selected=selected)
    return selected

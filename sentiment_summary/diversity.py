from __future__ import annotations
from typing import List, Sequence
import logging
import math
import numpy as np
from .datatypes import TermVector
from .features import cosine_similarity, document_vector

logger = logging.getLogger(__name__)

DEFAULT_LAMBDA = 0.7

def relevance_scores(vectors: Sequence[TermVector]) -> List[float]:
    """Cosine similarity of each sentence vector to the aggregate document vector."""
    doc_vec = document_vector(vectors)
    return [cosine_similarity(vec, doc_vec) for vec in vectors]

def mmr_select(relevance: Sequence[float],
               simM: np.ndarray,
               k: int,
               mmr_lambda: float = DEFAULT_LAMBDA) -> List[int]:
    """
    Greedy Maximum Marginal Relevance selection.

    MMR(i) = lambda * relevance(i) - (1 - lambda) * sum_{s in selected} sim(i, s)

    Already selected sentences score -inf. Ties go to the lowest index.
    Returns indices in selection order, at most ``min(k, len(relevance))``.
    """
    n = len(relevance)
    selected: List[int] = []
    chosen = set()
    for _ in range(min(k, n)):
        best_idx, best_score = -1, -math.inf
        for i in range(n):
            if i in chosen:
                continue
            redundancy = sum(float(simM[i, s]) for s in selected)
            score = mmr_lambda * relevance[i] - (1.0 - mmr_lambda) * redundancy
            # strict '>' keeps the lowest index on ties
            if best_idx < 0 or score > best_score:
                best_idx, best_score = i, score
        selected.append(best_idx)
        chosen.add(best_idx)
    logger.debug("MMR selected %s (lambda=%.2f)", selected, mmr_lambda)
    return selected

from __future__ import annotations
from typing import List, Optional, Sequence
import logging
import numpy as np
from .datatypes import TermVector
from .exceptions import DimensionError, ValidationError
from .features import term_sentence_matrix

logger = logging.getLogger(__name__)

LSA_MODES = ("broadcast", "projection")

def lsa_scores(vectors: Sequence[TermVector],
               mode: str = "broadcast",
               n_factors: Optional[int] = None) -> List[float]:
    """
    Latent Semantic Analysis scores from the SVD of the terms x sentences matrix.

    Modes:
      - broadcast: sum of squared singular values (truncated to the sentence
        count), given identically to every sentence
      - projection: sqrt(sum_k (sigma_k * V[k, i])^2) per sentence over the
        first ``n_factors`` latent topics

    Raises:
        DimensionError: if the matrix has no terms (e.g. only stop-words)
    """
    if mode not in LSA_MODES:
        raise ValidationError(f"Unknown LSA mode: {mode}")
    n = len(vectors)
    terms, A = term_sentence_matrix(vectors)
    if n == 0 or not terms:
        raise DimensionError(f"Cannot run LSA on a {len(terms)} x {n} term-sentence matrix")

    _, sigma, vt = np.linalg.svd(A, full_matrices=False)
    logger.debug("LSA: %d terms x %d sentences, %d singular values", len(terms), n, len(sigma))

    if mode == "broadcast":
        sigma = sigma[:n]
        total = float(np.sum(sigma ** 2))
        return [total] * n

    k = len(sigma) if n_factors is None else max(1, min(n_factors, len(sigma)))
    weighted = sigma[:k, None] * vt[:k, :]
    return [float(v) for v in np.sqrt(np.sum(weighted ** 2, axis=0))]

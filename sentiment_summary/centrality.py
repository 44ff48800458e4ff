from __future__ import annotations
from typing import List, Optional
import logging
import numpy as np
from .datatypes import Document, Graph

logger = logging.getLogger(__name__)

LEXRANK_ITERATIONS = 100
TEXTRANK_ITERATIONS = 20
DEFAULT_DAMPING = 0.85

def lexrank_scores(graph: Graph,
                   damping: float = DEFAULT_DAMPING,
                   iterations: int = LEXRANK_ITERATIONS,
                   tol: Optional[float] = None) -> List[float]:
    """
    LexRank centrality over the thresholded, unweighted sentence graph.

    Formula: p_i(t+1) = (1-d)/N + d * sum_j( edge(j,i) * p_j(t) / degree(j) )

    Runs a fixed number of iterations unless ``tol`` is given, in which case
    it stops as soon as the L1 change between two iterations is below it.
    The result is normalized to sum to 1: isolated nodes (degree clamped to 1)
    leak probability mass, so an edgeless graph ends uniform at 1/N.

    Args:
        graph: Graph built by ``graphing.build_graph``
        damping: Probability of following an edge rather than jumping
        iterations: Maximum number of iterations
        tol: Optional early-stop tolerance

    Returns:
        List of LexRank probabilities for each sentence
    """
    n = len(graph.nodes)
    if n == 0:
        return []

    p = [1.0 / n] * n

    adj_list = [[] for _ in range(n)]
    for edge in graph.edges:
        adj_list[edge.i].append(edge.j)
        adj_list[edge.j].append(edge.i)
    degrees = graph.degrees or [max(1, len(a)) for a in adj_list]

    done = 0
    for _ in range(iterations):
        new_p = [(1.0 - damping) / n] * n
        for i in range(n):
            for j in adj_list[i]:
                new_p[i] += damping * (p[j] / degrees[j])
        diff = sum(abs(new_p[i] - p[i]) for i in range(n))
        p = new_p
        done += 1
        if tol is not None and diff < tol:
            break

    total = sum(p)
    if total > 0:
        p = [v / total for v in p]
    logger.debug("LexRank finished after %d iterations", done)
    return p

def textrank_scores(doc: Document,
                    simM: np.ndarray,
                    damping: float = DEFAULT_DAMPING,
                    iterations: int = TEXTRANK_ITERATIONS,
                    tol: Optional[float] = None) -> List[float]:
    """
    TextRank over raw cosine similarities, normalized by sentence token length.

    Formula: s_i(t+1) = (1-d) + d * sum_{j != i, sim(i,j) > 0}( sim(i,j) * s_j(t) / len(j) )

    Unlike LexRank the scores are relative importance values starting at 1.0,
    not a probability distribution.
    """
    n = len(doc.sentences)
    if n == 0:
        return []

    lengths = [max(1, len(s.tokens)) for s in doc.sentences]
    scores = [1.0] * n

    done = 0
    for _ in range(iterations):
        new_scores = [0.0] * n
        for i in range(n):
            acc = 0.0
            for j in range(n):
                w = simM[i, j]
                if i != j and w > 0:
                    acc += w * scores[j] / lengths[j]
            new_scores[i] = (1.0 - damping) + damping * acc
        diff = sum(abs(new_scores[i] - scores[i]) for i in range(n))
        scores = new_scores
        done += 1
        if tol is not None and diff < tol:
            break

    logger.debug("TextRank finished after %d iterations", done)
    return [float(s) for s in scores]

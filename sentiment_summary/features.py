from __future__ import annotations
from typing import Dict, List, Sequence, Tuple
from collections import Counter
import logging
import math
import numpy as np
from .datatypes import Document, TermVector
from .exceptions import ValidationError

logger = logging.getLogger(__name__)

WEIGHTINGS = ("tf", "tfidf")

def _compute_tf(tokens: List[str], tf_mode: str = "raw") -> Dict[str, float]:
    """
    TF:
      - raw: count
      - sublinear: 1 + log(count)
      - norm: count / |d|
    """
    tf_counts = Counter(tokens)
    if not tf_counts:
        return {}

    if tf_mode == "raw":
        tf_scores = {t: float(c) for t, c in tf_counts.items()}
    elif tf_mode == "sublinear":
        tf_scores = {t: (1.0 + math.log(c)) for t, c in tf_counts.items() if c > 0}
    elif tf_mode == "norm":
        total = sum(tf_counts.values())
        tf_scores = {t: (c / total) for t, c in tf_counts.items()}
    else:
        raise ValidationError(f"Unknown tf_mode: {tf_mode}")

    return tf_scores


def _compute_df(token_lists: Sequence[List[str]]) -> Counter:
    df: Counter = Counter()
    for tokens in token_lists:
        df.update(set(tokens))
    return df


def _compute_idf(df: Counter, n_sentences: int) -> Dict[str, float]:
    """
    IDF = log(N / DF), each sentence counted as one 'document'.
    Every term in ``df`` appears at least once, so DF >= 1.
    """
    n = max(1, n_sentences)
    return {term: math.log(n / count) for term, count in df.items()}


def build_term_vectors(doc: Document,
                       weighting: str = "tfidf",
                       tf_mode: str = "raw",
                       min_df: float = 0.0) -> List[TermVector]:
    """Build one sparse term vector per sentence of ``doc``.

    The corpus is the sentence set of this document only. Terms whose
    document-frequency fraction is below ``min_df`` are dropped. The vectors
    are also stored on each ``Sentence.tf_idf_vector``.

    Args:
        doc: Preprocessed document (tokens already stop-word filtered)
        weighting: "tfidf" (tf * log(N/df)) or "tf" (term frequency only)
        tf_mode: "raw" | "sublinear" | "norm"
        min_df: Minimum document-frequency fraction in [0, 1]

    Returns:
        List of term vectors, in sentence order
    """
    if weighting not in WEIGHTINGS:
        raise ValidationError(f"Unknown weighting: {weighting}")
    if not 0.0 <= min_df <= 1.0:
        raise ValidationError(f"min_df must be within [0, 1], got {min_df}")

    n = len(doc.sentences)
    df = _compute_df([s.tokens for s in doc.sentences])
    if min_df > 0.0 and n:
        df = Counter({t: c for t, c in df.items() if c / n >= min_df})
    idf = _compute_idf(df, n)

    vectors: List[TermVector] = []
    for s in doc.sentences:
        tf = _compute_tf([t for t in s.tokens if t in df], tf_mode=tf_mode)
        if weighting == "tfidf":
            vec = {t: w * idf[t] for t, w in tf.items()}
        else:
            vec = dict(tf)
        s.tf_idf_vector = vec
        vectors.append(vec)

    logger.debug("Built %s vectors: %d sentences, %d terms", weighting, n, len(df))
    return vectors


def cosine_similarity(v1: TermVector, v2: TermVector) -> float:
    """Cosine similarity for sparse vectors (dict term -> weight); 0.0 if either norm is 0."""
    if not v1 or not v2:
        return 0.0
    common = set(v1) & set(v2)
    if not common:
        return 0.0
    dot = sum(v1[t] * v2[t] for t in common)
    n1 = math.sqrt(sum(w*w for w in v1.values()))
    n2 = math.sqrt(sum(w*w for w in v2.values()))
    if n1 == 0.0 or n2 == 0.0:
        return 0.0
    return dot / (n1 * n2)


def compute_similarity_matrix(vectors: Sequence[TermVector]) -> np.ndarray:
    """
    Symmetric N x N cosine similarity matrix with a zero diagonal
    (self-similarity is left out of degree and centrality bookkeeping).
    """
    n = len(vectors)
    M = np.zeros((n, n), dtype=float)
    for i in range(n):
        for j in range(i+1, n):
            M[i, j] = M[j, i] = cosine_similarity(vectors[i], vectors[j])
    return M


def document_vector(vectors: Sequence[TermVector]) -> TermVector:
    """Aggregate document vector: term-wise sum of all sentence vectors."""
    acc: TermVector = {}
    for vec in vectors:
        for term, w in vec.items():
            acc[term] = acc.get(term, 0.0) + w
    return acc


def term_sentence_matrix(vectors: Sequence[TermVector]) -> Tuple[List[str], np.ndarray]:
    """Dense terms x sentences matrix; terms in order of first appearance."""
    terms: List[str] = []
    index: Dict[str, int] = {}
    for vec in vectors:
        for term in vec:
            if term not in index:
                index[term] = len(terms)
                terms.append(term)
    A = np.zeros((len(terms), len(vectors)), dtype=float)
    for j, vec in enumerate(vectors):
        for term, w in vec.items():
            A[index[term], j] = w
    return terms, A

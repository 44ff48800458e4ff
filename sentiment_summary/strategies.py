from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Type
import logging
import math
from .datatypes import Document
from .exceptions import ValidationError
from .features import build_term_vectors, compute_similarity_matrix
from .graphing import build_graph
from .centrality import lexrank_scores, textrank_scores, DEFAULT_DAMPING, LEXRANK_ITERATIONS, TEXTRANK_ITERATIONS
from .latent import lsa_scores
from .diversity import relevance_scores, mmr_select, DEFAULT_LAMBDA

logger = logging.getLogger(__name__)

@dataclass
class RankingConfig:
    weighting: str = "tfidf"
    tf_mode: str = "raw"
    min_df: float = 0.0
    damping: float = DEFAULT_DAMPING
    lexrank_iterations: int = LEXRANK_ITERATIONS
    textrank_iterations: int = TEXTRANK_ITERATIONS
    tol: Optional[float] = None  # None keeps the fixed iteration count
    lsa_mode: str = "broadcast"
    lsa_factors: Optional[int] = None
    num_keywords: int = 10
    title_fraction: float = 0.01
    max_title_sentences: int = 3
    max_workers: Optional[int] = None  # sentiment fan-out; 1 = sequential


class RankingStrategy:
    """Produces a base score per sentence and picks the summary from adjusted scores.

    ``combiner`` names the default sentiment combiner for the strategy and
    ``preserves_document_order`` tells whether the selection is re-sorted by
    sentence index before output.
    """
    name = ""
    combiner = "additive"
    preserves_document_order = True

    def __init__(self, config: Optional[RankingConfig] = None):
        self.config = config or RankingConfig()

    def vectorize(self, doc: Document):
        return build_term_vectors(doc, weighting=self.config.weighting,
                                  tf_mode=self.config.tf_mode, min_df=self.config.min_df)

    def base_scores(self, doc: Document) -> List[float]:
        raise NotImplementedError

    def candidates(self, doc: Document) -> List[int]:
        return list(range(len(doc.sentences)))

    def select(self, doc: Document, adjusted: List[float], k: int) -> List[int]:
        # descending by score, ascending index on ties
        ranked = sorted(self.candidates(doc), key=lambda i: (-adjusted[i], i))
        top = ranked[:k]
        if self.preserves_document_order:
            top.sort()
        return top


def extract_keywords(doc: Document, num_keywords: int = 10) -> List[str]:
    """Most frequent tokens across the document; ties keep first appearance."""
    tf = Counter()
    for s in doc.sentences:
        tf.update(s.tokens)
    return [w for w, _ in tf.most_common(num_keywords)]

def keyword_hits(tokens: List[str], keywords) -> int:
    present = set(tokens)
    return sum(1 for k in keywords if k in present)


class KeywordFrequencyStrategy(RankingStrategy):
    """Number of the document's top keywords each sentence contains."""
    name = "extractive"

    def base_scores(self, doc: Document) -> List[float]:
        keywords = extract_keywords(doc, self.config.num_keywords)
        logger.debug("Keywords: %s", keywords)
        return [float(keyword_hits(s.tokens, keywords)) for s in doc.sentences]


class KeywordWeightedStrategy(KeywordFrequencyStrategy):
    """Keyword hits plus hits on words of the leading "title" sentences.

    The title is the first ceil(title_fraction * N) sentences, capped at
    ``max_title_sentences``; title sentences are not selectable unless the
    whole document is title.
    """
    name = "extractive-weighted"

    def title_length(self, doc: Document) -> int:
        n = len(doc.sentences)
        return min(math.ceil(n * self.config.title_fraction), self.config.max_title_sentences)

    def title_words(self, doc: Document) -> Set[str]:
        words: Set[str] = set()
        for s in doc.sentences[:self.title_length(doc)]:
            words.update(s.tokens)
        return words

    def base_scores(self, doc: Document) -> List[float]:
        keywords = extract_keywords(doc, self.config.num_keywords)
        title = self.title_words(doc)
        return [float(keyword_hits(s.tokens, keywords) + keyword_hits(s.tokens, title))
                for s in doc.sentences]

    def candidates(self, doc: Document) -> List[int]:
        n = len(doc.sentences)
        start = self.title_length(doc)
        return list(range(start, n)) if start < n else list(range(n))


class LSAStrategy(RankingStrategy):
    name = "lsa"

    def base_scores(self, doc: Document) -> List[float]:
        vectors = self.vectorize(doc)
        return lsa_scores(vectors, mode=self.config.lsa_mode, n_factors=self.config.lsa_factors)


class LexRankStrategy(RankingStrategy):
    name = "lexrank"
    combiner = "relative"

    def base_scores(self, doc: Document) -> List[float]:
        simM = compute_similarity_matrix(self.vectorize(doc))
        graph = build_graph(doc, simM)
        return lexrank_scores(graph, damping=self.config.damping,
                              iterations=self.config.lexrank_iterations, tol=self.config.tol)


class TextRankStrategy(RankingStrategy):
    name = "textrank"
    combiner = "relative"

    def base_scores(self, doc: Document) -> List[float]:
        simM = compute_similarity_matrix(self.vectorize(doc))
        return textrank_scores(doc, simM, damping=self.config.damping,
                               iterations=self.config.textrank_iterations, tol=self.config.tol)


class MMRStrategy(RankingStrategy):
    """Relevance to the document vector, then greedy MMR selection.

    Output keeps selection order instead of document order.
    """
    name = "mmr"
    preserves_document_order = False

    def __init__(self, config: Optional[RankingConfig] = None, mmr_lambda: float = DEFAULT_LAMBDA):
        super().__init__(config)
        self.mmr_lambda = mmr_lambda

    def base_scores(self, doc: Document) -> List[float]:
        return relevance_scores(self.vectorize(doc))

    def select(self, doc: Document, adjusted: List[float], k: int) -> List[int]:
        simM = compute_similarity_matrix(doc.vectors)
        return mmr_select(adjusted, simM, k, mmr_lambda=self.mmr_lambda)


STRATEGIES: Dict[str, Type[RankingStrategy]] = {
    "extractive": KeywordFrequencyStrategy,
    "keyword-frequency": KeywordFrequencyStrategy,
    "extractive-weighted": KeywordWeightedStrategy,
    "keyword-weighted": KeywordWeightedStrategy,
    "lsa": LSAStrategy,
    "lexrank": LexRankStrategy,
    "textrank": TextRankStrategy,
    "mmr": MMRStrategy,
}

def get_strategy(name: str,
                 config: Optional[RankingConfig] = None,
                 mmr_lambda: Optional[float] = None) -> RankingStrategy:
    try:
        cls = STRATEGIES[name]
    except KeyError:
        raise ValidationError(
            f"Unknown strategy '{name}', expected one of {sorted(STRATEGIES)}"
        ) from None
    if cls is MMRStrategy:
        return MMRStrategy(config, mmr_lambda=DEFAULT_LAMBDA if mmr_lambda is None else mmr_lambda)
    return cls(config)

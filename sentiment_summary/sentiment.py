"""Sentiment scoring and rank adjustment.

This module provides:
- sentiment_rank_adjustment: map a sentiment score to a rank delta
- additive / relative combiners for merging the delta with a base score
- sentiment engines (VADER, transformers pipeline, plain lexicon)
- ModelCache: lazily loaded, single-flight model holder with an unload hook
- score_sentiments: concurrent per-sentence scoring keyed by sentence index
"""

from __future__ import annotations
import logging
import math
import re
import threading
from concurrent.futures import ThreadPoolExecutor
from numbers import Real
from typing import Any, Callable, Dict, List, Optional, Sequence

from vaderSentiment.vaderSentiment import SentimentIntensityAnalyzer

from .exceptions import ExternalEngineError, ValidationError

logger = logging.getLogger(__name__)

SentimentEngine = Callable[[str], float]
Combiner = Callable[[float, float], float]

DEFAULT_HF_MODEL = "distilbert-base-uncased-finetuned-sst-2-english"


def sentiment_rank_adjustment(score: float,
                              positive_threshold: float,
                              negative_threshold: float,
                              positive_boost: float,
                              negative_boost: float) -> float:
    """Rank delta for one sentence.

    score >= positive_threshold -> positive_boost * score
    score <= negative_threshold -> negative_boost * score
    otherwise                   -> 0
    """
    if score >= positive_threshold:
        return positive_boost * score
    if score <= negative_threshold:
        return negative_boost * score
    return 0.0


def additive_rank(base: float, delta: float) -> float:
    """adjusted = base + delta; suits scores that can be zero or negative."""
    return base + delta


def relative_rank(base: float, delta: float) -> float:
    """adjusted = base + base * delta; suits always-positive scores."""
    return base + base * delta


COMBINERS: Dict[str, Combiner] = {
    "additive": additive_rank,
    "relative": relative_rank,
}


def get_combiner(name: str) -> Combiner:
    try:
        return COMBINERS[name]
    except KeyError:
        raise ValidationError(
            f"Unknown combiner '{name}', expected one of {sorted(COMBINERS)}"
        ) from None


class ModelCache:
    """Holds one lazily loaded model.

    ``get`` loads on first use; concurrent callers wait on a lock so at most
    one load is ever in flight. ``unload`` drops the instance so the next
    ``get`` loads it again.
    """

    def __init__(self, loader: Callable[[], Any], name: str = "model"):
        self._loader = loader
        self._name = name
        self._model = None
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._model is not None

    def get(self) -> Any:
        model = self._model
        if model is not None:
            return model
        with self._lock:
            if self._model is None:
                logger.info("Loading %s", self._name)
                try:
                    self._model = self._loader()
                except Exception as e:
                    logger.error("Failed to load %s: %s", self._name, e)
                    raise ExternalEngineError(f"Failed to load {self._name}: {e}") from e
            return self._model

    def unload(self) -> None:
        with self._lock:
            if self._model is not None:
                logger.info("Unloading %s", self._name)
            self._model = None


class VaderSentimentEngine:
    """VADER compound polarity, already within [-1, 1]."""

    def __init__(self):
        self._analyzer = SentimentIntensityAnalyzer()

    def __call__(self, text: str) -> float:
        return float(self._analyzer.polarity_scores(text)["compound"])


class TransformersSentimentEngine:
    """Hugging Face ``sentiment-analysis`` pipeline mapped onto [-1, 1].

    POSITIVE labels keep their confidence, NEGATIVE labels are negated,
    anything else scores 0. The pipeline lives in a ``ModelCache`` which can
    be shared between engines and unloaded explicitly.
    """

    def __init__(self, model: str = DEFAULT_HF_MODEL, cache: Optional[ModelCache] = None):
        self.model = model
        self.cache = cache or ModelCache(self._load, name=f"sentiment model '{model}'")

    def _load(self):
        from transformers import pipeline
        return pipeline("sentiment-analysis", model=self.model)

    def __call__(self, text: str) -> float:
        classifier = self.cache.get()
        result = classifier(text)
        if isinstance(result, list):
            result = result[0]
        label = str(result.get("label", "")).upper()
        score = float(result.get("score", 0.0))
        if label.startswith("POS"):
            normalized = score
        elif label.startswith("NEG"):
            normalized = -score
        else:
            normalized = 0.0
        return max(-1.0, min(1.0, normalized))


_LEXICON_WORD_RE = re.compile(r"[a-z']+")

class LexiconSentimentEngine:
    """Sum of word valences divided by ``scale`` and clamped to [-1, 1]."""

    def __init__(self, lexicon: Dict[str, float], scale: float = 5.0):
        if scale <= 0:
            raise ValidationError("scale must be positive")
        self.lexicon = {k.lower(): float(v) for k, v in lexicon.items()}
        self.scale = scale

    def __call__(self, text: str) -> float:
        total = sum(self.lexicon.get(w, 0.0) for w in _LEXICON_WORD_RE.findall(text.lower()))
        return max(-1.0, min(1.0, total / self.scale))


def _checked_score(engine: SentimentEngine, idx: int, text: str) -> float:
    try:
        score = engine(text)
    except ExternalEngineError:
        raise
    except Exception as e:
        logger.error("Sentiment engine failed on sentence %d: %s", idx, e)
        raise ExternalEngineError(f"Sentiment engine failed on sentence {idx}: {e}") from e
    if isinstance(score, bool) or not isinstance(score, Real) or not math.isfinite(score):
        raise ExternalEngineError(f"Sentiment engine returned a non-numeric score for sentence {idx}: {score!r}")
    if not -1.0 <= score <= 1.0:
        raise ExternalEngineError(f"Sentiment score {score} for sentence {idx} is outside [-1, 1]")
    return float(score)


def score_sentiments(texts: Sequence[str],
                     engine: SentimentEngine,
                     max_workers: Optional[int] = None) -> List[float]:
    """Score every sentence, fanning out over a thread pool.

    Results are stored by sentence index, so completion order does not
    matter. Any engine failure fails the whole call.
    """
    n = len(texts)
    if n == 0:
        return []
    if max_workers == 1 or n == 1:
        return [_checked_score(engine, i, t) for i, t in enumerate(texts)]

    results: List[Optional[float]] = [None] * n
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {executor.submit(_checked_score, engine, i, t): i for i, t in enumerate(texts)}
        for future, i in futures.items():
            results[i] = future.result()
    return results

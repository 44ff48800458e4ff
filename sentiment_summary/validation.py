from __future__ import annotations
import math
from numbers import Integral, Real
from typing import Any, Optional
from .exceptions import ValidationError

def _check_unit_range(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
        raise ValidationError(f"Invalid {name} (not a number): {value!r}")
    if value < -1 or value > 1:
        raise ValidationError(f"Invalid {name} (outside of [-1, 1]): {value!r}")

def validate_summary_args(text: Any,
                          number_of_sentences: Any,
                          positive_sentiment_threshold: Any,
                          negative_sentiment_threshold: Any,
                          positive_rank_boost: Any,
                          negative_rank_boost: Any,
                          mmr_lambda: Optional[Any] = None) -> None:
    """Validate every summarization argument before any work starts.

    Raises:
        ValidationError: on empty text, K that is not an integer >= 1, or a
            threshold / boost / lambda that is not a finite number in [-1, 1]
    """
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("Invalid or empty text input")

    if isinstance(number_of_sentences, bool) or not isinstance(number_of_sentences, Integral):
        raise ValidationError(f"Invalid number_of_sentences (not an integer): {number_of_sentences!r}")
    if number_of_sentences < 1:
        raise ValidationError(f"Invalid number_of_sentences (must be >= 1): {number_of_sentences!r}")

    _check_unit_range("positive_sentiment_threshold", positive_sentiment_threshold)
    _check_unit_range("negative_sentiment_threshold", negative_sentiment_threshold)
    _check_unit_range("positive_rank_boost", positive_rank_boost)
    _check_unit_range("negative_rank_boost", negative_rank_boost)
    if mmr_lambda is not None:
        _check_unit_range("mmr_lambda", mmr_lambda)

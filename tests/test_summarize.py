"""
Tests for the ranking pipeline in summarize.py and strategies.py.
"""

import pytest

from sentiment_summary import (
    DimensionError,
    EmptyInputError,
    ExternalEngineError,
    RankingConfig,
    ValidationError,
    rank_sentences,
    ranking_table,
    sentiment_extractive_summary,
    sentiment_extractive_weighted_summary,
    sentiment_lexrank_summary,
    sentiment_lsa_summary,
    sentiment_mmr_summary,
    sentiment_summary,
    sentiment_textrank_summary,
)
from sentiment_summary.strategies import get_strategy

HAPPY_TEXT = "A happy result. A bad day. Another happy note."

ORDERED_STRATEGIES = ["extractive", "extractive-weighted", "lsa", "lexrank", "textrank"]
ALL_STRATEGIES = ORDERED_STRATEGIES + ["mmr"]


@pytest.mark.parametrize(
    "summarize",
    [sentiment_extractive_summary, sentiment_lsa_summary, sentiment_lexrank_summary, sentiment_textrank_summary],
)
def test_positive_sentences_outrank_negative(summarize, lexicon_engine):
    summary = summarize(HAPPY_TEXT, 2, 0, 0, 1, 0, sentiment_engine=lexicon_engine)
    assert summary == "A happy result. Another happy note."


def test_mmr_keeps_selection_order(lexicon_engine):
    summary = sentiment_mmr_summary(HAPPY_TEXT, 2, 0, 0, 1, 0, sentiment_engine=lexicon_engine)
    assert summary == "Another happy note. A happy result."


@pytest.mark.parametrize("strategy", ALL_STRATEGIES)
@pytest.mark.parametrize("k", [1, 3, 5])
def test_summary_size_never_exceeds_k(strategy, k, dog_text, lexicon_engine):
    ranked = rank_sentences(dog_text, k, 0.1, -0.1, 0.5, 0.5, strategy=strategy, sentiment_engine=lexicon_engine)
    selected = [r for r in ranked if r.selected]
    assert len(selected) == min(k, len(ranked))


@pytest.mark.parametrize("strategy", ORDERED_STRATEGIES)
def test_document_order_is_preserved(strategy, dog_text, lexicon_engine):
    ranked = rank_sentences(dog_text, 4, 0.1, -0.1, 0.5, 0.5, strategy=strategy, sentiment_engine=lexicon_engine)
    positions = [r.position for r in ranked if r.selected]
    assert positions == sorted(positions)
    summary = sentiment_summary(dog_text, 4, 0.1, -0.1, 0.5, 0.5, strategy=strategy, sentiment_engine=lexicon_engine)
    offsets = [dog_text.index(r.text) for r in ranked if r.selected]
    assert offsets == sorted(offsets)
    assert summary == " ".join(r.text for r in ranked if r.selected)


@pytest.mark.parametrize("strategy", ["extractive", "lsa", "lexrank", "textrank"])
def test_k_at_least_n_returns_whole_text(strategy, dog_text, lexicon_engine):
    summary = sentiment_summary(dog_text, 50, strategy=strategy, sentiment_engine=lexicon_engine)
    assert summary == dog_text.strip()


@pytest.mark.parametrize("strategy", ALL_STRATEGIES)
def test_repeated_calls_are_identical(strategy, dog_text, lexicon_engine):
    first = sentiment_summary(dog_text, 3, 0.1, -0.1, 0.4, -0.4, strategy=strategy, sentiment_engine=lexicon_engine)
    second = sentiment_summary(dog_text, 3, 0.1, -0.1, 0.4, -0.4, strategy=strategy, sentiment_engine=lexicon_engine)
    assert first == second


@pytest.mark.parametrize("strategy", ALL_STRATEGIES)
def test_increasing_positive_boost_never_lowers_positive_sentences(strategy, dog_text, lexicon_engine):
    def adjusted(boost):
        ranked = rank_sentences(dog_text, 3, 0.1, -0.1, boost, 0.0, strategy=strategy, sentiment_engine=lexicon_engine)
        return {r.idx: r.adjusted for r in ranked if r.sentiment >= 0.1}

    low, high = adjusted(0.2), adjusted(0.9)
    assert low
    for idx in low:
        assert high[idx] >= low[idx]


def test_negative_boost_promotes_negative_sentence(lexicon_engine):
    text = "Dogs are loyal. Dogs are a nightmare. Dogs are playful."
    assert sentiment_extractive_summary(text, 1, sentiment_engine=lexicon_engine) == "Dogs are loyal."
    summary = sentiment_extractive_summary(text, 1, 0.5, -0.1, 0, -1, sentiment_engine=lexicon_engine)
    assert summary == "Dogs are a nightmare."


def test_ties_break_by_lowest_index(lexicon_engine):
    text = "Alpha beta. Gamma delta. Epsilon zeta."
    summary = sentiment_extractive_summary(text, 2, sentiment_engine=lexicon_engine)
    assert summary == "Alpha beta. Gamma delta."


def test_weighted_strategy_skips_title_sentence(dog_text, lexicon_engine):
    ranked = rank_sentences(dog_text, 6, strategy="extractive-weighted", sentiment_engine=lexicon_engine)
    assert not ranked[0].selected
    assert sum(r.selected for r in ranked) == 6
    single = sentiment_extractive_weighted_summary("Only one sentence here.", 1, sentiment_engine=lexicon_engine)
    assert single == "Only one sentence here."


def test_default_combiners_per_strategy():
    assert get_strategy("extractive").combiner == "additive"
    assert get_strategy("lsa").combiner == "additive"
    assert get_strategy("mmr").combiner == "additive"
    assert get_strategy("lexrank").combiner == "relative"
    assert get_strategy("textrank").combiner == "relative"


def test_combiner_override(lexicon_engine):
    ranked = rank_sentences(HAPPY_TEXT, 2, 0, 0, 1, 0, strategy="lexrank", combiner="additive",
                            sentiment_engine=lexicon_engine)
    for r in ranked:
        assert r.adjusted == pytest.approx(r.base + r.delta)


def test_lsa_projection_mode_via_config(dog_text, lexicon_engine):
    ranked = rank_sentences(dog_text, 2, strategy="lsa", config=RankingConfig(lsa_mode="projection"),
                            sentiment_engine=lexicon_engine)
    assert len({round(r.base, 9) for r in ranked}) > 1


def test_lsa_all_stopwords_raises_dimension_error(lexicon_engine):
    with pytest.raises(DimensionError):
        sentiment_lsa_summary("It is what it is. This was that.", 1, sentiment_engine=lexicon_engine)


def test_sequential_and_concurrent_sentiment_agree(dog_text, lexicon_engine):
    kwargs = dict(strategy="textrank", sentiment_engine=lexicon_engine)
    seq = sentiment_summary(dog_text, 3, 0.1, -0.1, 0.5, 0.5, config=RankingConfig(max_workers=1), **kwargs)
    par = sentiment_summary(dog_text, 3, 0.1, -0.1, 0.5, 0.5, config=RankingConfig(max_workers=4), **kwargs)
    assert seq == par


def test_ranking_table(dog_text, lexicon_engine):
    df = ranking_table(dog_text, 3, strategy="lexrank", sentiment_engine=lexicon_engine)
    assert len(df) == 7
    assert int(df["Selected"].sum()) == 3
    assert list(df.columns[:3]) == ["Index", "Sentence", "Base Score"]


@pytest.mark.parametrize("k", [0, -1, 1.5, True, "3", None])
def test_invalid_k_fails_before_tokenization(k, lexicon_engine):
    def tokenizer(text):
        raise AssertionError("tokenizer must not run")

    with pytest.raises(ValidationError):
        sentiment_summary(HAPPY_TEXT, k, sentence_tokenizer=tokenizer, sentiment_engine=lexicon_engine)


@pytest.mark.parametrize(
    "args",
    [
        (1.5, 0, 0, 0),
        (0, -1.01, 0, 0),
        (0, 0, 2, 0),
        (0, 0, 0, -3),
        (float("nan"), 0, 0, 0),
        ("0.5", 0, 0, 0),
    ],
)
def test_invalid_thresholds_and_boosts(args, lexicon_engine):
    def tokenizer(text):
        raise AssertionError("tokenizer must not run")

    with pytest.raises(ValidationError):
        sentiment_summary(HAPPY_TEXT, 2, *args, sentence_tokenizer=tokenizer, sentiment_engine=lexicon_engine)


@pytest.mark.parametrize("text", ["", "   ", None, 42])
def test_invalid_text(text, lexicon_engine):
    with pytest.raises(ValidationError):
        sentiment_summary(text, 2, sentiment_engine=lexicon_engine)


def test_invalid_lambda_and_strategy(lexicon_engine):
    with pytest.raises(ValidationError):
        sentiment_mmr_summary(HAPPY_TEXT, 2, mmr_lambda=1.5, sentiment_engine=lexicon_engine)
    with pytest.raises(ValidationError):
        sentiment_summary(HAPPY_TEXT, 2, strategy="bogus", sentiment_engine=lexicon_engine)
    with pytest.raises(ValueError):
        sentiment_summary(HAPPY_TEXT, 2, combiner="bogus", sentiment_engine=lexicon_engine)


def test_empty_tokenization_raises(lexicon_engine):
    with pytest.raises(EmptyInputError):
        sentiment_summary("Some text.", 2, sentence_tokenizer=lambda text: [], sentiment_engine=lexicon_engine)


def test_engine_failure_fails_whole_call():
    def engine(text):
        raise ConnectionError("sentiment service unavailable")

    with pytest.raises(ExternalEngineError):
        sentiment_lexrank_summary(HAPPY_TEXT, 2, sentiment_engine=engine)

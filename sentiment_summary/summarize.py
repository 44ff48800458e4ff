from __future__ import annotations
from typing import List, Optional
import logging
import pandas as pd
from .datatypes import RankedSentence
from .exceptions import EmptyInputError
from .preprocessing import preprocess_text, PreprocessConfig, SentenceTokenizer
from .sentiment import (SentimentEngine, VaderSentimentEngine, get_combiner,
                        score_sentiments, sentiment_rank_adjustment)
from .strategies import RankingConfig, get_strategy, MMRStrategy
from .validation import validate_summary_args
from .diversity import DEFAULT_LAMBDA

logger = logging.getLogger(__name__)

def rank_sentences(text: str,
                   number_of_sentences: int = 5,
                   positive_sentiment_threshold: float = 0,
                   negative_sentiment_threshold: float = 0,
                   positive_rank_boost: float = 0,
                   negative_rank_boost: float = 0,
                   *,
                   strategy: str = "extractive",
                   mmr_lambda: Optional[float] = None,
                   sentiment_engine: Optional[SentimentEngine] = None,
                   combiner: Optional[str] = None,
                   config: Optional[RankingConfig] = None,
                   preprocess_config: Optional[PreprocessConfig] = None,
                   sentence_tokenizer: Optional[SentenceTokenizer] = None) -> List[RankedSentence]:
    """
    Score, sentiment-adjust and select sentences.

    Args:
        text: Input text
        number_of_sentences: Summary size K (integer >= 1)
        positive_sentiment_threshold: Sentiment at or above which the positive boost applies
        negative_sentiment_threshold: Sentiment at or below which the negative boost applies
        positive_rank_boost: Multiplier for positive sentiment
        negative_rank_boost: Multiplier for negative sentiment
        strategy: extractive | extractive-weighted | lsa | lexrank | textrank | mmr
        mmr_lambda: Relevance/diversity trade-off (mmr only)
        sentiment_engine: Callable text -> score in [-1, 1]; VADER when omitted
        combiner: "additive" or "relative"; the strategy's default when omitted
        config: Ranking parameters
        preprocess_config: Tokenization parameters
        sentence_tokenizer: Callable text -> sentences

    Returns:
        One RankedSentence per sentence, in document order
    """
    validate_summary_args(text, number_of_sentences,
                          positive_sentiment_threshold, negative_sentiment_threshold,
                          positive_rank_boost, negative_rank_boost, mmr_lambda)
    config = config or RankingConfig()
    ranker = get_strategy(strategy, config, mmr_lambda=mmr_lambda)
    combine = get_combiner(combiner or ranker.combiner)

    doc = preprocess_text(text, cfg=preprocess_config, sentence_tokenizer=sentence_tokenizer)
    if not doc.sentences:
        raise EmptyInputError("Tokenization produced no sentences")

    base = ranker.base_scores(doc)

    engine = sentiment_engine or VaderSentimentEngine()
    sentiments = score_sentiments([s.text for s in doc.sentences], engine, max_workers=config.max_workers)

    ranked: List[RankedSentence] = []
    for s, b, score in zip(doc.sentences, base, sentiments):
        s.sentiment = score
        delta = sentiment_rank_adjustment(score, positive_sentiment_threshold, negative_sentiment_threshold,
                                          positive_rank_boost, negative_rank_boost)
        ranked.append(RankedSentence(idx=s.idx, text=s.text, base=float(b), sentiment=score,
                                     delta=delta, adjusted=combine(float(b), delta)))

    selected = ranker.select(doc, [r.adjusted for r in ranked], number_of_sentences)
    for pos, idx in enumerate(selected):
        ranked[idx].selected = True
        ranked[idx].position = pos

    logger.info("Ranked %d sentences with %s, selected %s", len(ranked), ranker.name, selected)
    return ranked

def generate_summary(ranked: List[RankedSentence]) -> str:
    chosen = sorted((r for r in ranked if r.selected), key=lambda r: r.position)
    return " ".join(r.text.strip() for r in chosen).strip()

def sentiment_summary(text: str,
                      number_of_sentences: int = 5,
                      positive_sentiment_threshold: float = 0,
                      negative_sentiment_threshold: float = 0,
                      positive_rank_boost: float = 0,
                      negative_rank_boost: float = 0,
                      **kwargs) -> str:
    """Sentiment-aware extractive summary with the strategy named by ``strategy``."""
    ranked = rank_sentences(text, number_of_sentences,
                            positive_sentiment_threshold, negative_sentiment_threshold,
                            positive_rank_boost, negative_rank_boost, **kwargs)
    return generate_summary(ranked)

def ranking_table(text: str, number_of_sentences: int = 5, *args, **kwargs) -> pd.DataFrame:
    """Per-sentence scores of one ranking run as a DataFrame, for inspection."""
    ranked = rank_sentences(text, number_of_sentences, *args, **kwargs)
    return pd.DataFrame([{
        'Index': r.idx,
        'Sentence': r.text,
        'Base Score': r.base,
        'Sentiment': r.sentiment,
        'Delta': r.delta,
        'Adjusted Score': r.adjusted,
        'Selected': r.selected,
        'Position': r.position,
    } for r in ranked])

def sentiment_extractive_summary(text: str, number_of_sentences: int = 5,
                                 positive_sentiment_threshold: float = 0, negative_sentiment_threshold: float = 0,
                                 positive_rank_boost: float = 0, negative_rank_boost: float = 0,
                                 **kwargs) -> str:
    """Keyword-frequency ranking; sentiment combined additively."""
    return sentiment_summary(text, number_of_sentences, positive_sentiment_threshold, negative_sentiment_threshold,
                             positive_rank_boost, negative_rank_boost, strategy="extractive", **kwargs)

def sentiment_extractive_weighted_summary(text: str, number_of_sentences: int = 5,
                                          positive_sentiment_threshold: float = 0, negative_sentiment_threshold: float = 0,
                                          positive_rank_boost: float = 0, negative_rank_boost: float = 0,
                                          **kwargs) -> str:
    """Keyword plus title-word ranking; sentiment combined additively."""
    return sentiment_summary(text, number_of_sentences, positive_sentiment_threshold, negative_sentiment_threshold,
                             positive_rank_boost, negative_rank_boost, strategy="extractive-weighted", **kwargs)

def sentiment_lsa_summary(text: str, number_of_sentences: int = 5,
                          positive_sentiment_threshold: float = 0, negative_sentiment_threshold: float = 0,
                          positive_rank_boost: float = 0, negative_rank_boost: float = 0,
                          **kwargs) -> str:
    return sentiment_summary(text, number_of_sentences, positive_sentiment_threshold, negative_sentiment_threshold,
                             positive_rank_boost, negative_rank_boost, strategy="lsa", **kwargs)

def sentiment_lexrank_summary(text: str, number_of_sentences: int = 5,
                              positive_sentiment_threshold: float = 0, negative_sentiment_threshold: float = 0,
                              positive_rank_boost: float = 0, negative_rank_boost: float = 0,
                              **kwargs) -> str:
    """LexRank probabilities; sentiment combined relative to the base score."""
    return sentiment_summary(text, number_of_sentences, positive_sentiment_threshold, negative_sentiment_threshold,
                             positive_rank_boost, negative_rank_boost, strategy="lexrank", **kwargs)

def sentiment_textrank_summary(text: str, number_of_sentences: int = 5,
                               positive_sentiment_threshold: float = 0, negative_sentiment_threshold: float = 0,
                               positive_rank_boost: float = 0, negative_rank_boost: float = 0,
                               **kwargs) -> str:
    return sentiment_summary(text, number_of_sentences, positive_sentiment_threshold, negative_sentiment_threshold,
                             positive_rank_boost, negative_rank_boost, strategy="textrank", **kwargs)

def sentiment_mmr_summary(text: str, number_of_sentences: int = 5,
                          positive_sentiment_threshold: float = 0, negative_sentiment_threshold: float = 0,
                          positive_rank_boost: float = 0, negative_rank_boost: float = 0,
                          mmr_lambda: float = DEFAULT_LAMBDA,
                          **kwargs) -> str:
    """MMR selection; sentences come out in selection order, not document order."""
    return sentiment_summary(text, number_of_sentences, positive_sentiment_threshold, negative_sentiment_threshold,
                             positive_rank_boost, negative_rank_boost, strategy=MMRStrategy.name,
                             mmr_lambda=mmr_lambda, **kwargs)

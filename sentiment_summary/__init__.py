import logging

from .datatypes import Sentence, Document, Edge, Graph, RankedSentence, TermVector
from .exceptions import SummarizationError, ValidationError, EmptyInputError, DimensionError, ExternalEngineError
from .preprocessing import PreprocessConfig, preprocess_text, split_sentences, STOPWORDS
from .features import build_term_vectors, cosine_similarity, compute_similarity_matrix, document_vector
from .graphing import build_graph, build_adjacency, mean_threshold
from .centrality import lexrank_scores, textrank_scores
from .latent import lsa_scores
from .diversity import relevance_scores, mmr_select
from .sentiment import (sentiment_rank_adjustment, additive_rank, relative_rank, get_combiner, score_sentiments,
                        ModelCache, VaderSentimentEngine, TransformersSentimentEngine, LexiconSentimentEngine)
from .strategies import RankingConfig, RankingStrategy, get_strategy, STRATEGIES
from .summarize import (rank_sentences, generate_summary, ranking_table, sentiment_summary,
                        sentiment_extractive_summary, sentiment_extractive_weighted_summary,
                        sentiment_lsa_summary, sentiment_lexrank_summary, sentiment_textrank_summary,
                        sentiment_mmr_summary)
from .logging_utils import setup_logger

logging.getLogger(__name__).addHandler(logging.NullHandler())

from __future__ import annotations
import re
import logging
from dataclasses import dataclass, field
from typing import Callable, FrozenSet, List, Optional, Set
from .datatypes import Document, Sentence

logger = logging.getLogger(__name__)

_WORD_RE = re.compile(r"""[A-Za-z0-9_]+(?:'[A-Za-z0-9_]+)?""")  # simple token rule

STOPWORDS: FrozenSet[str] = frozenset({
    # minimal English stopword set (extend as needed)
    'the','a','an','and','or','but','if','then','else','for','to','of','in','on','at','by','with','as',
    'is','are','was','were','be','been','being','this','that','these','those','it','its','from','into',
    'we','you','they','he','she','i','me','my','your','our','their','his','her','them','us','do','does',
    'did','not','no','so','than','too','very','can','could','should','would','will','shall',
    'has','have','had','am','about','after','all','also','any','because','before','both','each','few',
    'more','most','other','some','such','only','own','same','just','over','under','again','there','here',
    'when','where','why','how','what','which','who','whom','while','up','down','out','off','through',
})

SentenceTokenizer = Callable[[str], List[str]]

@dataclass
class PreprocessConfig:
    lowercase: bool = True
    remove_stopwords: bool = True
    stemming: bool = False
    stopwords: Set[str] = field(default_factory=lambda: set(STOPWORDS))

def _simple_stem(token: str) -> str:
    # Very light English suffix stripper
    t = token.lower()
    if len(t) > 4 and t.endswith("ies"):
        return t[:-3] + "y"     # stories -> story
    if len(t) > 3 and t.endswith("ing"):
        return t[:-3]           # playing -> play
    if len(t) > 2 and t.endswith("ed"):
        return t[:-2]           # worked -> work
    if len(t) > 3 and t.endswith("es"):
        return t[:-2]           # boxes -> box
    if len(t) > 3 and t.endswith("s") and not t.endswith("ss"):
        return t[:-1]           # books -> book
    return t

def split_sentences(text: str) -> List[str]:
    # Split on . ! ? while keeping order; naive but serviceable
    parts = re.split(r"(?<=[.!?])\s+", text.strip())
    parts = [p.strip() for p in parts if p.strip()]
    return parts

def tokenize(text: str, cfg: PreprocessConfig) -> List[str]:
    if cfg.lowercase:
        text = text.lower()
    toks = [m.group(0) for m in _WORD_RE.finditer(text)]
    if cfg.remove_stopwords:
        stop = {w.lower() for w in cfg.stopwords}
        toks = [t for t in toks if t.lower() not in stop]
    if cfg.stemming:
        toks = [_simple_stem(t) for t in toks]
    return toks

def preprocess_text(text: str,
                    cfg: Optional[PreprocessConfig] = None,
                    sentence_tokenizer: Optional[SentenceTokenizer] = None) -> Document:
    """Split ``text`` into indexed sentences and tokenize each one.

    Term vectors are not computed here; see ``features.build_term_vectors``.
    """
    cfg = cfg or PreprocessConfig()
    splitter = sentence_tokenizer or split_sentences
    sentences = []
    for s in splitter(text):
        if not s or not s.strip():
            continue
        # idx follows the kept sentences so it stays a dense 0..N-1 ordinal
        sentences.append(Sentence(idx=len(sentences), text=s.strip(), tokens=tokenize(s, cfg)))
    logger.debug("Preprocessed %d sentences", len(sentences))
    return Document(raw_text=text, sentences=sentences)

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Dict, Optional

TermVector = Dict[str, float]  # term -> non-negative weight

@dataclass
class Sentence:
    idx: int
    text: str
    tokens: List[str] = field(default_factory=list)
    tf_idf_vector: TermVector = field(default_factory=dict)
    sentiment: Optional[float] = None

@dataclass
class Document:
    raw_text: str
    sentences: List[Sentence]

    def __len__(self) -> int:
        return len(self.sentences)

    @property
    def vectors(self) -> List[TermVector]:
        return [s.tf_idf_vector for s in self.sentences]

@dataclass
class Edge:
    i: int
    j: int
    weight: float  # similarity

@dataclass
class Graph:
    nodes: List[Sentence]
    edges: List[Edge]  # undirected, unweighted for ranking purposes
    threshold: float = 0.0
    degrees: List[int] = field(default_factory=list)  # clamped to >= 1

@dataclass
class RankedSentence:
    idx: int
    text: str
    base: float
    sentiment: float
    delta: float
    adjusted: float
    selected: bool = False
    position: Optional[int] = None  # order within the summary

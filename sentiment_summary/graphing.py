from __future__ import annotations
from typing import List, Optional
import logging
import numpy as np
from .datatypes import Document, Graph, Edge

logger = logging.getLogger(__name__)

def mean_threshold(simM: np.ndarray) -> float:
    # mean over the full N x N matrix, zero diagonal included
    if simM.size == 0:
        return 0.0
    return float(simM.mean())

def build_graph(doc: Document, simM: np.ndarray, threshold: Optional[float] = None) -> Graph:
    """Thresholded similarity graph; ``threshold`` defaults to the matrix mean."""
    if threshold is None:
        threshold = mean_threshold(simM)
    nodes = doc.sentences
    edges: List[Edge] = []
    n = len(nodes)
    degrees = [0]*n
    for i in range(n):
        for j in range(i+1, n):
            w = float(simM[i, j])
            if w > threshold:
                edges.append(Edge(i=i, j=j, weight=w))
                degrees[i] += 1
                degrees[j] += 1
    # Avoid division by zero for isolated nodes
    degrees = [d if d > 0 else 1 for d in degrees]
    logger.debug("Graph: %d nodes, %d edges, threshold=%.4f", n, len(edges), threshold)
    return Graph(nodes=nodes, edges=edges, threshold=threshold, degrees=degrees)

def build_adjacency(graph: Graph) -> np.ndarray:
    n = len(graph.nodes)
    A = np.zeros((n, n), dtype=float)
    for e in graph.edges:
        A[e.i, e.j] = 1.0
        A[e.j, e.i] = 1.0
    return A

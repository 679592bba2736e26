"""
All-pairs shortest distances (Floyd-Warshall).

Computed once per graph, O(N^3), and reused for constant-time distance
lookups, radius queries and reachability checks.
"""

from __future__ import annotations

from typing import List, Optional

import numpy as np
import pandas as pd

from .graph import CampusGraph


class AllPairsTable:
    """Immutable table of shortest distances between every pair of locations."""

    def __init__(self, graph: CampusGraph, distances: np.ndarray):
        distances = np.array(distances, dtype=float)
        distances.setflags(write=False)
        self._graph = graph
        self._distances = distances

    @property
    def distances(self) -> np.ndarray:
        """Read-only N x N array; inf marks unreachable pairs."""
        return self._distances

    @property
    def graph(self) -> CampusGraph:
        return self._graph

    def distance_between(self, i: int, j: int) -> Optional[float]:
        """Shortest distance by index, or None if unreachable."""
        value = self._distances[i, j]
        if not np.isfinite(value):
            return None
        return float(value)

    def shortest_distance(self, start: str, end: str) -> Optional[float]:
        """
        Shortest distance between two named locations.

        Returns:
            The distance, or None if a name does not resolve or the pair is
            unreachable
        """
        i = self._graph.resolve(start)
        j = self._graph.resolve(end)
        if i is None or j is None:
            return None
        return self.distance_between(i, j)

    def within_distance(self, source: str, max_distance: float) -> List[str]:
        """All reachable locations within ``max_distance`` of ``source`` (source excluded)."""
        i = self._graph.resolve(source)
        if i is None:
            return []
        row = self._distances[i]
        return [
            self._graph.name(j)
            for j in range(len(row))
            if j != i and np.isfinite(row[j]) and row[j] <= max_distance
        ]

    def has_path(self, start: str, end: str) -> bool:
        """True if a positive, finite shortest distance exists."""
        distance = self.shortest_distance(start, end)
        return distance is not None and distance > 0

    def to_frame(self) -> pd.DataFrame:
        """DataFrame view indexed and labelled by location name."""
        names = list(self._graph.names)
        return pd.DataFrame(self._distances, index=names, columns=names)


def floyd_warshall(weights: np.ndarray) -> np.ndarray:
    """
    Relax every pair through each intermediate vertex k.

    Args:
        weights: N x N array seeded with direct edges, inf for absent edges
                 and 0 on the diagonal

    Returns:
        N x N array of shortest distances
    """
    dist = np.array(weights, dtype=float)
    n = dist.shape[0]
    for k in range(n):
        via_k = dist[:, k, np.newaxis] + dist[np.newaxis, k, :]
        np.minimum(dist, via_k, out=dist)
    return dist


def compute_all_pairs(graph: Optional[CampusGraph]) -> Optional[AllPairsTable]:
    """
    Precompute shortest distances between every pair of locations.

    Returns:
        AllPairsTable, or None for a missing or empty graph
    """
    if graph is None or len(graph) == 0:
        return None
    return AllPairsTable(graph, floyd_warshall(graph.weight_matrix()))

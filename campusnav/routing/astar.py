"""
Heuristic (A*-style) best-first search.

The heuristic is a category guess from the location names, not a metric
bound, so it is not proven admissible. In practice campus hops are short
and the search usually agrees with Dijkstra, but it explores nodes in a
different order.

Priority updates never touch existing heap entries: an improvement pushes a
fresh entry and any entry whose cost is worse than the best known cost for
its vertex is skipped when popped.
"""

from __future__ import annotations

import hashlib
import heapq
import itertools
from typing import Dict, List, Optional, Set, Tuple

from ..scoring.travel_time import DEFAULT_TRAVEL_TIME_CONFIG, TravelTimeConfig
from .graph import CampusGraph
from .models import Algorithm, Route, build_route


MIN_HEURISTIC = 0.1


def _base_estimate(current: str, goal: str) -> float:
    if "department" in current and "department" in goal:
        return 0.3
    if "hall" in current and "hall" in goal:
        return 0.4
    if "school" in current and "school" in goal:
        return 0.3
    if ("department" in current and "school" in goal) or (
        "school" in current and "department" in goal
    ):
        return 0.2
    if "hospital" in current or "hospital" in goal:
        return 0.8
    if "sports" in current or "sports" in goal:
        return 0.6
    return 0.5


def _pair_variation(current: str, goal: str) -> float:
    """Deterministic offset in [-0.099, 0.099] derived from the name pair."""
    digest = hashlib.sha256((current + goal).encode("utf-8")).digest()
    value = int.from_bytes(digest[:8], "big", signed=True)
    sign = -1 if value < 0 else 1
    return sign * (abs(value) % 100) / 1000.0


def heuristic(current_name: str, goal_name: str) -> float:
    """
    Category-based distance estimate between two locations.

    Lower for same-category pairs (two departments), higher when a hospital
    or sports facility is involved, plus a small reproducible per-pair
    variation. Always at least MIN_HEURISTIC.
    """
    current = current_name.lower()
    goal = goal_name.lower()
    return max(MIN_HEURISTIC, _base_estimate(current, goal) + _pair_variation(current, goal))


def optimal_path_indices(
    graph: CampusGraph,
    source: int,
    target: int,
) -> Optional[List[int]]:
    """Best-first search by g + h; returns the path indices or None."""
    if source == target:
        return [source]

    goal_name = graph.name(target)
    h_cache: Dict[int, float] = {}

    def h(vertex: int) -> float:
        if vertex not in h_cache:
            h_cache[vertex] = heuristic(graph.name(vertex), goal_name)
        return h_cache[vertex]

    best_g: Dict[int, float] = {source: 0.0}
    parent: Dict[int, int] = {}
    closed: Set[int] = set()
    sequence = itertools.count()
    open_heap: List[Tuple[float, int, int, float]] = [(h(source), next(sequence), source, 0.0)]

    while open_heap:
        _, _, vertex, g = heapq.heappop(open_heap)
        if vertex in closed or g > best_g[vertex]:
            continue  # stale entry

        if vertex == target:
            path = [vertex]
            while path[-1] != source:
                path.append(parent[path[-1]])
            path.reverse()
            return path

        closed.add(vertex)

        for neighbor, weight in graph.neighbors(vertex):
            if neighbor in closed:
                continue
            tentative = g + weight
            if tentative < best_g.get(neighbor, float("inf")):
                best_g[neighbor] = tentative
                parent[neighbor] = vertex
                heapq.heappush(
                    open_heap, (tentative + h(neighbor), next(sequence), neighbor, tentative)
                )

    return None


def find_optimal_path(
    graph: CampusGraph,
    start: str,
    end: str,
    config: TravelTimeConfig = DEFAULT_TRAVEL_TIME_CONFIG,
) -> Optional[Route]:
    """
    Find a route with heuristic best-first search.

    Returns:
        Route tagged with A* Search Algorithm, or None if a name does not
        resolve or the goal is unreachable
    """
    source = graph.resolve(start)
    target = graph.resolve(end)
    if source is None or target is None:
        return None

    path = optimal_path_indices(graph, source, target)
    if path is None:
        return None
    return build_route(graph, path, Algorithm.ASTAR, config)


def find_multiple_optimal_paths(
    graph: CampusGraph,
    start: str,
    end: str,
    num_paths: int = 3,
    config: TravelTimeConfig = DEFAULT_TRAVEL_TIME_CONFIG,
) -> List[Route]:
    """
    Collect up to ``num_paths`` heuristic routes without textual duplicates.

    This is an extension point for a k-shortest-paths search. Today every
    attempt re-runs the single-path search, so callers must not rely on
    getting more than one distinct route back.
    """
    routes: List[Route] = []
    seen: Set[str] = set()
    for _ in range(max(num_paths, 0)):
        # TODO: swap in Yen's algorithm so later attempts exclude spur edges of earlier paths
        route = find_optimal_path(graph, start, end, config)
        if route is None:
            break
        if route.path in seen:
            continue
        seen.add(route.path)
        routes.append(route.with_algorithm(Algorithm.MULTI_PATH))
    return routes

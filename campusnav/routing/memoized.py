"""
Memoized recursive route builder.

Best route from a stop to the goal = the direct edge when one exists,
otherwise the cheapest "short hop + best route from there" over a bounded
set of intermediates. Results are memoized on the (current, goal) pair and
the visited set is passed down as an immutable frozenset, so recursion
depth is bounded by the number of intermediates searched.

The memo ignores which stops were visited on the way in, so this is a
heuristic builder rather than an exact search.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Optional, Tuple

from ..scoring.travel_time import DEFAULT_TRAVEL_TIME_CONFIG, TravelTimeConfig
from .graph import CampusGraph
from .models import Algorithm, Route, route_from_segments


MEMO_MAX_SEGMENT = 2.0
MEMO_SEARCH_LIMIT = 20

# (stop indices from current to goal, hop distances)
PartialPath = Tuple[Tuple[int, ...], Tuple[float, ...]]


class MemoizedRouteBuilder:
    """Recursive best-route search with a (current, goal) memo table."""

    def __init__(
        self,
        graph: CampusGraph,
        max_segment: float = MEMO_MAX_SEGMENT,
        search_limit: int = MEMO_SEARCH_LIMIT,
    ):
        self.graph = graph
        self.max_segment = max_segment
        self.search_limit = search_limit
        self.memo: Dict[Tuple[int, int], Optional[PartialPath]] = {}

    def best_path(
        self,
        current: int,
        goal: int,
        visited: FrozenSet[int] = frozenset(),
    ) -> Optional[PartialPath]:
        key = (current, goal)
        if key in self.memo:
            return self.memo[key]

        direct = self.graph.edge(current, goal)
        if direct is not None:
            result: PartialPath = ((current, goal), (direct,))
            self.memo[key] = result
            return result

        if len(visited) >= self.search_limit:
            return None

        visited = visited | {current}
        best: Optional[PartialPath] = None
        best_distance = float("inf")

        for i in range(min(len(self.graph), self.search_limit)):
            if i in visited or i == goal:
                continue
            hop = self.graph.edge(current, i)
            if hop is None or hop >= self.max_segment:
                continue
            rest = self.best_path(i, goal, visited)
            if rest is None or visited.intersection(rest[0]):
                continue
            total = hop + sum(rest[1])
            if total < best_distance:
                best_distance = total
                best = ((current,) + rest[0], (hop,) + rest[1])

        # Dead ends are memoized as well
        self.memo[key] = best
        return best


def generate_memoized_route(
    graph: CampusGraph,
    start: str,
    end: str,
    max_segment: float = MEMO_MAX_SEGMENT,
    search_limit: int = MEMO_SEARCH_LIMIT,
    config: TravelTimeConfig = DEFAULT_TRAVEL_TIME_CONFIG,
) -> Optional[Route]:
    """
    Build a route with the memoized recursive builder.

    Returns:
        Route tagged with Dynamic Programming, or None if a name does not
        resolve or no bounded path reaches the destination
    """
    source = graph.resolve(start)
    target = graph.resolve(end)
    if source is None or target is None or source == target:
        return None

    builder = MemoizedRouteBuilder(graph, max_segment, search_limit)
    result = builder.best_path(source, target)
    if result is None:
        return None

    indices, hops = result
    segments = [(graph.display_name(i), hop) for i, hop in zip(indices[1:], hops)]
    return route_from_segments(graph.display_name(source), segments, Algorithm.MEMOIZED, config)

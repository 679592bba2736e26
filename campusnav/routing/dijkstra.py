"""
Uniform-cost (Dijkstra) shortest paths over the campus graph.

Edges are the strictly positive cells of the distance matrix; zero and
unparseable cells mean "no direct edge". Heap entries carry a discovery
sequence number so equal-distance ties settle in a deterministic order.
"""

from __future__ import annotations

import heapq
import itertools
from typing import Dict, List, Optional, Tuple

from ..scoring.travel_time import DEFAULT_TRAVEL_TIME_CONFIG, TravelTimeConfig
from .graph import CampusGraph
from .models import Algorithm, Route, build_route


def _run_dijkstra(
    graph: CampusGraph,
    source: int,
    target: Optional[int] = None,
) -> Tuple[Dict[int, float], Dict[int, int]]:
    """
    Label-setting search from ``source``.

    Stops early once ``target`` is settled. Returns tentative distances and
    predecessor links for every discovered vertex.
    """
    distances: Dict[int, float] = {source: 0.0}
    previous: Dict[int, int] = {}
    settled = set()
    sequence = itertools.count()
    heap: List[Tuple[float, int, int]] = [(0.0, next(sequence), source)]

    while heap:
        dist, _, vertex = heapq.heappop(heap)
        if vertex in settled:
            continue
        settled.add(vertex)
        if vertex == target:
            break

        for neighbor, weight in graph.neighbors(vertex):
            if neighbor in settled:
                continue
            candidate = dist + weight
            if candidate < distances.get(neighbor, float("inf")):
                distances[neighbor] = candidate
                previous[neighbor] = vertex
                heapq.heappush(heap, (candidate, next(sequence), neighbor))

    return distances, previous


def shortest_path_indices(
    graph: CampusGraph,
    source: int,
    target: int,
) -> Optional[Tuple[List[int], float]]:
    """
    Shortest path between two location indices.

    Returns:
        (path indices from source to target, total distance), or None if
        the target is unreachable
    """
    if source == target:
        return [source], 0.0

    distances, previous = _run_dijkstra(graph, source, target)
    if target not in distances:
        return None

    path = [target]
    while path[-1] != source:
        path.append(previous[path[-1]])
    path.reverse()
    return path, distances[target]


def find_shortest_path(
    graph: CampusGraph,
    start: str,
    end: str,
    config: TravelTimeConfig = DEFAULT_TRAVEL_TIME_CONFIG,
) -> Optional[Route]:
    """
    Find the minimum-distance route between two named locations.

    Args:
        graph: Campus graph
        start: Start location query (lenient "contains" match)
        end: Destination query
        config: Travel time settings for the route estimate

    Returns:
        Route tagged with Dijkstra's Algorithm, or None if either name does
        not resolve or no path connects them
    """
    source = graph.resolve(start)
    target = graph.resolve(end)
    if source is None or target is None:
        return None

    result = shortest_path_indices(graph, source, target)
    if result is None:
        return None
    path, _ = result
    return build_route(graph, path, Algorithm.DIJKSTRA, config)


def find_all_shortest_distances(graph: CampusGraph, source_location: str) -> Dict[str, float]:
    """
    Shortest distance from one location to every reachable location.

    The source itself is included at 0.0; unreachable locations are omitted.
    """
    source = graph.resolve(source_location)
    if source is None:
        return {}

    distances, _ = _run_dijkstra(graph, source)
    return {graph.name(index): dist for index, dist in sorted(distances.items())}

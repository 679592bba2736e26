"""
Landmark-constrained route search.

Builds start -> landmark -> end routes over direct edges and keeps the ones
whose detour, compared to going straight from start to end, stays within a
budget. Also answers "which landmarks of this kind are next to me" queries.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ..routing.graph import CampusGraph
from ..routing.models import Algorithm, Route, route_from_segments
from ..scoring.travel_time import DEFAULT_TRAVEL_TIME_CONFIG, TravelTimeConfig
from .taxonomy import find_landmark_locations, matches_landmark


logger = logging.getLogger(__name__)

DEFAULT_MAX_DETOUR = 1.0
LANDMARK_MAX_RESULTS = 3


def _route_via(
    graph: CampusGraph,
    source: int,
    target: int,
    landmark: int,
    baseline: float,
    max_detour_distance: float,
    config: TravelTimeConfig,
) -> Optional[Route]:
    to_landmark = graph.edge(source, landmark)
    from_landmark = graph.edge(landmark, target)
    if to_landmark is None or from_landmark is None:
        return None

    detour = (to_landmark + from_landmark) - baseline
    if detour > max_detour_distance:
        return None

    segments = [
        (graph.display_name(landmark), to_landmark),
        (graph.display_name(target), from_landmark),
    ]
    return route_from_segments(graph.display_name(source), segments, Algorithm.LANDMARK, config)


def search_routes_with_landmark(
    graph: CampusGraph,
    start: str,
    end: str,
    landmark: str,
    max_detour_distance: float = DEFAULT_MAX_DETOUR,
    config: TravelTimeConfig = DEFAULT_TRAVEL_TIME_CONFIG,
    baseline_distance: Optional[float] = None,
    max_results: int = LANDMARK_MAX_RESULTS,
) -> List[Route]:
    """
    Find routes that pass through a location matching a landmark term.

    Args:
        graph: Campus graph
        start: Start location query
        end: Destination query
        landmark: Landmark category or keyword ("bank", "library", "Night Market")
        max_detour_distance: Largest allowed ``legs - direct distance``
        config: Travel time settings
        baseline_distance: Distance to compare against when start and end
                           have no direct edge (e.g. the all-pairs shortest
                           distance); without either, nothing qualifies
        max_results: Maximum number of routes to return

    Returns:
        Up to ``max_results`` routes sorted by ascending distance; empty if
        nothing matches the landmark or every candidate exceeds the budget
    """
    source = graph.resolve(start)
    target = graph.resolve(end)
    if source is None or target is None:
        return []

    baseline = graph.edge(source, target)
    if baseline is None:
        baseline = baseline_distance
    if baseline is None:
        logger.debug("No baseline distance between %s and %s", start, end)
        return []

    landmark_indices = find_landmark_locations(graph, landmark)
    if not landmark_indices:
        logger.debug("No locations found matching landmark: %s", landmark)
        return []

    routes = []
    for index in landmark_indices:
        if index in (source, target):
            continue
        route = _route_via(
            graph, source, target, index, baseline, max_detour_distance, config
        )
        if route is not None:
            routes.append(route)

    routes.sort(key=lambda r: r.distance)
    return routes[:max(max_results, 0)]


def find_nearby_landmarks(
    graph: CampusGraph,
    location: str,
    max_distance: float,
    landmark_type: str,
) -> List[str]:
    """
    Directly adjacent locations within ``max_distance`` that match a landmark type.

    Returns:
        Canonical location names in matrix order (empty if the location does
        not resolve)
    """
    source = graph.resolve(location)
    if source is None:
        return []
    return [
        graph.name(i)
        for i, distance in graph.neighbors(source)
        if distance <= max_distance and matches_landmark(graph.name(i), landmark_type)
    ]

"""
Direct and alternative route synthesis.

These builders stitch together one to three short hops with local greedy
scoring. They are not shortest-path algorithms: their job is to produce
varied, plausible walking routes next to the exact engines.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Set, Tuple

from ..scoring.travel_time import DEFAULT_TRAVEL_TIME_CONFIG, TravelTimeConfig
from .graph import CampusGraph
from .models import Algorithm, Route, route_from_segments


logger = logging.getLogger(__name__)

DIRECT_ROUTE_THRESHOLD = 0.3
ALTERNATIVE_WEIGHT = 0.7
ALTERNATIVE_DETOUR_FACTOR = 3.0


def _resolve_pair(graph: CampusGraph, start: str, end: str) -> Optional[Tuple[int, int]]:
    source = graph.resolve(start)
    target = graph.resolve(end)
    if source is None or target is None:
        return None
    return source, target


def _direct_only(
    graph: CampusGraph,
    source: int,
    target: int,
    direct_distance: Optional[float],
    config: TravelTimeConfig,
) -> Optional[Route]:
    if direct_distance is None:
        return None
    return route_from_segments(
        graph.display_name(source),
        [(graph.display_name(target), direct_distance)],
        Algorithm.DIRECT,
        config,
    )


def generate_direct_route(
    graph: CampusGraph,
    start: str,
    end: str,
    direct_distance: Optional[float] = None,
    threshold: float = DIRECT_ROUTE_THRESHOLD,
    config: TravelTimeConfig = DEFAULT_TRAVEL_TIME_CONFIG,
) -> Optional[Route]:
    """
    Build a short route through at most one intermediate stop.

    Very short trips (direct distance under ``threshold``) use the direct
    edge. Otherwise every location is scored once by
    ``distance_from_start + distance_to_destination`` and the best single
    relay is used, falling back to the direct edge when no relay has two
    positive legs.

    Args:
        graph: Campus graph
        start: Start location query
        end: Destination query
        direct_distance: Precomputed start->end distance; read from the
                         matrix when omitted
        threshold: Distance below which the direct edge is returned as-is
        config: Travel time settings

    Returns:
        Route, or None if a name does not resolve or nothing connects the pair
    """
    pair = _resolve_pair(graph, start, end)
    if pair is None:
        return None
    source, target = pair
    if direct_distance is None:
        direct_distance = graph.edge(source, target)

    if direct_distance is not None and direct_distance < threshold:
        return _direct_only(graph, source, target, direct_distance, config)

    best_total = float("inf")
    best_index = None
    for i in graph.indices():
        from_start = graph.raw(source, i)
        to_destination = graph.raw(i, target)
        if from_start is None or to_destination is None:
            continue
        if from_start <= 0 or to_destination <= 0:
            continue
        total = from_start + to_destination
        if total < best_total:
            best_total = total
            best_index = i

    if best_index is None:
        return _direct_only(graph, source, target, direct_distance, config)

    segments = [
        (graph.display_name(best_index), graph.raw(source, best_index)),
        (graph.display_name(target), graph.raw(best_index, target)),
    ]
    return route_from_segments(graph.display_name(source), segments, Algorithm.DIRECT, config)


def generate_alternative_route(
    graph: CampusGraph,
    start: str,
    end: str,
    variation: int = 1,
    direct_distance: Optional[float] = None,
    weight: float = ALTERNATIVE_WEIGHT,
    detour_factor: float = ALTERNATIVE_DETOUR_FACTOR,
    config: TravelTimeConfig = DEFAULT_TRAVEL_TIME_CONFIG,
) -> Optional[Route]:
    """
    Build a 2- or 3-hop route by weighted greedy hops.

    Variation 1 allows two hops and discounts the leg from the current stop;
    any other variation allows three hops and discounts the leg to the
    destination, so the two variants drift in different directions.
    Candidates whose distance to the destination exceeds
    ``detour_factor`` times the direct distance are skipped. The final hop
    always goes to the destination, over the direct edge when there is one
    and otherwise at the precomputed direct distance.

    Returns:
        Route, or None if a name does not resolve or the destination cannot
        be reached
    """
    pair = _resolve_pair(graph, start, end)
    if pair is None:
        return None
    source, target = pair
    if direct_distance is None:
        direct_distance = graph.edge(source, target)
    detour_limit = float("inf") if direct_distance is None else direct_distance * detour_factor

    max_hops = 2 if variation == 1 else 3
    used: Set[int] = {source}
    segments: List[Tuple[str, float]] = []
    current = source

    for hop in range(max_hops):
        best_score = float("inf")
        best_index = None
        for i in graph.indices():
            if i in used or i == target:
                continue
            from_current = graph.raw(current, i)
            to_destination = graph.raw(i, target)
            if from_current is None or to_destination is None:
                continue
            if from_current <= 0 or to_destination <= 0:
                continue
            if variation == 1:
                score = from_current * weight + to_destination
            else:
                score = from_current + to_destination * weight
            if score < best_score and to_destination <= detour_limit:
                best_score = score
                best_index = i

        if best_index is not None and hop < max_hops - 1:
            segments.append((graph.display_name(best_index), graph.raw(current, best_index)))
            used.add(best_index)
            current = best_index
            continue

        final_hop = graph.edge(current, target)
        if final_hop is None:
            final_hop = direct_distance
        if final_hop is None:
            logger.debug("Alternative route %d: no final hop to destination", variation)
            return None
        segments.append((graph.display_name(target), final_hop))
        break

    return route_from_segments(graph.display_name(source), segments, Algorithm.ALTERNATIVE, config)


def generate_synthesized_routes(
    graph: CampusGraph,
    start: str,
    end: str,
    threshold: float = DIRECT_ROUTE_THRESHOLD,
    weight: float = ALTERNATIVE_WEIGHT,
    detour_factor: float = ALTERNATIVE_DETOUR_FACTOR,
    config: TravelTimeConfig = DEFAULT_TRAVEL_TIME_CONFIG,
) -> List[Route]:
    """Direct route plus both alternative variants, skipping any that fail."""
    pair = _resolve_pair(graph, start, end)
    if pair is None:
        return []
    direct_distance = graph.edge(*pair)

    candidates = [
        generate_direct_route(graph, start, end, direct_distance, threshold, config),
        generate_alternative_route(
            graph, start, end, 1, direct_distance, weight, detour_factor, config
        ),
        generate_alternative_route(
            graph, start, end, 2, direct_distance, weight, detour_factor, config
        ),
    ]
    return [route for route in candidates if route is not None]

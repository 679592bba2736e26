"""
Greedy stepping route builder.

From the current stop, repeatedly walk to the unvisited neighbour with the
lowest ``distance_from_current + end_weight * distance_to_end``. Neighbours
without a direct edge to the destination are not eligible, and the
destination itself is only ever reached by the final hop. When no neighbour
qualifies, or the hop budget is spent, the walk finishes with a direct hop
to the destination.

The greedy approach is fast but not optimal: it never reconsiders a hop,
so it mainly serves to diversify the candidate pool next to Dijkstra and A*.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Set

from ..scoring.travel_time import DEFAULT_TRAVEL_TIME_CONFIG, TravelTimeConfig
from .graph import CampusGraph
from .models import Algorithm, Route, route_from_segments


logger = logging.getLogger(__name__)

GREEDY_END_WEIGHT = 0.8
GREEDY_MAX_HOPS = 10


@dataclass
class GreedyStep:
    """A single hop chosen by the greedy walk."""

    index: int
    name: str
    hop_distance: float
    distance_to_end: Optional[float]
    score: Optional[float] = None
    reason: Optional[str] = None


@dataclass
class GreedyWalk:
    """Result from greedy stepping."""

    source: int
    target: int
    steps: List[GreedyStep] = field(default_factory=list)
    reached_destination: bool = False

    @property
    def total_distance(self) -> float:
        return sum(step.hop_distance for step in self.steps)


def format_reason(step: GreedyStep) -> str:
    """Human-readable reason for taking a hop."""
    parts = [f"hop={step.hop_distance:.3f}"]
    if step.distance_to_end is not None:
        parts.append(f"to_end={step.distance_to_end:.3f}")
    if step.score is not None:
        parts.append(f"score={step.score:.3f}")
    parts.append("greedy")
    return "; ".join(parts)


def _next_stop(
    graph: CampusGraph,
    current: int,
    target: int,
    visited: Set[int],
    end_weight: float,
) -> Optional[GreedyStep]:
    best: Optional[GreedyStep] = None

    for neighbor, hop in graph.neighbors(current):
        if neighbor in visited or neighbor == target:
            continue
        to_end = graph.edge(neighbor, target)
        if to_end is None:
            continue
        score = hop + to_end * end_weight
        if best is None or score < best.score:
            best = GreedyStep(
                index=neighbor,
                name=graph.display_name(neighbor),
                hop_distance=hop,
                distance_to_end=to_end,
                score=score,
            )
    return best


def greedy_walk(
    graph: CampusGraph,
    source: int,
    target: int,
    end_weight: float = GREEDY_END_WEIGHT,
    max_hops: int = GREEDY_MAX_HOPS,
) -> GreedyWalk:
    """
    Run greedy stepping between two location indices.

    Args:
        graph: Campus graph
        source: Start index
        target: Destination index
        end_weight: Weight on the remaining distance to the destination
        max_hops: Maximum number of intermediate stops before forcing the
                  final direct hop

    Returns:
        GreedyWalk; ``reached_destination`` is False when the last stop has
        no direct edge to the destination
    """
    walk = GreedyWalk(source=source, target=target)
    visited: Set[int] = {source}
    current = source

    while len(walk.steps) < max_hops:
        step = _next_stop(graph, current, target, visited, end_weight)
        if step is None:
            break
        step.reason = format_reason(step)
        walk.steps.append(step)
        visited.add(step.index)
        current = step.index

    final_hop = graph.edge(current, target)
    if final_hop is not None:
        walk.steps.append(GreedyStep(
            index=target,
            name=graph.display_name(target),
            hop_distance=final_hop,
            distance_to_end=0.0,
            reason="direct final hop",
        ))
        walk.reached_destination = True

    return walk


def generate_greedy_route(
    graph: CampusGraph,
    start: str,
    end: str,
    end_weight: float = GREEDY_END_WEIGHT,
    max_hops: int = GREEDY_MAX_HOPS,
    config: TravelTimeConfig = DEFAULT_TRAVEL_TIME_CONFIG,
) -> Optional[Route]:
    """
    Build a route by greedy stepping.

    Returns:
        Route tagged with Greedy Algorithm, or None if a name does not
        resolve or the walk cannot finish at the destination
    """
    source = graph.resolve(start)
    target = graph.resolve(end)
    if source is None or target is None or source == target:
        return None

    walk = greedy_walk(graph, source, target, end_weight, max_hops)
    if not walk.reached_destination:
        logger.debug(
            "Greedy walk from %s stalled after %d hop(s)",
            graph.name(source), len(walk.steps),
        )
        return None

    segments = [(step.name, step.hop_distance) for step in walk.steps]
    return route_from_segments(graph.display_name(source), segments, Algorithm.GREEDY, config)

"""Route data model shared by every routing strategy."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Tuple

from ..scoring.travel_time import (
    DEFAULT_TRAVEL_TIME_CONFIG,
    Segments,
    TravelTimeConfig,
    estimate_travel,
)
from .graph import CampusGraph


PATH_SEPARATOR = " => "

# Stand-in for a hop whose matrix cell cannot be parsed (display only)
DEFAULT_SEGMENT_DISTANCE = 0.1


class Algorithm(str, Enum):
    """Strategies that can produce a route."""
    STANDARD = "Standard"
    TRIVIAL = "Trivial Route"
    DIJKSTRA = "Dijkstra's Algorithm"
    ASTAR = "A* Search Algorithm"
    GREEDY = "Greedy Algorithm"
    MEMOIZED = "Dynamic Programming"
    DIRECT = "Direct Route Synthesis"
    ALTERNATIVE = "Alternative Route Synthesis"
    MULTI_PATH = "A* Multiple Paths"
    LANDMARK = "Landmark-based Search"


@dataclass(frozen=True)
class Route:
    """
    An ordered walk from start to end.

    Attributes:
        stops: Display names of every stop, start first
        segments: (stop name, hop distance) for each hop, in path order
        distance: Sum of the segment distances
        time_minutes: Rounded walking time, with outlier hops damped
        algorithm: Label of the strategy that produced the route
    """
    stops: Tuple[str, ...]
    segments: Tuple[Tuple[str, float], ...]
    distance: float
    time_minutes: float
    algorithm: str = Algorithm.STANDARD.value

    @property
    def path(self) -> str:
        """Rendered path, e.g. ``"A => B => C"``."""
        return PATH_SEPARATOR.join(self.stops)

    @property
    def efficiency(self) -> float:
        """Distance per minute; lower is better."""
        return self.distance / max(self.time_minutes, 0.1)

    @property
    def num_hops(self) -> int:
        return len(self.segments)

    def with_algorithm(self, algorithm: "Algorithm | str") -> "Route":
        label = algorithm.value if isinstance(algorithm, Algorithm) else str(algorithm)
        return replace(self, algorithm=label)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        data["path"] = self.path
        data["segments"] = [list(segment) for segment in self.segments]
        data["stops"] = list(self.stops)
        return data

    def __str__(self) -> str:
        return self.path


def route_from_segments(
    start_name: str,
    segments: Segments,
    algorithm: "Algorithm | str" = Algorithm.STANDARD,
    config: TravelTimeConfig = DEFAULT_TRAVEL_TIME_CONFIG,
) -> Route:
    """Assemble a Route from a start name and ordered hop segments."""
    estimate = estimate_travel(segments, config)
    label = algorithm.value if isinstance(algorithm, Algorithm) else str(algorithm)
    stops = (start_name,) + tuple(name for name, _ in estimate.segments)
    return Route(
        stops=stops,
        segments=estimate.segments,
        distance=estimate.distance,
        time_minutes=estimate.minutes,
        algorithm=label,
    )


def build_route(
    graph: CampusGraph,
    indices: Sequence[int],
    algorithm: "Algorithm | str" = Algorithm.STANDARD,
    config: TravelTimeConfig = DEFAULT_TRAVEL_TIME_CONFIG,
) -> Optional[Route]:
    """
    Turn a path of location indices into a Route.

    Each hop re-reads the original matrix cell rather than any relaxed
    distance; an unparseable cell falls back to DEFAULT_SEGMENT_DISTANCE.
    """
    if not indices:
        return None
    segments = []
    for prev, current in zip(indices, indices[1:]):
        hop = graph.raw(prev, current)
        if hop is None:
            hop = DEFAULT_SEGMENT_DISTANCE
        segments.append((graph.display_name(current), hop))
    return route_from_segments(graph.display_name(indices[0]), segments, algorithm, config)


def trivial_route(
    graph: CampusGraph,
    index: int,
    config: TravelTimeConfig = DEFAULT_TRAVEL_TIME_CONFIG,
) -> Route:
    """Zero-distance route for a query whose start and end coincide."""
    return route_from_segments(graph.display_name(index), [], Algorithm.TRIVIAL, config)

"""
Route Navigator

Composes every routing strategy into a single "find best routes" query:
- Dijkstra and A* shortest paths (always)
- greedy stepping and the memoized recursive builder (always)
- direct/alternative synthesis and the A* multiple-paths search (optional)
- landmark-constrained search (when a landmark is requested)

Candidates are deduplicated by rendered path, ranked per the caller's
preferences and truncated. Results are cached per (start, end, preferences)
and each strategy run is recorded as telemetry.
"""

from __future__ import annotations

import logging
import time
from collections import Counter
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

import pandas as pd
from cachetools import LRUCache

from ..landmarks.search import find_nearby_landmarks, search_routes_with_landmark
from ..landmarks.taxonomy import available_categories
from ..routing.astar import find_multiple_optimal_paths, find_optimal_path
from ..routing.dijkstra import find_shortest_path
from ..routing.floyd_warshall import compute_all_pairs
from ..routing.graph import CampusGraph
from ..routing.greedy import generate_greedy_route
from ..routing.memoized import generate_memoized_route
from ..routing.models import Algorithm, Route, trivial_route
from ..routing.synthesis import (
    generate_alternative_route,
    generate_direct_route,
    generate_synthesized_routes,
)
from ..scoring.ranking import deduplicate_routes, sort_routes
from .config import PlannerConfig, RoutePreferences
from .telemetry import StrategyTelemetry


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteResults:
    """
    Output of a route query.

    Attributes:
        routes: Selected routes, best first
        total_routes_found: Distinct candidates before truncation
        algorithms_summary: Algorithm label -> number of selected routes
                            (read-only)
    """
    routes: Tuple[Route, ...] = ()
    total_routes_found: int = 0
    algorithms_summary: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def found(self) -> bool:
        return len(self.routes) > 0

    @property
    def best(self) -> Optional[Route]:
        return self.routes[0] if self.routes else None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "routes": [route.to_dict() for route in self.routes],
            "total_routes_found": self.total_routes_found,
            "algorithms_summary": dict(self.algorithms_summary),
        }

    def to_frame(self) -> pd.DataFrame:
        """One row per selected route, in rank order."""
        columns = ["rank", "path", "distance", "time_minutes", "efficiency", "hops", "algorithm"]
        rows = [
            {
                "rank": rank,
                "path": route.path,
                "distance": route.distance,
                "time_minutes": route.time_minutes,
                "efficiency": route.efficiency,
                "hops": route.num_hops,
                "algorithm": route.algorithm,
            }
            for rank, route in enumerate(self.routes, start=1)
        ]
        return pd.DataFrame(rows, columns=columns)


EMPTY_RESULTS = RouteResults()


def _select(candidates: List[Route], preferences: RoutePreferences) -> RouteResults:
    unique = deduplicate_routes(candidates)
    ranked = sort_routes(unique, preferences.criterion, ascending=True)
    selected = tuple(ranked[:max(preferences.max_routes, 0)])
    summary = Counter(route.algorithm for route in selected)
    return RouteResults(
        routes=selected,
        total_routes_found=len(unique),
        algorithms_summary=MappingProxyType(dict(summary)),
    )


class RouteNavigator:
    """
    Route planning session over one immutable campus graph.

    The all-pairs distance table is computed once at construction and
    reused by every query.
    """

    def __init__(
        self,
        graph: CampusGraph,
        config: Optional[PlannerConfig] = None,
        enable_telemetry: bool = True,
    ):
        """
        Args:
            graph: Campus graph to plan over
            config: Strategy tuning; defaults to PlannerConfig()
            enable_telemetry: Whether to record per-strategy telemetry
        """
        self.graph = graph
        self.config = config or PlannerConfig()
        self.all_pairs = compute_all_pairs(graph)
        self.enable_telemetry = enable_telemetry
        self.telemetry_log: List[StrategyTelemetry] = []
        self._cache: LRUCache = LRUCache(maxsize=max(self.config.cache_size, 1))
        self._hits = 0
        self._misses = 0

    @classmethod
    def from_table(
        cls,
        rows: Sequence[Sequence[str]],
        config: Optional[PlannerConfig] = None,
    ) -> "RouteNavigator":
        """Build the graph from a parsed table using the config's display suffixes."""
        config = config or PlannerConfig()
        return cls(CampusGraph.from_table(rows, config.display_suffixes), config)

    @classmethod
    def from_frame(
        cls,
        frame: pd.DataFrame,
        config: Optional[PlannerConfig] = None,
    ) -> "RouteNavigator":
        """Build the graph from a DataFrame using the config's display suffixes."""
        config = config or PlannerConfig()
        return cls(CampusGraph.from_frame(frame, config.display_suffixes), config)

    # -----------------------------
    # Route queries
    # -----------------------------

    def find_optimal_routes(
        self,
        start: str,
        end: str,
        preferences: Optional[RoutePreferences] = None,
    ) -> RouteResults:
        """
        Find, rank and select routes between two locations.

        Args:
            start: Start location query (lenient "contains" match)
            end: Destination query
            preferences: Sorting, count and landmark options; defaults to
                         the preferences of the planner config

        Returns:
            RouteResults; empty when a name does not resolve or nothing
            connects the pair
        """
        preferences = preferences or self.config.preferences
        source = self.graph.resolve(start)
        target = self.graph.resolve(end)
        if source is None or target is None:
            logger.info("Unresolved location in query: %r -> %r", start, end)
            return EMPTY_RESULTS

        key = (source, target, preferences)
        cached = self._cache.get(key)
        if cached is not None:
            self._hits += 1
            return cached
        self._misses += 1

        if source == target:
            results = _select([trivial_route(self.graph, source, self.config.travel_time)], preferences)
        else:
            results = _select(self._collect_candidates(source, target, preferences), preferences)

        logger.info(
            "Routes %s -> %s: %d candidate(s), %d selected",
            self.graph.name(source), self.graph.name(target),
            results.total_routes_found, len(results.routes),
        )
        self._cache[key] = results
        return results

    def _collect_candidates(
        self,
        source: int,
        target: int,
        preferences: RoutePreferences,
    ) -> List[Route]:
        graph = self.graph
        cfg = self.config
        tt = cfg.travel_time
        start = graph.name(source)
        end = graph.name(target)
        direct_distance = graph.edge(source, target)

        strategies: List[Tuple[str, Callable[[], Any]]] = [
            (Algorithm.DIJKSTRA.value, lambda: find_shortest_path(graph, start, end, tt)),
            (Algorithm.ASTAR.value, lambda: find_optimal_path(graph, start, end, tt)),
            (Algorithm.GREEDY.value, lambda: generate_greedy_route(
                graph, start, end, cfg.greedy_end_weight, cfg.greedy_max_hops, tt
            )),
            (Algorithm.MEMOIZED.value, lambda: generate_memoized_route(
                graph, start, end, cfg.memo_max_segment, cfg.memo_search_limit, tt
            )),
        ]

        if preferences.use_optimization_methods:
            strategies.extend([
                (Algorithm.DIRECT.value, lambda: generate_direct_route(
                    graph, start, end, direct_distance, cfg.direct_route_threshold, tt
                )),
                (Algorithm.ALTERNATIVE.value, lambda: [
                    generate_alternative_route(
                        graph, start, end, variation, direct_distance,
                        cfg.alternative_weight, cfg.alternative_detour_factor, tt,
                    )
                    for variation in (1, 2)
                ]),
                (Algorithm.MULTI_PATH.value, lambda: find_multiple_optimal_paths(
                    graph, start, end, cfg.multiple_paths, tt
                )),
            ])

        if preferences.landmark:
            baseline = None
            if self.all_pairs is not None:
                baseline = self.all_pairs.distance_between(source, target)
            strategies.append((Algorithm.LANDMARK.value, lambda: search_routes_with_landmark(
                graph, start, end, preferences.landmark, preferences.max_detour_distance,
                tt, baseline, cfg.landmark_max_results,
            )))

        candidates: List[Route] = []
        for label, strategy in strategies:
            candidates.extend(self._run_strategy(start, end, label, strategy))
        return candidates

    def _run_strategy(
        self,
        start: str,
        end: str,
        label: str,
        strategy: Callable[[], Any],
    ) -> List[Route]:
        """
        Run one strategy, normalise its output to a list and record telemetry.

        A strategy that raises contributes zero routes; the query continues.
        """
        began = time.perf_counter()
        error = None
        try:
            produced = strategy()
        except Exception as e:
            logger.exception("%s failed for %s -> %s", label, start, end)
            produced = None
            error = f"{type(e).__name__}: {e}"
        elapsed_ms = (time.perf_counter() - began) * 1000.0

        if produced is None:
            routes = []
        elif isinstance(produced, Route):
            routes = [produced]
        else:
            routes = [route for route in produced if route is not None]

        if not routes:
            logger.debug("%s produced no route for %s -> %s", label, start, end)

        if self.enable_telemetry:
            telemetry = StrategyTelemetry(
                start=start,
                end=end,
                algorithm=label,
                routes_found=len(routes),
                elapsed_ms=round(elapsed_ms, 3),
                error=error,
            )
            self.telemetry_log.append(telemetry)
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Strategy telemetry: %s", telemetry.to_json())

        return routes

    def synthesize_routes(self, start: str, end: str) -> List[Route]:
        """Direct route plus both alternative variants."""
        cfg = self.config
        return generate_synthesized_routes(
            self.graph, start, end,
            cfg.direct_route_threshold, cfg.alternative_weight,
            cfg.alternative_detour_factor, cfg.travel_time,
        )

    # -----------------------------
    # Landmarks and distances
    # -----------------------------

    def get_available_landmarks(self) -> List[str]:
        return available_categories()

    def find_nearby_landmarks(
        self,
        location: str,
        landmark_type: str,
        max_distance: float,
    ) -> List[str]:
        """Adjacent locations within ``max_distance`` matching a landmark type."""
        return find_nearby_landmarks(self.graph, location, max_distance, landmark_type)

    def shortest_distance(self, start: str, end: str) -> Optional[float]:
        """Precomputed shortest distance, or None if unresolved or unreachable."""
        if self.all_pairs is None:
            return None
        return self.all_pairs.shortest_distance(start, end)

    def locations_within(self, source: str, max_distance: float) -> List[str]:
        """Locations reachable within ``max_distance`` of ``source``."""
        if self.all_pairs is None:
            return []
        return self.all_pairs.within_distance(source, max_distance)

    def has_path(self, start: str, end: str) -> bool:
        if self.all_pairs is None:
            return False
        return self.all_pairs.has_path(start, end)

    # -----------------------------
    # Cache and telemetry
    # -----------------------------

    def get_cache_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        return {
            "size": len(self._cache),
            "maxsize": self._cache.maxsize,
            "hits": self._hits,
            "misses": self._misses,
        }

    def clear_cache(self) -> None:
        """Clear cached route results."""
        self._cache.clear()
        self._hits = 0
        self._misses = 0

    def get_telemetry(self) -> List[StrategyTelemetry]:
        """Get all collected telemetry."""
        return self.telemetry_log

    def clear_telemetry(self) -> None:
        """Clear telemetry log."""
        self.telemetry_log.clear()


def find_optimal_routes(
    graph: CampusGraph,
    start: str,
    end: str,
    preferences: Optional[RoutePreferences] = None,
    config: Optional[PlannerConfig] = None,
) -> RouteResults:
    """
    Convenience function for a one-off query.

    Builds a throwaway RouteNavigator, so the all-pairs table is not reused.
    """
    navigator = RouteNavigator(graph, config=config, enable_telemetry=False)
    return navigator.find_optimal_routes(start, end, preferences)

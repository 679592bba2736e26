"""
Planner configuration and per-query route preferences.

``PlannerConfig`` holds the tuning constants of every strategy and is built
from a YAML profile (see ``campusnav/configs``). ``RoutePreferences`` is the
per-query bundle supplied by the caller; every field has a default.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional, Tuple

from ..landmarks.search import DEFAULT_MAX_DETOUR, LANDMARK_MAX_RESULTS
from ..routing.greedy import GREEDY_END_WEIGHT, GREEDY_MAX_HOPS
from ..routing.memoized import MEMO_MAX_SEGMENT, MEMO_SEARCH_LIMIT
from ..routing.synthesis import (
    ALTERNATIVE_DETOUR_FACTOR,
    ALTERNATIVE_WEIGHT,
    DIRECT_ROUTE_THRESHOLD,
)
from ..scoring.ranking import SortCriterion
from ..scoring.travel_time import TravelTimeConfig
from ..tools.config_loader import ConfigLoader


DEFAULT_MAX_ROUTES = 5
DEFAULT_MULTIPLE_PATHS = 3
DEFAULT_CACHE_SIZE = 256


@dataclass(frozen=True)
class RoutePreferences:
    """
    What the caller wants back from a route query.

    Attributes:
        sort_criteria: distance | time | efficiency | composite (unknown
                       values rank by composite)
        max_routes: Number of routes to return; zero or less returns none
        landmark: Optional landmark category or keyword to route through
        max_detour_distance: Largest extra distance a landmark route may add
        use_optimization_methods: Also run the direct/alternative synthesis
                                  builders and the multiple-paths search
    """
    sort_criteria: str = SortCriterion.DISTANCE.value
    max_routes: int = DEFAULT_MAX_ROUTES
    landmark: Optional[str] = None
    max_detour_distance: float = DEFAULT_MAX_DETOUR
    use_optimization_methods: bool = True

    @property
    def criterion(self) -> SortCriterion:
        return SortCriterion.parse(self.sort_criteria)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "RoutePreferences":
        """Build preferences from a mapping; unknown keys are ignored."""
        data = data or {}
        defaults = cls()
        landmark = data.get("landmark")
        return cls(
            sort_criteria=str(data.get("sort_criteria", defaults.sort_criteria)),
            max_routes=int(data.get("max_routes", defaults.max_routes)),
            landmark=str(landmark) if landmark else None,
            max_detour_distance=float(
                data.get("max_detour_distance", defaults.max_detour_distance)
            ),
            use_optimization_methods=bool(
                data.get("use_optimization_methods", defaults.use_optimization_methods)
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class PlannerConfig:
    """Tuning constants for every routing strategy."""
    travel_time: TravelTimeConfig = field(default_factory=TravelTimeConfig)
    direct_route_threshold: float = DIRECT_ROUTE_THRESHOLD
    alternative_weight: float = ALTERNATIVE_WEIGHT
    alternative_detour_factor: float = ALTERNATIVE_DETOUR_FACTOR
    greedy_end_weight: float = GREEDY_END_WEIGHT
    greedy_max_hops: int = GREEDY_MAX_HOPS
    memo_max_segment: float = MEMO_MAX_SEGMENT
    memo_search_limit: int = MEMO_SEARCH_LIMIT
    multiple_paths: int = DEFAULT_MULTIPLE_PATHS
    landmark_max_results: int = LANDMARK_MAX_RESULTS
    display_suffixes: Tuple[str, ...] = ()
    cache_size: int = DEFAULT_CACHE_SIZE
    preferences: RoutePreferences = field(default_factory=RoutePreferences)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PlannerConfig":
        """
        Build a config from a profile dictionary.

        Sections mirror the YAML profiles (``travel_time``, ``synthesis``,
        ``greedy``, ``memoized``, ``astar``, ``landmarks``, ``preferences``).
        Missing keys keep their defaults and unknown keys are ignored.
        """
        data = data or {}
        defaults = cls()

        tt = data.get("travel_time") or {}
        default_tt = defaults.travel_time
        travel_time = TravelTimeConfig(
            walking_speed=float(tt.get("walking_speed", default_tt.walking_speed)),
            correct_outliers=bool(tt.get("correct_outliers", default_tt.correct_outliers)),
            max_segment_distance=float(
                tt.get("max_segment_distance", default_tt.max_segment_distance)
            ),
            dampening_factor=float(tt.get("dampening_factor", default_tt.dampening_factor)),
        )

        synthesis = data.get("synthesis") or {}
        greedy = data.get("greedy") or {}
        memoized = data.get("memoized") or {}
        astar = data.get("astar") or {}
        landmarks = data.get("landmarks") or {}

        return cls(
            travel_time=travel_time,
            direct_route_threshold=float(
                synthesis.get("direct_route_threshold", defaults.direct_route_threshold)
            ),
            alternative_weight=float(
                synthesis.get("alternative_weight", defaults.alternative_weight)
            ),
            alternative_detour_factor=float(
                synthesis.get("alternative_detour_factor", defaults.alternative_detour_factor)
            ),
            greedy_end_weight=float(greedy.get("end_weight", defaults.greedy_end_weight)),
            greedy_max_hops=int(greedy.get("max_hops", defaults.greedy_max_hops)),
            memo_max_segment=float(memoized.get("max_segment", defaults.memo_max_segment)),
            memo_search_limit=int(memoized.get("search_limit", defaults.memo_search_limit)),
            multiple_paths=int(astar.get("multiple_paths", defaults.multiple_paths)),
            landmark_max_results=int(
                landmarks.get("max_results", defaults.landmark_max_results)
            ),
            display_suffixes=tuple(data.get("display_suffixes") or ()),
            cache_size=int(data.get("cache_size", defaults.cache_size)),
            preferences=RoutePreferences.from_dict(data.get("preferences")),
        )


def load_planner_config(profile: Optional[str] = None) -> PlannerConfig:
    """
    Load a PlannerConfig from a bundled YAML profile.

    Args:
        profile: Profile name; when None, CAMPUSNAV_PROFILE or the default
                 profile is used

    Raises:
        FileNotFoundError: If the profile doesn't exist
    """
    if profile is None:
        data = ConfigLoader.load_default_or_env_profile()
    else:
        data = ConfigLoader.load_profile(profile)
    return PlannerConfig.from_dict(data)

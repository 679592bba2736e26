"""Walking-route planning over a campus distance matrix."""

from .routing import CampusGraph, Route, Algorithm
from .planner import (
    RouteNavigator,
    RouteResults,
    RoutePreferences,
    PlannerConfig,
    load_planner_config,
    find_optimal_routes,
)

__version__ = "0.1.0"

__all__ = [
    "CampusGraph",
    "Route",
    "Algorithm",
    "RouteNavigator",
    "RouteResults",
    "RoutePreferences",
    "PlannerConfig",
    "load_planner_config",
    "find_optimal_routes",
]

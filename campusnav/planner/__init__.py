"""
Route Planner for Campus Navigation

Provides:
- RouteNavigator: runs every routing strategy, then dedups, ranks and truncates
- RoutePreferences / PlannerConfig: per-query options and strategy tuning
- StrategyTelemetry: per-strategy timing and route counts

Usage:
    from campusnav.planner import RouteNavigator, RoutePreferences, load_planner_config

    navigator = RouteNavigator(graph, config=load_planner_config("ug-legon"))
    results = navigator.find_optimal_routes(
        "Balme Library", "Night Market",
        RoutePreferences(sort_criteria="time", landmark="bank"),
    )
    print(results.to_frame())
"""

from .config import (
    RoutePreferences,
    PlannerConfig,
    load_planner_config,
    DEFAULT_MAX_ROUTES,
)

from .telemetry import StrategyTelemetry

from .navigator import (
    RouteNavigator,
    RouteResults,
    find_optimal_routes,
)

__all__ = [
    # Configuration
    "RoutePreferences",
    "PlannerConfig",
    "load_planner_config",
    "DEFAULT_MAX_ROUTES",

    # Telemetry
    "StrategyTelemetry",

    # Navigator
    "RouteNavigator",
    "RouteResults",
    "find_optimal_routes",
]

"""
Scoring Module for Campus Navigation

Provides:
- Distance to walking-time conversion with outlier correction
- Route ranking by distance, time, efficiency or composite key
- Route deduplication by rendered path

Usage:
    from campusnav.scoring import (
        estimate_travel,
        sort_routes,
        deduplicate_routes,
    )

    estimate = estimate_travel([("Library", 0.4), ("Main Gate", 0.6)])
    ranked = sort_routes(routes, "time")
"""

# Distance/time conversion
from .travel_time import (
    TravelTimeConfig,
    TravelEstimate,
    DEFAULT_TRAVEL_TIME_CONFIG,
    DEFAULT_WALKING_SPEED,
    correct_segment,
    round_minutes,
    minutes_for_distance,
    estimate_travel,
    distance_time,
)

# Ranking and deduplication
from .ranking import (
    SortCriterion,
    SortMethod,
    criterion_key,
    quick_sort,
    merge_sort,
    sort_routes,
    sort_by_multiple_criteria,
    get_top_n_routes,
    is_sorted,
    deduplicate_routes,
)

__all__ = [
    # Travel time
    "TravelTimeConfig",
    "TravelEstimate",
    "DEFAULT_TRAVEL_TIME_CONFIG",
    "DEFAULT_WALKING_SPEED",
    "correct_segment",
    "round_minutes",
    "minutes_for_distance",
    "estimate_travel",
    "distance_time",

    # Ranking
    "SortCriterion",
    "SortMethod",
    "criterion_key",
    "quick_sort",
    "merge_sort",
    "sort_routes",
    "sort_by_multiple_criteria",
    "get_top_n_routes",
    "is_sorted",
    "deduplicate_routes",
]

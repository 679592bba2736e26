"""Landmark taxonomy and landmark-constrained route search."""

from .taxonomy import (
    LandmarkCategory,
    LANDMARK_CATEGORIES,
    available_categories,
    category_for,
    matches_landmark,
    find_landmark_locations,
)

from .search import (
    search_routes_with_landmark,
    find_nearby_landmarks,
    DEFAULT_MAX_DETOUR,
    LANDMARK_MAX_RESULTS,
)

__all__ = [
    # Taxonomy
    "LandmarkCategory",
    "LANDMARK_CATEGORIES",
    "available_categories",
    "category_for",
    "matches_landmark",
    "find_landmark_locations",

    # Search
    "search_routes_with_landmark",
    "find_nearby_landmarks",
    "DEFAULT_MAX_DETOUR",
    "LANDMARK_MAX_RESULTS",
]

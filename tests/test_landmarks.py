"""
Unit Tests for landmark matching and landmark-constrained search (campusnav/landmarks)
"""

import pytest

from campusnav.landmarks.search import find_nearby_landmarks, search_routes_with_landmark
from campusnav.landmarks.taxonomy import (
    available_categories,
    category_for,
    find_landmark_locations,
    matches_landmark,
)
from campusnav.routing.models import Algorithm

from tests.conftest import assert_approx_equal, assert_segments_sum


# ==============================================================================
# Taxonomy
# ==============================================================================

class TestTaxonomy:
    """Test keyword-based landmark categories."""

    def test_available_categories(self):
        assert available_categories() == [
            "bank", "hospital", "library", "sports", "dining", "residence", "academic",
        ]

    @pytest.mark.parametrize("term,expected", [
        ("bank", "bank"),
        ("Nearest ATM", "bank"),
        ("medical centre", "hospital"),
        ("gym", "sports"),
        ("food court", "dining"),
        ("student hostel", "residence"),
        ("Academic", "academic"),
    ])
    def test_category_for(self, term, expected):
        assert category_for(term).name == expected

    def test_unrecognised_term(self):
        assert category_for("night market") is None
        assert category_for("") is None
        assert category_for(None) is None

    def test_category_synonyms(self):
        assert matches_landmark("GCB Bank Legon", "bank")
        assert matches_landmark("Balme Library Legon", "library")
        assert matches_landmark("Night Market Legon", "dining")
        assert matches_landmark("Legon Hospital", "medical")
        assert not matches_landmark("Balme Library Legon", "bank")

    def test_substring_fallback(self):
        assert matches_landmark("Night Market Legon", "night")
        assert not matches_landmark("Balme Library Legon", "night")

    def test_blank_term_matches_nothing(self):
        assert not matches_landmark("GCB Bank Legon", "")
        assert not matches_landmark("GCB Bank Legon", None)

    def test_find_landmark_locations(self, campus_graph):
        assert find_landmark_locations(campus_graph, "academic") == [3]
        assert find_landmark_locations(campus_graph, "library") == [0]
        assert find_landmark_locations(campus_graph, "observatory") == []


# ==============================================================================
# Landmark Routes
# ==============================================================================

class TestSearchRoutesWithLandmark:
    """Test start -> landmark -> end routes."""

    def test_route_via_landmark(self, campus_graph):
        routes = search_routes_with_landmark(campus_graph, "Balme Library", "Night Market", "hall")

        assert len(routes) == 1
        route = routes[0]
        assert route.path == "Balme Library => Commonwealth Hall => Night Market"
        assert_approx_equal(route.distance, 1.6)
        assert route.algorithm == Algorithm.LANDMARK.value
        assert_segments_sum(route)

    def test_detour_budget(self, campus_graph):
        # 0.9 + 0.7 - 1.2 = 0.4 extra
        assert search_routes_with_landmark(
            campus_graph, "Balme Library", "Night Market", "hall", max_detour_distance=0.3
        ) == []
        assert len(search_routes_with_landmark(
            campus_graph, "Balme Library", "Night Market", "hall", max_detour_distance=0.41
        )) == 1

    def test_never_exceeds_detour(self, campus_graph):
        direct = campus_graph.edge(0, 1)
        for category in available_categories():
            for route in search_routes_with_landmark(
                campus_graph, "Balme Library", "Night Market", category, max_detour_distance=0.5
            ):
                assert route.distance - direct <= 0.5 + 1e-9

    def test_leg_without_edge(self, campus_graph):
        # Legon Hospital has no usable edge to Night Market
        assert search_routes_with_landmark(
            campus_graph, "Balme Library", "Night Market", "hospital", max_detour_distance=5.0
        ) == []

    def test_sorted_and_capped(self, campus_graph):
        routes = search_routes_with_landmark(
            campus_graph, "Balme Library", "Night Market", "Legon", max_detour_distance=5.0
        )

        assert len(routes) == 3
        assert [r.distance for r in routes] == sorted(r.distance for r in routes)
        assert routes[0].path == "Balme Library => GCB Bank => Night Market"

    def test_max_results(self, campus_graph):
        routes = search_routes_with_landmark(
            campus_graph, "Balme Library", "Night Market", "Legon",
            max_detour_distance=5.0, max_results=1,
        )
        assert len(routes) == 1

    def test_no_matching_landmark(self, campus_graph):
        assert search_routes_with_landmark(
            campus_graph, "Balme Library", "Night Market", "observatory"
        ) == []

    def test_baseline_without_direct_edge(self, campus_graph):
        # Night Market -> Legon Hospital has no direct edge; shortest is 1.6
        assert search_routes_with_landmark(
            campus_graph, "Night Market", "Legon Hospital", "bank"
        ) == []

        routes = search_routes_with_landmark(
            campus_graph, "Night Market", "Legon Hospital", "bank", baseline_distance=1.6
        )
        assert [r.path for r in routes] == ["Night Market => GCB Bank => Legon Hospital"]

    def test_unresolved(self, campus_graph):
        assert search_routes_with_landmark(campus_graph, "Nowhere", "Night Market", "bank") == []


# ==============================================================================
# Nearby Landmarks
# ==============================================================================

class TestNearbyLandmarks:
    """Test the adjacency proximity query."""

    def test_within_radius(self, campus_graph):
        assert find_nearby_landmarks(campus_graph, "Balme Library", 1.0, "bank") == ["GCB Bank Legon"]
        assert find_nearby_landmarks(campus_graph, "Balme Library", 1.0, "residence") == [
            "Commonwealth Hall Legon"
        ]

    def test_outside_radius(self, campus_graph):
        assert find_nearby_landmarks(campus_graph, "Balme Library", 0.3, "bank") == []
        assert find_nearby_landmarks(campus_graph, "Balme Library", 1.0, "hospital") == []

    def test_unparseable_edge_is_not_adjacent(self, campus_graph):
        assert find_nearby_landmarks(campus_graph, "Night Market", 10.0, "hospital") == []

    def test_unresolved(self, campus_graph):
        assert find_nearby_landmarks(campus_graph, "Nowhere", 1.0, "bank") == []

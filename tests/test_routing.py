"""
Unit Tests for shortest-path engines (campusnav/routing)

Tests Dijkstra, the heuristic best-first search and the all-pairs table,
including agreement between the exact engines.
"""

import itertools

import pandas as pd
import pytest

from campusnav.routing.astar import (
    MIN_HEURISTIC,
    find_multiple_optimal_paths,
    find_optimal_path,
    heuristic,
    optimal_path_indices,
)
from campusnav.routing.dijkstra import (
    find_all_shortest_distances,
    find_shortest_path,
    shortest_path_indices,
)
from campusnav.routing.floyd_warshall import compute_all_pairs, floyd_warshall
from campusnav.routing.graph import CampusGraph
from campusnav.routing.models import Algorithm

from tests.conftest import assert_approx_equal, assert_segments_sum


# ==============================================================================
# Dijkstra
# ==============================================================================

class TestDijkstra:
    """Test uniform-cost shortest paths."""

    def test_relay_beats_direct_edge(self, relay_graph):
        route = find_shortest_path(relay_graph, "A", "C")

        assert route is not None
        assert route.path == "A => B => C"
        assert_approx_equal(route.distance, 1.0)
        assert route.time_minutes == 12.0
        assert route.algorithm == Algorithm.DIJKSTRA.value
        assert_segments_sum(route)

    def test_routes_around_unparseable_cell(self, campus_graph):
        route = find_shortest_path(campus_graph, "Night Market", "Legon Hospital")

        assert route.path == "Night Market => GCB Bank => Legon Hospital"
        assert_approx_equal(route.distance, 1.6)

    def test_unresolved_location(self, relay_graph):
        assert find_shortest_path(relay_graph, "A", "Nowhere") is None
        assert find_shortest_path(relay_graph, "", "C") is None

    def test_unreachable(self, island_graph):
        assert find_shortest_path(island_graph, "A", "D") is None

    def test_same_location(self, relay_graph):
        assert shortest_path_indices(relay_graph, 1, 1) == ([1], 0.0)

    def test_empty_graph(self):
        assert find_shortest_path(CampusGraph.from_table([]), "A", "B") is None

    def test_all_shortest_distances(self, island_graph):
        distances = find_all_shortest_distances(island_graph, "A")

        assert set(distances) == {"A", "B", "C"}
        assert distances["A"] == 0.0
        assert_approx_equal(distances["C"], 1.0)

    def test_all_shortest_distances_unresolved(self, island_graph):
        assert find_all_shortest_distances(island_graph, "Nowhere") == {}


# ==============================================================================
# Heuristic Search
# ==============================================================================

class TestHeuristic:
    """Test the category-based estimate."""

    def test_deterministic(self):
        a = heuristic("Balme Library", "Night Market")
        b = heuristic("Balme Library", "Night Market")
        assert a == b

    def test_case_insensitive(self):
        assert heuristic("Balme Library", "Night Market") == heuristic(
            "BALME LIBRARY", "NIGHT MARKET"
        )

    def test_same_department_category(self):
        value = heuristic("Physics Department", "Computer Science Department")
        assert 0.3 - 0.1 < value < 0.3 + 0.1

    def test_hospital_is_far(self):
        value = heuristic("Legon Hospital", "Night Market")
        assert 0.8 - 0.1 < value < 0.8 + 0.1

    def test_floor(self):
        names = ["Physics Department", "Business School", "Volta Hall", "Legon Hospital", "Gate"]
        for a, b in itertools.product(names, repeat=2):
            assert heuristic(a, b) >= MIN_HEURISTIC


class TestHeuristicSearch:
    """Test best-first search over the campus graph."""

    def test_relay(self, relay_graph):
        route = find_optimal_path(relay_graph, "A", "C")

        assert route.path == "A => B => C"
        assert_approx_equal(route.distance, 1.0)
        assert route.algorithm == Algorithm.ASTAR.value

    def test_campus_route_reaches_destination(self, campus_graph):
        route = find_optimal_path(campus_graph, "Night Market", "Legon Hospital")

        assert route.stops[0] == "Night Market"
        assert route.stops[-1] == "Legon Hospital"
        assert route.distance >= 1.6 - 1e-9
        assert_segments_sum(route)

    def test_unreachable(self, island_graph):
        assert find_optimal_path(island_graph, "A", "D") is None
        assert optimal_path_indices(island_graph, 0, 3) is None

    def test_unresolved(self, relay_graph):
        assert find_optimal_path(relay_graph, "Nowhere", "C") is None

    def test_multiple_paths_drops_duplicates(self, relay_graph):
        routes = find_multiple_optimal_paths(relay_graph, "A", "C", num_paths=3)

        assert len(routes) == 1
        assert routes[0].path == "A => B => C"
        assert routes[0].algorithm == Algorithm.MULTI_PATH.value

    def test_multiple_paths_none_requested(self, relay_graph):
        assert find_multiple_optimal_paths(relay_graph, "A", "C", num_paths=0) == []


# ==============================================================================
# All-Pairs
# ==============================================================================

class TestAllPairs:
    """Test Floyd-Warshall precomputation and derived queries."""

    def test_relay_distance(self, relay_graph):
        table = compute_all_pairs(relay_graph)
        assert_approx_equal(table.shortest_distance("A", "C"), 1.0)

    def test_unreachable_and_unresolved(self, island_graph):
        table = compute_all_pairs(island_graph)

        assert table.shortest_distance("A", "D") is None
        assert table.shortest_distance("A", "Nowhere") is None
        assert table.has_path("A", "C")
        assert not table.has_path("A", "D")
        assert not table.has_path("A", "A")

    def test_within_distance(self, island_graph):
        table = compute_all_pairs(island_graph)

        assert table.within_distance("A", 0.6) == ["B"]
        assert table.within_distance("A", 10.0) == ["B", "C"]
        assert table.within_distance("Nowhere", 10.0) == []

    def test_empty_graph(self):
        assert compute_all_pairs(CampusGraph.from_table([])) is None
        assert compute_all_pairs(None) is None

    def test_table_is_read_only(self, relay_graph):
        table = compute_all_pairs(relay_graph)
        with pytest.raises(ValueError):
            table.distances[0, 2] = 0.0

    def test_floyd_warshall_does_not_modify_input(self, relay_graph):
        weights = relay_graph.weight_matrix()
        floyd_warshall(weights)
        assert weights[0, 2] == 2.0

    def test_to_frame(self, relay_graph):
        frame = compute_all_pairs(relay_graph).to_frame()

        assert isinstance(frame, pd.DataFrame)
        assert list(frame.columns) == ["A", "B", "C"]
        assert_approx_equal(frame.loc["A", "C"], 1.0)

    def test_dijkstra_agrees_with_all_pairs(self, campus_graph):
        table = compute_all_pairs(campus_graph)

        for i, j in itertools.permutations(campus_graph.indices(), 2):
            route = find_shortest_path(campus_graph, campus_graph.name(i), campus_graph.name(j))
            expected = table.distance_between(i, j)
            if expected is None:
                assert route is None
            else:
                assert_approx_equal(route.distance, expected)

    def test_long_hop_distance_is_not_corrected(self):
        graph = CampusGraph.from_distances(["A", "B"], [[0.0, 8.0], [8.0, 0.0]])
        route = find_shortest_path(graph, "A", "B")

        assert route.distance == 8.0
        assert route.segments == (("B", 8.0),)
        assert route.distance == compute_all_pairs(graph).shortest_distance("A", "B")
        # timed on the damped 4.0
        assert route.time_minutes == 48.0

"""
Pytest configuration and shared fixtures for campusnav tests.

This file provides:
- Small distance tables (relay triangle, campus, chain, island)
- Route factories for ranking tests
- Common test utilities
"""

from typing import List, Optional

import pytest

from campusnav.routing.graph import CampusGraph
from campusnav.routing.models import Route


# ==============================================================================
# Distance Tables
# ==============================================================================

@pytest.fixture
def relay_rows() -> List[List[str]]:
    """A, B, C where B is the only sensible relay between A and C."""
    return [
        ["", "A", "B", "C"],
        ["A", "0", "0.5", "2.0"],
        ["B", "0.5", "0", "0.5"],
        ["C", "2.0", "0.5", "0"],
    ]


@pytest.fixture
def relay_graph(relay_rows) -> CampusGraph:
    return CampusGraph.from_table(relay_rows)


@pytest.fixture
def campus_rows() -> List[List[str]]:
    """
    Six Legon locations; Night Market <-> Legon Hospital is unparseable.

    Shortest distances used in tests:
        Balme Library -> Night Market: 0.9 via GCB Bank (direct 1.2)
        Night Market -> Legon Hospital: 1.6 via GCB Bank
    """
    names = [
        "Balme Library Legon",
        "Night Market Legon",
        "GCB Bank Legon",
        "Computer Science Department Legon",
        "Legon Hospital",
        "Commonwealth Hall Legon",
    ]
    matrix = [
        ["0", "1.2", "0.4", "0.6", "1.5", "0.9"],
        ["1.2", "0", "0.5", "1.0", "n/a", "0.7"],
        ["0.4", "0.5", "0", "0.8", "1.1", "0.6"],
        ["0.6", "1.0", "0.8", "0", "0.9", "1.3"],
        ["1.5", "n/a", "1.1", "0.9", "0", "1.0"],
        ["0.9", "0.7", "0.6", "1.3", "1.0", "0"],
    ]
    return [["Location"] + names] + [[name] + row for name, row in zip(names, matrix)]


@pytest.fixture
def campus_graph(campus_rows) -> CampusGraph:
    return CampusGraph.from_table(campus_rows, display_suffixes=(" Legon",))


@pytest.fixture
def chain_graph() -> CampusGraph:
    """W - X - Y - Z with no shortcuts."""
    return CampusGraph.from_distances(
        ["W", "X", "Y", "Z"],
        [
            [0.0, 1.0, None, None],
            [1.0, 0.0, 1.0, None],
            [None, 1.0, 0.0, 1.0],
            [None, None, 1.0, 0.0],
        ],
    )


@pytest.fixture
def island_graph() -> CampusGraph:
    """Relay triangle plus an unreachable location D."""
    return CampusGraph.from_distances(
        ["A", "B", "C", "D"],
        [
            [0.0, 0.5, 2.0, None],
            [0.5, 0.0, 0.5, None],
            [2.0, 0.5, 0.0, None],
            [None, None, None, 0.0],
        ],
    )


# ==============================================================================
# Routes
# ==============================================================================

def make_route(
    path: str,
    distance: float,
    minutes: float,
    algorithm: str = "Standard",
    segments: Optional[List[float]] = None,
) -> Route:
    """Build a Route directly from a rendered path (helper)."""
    stops = tuple(path.split(" => "))
    if segments is None:
        segments = [distance] if len(stops) == 2 else [0.0] * (len(stops) - 1)
    return Route(
        stops=stops,
        segments=tuple(zip(stops[1:], segments)),
        distance=distance,
        time_minutes=minutes,
        algorithm=algorithm,
    )


@pytest.fixture
def sample_routes() -> List[Route]:
    """Unsorted routes with a distance tie between the second and third."""
    return [
        make_route("A => B", 1.0, 12.0, "Dijkstra's Algorithm"),
        make_route("A => C", 0.5, 6.0, "Greedy Algorithm"),
        make_route("A => D", 0.5, 6.0, "Dynamic Programming"),
        make_route("A => E", 2.0, 24.0, "A* Search Algorithm"),
    ]


# ==============================================================================
# Environment Setup
# ==============================================================================

@pytest.fixture(autouse=True)
def clear_profile_env(monkeypatch):
    """Tests never inherit a planner profile from the shell."""
    monkeypatch.delenv("CAMPUSNAV_PROFILE", raising=False)


# ==============================================================================
# Utilities
# ==============================================================================

def assert_approx_equal(a: float, b: float, tolerance: float = 1e-9):
    """Assert two floats are approximately equal."""
    assert abs(a - b) < tolerance, f"{a} != {b} (tolerance={tolerance})"


def assert_segments_sum(route: Route):
    """Assert a route's distance is the sum of its segment distances."""
    assert_approx_equal(route.distance, sum(d for _, d in route.segments))

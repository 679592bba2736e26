"""Campus graph and route-finding algorithms."""

from .graph import (
    CampusGraph,
    parse_distance,
)

from .models import (
    # Data models
    Route,
    Algorithm,

    # Builders
    build_route,
    route_from_segments,
    trivial_route,

    # Constants
    PATH_SEPARATOR,
    DEFAULT_SEGMENT_DISTANCE,
)

from .dijkstra import (
    find_shortest_path,
    find_all_shortest_distances,
    shortest_path_indices,
)

from .astar import (
    heuristic,
    find_optimal_path,
    find_multiple_optimal_paths,
    optimal_path_indices,
)

from .floyd_warshall import (
    AllPairsTable,
    compute_all_pairs,
    floyd_warshall,
)

from .synthesis import (
    generate_direct_route,
    generate_alternative_route,
    generate_synthesized_routes,
)

from .greedy import (
    generate_greedy_route,
    greedy_walk,
    GreedyWalk,
    GreedyStep,
    format_reason,
)

from .memoized import (
    generate_memoized_route,
    MemoizedRouteBuilder,
)

__all__ = [
    # Graph
    "CampusGraph",
    "parse_distance",

    # Data models
    "Route",
    "Algorithm",
    "build_route",
    "route_from_segments",
    "trivial_route",
    "PATH_SEPARATOR",
    "DEFAULT_SEGMENT_DISTANCE",

    # Exact search
    "find_shortest_path",
    "find_all_shortest_distances",
    "shortest_path_indices",
    "heuristic",
    "find_optimal_path",
    "find_multiple_optimal_paths",
    "optimal_path_indices",

    # All-pairs
    "AllPairsTable",
    "compute_all_pairs",
    "floyd_warshall",

    # Synthesis
    "generate_direct_route",
    "generate_alternative_route",
    "generate_synthesized_routes",

    # Greedy stepping
    "generate_greedy_route",
    "greedy_walk",
    "GreedyWalk",
    "GreedyStep",
    "format_reason",

    # Memoized builder
    "generate_memoized_route",
    "MemoizedRouteBuilder",
]

"""Test package for campusnav.

This package contains:
- Graph and route model tests (test_graph.py)
- Shortest-path engine tests (test_routing.py)
- Synthesis, greedy and memoized builder tests (test_synthesis.py)
- Travel time and ranking tests (test_travel_time.py, test_ranking.py)
- Landmark tests (test_landmarks.py)
- Planner, config and navigator tests (test_config.py, test_navigator.py)
- Test configuration (conftest.py)
"""

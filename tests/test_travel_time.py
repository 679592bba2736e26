"""
Unit Tests for distance/time conversion (campusnav/scoring/travel_time.py)
"""

import pytest

from campusnav.scoring.travel_time import (
    TravelTimeConfig,
    correct_segment,
    distance_time,
    estimate_travel,
    minutes_for_distance,
    round_minutes,
)


class TestRoundMinutes:
    """Test the minute rounding policy."""

    @pytest.mark.parametrize("minutes", [0.0, -1.0])
    def test_no_travel(self, minutes):
        assert round_minutes(minutes) == 0.0

    def test_under_one_minute_has_floor(self):
        assert round_minutes(0.12) == 0.5
        assert round_minutes(0.23) == 0.5

    def test_under_one_minute_rounds_to_tenths(self):
        assert round_minutes(0.74) == 0.7
        assert round_minutes(0.86) == 0.9

    def test_under_five_minutes_rounds_to_halves(self):
        assert round_minutes(2.2) == 2.0
        assert round_minutes(2.4) == 2.5
        assert round_minutes(2.25) == 2.5

    def test_whole_minutes(self):
        assert round_minutes(12.4) == 12.0
        assert round_minutes(12.5) == 13.0
        assert round_minutes(20.4) == 20.0


class TestCorrectSegment:
    """Test outlier damping of individual hops."""

    def test_plausible_hop_unchanged(self):
        assert correct_segment(4.0) == 4.0
        assert correct_segment(5.0) == 5.0

    def test_outlier_is_damped(self):
        assert correct_segment(6.0) == 3.0

    def test_damped_outlier_is_capped(self):
        assert correct_segment(12.0) == 5.0

    def test_correction_disabled(self):
        config = TravelTimeConfig(correct_outliers=False)
        assert correct_segment(12.0, config) == 12.0

    def test_custom_constants(self):
        config = TravelTimeConfig(max_segment_distance=2.0, dampening_factor=0.25)
        assert correct_segment(4.0, config) == 1.0


class TestEstimateTravel:
    """Test summing segments and converting to minutes."""

    def test_walking_speed(self):
        assert minutes_for_distance(1.0) == 12.0
        assert minutes_for_distance(1.0, TravelTimeConfig(walking_speed=2.5)) == 24.0

    def test_pairs(self):
        estimate = estimate_travel([("B", 0.5), ("C", 0.5)])

        assert estimate.distance == pytest.approx(1.0)
        assert estimate.minutes == 12.0
        assert estimate.segments == (("B", 0.5), ("C", 0.5))

    def test_mapping_keeps_insertion_order(self):
        estimate = estimate_travel({"C": 0.3, "B": 0.7})
        assert [name for name, _ in estimate.segments] == ["C", "B"]

    def test_outliers_only_shorten_the_time(self):
        estimate = estimate_travel([("Far", 12.0), ("Near", 1.0)])

        assert estimate.segments == (("Far", 12.0), ("Near", 1.0))
        assert estimate.distance == 13.0
        assert estimate.timed_distance == 6.0
        assert estimate.minutes == 72.0

    def test_correction_disabled_times_full_distance(self):
        estimate = estimate_travel([("Far", 12.0)], TravelTimeConfig(correct_outliers=False))

        assert estimate.distance == 12.0
        assert estimate.timed_distance == 12.0
        assert estimate.minutes == 144.0

    def test_empty(self):
        assert distance_time([]) == (0.0, 0.0)

    def test_monotonic_in_distance(self):
        distances = [0.01, 0.05, 0.1, 0.3, 0.41, 0.5, 1.0, 2.0, 4.9]
        times = [distance_time([("X", d)])[1] for d in distances]
        assert times == sorted(times)

"""
Distance to walking-time conversion.

Converts the ordered segments of a route into a total distance and a
rounded minute estimate. Campus survey data contains occasional outlier
hops, so when outlier correction is enabled individual segments above a
plausible maximum are damped before the walking time is computed. Reported
distances are never corrected.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Mapping, Tuple, Union

# Walking speed in distance units (km) per hour
DEFAULT_WALKING_SPEED = 5.0

# Outlier correction defaults, tuned on the Legon survey data
DEFAULT_MAX_SEGMENT_DISTANCE = 5.0
DEFAULT_DAMPENING_FACTOR = 0.5

Segments = Union[Mapping[str, float], Iterable[Tuple[str, float]]]


@dataclass(frozen=True)
class TravelTimeConfig:
    """Configuration for distance/time conversion."""

    walking_speed: float = DEFAULT_WALKING_SPEED
    """Walking speed in distance units per hour."""

    correct_outliers: bool = True
    """Damp individual segments longer than ``max_segment_distance`` when timing."""

    max_segment_distance: float = DEFAULT_MAX_SEGMENT_DISTANCE
    """Longest plausible single hop."""

    dampening_factor: float = DEFAULT_DAMPENING_FACTOR
    """Multiplier applied to an outlier hop before clamping to the cap."""


DEFAULT_TRAVEL_TIME_CONFIG = TravelTimeConfig()


@dataclass(frozen=True)
class TravelEstimate:
    """
    Total distance and time for an ordered list of segments.

    Attributes:
        distance: Sum of the segment distances as given
        minutes: Rounded walking time for ``timed_distance``
        segments: The (stop name, distance) pairs, unchanged
        timed_distance: Sum of the outlier-corrected segments
    """
    distance: float
    minutes: float
    segments: Tuple[Tuple[str, float], ...]
    timed_distance: float


def _as_pairs(segments: Segments) -> Tuple[Tuple[str, float], ...]:
    if isinstance(segments, Mapping):
        items = segments.items()
    else:
        items = segments
    return tuple((str(name), float(distance)) for name, distance in items)


def _round_half_up(value: float, step: float) -> float:
    return round(math.floor(value / step + 0.5) * step, 1)


def correct_segment(distance: float, config: TravelTimeConfig = DEFAULT_TRAVEL_TIME_CONFIG) -> float:
    """Damp a single hop that exceeds the plausible maximum."""
    if not config.correct_outliers or distance <= config.max_segment_distance:
        return distance
    return min(distance * config.dampening_factor, config.max_segment_distance)


def round_minutes(minutes: float) -> float:
    """
    Apply the minute rounding policy.

    - zero or negative: 0.0 (no travel)
    - under 1 minute: nearest 0.1 minute, never below 0.5
    - under 5 minutes: nearest 0.5 minute
    - otherwise: nearest whole minute
    """
    if minutes <= 0:
        return 0.0
    if minutes < 1:
        return max(0.5, _round_half_up(minutes, 0.1))
    if minutes < 5:
        return _round_half_up(minutes, 0.5)
    return _round_half_up(minutes, 1.0)


def minutes_for_distance(
    distance: float,
    config: TravelTimeConfig = DEFAULT_TRAVEL_TIME_CONFIG,
) -> float:
    """Rounded walking time in minutes for a total distance."""
    raw_minutes = distance / config.walking_speed * 60.0
    return round_minutes(raw_minutes)


def estimate_travel(
    segments: Segments,
    config: TravelTimeConfig = DEFAULT_TRAVEL_TIME_CONFIG,
) -> TravelEstimate:
    """
    Sum route segments and convert the total to minutes.

    Args:
        segments: Ordered (stop name, distance) pairs or an insertion-ordered
                  mapping; order follows the path
        config: Conversion settings

    Returns:
        TravelEstimate with ``distance == sum(segment distances)``; outlier
        correction only affects ``timed_distance`` and ``minutes``
    """
    pairs = _as_pairs(segments)
    total = math.fsum(distance for _, distance in pairs)
    timed = math.fsum(correct_segment(distance, config) for _, distance in pairs)
    return TravelEstimate(
        distance=total,
        minutes=minutes_for_distance(timed, config),
        segments=pairs,
        timed_distance=timed,
    )


def distance_time(
    segments: Segments,
    config: TravelTimeConfig = DEFAULT_TRAVEL_TIME_CONFIG,
) -> Tuple[float, float]:
    """Return ``(total_distance, minutes)`` for ordered route segments."""
    estimate = estimate_travel(segments, config)
    return estimate.distance, estimate.minutes

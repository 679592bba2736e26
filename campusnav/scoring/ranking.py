"""
Route Ranking and Deduplication

Orders candidate routes by distance, time, efficiency or a composite
(distance, then time) key. Two interchangeable sort implementations are
provided: an iterative partition-exchange sort and a stable merge sort.
Both break key ties by input position, so they always agree.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Callable, Iterable, List, Sequence, Tuple

if TYPE_CHECKING:
    from ..routing.models import Route


class SortCriterion(Enum):
    """Supported ranking criteria; lower values rank first."""
    DISTANCE = "distance"
    TIME = "time"
    EFFICIENCY = "efficiency"
    COMPOSITE = "composite"

    @classmethod
    def parse(cls, value: "SortCriterion | str | None") -> "SortCriterion":
        """
        Lenient parsing of user-supplied criteria.

        Unknown or missing values fall back to COMPOSITE (distance, then time).
        """
        if isinstance(value, SortCriterion):
            return value
        if value is None:
            return cls.COMPOSITE
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.COMPOSITE


class SortMethod(Enum):
    """Sort implementation to use."""
    QUICK = "quick"
    MERGE = "merge"


def route_efficiency(route: "Route") -> float:
    """Distance per minute, lower is better."""
    return route.distance / max(route.time_minutes, 0.1)


def criterion_key(criterion: "SortCriterion | str") -> Callable[["Route"], Tuple[float, ...]]:
    """Key function for a criterion; keys are tuples so they compare uniformly."""
    criterion = SortCriterion.parse(criterion)
    if criterion is SortCriterion.DISTANCE:
        return lambda r: (r.distance,)
    if criterion is SortCriterion.TIME:
        return lambda r: (r.time_minutes,)
    if criterion is SortCriterion.EFFICIENCY:
        return lambda r: (route_efficiency(r),)
    return lambda r: (r.distance, r.time_minutes)


# (key, input position, route)
_Entry = Tuple[Tuple[float, ...], int, "Route"]


def _decorate(routes: Sequence["Route"], criterion) -> List[_Entry]:
    key = criterion_key(criterion)
    return [(key(route), position, route) for position, route in enumerate(routes)]


def _comes_before(a: _Entry, b: _Entry, ascending: bool) -> bool:
    """Strict total order: key in the requested direction, then input position."""
    if a[0] != b[0]:
        return a[0] < b[0] if ascending else a[0] > b[0]
    return a[1] < b[1]


def quick_sort(
    routes: Sequence["Route"],
    criterion: "SortCriterion | str" = SortCriterion.DISTANCE,
    ascending: bool = True,
) -> List["Route"]:
    """
    Partition-exchange sort (Lomuto partition, last element as pivot).

    Uses an explicit stack instead of recursion. Returns a new list.
    """
    items = _decorate(routes, criterion)
    stack = [(0, len(items) - 1)]

    while stack:
        low, high = stack.pop()
        if low >= high:
            continue
        pivot = items[high]
        i = low - 1
        for j in range(low, high):
            if _comes_before(items[j], pivot, ascending):
                i += 1
                items[i], items[j] = items[j], items[i]
        items[i + 1], items[high] = items[high], items[i + 1]
        stack.append((low, i))
        stack.append((i + 2, high))

    return [route for _, _, route in items]


def _merge(left: List[_Entry], right: List[_Entry], ascending: bool) -> List[_Entry]:
    merged: List[_Entry] = []
    i = j = 0
    while i < len(left) and j < len(right):
        if _comes_before(right[j], left[i], ascending):
            merged.append(right[j])
            j += 1
        else:
            merged.append(left[i])
            i += 1
    merged.extend(left[i:])
    merged.extend(right[j:])
    return merged


def merge_sort(
    routes: Sequence["Route"],
    criterion: "SortCriterion | str" = SortCriterion.DISTANCE,
    ascending: bool = True,
) -> List["Route"]:
    """Stable bottom-up merge sort. Returns a new list."""
    runs = [[entry] for entry in _decorate(routes, criterion)]
    if not runs:
        return []

    while len(runs) > 1:
        next_runs = []
        for k in range(0, len(runs), 2):
            if k + 1 < len(runs):
                next_runs.append(_merge(runs[k], runs[k + 1], ascending))
            else:
                next_runs.append(runs[k])
        runs = next_runs

    return [route for _, _, route in runs[0]]


def sort_routes(
    routes: Sequence["Route"],
    criterion: "SortCriterion | str" = SortCriterion.DISTANCE,
    ascending: bool = True,
    method: "SortMethod | str" = SortMethod.MERGE,
) -> List["Route"]:
    """
    Sort routes by a criterion.

    Args:
        routes: Routes to sort (not modified)
        criterion: distance | time | efficiency | composite
        ascending: True puts the best (lowest) routes first
        method: "quick" or "merge"; both give identical results

    Returns:
        New sorted list
    """
    method = SortMethod(method) if not isinstance(method, SortMethod) else method
    if method is SortMethod.QUICK:
        return quick_sort(routes, criterion, ascending)
    return merge_sort(routes, criterion, ascending)


def sort_by_multiple_criteria(routes: Sequence["Route"]) -> List["Route"]:
    """Distance first, ties broken by time."""
    return merge_sort(routes, SortCriterion.COMPOSITE, ascending=True)


def get_top_n_routes(
    routes: Sequence["Route"],
    criterion: "SortCriterion | str",
    n: int,
) -> List["Route"]:
    """Best ``n`` routes by criterion (empty for n <= 0 or no routes)."""
    if not routes or n <= 0:
        return []
    return sort_routes(routes, criterion, ascending=True)[:n]


def is_sorted(
    routes: Sequence["Route"],
    criterion: "SortCriterion | str" = SortCriterion.DISTANCE,
    ascending: bool = True,
) -> bool:
    """Check that adjacent routes are in non-decreasing (or non-increasing) key order."""
    key = criterion_key(criterion)
    keys = [key(route) for route in routes]
    if ascending:
        return all(a <= b for a, b in zip(keys, keys[1:]))
    return all(a >= b for a, b in zip(keys, keys[1:]))


def deduplicate_routes(routes: Iterable["Route"]) -> List["Route"]:
    """Drop routes whose rendered path repeats an earlier one; first occurrence wins."""
    seen = set()
    unique: List["Route"] = []
    for route in routes:
        if route is None or route.path in seen:
            continue
        seen.add(route.path)
        unique.append(route)
    return unique

"""
Landmark keyword taxonomy.

A closed set of landmark categories, each with the words that select it
from a user's search term and the synonym substrings that identify a
matching location name. Everything is compared in lowercase.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..routing.graph import CampusGraph


@dataclass(frozen=True)
class LandmarkCategory:
    """A landmark category and its keyword lists."""
    name: str
    triggers: Tuple[str, ...]
    synonyms: Tuple[str, ...]

    def selected_by(self, term: str) -> bool:
        return any(word in term for word in self.triggers)

    def matches(self, location_name: str) -> bool:
        location = location_name.lower()
        return any(word in location for word in self.synonyms)


# Checked in this order; the first category selected by a term wins
LANDMARK_CATEGORIES: Tuple[LandmarkCategory, ...] = (
    LandmarkCategory(
        name="bank",
        triggers=("bank", "atm", "financial"),
        synonyms=("bank", "atm", "gcb", "financial"),
    ),
    LandmarkCategory(
        name="hospital",
        triggers=("hospital", "medical", "clinic", "health"),
        synonyms=("hospital", "clinic", "health", "medical"),
    ),
    LandmarkCategory(
        name="library",
        triggers=("library",),
        synonyms=("library", "balme", "reading"),
    ),
    LandmarkCategory(
        name="sports",
        triggers=("sports", "gym", "stadium"),
        synonyms=("sports", "stadium", "field", "court", "pool", "gym"),
    ),
    LandmarkCategory(
        name="dining",
        triggers=("dining", "food", "canteen"),
        synonyms=("canteen", "dining", "restaurant", "food", "market"),
    ),
    LandmarkCategory(
        name="residence",
        triggers=("residence", "hall", "hostel"),
        synonyms=("hall", "hostel", "residence", "accommodation"),
    ),
    LandmarkCategory(
        name="academic",
        triggers=("academic", "department", "school"),
        synonyms=("department", "school", "faculty", "college", "institute"),
    ),
)

CATEGORIES_BY_NAME: Dict[str, LandmarkCategory] = {c.name: c for c in LANDMARK_CATEGORIES}


def available_categories() -> List[str]:
    """Landmark categories that can be searched."""
    return [category.name for category in LANDMARK_CATEGORIES]


def category_for(term: Optional[str]) -> Optional[LandmarkCategory]:
    """
    Map a free-text landmark term to its category.

    An exact category name wins, then the first category with a trigger word
    contained in the term. Returns None for blank or unrecognised terms.
    """
    if term is None:
        return None
    term = term.strip().lower()
    if not term:
        return None
    if term in CATEGORIES_BY_NAME:
        return CATEGORIES_BY_NAME[term]
    for category in LANDMARK_CATEGORIES:
        if category.selected_by(term):
            return category
    return None


def matches_landmark(location_name: str, term: Optional[str]) -> bool:
    """
    Check whether a location name satisfies a landmark term.

    Examples:
        >>> matches_landmark("GCB Bank Legon", "bank")
        True
        >>> matches_landmark("Korle Bu Clinic", "medical")
        True
        >>> matches_landmark("Night Market", "night")
        True
    """
    if term is None or not term.strip():
        return False
    category = category_for(term)
    if category is not None:
        return category.matches(location_name)
    return term.strip().lower() in location_name.lower()


def find_landmark_locations(graph: CampusGraph, term: Optional[str]) -> List[int]:
    """Indices of every location matching the landmark term, in matrix order."""
    return [i for i in graph.indices() if matches_landmark(graph.name(i), term)]

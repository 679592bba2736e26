"""
Campus graph built from a self-describing distance matrix.

The distance matrix arrives already parsed by the caller (CSV rows or a
pandas DataFrame). This module turns it into an immutable ``CampusGraph``:
- canonical location names in matrix order
- a read-only numpy array of parsed distances (NaN where a cell is absent
  or unparseable, 0.0 on the diagonal)
- a name -> index map built once, plus the lenient "contains" lookup used
  at the query boundary
"""

from __future__ import annotations

import math
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd


def parse_distance(cell) -> Optional[float]:
    """
    Parse a single matrix cell.

    Returns:
        The distance as a float, or None if the cell is empty, non-numeric
        or not finite.
    """
    if cell is None:
        return None
    try:
        value = float(str(cell).strip())
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


class CampusGraph:
    """Immutable location graph over a dense distance matrix."""

    def __init__(
        self,
        names: Sequence[str],
        distances: np.ndarray,
        display_suffixes: Sequence[str] = (),
    ):
        """
        Args:
            names: Canonical location names, in matrix order
            distances: N x N float array, NaN for absent edges
            display_suffixes: Suffixes stripped from names when rendering routes
        """
        n = len(names)
        values = np.array(distances, dtype=float).reshape(n, n) if n else np.zeros((0, 0))
        np.fill_diagonal(values, 0.0)
        values.setflags(write=False)

        self._names: Tuple[str, ...] = tuple(str(name).strip() for name in names)
        self._values = values
        self._display_suffixes = tuple(display_suffixes)
        self._index: Dict[str, int] = {}
        for i, name in enumerate(self._names):
            self._index.setdefault(name, i)

    # -----------------------------
    # Constructors
    # -----------------------------

    @classmethod
    def from_table(
        cls,
        rows: Sequence[Sequence[str]],
        display_suffixes: Sequence[str] = (),
    ) -> "CampusGraph":
        """
        Build a graph from a self-describing table.

        ``rows[0]`` is the header: a corner cell followed by every location
        name. Each following row starts with its location label, then holds
        the distance text to every location in header order. Missing rows or
        cells are treated as absent edges.
        """
        if not rows:
            return cls([], np.zeros((0, 0)), display_suffixes)

        names = [str(name) for name in rows[0][1:]]
        n = len(names)
        values = np.full((n, n), np.nan)
        for i in range(n):
            if i + 1 >= len(rows):
                break
            row = rows[i + 1]
            for j in range(n):
                if j + 1 >= len(row):
                    break
                parsed = parse_distance(row[j + 1])
                if parsed is not None:
                    values[i, j] = parsed
        return cls(names, values, display_suffixes)

    @classmethod
    def from_frame(
        cls,
        frame: pd.DataFrame,
        display_suffixes: Sequence[str] = (),
    ) -> "CampusGraph":
        """
        Build a graph from a DataFrame whose columns are the location names.

        Rows are aligned to the columns by label; cells that cannot be
        coerced to numbers become absent edges.
        """
        names = [str(c) for c in frame.columns]
        aligned = frame.copy()
        aligned.index = [str(i) for i in aligned.index]
        aligned.columns = names
        aligned = aligned.reindex(index=names)
        numeric = aligned.apply(lambda col: pd.to_numeric(col, errors="coerce"))
        values = np.array(numeric, dtype=float)
        values[~np.isfinite(values)] = np.nan
        return cls(names, values, display_suffixes)

    @classmethod
    def from_distances(
        cls,
        names: Sequence[str],
        distances: Sequence[Sequence[Optional[float]]],
        display_suffixes: Sequence[str] = (),
    ) -> "CampusGraph":
        """
        Build a graph from numeric rows (None or NaN marks an absent edge).

        Raises:
            ValueError: If the rows do not form a square matrix matching names
        """
        n = len(names)
        if len(distances) != n or any(len(row) != n for row in distances):
            raise ValueError(
                f"Distance matrix must be {n}x{n} to match {n} location names"
            )
        values = np.array(
            [[np.nan if v is None else float(v) for v in row] for row in distances],
            dtype=float,
        ).reshape(n, n)
        values[~np.isfinite(values)] = np.nan
        return cls(names, values, display_suffixes)

    # -----------------------------
    # Names
    # -----------------------------

    @property
    def names(self) -> Tuple[str, ...]:
        return self._names

    @property
    def values(self) -> np.ndarray:
        """Read-only parsed distances (NaN = absent)."""
        return self._values

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, query: str) -> bool:
        return self.resolve(query) is not None

    def resolve(self, query: Optional[str]) -> Optional[int]:
        """
        Resolve a user query to a location index.

        Exact names win; otherwise the first canonical name containing the
        query (e.g. "Library" -> "Balme Library Legon"). Blank queries never
        resolve.
        """
        if query is None:
            return None
        query = str(query).strip()
        if not query:
            return None
        if query in self._index:
            return self._index[query]
        for i, name in enumerate(self._names):
            if query in name:
                return i
        return None

    def name(self, index: int) -> str:
        return self._names[index]

    def display_name(self, index: int) -> str:
        """Location name with display suffixes (e.g. " Legon") removed."""
        name = self._names[index]
        for suffix in self._display_suffixes:
            name = name.replace(suffix, "")
        return name.strip()

    # -----------------------------
    # Distances
    # -----------------------------

    def raw(self, i: int, j: int) -> Optional[float]:
        """Parsed matrix entry, or None when the cell was unparseable."""
        value = self._values[i, j]
        if np.isnan(value):
            return None
        return float(value)

    def edge(self, i: int, j: int) -> Optional[float]:
        """Direct edge weight; only strictly positive entries count."""
        if i == j:
            return None
        value = self.raw(i, j)
        if value is None or value <= 0:
            return None
        return value

    def neighbors(self, i: int) -> Iterator[Tuple[int, float]]:
        """Yield (index, weight) for every valid edge out of ``i``, in index order."""
        row = self._values[i]
        valid = np.flatnonzero(np.nan_to_num(row, nan=0.0) > 0)
        for j in valid:
            if j != i:
                yield int(j), float(row[j])

    def weight_matrix(self) -> np.ndarray:
        """Copy of the distances with inf for absent edges and 0 on the diagonal."""
        positive = np.nan_to_num(self._values, nan=0.0) > 0
        weights = np.where(positive, self._values, np.inf)
        np.fill_diagonal(weights, 0.0)
        return weights

    def indices(self) -> List[int]:
        return list(range(len(self._names)))

    def __repr__(self) -> str:
        return f"CampusGraph(locations={len(self)})"

"""Points of a domain, and how a selector picks positions among them."""

import collections
import collections.abc
import functools
import keyword

import numpy as np

from radio_maps.errors import InvalidGeometry, IndexOutOfRange


@functools.lru_cache(maxsize=None)
def point_type(names: tuple[str, ...]) -> type:
    """Named tuple type with one field per axis, e.g. Point(X=..., Y=...)."""
    return collections.namedtuple("Point", names)


def check_axis_name(name) -> str:
    if not isinstance(name, str) or not name.isidentifier() or keyword.iskeyword(name) or name.startswith("_"):
        raise InvalidGeometry(f"Axis name must be a public identifier, got {name!r}")
    return name


def check_position(index, nb_points: int) -> int:
    if not isinstance(index, (int, np.integer)) or isinstance(index, bool):
        raise TypeError(f"Position must be an integer, got {index!r}")
    if not 0 <= index < nb_points:
        raise IndexOutOfRange(f"Position {index} is outside [0, {nb_points})")
    return int(index)


def resolve_selector(selector, nb_points: int) -> slice | np.ndarray:
    """Turn a linear selector into something that indexes a 1D array of nb_points.

    Slices are kept as they are, so that indexing a buffer with them gives a view.
    Integers, integer sequences and boolean masks become an array of positions, in
    selection order. Both domain columns and map buffers are indexed with the result,
    which keeps points and values in correspondence.
    """
    if isinstance(selector, slice):
        return selector
    if isinstance(selector, (int, np.integer)) and not isinstance(selector, bool):
        return np.array([check_position(selector, nb_points)], dtype=np.intp)

    positions = np.asarray(selector)
    if positions.dtype == bool:
        if positions.shape != (nb_points,):
            raise IndexOutOfRange(f"Boolean mask of shape {positions.shape} does not match {nb_points} points")
        return np.flatnonzero(positions)
    if positions.size == 0:
        return np.empty(0, dtype=np.intp)
    if positions.ndim != 1 or not np.issubdtype(positions.dtype, np.integer):
        raise TypeError(f"Cannot select points with {selector!r}")
    if positions.min() < 0 or positions.max() >= nb_points:
        raise IndexOutOfRange(f"Positions {positions.min()}..{positions.max()} exceed [0, {nb_points})")
    return positions.astype(np.intp)


class PointSequence(collections.abc.Sequence):
    """Lazy, re-iterable sequence of the points of a domain.

    Points are built on access from the coordinate columns, so iterating twice gives the
    same points in the same order, without touching the domain.
    """

    def __init__(self, names: tuple[str, ...], columns: tuple[np.ndarray, ...]):
        self.names = names
        self._columns = columns
        self._point = point_type(names)

    def __len__(self):
        return len(self._columns[0])

    def __getitem__(self, index):
        if isinstance(index, slice):
            return PointSequence(self.names, tuple(column[index] for column in self._columns))
        index = check_position(index, len(self))
        return self._point._make(column[index] for column in self._columns)

    def __iter__(self):
        return map(self._point._make, zip(*self._columns))

    def __repr__(self):
        return f"PointSequence({len(self)} points of {self.names})"

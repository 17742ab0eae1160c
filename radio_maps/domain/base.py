import typing

import numpy as np

from radio_maps.executor import ExecutionPolicy, check_policy
from radio_maps.domain.points import PointSequence


# marks an argument of `rebuild` that keeps the current value, since None is a valid header
keep = object()


class Domain:
    """Ordered sample locations, together with an execution policy and an opaque header.

    Concrete geometries provide `columns()`: one flattened coordinate array per axis, all
    of the same length, in point order.
    """

    dimnames: tuple[str, ...]

    def __init__(self, executor: ExecutionPolicy, header: typing.Any):
        self._executor = check_policy(executor)
        self._header = header

    @property
    def executor(self) -> ExecutionPolicy:
        return self._executor

    @property
    def header(self):
        return self._header

    @property
    def ndims(self):
        return len(self.shape)

    @property
    def shape(self) -> tuple[int, ...]:
        raise NotImplementedError

    def columns(self) -> tuple[np.ndarray, ...]:
        raise NotImplementedError

    def slice(self, selector) -> "Domain":
        raise NotImplementedError

    def rebuild(self, executor=keep, header=keep) -> "Domain":
        raise NotImplementedError

    def __len__(self):
        return len(self.columns()[0])

    def points(self) -> PointSequence:
        return PointSequence(self.dimnames, self.columns())

    def coordinates(self, name: str) -> np.ndarray:
        """Coordinate of every point along the named axis."""
        if name not in self.dimnames:
            raise KeyError(f"No axis '{name}' in {self.dimnames}")
        return self.columns()[self.dimnames.index(name)]

    def equals(self, other) -> bool:
        """Same axis names and same point coordinates in the same order."""
        if self is other:
            return True
        if not isinstance(other, Domain):
            return False
        if self.dimnames != other.dimnames or len(self) != len(other):
            return False
        return all(np.array_equal(mine, theirs) for [mine, theirs] in zip(self.columns(), other.columns()))

    def __eq__(self, other):
        if not isinstance(other, Domain):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __repr__(self):
        extents = ", ".join(f"{name}: {n}" for [name, n] in zip(self.dimnames, self._extents()))
        return f"{type(self).__name__}({extents}; executor={self.executor!r})"

    def _extents(self):
        return [len(self)] * len(self.dimnames)


def freeze(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array

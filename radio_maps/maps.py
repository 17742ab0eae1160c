"""
Values living on a domain.

A DomainMap holds a flat buffer with one value per point of its domain. The buffer is
addressed linearly, in the order of `domain.points()`; for grids `to_array()` gives the
grid-shaped view of the same buffer.
"""

import operator
import typing

import numpy as np

from radio_maps.errors import DomainMismatch, SizeMismatch
from radio_maps.domain import Domain, RectiGrid, resolve_selector
from radio_maps.domain.grid import is_grid_selector
from radio_maps.domain.points import check_position


class DomainMap:
    """A buffer of values co-indexed with the points of a domain.

    The buffer is taken as given when it already is a NumPy array, so maps built from
    the same array share their values. A grid-shaped array is accepted for a grid domain
    and flattened row-major.
    """

    def __init__(self, data: typing.Any, domain: Domain) -> None:
        data = np.asarray(data)
        if data.ndim != 1 and data.shape == domain.shape:
            data = data.reshape(-1)
        if data.ndim != 1 or len(data) != len(domain):
            raise SizeMismatch(f"Buffer of shape {data.shape} does not fit {len(domain)} points of {domain!r}")
        self._data = data
        self._domain = domain

    @property
    def data(self) -> np.ndarray:
        return self._data

    @property
    def domain(self) -> Domain:
        return self._domain

    @property
    def header(self):
        return self._domain.header

    @property
    def executor(self):
        return self._domain.executor

    @property
    def dtype(self):
        return self._data.dtype

    @property
    def shape(self):
        return self._domain.shape

    def __len__(self):
        return len(self._data)

    def __iter__(self):
        return iter(self._data)

    def __array__(self, dtype=None, copy=None):
        if copy:
            return np.array(self._data, dtype=dtype, copy=True)
        return np.asarray(self._data, dtype=dtype)

    def points(self):
        return self._domain.points()

    def to_array(self) -> np.ndarray:
        """View of the buffer in the shape of the domain."""
        return self._data.reshape(self.shape)

    def similar(self, dtype=None) -> "DomainMap":
        return zeros(self._domain, self.dtype if dtype is None else dtype)

    def __getitem__(self, index):
        if isinstance(index, (int, np.integer)) and not isinstance(index, bool):
            return self._data[check_position(index, len(self))]
        return self.slice(index)

    def __setitem__(self, index, value):
        if isinstance(index, (int, np.integer)) and not isinstance(index, bool):
            self._data[check_position(index, len(self))] = value
        elif isinstance(self._domain, RectiGrid) and is_grid_selector(index):
            # positions of the window in the flat buffer, which need not be contiguous
            window = np.arange(len(self)).reshape(self.shape)[index]
            self._data[window.ravel()] = np.broadcast_to(value, window.shape).ravel()
        else:
            self._data[resolve_selector(index, len(self))] = value

    def slice(self, selector) -> "DomainMap":
        """Values and points picked by the same selector, in the same order.

        Linear slices give views of the buffer, other selectors give copies. A window of
        a grid, such as dmap[2:5, 1:3], is generally not contiguous in the flat buffer,
        so it is a copy too; write into a window with dmap[2:5, 1:3] = values instead.
        """
        if isinstance(self._domain, RectiGrid) and is_grid_selector(selector):
            return DomainMap(self.to_array()[selector].reshape(-1), self._domain.slice(selector))
        positions = resolve_selector(selector, len(self))
        return DomainMap(self._data[positions], self._domain.slice(positions))

    def apply(self, func: typing.Callable) -> "DomainMap":
        """Apply a vectorised function to the whole buffer."""
        return elementwise(func, self)

    # arithmetic with NumPy arrays goes through the reflected operators below
    __array_ufunc__ = None

    def __add__(self, other):
        return elementwise(operator.add, self, other)

    def __radd__(self, other):
        return elementwise(operator.add, other, self)

    def __sub__(self, other):
        return elementwise(operator.sub, self, other)

    def __rsub__(self, other):
        return elementwise(operator.sub, other, self)

    def __mul__(self, other):
        return elementwise(operator.mul, self, other)

    def __rmul__(self, other):
        return elementwise(operator.mul, other, self)

    def __truediv__(self, other):
        return elementwise(operator.truediv, self, other)

    def __rtruediv__(self, other):
        return elementwise(operator.truediv, other, self)

    def __neg__(self):
        return elementwise(operator.neg, self)

    def __getattr__(self, name):
        # axis names read the coordinates of the points, e.g. vis.U
        domain = self.__dict__.get("_domain")
        if domain is not None and name in domain.dimnames:
            return domain.coordinates(name)
        raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

    def __repr__(self):
        return f"DomainMap({self.dtype}, {len(self)} values on {self._domain!r})"


def zeros(domain: Domain, dtype=float) -> DomainMap:
    return DomainMap(np.zeros(len(domain), dtype=dtype), domain)


def has_domain(operand) -> bool:
    return isinstance(operand, DomainMap)


def find_domain_map(operands: typing.Iterable) -> DomainMap | None:
    """The first operand carrying a domain, which then decides the domain of a result."""
    for operand in operands:
        if has_domain(operand):
            return operand
    return None


def elementwise(func: typing.Callable, *operands) -> DomainMap:
    """Combine maps, scalars and bare sequences with a vectorised function.

    All maps must live on equal domains. Bare sequences must have one value per point.
    The result lives on the domain of the first map among the operands.
    """
    carrier = find_domain_map(operands)
    if carrier is None:
        raise TypeError("At least one operand must be a DomainMap")
    domain = carrier.domain
    nb_points = len(domain)

    args = []
    for operand in operands:
        if has_domain(operand):
            if not operand.domain.equals(domain):
                raise DomainMismatch(f"Cannot combine maps on {domain!r} and {operand.domain!r}")
            args.append(operand.data)
        elif np.ndim(operand) == 0:
            args.append(operand)
        else:
            array = np.asarray(operand)
            if array.shape != (nb_points,):
                raise SizeMismatch(f"Sequence of shape {array.shape} does not fit {nb_points} points")
            args.append(array)

    result = np.asarray(func(*args))
    if result.ndim == 0:
        result = np.full(nb_points, result)
    if result.shape != (nb_points,):
        raise SizeMismatch(f"Result of shape {result.shape} does not fit {nb_points} points")
    return DomainMap(result, domain)

import typing
import functools
import operator

import numpy as np

from radio_maps.executor import ExecutionPolicy, Serial
from radio_maps.errors import InvalidGeometry, IndexOutOfRange
from radio_maps.domain.base import Domain, freeze, keep
from radio_maps.domain.points import check_axis_name
from radio_maps.domain.unstructured import subset


spatial_axes = ("X", "Y")


class RectiGrid(Domain):
    """A rectilinear grid: the Cartesian product of named 1D axes.

    Points are ordered row-major, i.e. the last axis varies fastest.
    """

    def __init__(
            self, axes: typing.Mapping[str, typing.Sequence[float]],
            executor: ExecutionPolicy = Serial(),
            header: typing.Any = None) -> None:
        super().__init__(executor, header)
        if not axes:
            raise InvalidGeometry("A grid needs at least one axis")

        self._axes: dict[str, np.ndarray] = {}
        for [name, coords] in axes.items():
            array = np.array(coords)
            if array.ndim != 1:
                raise InvalidGeometry(f"Axis '{name}' must be one-dimensional, got shape {array.shape}")
            if array.size == 0:
                raise InvalidGeometry(f"Axis '{name}' has no coordinates")
            self._axes[check_axis_name(name)] = freeze(array)

        self.dimnames = tuple(self._axes)
        self._flat_columns = None

    @property
    def shape(self):
        return tuple(array.size for array in self._axes.values())

    def axis(self, name: str) -> np.ndarray:
        return self._axes[name]

    @property
    def axes(self) -> dict[str, np.ndarray]:
        return dict(self._axes)

    def __len__(self):
        return functools.reduce(operator.mul, self.shape, 1)

    def columns(self):
        if self._flat_columns is None:
            meshes = np.meshgrid(*self._axes.values(), indexing="ij")
            self._flat_columns = tuple(freeze(mesh.ravel()) for mesh in meshes)
        return self._flat_columns

    def pixelsizes(self) -> dict[str, float]:
        """Spacing of every axis that has more than one coordinate."""
        return {name: (array[-1] - array[0]) / (array.size - 1)
                for [name, array] in self._axes.items() if array.size > 1}

    def differential_weight(self) -> float | None:
        """Area of one pixel in the spatial axes, or None if no spatial axis has a spacing."""
        sizes = self.pixelsizes()
        spatial = [abs(sizes[name]) for name in spatial_axes if name in sizes]
        if not spatial:
            return None
        return functools.reduce(operator.mul, spatial, 1.)

    def slice(self, selector):
        """A tuple of per-axis slices keeps the grid; any other selector picks points linearly."""
        if is_grid_selector(selector):
            if len(selector) > len(self.dimnames):
                raise IndexError(f"Too many axis slices for {self.dimnames}")
            sliced = {name: array[selector[k]] if k < len(selector) else array
                      for [k, [name, array]] in enumerate(self._axes.items())}
            empty = [name for [name, array] in sliced.items() if array.size == 0]
            if empty:
                raise IndexOutOfRange(f"Slices select no coordinate along {empty} of {self!r}")
            return RectiGrid(sliced, self.executor, self.header)
        return subset(self, selector)

    def rebuild(self, executor=keep, header=keep):
        return RectiGrid(
            self._axes,
            self.executor if executor is keep else executor,
            self.header if header is keep else header)

    def equals(self, other):
        if isinstance(other, RectiGrid):
            return self.dimnames == other.dimnames and all(
                np.array_equal(self._axes[name], other._axes[name]) for name in self.dimnames)
        return super().equals(other)

    def _extents(self):
        return self.shape


def is_grid_selector(selector) -> bool:
    return isinstance(selector, tuple) and all(isinstance(s, slice) for s in selector)

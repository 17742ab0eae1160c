"""
Full-Stokes maps: the I, Q, U, V parameters sampled on one domain.

The four parameters are kept as four separate buffers (structure of arrays), so each
component stays a contiguous array that NumPy can work on directly.
"""

import typing

import numpy as np

from radio_maps.errors import DomainMismatch
from radio_maps.domain import Domain, RectiGrid
from radio_maps.domain.points import check_position
from radio_maps.maps import DomainMap


polarizations = ("I", "Q", "U", "V")


class StokesParams(typing.NamedTuple):
    """The four Stokes parameters of one point."""
    I: typing.Any
    Q: typing.Any
    U: typing.Any
    V: typing.Any

    # scaling applies to every parameter, e.g. by a pixel area
    def __mul__(self, factor):
        return StokesParams(*(component * factor for component in self))

    __rmul__ = __mul__


def check_domains(components: dict[str, DomainMap]):
    """All components must be sampled on the same points, in the same order."""
    domain = components["I"].domain
    for [name, component] in components.items():
        if not component.domain.equals(domain):
            raise DomainMismatch(
                f"Stokes {name} lives on {component.domain!r}, different from Stokes I on {domain!r}")


class StokesMap:
    """Four maps of Stokes parameters sharing one domain."""

    def __init__(self, I: DomainMap, Q: DomainMap, U: DomainMap, V: DomainMap) -> None:
        components = dict(zip(polarizations, (I, Q, U, V)))
        for [name, component] in components.items():
            if not isinstance(component, DomainMap):
                raise TypeError(f"Stokes {name} must be a DomainMap, got {type(component).__name__}")
        check_domains(components)

        self._domain = I.domain
        self._columns = {name: component.data for [name, component] in components.items()}

    @classmethod
    def from_arrays(cls, I, Q, U, V, domain: Domain) -> "StokesMap":
        return cls(*(DomainMap(array, domain) for array in (I, Q, U, V)))

    @classmethod
    def from_map(cls, dmap: DomainMap) -> "StokesMap":
        """Split a map whose values are StokesParams into the four components."""
        return cls(*(stokes(dmap, name) for name in polarizations))

    @property
    def domain(self) -> Domain:
        return self._domain

    @property
    def header(self):
        return self._domain.header

    @property
    def dtype(self):
        return np.result_type(*self._columns.values())

    @property
    def shape(self):
        return self._domain.shape

    def __len__(self):
        return len(self._domain)

    def component(self, name: str) -> DomainMap:
        """The map of one parameter, sharing its buffer with this StokesMap."""
        if name not in polarizations:
            raise KeyError(f"Unknown Stokes parameter '{name}', choose from {polarizations}")
        return DomainMap(self._columns[name], self._domain)

    @property
    def I(self):
        return self.component("I")

    @property
    def Q(self):
        return self.component("Q")

    @property
    def U(self):
        return self.component("U")

    @property
    def V(self):
        return self.component("V")

    def __getitem__(self, index):
        if isinstance(index, (int, np.integer)) and not isinstance(index, bool):
            index = check_position(index, len(self))
            return StokesParams(*(self._columns[name][index] for name in polarizations))
        return self.slice(index)

    def slice(self, selector) -> "StokesMap":
        return StokesMap(*(self.component(name).slice(selector) for name in polarizations))

    def summary(self) -> str:
        domain = self._domain
        lines = [
            f"{domain.ndims}-dimensional",
            f"StokesMap{{{self.dtype}, {domain.ndims}, {domain.dimnames}}}",
        ]
        if isinstance(domain, RectiGrid):
            for name in domain.dimnames:
                axis = domain.axis(name)
                lines.append(f"   {name} ∈ {axis.size}-element axis [{axis[0]}, {axis[-1]}]")
        else:
            lines.append(f"   {len(domain)} points with coordinates {', '.join(domain.dimnames)}")
        lines.append(f"Polarizations {polarizations}")
        return "\n".join(lines)

    def __str__(self):
        return self.summary()

    __repr__ = __str__


def stokes(dmap: DomainMap, name: str) -> DomainMap:
    """One parameter out of a map of StokesParams, as a new map on the same domain."""
    if name not in polarizations:
        raise KeyError(f"Unknown Stokes parameter '{name}', choose from {polarizations}")
    return DomainMap(np.array([getattr(value, name) for value in dmap.data]), dmap.domain)

import typing

import numpy as np

from radio_maps.executor import ExecutionPolicy, Serial
from radio_maps.errors import InvalidGeometry
from radio_maps.domain.base import Domain, freeze, keep
from radio_maps.domain.points import check_axis_name, resolve_selector


class UnstructuredDomain(Domain):
    """An explicit, ordered set of points, e.g. the (U, V, Ti, Fr) samples of a visibility dataset.

    Points are stored column-wise: one coordinate array per axis name.
    """

    def __init__(
            self, columns: typing.Mapping[str, typing.Sequence],
            executor: ExecutionPolicy = Serial(),
            header: typing.Any = None) -> None:
        super().__init__(executor, header)
        if not columns:
            raise InvalidGeometry("An unstructured domain needs at least one coordinate column")

        arrays = {}
        for [name, values] in columns.items():
            array = np.array(values)
            if array.ndim != 1:
                raise InvalidGeometry(f"Column '{name}' must be one-dimensional, got shape {array.shape}")
            arrays[check_axis_name(name)] = freeze(array)

        lengths = {name: array.size for [name, array] in arrays.items()}
        if len(set(lengths.values())) > 1:
            raise InvalidGeometry(f"Columns have inconsistent lengths {lengths}")

        self.dimnames = tuple(arrays)
        self._columns = tuple(arrays.values())

    @classmethod
    def from_records(
            cls, records: typing.Iterable[typing.Sequence], names: typing.Sequence[str],
            executor: ExecutionPolicy = Serial(),
            header: typing.Any = None) -> "UnstructuredDomain":
        """Build from point records, each holding one coordinate per name."""
        names = tuple(names)
        rows = []
        for [count, record] in enumerate(records):
            record = tuple(record)
            if len(record) != len(names):
                raise InvalidGeometry(
                    f"Record {count} has {len(record)} coordinates, expected {len(names)} for {names}")
            rows.append(record)
        columns = {name: [row[k] for row in rows] for [k, name] in enumerate(names)}
        return cls(columns, executor, header)

    @property
    def shape(self):
        return (len(self),)

    def columns(self):
        return self._columns

    def slice(self, selector):
        return subset(self, selector)

    def rebuild(self, executor=keep, header=keep):
        return UnstructuredDomain(
            dict(zip(self.dimnames, self._columns)),
            self.executor if executor is keep else executor,
            self.header if header is keep else header)


def subset(domain: Domain, selector) -> UnstructuredDomain:
    """The points of any domain picked by a linear selector, as a new unstructured domain."""
    positions = resolve_selector(selector, len(domain))
    columns = {name: column[positions] for [name, column] in zip(domain.dimnames, domain.columns())}
    return UnstructuredDomain(columns, domain.executor, domain.header)

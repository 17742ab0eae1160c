"""
Analytic fill: evaluate a model at every point of a domain.

The model is a pure callable of one point. How the points are worked through is decided
by the execution policy of the domain; every policy writes `f(point_i)` at position i and
nothing else, so all of them produce the same map.

Weighted fill: images on a grid are filled with the model value times the pixel area
(see `RectiGrid.differential_weight`). Unstructured domains, visibilities and the
generic `evaluate` are never weighted.
"""

import logging
import typing
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from radio_maps.config import ExecutionConfig
from radio_maps.domain import Domain, PointSequence, RectiGrid
from radio_maps.errors import InvalidPolicy
from radio_maps.executor import Serial, ThreadsEx, VectorizedBatch, batch_ranges, dynamic_chunks, static_partition
from radio_maps.maps import DomainMap, zeros


logger = logging.getLogger(__name__)

Model: typing.TypeAlias = typing.Callable[[typing.Any], typing.Any]


def evaluate(
        f: Model, domain: Domain, dtype=None, *,
        weighted: bool = False,
        config: ExecutionConfig | None = None) -> DomainMap:
    """
    Allocate a map on the domain and fill it with f.

    Parameters
    ----------
    f : callable
        Pure function of one point, safe to call from several threads at once.
    domain : Domain
        Where to sample; its executor decides how.
    dtype : optional
        Element type. By default it is the type of the filled value at the first point,
        integers and booleans promoted to float, and any non-scalar value (tuple,
        record, ...) stored as object.
    weighted : bool
        Multiply by the pixel area when the domain is a grid.
    config : ExecutionConfig, optional
        Pool and batch sizes, read from the environment if not given.
    """
    if dtype is None:
        dtype = infer_dtype(filled_model(f, domain, weighted), domain)
    dmap = zeros(domain, dtype)
    evaluate_into(dmap, f, weighted=weighted, config=config)
    return dmap


def evaluate_into(
        dmap: DomainMap, f: Model, *,
        weighted: bool = False,
        config: ExecutionConfig | None = None) -> None:
    """Overwrite every value of dmap with f at the corresponding point. Blocks until all are written."""
    domain = dmap.domain
    policy = domain.executor
    fill = fill_strategies.get(type(policy))
    if fill is None:
        raise InvalidPolicy(f"No fill strategy for {policy!r}")
    if config is None:
        config = ExecutionConfig.from_env()

    f = filled_model(f, domain, weighted)
    points = domain.points()
    logger.debug(f"Filling {len(points)} points of {domain!r} with {policy!r}")
    fill(dmap.data, f, points, policy, config)


def infer_dtype(f: Model, domain: Domain) -> np.dtype:
    if len(domain) == 0:
        return np.dtype(float)
    value = f(domain.points()[0])
    if not isinstance(value, (bool, int, float, complex, np.number, np.bool_)):
        return np.dtype(object)
    dtype = np.asarray(value).dtype
    # an integer at the first point says nothing about the values elsewhere
    if dtype.kind in "biu":
        return np.result_type(dtype, float)
    return dtype


def filled_model(f: Model, domain: Domain, weighted: bool) -> Model:
    """The callable actually written into the map: f, times the pixel area for a weighted fill."""
    if weighted:
        weight = differential_weight(domain)
        if weight is not None:
            return weighted_model(f, weight)
    return f


def differential_weight(domain: Domain) -> float | None:
    if isinstance(domain, RectiGrid):
        return domain.differential_weight()
    return None


def weighted_model(f: Model, weight: float) -> Model:
    def weighted(point):
        return f(point) * weight
    return weighted


def intensitymap(model, domain: Domain, *, config: ExecutionConfig | None = None) -> DomainMap:
    """Image of the model, weighted by the pixel area on grids."""
    return evaluate(model.intensity_point, domain, weighted=True, config=config)


def intensitymap_into(img: DomainMap, model, *, config: ExecutionConfig | None = None) -> None:
    evaluate_into(img, model.intensity_point, weighted=True, config=config)


def visibilitymap(model, domain: Domain, *, config: ExecutionConfig | None = None) -> DomainMap:
    return evaluate(model.visibility_point, domain, config=config)


def visibilitymap_into(vis: DomainMap, model, *, config: ExecutionConfig | None = None) -> None:
    evaluate_into(vis, model.visibility_point, config=config)


def fill_serial(out: np.ndarray, f: Model, points: PointSequence, policy: Serial, config: ExecutionConfig):
    for [index, point] in enumerate(points):
        out[index] = f(point)


def fill_span(out: np.ndarray, f: Model, points: PointSequence, span: range):
    # a worker only ever holds the view of its own span
    view = out[span.start:span.stop]
    for [k, point] in enumerate(points[span.start:span.stop]):
        view[k] = f(point)


def fill_threads(out: np.ndarray, f: Model, points: PointSequence, policy: ThreadsEx, config: ExecutionConfig):
    nb_workers = config.resolved_nb_workers
    if policy.scheduler == "static":
        spans = static_partition(len(points), nb_workers)
    else:
        spans = dynamic_chunks(len(points), config.chunk_size)
    logger.debug(f"{len(spans)} spans over {nb_workers} threads, {policy.scheduler} scheduling")

    with ThreadPoolExecutor(max_workers=nb_workers) as pool:
        futures = [pool.submit(fill_span, out, f, points, span) for span in spans]
    # leaving the pool joined every worker, now surface the first failure
    for future in futures:
        future.result()


def fill_batches(out: np.ndarray, f: Model, points: PointSequence, policy: VectorizedBatch, config: ExecutionConfig):
    for span in batch_ranges(len(points), config.batch_size):
        values = [f(point) for point in points[span.start:span.stop]]
        write_batch(out, span, values)


def write_batch(out: np.ndarray, span: range, values: list):
    if out.dtype == object:
        # one slot per value, so that tuples are not unpacked along a new axis
        batch = np.empty(len(values), dtype=object)
        for [k, value] in enumerate(values):
            batch[k] = value
        out[span.start:span.stop] = batch
    else:
        out[span.start:span.stop] = values


fill_strategies = {
    Serial: fill_serial,
    ThreadsEx: fill_threads,
    VectorizedBatch: fill_batches,
}

"""
Execution policies for filling a map over its domain.

The set of policies is closed:
- Serial: a single linear pass.
- ThreadsEx: a pool of worker threads, with either a "dynamic" or a "static" scheduler.
- VectorizedBatch: a single thread working through fixed-size batches.

Policies are pure data. The pool size and the chunk / batch sizes are configuration
(see `radio_maps.config`), so two policies compare equal by variant and scheduler only.
"""

import dataclasses as dc
import typing

from radio_maps.errors import InvalidPolicy


schedulers = ("dynamic", "static")


@dc.dataclass(frozen=True)
class Serial:
    """Evaluate every point in order on the calling thread."""


@dc.dataclass(frozen=True)
class ThreadsEx:
    """Evaluate on a pool of threads.

    "dynamic" hands out small chunks that idle workers claim at runtime, which balances
    skewed cost-per-point. "static" splits the index range into one contiguous range
    per worker up front.
    """

    scheduler: str = "dynamic"

    def __post_init__(self):
        if self.scheduler not in schedulers:
            raise InvalidPolicy(f"Unknown scheduler '{self.scheduler}', choose from {schedulers}")


@dc.dataclass(frozen=True)
class VectorizedBatch:
    """Evaluate on the calling thread in fixed-size batches, one buffer write per batch."""


ExecutionPolicy: typing.TypeAlias = Serial | ThreadsEx | VectorizedBatch
policy_types = (Serial, ThreadsEx, VectorizedBatch)


def check_policy(executor) -> ExecutionPolicy:
    if not isinstance(executor, policy_types):
        raise InvalidPolicy(f"Not an execution policy: {executor!r}")
    return executor


def static_partition(nb_items: int, nb_workers: int) -> list[range]:
    """Split range(nb_items) into at most nb_workers contiguous ranges of near-equal size."""
    if nb_workers < 1:
        raise ValueError(f"Need at least one worker, got {nb_workers}")
    nb_parts = min(nb_workers, nb_items)
    if nb_parts == 0:
        return []
    [base, extra] = divmod(nb_items, nb_parts)
    ranges = []
    start = 0
    for part in range(nb_parts):
        stop = start + base + (1 if part < extra else 0)
        ranges.append(range(start, stop))
        start = stop
    return ranges


def dynamic_chunks(nb_items: int, chunk_size: int) -> list[range]:
    """Split range(nb_items) into chunks of chunk_size; the last one may be shorter."""
    return _fixed_size_ranges(nb_items, chunk_size, "Chunk")


def batch_ranges(nb_items: int, batch_size: int) -> list[range]:
    return _fixed_size_ranges(nb_items, batch_size, "Batch")


def _fixed_size_ranges(nb_items: int, size: int, what: str):
    if size < 1:
        raise ValueError(f"{what} size must be positive, got {size}")
    return [range(start, min(start + size, nb_items)) for start in range(0, nb_items, size)]

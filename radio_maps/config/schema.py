"""
Configuration schema.

Only the execution layer is configurable: how many worker threads fill a map, and how
the index range is cut into chunks (dynamic threads) or batches (vectorized policy).
Which policy runs is chosen per domain, not here.
"""

import os
from dataclasses import dataclass, fields
from typing import Any


env_prefix = "RADIO_MAPS_"


@dataclass(frozen=True)
class ExecutionConfig:
    """
    Sizes used when a map is filled.

    nb_workers: threads of the pool, None for one per CPU.
    chunk_size: points claimed at once by a worker of the dynamic scheduler.
    batch_size: points evaluated per batch by the vectorized policy.
    """
    nb_workers: int | None = None
    chunk_size: int = 64
    batch_size: int = 256

    def __post_init__(self):
        for field in fields(self):
            value = getattr(self, field.name)
            if value is None and field.name == "nb_workers":
                continue
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ValueError(f"{field.name} must be a positive integer, got {value!r}")

    @property
    def resolved_nb_workers(self) -> int:
        if self.nb_workers is None:
            return os.cpu_count() or 1
        return self.nb_workers

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExecutionConfig":
        known = {field.name for field in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown execution settings {sorted(unknown)}, expected some of {sorted(known)}")
        return cls(**data)

    def to_dict(self) -> dict[str, Any]:
        # TOML has no null, an unset value is left out
        return {field.name: getattr(self, field.name) for field in fields(self)
                if getattr(self, field.name) is not None}

    @classmethod
    def from_env(cls, environ=None) -> "ExecutionConfig":
        """Read RADIO_MAPS_NB_WORKERS, RADIO_MAPS_CHUNK_SIZE and RADIO_MAPS_BATCH_SIZE."""
        if environ is None:
            environ = os.environ
        data = {}
        for field in fields(cls):
            value = environ.get(f"{env_prefix}{field.name.upper()}")
            if value is not None and value.strip():
                data[field.name] = int(value)
        return cls(**data)

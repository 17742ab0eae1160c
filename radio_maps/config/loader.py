"""
TOML configuration loading and saving.

Uses tomllib (Python 3.11+) or tomli (backport) for reading,
and tomli_w for writing.
"""

import sys
from pathlib import Path
from typing import Any

# Import tomllib or backport
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w

from .schema import ExecutionConfig


def load_config(path: str | Path) -> ExecutionConfig:
    """Load the [execution] table of a TOML file; a missing table gives the defaults."""
    path = Path(path)
    with open(path, "rb") as f:
        data = tomllib.load(f)
    return ExecutionConfig.from_dict(data.get("execution", {}))


def save_config(config: ExecutionConfig, path: str | Path) -> None:
    """Save an ExecutionConfig as the [execution] table of a TOML file."""
    path = Path(path)
    data: dict[str, Any] = {"execution": config.to_dict()}
    with open(path, "wb") as f:
        tomli_w.dump(data, f)

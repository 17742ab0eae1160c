"""
Configuration module for the execution layer.

Provides:
- ExecutionConfig: pool size, chunk and batch sizes
- TOML loading and saving
- Reading the same settings from environment variables
"""

from .schema import ExecutionConfig

from .loader import load_config, save_config

__all__ = [
    "ExecutionConfig",
    "load_config",
    "save_config",
]

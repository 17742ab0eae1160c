"""Errors raised when a domain, a map or an execution policy would become inconsistent.

Every error is raised eagerly, at the call that would break the invariant.
"""


class MapError(Exception):
    """Base class of all errors of this package."""


class InvalidGeometry(MapError, ValueError):
    """Malformed axes or point records given to a domain."""


class SizeMismatch(MapError, ValueError):
    """A buffer whose length disagrees with its domain."""


class IndexOutOfRange(MapError, IndexError):
    """Element access outside [0, len)."""


class DomainMismatch(MapError, ValueError):
    """Combining maps whose domains are not structurally equal."""


class InvalidPolicy(MapError, ValueError):
    """An unknown execution policy, or one that cannot run on the given domain."""

"""
Domain module: where a map is sampled.

Provides:
- RectiGrid: structured domain, the Cartesian product of named axes
- UnstructuredDomain: explicit, ordered point set
- PointSequence: lazy sequence of the points of either
"""

from .base import Domain
from .points import PointSequence, point_type, resolve_selector
from .unstructured import UnstructuredDomain
from .grid import RectiGrid

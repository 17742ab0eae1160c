"""
Maps of values over sampling domains, for radio-interferometric images and visibilities.

Provides:
- domain: RectiGrid and UnstructuredDomain, the points where a model is sampled
- executor: the policies that decide how a map is filled (serial, threads, batches)
- maps: DomainMap, values co-indexed with the points of a domain
- evaluate: analytic fill of a map from a model
- stokes: StokesMap, the four Stokes parameters on one domain
- config: execution settings from TOML or the environment
"""

from .errors import MapError, InvalidGeometry, SizeMismatch, IndexOutOfRange, DomainMismatch, InvalidPolicy
from .executor import ExecutionPolicy, Serial, ThreadsEx, VectorizedBatch
from .domain import Domain, RectiGrid, UnstructuredDomain, PointSequence
from .maps import DomainMap, zeros, elementwise
from .evaluate import evaluate, evaluate_into, intensitymap, intensitymap_into, visibilitymap, visibilitymap_into
from .stokes import StokesMap, StokesParams, stokes
from .config import ExecutionConfig, load_config, save_config

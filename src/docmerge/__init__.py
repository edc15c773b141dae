"""docmerge - cross-module documentation aggregator."""

from .build import (
    AggregationConfig,
    AggregationJob,
    AggregationOrchestrator,
    ConflictError,
    NotFoundError,
    OrchestratorStateError,
)
from .config import ConfigurationError, ModuleHandle, ProjectGraph
from .version import FormatError, Version, compare, minor_series, parse_version, to_display_string

__version__ = "0.1.0"

__all__ = [
    "AggregationConfig",
    "AggregationJob",
    "AggregationOrchestrator",
    "ConfigurationError",
    "ConflictError",
    "FormatError",
    "ModuleHandle",
    "NotFoundError",
    "OrchestratorStateError",
    "ProjectGraph",
    "Version",
    "compare",
    "minor_series",
    "parse_version",
    "to_display_string",
]

"""
Aggregation components for docmerge.

This package provides the documentation aggregation pipeline:
- Module description (source roots, classpath, snippet directories)
- Path merging and module path mapping
- Fully-qualified name filtering
- Aggregation orchestration and resource copying
- Renderer arguments, external links and HTML colorizing
"""

from .colorizer import Colorizer
from .link_resolver import LinkResolver, LinkResolverError, ResolvedLink
from .module_descriptor import Module, ModuleDescriptor, NotFoundError
from .orchestrator import (
    AggregationConfig,
    AggregationJob,
    AggregationOrchestrator,
    AggregationState,
    OrchestratorStateError,
)
from .package_filter import PackageFilter
from .path_aggregator import ConflictError, PathAggregator
from .renderer_args import RendererArgumentBuilder

__all__ = [
    'AggregationConfig',
    'AggregationJob',
    'AggregationOrchestrator',
    'AggregationState',
    'Colorizer',
    'ConflictError',
    'LinkResolver',
    'LinkResolverError',
    'Module',
    'ModuleDescriptor',
    'NotFoundError',
    'OrchestratorStateError',
    'PackageFilter',
    'PathAggregator',
    'RendererArgumentBuilder',
    'ResolvedLink',
]

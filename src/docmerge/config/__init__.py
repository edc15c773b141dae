"""Configuration parsing modules for docmerge."""

from .ini_parser import DEFAULT_CONFIG_NAME, ConfigurationError, DocMergeConfig
from .project_graph import ModuleHandle, ProjectGraph

__all__ = [
    "DEFAULT_CONFIG_NAME",
    "ConfigurationError",
    "DocMergeConfig",
    "ModuleHandle",
    "ProjectGraph",
]

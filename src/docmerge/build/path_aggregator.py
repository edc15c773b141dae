"""
Merging of per-module paths into unified aggregation inputs.

Classpath order is observable to the documentation renderer, so merging keeps
first-seen order instead of sorting.
"""

import os
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Sequence, Set

from .module_descriptor import Module


class ConflictError(Exception):
    """Raised when two included modules declare the same namespace."""
    pass


class PathAggregator:
    """Combines the sources and classpaths of a set of modules."""

    @staticmethod
    def merge_sources(modules: Sequence[Module]) -> FrozenSet[Path]:
        """Union of every module's source directories."""
        sources: Set[Path] = set()
        for module in modules:
            sources.update(module.source_directories)
        return frozenset(sources)

    @staticmethod
    def merge_classpath(modules: Sequence[Module]) -> List[Path]:
        """
        Concatenate classpaths in module order, dropping later duplicates.

        Example:
            A:[x, y], B:[y, z] -> [x, y, z]
        """
        seen: Set[Path] = set()
        classpath: List[Path] = []
        for module in modules:
            for entry in module.classpath_entries:
                if entry not in seen:
                    seen.add(entry)
                    classpath.append(entry)
        return classpath

    @staticmethod
    def build_module_path_mapping(modules: Sequence[Module]) -> Dict[str, Path]:
        """
        Map each module namespace to its primary source root.

        Modules without a namespace are unnamed and left out.

        Raises:
            ConflictError: If two modules declare the same namespace
        """
        mapping: Dict[str, Path] = {}
        owners: Dict[str, str] = {}
        for module in modules:
            namespace = module.module_namespace
            if namespace is None:
                continue
            if namespace in mapping:
                raise ConflictError(
                    f"Modules '{owners[namespace]}' and '{module.name}' "
                    f"both declare namespace '{namespace}'"
                )
            mapping[namespace] = module.source_root
            owners[namespace] = module.name
        return mapping

    @staticmethod
    def join_snippet_paths(modules: Sequence[Module]) -> Optional[str]:
        """
        Join all snippet directories with the platform path separator.

        Returns:
            Joined path list, or None when no module has snippets so callers
            can omit the flag entirely
        """
        snippets: Set[Path] = set()
        for module in modules:
            snippets.update(module.snippet_directories)

        if not snippets:
            return None
        return os.pathsep.join(str(path) for path in sorted(snippets))

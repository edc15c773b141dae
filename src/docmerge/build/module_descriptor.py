"""
Module description for documentation aggregation.

This module handles:
- Resolving a module's display name and namespace
- Validating its main source root
- Carrying its resolved compile classpath
- Discovering snippet directories (example code referenced by docs)
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, List, Optional, Tuple

from ..config.project_graph import ModuleHandle

# Directory name convention for documentation snippets
SNIPPET_DIR_NAME = "snippet-files"


class NotFoundError(Exception):
    """Raised when a module's source root does not exist."""
    pass


@dataclass(frozen=True)
class Module:
    """Resolved module, read-only for the duration of an aggregation run."""

    name: str
    source_root: Path
    source_directories: FrozenSet[Path]
    classpath_entries: Tuple[Path, ...] = field(default_factory=tuple)
    module_namespace: Optional[str] = None
    snippet_directories: FrozenSet[Path] = field(default_factory=frozenset)
    stylesheet: Optional[Path] = None

    @property
    def display_name(self) -> str:
        """Namespace when declared, otherwise the graph name."""
        return self.module_namespace or self.name

    @property
    def is_named(self) -> bool:
        return self.module_namespace is not None


class ModuleDescriptor:
    """
    Resolves a module handle from the project graph into a Module.

    The only side effect is a read-only walk of the module's source root.
    """

    def __init__(self, snippet_dir_name: str = SNIPPET_DIR_NAME):
        self.snippet_dir_name = snippet_dir_name

    def describe(self, handle: ModuleHandle, stylesheet: Optional[Path] = None) -> Module:
        """
        Describe one module.

        Args:
            handle: Module handle from the project graph
            stylesheet: Style override replacing the handle's own stylesheet

        Returns:
            Module with source, classpath and snippet information

        Raises:
            NotFoundError: If the module's source root does not exist
        """
        source_root = Path(handle.source_root)
        if not source_root.is_dir():
            raise NotFoundError(
                f"Source root of module '{handle.name}' not found: {source_root}"
            )

        snippets = self._find_snippet_directories(source_root)
        logging.debug(
            f"Described module {handle.name}: root={source_root}, "
            f"classpath={len(handle.classpath)} entries, snippets={len(snippets)}"
        )

        return Module(
            name=handle.name,
            source_root=source_root,
            source_directories=frozenset([source_root]),
            classpath_entries=tuple(Path(entry) for entry in handle.classpath),
            module_namespace=handle.namespace or None,
            snippet_directories=frozenset(snippets),
            stylesheet=stylesheet if stylesheet is not None else handle.stylesheet,
        )

    def _find_snippet_directories(self, source_root: Path) -> List[Path]:
        """
        Recursively find directories named by the snippet convention.

        Args:
            source_root: Module source root to scan

        Returns:
            Sorted list of snippet directories (empty if none)
        """
        return sorted(
            path for path in source_root.rglob(self.snippet_dir_name) if path.is_dir()
        )

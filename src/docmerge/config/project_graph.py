"""
Project graph: the declared modules of a multi-module build.

The graph answers, per module, its name, optional namespace, source root and
resolved dependency classpath. It is a plain value passed into the
orchestrator; there is no process-wide registry.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .ini_parser import ConfigurationError, DocMergeConfig, split_list


@dataclass(frozen=True)
class ModuleHandle:
    """Declared structure of one module, as reported by the project model."""

    name: str
    source_root: Path
    namespace: Optional[str] = None
    classpath: Tuple[Path, ...] = field(default_factory=tuple)
    stylesheet: Optional[Path] = None


class ProjectGraph:
    """Set of modules keyed by their unique name."""

    def __init__(self, modules: Iterable[ModuleHandle] = ()):
        self._modules: Dict[str, ModuleHandle] = {}
        for handle in modules:
            self.add(handle)

    def add(self, handle: ModuleHandle) -> None:
        """Add a module to the graph.

        Raises:
            ConfigurationError: If a module with the same name already exists
        """
        if handle.name in self._modules:
            raise ConfigurationError(f"Duplicate module name in project graph: '{handle.name}'")
        self._modules[handle.name] = handle

    def get(self, name: str) -> ModuleHandle:
        """Look up a module by name.

        Raises:
            ConfigurationError: If the module is not part of the graph
        """
        try:
            return self._modules[name]
        except KeyError:
            available = ", ".join(self._modules) or "none"
            raise ConfigurationError(
                f"Module '{name}' not found in project graph. Available modules: {available}"
            ) from None

    def names(self) -> List[str]:
        return list(self._modules)

    def __contains__(self, name: object) -> bool:
        return name in self._modules

    def __iter__(self) -> Iterator[ModuleHandle]:
        return iter(self._modules.values())

    def __len__(self) -> int:
        return len(self._modules)

    @classmethod
    def from_config(cls, config: DocMergeConfig) -> "ProjectGraph":
        """
        Build the graph from the ``[module:NAME]`` sections of a docmerge.ini.

        Args:
            config: Parsed docmerge.ini

        Returns:
            ProjectGraph with one handle per module section
        """
        graph = cls()
        for name in config.get_modules():
            module_config = config.get_module_config(name)
            stylesheet = module_config.get("stylesheet")
            graph.add(
                ModuleHandle(
                    name=name,
                    source_root=config.resolve_path(module_config["source_dir"]),
                    namespace=module_config.get("namespace") or None,
                    classpath=tuple(
                        config.resolve_path(entry)
                        for entry in split_list(module_config.get("classpath"))
                    ),
                    stylesheet=config.resolve_path(stylesheet) if stylesheet else None,
                )
            )
        return graph

"""
Aggregation orchestration for multi-module documentation.

This module coordinates one aggregation run:
- Validating the module selection against the project graph
- Describing every included module (in caller order)
- Merging sources and classpaths, building the module path mapping
- Computing the excluded fully-qualified names
- Copying per-module documentation resources into the output tree
"""

import logging
import shutil
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

from ..cache import Cache
from ..config.ini_parser import ConfigurationError, DocMergeConfig
from ..config.project_graph import ProjectGraph
from ..version import Version, parse_version
from .module_descriptor import Module, ModuleDescriptor, NotFoundError
from .package_filter import DEFAULT_ROOT_MARKER, DEFAULT_SOURCE_EXTENSION, PackageFilter
from .path_aggregator import ConflictError, PathAggregator

# Directory name convention for per-module documentation resources
DOC_RESOURCE_DIR_NAME = "doc-files"


class OrchestratorStateError(Exception):
    """Raised when an operation is not allowed in the orchestrator's state."""
    pass


class AggregationState(Enum):
    CONFIGURING = "configuring"
    AGGREGATING = "aggregating"
    FINALIZED = "finalized"
    FAILED = "failed"


@dataclass
class AggregationConfig:
    """Caller-supplied description of one aggregation run."""

    included_module_names: Sequence[str]
    output_directory: Path
    exclusion_patterns: Sequence[str] = field(default_factory=tuple)
    title: str = ""
    version: Optional[Version] = None
    style_overrides: Dict[str, Path] = field(default_factory=dict)
    stylesheet: Optional[Path] = None
    root_marker: str = DEFAULT_ROOT_MARKER
    source_extension: str = DEFAULT_SOURCE_EXTENSION

    @classmethod
    def from_ini(
        cls,
        config: DocMergeConfig,
        aggregate: str,
        cache: Optional[Cache] = None
    ) -> "AggregationConfig":
        """
        Build the run configuration of one ``[aggregate:NAME]`` section.

        Per-module ``stylesheet`` keys inside the aggregate section, written
        as ``stylesheet.MODULE = path``, override the module's own stylesheet.

        Raises:
            ConfigurationError: If the aggregate is missing or invalid
        """
        aggregate_config = config.get_aggregate_config(aggregate)

        output_dir = aggregate_config.get("output_dir")
        if output_dir:
            output_directory = config.resolve_path(output_dir)
        else:
            cache = cache or Cache(config.base_dir)
            output_directory = cache.get_output_dir(aggregate)

        version = None
        if aggregate_config.get("version"):
            version = parse_version(aggregate_config["version"])

        style_overrides = {}
        for key, value in aggregate_config.items():
            if key.startswith("stylesheet.") and value:
                style_overrides[key.split(".", 1)[1]] = config.resolve_path(value)

        stylesheet = aggregate_config.get("stylesheet")

        return cls(
            included_module_names=config.get_included_modules(aggregate),
            output_directory=output_directory,
            exclusion_patterns=config.get_exclusion_patterns(aggregate),
            title=aggregate_config.get("title", ""),
            version=version,
            style_overrides=style_overrides,
            stylesheet=config.resolve_path(stylesheet) if stylesheet else None,
            root_marker=aggregate_config.get("root_marker") or DEFAULT_ROOT_MARKER,
            source_extension=aggregate_config.get("source_extension") or DEFAULT_SOURCE_EXTENSION,
        )


@dataclass(frozen=True)
class AggregationJob:
    """Result of an aggregation run, consumed by the documentation renderer."""

    included_modules: Tuple[Module, ...]
    exclusion_patterns: FrozenSet[str]
    merged_sources: FrozenSet[Path]
    merged_classpath: Tuple[Path, ...]
    module_path_mapping: Dict[str, Path]
    excluded_names: FrozenSet[str]
    output_directory: Path
    snippet_path: Optional[str] = None
    source_names: FrozenSet[str] = field(default_factory=frozenset)
    title: str = ""
    version: Optional[Version] = None
    stylesheet: Optional[Path] = None

    @property
    def unnamed_modules(self) -> List[Module]:
        """Included modules without a namespace."""
        return [module for module in self.included_modules if not module.is_named]

    def module_output_dir(self, module: Module) -> Path:
        """Output directory of a module: namespaced, or the output root."""
        if module.module_namespace:
            return self.output_directory / module.module_namespace
        return self.output_directory


class AggregationOrchestrator:
    """
    Drives one aggregation run over an explicit, ordered module list.

    States: CONFIGURING -> AGGREGATING -> FINALIZED (or FAILED). A finalized
    job is immutable; copy_auxiliary_resources() may run any number of times
    against it.

    Example usage:
        orchestrator = AggregationOrchestrator(graph)
        job = orchestrator.run(AggregationConfig(
            included_module_names=["jenetics", "jenetics.ext"],
            output_directory=Path("build/docs"),
        ))
        orchestrator.copy_auxiliary_resources(job)
    """

    def __init__(
        self,
        graph: ProjectGraph,
        descriptor: Optional[ModuleDescriptor] = None,
        verbose: bool = False
    ):
        """
        Initialize the orchestrator.

        Args:
            graph: Project graph the module names are resolved against
            descriptor: Module descriptor (optional)
            verbose: Enable verbose output
        """
        self.graph = graph
        self.descriptor = descriptor or ModuleDescriptor()
        self.verbose = verbose
        self._state = AggregationState.CONFIGURING
        self._job: Optional[AggregationJob] = None

    @property
    def state(self) -> AggregationState:
        return self._state

    @property
    def job(self) -> Optional[AggregationJob]:
        return self._job

    def run(self, config: AggregationConfig) -> AggregationJob:
        """
        Execute the aggregation.

        Args:
            config: Module selection, exclusion patterns and output target

        Returns:
            The finalized AggregationJob

        Raises:
            ConfigurationError: If the module selection is empty, has
                duplicates or names a module absent from the graph
            NotFoundError: If a module's source root is missing
            ConflictError: If two modules share a namespace
            OrchestratorStateError: If the orchestrator already ran
        """
        if self._state != AggregationState.CONFIGURING:
            raise OrchestratorStateError(
                f"Cannot run aggregation in state '{self._state.value}'"
            )

        # Selection errors leave the orchestrator configurable
        self._validate(config)

        self._state = AggregationState.AGGREGATING
        try:
            job = self._aggregate(config)
        except Exception:
            self._state = AggregationState.FAILED
            raise

        self._job = job
        self._state = AggregationState.FINALIZED
        logging.info(
            f"Aggregated {len(job.included_modules)} modules: "
            f"{len(job.source_names)} names, {len(job.excluded_names)} excluded"
        )
        return job

    def _validate(self, config: AggregationConfig) -> None:
        names = list(config.included_module_names)
        if not names:
            raise ConfigurationError("No modules selected for aggregation")

        seen = set()
        for name in names:
            if name in seen:
                raise ConfigurationError(f"Module '{name}' is selected more than once")
            seen.add(name)
            if name not in self.graph:
                raise ConfigurationError(
                    f"Module '{name}' not found in project graph. "
                    + f"Available modules: {', '.join(self.graph.names()) or 'none'}"
                )

        unknown = sorted(set(config.style_overrides) - seen)
        if unknown:
            raise ConfigurationError(
                f"Style overrides reference modules that are not included: {', '.join(unknown)}"
            )

        PackageFilter.check_patterns(config.exclusion_patterns)

    def _aggregate(self, config: AggregationConfig) -> AggregationJob:
        if self.verbose:
            print(f"[1/4] Describing {len(config.included_module_names)} modules...")

        modules = []
        for name in config.included_module_names:
            module = self.descriptor.describe(
                self.graph.get(name), stylesheet=config.style_overrides.get(name)
            )
            modules.append(module)
            if self.verbose:
                print(f"      {module.display_name}: {module.source_root}")

        if self.verbose:
            print("[2/4] Merging sources and classpath...")

        merged_sources = PathAggregator.merge_sources(modules)
        merged_classpath = PathAggregator.merge_classpath(modules)
        snippet_path = PathAggregator.join_snippet_paths(modules)

        if self.verbose:
            print("[3/4] Building module path mapping...")

        mapping = PathAggregator.build_module_path_mapping(modules)

        if self.verbose:
            print("[4/4] Computing exclusions...")

        source_files = PackageFilter.source_files(merged_sources, config.source_extension)
        source_names = PackageFilter.derived_names(
            source_files,
            config.root_marker,
            source_roots=[module.source_root for module in modules],
        )
        excluded = PackageFilter.compute_exclusions(source_names, config.exclusion_patterns)

        if self.verbose:
            print(f"      {len(excluded)} of {len(source_names)} names excluded")

        return AggregationJob(
            included_modules=tuple(modules),
            exclusion_patterns=frozenset(config.exclusion_patterns),
            merged_sources=merged_sources,
            merged_classpath=tuple(merged_classpath),
            module_path_mapping=mapping,
            excluded_names=frozenset(excluded),
            output_directory=Path(config.output_directory),
            snippet_path=snippet_path,
            source_names=frozenset(source_names),
            title=config.title,
            version=config.version,
            stylesheet=config.stylesheet,
        )

    def copy_auxiliary_resources(self, job: Optional[AggregationJob] = None) -> List[Path]:
        """
        Copy per-module documentation resources into the output tree.

        Every file below a ``doc-files`` directory of a module's source root
        is copied to the module's output directory, keeping its path relative
        to the source root. A module stylesheet is copied next to it.
        Existing files are overwritten.

        Args:
            job: Finalized job (defaults to the job of the last run)

        Returns:
            List of written files

        Raises:
            OrchestratorStateError: If no aggregation has been finalized
            NotFoundError: If a configured module stylesheet does not exist
            ConflictError: If two module stylesheets share a destination
        """
        if self._state != AggregationState.FINALIZED:
            raise OrchestratorStateError(
                f"Cannot copy resources in state '{self._state.value}'"
            )
        job = job or self._job

        written: List[Path] = []
        owners: Dict[Path, str] = {}
        for module in job.included_modules:
            target_root = job.module_output_dir(module)
            for resource in self._find_resources(module):
                destination = target_root / resource.relative_to(module.source_root)
                if owners.get(destination, module.name) != module.name:
                    logging.warning(
                        f"Resource {destination} of module '{module.name}' "
                        f"overwrites the one of module '{owners[destination]}'"
                    )
                owners[destination] = module.name
                destination.parent.mkdir(parents=True, exist_ok=True)
                shutil.copyfile(resource, destination)
                written.append(destination)

            if module.stylesheet is not None:
                if not module.stylesheet.is_file():
                    raise NotFoundError(
                        f"Stylesheet of module '{module.name}' not found: {module.stylesheet}"
                    )
                destination = target_root / module.stylesheet.name
                if owners.get(destination, module.name) != module.name:
                    raise ConflictError(
                        f"Stylesheets of modules '{owners[destination]}' and "
                        f"'{module.name}' would both be written to {destination}"
                    )
                owners[destination] = module.name
                destination.parent.mkdir(parents=True, exist_ok=True)
                shutil.copyfile(module.stylesheet, destination)
                written.append(destination)

        logging.info(f"Copied {len(written)} resource files to {job.output_directory}")
        if self.verbose:
            print(f"Copied {len(written)} resource files")
        return written

    @staticmethod
    def _find_resources(module: Module) -> List[Path]:
        files = set()
        for resource_dir in module.source_root.rglob(DOC_RESOURCE_DIR_NAME):
            if resource_dir.is_dir():
                files.update(path for path in resource_dir.rglob("*") if path.is_file())
        return sorted(files)

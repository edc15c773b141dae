"""Renderer Argument Builder.

This module turns a finalized AggregationJob into the command-line arguments
of the external documentation renderer (javadoc style).

Design:
    - Named modules go to --module-source-path, one entry per namespace
    - Unnamed module roots are joined into a single -sourcepath
    - Flags with nothing to say (no snippets, empty classpath) are omitted
    - Excluded names filter the list of documented source files
    - Fully excluded packages are also passed to -exclude
"""

import os
import shlex
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from ..version import minor_series
from .link_resolver import ResolvedLink
from .orchestrator import AggregationJob
from .package_filter import DEFAULT_ROOT_MARKER, DEFAULT_SOURCE_EXTENSION, PackageFilter


class RendererArgumentBuilder:
    """Builds renderer arguments from an aggregation job."""

    def __init__(
        self,
        job: AggregationJob,
        links: Optional[Sequence[ResolvedLink]] = None,
        extra_flags: Optional[List[str]] = None,
        root_marker: str = DEFAULT_ROOT_MARKER,
        source_extension: str = DEFAULT_SOURCE_EXTENSION
    ):
        """Initialize argument builder.

        Args:
            job: Finalized aggregation job
            links: Resolved external documentation links
            extra_flags: User flags appended before the source files
            root_marker: Path segment that marks the source root
            source_extension: Source file extension
        """
        self.job = job
        self.links = list(links or [])
        self.extra_flags = extra_flags or []
        self.root_marker = root_marker
        self.source_extension = source_extension

    @staticmethod
    def parse_flag_string(flag_string: str) -> List[str]:
        """Parse a flag string that may contain quoted values.

        Example:
            >>> RendererArgumentBuilder.parse_flag_string('-bottom "Copyright 2024" -quiet')
            ['-bottom', 'Copyright 2024', '-quiet']
        """
        try:
            return shlex.split(flag_string)
        except ValueError:
            return flag_string.split()

    def title(self) -> str:
        """Document title, ``"{title} {version}"``."""
        parts = [self.job.title] if self.job.title else []
        if self.job.version is not None:
            parts.append(str(self.job.version))
        return " ".join(parts)

    def documented_files(self) -> List[Path]:
        """Source files handed to the renderer, without excluded names."""
        roots = [module.source_root for module in self.job.included_modules]
        files = []
        for source_file in PackageFilter.source_files(
            self.job.merged_sources, self.source_extension
        ):
            names = PackageFilter.derived_names(
                [source_file], self.root_marker, source_roots=roots
            )
            if names & self.job.excluded_names:
                continue
            files.append(source_file)
        return files

    def excluded_packages(self) -> List[str]:
        """Packages whose every name is excluded, sorted."""
        packages: Dict[str, bool] = {}
        for name in self.job.source_names:
            package = name.rpartition(".")[0]
            if not package:
                continue
            excluded = name in self.job.excluded_names
            packages[package] = packages.get(package, True) and excluded
        return sorted(package for package, excluded in packages.items() if excluded)

    def build_arguments(self, include_files: bool = True) -> List[str]:
        """
        Build the renderer argument list.

        Args:
            include_files: Append the documented source files

        Returns:
            List of arguments (without the executable)
        """
        job = self.job
        args = ["-d", str(job.output_directory)]

        title = self.title()
        if title:
            args.extend(["-doctitle", title, "-windowtitle", title])
        if job.version is not None:
            args.extend(["-header", f"{job.title} {minor_series(job.version)}".strip()])

        for namespace, source_root in sorted(job.module_path_mapping.items()):
            args.extend(["--module-source-path", f"{namespace}={source_root}"])

        unnamed_roots = [str(module.source_root) for module in job.unnamed_modules]
        if unnamed_roots:
            args.extend(["-sourcepath", os.pathsep.join(unnamed_roots)])

        if job.merged_classpath:
            args.extend(["-classpath", os.pathsep.join(str(p) for p in job.merged_classpath)])

        if job.snippet_path is not None:
            args.extend(["--snippet-path", job.snippet_path])

        excluded_packages = self.excluded_packages()
        if excluded_packages:
            args.extend(["-exclude", ":".join(excluded_packages)])

        if job.stylesheet is not None:
            args.extend(["-stylesheetfile", str(job.stylesheet)])

        for link in self.links:
            args.extend(link.to_arguments())

        args.extend(self.extra_flags)

        if include_files:
            args.extend(str(path) for path in self.documented_files())

        return args

    def format_command_line(self, executable: str = "javadoc", include_files: bool = False) -> str:
        """Render the full command line as a shell-quoted string."""
        return shlex.join([executable] + self.build_arguments(include_files=include_files))

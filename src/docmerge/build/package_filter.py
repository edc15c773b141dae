"""
Fully-qualified name derivation and glob-based exclusion.

Names are derived from source file paths relative to their module source
root (``.../src/main/java/io/jenetics/Gene.java`` becomes
``io.jenetics.Gene``). Exclusion patterns are filesystem globs matched
against the slash-joined form of a name (``io/jenetics/Gene``):

- ``*`` and ``?`` match within one path segment
- ``**`` matches across segments
- ``[...]`` is a character class (``[!...]`` negates)
- ``.`` has no special meaning
"""

import functools
import os
import re
from pathlib import Path, PurePath
from typing import Iterable, List, Sequence, Set, Tuple, Union

from ..config.ini_parser import ConfigurationError

# Path segment marking the start of the package hierarchy
DEFAULT_ROOT_MARKER = "java"

# Module descriptor files never produce a documented name
MODULE_DESCRIPTOR_FILE = "module-info.java"

DEFAULT_SOURCE_EXTENSION = ".java"

# Example code and doc resources live inside the tree but are not sources
EXCLUDED_DIR_NAMES = frozenset(["snippet-files", "doc-files"])


@functools.lru_cache(maxsize=256)
def _compile_glob(pattern: str) -> "re.Pattern[str]":
    """Translate a path glob into a regular expression."""
    parts = []
    i = 0
    length = len(pattern)
    while i < length:
        ch = pattern[i]
        if ch == "*":
            if pattern.startswith("**", i):
                i += 2
                if i < length and pattern[i] == "/":
                    # "**/" also matches zero directories
                    parts.append("(?:.*/)?")
                    i += 1
                else:
                    parts.append(".*")
                continue
            parts.append("[^/]*")
        elif ch == "?":
            parts.append("[^/]")
        elif ch == "[":
            # A "]" right after "[" or "[!" is a member, not the end of the class
            end = pattern.find("]", i + 3 if pattern.startswith("[!", i) else i + 2)
            if end == -1:
                parts.append(re.escape(ch))
            else:
                body = pattern[i + 1:end].replace("\\", "\\\\").replace("[", "\\[")
                if body.startswith("!"):
                    body = "^" + body[1:]
                elif body.startswith("^"):
                    body = "\\" + body
                parts.append("[" + body + "]")
                i = end
        else:
            parts.append(re.escape(ch))
        i += 1
    try:
        return re.compile("".join(parts))
    except re.error as e:
        # e.g. a reversed range such as "[z-a]"
        raise ConfigurationError(f"Invalid exclusion pattern '{pattern}': {e}") from e


def _as_path_name(name: str) -> str:
    return name.replace(".", "/")


def _marker_index(parts: Sequence[str], root_marker: str) -> int:
    """Index of the marker segment starting the package hierarchy, or -1.

    The conventional ``src/<source set>/<marker>`` layout is preferred, so a
    package segment equal to the marker is kept. Otherwise the first
    occurrence is used.
    """
    candidates = [i for i, part in enumerate(parts) if part == root_marker]
    if not candidates:
        return -1
    for index in candidates:
        if index >= 2 and parts[index - 2] == "src":
            return index
    return candidates[0]


def _relative_parts(
    source_path: PurePath,
    source_roots: Sequence[PurePath],
    root_marker: str
) -> Tuple[str, ...]:
    for root in source_roots:
        try:
            return source_path.relative_to(root).parts
        except ValueError:
            continue

    parts = source_path.parts
    marker_index = _marker_index(parts, root_marker)
    if marker_index < 0:
        return ()
    return parts[marker_index + 1:]


class PackageFilter:
    """Computes the set of fully-qualified names to exclude from rendering."""

    @staticmethod
    def derived_names(
        source_paths: Iterable[Union[str, Path]],
        root_marker: str = DEFAULT_ROOT_MARKER,
        source_roots: Iterable[Union[str, Path]] = ()
    ) -> Set[str]:
        """
        Derive dotted fully-qualified names from source file paths.

        A path below one of ``source_roots`` is taken relative to the
        innermost such root. Other paths are cut after the ``root_marker``
        segment, preferring the one in a ``src/<source set>/<marker>``
        layout. The extension is removed and the remaining segments are
        joined with dots. Module descriptor files and paths without a root
        or marker produce no name.

        Args:
            source_paths: Source file paths
            root_marker: Path segment that marks the source root
            source_roots: Known source roots the paths may lie below

        Returns:
            Set of fully-qualified names
        """
        roots = sorted(
            (PurePath(root) for root in source_roots),
            key=lambda root: len(root.parts),
            reverse=True,
        )

        names: Set[str] = set()
        for source_path in source_paths:
            source_path = PurePath(source_path)
            if not source_path.parts or source_path.name == MODULE_DESCRIPTOR_FILE:
                continue

            relative = list(_relative_parts(source_path, roots, root_marker))
            if not relative:
                continue

            relative[-1] = os.path.splitext(relative[-1])[0]
            names.add(".".join(relative))
        return names

    @staticmethod
    def matches(name: str, patterns: Iterable[str]) -> bool:
        """
        Check whether a name matches any of the glob patterns.

        The name is matched in its slash-joined form, so ``io.jenetics.Gene``
        is matched by ``io/jenetics/*`` but not by ``io.jenetics.*``.
        """
        path_name = _as_path_name(name)
        return any(_compile_glob(pattern).fullmatch(path_name) for pattern in patterns)

    @staticmethod
    def check_patterns(patterns: Iterable[str]) -> None:
        """
        Compile every pattern once.

        Raises:
            ConfigurationError: If a pattern cannot be translated
        """
        for pattern in patterns:
            _compile_glob(pattern)

    @staticmethod
    def compute_exclusions(names: Iterable[str], patterns: Iterable[str]) -> Set[str]:
        """Return the names matched by at least one pattern."""
        patterns = list(patterns)
        if not patterns:
            return set()
        return {name for name in names if PackageFilter.matches(name, patterns)}

    @staticmethod
    def source_files(
        directories: Iterable[Path],
        extension: str = DEFAULT_SOURCE_EXTENSION,
        excluded_dirs: Iterable[str] = EXCLUDED_DIR_NAMES
    ) -> List[Path]:
        """
        Find all source files below the given directories.

        Args:
            directories: Source directories to scan (missing ones are skipped)
            extension: Source file extension (e.g., '.java')
            excluded_dirs: Directory names whose contents are skipped

        Returns:
            Sorted list of source file paths
        """
        excluded_dirs = frozenset(excluded_dirs)
        files: Set[Path] = set()
        for directory in directories:
            directory = Path(directory)
            if not directory.is_dir():
                continue
            for path in directory.rglob(f"*{extension}"):
                relative_dirs = path.relative_to(directory).parts[:-1]
                if path.is_file() and not excluded_dirs.intersection(relative_dirs):
                    files.add(path)
        return sorted(files)

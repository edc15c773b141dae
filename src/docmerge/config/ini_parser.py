"""
docmerge.ini configuration parser.

This module parses docmerge.ini files and extracts the module graph and the
aggregate definitions used to build unified documentation.
"""

import configparser
from pathlib import Path
from typing import Dict, List, Optional

DEFAULT_CONFIG_NAME = "docmerge.ini"


class ConfigurationError(Exception):
    """Exception raised for invalid configuration or module selection."""

    pass


def split_list(value: Optional[str]) -> List[str]:
    """Split a multi-line and/or comma separated INI value into entries.

    Example:
        For modules = jenetics, jenetics.ext
        Returns: ['jenetics', 'jenetics.ext']
    """
    if not value:
        return []

    entries = []
    for line in value.split("\n"):
        for entry in line.split(","):
            entry = entry.strip()
            if entry:
                entries.append(entry)
    return entries


class DocMergeConfig:
    """
    Parser for docmerge.ini configuration files.

    Example docmerge.ini:
        [docmerge]
        default_aggregate = all

        [aggregate:all]
        modules = jenetics, jenetics.ext
        output_dir = build/docs/javadoc

        [module:jenetics]
        source_dir = jenetics/src/main/java
        namespace = io.jenetics.base

    Usage:
        config = DocMergeConfig(Path("docmerge.ini"))
        aggregate = config.get_aggregate_config("all")
        module = config.get_module_config("jenetics")
    """

    REQUIRED_AGGREGATE_FIELDS = {"modules"}
    REQUIRED_MODULE_FIELDS = {"source_dir"}

    def __init__(self, ini_path: Path):
        """
        Initialize the parser with a docmerge.ini file.

        Args:
            ini_path: Path to the docmerge.ini file

        Raises:
            ConfigurationError: If the file doesn't exist or cannot be parsed
        """
        self.ini_path = Path(ini_path)

        if not self.ini_path.exists():
            raise ConfigurationError(f"Configuration file not found: {self.ini_path}")

        self.base_dir = self.ini_path.resolve().parent
        self.config = configparser.ConfigParser(
            allow_no_value=True, interpolation=configparser.ExtendedInterpolation()
        )
        # Keep key case, module names in per-module keys are case sensitive
        self.config.optionxform = str

        try:
            self.config.read(self.ini_path, encoding="utf-8")
        except configparser.Error as e:
            raise ConfigurationError(f"Failed to parse {self.ini_path}: {e}") from e

    def _section_names(self, prefix: str) -> List[str]:
        names = []
        for section in self.config.sections():
            if section.startswith(f"{prefix}:"):
                names.append(section.split(":", 1)[1])
        return names

    def _read_section(self, section: str) -> Dict[str, str]:
        try:
            return {key: (value or "").strip() for key, value in self.config[section].items()}
        except configparser.Error as e:
            raise ConfigurationError(f"Failed to read [{section}] in {self.ini_path}: {e}") from e

    def get_aggregates(self) -> List[str]:
        """Get list of all aggregate names (``[aggregate:NAME]`` sections)."""
        return self._section_names("aggregate")

    def get_modules(self) -> List[str]:
        """Get list of all module names (``[module:NAME]`` sections) in file order."""
        return self._section_names("module")

    def get_aggregate_config(self, name: str) -> Dict[str, str]:
        """
        Get configuration for a specific aggregate.

        Values from a plain ``[aggregate]`` section are inherited and
        overridden by the named section.

        Raises:
            ConfigurationError: If the aggregate is not found or is missing
                required fields
        """
        section = f"aggregate:{name}"

        if section not in self.config:
            available = ", ".join(self.get_aggregates())
            raise ConfigurationError(
                f"Aggregate '{name}' not found. "
                + f"Available aggregates: {available or 'none'}"
            )

        aggregate_config = self._read_section(section)
        if "aggregate" in self.config:
            aggregate_config = {**self._read_section("aggregate"), **aggregate_config}

        missing_fields = self.REQUIRED_AGGREGATE_FIELDS - set(aggregate_config.keys())
        if missing_fields:
            raise ConfigurationError(
                f"Aggregate '{name}' is missing required fields: "
                + f"{', '.join(sorted(missing_fields))}"
            )

        return aggregate_config

    def get_module_config(self, name: str) -> Dict[str, str]:
        """
        Get configuration for a specific module.

        Raises:
            ConfigurationError: If the module is not found or has no source_dir
        """
        section = f"module:{name}"

        if section not in self.config:
            raise ConfigurationError(f"Module '{name}' not found in {self.ini_path}")

        module_config = self._read_section(section)

        missing_fields = self.REQUIRED_MODULE_FIELDS - set(module_config.keys())
        if missing_fields:
            raise ConfigurationError(
                f"Module '{name}' is missing required fields: "
                + f"{', '.join(sorted(missing_fields))}"
            )

        return module_config

    def get_included_modules(self, aggregate: str) -> List[str]:
        """Ordered module names selected by an aggregate."""
        return split_list(self.get_aggregate_config(aggregate).get("modules"))

    def get_exclusion_patterns(self, aggregate: str) -> List[str]:
        """Glob exclusion patterns of an aggregate (may be empty)."""
        return split_list(self.get_aggregate_config(aggregate).get("exclude"))

    def get_links(self, aggregate: str) -> List[str]:
        """External documentation URLs to link against."""
        return split_list(self.get_aggregate_config(aggregate).get("links"))

    def resolve_path(self, value: str) -> Path:
        """Resolve a configured path relative to the INI file's directory."""
        path = Path(value).expanduser()
        if not path.is_absolute():
            path = self.base_dir / path
        return path

    def has_aggregate(self, name: str) -> bool:
        """Check if an aggregate exists in the configuration."""
        return f"aggregate:{name}" in self.config

    def get_default_aggregate(self) -> Optional[str]:
        """
        Get the default aggregate.

        Returns:
            ``default_aggregate`` from the ``[docmerge]`` section, or the first
            aggregate found, or None
        """
        if "docmerge" in self.config:
            default = (self.config["docmerge"].get("default_aggregate") or "").strip()
            if default:
                return default.split(",")[0].strip()

        aggregates = self.get_aggregates()
        return aggregates[0] if aggregates else None

"""CLI utility functions for docmerge.

This module provides common utilities used across CLI commands including:
- Config file and aggregate detection from docmerge.ini
- Error handling and formatting
- Path validation
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from docmerge.config import DEFAULT_CONFIG_NAME, ConfigurationError, DocMergeConfig


class AggregateDetector:
    """Handles config file lookup and aggregate detection."""

    @staticmethod
    def find_config(project_dir: Path, config_path: Optional[Path] = None) -> Path:
        """Locate the docmerge.ini to use.

        Args:
            project_dir: Project directory containing docmerge.ini
            config_path: Optional explicit config file

        Returns:
            Path of the config file

        Raises:
            FileNotFoundError: If the config file doesn't exist
        """
        ini_path = config_path if config_path is not None else project_dir / DEFAULT_CONFIG_NAME
        if not ini_path.exists():
            raise FileNotFoundError(f"{ini_path.name} not found in {ini_path.parent}")
        return ini_path

    @staticmethod
    def detect_aggregate(config: DocMergeConfig, aggregate: Optional[str] = None) -> str:
        """Detect or validate the aggregate name.

        Args:
            config: Parsed docmerge.ini
            aggregate: Optional explicit aggregate name

        Returns:
            Aggregate name to use

        Raises:
            ConfigurationError: If the aggregate is not defined, or no
                aggregates are defined in docmerge.ini
        """
        if aggregate:
            if not config.has_aggregate(aggregate):
                available = ", ".join(config.get_aggregates())
                raise ConfigurationError(
                    f"Aggregate '{aggregate}' not found. "
                    + f"Available aggregates: {available or 'none'}"
                )
            return aggregate

        detected = config.get_default_aggregate()
        if not detected:
            raise ConfigurationError(f"No aggregates found in {config.ini_path.name}")
        if not config.has_aggregate(detected):
            raise ConfigurationError(
                f"Default aggregate '{detected}' not found in {config.ini_path.name}"
            )
        return detected


class ErrorFormatter:
    """Formats and displays error messages with ANSI color codes."""

    # ANSI color codes
    RED = "\033[1;31m"
    GREEN = "\033[1;32m"
    YELLOW = "\033[1;33m"
    RESET = "\033[0m"

    @staticmethod
    def print_error(title: str, message: str) -> None:
        """Print formatted error message.

        Args:
            title: Error title (e.g., "File not found", "Aggregation failed")
            message: Error message details
        """
        print()
        print(f"{ErrorFormatter.RED}✗ {title}{ErrorFormatter.RESET}")
        print()
        print(message)
        print()

    @staticmethod
    def print_success(message: str) -> None:
        print()
        print(f"{ErrorFormatter.GREEN}✓ {message}{ErrorFormatter.RESET}")

    @staticmethod
    def print_warning(message: str) -> None:
        print()
        print(f"{ErrorFormatter.YELLOW}✗ {message}{ErrorFormatter.RESET}")

    @staticmethod
    def handle_file_not_found(error: FileNotFoundError) -> None:
        """Handle FileNotFoundError with standard formatting."""
        ErrorFormatter.print_error("Error: File not found", str(error))
        print(f"Make sure you're in a project directory with a {DEFAULT_CONFIG_NAME} file.")
        sys.exit(1)

    @staticmethod
    def handle_permission_error(error: PermissionError) -> None:
        """Handle PermissionError with standard formatting."""
        ErrorFormatter.print_error("Error: Permission denied", str(error))
        sys.exit(1)

    @staticmethod
    def handle_keyboard_interrupt() -> None:
        """Handle KeyboardInterrupt with standard formatting."""
        ErrorFormatter.print_warning("Aggregation interrupted")
        sys.exit(130)  # Standard exit code for SIGINT

    @staticmethod
    def handle_unexpected_error(error: Exception, verbose: bool = False) -> None:
        """Handle unexpected errors with standard formatting.

        Args:
            error: The exception to handle
            verbose: Whether to print traceback
        """
        message = f"{type(error).__name__}: {error}"
        ErrorFormatter.print_error("Unexpected error", message)

        if verbose:
            import traceback

            print("Traceback:")
            print(traceback.format_exc())

        sys.exit(1)


class PathValidator:
    """Validates project paths and directories."""

    @staticmethod
    def validate_directory(directory: Path) -> None:
        """Validate that a path exists and is a directory.

        Raises:
            SystemExit: If path doesn't exist or isn't a directory
        """
        if not directory.exists():
            print(
                f"{ErrorFormatter.RED}✗ Error: Path does not exist: {directory}{ErrorFormatter.RESET}"
            )
            sys.exit(2)
        if not directory.is_dir():
            print(
                f"{ErrorFormatter.RED}✗ Error: Path is not a directory: {directory}{ErrorFormatter.RESET}"
            )
            sys.exit(2)


def configure_logging(verbose: bool = False) -> None:
    """Route library logging to stderr, DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

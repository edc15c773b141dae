"""
Command-line interface for docmerge.

This module provides the `docmerge` CLI tool for aggregating the
documentation inputs of a multi-module library.
"""

import argparse
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from docmerge import __version__
from docmerge.build import (
    AggregationConfig,
    AggregationOrchestrator,
    Colorizer,
    ConflictError,
    LinkResolver,
    LinkResolverError,
    NotFoundError,
    RendererArgumentBuilder,
    ResolvedLink,
)
from docmerge.cache import Cache
from docmerge.cli_utils import (
    AggregateDetector,
    ErrorFormatter,
    PathValidator,
    configure_logging,
)
from docmerge.config import ConfigurationError, DocMergeConfig, ProjectGraph
from docmerge.version import FormatError, minor_series, parse_version

AGGREGATION_ERRORS = (
    ConfigurationError,
    ConflictError,
    FormatError,
    LinkResolverError,
    NotFoundError,
)


@dataclass
class AggregateArgs:
    """Arguments for the aggregate command."""

    project_dir: Path
    aggregate: Optional[str] = None
    config: Optional[Path] = None
    copy_resources: bool = True
    clean: bool = False
    offline_links: bool = False
    colorize: bool = False
    args_file: Optional[Path] = None
    verbose: bool = False


@dataclass
class VersionArgs:
    """Arguments for the version command."""

    text: str
    series: bool = False


@dataclass
class ColorizeArgs:
    """Arguments for the colorize command."""

    directory: Path
    verbose: bool = False


def aggregate_command(args: AggregateArgs) -> None:
    """Aggregate module sources into one documentation job.

    Examples:
        docmerge aggregate                     # Default aggregate
        docmerge aggregate -a all              # Aggregate 'all'
        docmerge aggregate --offline-links     # Cache external link lists
        docmerge aggregate --colorize          # Colorize rendered HTML
        docmerge aggregate --clean             # Start from an empty default output
    """
    print(f"docmerge v{__version__}")
    print()

    try:
        ini_path = AggregateDetector.find_config(args.project_dir, args.config)
        config = DocMergeConfig(ini_path)
        aggregate = AggregateDetector.detect_aggregate(config, args.aggregate)

        if args.verbose:
            print(f"Project: {args.project_dir}")
            print(f"Aggregate: {aggregate}")
            print()
        else:
            print(f"Aggregating {aggregate}...")

        start_time = time.time()
        cache = Cache(args.project_dir)
        if args.clean:
            cache.clean_output(aggregate)
        graph = ProjectGraph.from_config(config)
        run_config = AggregationConfig.from_ini(config, aggregate, cache)

        orchestrator = AggregationOrchestrator(graph, verbose=args.verbose)
        job = orchestrator.run(run_config)

        if args.copy_resources:
            orchestrator.copy_auxiliary_resources(job)

        link_urls = config.get_links(aggregate)
        if args.offline_links:
            cache.ensure_directories()
            links = LinkResolver(cache).resolve_all(link_urls)
        else:
            links = [ResolvedLink(url=url) for url in link_urls]

        aggregate_config = config.get_aggregate_config(aggregate)
        builder = RendererArgumentBuilder(
            job,
            links=links,
            extra_flags=RendererArgumentBuilder.parse_flag_string(
                aggregate_config.get("renderer_flags", "")
            ),
            root_marker=run_config.root_marker,
            source_extension=run_config.source_extension,
        )

        if args.args_file is not None:
            arguments = builder.build_arguments(include_files=True)
            args.args_file.parent.mkdir(parents=True, exist_ok=True)
            args.args_file.write_text(
                "\n".join(_quote_argument(arg) for arg in arguments) + "\n",
                encoding="utf-8",
            )

        if args.colorize and job.output_directory.is_dir():
            colorizer = Colorizer(job.output_directory)
            colorizer.colorize()
            print(f"Colorized {colorizer.modified} of {colorizer.processed} HTML files")

        ErrorFormatter.print_success("Aggregation successful!")
        print()
        print(f"Modules:  {', '.join(m.display_name for m in job.included_modules)}")
        print(f"Names:    {len(job.source_names)} ({len(job.excluded_names)} excluded)")
        print(f"Output:   {job.output_directory}")
        if args.args_file is not None:
            print(f"Args:     {args.args_file}")
        print()
        print(builder.format_command_line())
        print()
        print(f"Aggregation time: {time.time() - start_time:.2f}s")
        sys.exit(0)

    except AGGREGATION_ERRORS as e:
        ErrorFormatter.print_error("Aggregation failed!", str(e))
        sys.exit(1)
    except FileNotFoundError as e:
        ErrorFormatter.handle_file_not_found(e)
    except PermissionError as e:
        ErrorFormatter.handle_permission_error(e)
    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()
    except Exception as e:
        ErrorFormatter.handle_unexpected_error(e, args.verbose)


def _quote_argument(arg: str) -> str:
    # Renderer argument files split on whitespace unless quoted
    if any(ch.isspace() for ch in arg) or '"' in arg or not arg:
        return '"' + arg.replace("\\", "\\\\").replace('"', '\\"') + '"'
    return arg


def version_command(args: VersionArgs) -> None:
    """Parse a version string and print its normalized form.

    Examples:
        docmerge version 8.1.0-rc1             # 8.1.0-SNAPSHOT
        docmerge version 8.1.0 --series        # 8.1
    """
    try:
        version = parse_version(args.text)
    except FormatError as e:
        ErrorFormatter.print_error("Invalid version", str(e))
        sys.exit(1)

    print(minor_series(version) if args.series else str(version))
    sys.exit(0)


def colorize_command(args: ColorizeArgs) -> None:
    """Colorize code blocks of rendered HTML documentation."""
    try:
        colorizer = Colorizer(args.directory)
        colorizer.colorize()
        print(
            f"Colorizer processed {colorizer.processed} files "
            f"and modified {colorizer.modified}."
        )
        sys.exit(0)
    except PermissionError as e:
        ErrorFormatter.handle_permission_error(e)
    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()
    except Exception as e:
        ErrorFormatter.handle_unexpected_error(e, args.verbose)


def main(argv: Optional[List[str]] = None) -> None:
    """docmerge - cross-module documentation aggregator."""
    parser = argparse.ArgumentParser(
        prog="docmerge",
        description="docmerge - cross-module documentation aggregator",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"docmerge {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Aggregate command
    aggregate_parser = subparsers.add_parser(
        "aggregate",
        help="Aggregate module sources into one documentation job",
    )
    aggregate_parser.add_argument(
        "project_dir",
        nargs="?",
        type=Path,
        default=Path.cwd(),
        help="Project directory (default: current directory)",
    )
    aggregate_parser.add_argument(
        "-a",
        "--aggregate",
        default=None,
        help="Aggregate name (default: auto-detect from docmerge.ini)",
    )
    aggregate_parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Config file (default: PROJECT_DIR/docmerge.ini)",
    )
    aggregate_parser.add_argument(
        "--no-copy-resources",
        dest="copy_resources",
        action="store_false",
        help="Skip copying per-module doc-files into the output directory",
    )
    aggregate_parser.add_argument(
        "--clean",
        action="store_true",
        help="Remove the default output directory (.docmerge/output/NAME) first",
    )
    aggregate_parser.add_argument(
        "--offline-links",
        action="store_true",
        help="Download external link lists into the cache",
    )
    aggregate_parser.add_argument(
        "--colorize",
        action="store_true",
        help="Colorize code blocks of HTML already in the output directory",
    )
    aggregate_parser.add_argument(
        "--args-file",
        type=Path,
        default=None,
        help="Write the renderer arguments (including source files) to this file",
    )
    aggregate_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show verbose output",
    )

    # Version command
    version_parser = subparsers.add_parser(
        "version",
        help="Parse and normalize a version string",
    )
    version_parser.add_argument("text", help="Version string (MAJOR.MINOR.MICRO[-TAG])")
    version_parser.add_argument(
        "--series",
        action="store_true",
        help="Print the MAJOR.MINOR release series",
    )

    # Colorize command
    colorize_parser = subparsers.add_parser(
        "colorize",
        help="Colorize code blocks of rendered HTML documentation",
    )
    colorize_parser.add_argument("directory", type=Path, help="Documentation directory")
    colorize_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show verbose output",
    )

    parsed_args = parser.parse_args(argv)

    if not parsed_args.command:
        parser.print_help()
        sys.exit(0)

    configure_logging(getattr(parsed_args, "verbose", False))

    if parsed_args.command == "aggregate":
        PathValidator.validate_directory(parsed_args.project_dir)
        aggregate_command(AggregateArgs(
            project_dir=parsed_args.project_dir,
            aggregate=parsed_args.aggregate,
            config=parsed_args.config,
            copy_resources=parsed_args.copy_resources,
            clean=parsed_args.clean,
            offline_links=parsed_args.offline_links,
            colorize=parsed_args.colorize,
            args_file=parsed_args.args_file,
            verbose=parsed_args.verbose,
        ))
    elif parsed_args.command == "version":
        version_command(VersionArgs(text=parsed_args.text, series=parsed_args.series))
    elif parsed_args.command == "colorize":
        PathValidator.validate_directory(parsed_args.directory)
        colorize_command(ColorizeArgs(
            directory=parsed_args.directory,
            verbose=parsed_args.verbose,
        ))


if __name__ == "__main__":
    main()

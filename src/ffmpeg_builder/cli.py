"""
Command-line interface for ai-ffmpeg-builder.

This module provides the `ffbuild` CLI tool. The only line written to
stdout is the ``FFMPEG_PKG_CONFIG_PATH=...`` result; progress and errors
go to stderr.
"""

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ffmpeg_builder import __version__
from ffmpeg_builder.build import BuildPipeline, PipelineState, StageError
from ffmpeg_builder.cli_utils import ErrorFormatter, configure_logging
from ffmpeg_builder.config import (
    DEFAULT_COMPONENTS,
    BuildConfig,
    BuildConfigError,
    available_components,
)
from ffmpeg_builder.config.build_config import DEFAULT_JOBS


@dataclass
class BuildArgs:
    """Arguments for the build command."""

    out_dir: Optional[Path] = None
    components: Optional[str] = None
    package_version: Optional[str] = None
    jobs: int = DEFAULT_JOBS
    hwaccel: Optional[str] = None
    clean: bool = False
    verbose: bool = False


def build_command(args: BuildArgs) -> None:
    """Build the static FFmpeg libraries and report their pkg-config path.

    Examples:
        ffbuild build                          # Build into $OUT_DIR/ffmpeg
        ffbuild build --out-dir target         # Build into target/ffmpeg
        ffbuild build --components x264       # Choose components
        ffbuild build --clean                 # Rebuild from scratch
    """
    configure_logging(args.verbose)

    try:
        config = BuildConfig.from_environment(
            out_dir=args.out_dir,
            components=args.components,
            package_version=args.package_version,
            jobs=args.jobs,
            hwaccel=args.hwaccel,
            clean=args.clean,
            verbose=args.verbose,
        )

        result = BuildPipeline(config).run()

        if result.state == PipelineState.DONE:
            ErrorFormatter.print_success(
                f"FFmpeg {config.ffmpeg_version} built in {result.build_time:.2f}s"
            )

        print(result.output_line)
        sys.exit(0)

    except BuildConfigError as e:
        ErrorFormatter.handle_config_error(e)
    except StageError as e:
        ErrorFormatter.handle_stage_error(e, args.verbose)
    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()
    except Exception as e:
        ErrorFormatter.handle_unexpected_error(e, args.verbose)


def components_command() -> None:
    """List the buildable components and the default selection."""
    defaults = {component.value for component in DEFAULT_COMPONENTS}
    for name in available_components():
        marker = " (default)" if name in defaults else ""
        print(f"{name}{marker}")
    sys.exit(0)


def main(argv: Optional[List[str]] = None) -> None:
    """ai-ffmpeg-builder - static FFmpeg builds for host programs."""
    parser = argparse.ArgumentParser(
        prog="ffbuild",
        description="Build static FFmpeg and codec libraries from source",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"ffbuild {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    build_parser = subparsers.add_parser(
        "build",
        help="Build FFmpeg and the selected components",
    )
    build_parser.add_argument(
        "-o",
        "--out-dir",
        type=Path,
        default=None,
        help="Output directory holding the ffmpeg workspace (default: $OUT_DIR or cwd)",
    )
    build_parser.add_argument(
        "--components",
        default=None,
        help="Comma-separated components (default: $AI_FFMPEG_BUILD_COMPONENTS or x264)",
    )
    build_parser.add_argument(
        "--package-version",
        default=None,
        help="Version string carrying the FFmpeg release after 'ffmpeg' "
        + "(default: $AI_FFMPEG_PKG_VERSION or this package's version)",
    )
    build_parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=DEFAULT_JOBS,
        help=f"Parallel jobs passed to make (default: {DEFAULT_JOBS})",
    )
    build_parser.add_argument(
        "--hwaccel",
        default=None,
        help="Hardware decoder to enable (default: detected from host)",
    )
    build_parser.add_argument(
        "-c",
        "--clean",
        action="store_true",
        help="Remove an existing workspace before building",
    )
    build_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show configure and make output",
    )

    subparsers.add_parser(
        "components",
        help="List buildable components",
    )

    parsed_args = parser.parse_args(argv)

    if not parsed_args.command:
        parser.print_help()
        sys.exit(0)

    if parsed_args.command == "build":
        build_args = BuildArgs(
            out_dir=parsed_args.out_dir,
            components=parsed_args.components,
            package_version=parsed_args.package_version,
            jobs=parsed_args.jobs,
            hwaccel=parsed_args.hwaccel,
            clean=parsed_args.clean,
            verbose=parsed_args.verbose,
        )
        build_command(build_args)
    elif parsed_args.command == "components":
        components_command()


if __name__ == "__main__":
    main()

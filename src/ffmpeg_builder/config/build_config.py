"""
Run configuration for the FFmpeg build pipeline.

Settings come from environment variables, with explicit values (usually
from the command line) taking precedence:

    AI_FFMPEG_BUILD_COMPONENTS  comma-separated component list
    AI_FFMPEG_PKG_VERSION       package version carrying the FFmpeg release
    OUT_DIR                     directory that receives the ``ffmpeg`` root

Usage:
    config = BuildConfig.from_environment(os.environ, jobs=8)
    print(config.root, config.ffmpeg_version)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Tuple

from .. import __version__
from ..packages.platform_utils import PlatformDetector, PlatformError
from .components import BuildConfigError, Component, resolve_selection
from .version import extract_ffmpeg_version

COMPONENTS_ENV = "AI_FFMPEG_BUILD_COMPONENTS"
PACKAGE_VERSION_ENV = "AI_FFMPEG_PKG_VERSION"
OUT_DIR_ENV = "OUT_DIR"

WORKSPACE_DIR_NAME = "ffmpeg"
DEFAULT_JOBS = 10


@dataclass(frozen=True)
class BuildConfig:
    """Resolved settings for one pipeline run."""

    out_dir: Path
    components: Tuple[Component, ...]
    package_version: str
    ffmpeg_version: str
    jobs: int = DEFAULT_JOBS
    hwaccel: Optional[str] = None
    clean: bool = False
    verbose: bool = False

    @property
    def root(self) -> Path:
        """Workspace root, also used as the already-built marker."""
        return self.out_dir / WORKSPACE_DIR_NAME

    @classmethod
    def from_environment(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        out_dir: Optional[Path] = None,
        components: Optional[str] = None,
        package_version: Optional[str] = None,
        jobs: int = DEFAULT_JOBS,
        hwaccel: Optional[str] = None,
        clean: bool = False,
        verbose: bool = False,
    ) -> "BuildConfig":
        """
        Build a configuration from environment variables and overrides.

        Args:
            environ: Environment mapping (defaults to os.environ)
            out_dir: Output directory override
            components: Component list override
            package_version: Package version override
            jobs: Parallel job hint passed to make
            hwaccel: Hardware decoder override (detected from the host when None)
            clean: Remove an existing workspace root before building
            verbose: Stream external tool output

        Returns:
            Validated BuildConfig

        Raises:
            BuildConfigError: If components, version or jobs are invalid, or
                the host has no known hardware decoder and none was given
        """
        if environ is None:
            environ = os.environ

        if jobs < 1:
            raise BuildConfigError(f"jobs must be at least 1, got {jobs}")

        if components is None:
            components = environ.get(COMPONENTS_ENV)
        selection = resolve_selection(components)

        if package_version is None:
            package_version = environ.get(PACKAGE_VERSION_ENV, __version__)
        ffmpeg_version = extract_ffmpeg_version(package_version)

        if hwaccel is None:
            try:
                hwaccel = PlatformDetector.detect_hwaccel()
            except PlatformError as e:
                raise BuildConfigError(
                    f"{e}; pass a hardware decoder with --hwaccel"
                ) from e

        if out_dir is None:
            out_dir = Path(environ.get(OUT_DIR_ENV, os.getcwd()))

        return cls(
            out_dir=Path(out_dir).resolve(),
            components=selection,
            package_version=package_version,
            ffmpeg_version=ffmpeg_version,
            jobs=jobs,
            hwaccel=hwaccel,
            clean=clean,
            verbose=verbose,
        )

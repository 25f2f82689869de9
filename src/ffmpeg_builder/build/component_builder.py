"""
Component builders for the optional libraries FFmpeg links against.

Every component is cloned, configured, compiled and installed into the
shared build prefix. Later components and FFmpeg itself find it there
through PKG_CONFIG_PATH, so build order is the dependency order.
"""

import logging
from pathlib import Path
from typing import Tuple

from ..config.build_config import DEFAULT_JOBS
from ..config.components import Component
from .command_runner import (
    STAGE_CONFIGURE,
    STAGE_FETCH,
    STAGE_INSTALL,
    STAGE_MAKE,
    CommandRunner,
)
from .flag_builder import FlagBuilder
from .workspace import WorkspaceError

logger = logging.getLogger(__name__)


class ComponentBuilder:
    """
    Base builder for a configure/make component.

    Subclasses set:
        COMPONENT: Registry entry the builder handles
        REPO_URL: Upstream git repository, cloned at depth 1
        FFMPEG_FLAGS: FFmpeg configure flags enabling the component
    """

    COMPONENT: Component
    REPO_URL: str
    FFMPEG_FLAGS: Tuple[str, ...] = ()

    def __init__(self, runner: CommandRunner, jobs: int = DEFAULT_JOBS):
        """
        Args:
            runner: Runner used for every external stage
            jobs: Parallel job hint for make
        """
        self.runner = runner
        self.jobs = jobs

    @property
    def name(self) -> str:
        return self.COMPONENT.value

    def build(self, source_dir: Path, build_dir: Path) -> Path:
        """
        Fetch, configure, compile and install the component.

        Args:
            source_dir: Source stage; the component gets its own subdirectory
            build_dir: Shared build prefix the component installs into

        Returns:
            The component's source directory

        Raises:
            WorkspaceError: If the source subdirectory cannot be created
            StageError: If any external stage fails
        """
        component_dir = Path(source_dir) / self.name
        try:
            component_dir.mkdir()
        except OSError as e:
            raise WorkspaceError(f"Failed to create {component_dir}: {e}") from e

        logger.info(f"Building {self.name}")

        self.fetch(component_dir)
        self.configure(component_dir, Path(build_dir))
        self.compile(component_dir)
        self.install(component_dir)

        return component_dir

    def fetch(self, component_dir: Path) -> None:
        self.runner.run(
            self.name,
            STAGE_FETCH,
            ["git", "clone", "--depth", "1", self.REPO_URL, str(component_dir)],
        )

    def configure(self, component_dir: Path, build_dir: Path) -> None:
        self.runner.run(
            self.name,
            STAGE_CONFIGURE,
            ["./configure"] + FlagBuilder.component_configure_args(build_dir),
            cwd=component_dir,
            env=FlagBuilder.configure_env(build_dir),
        )

    def compile(self, component_dir: Path) -> None:
        self.runner.run(
            self.name,
            STAGE_MAKE,
            ["make", "-j", str(self.jobs)],
            cwd=component_dir,
        )

    def install(self, component_dir: Path) -> None:
        self.runner.run(
            self.name,
            STAGE_INSTALL,
            ["make", "install"],
            cwd=component_dir,
        )


class X264Builder(ComponentBuilder):
    """Builds the x264 H.264 encoder library."""

    COMPONENT = Component.X264
    REPO_URL = "https://code.videolan.org/videolan/x264.git"
    # x264 is GPL-licensed, so FFmpeg must be configured as GPL to use it
    FFMPEG_FLAGS = ("--enable-gpl", "--enable-libx264")

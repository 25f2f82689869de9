"""
Build orchestration for ai-ffmpeg-builder.

This module drives one pipeline run from an existing-workspace check to
the reported pkg-config path. Phases run strictly in order:

1. Skip the run if the workspace root already exists
2. Create the source/build/install stages
3. Build each selected component into the build stage
4. Build FFmpeg against the build stage into the install stage
5. Remove the source and build stages
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from ..config.build_config import BuildConfig
from ..packages.downloader import PackageDownloader
from .build_component_factory import BuildComponentFactory
from .command_runner import CommandRunner
from .workspace import Workspace, WorkspaceExistsError, WorkspaceManager

logger = logging.getLogger(__name__)

PKG_CONFIG_OUTPUT_KEY = "FFMPEG_PKG_CONFIG_PATH"


class PipelineState(Enum):
    """Progress of a pipeline run."""

    NOT_STARTED = "not_started"
    WORKSPACE_PREPARED = "workspace_prepared"
    COMPONENTS_BUILT = "components_built"
    PRIMARY_BUILT = "primary_built"
    CLEANED_UP = "cleaned_up"
    DONE = "done"
    ALREADY_DONE = "already_done"


@dataclass
class PipelineResult:
    """Result of a completed pipeline run."""

    state: PipelineState
    pkg_config_path: Path
    build_time: float
    message: str
    components_built: List[str] = field(default_factory=list)

    @property
    def output_line(self) -> str:
        """Key/value line read by the host build."""
        return f"{PKG_CONFIG_OUTPUT_KEY}={self.pkg_config_path}"


class BuildPipeline:
    """
    Runs the component and FFmpeg builds for one configuration.

    Example usage:
        config = BuildConfig.from_environment()
        result = BuildPipeline(config).run()
        print(result.output_line)

    Failures propagate as exceptions; the workspace root is left on disk
    and no stage is retried.
    """

    def __init__(
        self,
        config: BuildConfig,
        runner: Optional[CommandRunner] = None,
        downloader: Optional[PackageDownloader] = None,
        factory: Optional[BuildComponentFactory] = None,
    ):
        """
        Args:
            config: Validated run configuration
            runner: Stage runner (defaults to one honoring config.verbose)
            downloader: Archive downloader for the FFmpeg release
            factory: Builder factory (defaults to one built from the above)
        """
        self.config = config
        self.runner = runner or CommandRunner(verbose=config.verbose)
        self.factory = factory or BuildComponentFactory(
            self.runner,
            jobs=config.jobs,
            downloader=downloader,
            hwaccel=config.hwaccel,
        )
        self.state = PipelineState.NOT_STARTED

    def run(self) -> PipelineResult:
        """
        Execute the pipeline.

        Returns:
            PipelineResult in state DONE or ALREADY_DONE

        Raises:
            WorkspaceError: If workspace directories cannot be created or removed
            StageError: If any external build stage fails
            PlatformError: If the host has no known hardware decoder
        """
        start_time = time.time()
        root = self.config.root

        if self.config.clean:
            WorkspaceManager.remove(root)

        try:
            workspace = WorkspaceManager.prepare(root)
        except WorkspaceExistsError:
            self.state = PipelineState.ALREADY_DONE
            logger.info(f"FFmpeg already built in {root}, nothing to do")
            return PipelineResult(
                state=self.state,
                pkg_config_path=Workspace(root).install_pkg_config_dir,
                build_time=time.time() - start_time,
                message="Already built",
            )
        self.state = PipelineState.WORKSPACE_PREPARED

        component_builders = self.factory.create_component_builders(
            self.config.components
        )
        for builder in component_builders:
            builder.build(workspace.source, workspace.build)
        self.state = PipelineState.COMPONENTS_BUILT

        ffmpeg = self.factory.create_ffmpeg_builder(component_builders)
        ffmpeg.build(
            workspace.source,
            workspace.build,
            workspace.install,
            self.config.ffmpeg_version,
        )
        self.state = PipelineState.PRIMARY_BUILT

        WorkspaceManager.finalize(workspace)
        self.state = PipelineState.CLEANED_UP

        build_time = time.time() - start_time
        self.state = PipelineState.DONE
        logger.info(f"FFmpeg {self.config.ffmpeg_version} built in {build_time:.1f}s")

        return PipelineResult(
            state=self.state,
            pkg_config_path=workspace.install_pkg_config_dir,
            build_time=build_time,
            message="Build successful",
            components_built=[builder.name for builder in component_builders],
        )

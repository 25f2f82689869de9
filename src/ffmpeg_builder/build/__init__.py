"""
Build system components for ai-ffmpeg-builder.

This module provides the build pipeline implementation including:
- Workspace stages (source/build/install)
- Stage command execution with stage-named errors
- Component builds (x264) into the shared build prefix
- The FFmpeg build and pipeline orchestration
"""

from .build_component_factory import COMPONENT_BUILDERS, BuildComponentFactory
from .command_runner import BuildError, CommandRunner, StageError
from .component_builder import ComponentBuilder, X264Builder
from .ffmpeg_target import FFmpegBuilder
from .flag_builder import FlagBuilder
from .orchestrator import BuildPipeline, PipelineResult, PipelineState
from .workspace import Workspace, WorkspaceError, WorkspaceExistsError, WorkspaceManager

__all__ = [
    "BuildComponentFactory",
    "COMPONENT_BUILDERS",
    "BuildError",
    "CommandRunner",
    "StageError",
    "ComponentBuilder",
    "X264Builder",
    "FFmpegBuilder",
    "FlagBuilder",
    "BuildPipeline",
    "PipelineResult",
    "PipelineState",
    "Workspace",
    "WorkspaceError",
    "WorkspaceExistsError",
    "WorkspaceManager",
]

"""
Build component factory for ai-ffmpeg-builder.

This module maps each registry component to its builder and creates the
FFmpeg builder with the flags contributed by the selected components.
"""

from typing import Dict, List, Optional, Sequence, Type

from ..config.build_config import DEFAULT_JOBS
from ..config.components import Component
from ..packages.downloader import PackageDownloader
from .command_runner import CommandRunner
from .component_builder import ComponentBuilder, X264Builder
from .ffmpeg_target import FFmpegBuilder

COMPONENT_BUILDERS: Dict[Component, Type[ComponentBuilder]] = {
    Component.X264: X264Builder,
}


class BuildComponentFactory:
    """
    Factory for creating builders with a shared runner and job count.

    Example usage:
        factory = BuildComponentFactory(CommandRunner(), jobs=8)
        builders = factory.create_component_builders([Component.X264])
        ffmpeg = factory.create_ffmpeg_builder(builders)
    """

    def __init__(
        self,
        runner: CommandRunner,
        jobs: int = DEFAULT_JOBS,
        downloader: Optional[PackageDownloader] = None,
        hwaccel: Optional[str] = None,
        show_progress: bool = True,
    ):
        self.runner = runner
        self.jobs = jobs
        self.downloader = downloader
        self.hwaccel = hwaccel
        self.show_progress = show_progress

    def create_component_builder(self, component: Component) -> ComponentBuilder:
        builder_class = COMPONENT_BUILDERS[component]
        return builder_class(self.runner, jobs=self.jobs)

    def create_component_builders(
        self, components: Sequence[Component]
    ) -> List[ComponentBuilder]:
        """Create builders in selection order."""
        return [self.create_component_builder(component) for component in components]

    def create_ffmpeg_builder(
        self, component_builders: Sequence[ComponentBuilder] = ()
    ) -> FFmpegBuilder:
        """Create the FFmpeg builder enabling the given components."""
        component_flags: List[str] = []
        for builder in component_builders:
            component_flags.extend(builder.FFMPEG_FLAGS)

        return FFmpegBuilder(
            self.runner,
            downloader=self.downloader,
            jobs=self.jobs,
            hwaccel=self.hwaccel,
            component_flags=component_flags,
            show_progress=self.show_progress,
        )

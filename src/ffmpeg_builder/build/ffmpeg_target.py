"""FFmpeg build for ai-ffmpeg-builder.

This module downloads the versioned FFmpeg release archive, configures it
against the components in the shared build prefix and installs the static
libraries into the final install stage.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence

from ..config.build_config import DEFAULT_JOBS
from ..packages.downloader import DownloadError, ExtractionError, PackageDownloader
from ..packages.platform_utils import PlatformDetector
from .command_runner import (
    STAGE_CONFIGURE,
    STAGE_DOWNLOAD,
    STAGE_EXTRACT,
    STAGE_INSTALL,
    STAGE_MAKE,
    CommandRunner,
    StageError,
)
from .flag_builder import FlagBuilder

logger = logging.getLogger(__name__)


class FFmpegBuilder:
    """Builds and installs the FFmpeg libraries."""

    NAME = "ffmpeg"

    # Release archives published at ffmpeg.org
    URL_TEMPLATE = "https://ffmpeg.org/releases/ffmpeg-{version}.tar.bz2"

    def __init__(
        self,
        runner: CommandRunner,
        downloader: Optional[PackageDownloader] = None,
        jobs: int = DEFAULT_JOBS,
        hwaccel: Optional[str] = None,
        component_flags: Sequence[str] = (),
        show_progress: bool = True,
    ):
        """Initialize FFmpeg builder.

        Args:
            runner: Runner used for every external stage
            downloader: Archive downloader (created on demand when None)
            jobs: Parallel job hint for make
            hwaccel: Hardware decoder to enable; detected from the host when None
            component_flags: Configure flags contributed by built components
            show_progress: Whether to show the download progress bar
        """
        self.runner = runner
        self.downloader = downloader
        self.jobs = jobs
        self.hwaccel = hwaccel
        self.component_flags = list(component_flags)
        self.show_progress = show_progress

    @classmethod
    def source_url(cls, version: str) -> str:
        return cls.URL_TEMPLATE.format(version=version)

    def build(
        self, source_dir: Path, build_dir: Path, install_dir: Path, version: str
    ) -> Path:
        """Download, configure, compile and install FFmpeg.

        Args:
            source_dir: Source stage receiving the archive and its contents
            build_dir: Shared prefix holding the built components
            install_dir: Final install prefix
            version: FFmpeg release to build (e.g. '7.1')

        Returns:
            The FFmpeg source directory

        Raises:
            StageError: If any stage fails
            PlatformError: If no hwaccel is set and the host is unsupported
        """
        hwaccel = self.hwaccel or PlatformDetector.detect_hwaccel()

        logger.info(f"Building {self.NAME} {version} (hwaccel: {hwaccel})")

        ffmpeg_dir = self.fetch(Path(source_dir), version)
        self.configure(ffmpeg_dir, Path(build_dir), Path(install_dir), hwaccel)

        self.runner.run(
            self.NAME, STAGE_MAKE, ["make", "-j", str(self.jobs)], cwd=ffmpeg_dir
        )
        self.runner.run(self.NAME, STAGE_INSTALL, ["make", "install"], cwd=ffmpeg_dir)

        return ffmpeg_dir

    def fetch(self, source_dir: Path, version: str) -> Path:
        """Download and unpack the release archive into source_dir.

        Returns:
            Path to the extracted ffmpeg-{version} directory
        """
        url = self.source_url(version)
        archive_path = source_dir / f"ffmpeg-{version}.tar.bz2"

        if self.downloader is None:
            self.downloader = PackageDownloader()

        try:
            self.downloader.download(url, archive_path, show_progress=self.show_progress)
        except DownloadError as e:
            raise StageError(self.NAME, STAGE_DOWNLOAD, str(e)) from e

        try:
            self.downloader.extract_archive(archive_path, source_dir)
        except ExtractionError as e:
            raise StageError(self.NAME, STAGE_EXTRACT, str(e)) from e

        ffmpeg_dir = source_dir / f"ffmpeg-{version}"
        if not ffmpeg_dir.is_dir():
            raise StageError(
                self.NAME,
                STAGE_EXTRACT,
                f"archive did not contain {ffmpeg_dir.name}/",
            )

        return ffmpeg_dir

    def configure(
        self, ffmpeg_dir: Path, build_dir: Path, install_dir: Path, hwaccel: str
    ) -> None:
        args = FlagBuilder.ffmpeg_configure_args(
            install_dir, build_dir, hwaccel, self.component_flags
        )
        self.runner.run(
            self.NAME,
            STAGE_CONFIGURE,
            ["./configure"] + args,
            cwd=ffmpeg_dir,
            env=FlagBuilder.configure_env(build_dir),
        )

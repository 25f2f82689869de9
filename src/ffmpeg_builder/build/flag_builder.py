"""Configure Flag Builder.

This module builds the ./configure arguments and environment used by the
component builders and the FFmpeg build.

Design:
    - Components install into the shared build prefix as static, PIC
      libraries so FFmpeg can link them into its own static archives
    - FFmpeg is configured for the H.264 decode path only; every other
      optional subsystem is switched off
    - Exactly one hardware-accelerated decoder is enabled, chosen for the
      host platform
    - Each selected component adds its own enable flags
"""

from pathlib import Path
from typing import Dict, List, Sequence

PKG_CONFIG_PATH_ENV = "PKG_CONFIG_PATH"

FFMPEG_FIXED_FLAGS = [
    "--disable-shared",
    "--enable-static",
    "--extra-libs=-lpthread",
    "--extra-libs=-lm",
    "--ld=g++",
    "--disable-libxcb",
    "--disable-securetransport",
    "--disable-debug",
    "--disable-programs",
    "--disable-doc",
    "--disable-bsfs",
    "--disable-indevs",
    "--disable-outdevs",
    "--disable-devices",
    "--disable-hwaccels",
    "--enable-decoder=h264",
    "--disable-encoders",
    "--enable-pic",
]


class FlagBuilder:
    """Builds configure arguments for components and FFmpeg."""

    @staticmethod
    def pkg_config_dir(build_dir: Path) -> Path:
        """Return the build-stage pkg-config search path."""
        return Path(build_dir) / "lib" / "pkgconfig"

    @staticmethod
    def configure_env(build_dir: Path) -> Dict[str, str]:
        """Environment that lets configure find earlier components."""
        return {PKG_CONFIG_PATH_ENV: str(FlagBuilder.pkg_config_dir(build_dir))}

    @staticmethod
    def component_configure_args(build_dir: Path) -> List[str]:
        """Arguments for a component installing into the build prefix."""
        return [
            f"--prefix={build_dir}",
            "--disable-shared",
            "--enable-static",
            "--enable-pic",
        ]

    @staticmethod
    def ffmpeg_configure_args(
        install_dir: Path,
        build_dir: Path,
        hwaccel: str,
        component_flags: Sequence[str] = (),
    ) -> List[str]:
        """
        Arguments for configuring FFmpeg against the build prefix.

        Args:
            install_dir: Final install prefix
            build_dir: Shared prefix holding the built components
            hwaccel: Hardware decoder to enable (e.g. 'h264_videotoolbox')
            component_flags: Enable flags contributed by built components

        Returns:
            Ordered list of configure arguments
        """
        build_dir = Path(build_dir)
        args = [
            f"--prefix={install_dir}",
            f"--extra-cflags=-I{build_dir / 'include'}",
            f"--extra-ldflags=-L{build_dir / 'lib'}",
        ]
        args.extend(FFMPEG_FIXED_FLAGS)
        args.append(f"--enable-hwaccel={hwaccel}")

        for flag in component_flags:
            if flag not in args:
                args.append(flag)

        return args

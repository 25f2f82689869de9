"""Platform Detection Utilities.

This module detects the host operating system and picks the FFmpeg
hardware-accelerated H.264 decoder that the host platform provides.

Supported Platforms:
    - macOS: h264_videotoolbox
    - Linux: h264_vaapi
    - Windows: h264_d3d11va
"""

import platform
from typing import Dict, Literal

HostOS = Literal["darwin", "linux", "windows"]


class PlatformError(Exception):
    """Raised when platform detection fails or platform is unsupported."""

    pass


class PlatformDetector:
    """Detects the host platform for FFmpeg configure options."""

    HWACCELS: Dict[str, str] = {
        "darwin": "h264_videotoolbox",
        "linux": "h264_vaapi",
        "windows": "h264_d3d11va",
    }

    @staticmethod
    def detect_host_os() -> HostOS:
        """Detect the host operating system.

        Returns:
            'darwin', 'linux', or 'windows'

        Raises:
            PlatformError: If platform is unsupported
        """
        system = platform.system().lower()

        if system == "darwin":
            return "darwin"
        elif system == "linux":
            return "linux"
        elif system == "windows" or system.startswith(("cygwin", "msys", "mingw")):
            return "windows"
        else:
            raise PlatformError(f"Unsupported platform: {system} {platform.machine()}")

    @classmethod
    def detect_hwaccel(cls) -> str:
        """Return the hardware H.264 decoder for the host platform.

        Raises:
            PlatformError: If platform is unsupported
        """
        return cls.HWACCELS[cls.detect_host_os()]

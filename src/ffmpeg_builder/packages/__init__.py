"""Package management for ai-ffmpeg-builder.

This module handles downloading source archives and detecting the host
platform the native libraries are built for.
"""

from .downloader import DownloadError, ExtractionError, PackageDownloader
from .platform_utils import PlatformDetector, PlatformError

__all__ = [
    "PackageDownloader",
    "DownloadError",
    "ExtractionError",
    "PlatformDetector",
    "PlatformError",
]

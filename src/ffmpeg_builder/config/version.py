"""FFmpeg version extraction from the package version string."""

from .components import BuildConfigError

VERSION_MARKER = "ffmpeg"


class VersionError(BuildConfigError):
    """Raised when the package version carries no FFmpeg version."""

    pass


def extract_ffmpeg_version(package_version: str) -> str:
    """Extract the FFmpeg release from a package version.

    The release is everything after the last ``ffmpeg`` marker, so
    ``"0.1.0+ffmpeg7.1"`` yields ``"7.1"``.

    Raises:
        VersionError: If the marker is missing or nothing follows it
    """
    if VERSION_MARKER not in package_version:
        raise VersionError(
            f"missing ffmpeg version from package version: {package_version!r}"
        )

    version = package_version.rsplit(VERSION_MARKER, 1)[1].strip()
    if not version:
        raise VersionError(
            f"empty ffmpeg version in package version: {package_version!r}"
        )

    return version

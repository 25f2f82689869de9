"""Configuration parsing modules for ai-ffmpeg-builder."""

from .build_config import BuildConfig
from .components import (
    DEFAULT_COMPONENTS,
    BuildConfigError,
    Component,
    ComponentSelectionError,
    available_components,
    resolve_selection,
)
from .version import VersionError, extract_ffmpeg_version

__all__ = [
    "BuildConfig",
    "BuildConfigError",
    "Component",
    "ComponentSelectionError",
    "DEFAULT_COMPONENTS",
    "available_components",
    "resolve_selection",
    "VersionError",
    "extract_ffmpeg_version",
]

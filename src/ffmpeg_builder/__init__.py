"""ai-ffmpeg-builder - builds static FFmpeg and codec libraries from source.

The version string carries the FFmpeg release the pipeline builds after
the ``ffmpeg`` marker.
"""

__version__ = "0.1.0+ffmpeg7.1"

"""
Setup file.
"""

import os
import re

from setuptools import find_packages, setup

URL = "https://github.com/ai-ffmpeg-builder/ai-ffmpeg-builder"
KEYWORDS = "ffmpeg x264 static libraries build pkg-config codec toolchain"
HERE = os.path.dirname(os.path.abspath(__file__))


def get_version() -> str:
    init_path = os.path.join(HERE, "src", "ffmpeg_builder", "__init__.py")
    with open(init_path, encoding="utf-8") as f:
        match = re.search(r'^__version__ = "([^"]+)"', f.read(), re.MULTILINE)
    if not match:
        raise RuntimeError("Unable to find __version__")
    return match.group(1)


if __name__ == "__main__":
    setup(
        name="ai-ffmpeg-builder",
        version=get_version(),
        description="Builds static FFmpeg and codec libraries from source for host programs",
        keywords=KEYWORDS,
        url=URL,
        python_requires=">=3.9",
        package_dir={"": "src"},
        packages=find_packages(where="src"),
        install_requires=[
            "requests>=2.28",
            "tqdm>=4.64",
        ],
        extras_require={
            "test": ["pytest>=7.0"],
        },
        entry_points={
            "console_scripts": [
                "ffbuild=ffmpeg_builder.cli:main",
            ],
        },
        include_package_data=True,
    )

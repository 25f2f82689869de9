"""
Pytest configuration for the ai-ffmpeg-builder test suite.

Integration tests clone and compile real sources; they are deselected
unless --full is passed.
"""

import pytest


def pytest_addoption(parser):
    """Add custom command-line options."""
    parser.addoption(
        "--full",
        action="store_true",
        default=False,
        help="Run full test suite including integration tests (slow, needs network)",
    )


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: real network build of x264 and FFmpeg"
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --full is given."""
    if config.getoption("--full"):
        return

    skip_integration = pytest.mark.skip(reason="needs --full to run")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)

"""Shared pytest configuration and fixtures for the prealloc test suite."""

import logging
import sys
from pathlib import Path

import pytest

# Ensure the project root is in the path for imports
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: writes real 1GB filler units"
    )


def pytest_addoption(parser):
    """Add custom command-line options."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="Run tests that write full-size filler units to disk",
    )


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is specified."""
    if config.getoption("--run-slow"):
        return

    skip_slow = pytest.mark.skip(reason="Need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


# =============================================================================
# Shared Fixtures
# =============================================================================

@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def clean_root_logging():
    """Remove the handlers configure_logging() installs once the test ends."""
    from prealloc.core import logging_config

    root = logging.getLogger()
    level = root.level

    yield root

    for handler in list(root.handlers):
        formatter = handler.formatter
        if formatter is not None and formatter._fmt == logging_config.LOG_FORMAT:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    logging_config._configured = False

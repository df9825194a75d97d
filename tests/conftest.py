"""
Root test configuration and fixtures.

Sets up environment variables BEFORE any app modules are imported,
to prevent import-time side effects (log file creation, config loading, etc.)
from writing to the working directory.
"""
import os
import sys
import tempfile
import logging

# ---------------------------------------------------------------------------
# Environment setup (runs at import time, before any test module loads)
# ---------------------------------------------------------------------------
# Create a temp dir for config/logs that persists for the test session
_TEST_CONFIG_DIR = tempfile.mkdtemp(prefix="xkcd_rank_test_config_")
os.environ["CONFIG_DIR"] = _TEST_CONFIG_DIR

# Ensure the project root is on sys.path so imports work
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

# ---------------------------------------------------------------------------
# Now we can safely import pytest (fixtures below)
# ---------------------------------------------------------------------------
import pytest


# ---------------------------------------------------------------------------
# Fixture: Temporary directories
# ---------------------------------------------------------------------------
@pytest.fixture
def cache_dir(tmp_path):
    """Empty cache directory (comics.json and img/ live here)."""
    d = tmp_path / "cache"
    d.mkdir()
    return str(d)


@pytest.fixture
def write_image(cache_dir):
    """
    Factory fixture that puts an image artifact on disk for a comic.

    Usage:
        write_image(comic)
    """
    def _write_image(comic, data=b"\x89PNG fake"):
        path = comic.img_path(cache_dir)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "wb") as f:
            f.write(data)
        return path

    return _write_image


# ---------------------------------------------------------------------------
# Fixture: Sample comic data
# ---------------------------------------------------------------------------
@pytest.fixture
def comic_dict():
    from tests.factories.comic_factories import make_comic_dict
    return make_comic_dict


# ---------------------------------------------------------------------------
# Fixture: Logging suppression (autouse)
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _suppress_app_logging():
    """Redirect app_logger to a NullHandler to avoid file and console output in tests."""
    try:
        from app_logging import app_logger

        # Store original handlers and replace with NullHandler
        original_handlers = app_logger.handlers[:]
        app_logger.handlers = [logging.NullHandler()]
        yield
        app_logger.handlers = original_handlers
    except ImportError:
        yield

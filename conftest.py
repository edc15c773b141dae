"""
Pytest configuration for the docmerge test suite.

Integration tests run the installed entry point and are skipped unless
--full is given. Every test gets its own cache directory.
"""

import pytest


def pytest_addoption(parser):
    """Add custom command-line options."""
    parser.addoption(
        "--full",
        action="store_true",
        default=False,
        help="Run full test suite including integration tests",
    )


def pytest_configure(config):
    """Drop the default 'not integration' marker filter under --full."""
    if config.getoption("--full") and config.getoption("-m", "") == "not integration":
        config.option.markexpr = ""


@pytest.fixture(autouse=True)
def isolated_cache(tmp_path_factory, monkeypatch):
    """Point DOCMERGE_CACHE_DIR at a per-test directory."""
    cache_dir = tmp_path_factory.mktemp("docmerge-cache")
    monkeypatch.setenv("DOCMERGE_CACHE_DIR", str(cache_dir))
    return cache_dir

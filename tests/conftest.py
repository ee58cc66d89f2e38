"""
Pytest configuration and shared fixtures for mustachio tests.
"""

import logging
import sys
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
import yaml

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mustachio.logging import reset_loggers  # noqa: E402
from mustachio.logging.logger import ROOT_LOGGER_NAME  # noqa: E402
from mustachio.template import TemplateEngine  # noqa: E402

# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def tests_dir(project_root: Path) -> Path:
    """Return the tests directory."""
    return project_root / "tests"


@pytest.fixture(scope="session")
def fixtures_dir(tests_dir: Path) -> Path:
    """Return the fixtures directory."""
    return tests_dir / "fixtures"


@pytest.fixture(scope="session")
def configs_dir(fixtures_dir: Path) -> Path:
    """Return the config fixtures directory."""
    return fixtures_dir / "configs"


@pytest.fixture(scope="session")
def conformance_dir(fixtures_dir: Path) -> Path:
    """Return the conformance fixtures directory."""
    return fixtures_dir / "conformance"


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def test_config_path(configs_dir: Path) -> Path:
    """Return path to test configuration file."""
    return configs_dir / "test-config.yaml"


@pytest.fixture(scope="session")
def test_config(test_config_path: Path) -> dict[str, Any]:
    """Load test configuration."""
    if test_config_path.exists():
        with test_config_path.open() as f:
            return yaml.safe_load(f)
    return {}


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def engine() -> TemplateEngine:
    """Engine with default configuration."""
    return TemplateEngine()


@pytest.fixture
def isolated_logging() -> Generator[logging.Logger, None, None]:
    """Reset mustachio loggers and handlers around a test."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    saved_handlers = list(root.handlers)
    saved_level = root.level
    saved_propagate = root.propagate
    reset_loggers()
    yield root
    root.handlers = saved_handlers
    root.setLevel(saved_level)
    root.propagate = saved_propagate
    reset_loggers()


# =============================================================================
# Markers Configuration
# =============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "property: Property-based tests")
    config.addinivalue_line("markers", "conformance: Mustache conformance tests")
    config.addinivalue_line("markers", "slow: Slow tests")

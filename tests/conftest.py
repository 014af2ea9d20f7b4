"""
Pytest configuration and shared fixtures for the Make It Run test suite.

This module provides common fixtures, synthetic process tables and
configuration files for all test modules.
"""

import logging
import shutil
import sys
import tempfile
from pathlib import Path
from typing import Dict, List

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from makeitrun.models import ProcessRecord  # noqa: E402


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test touching real processes")


# ============================================================================
# Core Fixtures
# ============================================================================

OUR_UID = 1000
TARGET_COMMAND = "/usr/bin/myjob --client"


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def make_records():
    """Build a synthetic process table.

    Returns a factory taking the number of matching processes to create and
    optional extra records; pids start at 100 in table order.
    """

    def _make(matching: int, command_line: str = TARGET_COMMAND, uid: int = OUR_UID,
              extra: List[ProcessRecord] = None) -> List[ProcessRecord]:
        records = [
            ProcessRecord(pid=100 + i, owning_user_id=uid, command_line=command_line)
            for i in range(matching)
        ]
        return records + list(extra or [])

    return _make


class RecordingActions:
    """Stands in for the OS primitives and records every call."""

    def __init__(self):
        self.terminated: List[int] = []
        self.spawned: List[str] = []
        self._next_pid = 5000

    def terminate(self, pid: int) -> bool:
        self.terminated.append(pid)
        return True

    def spawn(self, command_line: str) -> int:
        self.spawned.append(command_line)
        self._next_pid += 1
        return self._next_pid


@pytest.fixture
def actions():
    """Recording replacements for terminate/spawn."""
    return RecordingActions()


@pytest.fixture
def actions_factory():
    """For tests that need more than one independent recorder."""
    return RecordingActions


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def sample_config_data() -> Dict:
    """Sample configuration data for testing."""
    return {
        "defaults": {"count": 2, "kill": True},
        "safety": {"max_count": 8},
        "spawn": {"shell": True},
        "logging": {"level": "info"},
    }


@pytest.fixture
def config_file(temp_dir, sample_config_data):
    """Write sample_config_data to a temporary config.toml."""
    import toml

    path = temp_dir / "config.toml"
    with open(path, "w") as f:
        toml.dump(sample_config_data, f)
    return path


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, temp_dir):
    """Keep every test away from the user's real configuration file."""
    from makeitrun.config import clear_config_cache, set_config_path
    from makeitrun.config import manager

    monkeypatch.delenv(manager.CONFIG_ENV_VAR, raising=False)
    monkeypatch.setattr(manager, "DEFAULT_CONFIG_FILE_PATH", temp_dir / "absent" / "config.toml")
    set_config_path(None)

    yield

    clear_config_cache()
    set_config_path(None)
    logging.getLogger("makeitrun").setLevel(logging.NOTSET)

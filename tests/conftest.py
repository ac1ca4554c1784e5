"""
Pytest configuration and shared fixtures for the sysprobe test suite.

This module provides common fixtures, test utilities, and configuration
for all test modules in the sysprobe project.
"""

import shutil
import sys
import tempfile
from pathlib import Path
from typing import Any, Dict
from unittest.mock import Mock

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sysprobe.config import clear_config_cache, set_config_path  # noqa: E402
from sysprobe.inspector import reset_querier  # noqa: E402
from sysprobe.models.config import ProbeConfig  # noqa: E402


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Make every test start from default configuration and a fresh querier."""
    monkeypatch.delenv("SYSPROBE_CONFIG", raising=False)
    set_config_path(None)
    clear_config_cache()
    reset_querier()
    yield
    set_config_path(None)
    clear_config_cache()
    reset_querier()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def default_config():
    """A ProbeConfig with every default."""
    return ProbeConfig()


@pytest.fixture
def sample_config_data() -> Dict[str, Any]:
    """Sample ``[probe]`` table as it would be read from TOML."""
    return {
        "general": {
            "log_level": "DEBUG",
            "platform": "posix",
        },
        "shell": {
            "posix_shell": "/bin/sh",
            "windows_shell": "pwsh.exe",
        },
        "inspector": {
            "enable_enrichment": False,
            "proc_root": "/tmp/fakeproc",
            "lsof_command": "/usr/sbin/lsof",
        },
    }


@pytest.fixture
def config_file(temp_dir, sample_config_data):
    """Write ``sample_config_data`` to a temporary config.toml."""
    import toml

    config_path = temp_dir / "config.toml"
    with open(config_path, "w") as f:
        toml.dump({"probe": sample_config_data}, f)
    return config_path


# ============================================================================
# Test Utilities
# ============================================================================


def completed(returncode: int = 0, stdout: bytes = b"", stderr: bytes = b"") -> Mock:
    """Build a stand-in for ``subprocess.CompletedProcess[bytes]``."""
    return Mock(returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def make_completed():
    """Expose ``completed()`` to tests as a fixture."""
    return completed


PS_OUTPUT = (
    b"    PID %CPU %MEM S USER     COMMAND\n"
    b"   4242  0.3  1.2 S alice    python3\n"
)

PS_THREADS_OUTPUT = (
    b"    PID    SPID TTY          TIME CMD\n"
    b"   4242    4242 pts/0    00:00:01 python3\n"
    b"\n"
    b"   4242    4250 pts/0    00:00:00 python3\n"
)

TASKLIST_OUTPUT = (
    b'"Image Name","PID","Session Name","Session#","Mem Usage","Status","User Name","CPU Time","Window Title"\r\n'
    b'"python.exe","4242","Console","1","12,345 K","Running","HOST\\alice","0:00:01","N/A"\r\n'
)


@pytest.fixture
def ps_output() -> bytes:
    return PS_OUTPUT


@pytest.fixture
def ps_threads_output() -> bytes:
    return PS_THREADS_OUTPUT


@pytest.fixture
def tasklist_output() -> bytes:
    return TASKLIST_OUTPUT

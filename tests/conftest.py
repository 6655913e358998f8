"""Root test configuration: shared settings/host fixtures and runtime artifact cleanup"""

from pathlib import Path

import pytest

from mdsync.config import Settings
from mdsync.host.memory import MemoryHost


_PROJECT_ROOT = Path(__file__).parent.parent

_CLEANUP_FILES = ["mdsync.db", "test.db"]


@pytest.fixture(scope="session", autouse=True)
def cleanup_artifacts():
    """Remove DB files created during the test session."""
    yield
    for name in _CLEANUP_FILES:
        p = _PROJECT_ROOT / name
        if p.exists():
            p.unlink()


@pytest.fixture(name="settings")
def settings_fixture():
    """Default settings: Inter 16pt body, Roboto Mono code, gfm-like parser."""
    return Settings()


@pytest.fixture(name="host")
def host_fixture():
    """Empty in-memory document where every font is installed."""
    return MemoryHost()

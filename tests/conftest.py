"""
Shared fixtures for the MPS7 test suite.
"""
import pytest

from mps7.config import reset_settings
from mps7.logger import set_log_level


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate every test from ambient configuration."""
    for name in ("LOG_LEVEL", "TRACKED_USER_ID", "CURRENCY_SYMBOL"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()
    set_log_level("WARNING")


@pytest.fixture
def write_ledger(tmp_path):
    """Write raw bytes to a temporary data file and return its path."""
    def _write(data: bytes, name: str = "txnlog.dat"):
        path = tmp_path / name
        path.write_bytes(data)
        return path
    return _write

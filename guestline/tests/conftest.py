"""
Pytest configuration for GuestLine client tests
"""

import os

import pytest

# Import shared httpx fixtures
from .fixtures import *  # noqa: F401, F403


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep GUESTLINE_* variables of the host out of settings under test"""
    for name in list(os.environ):
        if name.upper().startswith("GUESTLINE_"):
            monkeypatch.delenv(name, raising=False)


# Markers for different test types
def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line(
        "markers", "integration: mark test as requiring the live GuestLine API"
    )

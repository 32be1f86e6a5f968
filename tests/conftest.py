"""
Pytest configuration and shared fixtures for httpc tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_responses = importlib.import_module("fixtures.responses")
_server = importlib.import_module("fixtures.server")

make_response = _responses.make_response
FakeClient = _responses.FakeClient
EchoServer = _server.EchoServer


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def ok_response():
    """Provide an unread 200 response with a small body."""
    return make_response(200, b"hello")


@pytest.fixture
def fake_client(ok_response):
    """Provide a FakeClient answering with ok_response."""
    return FakeClient(ok_response)


@pytest.fixture
def ctx(fake_client):
    """Provide a Context wired to fake_client."""
    from httpc.context import Context
    return Context.background().with_http(fake_client)


@pytest.fixture
def echo_server():
    """Provide a running local EchoServer."""
    with EchoServer() as server:
        yield server


@pytest.fixture
def http_client():
    """Provide a real HttpClient with a short timeout."""
    from httpc.http import HttpClient
    with HttpClient(timeout=5.0) as client:
        yield client


@pytest.fixture(autouse=True)
def _reset_default_client():
    """Keep the process default client from leaking between tests."""
    from httpc.http import close_default_client
    yield
    close_default_client()


@pytest.fixture(autouse=True)
def _clean_httpc_env(monkeypatch):
    """Ignore HTTPC_* variables from the developer's environment."""
    import os
    for key in list(os.environ):
        if key.startswith("HTTPC_"):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: tests that talk to a local HTTP server"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )

"""
Test fixtures package for httpc tests.

Organized into:
- responses.py: in-memory responses and a fake transport client
- server.py: threaded local HTTP server for integration tests

Usage:
    from fixtures import make_response, FakeClient

    def test_something():
        client = FakeClient(make_response(200, b"ok"))
"""

from .responses import (
    FakeClient,
    TrackingBody,
    make_response,
)

from .server import (
    EchoHandler,
    EchoServer,
)

__all__ = [
    # Responses
    "FakeClient",
    "TrackingBody",
    "make_response",
    # Server
    "EchoHandler",
    "EchoServer",
]

"""
Request IDs

Header name and generator for request identifiers.
"""

import uuid

HEADER_KEY = "X-Req-Id"


def random_id() -> str:
    """Return a fresh random request identifier (32 hex characters)."""
    return uuid.uuid4().hex

"""
HTTP Module

Transport client, request type and multi-valued header mapping.
"""

from .client import (
    HttpClient,
    HttpRequest,
    close_default_client,
    default_client,
    init_default_client,
    new_request,
    set_default_client,
)
from .header import Header, canonical_key

__all__ = [
    "HttpClient",
    "HttpRequest",
    "Header",
    "canonical_key",
    "new_request",
    "default_client",
    "init_default_client",
    "set_default_client",
    "close_default_client",
]

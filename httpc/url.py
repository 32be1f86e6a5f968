"""
URL Normalization

Turns a raw URL string into a canonical form: cleaned path, scheme defaulted
to "http". Parsing is lenient: a string that cannot be parsed is returned
unchanged.
"""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass
from urllib.parse import urlsplit, urlunsplit

DEFAULT_SCHEME = "http"

_LEADING_SLASHES = re.compile(r"^/{2,}")
_SCHEME_PREFIX = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")


def clean_path(path: str) -> str:
    """
    Return the shortest equivalent path.

    Repeated separators collapse, "." segments drop, ".." segments remove the
    preceding segment and never climb above the root, and a trailing slash is
    removed. An empty path stays empty.
    """
    if not path:
        return ""
    cleaned = posixpath.normpath(path)
    # normpath keeps a POSIX double leading slash
    return _LEADING_SLASHES.sub("/", cleaned)


def _needs_host_prefix(raw: str) -> bool:
    # "example.com/a" has no scheme; read the first segment as the host
    return not _SCHEME_PREFIX.match(raw) and not raw.startswith("/")


def normalize_url(raw: str) -> str:
    """
    Normalize a raw URL string.

    Examples:
        normalize_url("example.com//a/../b")     -> "http://example.com/b"
        normalize_url("https://example.com/a/")  -> "https://example.com/a"
    """
    if not raw or not raw.strip():
        return raw

    text = raw.strip()
    candidate = f"//{text}" if _needs_host_prefix(text) else text
    try:
        parts = urlsplit(candidate)
        # Accessing port validates it
        parts.port
    except ValueError:
        return raw

    scheme = parts.scheme or DEFAULT_SCHEME
    return urlunsplit((scheme, parts.netloc, clean_path(parts.path), parts.query, parts.fragment))


@dataclass(frozen=True)
class RawURL:
    """
    A raw URL string whose str() form is normalized.

    Usage:
        send(ctx, RawURL("example.com/api/../v1/items"))
    """
    raw: str

    def __str__(self) -> str:
        return normalize_url(self.raw)

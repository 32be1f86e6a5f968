"""
CLI URL Command

Print the normalized form of one or more raw URLs.

Usage:
    httpc url example.com//a/../b https://example.com/a/
"""

from __future__ import annotations

import json
from argparse import Namespace

from httpc.url import normalize_url


EXIT_SUCCESS = 0


def url_cmd(args: Namespace) -> int:
    """Execute the url command."""
    results = [(raw, normalize_url(raw)) for raw in args.urls]

    if args.json:
        print(json.dumps([{"raw": raw, "url": url} for raw, url in results], indent=2))
    else:
        for _, url in results:
            print(url)
    return EXIT_SUCCESS

"""
CLI command modules.
"""

from httpc_cli.commands import send, url

__all__ = ["send", "url"]

"""
httpc CLI

Command-line interface for httpc.

Usage:
    python -m httpc_cli send example.com/api/items
    python -m httpc_cli url example.com//a/../b
    python -m httpc_cli config --show
"""

__version__ = "0.1.0"

"""
Module execution entry point.

Allows running with: python -m httpc_cli
"""

import sys
from httpc_cli.main import main

if __name__ == "__main__":
    sys.exit(main())

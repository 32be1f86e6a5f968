"""
CLI Configuration

Resolves the HttpcConfig used by CLI commands: an explicit --config file, else
the first of ./httpc.yaml or ~/.config/httpc/config.yaml that exists, else
defaults. Environment variables (HTTPC_* prefix) always win.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from httpc.config import HttpcConfig


logger = logging.getLogger(__name__)


def default_search_paths() -> list[Path]:
    return [
        Path.cwd() / "httpc.yaml",
        Path.home() / ".config" / "httpc" / "config.yaml",
    ]


def load_config(path: Optional[Path | str] = None) -> HttpcConfig:
    """Load configuration from file (if any), then overlay environment variables."""
    if path is not None:
        return HttpcConfig.from_yaml(path).with_env_overrides()

    for candidate in default_search_paths():
        if candidate.exists():
            logger.debug(f"Loaded config from {candidate}")
            return HttpcConfig.from_yaml(candidate).with_env_overrides()

    return HttpcConfig.from_env()

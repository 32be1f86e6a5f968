"""
Runtime Configuration Module

Provides configuration loading and management for httpc.
"""

from .runtime import HttpcConfig, HttpConfig, LoggingConfig, get_default_config_template

__all__ = [
    "HttpcConfig",
    "HttpConfig",
    "LoggingConfig",
    "get_default_config_template",
]

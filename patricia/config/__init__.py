"""
Runtime Configuration Module

Provides configuration loading and management for tries and the CLI.
"""

from .runtime import (
    LoggingConfig,
    RuntimeConfig,
    TrieConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "LoggingConfig",
    "RuntimeConfig",
    "TrieConfig",
    "get_default_config",
    "set_default_config",
]

"""
Runtime Configuration

Central configuration for trie construction and logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from patricia.crypto.hashing import DEFAULT_HASH_ALGORITHM, HASH_FUNCTIONS

load_dotenv()


ROUTING_MODES = ("hashed", "raw")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class TrieConfig:
    """Configuration for new tries."""
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM
    routing: str = "hashed"

    def __post_init__(self):
        self.hash_algorithm = self.hash_algorithm.lower()
        self.routing = self.routing.lower()
        if self.hash_algorithm not in HASH_FUNCTIONS:
            raise ValueError(
                f"Unsupported hash algorithm {self.hash_algorithm!r}, "
                f"expected one of {sorted(HASH_FUNCTIONS)}"
            )
        if self.routing not in ROUTING_MODES:
            raise ValueError(
                f"Unknown routing mode {self.routing!r}, expected one of {list(ROUTING_MODES)}"
            )


@dataclass
class LoggingConfig:
    """Configuration for log output (applied by the CLI)."""
    level: str = "INFO"
    log_file: Optional[str] = None

    def __post_init__(self):
        self.level = self.level.upper()
        if self.level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {self.level!r}, expected one of {list(LOG_LEVELS)}")


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    trie: TrieConfig = field(default_factory=TrieConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - PATRICIA_HASH_ALGORITHM: sha256, sha3_256 or blake2b
        - PATRICIA_ROUTING: hashed or raw
        - PATRICIA_LOG_LEVEL: DEBUG, INFO, WARNING or ERROR
        - PATRICIA_LOG_FILE: also write logs to this file
        """
        overrides: dict[str, Any] = {}

        if os.getenv("PATRICIA_HASH_ALGORITHM"):
            overrides.setdefault("trie", {})["hash_algorithm"] = os.getenv("PATRICIA_HASH_ALGORITHM")
        if os.getenv("PATRICIA_ROUTING"):
            overrides.setdefault("trie", {})["routing"] = os.getenv("PATRICIA_ROUTING")

        if os.getenv("PATRICIA_LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv("PATRICIA_LOG_LEVEL")
        if os.getenv("PATRICIA_LOG_FILE"):
            overrides.setdefault("logging", {})["log_file"] = os.getenv("PATRICIA_LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        trie_data = data.get("trie", {})
        logging_data = data.get("logging", {})

        trie = TrieConfig(**trie_data) if trie_data else TrieConfig()
        log = LoggingConfig(**logging_data) if logging_data else LoggingConfig()

        return cls(
            trie=trie,
            logging=log,
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        if "trie" in overrides:
            values = {**self.to_dict()["trie"], **overrides["trie"]}
            new_config.trie = TrieConfig(**values)

        if "logging" in overrides:
            values = {**self.to_dict()["logging"], **overrides["logging"]}
            new_config.logging = LoggingConfig(**values)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "trie": {
                "hash_algorithm": self.trie.hash_algorithm,
                "routing": self.trie.routing,
            },
            "logging": {
                "level": self.logging.level,
                "log_file": self.logging.log_file,
            },
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config

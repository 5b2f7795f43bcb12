"""
CLI Configuration

Locates and loads the YAML configuration used by the CLI.
Environment variables (PATRICIA_* prefix) override file settings.
"""

from __future__ import annotations

from pathlib import Path

from patricia.config.runtime import RuntimeConfig


DEFAULT_CONFIG_NAME = "patricia.yaml"


def default_config_paths() -> list[Path]:
    """Locations searched when no --config is given, in order."""
    return [
        Path.cwd() / DEFAULT_CONFIG_NAME,
        Path.cwd() / f".{DEFAULT_CONFIG_NAME}",
        Path.home() / ".config" / "patricia" / "config.yaml",
    ]


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to a YAML config file

    Returns:
        Merged configuration

    Raises:
        FileNotFoundError: If config_path is given but does not exist
    """
    config = RuntimeConfig()

    if config_path is not None:
        config = RuntimeConfig.from_yaml(config_path)
    else:
        for default_path in default_config_paths():
            if default_path.exists():
                config = RuntimeConfig.from_yaml(default_path)
                break

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """\
# Patricia trie configuration
trie:
  # sha256, sha3_256 or blake2b
  hash_algorithm: sha256
  # hashed: route by H(key); raw: route by key bytes (fixed-length keys)
  routing: hashed

logging:
  level: INFO
  log_file: null
"""

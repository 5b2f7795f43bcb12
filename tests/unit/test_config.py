"""
Configuration Unit Tests
Tests for patricia/config/runtime.py and patricia_cli/config.py
"""
import pytest
import yaml

from patricia.config import (
    LoggingConfig,
    RuntimeConfig,
    TrieConfig,
    get_default_config,
    set_default_config,
)
from patricia_cli.config import get_default_config_template, load_config


class TestDefaults:
    """Tests for default values and validation."""

    def test_defaults(self):
        config = RuntimeConfig()

        assert config.trie.hash_algorithm == "sha256"
        assert config.trie.routing == "hashed"
        assert config.logging.level == "INFO"
        assert config.logging.log_file is None

    def test_values_normalized(self):
        assert TrieConfig(hash_algorithm="SHA3_256", routing="RAW").hash_algorithm == "sha3_256"
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_invalid_values_rejected(self):
        with pytest.raises(ValueError, match="hash algorithm"):
            TrieConfig(hash_algorithm="md5")
        with pytest.raises(ValueError, match="routing mode"):
            TrieConfig(routing="sorted")
        with pytest.raises(ValueError, match="log level"):
            LoggingConfig(level="LOUD")


class TestLoading:
    """Tests for from_dict / from_yaml / env overrides."""

    def test_from_dict_partial(self):
        config = RuntimeConfig.from_dict({"trie": {"routing": "raw"}})

        assert config.trie.routing == "raw"
        assert config.trie.hash_algorithm == "sha256"
        assert config.logging.level == "INFO"

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "patricia.yaml"
        path.write_text("trie:\n  hash_algorithm: blake2b\nlogging:\n  level: WARNING\n")

        config = RuntimeConfig.from_yaml(path)

        assert config.trie.hash_algorithm == "blake2b"
        assert config.logging.level == "WARNING"

    def test_from_empty_yaml(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert RuntimeConfig.from_yaml(path).to_dict() == RuntimeConfig().to_dict()

    def test_from_yaml_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuntimeConfig.from_yaml(tmp_path / "missing.yaml")

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("PATRICIA_ROUTING", "raw")
        monkeypatch.setenv("PATRICIA_LOG_LEVEL", "debug")

        config = RuntimeConfig.from_dict({"trie": {"hash_algorithm": "sha3_256"}}).with_env_overrides()

        assert config.trie.routing == "raw"
        assert config.trie.hash_algorithm == "sha3_256"
        assert config.logging.level == "DEBUG"

    def test_no_env_overrides_returns_self(self):
        config = RuntimeConfig()
        assert config.with_env_overrides() is config

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("PATRICIA_HASH_ALGORITHM", "blake2b")
        assert RuntimeConfig.from_env().trie.hash_algorithm == "blake2b"

    def test_to_dict(self):
        assert RuntimeConfig().to_dict() == {
            "trie": {"hash_algorithm": "sha256", "routing": "hashed"},
            "logging": {"level": "INFO", "log_file": None},
            "extra": {},
        }


class TestDefaultConfig:
    """Tests for the process-wide default configuration."""

    def test_cached_until_reset(self, monkeypatch):
        first = get_default_config()
        assert get_default_config() is first

        monkeypatch.setenv("PATRICIA_ROUTING", "raw")
        assert get_default_config().trie.routing == "hashed"

        set_default_config(None)
        assert get_default_config().trie.routing == "raw"


class TestCliConfig:
    """Tests for CLI config file discovery."""

    def test_template_is_valid(self):
        data = yaml.safe_load(get_default_config_template())
        config = RuntimeConfig.from_dict(data)

        assert config.to_dict() == RuntimeConfig().to_dict()

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("trie:\n  routing: raw\n")

        assert load_config(path).trie.routing == "raw"

    def test_discovers_file_in_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "patricia.yaml").write_text("trie:\n  hash_algorithm: sha3_256\n")

        assert load_config().trie.hash_algorithm == "sha3_256"

    def test_env_beats_file(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.yaml"
        path.write_text("trie:\n  routing: raw\n")
        monkeypatch.setenv("PATRICIA_ROUTING", "hashed")

        assert load_config(path).trie.routing == "hashed"

"""Tests for commodity_ledger.core.config."""

import json
import os

import pytest
import yaml

from commodity_ledger.core.config import Config
from commodity_ledger.core.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep a developer's own overrides out of the tests."""
    for key in list(os.environ):
        if key.startswith("COMMODITY_LEDGER_"):
            monkeypatch.delenv(key)


class TestConfig:
    def test_defaults(self):
        config = Config()
        assert config.get("paths.data_dir").endswith(".commodity-ledger")
        assert config.get("ledger.data_file") == "inventory_data.json"
        assert config.get("ledger.backup_corrupt") is True
        assert config.get("logging.level") == "WARNING"

    def test_custom_data_dir(self, tmp_dir):
        config = Config(data_dir=tmp_dir)
        assert config.get("paths.data_dir") == tmp_dir
        assert config.get("paths.log_dir") == os.path.join(tmp_dir, "logs")

    def test_yaml_config_file(self, tmp_dir):
        config_path = os.path.join(tmp_dir, "config.yaml")
        with open(config_path, "w") as f:
            yaml.dump({"ledger": {"data_file": "cargo.json"}, "logging": {"level": "INFO"}}, f)

        config = Config(config_file=config_path, data_dir=tmp_dir)
        assert config.get("ledger.data_file") == "cargo.json"
        assert config.get("logging.level") == "INFO"
        # untouched defaults survive the merge
        assert config.get("ledger.backup_corrupt") is True

    def test_json_config_file(self, tmp_dir):
        config_path = os.path.join(tmp_dir, "config.json")
        with open(config_path, "w") as f:
            json.dump({"ledger": {"backup_corrupt": False}}, f)

        config = Config(config_file=config_path, data_dir=tmp_dir)
        assert config.get_bool("ledger.backup_corrupt") is False

    def test_missing_config_file_uses_defaults(self, tmp_dir):
        config = Config(config_file=os.path.join(tmp_dir, "absent.yaml"), data_dir=tmp_dir)
        assert config.get("ledger.data_file") == "inventory_data.json"

    def test_invalid_yaml_raises(self, tmp_dir):
        config_path = os.path.join(tmp_dir, "config.yaml")
        with open(config_path, "w") as f:
            f.write("ledger: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Invalid config file"):
            Config(config_file=config_path, data_dir=tmp_dir)

    def test_non_mapping_file_raises(self, tmp_dir):
        config_path = os.path.join(tmp_dir, "config.yaml")
        with open(config_path, "w") as f:
            f.write("- just\n- a list\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            Config(config_file=config_path, data_dir=tmp_dir)

    def test_env_overrides_file(self, tmp_dir, monkeypatch):
        config_path = os.path.join(tmp_dir, "config.yaml")
        with open(config_path, "w") as f:
            yaml.dump({"ledger": {"data_file": "cargo.json"}}, f)

        monkeypatch.setenv("COMMODITY_LEDGER_LEDGER__DATA_FILE", "hauls.json")
        config = Config(config_file=config_path, data_dir=tmp_dir)
        assert config.get("ledger.data_file") == "hauls.json"

    def test_custom_env_prefix(self, monkeypatch, tmp_dir):
        monkeypatch.setenv("MYAPP_LOGGING__LEVEL", "DEBUG")
        config = Config(env_prefix="MYAPP_", data_dir=tmp_dir)
        assert config.get("logging.level") == "DEBUG"

    def test_get_missing_key(self, tmp_dir):
        config = Config(data_dir=tmp_dir)
        assert config.get("nonexistent.key") is None
        assert config.get("nonexistent.key", "fallback") == "fallback"

    def test_set(self, tmp_dir):
        config = Config(data_dir=tmp_dir)
        config.set("custom.nested.value", 42)
        assert config.get("custom.nested.value") == 42

    def test_extra_defaults(self, tmp_dir):
        config = Config(data_dir=tmp_dir, defaults={"ledger": {"data_file": "alt.json"}})
        assert config.get("ledger.data_file") == "alt.json"


class TestGetBool:
    @pytest.mark.parametrize("raw", ["1", "true", "Yes", "ON"])
    def test_truthy_env(self, monkeypatch, tmp_dir, raw):
        monkeypatch.setenv("COMMODITY_LEDGER_LEDGER__BACKUP_CORRUPT", raw)
        assert Config(data_dir=tmp_dir).get_bool("ledger.backup_corrupt") is True

    @pytest.mark.parametrize("raw", ["0", "false", "No", "off"])
    def test_falsy_env(self, monkeypatch, tmp_dir, raw):
        monkeypatch.setenv("COMMODITY_LEDGER_LEDGER__BACKUP_CORRUPT", raw)
        assert Config(data_dir=tmp_dir).get_bool("ledger.backup_corrupt") is False

    def test_default_when_missing(self, tmp_dir):
        assert Config(data_dir=tmp_dir).get_bool("nope.flag", True) is True

    def test_garbage_raises(self, monkeypatch, tmp_dir):
        monkeypatch.setenv("COMMODITY_LEDGER_LEDGER__BACKUP_CORRUPT", "maybe")
        with pytest.raises(ConfigurationError):
            Config(data_dir=tmp_dir).get_bool("ledger.backup_corrupt")


class TestPaths:
    def test_get_data_dir(self, tmp_dir):
        assert Config(data_dir=tmp_dir).get_data_dir() == tmp_dir

    def test_relative_ledger_path(self, tmp_dir):
        config = Config(data_dir=tmp_dir)
        assert config.get_ledger_path() == os.path.join(tmp_dir, "inventory_data.json")

    def test_absolute_ledger_path(self, tmp_dir):
        target = os.path.join(tmp_dir, "elsewhere", "cargo.json")
        config = Config(data_dir=tmp_dir)
        config.set("ledger.data_file", target)
        assert config.get_ledger_path() == target

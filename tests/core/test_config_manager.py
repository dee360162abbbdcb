import json

import pytest
from unittest.mock import MagicMock
from pydantic import ValidationError

from nodeio.core.config import ConfigManager


def test_config_defaults(tmp_path):
    config = ConfigManager(str(tmp_path / "nodeio.json"))
    assert config.data.undo.max_history == 100
    assert config.data.graph.enforce_type_compatibility is True
    assert config.get("general", "debug_mode") is True


def test_config_written_on_first_load(tmp_path):
    path = tmp_path / "nodeio.json"
    ConfigManager(str(path))
    assert json.loads(path.read_text())["undo"]["max_history"] == 100


def test_config_reactivity(tmp_path):
    config = ConfigManager(str(tmp_path / "nodeio.json"))
    observer = MagicMock()
    config.on_changed.connect(observer)

    config.update("general", "log_dir", "var/log")

    assert config.data.general.log_dir == "var/log"
    observer.assert_called_once_with("general", "log_dir", "var/log")


def test_config_persists_updates(tmp_path):
    path = str(tmp_path / "nodeio.json")
    ConfigManager(path).update("undo", "max_history", 12)
    assert ConfigManager(path).data.undo.max_history == 12


def test_config_loads_toml(tmp_path):
    path = tmp_path / "nodeio.toml"
    path.write_text("[graph]\nenforce_type_compatibility = false\n")
    config = ConfigManager(str(path))
    assert config.data.graph.enforce_type_compatibility is False


def test_config_invalid_file_falls_back(tmp_path, caplog):
    path = tmp_path / "nodeio.json"
    path.write_text("{not json")
    config = ConfigManager(str(path))
    assert config.data.undo.max_history == 100
    assert "Failed to load config" in caplog.text


def test_config_rejects_unknown_keys():
    config = ConfigManager(filepath=None)
    with pytest.raises(ValueError):
        config.update("missing", "key", 1)
    with pytest.raises(ValueError):
        config.update("undo", "missing", 1)


def test_config_validates_values():
    config = ConfigManager(filepath=None)
    with pytest.raises(ValidationError):
        config.update("undo", "max_history", 0)

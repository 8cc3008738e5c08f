"""Tests for configuration loading and the login gate."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from unievents import utils
from unievents.app import authenticate, open_store
from unievents.config import Config, load_config, resolve_config_paths


def write_config(path: Path, data) -> Path:
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    return path


class TestLoadConfig:
    def test_defaults(self):
        config = load_config(None)
        assert config.username == "Group1"
        assert config.events_path == Path("data") / "events.dat"
        assert config.settings_path == Path("data") / "settings.yaml"
        assert config.notify_minutes_before == 10
        assert config.venues == utils.VENUES

    def test_relative_data_directory_follows_config_file(self, tmp_path):
        config_path = write_config(
            tmp_path / "unievents.yaml", {"data_directory": "store", "venues": ["Hall"]}
        )
        config = load_config(config_path)
        assert config.data_directory == (tmp_path / "store").resolve()
        assert config.venues == ["Hall"]

    def test_absolute_data_directory_is_kept(self, tmp_path):
        config_path = write_config(
            tmp_path / "unievents.yaml", {"data_directory": str(tmp_path / "abs")}
        )
        assert load_config(config_path).data_directory == tmp_path / "abs"

    def test_empty_file_uses_defaults(self, tmp_path):
        config_path = tmp_path / "unievents.yaml"
        config_path.write_text("", encoding="utf-8")
        assert load_config(config_path).password == "admin123"

    def test_non_mapping_is_rejected(self, tmp_path):
        config_path = write_config(tmp_path / "unievents.yaml", ["not", "a", "mapping"])
        with pytest.raises(ValueError):
            load_config(config_path)

    def test_invalid_values_are_rejected(self, tmp_path):
        config_path = write_config(
            tmp_path / "unievents.yaml", {"notify_interval_seconds": 0}
        )
        with pytest.raises(ValidationError):
            load_config(config_path)

    def test_resolve_config_paths_without_data(self):
        assert resolve_config_paths({}, Path("x.yaml")) == {}


class TestAuthenticate:
    @pytest.mark.parametrize(
        "username,password,expected",
        [
            ("Group1", "admin123", True),
            ("  Group1 ", "admin123", True),
            ("group1", "admin123", False),
            ("Group1", "admin123 ", False),
            ("Group1", "", False),
            ("", "", False),
            (None, None, False),
        ],
    )
    def test_default_credentials(self, username, password, expected):
        assert authenticate(username, password, Config()) is expected

    def test_configured_credentials(self):
        config = Config(username="coordinator", password="s3cret")
        assert authenticate("coordinator", "s3cret", config)
        assert not authenticate("Group1", "admin123", config)


def test_open_store_bootstraps_data_directory(tmp_path):
    config = Config(data_directory=tmp_path / "data")
    store = open_store(config)
    assert config.events_path.exists()
    assert store.events == []
    assert store.next_event_id() == "EVT-0001"

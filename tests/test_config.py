import json
import logging

import pytest

from gridgraph import config
from gridgraph.config import DEFAULT_CONFIG, get_setting, get_settings, load_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in DEFAULT_CONFIG:
        monkeypatch.delenv(config.ENV_PREFIX + key.upper(), raising=False)


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "config.json"


def write_config(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")


def test_defaults_when_no_file(config_path):
    settings = get_settings(config_path)
    assert settings["grid_size"] == 48
    assert settings["save_interval_ticks"] == 60
    assert settings["monotonic_ids"] is True
    assert settings["storage_backend"] == "file"
    assert settings["storage_path"].endswith("state.json")


def test_file_values_are_used(config_path):
    write_config(config_path, {"save_interval_ticks": 30, "storage_path": "/tmp/x.json"})
    settings = get_settings(config_path)
    assert settings["save_interval_ticks"] == 30
    assert settings["storage_path"] == "/tmp/x.json"


def test_env_overrides_file(config_path, monkeypatch):
    write_config(config_path, {"grid_size": 64})
    monkeypatch.setenv("GRIDGRAPH_GRID_SIZE", "32")
    monkeypatch.setenv("GRIDGRAPH_MONOTONIC_IDS", "false")
    monkeypatch.setenv("GRIDGRAPH_MIN_RADIUS", "2.5")
    settings = get_settings(config_path)
    assert settings["grid_size"] == 32
    assert settings["monotonic_ids"] is False
    assert settings["min_radius"] == 2.5


def test_invalid_value_falls_back_to_default(config_path, caplog):
    write_config(config_path, {"frame_rate": "fast"})
    with caplog.at_level(logging.WARNING):
        assert get_settings(config_path)["frame_rate"] == 60
    assert "frame_rate" in caplog.text


def test_unknown_setting():
    with pytest.raises(KeyError):
        get_setting("colour", {})


def test_malformed_config_file_is_ignored(config_path):
    config_path.write_text("{oops", encoding="utf-8")
    assert load_config(config_path) == {}
    config_path.write_text(json.dumps([1, 2]), encoding="utf-8")
    assert load_config(config_path) == {}

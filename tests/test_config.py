"""Tests for configuration loading."""
import pytest
import yaml

from config import _deep_merge, load_config


def test_defaults():
    config = load_config()
    assert config["server"]["port"] == 8080
    assert config["definitions"]["backend"] == "sqlite"
    assert config["email"]["enabled"] is False
    assert config["actions"][0]["plugin"] == "email"


def test_overrides_are_merged(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({"server": {"port": 9000}, "definitions": {"backend": "memory"}}))
    config = load_config(str(path))
    assert config["server"]["port"] == 9000
    assert config["server"]["host"] == "127.0.0.1"
    assert config["definitions"]["backend"] == "memory"
    assert config["definitions"]["path"] == "data/definitions.db"


def test_missing_file_uses_defaults(tmp_path):
    config = load_config(str(tmp_path / "nope.yaml"))
    assert config["server"]["port"] == 8080


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("ALERTSVC_PORT", "9090")
    monkeypatch.setenv("ALERTSVC_DEFINITIONS_BACKEND", "memory")
    monkeypatch.setenv("ALERTSVC_LOG_LEVEL", "DEBUG")
    config = load_config()
    assert config["server"]["port"] == 9090
    assert config["definitions"]["backend"] == "memory"
    assert config["logging"]["level"] == "DEBUG"


def test_invalid_backend(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({"definitions": {"backend": "redis"}}))
    with pytest.raises(ValueError):
        load_config(str(path))


def test_invalid_port(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({"server": {"port": 70000}}))
    with pytest.raises(ValueError):
        load_config(str(path))


def test_actions_must_be_list(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({"actions": {"plugin": "email"}}))
    with pytest.raises(ValueError):
        load_config(str(path))


def test_deep_merge_does_not_mutate():
    base = {"a": {"b": 1, "c": 2}}
    merged = _deep_merge(base, {"a": {"b": 3}})
    assert merged == {"a": {"b": 3, "c": 2}}
    assert base == {"a": {"b": 1, "c": 2}}

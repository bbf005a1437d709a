"""Configuration management."""
import os
import yaml
from pathlib import Path

_DEFAULT_CONFIG = Path(__file__).parent / "default_config.yaml"

REQUIRED_SECTIONS = ["server", "logging", "definitions", "email", "actions", "channels"]
BACKENDS = {"memory", "sqlite"}


def load_config(path=None):
    """Load config from YAML, merging defaults with optional overrides."""
    with open(_DEFAULT_CONFIG) as f:
        config = yaml.safe_load(f)

    if path and Path(path).exists():
        with open(path) as f:
            overrides = yaml.safe_load(f) or {}
        config = _deep_merge(config, overrides)

    # Environment variable overrides
    env_map = {
        "ALERTSVC_DEFINITIONS_PATH": ("definitions", "path"),
        "ALERTSVC_DEFINITIONS_BACKEND": ("definitions", "backend"),
        "ALERTSVC_LOG_LEVEL": ("logging", "level"),
        "ALERTSVC_PORT": ("server", "port"),
    }
    for env_key, config_path in env_map.items():
        val = os.environ.get(env_key)
        if val:
            d = config
            for k in config_path[:-1]:
                d = d.setdefault(k, {})
            try:
                d[config_path[-1]] = int(val)
            except ValueError:
                d[config_path[-1]] = val

    _validate_config(config)
    return config


def _deep_merge(base, override):
    """Recursively merge override into base dict."""
    result = base.copy()
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _validate_config(config):
    """Basic config validation."""
    for section in REQUIRED_SECTIONS:
        if section not in config:
            raise ValueError(f"Missing required config section: {section}")

    backend = config["definitions"].get("backend")
    if backend not in BACKENDS:
        raise ValueError(f"definitions.backend must be one of {sorted(BACKENDS)}, got {backend!r}")

    port = config["server"].get("port")
    if not isinstance(port, int) or not 1 <= port <= 65535:
        raise ValueError(f"server.port must be between 1 and 65535, got {port!r}")

    if not isinstance(config["actions"], list):
        raise ValueError("actions must be a list")

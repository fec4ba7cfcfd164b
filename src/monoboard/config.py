"""Configuration loading for monoboard."""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV = "MONOBOARD_CONFIG"

DEFAULTS: dict[str, Any] = {
    "storage": "file",
    "data-dir": "~/.local/share/monoboard",
    "storage-key": "monoboard-data",
    "repo": ".",
    "branch": "monoboard",
    "seed-default-project": False,
    "log-level": "WARNING",
}


def _python_key(config_key: str) -> str:
    """Convert config-style key (hyphenated) to Python-style (underscored)."""
    return config_key.replace("-", "_")


def _config_key(python_key: str) -> str:
    """Convert Python-style key (underscored) to config-style (hyphenated)."""
    return python_key.replace("_", "-")


def _coerce_value(config_key: str, raw: Any) -> Any:
    """Type-coerce a value to match the type of its default."""
    default = DEFAULTS.get(config_key)
    if default is None or raw is None:
        return raw
    if isinstance(default, bool):
        if isinstance(raw, bool):
            return raw
        return str(raw).lower() in ("true", "yes", "1")
    return str(raw)


def default_config_path() -> Path:
    """Return the config file path from the environment or the XDG default."""
    env = os.environ.get(CONFIG_ENV)
    if env:
        return Path(env).expanduser()
    return Path("~/.config/monoboard/config.yaml").expanduser()


def _read_yaml(path: Path) -> dict[str, Any]:
    """Read a YAML mapping from path, or {} if missing or malformed."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as exc:
        logger.warning("could not read config %s: %s", path, exc)
        return {}

    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        logger.warning("ignoring malformed config %s: %s", path, exc)
        return {}

    if not isinstance(data, dict):
        logger.warning("ignoring config %s: expected a mapping", path)
        return {}
    return data


def load_config(path: str | Path | None = None, **overrides: Any) -> dict[str, Any]:
    """Load config into a {python_key: value} dict.

    Reads the YAML file at path (or the default location), converts key
    hyphens to underscores, coerces values to the default's type and
    fills in defaults for missing keys. Keyword overrides that are not
    None win over the file.
    """
    config_path = Path(path).expanduser() if path is not None else default_config_path()
    raw = _read_yaml(config_path)

    result: dict[str, Any] = {}
    for key, value in raw.items():
        config_key = _config_key(str(key))
        try:
            result[_python_key(config_key)] = _coerce_value(config_key, value)
        except (TypeError, ValueError):
            logger.warning("ignoring invalid config value %s=%r", config_key, value)

    for config_key, default in DEFAULTS.items():
        result.setdefault(_python_key(config_key), default)

    for key, value in overrides.items():
        if value is not None:
            result[key] = _coerce_value(_config_key(key), value)

    return result

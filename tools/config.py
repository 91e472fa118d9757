"""Config file loading and size resolution."""

from __future__ import annotations

import json
import os
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from core.errors import ConfigError
from schemas.config import FitConfig
from tools.units import parse_size

logger = structlog.get_logger(__name__)

CONFIG_ENV = "DISKFIT_CONFIG"


def default_config_path() -> Path:
    """Return the default config location, ``~/.diskfit/config.yaml``."""
    return Path.home() / ".diskfit" / "config.yaml"


def load_config(path: Path) -> FitConfig:
    """Load a config from YAML or JSON.

    Behavior:
    - ``.json`` files, or content that looks like JSON, are parsed as JSON.
    - Everything else is parsed with ``yaml.safe_load``.
    - The top level must be a mapping; an empty file gives the defaults.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"can't read config '{path}': {e.strerror}") from e

    looks_json = text.lstrip().startswith("{")
    try:
        if path.suffix.lower() == ".json" or looks_json:
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"can't parse config '{path}': {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"config '{path}' must be a mapping at top-level")
    try:
        config = FitConfig.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        loc = ".".join(str(p) for p in first["loc"])
        raise ConfigError(f"invalid config '{path}': {loc}: {first['msg']}") from e
    logger.debug("config_loaded", path=str(path))
    return config


def find_config(explicit: Path | None = None) -> FitConfig:
    """Load the explicit config, the ``DISKFIT_CONFIG`` file or the default.

    Missing default config is not an error; an explicitly named one is.
    """
    if explicit is not None:
        return load_config(explicit)
    env = os.environ.get(CONFIG_ENV)
    if env:
        return load_config(Path(env))
    default = default_config_path()
    if default.is_file():
        return load_config(default)
    return FitConfig()


def resolve_size(value: str, config: FitConfig) -> int:
    """Turn a preset name or a size string into bytes."""
    text = config.presets.get(value.strip().lower(), value)
    return parse_size(text)


__all__ = ["CONFIG_ENV", "default_config_path", "load_config", "find_config", "resolve_size"]

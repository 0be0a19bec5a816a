from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

import yaml

from datacascade.domain.models import CascadeConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "DATACASCADE_CONFIG"
DEFAULT_CONFIG_FILE = "datacascade.yaml"

_config: Optional[CascadeConfig] = None


def get_config_path() -> Path:
    """
    Determine the config file location.

    Priority:
    1. Environment variable DATACASCADE_CONFIG
    2. './datacascade.yaml' in the working directory
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return Path.cwd() / DEFAULT_CONFIG_FILE


def load_config(path: Optional[Union[str, Path]] = None) -> CascadeConfig:
    """
    Load the cascade configuration from a YAML file.

    A missing file yields the defaults. An unreadable or invalid file is an
    error: the cascade must not run against a half-understood configuration.
    """
    config_path = Path(path) if path is not None else get_config_path()
    if not config_path.is_file():
        logger.debug(f"No config file at {config_path}, using defaults")
        return CascadeConfig()

    raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    logger.info(f"Loaded cascade config from {config_path}")
    return CascadeConfig(**raw)


def get_config() -> CascadeConfig:
    """Return the process-wide configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    global _config
    _config = None

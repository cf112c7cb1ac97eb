"""
braidflow Configuration Loader
==============================

Load estimator defaults from YAML.

The packaged ``defaults.yaml`` is always read first; a user file, when given,
overrides it section by section, and keyword overrides win over both.

Usage:
    from braidflow.config import load_config

    config = load_config()                                  # packaged defaults
    config = load_config('my_run.yaml')                     # user file
    config = load_config(overrides={'entropy': {'tol': 0}}) # programmatic
"""

from functools import lru_cache
from pathlib import Path
from typing import Dict, Any, Optional, Union

import yaml
from pydantic import ValidationError

from braidflow.validation.errors import ConfigurationError
from .schema import BraidflowConfig


DEFAULTS_PATH = Path(__file__).parent / 'defaults.yaml'


def _read_yaml(path: Path) -> Dict[str, Any]:
    """Read a YAML mapping; an empty file is an empty mapping."""
    with open(path) as f:
        raw = yaml.safe_load(f)
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping, got {type(raw).__name__}")
    return raw


def _merge(base: Dict[str, Any], update: Dict[str, Any]) -> Dict[str, Any]:
    """Recursive dict merge: values in ``update`` win."""
    merged = dict(base)
    for key, value in update.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(
    path: Optional[Union[str, Path]] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> BraidflowConfig:
    """
    Load and validate configuration.

    Args:
        path: Optional YAML file layered over the packaged defaults
        overrides: Optional nested dict layered over everything else

    Returns:
        Validated BraidflowConfig

    Raises:
        ConfigurationError: If a file is missing or a value is invalid
    """
    raw = _read_yaml(DEFAULTS_PATH)

    if path is not None:
        path = Path(path)
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {path}")
        raw = _merge(raw, _read_yaml(path))

    if overrides:
        raw = _merge(raw, overrides)

    try:
        return BraidflowConfig(**raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration:\n{e}") from e


@lru_cache(maxsize=1)
def default_config() -> BraidflowConfig:
    """Packaged defaults, read once and shared (models are frozen)."""
    return load_config()

# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Configuration loading helpers.

Provides the shared Pydantic ``ConfigDict`` and a layered YAML loader used by
the typed configuration models.

Loading precedence (highest to lowest):
1. Programmatic / CLI overrides
2. Environment variables (``TALSIM_SOS_*``)
3. Config file (YAML)
4. Defaults declared on the Pydantic models
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Type, TypeVar

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from talsim_sos.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Standard ConfigDict for all config models
FROZEN_CONFIG = ConfigDict(extra='allow', populate_by_name=True, frozen=True)

ENV_PREFIX = 'TALSIM_SOS_'

M = TypeVar('M', bound=BaseModel)


def normalize_key(key: str) -> str:
    """Upper-case a flat configuration key (``sos_url`` -> ``SOS_URL``)."""
    return str(key).strip().upper()


def load_env_overrides(environ: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """Collect ``TALSIM_SOS_<KEY>`` environment variables as ``<KEY>`` overrides."""
    environ = os.environ if environ is None else environ
    overrides = {}
    for name, value in environ.items():
        if name.startswith(ENV_PREFIX) and len(name) > len(ENV_PREFIX):
            overrides[normalize_key(name[len(ENV_PREFIX):])] = value
    return overrides


def filter_none_values(d: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively drop None values so Pydantic falls back to field defaults."""
    result = {}
    for key, value in d.items():
        if value is None:
            continue
        if isinstance(value, dict):
            value = filter_none_values(value)
        result[key] = value
    return result


def format_validation_error(error: ValidationError) -> str:
    """Render a Pydantic ValidationError as one line per offending key."""
    lines = ["Invalid configuration:"]
    for item in error.errors():
        location = ".".join(str(part) for part in item.get('loc', ())) or '<root>'
        lines.append(f"  {location}: {item.get('msg')}")
    return "\n".join(lines)


def read_yaml_mapping(path: Path) -> Dict[str, Any]:
    """Read a YAML file whose root must be a mapping (empty file -> ``{}``)."""
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(f"Configuration file not found: {path}")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Top-level YAML in {path} must be a mapping")
    return data


def from_file_factory(
    cls: Type[M],
    path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
    *,
    use_env: bool = True,
) -> M:
    """
    Build a configuration model from YAML, environment and overrides.

    Args:
        cls: Pydantic model class with upper-case field aliases
        path: Optional YAML config file; defaults only when None
        overrides: Highest-priority values, typically from CLI flags
        use_env: Whether to apply ``TALSIM_SOS_*`` environment variables

    Returns:
        Validated model instance

    Raises:
        ConfigurationError: If the file cannot be read or validation fails
    """
    config_dict: Dict[str, Any] = {}

    if path is not None:
        file_config = read_yaml_mapping(path)
        config_dict.update({normalize_key(k): v for k, v in file_config.items()})
        logger.debug("Loaded %d configuration keys from %s", len(file_config), path)

    if use_env:
        config_dict.update(load_env_overrides())

    if overrides:
        config_dict.update({normalize_key(k): v for k, v in overrides.items() if v is not None})

    config_dict = filter_none_values(config_dict)

    try:
        return cls(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(format_validation_error(e)) from e

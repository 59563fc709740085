"""
Configuration loader for the insertion finder.
"""

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..core.errors import ConfigError

DEFAULT_CONFIG_PATH = Path(__file__).parent / "default_config.yaml"

DEFAULT_OVERHANG_LIMIT = 50
DEFAULT_SIZE_LIMIT = 50000
DEFAULT_VALID_BASES = "acgtACGT"


@dataclass(frozen=True)
class InsertionPolicy:
    """Limits applied when classifying a pair of overlaps as an insertion."""
    overhang_limit: int = DEFAULT_OVERHANG_LIMIT
    size_limit: int = DEFAULT_SIZE_LIMIT
    valid_bases: str = DEFAULT_VALID_BASES

    def __post_init__(self):
        for name in ('overhang_limit', 'size_limit'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigError(f"{name} {value!r} must be a positive integer")
        if not self.valid_bases:
            raise ConfigError("valid_bases must name at least one character")


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML file. Fails if file does not exist."""
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
    else:
        config_path = Path(config_path)

    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)

    if not isinstance(config, dict):
        raise ConfigError(f"Invalid YAML format in {config_path}")

    config['_source'] = str(config_path.resolve())
    return config


def apply_overrides(config: Dict[str, Any], overrides: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Return a copy of ``config`` with nested ``overrides`` merged in."""
    merged = copy.deepcopy(config)
    for key, value in (overrides or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = apply_overrides(merged[key], value)
        else:
            merged[key] = value
    return merged


def policy_from_config(config: Dict[str, Any]) -> InsertionPolicy:
    """Build the insertion policy from the ``insertion`` and ``contigs`` sections."""
    insertion = config.get('insertion') or {}
    contigs = config.get('contigs') or {}
    return InsertionPolicy(
        overhang_limit=insertion.get('overhang_limit', DEFAULT_OVERHANG_LIMIT),
        size_limit=insertion.get('size_limit', DEFAULT_SIZE_LIMIT),
        valid_bases=str(contigs.get('valid_bases', DEFAULT_VALID_BASES)),
    )


class ConfigLoader:
    """Loads and manages configuration from YAML files."""

    def __init__(self, config_path: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None):
        self.config_path = config_path
        self.config = apply_overrides(load_config(config_path), overrides)

    def get_insertion_params(self) -> Dict[str, Any]:
        return self.config.get('insertion', {})

    def get_contig_params(self) -> Dict[str, Any]:
        return self.config.get('contigs', {})

    def get_io_params(self) -> Dict[str, Any]:
        return self.config.get('io', {})

    def get_debug_params(self) -> Dict[str, Any]:
        return self.config.get('debug', {})

    def get_policy(self) -> InsertionPolicy:
        return policy_from_config(self.config)


__all__ = [
    'DEFAULT_CONFIG_PATH',
    'DEFAULT_OVERHANG_LIMIT',
    'DEFAULT_SIZE_LIMIT',
    'DEFAULT_VALID_BASES',
    'InsertionPolicy',
    'load_config',
    'apply_overrides',
    'policy_from_config',
    'ConfigLoader',
]

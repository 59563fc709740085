from .config_loader import (
    InsertionPolicy,
    ConfigLoader,
    load_config,
    apply_overrides,
    policy_from_config,
)

__all__ = [
    'InsertionPolicy',
    'ConfigLoader',
    'load_config',
    'apply_overrides',
    'policy_from_config',
]

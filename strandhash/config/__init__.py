"""
StrandHash v0.1.0

Configuration management for StrandHash.

Author: StrandHash Development Team
License: MIT - See LICENSE
"""

from .parser import ConfigParser, ConfigValidationError
from .schema import (
    DEFAULT_CONFIG,
    HashingConfig,
    load_config,
    resolve_config,
    save_config_template,
    validate_config,
)

__all__ = [
    "ConfigParser",
    "ConfigValidationError",
    "DEFAULT_CONFIG",
    "HashingConfig",
    "load_config",
    "resolve_config",
    "save_config_template",
    "validate_config",
]

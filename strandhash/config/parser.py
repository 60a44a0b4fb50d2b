#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandHash v0.1.0

Configuration parser — YAML config loading, merging, and overrides.

Author: StrandHash Development Team
License: MIT - See LICENSE
"""

import os
import re
import yaml
from pathlib import Path
from typing import Any, Dict, Optional, Union


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


class ConfigParser:
    """
    Parse StrandHash configuration files.

    Features:
    - Load YAML configuration files
    - Merge with default values
    - Environment variable substitution (${VAR} and ${VAR:-default})
    - CLI parameter overrides in dotted notation (e.g., 'hashing.kmer_size')
    """

    def __init__(self, config_file: Optional[Union[str, Path]] = None,
                 defaults: Optional[Dict[str, Any]] = None):
        """
        Initialize configuration parser.

        Args:
            config_file: Path to YAML configuration file (optional)
            defaults: Default configuration to merge the file over
        """
        self.config_file = Path(config_file) if config_file else None
        self._config: Dict[str, Any] = dict(defaults or {})

        # Load user configuration if provided
        if self.config_file:
            self._load_user_config()

    def _load_user_config(self):
        """Load and merge user configuration file."""
        if not self.config_file.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_file}"
            )

        try:
            with open(self.config_file, 'r') as f:
                user_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(
                f"Invalid YAML in config file {self.config_file}: {e}"
            )

        if user_config is None:
            return
        if not isinstance(user_config, dict):
            raise ConfigValidationError(
                f"Config file {self.config_file} must contain a mapping"
            )

        # User values override defaults
        self._config = self._deep_merge(self._config, user_config)
        self._config = self._substitute_env_vars(self._config)

    def _deep_merge(self, base: Dict, override: Dict) -> Dict:
        """
        Deep merge two dictionaries.

        Args:
            base: Base dictionary (defaults)
            override: Override dictionary (user values)

        Returns:
            Merged dictionary
        """
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def _substitute_env_vars(self, config: Any) -> Any:
        """
        Recursively substitute environment variables in configuration.

        Supports:
        - ${VAR}: Replace with environment variable VAR
        - ${VAR:-default}: Replace with VAR, or 'default' if not set

        A string that is exactly one reference is re-parsed as YAML so that
        `${K:-31}` yields an int and `${FLAG:-false}` a bool.
        """
        if isinstance(config, dict):
            return {k: self._substitute_env_vars(v) for k, v in config.items()}

        elif isinstance(config, list):
            return [self._substitute_env_vars(item) for item in config]

        elif isinstance(config, str):
            pattern = r'\$\{([^}:]+)(?::-(.*?))?\}'

            def replace_var(match):
                return os.environ.get(match.group(1), match.group(2) or '')

            substituted = re.sub(pattern, replace_var, config)
            if substituted != config and re.fullmatch(pattern, config):
                return yaml.safe_load(substituted) if substituted else None
            return substituted

        else:
            return config

    def merge_cli_overrides(self, overrides: Dict[str, Any]):
        """
        Merge command-line overrides into configuration.

        Args:
            overrides: Dictionary of override values. Keys use dotted
                      notation (e.g., 'hashing.kmer_size'); None values are skipped.
        """
        for key, value in overrides.items():
            if value is None:
                continue

            keys = key.split('.')

            target = self._config
            for k in keys[:-1]:
                if not isinstance(target.get(k), dict):
                    target[k] = {}
                target = target[k]

            target[keys[-1]] = value

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary."""
        return self._config.copy()

    def __repr__(self) -> str:
        return f"ConfigParser(config_file={self.config_file})"

# StrandHash v0.1.0
# Any usage is subject to this software's license.

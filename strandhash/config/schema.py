"""
StrandHash v0.1.0

Configuration schema for StrandHash.

Defines all available configuration parameters with defaults and validation.

Author: StrandHash Development Team
License: MIT - See LICENSE
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional, List
from pathlib import Path
import copy

import yaml

from .parser import ConfigParser, ConfigValidationError


MIN_KMER_SIZE = 1
MAX_KMER_SIZE = 255  # k is stored as an unsigned 8-bit value
DEFAULT_KMER_SIZE = 31


# Default configuration values
DEFAULT_CONFIG = {
    # ========================================================================
    # Hashing
    # ========================================================================
    'hashing': {
        'multi_kmer_hashing': False,  # Hash k-mers individually, then combine
        'use_xxhash': False,  # XXH3-64 on canonical k-mers instead of ntHash
        'kmer_size': DEFAULT_KMER_SIZE,
    },

    # ========================================================================
    # Circular sequences
    # ========================================================================
    'circular': {
        'rotation': False,  # Rotate to the lexicographically minimal form
        'kmers': False,  # Add the k-mers wrapping around the sequence end
    },
}


def get_default_config() -> Dict[str, Any]:
    """Return a deep copy of the default configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


def load_config(config_file: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration, merging a YAML file over the defaults.

    Args:
        config_file: Path to YAML configuration file (optional)

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config_file does not exist
        ConfigValidationError: If config_file is not valid YAML
    """
    parser = ConfigParser(config_file, defaults=get_default_config())
    return parser.to_dict()


def resolve_config(config_file: Optional[Path] = None,
                   overrides: Optional[Dict[str, Any]] = None) -> 'HashingConfig':
    """
    Build the run configuration from defaults, a YAML file and CLI overrides.

    Args:
        config_file: Path to YAML configuration file (optional)
        overrides: Dotted-key overrides, e.g. {'hashing.kmer_size': 21}

    Raises:
        ConfigValidationError: If the merged configuration is invalid
    """
    parser = ConfigParser(config_file, defaults=get_default_config())
    if overrides:
        parser.merge_cli_overrides(overrides)
    return HashingConfig.from_dict(parser.to_dict())


def save_config_template(output_path: Path):
    """
    Write the default configuration as a YAML template.

    Args:
        output_path: Destination file
    """
    output_path = Path(output_path)
    header = (
        "# StrandHash configuration\n"
        "# Command-line flags override the values below.\n\n"
    )
    with open(output_path, 'w') as f:
        f.write(header)
        yaml.safe_dump(get_default_config(), f, default_flow_style=False, sort_keys=False)


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration values and option combinations.

    Args:
        config: Configuration dictionary

    Returns:
        List of error messages (empty if valid)
    """
    errors = []

    hashing = config.get('hashing', {}) or {}
    circular = config.get('circular', {}) or {}

    if not isinstance(hashing, dict) or not isinstance(circular, dict):
        return ["'hashing' and 'circular' must be mappings"]

    for section_name, section, keys in (
        ('hashing', hashing, ('multi_kmer_hashing', 'use_xxhash')),
        ('circular', circular, ('rotation', 'kmers')),
    ):
        for key in keys:
            if not _is_bool(section.get(key, False)):
                errors.append(f"{section_name}.{key} must be true or false")

    k = hashing.get('kmer_size', DEFAULT_KMER_SIZE)
    if isinstance(k, bool) or not isinstance(k, int):
        errors.append("hashing.kmer_size must be an integer")
    elif not MIN_KMER_SIZE <= k <= MAX_KMER_SIZE:
        errors.append(
            f"hashing.kmer_size must be between {MIN_KMER_SIZE} and {MAX_KMER_SIZE}, got {k}"
        )

    multi = hashing.get('multi_kmer_hashing') is True

    if hashing.get('use_xxhash') is True and not multi:
        errors.append("hashing.use_xxhash requires hashing.multi_kmer_hashing")
    if circular.get('kmers') is True and not multi:
        errors.append("circular.kmers requires hashing.multi_kmer_hashing")
    if circular.get('rotation') is True and circular.get('kmers') is True:
        errors.append("circular.rotation and circular.kmers are mutually exclusive")

    return errors


@dataclass(frozen=True)
class HashingConfig:
    """
    Immutable hashing configuration for one run.

    Attributes:
        k: K-mer size (1-255)
        multi_kmer_hashing: Hash each k-mer and combine the hashes
        use_xxhash: Use XXH3-64 on canonical k-mers (requires multi_kmer_hashing)
        circular_rotation: Canonicalize circular sequences by minimal rotation
        circular_kmers: Add wrap-around k-mers (requires multi_kmer_hashing)
    """
    k: int = DEFAULT_KMER_SIZE
    multi_kmer_hashing: bool = False
    use_xxhash: bool = False
    circular_rotation: bool = False
    circular_kmers: bool = False

    def __post_init__(self):
        errors = validate_config(self.to_config())
        if errors:
            raise ConfigValidationError("; ".join(errors))

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'HashingConfig':
        """
        Build from a nested configuration dictionary.

        Raises:
            ConfigValidationError: If any value or combination is invalid
        """
        errors = validate_config(config)
        if errors:
            raise ConfigValidationError("; ".join(errors))

        hashing = config.get('hashing', {}) or {}
        circular = config.get('circular', {}) or {}
        return cls(
            k=hashing.get('kmer_size', DEFAULT_KMER_SIZE),
            multi_kmer_hashing=hashing.get('multi_kmer_hashing', False),
            use_xxhash=hashing.get('use_xxhash', False),
            circular_rotation=circular.get('rotation', False),
            circular_kmers=circular.get('kmers', False),
        )

    def to_config(self) -> Dict[str, Any]:
        """Convert back to the nested configuration layout."""
        return {
            'hashing': {
                'multi_kmer_hashing': self.multi_kmer_hashing,
                'use_xxhash': self.use_xxhash,
                'kmer_size': self.k,
            },
            'circular': {
                'rotation': self.circular_rotation,
                'kmers': self.circular_kmers,
            },
        }
"""
Utilities module for StrandHash.

This module provides core utilities for the hashing pipeline:
- Byte-level sequence operations (normalization, reverse complement,
  strand and rotation canonicalization)
- Per-record pipeline driver
"""

from .sequence_utils import (
    normalize_sequence,
    reverse_complement,
    canonical_strand,
    least_rotation,
    canonical_rotation,
    extend_circular,
)

__all__ = [
    # Sequence operations
    "normalize_sequence",
    "reverse_complement",
    "canonical_strand",
    "least_rotation",
    "canonical_rotation",
    "extend_circular",
]

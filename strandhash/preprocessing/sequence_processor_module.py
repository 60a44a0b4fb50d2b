#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandHash v0.1.0

Sequence processor — normalizes a record's sequence and puts it into the
canonical form expected by the hasher.

Exactly one canonicalization applies per run:
- rotation:  minimal rotation of both strands, smaller strand wins
- k-mer extension: wrap-around k-mers appended, strand handled per k-mer
- linear: smaller of the sequence and its reverse complement

Author: StrandHash Development Team
License: MIT - See LICENSE
"""

from enum import Enum
from typing import Union

from ..utils.sequence_utils import (
    normalize_sequence,
    canonical_strand,
    canonical_rotation,
    extend_circular,
)


class CircularMode(Enum):
    """How circular topology is handled before hashing."""
    LINEAR = "linear"
    ROTATION = "rotation"
    KMERS = "kmers"


class SequenceProcessor:
    """
    Normalize and canonicalize sequences for hashing.

    Attributes:
        circular_rotation: Rotate to the lexicographically minimal form
        circular_kmers: Append the k-mers wrapping around the sequence end
        k: K-mer size (used by circular_kmers)
    """

    def __init__(self, circular_rotation: bool = False, circular_kmers: bool = False,
                 k: int = 31):
        if circular_rotation and circular_kmers:
            raise ValueError("circular_rotation and circular_kmers are mutually exclusive")

        self.circular_rotation = circular_rotation
        self.circular_kmers = circular_kmers
        self.k = k

    @property
    def mode(self) -> CircularMode:
        if self.circular_rotation:
            return CircularMode.ROTATION
        if self.circular_kmers:
            return CircularMode.KMERS
        return CircularMode.LINEAR

    def canonicalize(self, seq: bytes) -> bytes:
        """Apply the configured canonicalization to a normalized sequence."""
        mode = self.mode
        if mode is CircularMode.ROTATION:
            return canonical_rotation(seq)
        if mode is CircularMode.KMERS:
            return extend_circular(seq, self.k)
        return canonical_strand(seq)

    def process_sequence(self, seq: Union[str, bytes]) -> bytes:
        """
        Normalize a raw sequence and canonicalize it.

        Args:
            seq: Raw record sequence

        Returns:
            Canonical sequence bytes ready for hashing
        """
        return self.canonicalize(normalize_sequence(seq))

    def __repr__(self) -> str:
        return f"SequenceProcessor(mode={self.mode.value}, k={self.k})"

# StrandHash v0.1.0
# Any usage is subject to this software's license.

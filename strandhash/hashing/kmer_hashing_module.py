#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandHash v0.1.0

Sequence hashing — whole-sequence XXH3-128 digests and the multi-k-mer
hash-and-combine digest.

In multi-k-mer mode every k-mer window is hashed to 64 bits (ntHash or
XXH3-64 over the canonical k-mer), the hashes are sorted, and the sorted
values are streamed into an XXH3-128 state. Sorting makes the digest depend
only on the multiset of k-mer hashes, not on where extraction started.

Author: StrandHash Development Team
License: MIT - See LICENSE
"""

import logging
import struct
from enum import Enum
from typing import Iterable, Iterator, List

import xxhash

from ..errors import HashConstructionError
from ..utils.sequence_utils import reverse_complement
from .nthash import NtHashIterator

logger = logging.getLogger(__name__)

_ACGT = frozenset(b"ACGT")
_U64 = struct.Struct("<Q")


# ============================================================================
# K-mer hash strategies
# ============================================================================

class KmerHashStrategy(Enum):
    """Closed set of per-k-mer hash functions."""
    NTHASH = "nthash"
    XXHASH = "xxhash"

    @classmethod
    def from_flag(cls, use_xxhash: bool) -> 'KmerHashStrategy':
        return cls.XXHASH if use_xxhash else cls.NTHASH


def _canonical_kmer_xxhashes(seq: bytes, k: int) -> Iterator[int]:
    """
    XXH3-64 of the canonical form of every k-mer.

    The canonical k-mer is the smaller of the forward window and the matching
    window of the reverse complement. Windows containing a symbol outside
    ACGT are skipped.
    """
    rc = reverse_complement(seq)
    n = len(seq)
    valid_run = 0

    for end in range(n):
        if seq[end] in _ACGT:
            valid_run += 1
        else:
            valid_run = 0
        if valid_run < k:
            continue

        start = end - k + 1
        forward = seq[start:end + 1]
        reverse = rc[n - end - 1:n - start]
        yield xxhash.xxh3_64_intdigest(forward if forward <= reverse else reverse)


def kmer_hashes(seq: bytes, k: int, use_xxhash: bool = False) -> List[int]:
    """
    Hash every k-mer of a sequence and return the hashes sorted ascending.

    Args:
        seq: Normalized sequence bytes
        k: K-mer size
        use_xxhash: Hash canonical k-mers with XXH3-64 instead of ntHash

    Returns:
        Sorted list of 64-bit k-mer hashes

    Raises:
        HashConstructionError: If k is not in 1..len(seq)
    """
    strategy = KmerHashStrategy.from_flag(use_xxhash)

    if strategy is KmerHashStrategy.NTHASH:
        hashes = NtHashIterator(seq, k)
    else:
        if k < 1 or k > len(seq):
            raise HashConstructionError(
                f"k-mer size {k} is out of range for a sequence of length {len(seq)}"
            )
        hashes = _canonical_kmer_xxhashes(seq, k)

    return sorted(hashes)


# ============================================================================
# Digest combination
# ============================================================================

def combine_kmer_hashes(hashes: Iterable[int]) -> int:
    """
    Fold 64-bit k-mer hashes into one 128-bit digest.

    Values are sorted first and fed as little-endian u64 words into a
    streaming XXH3-128 state, so any permutation gives the same digest.
    """
    state = xxhash.xxh3_128()
    for value in sorted(hashes):
        state.update(_U64.pack(value))
    return state.intdigest()


def hash_sequence(seq: bytes) -> int:
    """128-bit XXH3 digest of a whole (already canonical) sequence."""
    return xxhash.xxh3_128_intdigest(seq)


def format_digest(digest: int) -> str:
    """Render a 128-bit digest as 32 lowercase big-endian hex characters."""
    return digest.to_bytes(16, "big").hex()


class SequenceHasher:
    """
    Compute the digest of a canonicalized sequence.

    Attributes:
        multi_kmer_hashing: Hash k-mers individually and combine the hashes
        use_xxhash: Use XXH3-64 on canonical k-mers instead of ntHash
        k: K-mer size for multi-k-mer hashing
    """

    def __init__(self, multi_kmer_hashing: bool = False, use_xxhash: bool = False,
                 k: int = 31):
        self.multi_kmer_hashing = multi_kmer_hashing
        self.use_xxhash = use_xxhash
        self.k = k

    @property
    def strategy(self) -> KmerHashStrategy:
        return KmerHashStrategy.from_flag(self.use_xxhash)

    def compute_hash(self, seq: bytes) -> int:
        """
        Digest a canonicalized sequence.

        Raises:
            HashConstructionError: If multi-k-mer hashing rejects seq / k
        """
        if not self.multi_kmer_hashing:
            return hash_sequence(seq)

        hashes = kmer_hashes(seq, self.k, self.use_xxhash)
        logger.debug(f"Hashed {len(hashes)} k-mers (k={self.k}, {self.strategy.value})")
        return combine_kmer_hashes(hashes)

    def __repr__(self) -> str:
        return (f"SequenceHasher(multi_kmer_hashing={self.multi_kmer_hashing}, "
                f"use_xxhash={self.use_xxhash}, k={self.k})")

# StrandHash v0.1.0
# Any usage is subject to this software's license.

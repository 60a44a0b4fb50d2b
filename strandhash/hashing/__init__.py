"""
Hashing module for StrandHash.

Turns canonicalized sequences into 128-bit digests:
- Whole-sequence XXH3-128 digests
- Per-k-mer hashing (ntHash or canonical-k-mer XXH3-64) with order-free
  combination into a 128-bit digest
"""

from .nthash import NtHashIterator
from .kmer_hashing_module import (
    KmerHashStrategy,
    SequenceHasher,
    kmer_hashes,
    combine_kmer_hashes,
    hash_sequence,
    format_digest,
)

__all__ = [
    "NtHashIterator",
    "KmerHashStrategy",
    "SequenceHasher",
    "kmer_hashes",
    "combine_kmer_hashes",
    "hash_sequence",
    "format_digest",
]

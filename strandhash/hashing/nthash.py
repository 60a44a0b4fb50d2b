#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandHash v0.1.0

ntHash rolling k-mer hash.

Computes one 64-bit hash per k-mer window in a single pass. The forward and
reverse-strand hashes are both rolled and each window yields the smaller of
the two, so a k-mer and its reverse complement hash identically. Symbols
outside ACGT contribute zero.

Author: StrandHash Development Team
License: MIT - See LICENSE
"""

from typing import Iterator

from ..errors import HashConstructionError

MASK64 = 0xFFFFFFFFFFFFFFFF

SEED_A = 0x3C8BFBB395C60474
SEED_C = 0x3193C18562A02B4C
SEED_G = 0x20323ED082572324
SEED_T = 0x295549F54BE24456


def _build_table(pairs) -> tuple:
    table = [0] * 256
    for symbol, seed in pairs:
        table[ord(symbol)] = seed
        table[ord(symbol.lower())] = seed
    return tuple(table)


H_LOOKUP = _build_table([('A', SEED_A), ('C', SEED_C), ('G', SEED_G), ('T', SEED_T)])
RC_LOOKUP = _build_table([('A', SEED_T), ('C', SEED_G), ('G', SEED_C), ('T', SEED_A)])


def rol(value: int, shift: int) -> int:
    """Rotate a 64-bit value left."""
    shift %= 64
    return ((value << shift) | (value >> (64 - shift))) & MASK64


def ror(value: int, shift: int) -> int:
    """Rotate a 64-bit value right."""
    shift %= 64
    return ((value >> shift) | (value << (64 - shift))) & MASK64


class NtHashIterator:
    """
    Iterate over the canonical ntHash values of every k-mer in a sequence.

    Yields len(seq) - k + 1 values in window order.

    Raises:
        HashConstructionError: If k is not in 1..len(seq)
    """

    def __init__(self, seq: bytes, k: int):
        if k < 1:
            raise HashConstructionError(f"k-mer size must be at least 1, got {k}")
        if k > len(seq):
            raise HashConstructionError(
                f"k-mer size {k} is out of range for a sequence of length {len(seq)}"
            )

        self.seq = seq
        self.k = k

    def __iter__(self) -> Iterator[int]:
        seq = self.seq
        k = self.k

        fh = 0
        rh = 0
        for i in range(k):
            fh ^= rol(H_LOOKUP[seq[i]], k - i - 1)
            rh ^= rol(RC_LOOKUP[seq[i]], i)
        yield min(fh, rh)

        for i in range(len(seq) - k):
            out_base = seq[i]
            in_base = seq[i + k]
            fh = rol(fh, 1) ^ rol(H_LOOKUP[out_base], k) ^ H_LOOKUP[in_base]
            rh = (
                ror(rh, 1)
                ^ ror(RC_LOOKUP[out_base], 1)
                ^ rol(RC_LOOKUP[in_base], k - 1)
            )
            yield min(fh, rh)

    def __len__(self) -> int:
        return len(self.seq) - self.k + 1

# StrandHash v0.1.0
# Any usage is subject to this software's license.

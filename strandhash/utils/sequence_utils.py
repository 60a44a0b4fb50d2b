"""
StrandHash v0.1.0

Sequence utility functions for StrandHash.

Provides the byte-level sequence operations behind canonicalization:
normalization, reverse complement, strand choice, minimal circular
rotation and wrap-around extension for circular k-mers.
"""

from typing import Union


# Watson-Crick pairs plus IUPAC ambiguity codes, both cases
_COMPLEMENT_TABLE = bytes.maketrans(
    b"ACGTUNRYKMSWBDHVacgtunrykmswbdhv",
    b"TGCAANYRMKSWVHDBtgcaanyrmkswvhdb",
)

# Gaps ('-', '.', '~') are kept as '-'
_NORMALIZE_TABLE = bytes(
    b if b in b"ACGTN-" else ord("N")
    for b in (
        bytes(range(256)).upper()
        .replace(b"U", b"T").replace(b".", b"-").replace(b"~", b"-")
    )
)

_WHITESPACE = b" \t\n\r\x0b\x0c"


def normalize_sequence(sequence: Union[str, bytes]) -> bytes:
    """
    Normalize a raw sequence for hashing.

    Removes whitespace and line breaks, uppercases, converts U to T, writes
    the gap symbols . and ~ as - and replaces every other symbol outside
    ACGTN- with N.

    Args:
        sequence: Raw sequence (str or bytes)

    Returns:
        Normalized sequence bytes

    Example:
        >>> normalize_sequence("acgu\\nRa")
        b'ACGTNA'
    """
    if isinstance(sequence, str):
        sequence = sequence.encode("ascii", errors="replace")

    return sequence.translate(_NORMALIZE_TABLE, _WHITESPACE)


def reverse_complement(sequence: bytes) -> bytes:
    """
    Generate reverse complement of a DNA sequence.

    Args:
        sequence: DNA sequence bytes

    Returns:
        Reverse complement sequence

    Example:
        >>> reverse_complement(b"ATCG")
        b'CGAT'
    """
    return sequence.translate(_COMPLEMENT_TABLE)[::-1]


def canonical_strand(sequence: bytes) -> bytes:
    """
    Return the lexicographically smaller of a sequence and its reverse complement.

    Ties return the sequence itself.

    Example:
        >>> canonical_strand(b"TTGCA")
        b'TGCAA'
    """
    rc = reverse_complement(sequence)
    return sequence if sequence <= rc else rc


def least_rotation(sequence: bytes) -> bytes:
    """
    Compute the lexicographically minimal rotation of a circular sequence.

    Scans the doubled sequence once, keeping the best rotation start found
    so far. When a mismatch shows the current candidate is not minimal,
    the start jumps past the whole refuted prefix. O(n) time, O(n) space.

    Args:
        sequence: Non-empty sequence bytes

    Returns:
        Minimal rotation (same length as the input)

    Raises:
        ValueError: If the sequence is empty

    Example:
        >>> least_rotation(b"GTACGTAC")
        b'ACGTACGT'
    """
    n = len(sequence)
    if n == 0:
        raise ValueError("cannot rotate an empty sequence")

    doubled = sequence + sequence
    start = 0
    best = 0

    while start < n:
        best = start
        current = start
        compare = start + 1
        while compare < 2 * n and doubled[current] <= doubled[compare]:
            if doubled[current] < doubled[compare]:
                current = start
            else:
                current += 1
            compare += 1
        # Skip every start inside the refuted prefix
        start += compare - current

    return doubled[best:best + n]


def canonical_rotation(sequence: bytes) -> bytes:
    """
    Canonical form of a circular sequence, independent of strand and cut point.

    The minimal rotations of the sequence and of its reverse complement are
    computed separately and the smaller of the two is returned.
    """
    forward = least_rotation(sequence)
    reverse = least_rotation(reverse_complement(sequence))
    return forward if forward <= reverse else reverse


def extend_circular(sequence: bytes, k: int) -> bytes:
    """
    Append the first k-1 symbols so a k-mer window covers the circular junction.

    Args:
        sequence: Sequence bytes, at least k-1 long
        k: K-mer size

    Returns:
        Extended sequence of length len(sequence) + k - 1

    Example:
        >>> extend_circular(b"ACGTAC", 4)
        b'ACGTACACG'
    """
    if k < 1:
        raise ValueError(f"k must be positive, got {k}")
    if len(sequence) < k - 1:
        raise ValueError(
            f"sequence of length {len(sequence)} is too short to extend by {k - 1}"
        )

    return sequence + sequence[:k - 1]


__all__ = [
    'normalize_sequence',
    'reverse_complement',
    'canonical_strand',
    'least_rotation',
    'canonical_rotation',
    'extend_circular',
]

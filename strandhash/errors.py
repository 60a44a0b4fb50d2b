#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandHash v0.1.0

Exception types raised while reading, canonicalizing and hashing records.

Every error is terminal for the run; the CLI is the only place that turns
them into a diagnostic and an exit status.

Author: StrandHash Development Team
License: MIT - See LICENSE
"""

from typing import Optional


class StrandHashError(Exception):
    """Base class for all StrandHash errors."""
    pass


class InvalidHeaderError(StrandHashError):
    """Raised when a record header does not yield an accession."""

    def __init__(self, header: bytes = b""):
        self.header = header
        super().__init__("a record with an invalid header was found")


class SequenceTooShortError(StrandHashError):
    """Raised when a record cannot hold a single k-mer (or is empty)."""

    def __init__(self, accession: str, num_bases: int, k: Optional[int] = None):
        self.accession = accession
        self.num_bases = num_bases
        self.k = k
        if k is None:
            message = f"record {accession} is empty"
        else:
            message = f"record {accession} is shorter than the k-mer size"
        super().__init__(message)


class HashConstructionError(StrandHashError):
    """Raised when k-mer hashing rejects a sequence / k combination."""

    def __init__(self, message: str, accession: Optional[str] = None):
        self.accession = accession
        if accession is not None:
            message = f"failed to compute the hash for record {accession}: {message}"
        super().__init__(message)

    def with_accession(self, accession: str) -> 'HashConstructionError':
        """Return a copy of this error naming the offending record."""
        return HashConstructionError(self.args[0], accession=accession)


class InputFormatError(StrandHashError):
    """Raised when an input file is empty or not FASTA/FASTQ."""
    pass

# StrandHash v0.1.0
# Any usage is subject to this software's license.

#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Core I/O module for StrandHash.

Consolidated module containing:
- FastxRecord data structure
- FASTA / FASTQ record reading (plain or gzipped, file or stdin)
- Accession extraction from record headers
- Digest line output
"""

# =============================================================================
# SECTION 1: IMPORTS AND DEPENDENCIES
# =============================================================================

import gzip
import io
import logging
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterable, Iterator, Optional, TextIO, Union

from Bio.SeqIO.FastaIO import SimpleFastaParser
from Bio.SeqIO.QualityIO import FastqGeneralIterator

from ..errors import InvalidHeaderError, InputFormatError
from ..hashing.kmer_hashing_module import format_digest

logger = logging.getLogger(__name__)

STDIN = '-'

# Headers are treated as raw bytes; latin-1 maps every byte to one code point
HEADER_ENCODING = 'latin-1'

ACCESSION_DELIMITERS = b" \t\n\x0c\r"

_PEEK_SIZE = 4096


# =============================================================================
# SECTION 2: RECORD DATA STRUCTURE
# =============================================================================

def get_record_accession(header: bytes) -> Optional[bytes]:
    """
    Extract the accession from a record header.

    The accession is everything up to the first space, tab, newline,
    form feed or carriage return.

    Args:
        header: Raw header bytes (without the leading '>' or '@')

    Returns:
        Accession bytes, or None if the header starts with whitespace or is empty

    Example:
        >>> get_record_accession(b"NC_001422.1 Phage phiX174")
        b'NC_001422.1'
    """
    end = len(header)
    for i, byte in enumerate(header):
        if byte in ACCESSION_DELIMITERS:
            end = i
            break

    accession = header[:end]
    return accession or None


@dataclass
class FastxRecord:
    """
    Sequence record as read from a FASTA or FASTQ file.

    Attributes:
        header: Raw header bytes (without the leading marker)
        sequence: Raw sequence bytes, not yet normalized
    """
    header: bytes
    sequence: bytes

    @property
    def num_bases(self) -> int:
        """Number of bases in the sequence."""
        return len(self.sequence)

    def accession(self) -> str:
        """
        Record accession as text.

        Raises:
            InvalidHeaderError: If the header yields an empty accession
        """
        accession = get_record_accession(self.header)
        if accession is None:
            raise InvalidHeaderError(self.header)
        return accession.decode('utf-8', errors='replace')

    def __len__(self) -> int:
        return self.num_bases


# =============================================================================
# SECTION 3: RECORD READING
# =============================================================================

@contextmanager
def _open_binary(source: Union[str, Path]) -> Iterator[BinaryIO]:
    """Open an input source as a peekable binary stream."""
    if str(source) == STDIN:
        stream = sys.stdin.buffer
        if not hasattr(stream, 'peek'):
            stream = io.BufferedReader(stream)
        yield stream
        return

    filepath = Path(source)
    if not filepath.exists():
        raise FileNotFoundError(f"Input file not found: {filepath}")
    if filepath.stat().st_size == 0:
        raise InputFormatError("the input file is empty")

    # Determine file opener
    if filepath.suffix in ('.gz', '.gzip'):
        handle = gzip.open(filepath, 'rb')
    else:
        handle = open(filepath, 'rb')

    try:
        yield handle
    finally:
        handle.close()


def _parse_text(handle: TextIO, marker: bytes) -> Iterator[FastxRecord]:
    if marker == b'>':
        for title, sequence in SimpleFastaParser(handle):
            yield FastxRecord(
                header=title.encode(HEADER_ENCODING),
                sequence=sequence.encode(HEADER_ENCODING),
            )
    else:
        for title, sequence, _quality in FastqGeneralIterator(handle):
            yield FastxRecord(
                header=title.encode(HEADER_ENCODING),
                sequence=sequence.encode(HEADER_ENCODING),
            )


def read_records(source: Union[str, Path] = STDIN) -> Iterator[FastxRecord]:
    """
    Read FASTA or FASTQ records one at a time.

    The format is detected from the first non-blank character ('>' for
    FASTA, '@' for FASTQ). Files ending in .gz/.gzip are decompressed.

    Args:
        source: File path, or '-' for stdin

    Yields:
        FastxRecord objects in file order

    Raises:
        FileNotFoundError: If the input file does not exist
        InputFormatError: If the file is empty, not FASTA/FASTQ, holds a
            malformed record or is not valid gzip
    """
    with _open_binary(source) as stream:
        try:
            head = stream.peek(_PEEK_SIZE).lstrip()[:1]
        except (gzip.BadGzipFile, EOFError) as e:
            raise InputFormatError(f"{source}: {e}") from e
        if not head:
            logger.warning(f"No records found in {source}")
            return
        if head not in (b'>', b'@'):
            raise InputFormatError(
                f"{source} is not FASTA or FASTQ (starts with {head!r})"
            )

        logger.debug(f"Reading {'FASTA' if head == b'>' else 'FASTQ'} records from {source}")
        text = io.TextIOWrapper(stream, encoding=HEADER_ENCODING)
        try:
            yield from _parse_text(text, head)
        except (ValueError, gzip.BadGzipFile, EOFError) as e:
            # Biopython reports malformed records as ValueError
            raise InputFormatError(f"{source}: {e}") from e
        finally:
            # Leave the underlying stream to its owner
            text.detach()


# =============================================================================
# SECTION 4: DIGEST OUTPUT
# =============================================================================

def format_record_line(accession: str, digest: int) -> str:
    """
    Format one output line.

    Example:
        >>> format_record_line("seq1", 0xff)
        'seq1\\t000000000000000000000000000000ff\\n'
    """
    return f"{accession}\t{format_digest(digest)}\n"


def write_digests(results: Iterable, handle: TextIO) -> int:
    """
    Write one line per digest result and flush after each.

    Args:
        results: Iterable of objects with `accession` and `digest` attributes
        handle: Text output handle

    Returns:
        Number of lines written
    """
    count = 0
    for result in results:
        handle.write(format_record_line(result.accession, result.digest))
        handle.flush()
        count += 1
    return count

"""
Record I/O module for StrandHash.

Handles reading FASTA/FASTQ records and writing digest lines.

CONSOLIDATED MODULES:
- io_core_module.py: FastxRecord, record reading, accession extraction, output
"""

from .io_core_module import (
    STDIN,
    FastxRecord,
    get_record_accession,
    read_records,
    format_record_line,
    write_digests,
)

__all__ = [
    "STDIN",
    # Core data structures
    "FastxRecord",
    "get_record_accession",
    # Input
    "read_records",
    # Output
    "format_record_line",
    "write_digests",
]

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandHash v0.1.0

Pytest configuration and shared fixtures.

Author: StrandHash Development Team
License: MIT - See LICENSE
"""

import gzip
import shutil
import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def temp_output_dir():
    """Create temporary output directory for tests."""
    temp_dir = tempfile.mkdtemp(prefix="strandhash_test_")
    yield Path(temp_dir)
    # Cleanup after test
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def plasmid_sequence():
    """A 60 bp circular sequence with no rotational symmetry."""
    return b"ATGCGTACCTTAGGCATCGATCGGATCCAAGCTTGCATGCCTGCAGGTCGACTCTAGAGG"


@pytest.fixture
def simple_fasta():
    """Generate simple FASTA records for testing."""
    return (
        ">seq1 first record\n"
        "ACGTACGTAC\n"
        "GTACGTACGT\n"
        ">seq2\tsecond record\n"
        "ttgcaTTGCA\n"
    )


@pytest.fixture
def simple_fastq():
    """Generate simple FASTQ reads for testing."""
    return """@read1 sample=A
ATCGATCGATCG
+
IIIIIIIIIIII
@read2
GCTAGCTAGCTA
+
IIIIIIIIIIII
"""


@pytest.fixture
def fasta_file(temp_output_dir, simple_fasta):
    """Write simple_fasta to disk."""
    path = temp_output_dir / "records.fasta"
    path.write_text(simple_fasta)
    return path


@pytest.fixture
def gzipped_fasta_file(temp_output_dir, simple_fasta):
    """Write simple_fasta to a gzipped file."""
    path = temp_output_dir / "records.fasta.gz"
    with gzip.open(path, "wt") as f:
        f.write(simple_fasta)
    return path

# StrandHash v0.1.0
# Any usage is subject to this software's license.

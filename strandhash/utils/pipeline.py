#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandHash v0.1.0

Per-record hashing pipeline.

Each record goes through accession extraction, the too-short check,
normalization, canonicalization and hashing before the next record is
read. The first error stops the run; nothing here exits the process.

Author: StrandHash Development Team
License: MIT - See LICENSE
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from ..config.schema import HashingConfig
from ..errors import HashConstructionError, SequenceTooShortError
from ..hashing.kmer_hashing_module import SequenceHasher, format_digest
from ..io.io_core_module import FastxRecord
from ..preprocessing.sequence_processor_module import SequenceProcessor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DigestResult:
    """Digest of one record."""
    accession: str
    digest: int
    num_bases: int

    @property
    def hexdigest(self) -> str:
        return format_digest(self.digest)


class SequencePipeline:
    """
    Hash records one at a time according to a HashingConfig.

    Attributes:
        config: Run configuration
        processor: Normalization and canonicalization step
        hasher: Digest computation step
        records_processed: Number of records hashed so far
    """

    def __init__(self, config: Optional[HashingConfig] = None):
        self.config = config or HashingConfig()
        self.processor = SequenceProcessor(
            circular_rotation=self.config.circular_rotation,
            circular_kmers=self.config.circular_kmers,
            k=self.config.k,
        )
        self.hasher = SequenceHasher(
            multi_kmer_hashing=self.config.multi_kmer_hashing,
            use_xxhash=self.config.use_xxhash,
            k=self.config.k,
        )
        self.records_processed = 0

    def _check_length(self, accession: str, record: FastxRecord):
        if self.config.multi_kmer_hashing and record.num_bases < self.config.k:
            raise SequenceTooShortError(accession, record.num_bases, self.config.k)
        if self.config.circular_rotation and record.num_bases == 0:
            raise SequenceTooShortError(accession, record.num_bases)

    def process_record(self, record: FastxRecord) -> DigestResult:
        """
        Compute the digest of one record.

        Raises:
            InvalidHeaderError: If the header has no accession
            SequenceTooShortError: If the record is shorter than k
            HashConstructionError: If k-mer hashing fails; names the record
        """
        accession = record.accession()
        self._check_length(accession, record)

        canonical = self.processor.process_sequence(record.sequence)
        try:
            digest = self.hasher.compute_hash(canonical)
        except HashConstructionError as e:
            raise e.with_accession(accession) from e

        self.records_processed += 1
        logger.debug(f"{accession}: {record.num_bases} bp -> {format_digest(digest)}")
        return DigestResult(accession=accession, digest=digest, num_bases=record.num_bases)

    def run(self, records: Iterable[FastxRecord]) -> Iterator[DigestResult]:
        """Lazily hash records in input order."""
        for record in records:
            yield self.process_record(record)

# StrandHash v0.1.0
# Any usage is subject to this software's license.

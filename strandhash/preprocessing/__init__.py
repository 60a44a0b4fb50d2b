"""
Preprocessing module for StrandHash.

Normalization and strand / circular canonicalization of record sequences.
"""

from .sequence_processor_module import CircularMode, SequenceProcessor

__all__ = ["CircularMode", "SequenceProcessor"]

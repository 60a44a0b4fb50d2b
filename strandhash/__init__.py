#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandHash v0.1.0

Package initialization and version metadata.

StrandHash computes 128-bit digests of nucleotide sequences that do not
change with the strand that was read or, for circular molecules, with the
position the sequence was linearized at.

Author: StrandHash Development Team
License: MIT - See LICENSE
"""

from .version import __version__
from .errors import (
    StrandHashError,
    InvalidHeaderError,
    SequenceTooShortError,
    HashConstructionError,
    InputFormatError,
)

__all__ = [
    "__version__",
    "StrandHashError",
    "InvalidHeaderError",
    "SequenceTooShortError",
    "HashConstructionError",
    "InputFormatError",
]

# StrandHash v0.1.0
# Any usage is subject to this software's license.

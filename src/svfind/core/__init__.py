"""
Core data structures for the insertion finder.
"""

from .dynamic_array import DynamicArray
from .overlap import (
    OVERLAP_DTYPE,
    OVERLAP_ORDER,
    Overlap,
    overlaps_to_array,
    array_to_overlaps,
)
from .orientation import mirror, mirror_overlaps, double_self_alignments
from .errors import *

__all__ = [
    'DynamicArray',

    # Overlap model
    'OVERLAP_DTYPE',
    'OVERLAP_ORDER',
    'Overlap',
    'overlaps_to_array',
    'array_to_overlaps',

    # Orientation
    'mirror',
    'mirror_overlaps',
    'double_self_alignments',

    # Errors
    'SvfindError',
    'ConfigError',
    'AlignmentFormatError',
    'MissingSecondSequenceSetError',
    'ContigStreamExhaustedError',
    'MonotonicAccessError',
    'ContigBoundsError',
    'SequenceFormatError',
]

"""
Structural-variant insertion finder for pairwise genome alignments.
"""

# Version info - keep at top
__version__ = "0.1.0"
__description__ = "Find structural-variant insertions from pairwise alignment overlaps"

from .config.config_loader import InsertionPolicy
from .core.dynamic_array import DynamicArray
from .core.overlap import Overlap, OVERLAP_DTYPE, overlaps_to_array
from .core.orientation import mirror, mirror_overlaps, double_self_alignments
from .algorithms.insertion_finder import (
    Insertion,
    INSERTION_DTYPE,
    find_insertions,
    insertion_report,
)
from .io.contig_reader import ContigReader

__all__ = [
    'InsertionPolicy',
    'DynamicArray',
    'Overlap',
    'OVERLAP_DTYPE',
    'overlaps_to_array',
    'mirror',
    'mirror_overlaps',
    'double_self_alignments',
    'Insertion',
    'INSERTION_DTYPE',
    'find_insertions',
    'insertion_report',
    'ContigReader',

    # Version info
    '__version__',
    '__description__',
]

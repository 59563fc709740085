"""
Orientation utilities: swap the roles of the a and b sequences of overlaps.

None of these functions modify their input; a mirrored copy is returned.
"""

import logging
from dataclasses import replace

import numpy as np

from .overlap import Overlap

logger = logging.getLogger(__name__)


def mirror(overlap: Overlap) -> Overlap:
    """Return the overlap seen from b: reads and intervals swapped, orientation kept."""
    return replace(
        overlap,
        a_read=overlap.b_read, b_read=overlap.a_read,
        a_begin=overlap.b_begin, b_begin=overlap.a_begin,
        a_end=overlap.b_end, b_end=overlap.a_end,
    )


def mirror_overlaps(overlaps: np.ndarray) -> np.ndarray:
    """Mirror every record of an OVERLAP_DTYPE array into a new array."""
    mirrored = overlaps.copy()
    for x, y in (('a_read', 'b_read'), ('a_begin', 'b_begin'), ('a_end', 'b_end')):
        mirrored[x] = overlaps[y]
        mirrored[y] = overlaps[x]
    return mirrored


def double_self_alignments(overlaps: np.ndarray) -> np.ndarray:
    """
    Add the reverse-direction record of every overlap.

    A self-alignment store holds each match in one direction only; the
    insertion sweep needs both. Returns an array of twice the length,
    originals first.
    """
    doubled = np.concatenate([overlaps, mirror_overlaps(overlaps)])
    logger.info(f"self-alignment: doubled overlaps to {len(doubled)}")
    return doubled


__all__ = [
    'mirror',
    'mirror_overlaps',
    'double_self_alignments',
]

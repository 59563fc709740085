"""
Insertion detection by adjacency scanning of sorted overlaps.

Overlaps are sorted on (b_read, a_read, b_begin). Within each (a, b)
sequence pair, two overlaps i < j in the same orientation whose b-side
boundaries meet within the overhang limit bracket an insertion in a when
their a-side boundaries leave a gap shorter than the size limit:

    forward:     a  ==i==]........[==j==        gap [i.a_end, j.a_begin)
    complement:  a  ==j==]........[==i==        gap [j.a_end, i.a_begin)
                 b  ==i==][==j==                flank [i.b_end, j.b_begin)
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List

import numpy as np

from ..config.config_loader import InsertionPolicy
from ..core.dynamic_array import DynamicArray
from ..core.overlap import OVERLAP_ORDER

logger = logging.getLogger(__name__)

INSERTION_DTYPE = np.dtype([
    ('a_seq', np.int64),
    ('a_begin', np.int64),
    ('a_end', np.int64),
    ('b_seq', np.int64),
    ('b_match_begin', np.int64),
    ('b_match_end', np.int64),
])

# Complete order on the inserted interval; compression relies on it.
INSERTION_ORDER = ('a_seq', 'a_begin', 'a_end')

INITIAL_CAPACITY = 4096


@dataclass(frozen=True)
class Insertion:
    a_seq: int
    a_begin: int
    a_end: int
    b_seq: int
    b_match_begin: int
    b_match_end: int

    @property
    def length(self) -> int:
        return self.a_end - self.a_begin

    @property
    def identifier(self) -> str:
        return (f"{self.a_seq}:{self.a_begin}-{self.a_end}"
                f"_{self.b_seq}:{self.b_match_begin}-{self.b_match_end}")

    @classmethod
    def from_record(cls, record) -> 'Insertion':
        return cls(*(int(record[name]) for name in INSERTION_DTYPE.names))


def sort_overlaps(overlaps: np.ndarray) -> np.ndarray:
    """Return overlaps sorted by (b_read, a_read, b_begin)."""
    return np.sort(overlaps, order=list(OVERLAP_ORDER), kind='stable')


def sweep_insertions(overlaps: np.ndarray, policy: InsertionPolicy) -> DynamicArray:
    """
    Collect every insertion bracketed by a pair of adjacent overlaps.

    Args:
        overlaps: OVERLAP_DTYPE array sorted with sort_overlaps
        policy: overhang and size limits

    Returns:
        DynamicArray of INSERTION_DTYPE records, one per qualifying pair,
        in discovery order (not yet deduplicated)
    """
    overhang = policy.overhang_limit
    size = policy.size_limit
    insertions = DynamicArray(INSERTION_DTYPE, INITIAL_CAPACITY)

    a_read = overlaps['a_read'].tolist()
    b_read = overlaps['b_read'].tolist()
    a_begin = overlaps['a_begin'].tolist()
    a_end = overlaps['a_end'].tolist()
    b_begin = overlaps['b_begin'].tolist()
    b_end = overlaps['b_end'].tolist()
    comp = overlaps['is_complement'].tolist()
    n = len(a_read)

    for i in range(n):
        for j in range(i + 1, n):
            if a_read[j] != a_read[i] or b_read[j] != b_read[i]:
                break
            if comp[j] != comp[i]:
                continue
            if b_begin[j] < b_end[i] - overhang:
                continue
            if b_begin[j] > b_end[i] + overhang:
                break
            if comp[j]:
                if a_end[j] < a_begin[i] < a_end[j] + size:
                    insertions.append((a_read[j], a_end[j], a_begin[i],
                                       b_read[j], b_end[i], b_begin[j]))
            elif a_end[i] < a_begin[j] < a_end[i] + size:
                insertions.append((a_read[j], a_end[i], a_begin[j],
                                   b_read[j], b_end[i], b_begin[j]))

    logger.debug(f"sweep over {n} overlaps found {len(insertions)} candidate insertions")
    return insertions


def deduplicate_insertions(insertions: DynamicArray) -> DynamicArray:
    """Sort by (a_seq, a_begin, a_end) and drop repeated intervals, in place."""
    insertions.sort(INSERTION_ORDER)
    before = len(insertions)
    if insertions.compress(INSERTION_ORDER):
        logger.debug(f"compressed {before} insertions to {len(insertions)}")
    return insertions


def find_insertions(overlaps: np.ndarray, policy: InsertionPolicy) -> DynamicArray:
    """Sort, sweep and deduplicate: the insertion list for one report."""
    return deduplicate_insertions(sweep_insertions(sort_overlaps(overlaps), policy))


def iter_insertions(insertions: DynamicArray) -> Iterator[Insertion]:
    for record in insertions:
        yield Insertion.from_record(record)


def write_insertion_report(writer, contigs, insertions: DynamicArray,
                           policy: InsertionPolicy) -> List[Insertion]:
    """
    Emit the deduplicated insertions with their inserted bases.

    ``insertions`` must be in ascending a_seq order (deduplicate_insertions
    guarantees it) because ``contigs`` can only move forward.

    Returns:
        The insertions written, in order
    """
    writer.write_limits(policy.overhang_limit, policy.size_limit)
    written = []
    for ins in iter_insertions(insertions):
        bases = contigs.extract(ins.a_seq, ins.a_begin, ins.a_end)
        writer.write_insertion(ins, bases)
        written.append(ins)
    return written


def insertion_report(writer, contigs, overlaps: np.ndarray,
                     policy: InsertionPolicy) -> List[Insertion]:
    """Find the insertions in the a sequences of ``overlaps`` and write them."""
    insertions = find_insertions(overlaps, policy)
    try:
        return write_insertion_report(writer, contigs, insertions, policy)
    finally:
        insertions.destroy()


__all__ = [
    'INSERTION_DTYPE',
    'INSERTION_ORDER',
    'Insertion',
    'sort_overlaps',
    'sweep_insertions',
    'deduplicate_insertions',
    'find_insertions',
    'iter_insertions',
    'write_insertion_report',
    'insertion_report',
]

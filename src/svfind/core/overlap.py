"""
Overlap record model: one local alignment between an a and a b sequence.

All intervals are 0-indexed and half-open, [begin, end).
"""

from dataclasses import dataclass, astuple
from typing import Iterable, List

import numpy as np

OVERLAP_DTYPE = np.dtype([
    ('a_read', np.int64),
    ('b_read', np.int64),
    ('a_begin', np.int64),
    ('a_end', np.int64),
    ('b_begin', np.int64),
    ('b_end', np.int64),
    ('is_complement', np.bool_),
])

# Grouping used by the insertion sweep: reference sequence, then query
# sequence, then position along the reference.
OVERLAP_ORDER = ('b_read', 'a_read', 'b_begin')


@dataclass(frozen=True)
class Overlap:
    a_read: int
    b_read: int
    a_begin: int
    a_end: int
    b_begin: int
    b_end: int
    is_complement: bool = False

    def __post_init__(self):
        if self.a_begin > self.a_end:
            raise ValueError(f"a interval [{self.a_begin},{self.a_end}) has begin > end")
        if self.b_begin > self.b_end:
            raise ValueError(f"b interval [{self.b_begin},{self.b_end}) has begin > end")

    @property
    def a_length(self) -> int:
        return self.a_end - self.a_begin

    @property
    def b_length(self) -> int:
        return self.b_end - self.b_begin

    def as_tuple(self) -> tuple:
        return astuple(self)

    @classmethod
    def from_record(cls, record) -> 'Overlap':
        """Build an Overlap from one element of an OVERLAP_DTYPE array."""
        return cls(
            int(record['a_read']), int(record['b_read']),
            int(record['a_begin']), int(record['a_end']),
            int(record['b_begin']), int(record['b_end']),
            bool(record['is_complement']),
        )


def overlaps_to_array(overlaps: Iterable[Overlap]) -> np.ndarray:
    """Pack Overlap objects into an OVERLAP_DTYPE array."""
    return np.array([o.as_tuple() for o in overlaps], dtype=OVERLAP_DTYPE)


def array_to_overlaps(array: np.ndarray) -> List[Overlap]:
    return [Overlap.from_record(record) for record in array]


__all__ = [
    'OVERLAP_DTYPE',
    'OVERLAP_ORDER',
    'Overlap',
    'overlaps_to_array',
    'array_to_overlaps',
]

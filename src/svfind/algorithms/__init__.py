from .insertion_finder import (
    INSERTION_DTYPE,
    INSERTION_ORDER,
    Insertion,
    sort_overlaps,
    sweep_insertions,
    deduplicate_insertions,
    find_insertions,
    iter_insertions,
    write_insertion_report,
    insertion_report,
)

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

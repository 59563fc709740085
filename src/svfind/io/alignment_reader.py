"""
Reading and writing overlap records in ASCII .1aln files.

Only the lines the insertion finder needs are interpreted:

    < <len> <name> <slot>               reference (1 = set A, 2 = set B, 3 = directory)
    A <a> <a_begin> <a_end> <b> <b_begin> <b_end>   overlap
    R                                   previous overlap is reverse-complemented

Every other line (header, provenance, diffs, lengths, trace points) is skipped.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np

from ..core.dynamic_array import DynamicArray
from ..core.errors import AlignmentFormatError
from ..core.overlap import OVERLAP_DTYPE

logger = logging.getLogger(__name__)

SLOT_A = 1
SLOT_B = 2
SLOT_CPATH = 3


@dataclass
class AlignmentFile:
    """Overlaps and source references read from one alignment file."""
    path: str
    overlaps: np.ndarray
    a_source: str
    b_source: Optional[str] = None
    cpath: Optional[str] = None

    @property
    def is_self_alignment(self) -> bool:
        return self.b_source is None

    @property
    def n_overlaps(self) -> int:
        return len(self.overlaps)


def read_string_field(text: str) -> Tuple[str, str]:
    """Split a length-prefixed string field off the front of ``text``."""
    length_str, _, remainder = text.lstrip().partition(' ')
    length = int(length_str)
    if length < 0 or len(remainder) < length:
        raise ValueError(f"string field of length {length} is truncated")
    return remainder[:length], remainder[length:]


def format_string_field(value: str) -> str:
    return f"{len(value)} {value}"


def _parse_overlap(text: str) -> tuple:
    fields = [int(x) for x in text.split()]
    if len(fields) != 6:
        raise ValueError(f"expected 6 integers, found {len(fields)}")
    a_read, a_begin, a_end, b_read, b_begin, b_end = fields
    if a_begin > a_end or b_begin > b_end:
        raise ValueError("interval begin exceeds end")
    return (a_read, b_read, a_begin, a_end, b_begin, b_end, False)


def read_alignment(path: Union[str, Path]) -> AlignmentFile:
    """
    Read overlaps and references from an ASCII .1aln file.

    Args:
        path: Path to the alignment file

    Returns:
        AlignmentFile with an OVERLAP_DTYPE array in file order

    Raises:
        FileNotFoundError: if the file does not exist
        AlignmentFormatError: on a malformed record or a missing set A reference
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"failed to open .1aln file {path}")

    records = DynamicArray(OVERLAP_DTYPE)
    references = {}
    last = None

    with open(path, 'r') as f:
        for line_no, line in enumerate(f, 1):
            line = line.rstrip('\n')
            if not line:
                continue
            kind = line[0]
            try:
                if kind == 'A':
                    last = records.append(_parse_overlap(line[1:]))
                elif kind == 'R':
                    if last is None:
                        raise ValueError("complement flag before any overlap")
                    records.view()['is_complement'][last] = True
                elif kind == '<':
                    name, rest = read_string_field(line[1:])
                    slot_fields = rest.split()
                    if not slot_fields:
                        raise ValueError("reference line has no slot number")
                    references[int(slot_fields[0])] = name
            except ValueError as e:
                raise AlignmentFormatError(f"{path}:{line_no}: {e}: {line[:80]!r}") from e

    if SLOT_A not in references:
        raise AlignmentFormatError(f"{path}: no reference to sequence set A (slot {SLOT_A})")

    overlaps = records.view().copy()
    records.destroy()
    logger.info(f"read {len(overlaps)} overlaps from {path}")

    return AlignmentFile(
        path=str(path),
        overlaps=overlaps,
        a_source=references[SLOT_A],
        b_source=references.get(SLOT_B),
        cpath=references.get(SLOT_CPATH),
    )


def write_alignment(
    path: Union[str, Path],
    overlaps: np.ndarray,
    a_source: str,
    b_source: Optional[str] = None,
    cpath: Optional[str] = None
) -> str:
    """Write overlaps in the layout read_alignment expects."""
    path = Path(path)
    with open(path, 'w') as f:
        f.write("1 3 aln 1 0\n")
        f.write(f"< {format_string_field(a_source)} {SLOT_A}\n")
        if b_source:
            f.write(f"< {format_string_field(b_source)} {SLOT_B}\n")
        if cpath:
            f.write(f"< {format_string_field(cpath)} {SLOT_CPATH}\n")
        for o in overlaps:
            f.write(f"A {o['a_read']} {o['a_begin']} {o['a_end']} "
                    f"{o['b_read']} {o['b_begin']} {o['b_end']}\n")
            if o['is_complement']:
                f.write("R\n")
    return str(path)


__all__ = [
    'SLOT_A',
    'SLOT_B',
    'SLOT_CPATH',
    'AlignmentFile',
    'read_string_field',
    'format_string_field',
    'read_alignment',
    'write_alignment',
]

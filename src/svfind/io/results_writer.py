"""
Results writing for the insertion finder.

Insertions are written as ASCII .1sv line records:

    V <seq> <begin> <end>          inserted interval
    B <seq> <begin> <end>          flanking match on the other sequence
    S <len> <bases>                inserted sequence
    I <len> <identifier>           identifier of the insertion

preceded by a header, provenance, references to the source files and the
two global limits (o = maximum overhang, i = maximum insert size).
"""

import csv
import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional, Union

from .alignment_reader import (
    SLOT_A,
    SLOT_B,
    SLOT_CPATH,
    format_string_field,
    read_string_field,
)

logger = logging.getLogger(__name__)

PROG_NAME = "svfind"


class InsertionWriter:
    """Line-record writer for one insertion report."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = open(self.path, 'w')
        self.count = 0
        self._write("1 3 seq 1 0")
        self._write("2 2 sv")

    def _write(self, line: str):
        self._handle.write(line + "\n")

    def write_provenance(self, version: str, command: str, date: Optional[str] = None):
        command = command or PROG_NAME
        date = date or datetime.now().strftime("%Y-%m-%d_%H:%M:%S")
        fields = [PROG_NAME, version, command, date]
        self._write("! " + " ".join(format_string_field(f) for f in fields))

    def write_references(self, a_source: str, b_source: Optional[str] = None,
                         cpath: Optional[str] = None):
        """Record the sequence files the insertions and flanks refer to."""
        for name, slot in ((a_source, SLOT_A), (b_source, SLOT_B), (cpath, SLOT_CPATH)):
            if name:
                self._write(f"< {format_string_field(name)} {slot}")

    def write_limits(self, overhang_limit: int, size_limit: int):
        self._write(f"o {overhang_limit}")
        self._write(f"i {size_limit}")

    def write_insertion(self, insertion, sequence: str):
        """Write the V, B, S and I records of one insertion."""
        self._write(f"V {insertion.a_seq} {insertion.a_begin} {insertion.a_end}")
        self._write(f"B {insertion.b_seq} {insertion.b_match_begin} {insertion.b_match_end}")
        self._write(f"S {format_string_field(sequence)}")
        self._write(f"I {format_string_field(insertion.identifier)}")
        self.count += 1

    def close(self):
        if not self._handle.closed:
            self._handle.close()
            logger.debug(f"Closed {self.path} after {self.count} insertions")

    def discard(self):
        """Close and delete the output file."""
        self.close()
        if self.path.exists():
            self.path.unlink()
            logger.debug(f"Removed incomplete output {self.path}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None:
            self.close()
        else:
            self.discard()


def read_insertion_records(path: Union[str, Path]) -> list:
    """
    Parse the per-insertion records of a .1sv file.

    Returns a list of dicts with keys variant, flank, sequence, identifier.
    """
    entries = []
    with open(path, 'r') as f:
        for line in f:
            line = line.rstrip('\n')
            if not line:
                continue
            kind, body = line[0], line[1:]
            if kind == 'V':
                entries.append({'variant': tuple(int(x) for x in body.split())})
            elif kind == 'B':
                entries[-1]['flank'] = tuple(int(x) for x in body.split())
            elif kind == 'S':
                entries[-1]['sequence'] = read_string_field(body)[0]
            elif kind == 'I':
                entries[-1]['identifier'] = read_string_field(body)[0]
    return entries


def save_insertion_table(csv_path: Union[str, Path], insertions: Iterable) -> str:
    """Save one CSV row per insertion."""
    with open(csv_path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['identifier', 'a_seq', 'a_begin', 'a_end', 'length',
                         'b_seq', 'b_match_begin', 'b_match_end'])
        for ins in insertions:
            writer.writerow([ins.identifier, ins.a_seq, ins.a_begin, ins.a_end, ins.length,
                             ins.b_seq, ins.b_match_begin, ins.b_match_end])
    return str(csv_path)


__all__ = [
    'PROG_NAME',
    'InsertionWriter',
    'read_insertion_records',
    'save_insertion_table',
]

"""
Forward-only reader over the contigs of a sequence file.

A contig is a maximal run of valid bases inside a sequence record; any
other character (N, -, IUPAC codes) separates contigs. Contigs are
numbered from 0 in file order, matching the sequence ids used in the
alignment file.
"""

import gzip
import logging
import re
from pathlib import Path
from typing import Iterator, Optional, Union

from Bio import SeqIO

from ..config.config_loader import DEFAULT_VALID_BASES
from ..core.errors import (
    ContigBoundsError,
    ContigStreamExhaustedError,
    MonotonicAccessError,
    SequenceFormatError,
)
from .alignment_reader import read_string_field

logger = logging.getLogger(__name__)

FORMAT_BY_SUFFIX = {
    '.fa': 'fasta',
    '.fasta': 'fasta',
    '.fna': 'fasta',
    '.fas': 'fasta',
    '.fq': 'fastq',
    '.fastq': 'fastq',
}


def _find_file(name: Union[str, Path], cpath: Optional[str]) -> Path:
    candidates = [Path(name)]
    if cpath:
        candidates.append(Path(cpath) / name)
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    tried = ' or '.join(str(c) for c in candidates)
    raise FileNotFoundError(f"failed to open sequence file {tried}")


def is_genome_skeleton(path: Path) -> bool:
    """True if ``path`` is a .1gdb genome skeleton (header ``1 3 gdb``)."""
    with open(path, 'rb') as f:
        fields = f.readline().split()
    return len(fields) >= 3 and fields[0] == b'1' and fields[2] == b'gdb'


def genome_skeleton_parent(path: Path) -> str:
    """
    Name of the sequence file a .1gdb skeleton was built from.

    The parent is the ``<`` reference with count 1 in the header.

    Raises:
        SequenceFormatError: if the header holds no such reference
    """
    with open(path, 'rb') as f:
        for raw in f:
            line = raw.decode('latin-1').rstrip('\n')
            if not line or line[0] not in '12!<>.~#':
                # Header over; the body may be binary
                break
            if line[0] != '<':
                continue
            try:
                name, rest = read_string_field(line[1:])
            except ValueError as e:
                raise SequenceFormatError(f"{path}: bad reference line {line[:80]!r}") from e
            if rest.split()[:1] == ['1']:
                return name
    raise SequenceFormatError(f"failed to find reference name in GDB file {path}")


def resolve_source(name: Union[str, Path], cpath: Optional[str] = None) -> Path:
    """
    Find a sequence file given as-is or relative to ``cpath``.

    A .1gdb genome skeleton stands for the sequence file it references,
    which is looked up the same way.

    Raises:
        FileNotFoundError: if neither location holds a file
        SequenceFormatError: if a genome skeleton names no sequence file
    """
    path = _find_file(name, cpath)
    if is_genome_skeleton(path):
        parent = genome_skeleton_parent(path)
        logger.debug(f"{path} is a genome skeleton of {parent}")
        path = _find_file(parent, cpath)
    return path


def guess_format(path: Path) -> str:
    """Biopython format name from the file extension, fasta if unknown."""
    suffixes = [s.lower() for s in path.suffixes]
    if suffixes and suffixes[-1] == '.gz':
        suffixes = suffixes[:-1]
    if suffixes and suffixes[-1] in FORMAT_BY_SUFFIX:
        return FORMAT_BY_SUFFIX[suffixes[-1]]
    return 'fasta'


def _open_text(path: Path):
    if path.suffix.lower() == '.gz':
        return gzip.open(path, 'rt')
    return open(path, 'r')


class ContigReader:
    """
    Sequential contig cursor.

    The cursor only moves forward: ``contig(i)`` may be called with the
    same index repeatedly, but never with a lower index than before.
    """

    def __init__(self, source: Union[str, Path], cpath: Optional[str] = None,
                 valid_bases: str = DEFAULT_VALID_BASES, fmt: Optional[str] = None):
        self.path = resolve_source(source, cpath)
        self.fmt = fmt or guess_format(self.path)
        self._run_pattern = re.compile('[' + re.escape(valid_bases) + ']+')
        self._handle = _open_text(self.path)
        self._runs = self._iter_runs()
        self._current: Optional[str] = None
        self.index = -1
        self.exhausted = False
        logger.debug(f"Opened {self.fmt} contig source {self.path}")

    def _iter_runs(self) -> Iterator[str]:
        try:
            for record in SeqIO.parse(self._handle, self.fmt):
                for match in self._run_pattern.finditer(str(record.seq)):
                    yield match.group()
        except ValueError as e:
            # UnicodeDecodeError included
            raise SequenceFormatError(f"failed to read {self.fmt} sequence file {self.path}: {e}") from e

    def next_contig(self) -> Optional[str]:
        """Bases of the next contig, or None once the source is exhausted."""
        if self.exhausted:
            return None
        seq = next(self._runs, None)
        if seq is None:
            self.exhausted = True
            self._current = None
            return None
        self.index += 1
        self._current = seq
        return seq

    def contig(self, index: int) -> str:
        """
        Advance to contig ``index`` and return its bases.

        Raises:
            MonotonicAccessError: if ``index`` is below the current contig
            ContigStreamExhaustedError: if the source ends before ``index``
        """
        if index < 0:
            raise IndexError(f"negative contig index {index}")
        if index < self.index:
            raise MonotonicAccessError(
                f"contig {index} requested after contig {self.index} in {self.path}: "
                f"contigs can only be read in non-decreasing order")
        while self.index < index:
            if self.next_contig() is None:
                raise ContigStreamExhaustedError(
                    f"run out of contig sequences at {self.index} < {index} in {self.path}")
        if self._current is None:
            raise ContigStreamExhaustedError(
                f"contig {index} is no longer available: {self.path} is exhausted")
        return self._current

    def extract(self, index: int, begin: int, end: int) -> str:
        """Bases [begin, end) of contig ``index``."""
        seq = self.contig(index)
        if not 0 <= begin <= end <= len(seq):
            raise ContigBoundsError(
                f"interval [{begin},{end}) lies outside contig {index} "
                f"of length {len(seq)} in {self.path}")
        return seq[begin:end]

    def __iter__(self) -> Iterator[str]:
        while True:
            seq = self.next_contig()
            if seq is None:
                return
            yield seq

    def close(self):
        self._handle.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


__all__ = [
    'FORMAT_BY_SUFFIX',
    'resolve_source',
    'is_genome_skeleton',
    'genome_skeleton_parent',
    'guess_format',
    'ContigReader',
]

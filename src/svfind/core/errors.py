"""
Exception types raised by the insertion finder.
"""


class SvfindError(Exception):
    """Base class for all fatal svfind errors."""


class ConfigError(SvfindError, ValueError):
    """Invalid configuration or policy value."""


class AlignmentFormatError(SvfindError, ValueError):
    """Malformed record in an alignment (.1aln) file."""


class MissingSecondSequenceSetError(SvfindError):
    """A report on sequence set B was requested for a self-alignment."""


class ContigStreamExhaustedError(SvfindError, IndexError):
    """The contig source ran out before the requested contig index."""


class MonotonicAccessError(SvfindError, IndexError):
    """A contig index lower than the current one was requested."""


class ContigBoundsError(SvfindError, IndexError):
    """A requested interval extends past the end of its contig."""


class SequenceFormatError(SvfindError, ValueError):
    """A sequence source could not be parsed."""


__all__ = [
    'SvfindError',
    'ConfigError',
    'AlignmentFormatError',
    'MissingSecondSequenceSetError',
    'ContigStreamExhaustedError',
    'MonotonicAccessError',
    'ContigBoundsError',
    'SequenceFormatError',
]

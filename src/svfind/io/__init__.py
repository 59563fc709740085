from .alignment_reader import (
    AlignmentFile,
    read_alignment,
    write_alignment,
)

from .contig_reader import (
    ContigReader,
    resolve_source,
    guess_format,
)

from .file_handler import (
    ensure_directory,
    get_file_size,
    table_path_for,
    get_memory_usage,
)

from .results_writer import (
    InsertionWriter,
    read_insertion_records,
    save_insertion_table,
)

__all__ = [
    # Alignment reader functions
    'AlignmentFile',
    'read_alignment',
    'write_alignment',

    # Contig reader
    'ContigReader',
    'resolve_source',
    'guess_format',

    # File handler functions
    'ensure_directory',
    'get_file_size',
    'table_path_for',
    'get_memory_usage',

    # Results writer functions
    'InsertionWriter',
    'read_insertion_records',
    'save_insertion_table',
]

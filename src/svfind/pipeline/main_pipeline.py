import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .. import __version__
from ..algorithms.insertion_finder import Insertion, insertion_report
from ..config.config_loader import (
    InsertionPolicy,
    apply_overrides,
    load_config,
    policy_from_config,
)
from ..core.errors import ConfigError, MissingSecondSequenceSetError, SvfindError
from ..core.orientation import double_self_alignments, mirror_overlaps
from ..diagnostics.performance import ResourceTracker
from ..io.alignment_reader import AlignmentFile, read_alignment
from ..io.contig_reader import ContigReader
from ..io.file_handler import describe_memory, ensure_directory, get_file_size, table_path_for
from ..io.results_writer import InsertionWriter, save_insertion_table


def setup_logging(config: Dict[str, Any]) -> logging.Logger:
    """Setup logging configuration."""
    log_level_str = (config.get('debug') or {}).get('log_level', 'INFO')
    log_level = getattr(logging, str(log_level_str).upper(), logging.INFO)

    logger = logging.getLogger('svfind')
    logger.setLevel(log_level)

    # Remove existing handlers
    logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(formatter)
    logger.addHandler(ch)

    logs_dir = (config.get('io') or {}).get('logs_dir')
    if logs_dir:
        log_dir = ensure_directory(logs_dir)
        fh = logging.FileHandler(log_dir / 'svfind.log')
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        logger.addHandler(fh)

    return logger


def remove_outputs(paths: List[str], write_table: bool, logger: logging.Logger):
    """Delete the files of reports completed before a fatal error."""
    for path in paths:
        targets = [Path(path)]
        if write_table:
            targets.append(table_path_for(path))
        for target in targets:
            if target.exists():
                target.unlink()
                logger.warning(f"removed {target}: the run did not complete")


def run_report(
    alignment: AlignmentFile,
    overlaps,
    output_path: str,
    source: str,
    other_source: Optional[str],
    policy: InsertionPolicy,
    logger: logging.Logger,
    command: str = '',
    write_table: bool = False
) -> List[Insertion]:
    """
    Write the insertions found in the a sequences of ``overlaps``.

    Args:
        alignment: The alignment file the overlaps came from
        overlaps: OVERLAP_DTYPE array whose a side is ``source``
        output_path: .1sv file to write
        source: Sequence file holding the a sequences
        other_source: Sequence file of the flanking (b) sequences, if distinct
        policy: Insertion limits
        logger: Logger instance
        command: Command line recorded as provenance
        write_table: Also write a CSV table next to ``output_path``

    Returns:
        The insertions written
    """
    with ContigReader(source, alignment.cpath, policy.valid_bases) as contigs, \
            InsertionWriter(output_path) as writer:
        writer.write_provenance(__version__, command)
        writer.write_references(source, other_source, alignment.cpath)
        written = insertion_report(writer, contigs, overlaps, policy)

    logger.info(f"wrote {len(written)} insertions in {source} to {output_path} "
                f"({get_file_size(output_path)})")

    if write_table:
        try:
            table_path = save_insertion_table(table_path_for(output_path), written)
        except Exception:
            remove_outputs([output_path], write_table, logger)
            raise
        logger.info(f"insertion table saved to {table_path}")

    return written


def run_insertion_pipeline(
    alignment_path: str,
    a_output: Optional[str] = None,
    b_output: Optional[str] = None,
    policy: Optional[InsertionPolicy] = None,
    logger: Optional[logging.Logger] = None,
    command: str = '',
    write_table: bool = False
) -> Dict[str, List[Insertion]]:
    """
    Core insertion finder logic.

    Reads the overlaps once, then reports insertions in sequence set A
    (``a_output``) and, with the roles of the two sets swapped, in set B
    (``b_output``).

    Returns:
        Dictionary mapping 'a' and/or 'b' to the insertions written

    Raises:
        MissingSecondSequenceSetError: if ``b_output`` is given for a self-alignment
    """
    policy = policy or InsertionPolicy()
    logger = logger or logging.getLogger('svfind')
    tracker = ResourceTracker(logger)

    alignment = read_alignment(alignment_path)

    if b_output and alignment.is_self_alignment:
        raise MissingSecondSequenceSetError(
            f"-b not possible: input {alignment_path} has no b source "
            f"(it has self-a alignments only)")

    if not a_output and not b_output:
        logger.warning("no output requested (-a or -b): nothing will be written")

    overlaps = alignment.overlaps
    if len(overlaps) == 0:
        logger.warning(f"no overlaps in {alignment_path}: output files will hold no insertions")
    if alignment.is_self_alignment:
        overlaps = double_self_alignments(overlaps)
    tracker.update("read overlaps")
    logger.debug(f"memory after loading: {describe_memory()}")

    results = {}
    outputs = []

    try:
        if a_output:
            results['a'] = run_report(alignment, overlaps, a_output,
                                      alignment.a_source, alignment.b_source,
                                      policy, logger, command, write_table)
            outputs.append(a_output)
            tracker.update(f"report on {alignment.a_source}")

        if b_output:
            results['b'] = run_report(alignment, mirror_overlaps(overlaps), b_output,
                                      alignment.b_source, alignment.a_source,
                                      policy, logger, command, write_table)
            outputs.append(b_output)
            tracker.update(f"report on {alignment.b_source}")
    except Exception:
        remove_outputs(outputs, write_table, logger)
        raise

    tracker.total()
    return results


def main(
    alignment_path: str,
    a_output: Optional[str] = None,
    b_output: Optional[str] = None,
    config_path: Optional[str] = None,
    overrides: Optional[Dict] = None,
    command: str = ''
) -> int:
    """Main pipeline entry point. Returns the process exit code."""
    try:
        config = apply_overrides(load_config(config_path), overrides)
    except (OSError, yaml.YAMLError, ConfigError) as e:
        print(f"ERROR loading configuration: {e}", file=sys.stderr)
        return 1

    logger = setup_logging(config)
    logger.info(f"svfind {__version__} starting on {alignment_path}")
    logger.info(f"Configuration loaded from {config.get('_source', 'default')}")

    try:
        policy = policy_from_config(config)
        logger.info(f"max overhang {policy.overhang_limit}, max insert size {policy.size_limit}")
        run_insertion_pipeline(
            alignment_path,
            a_output=a_output,
            b_output=b_output,
            policy=policy,
            logger=logger,
            command=command,
            write_table=bool((config.get('io') or {}).get('write_table', False)),
        )
        return 0
    except (SvfindError, OSError) as e:
        logger.error(f"svfind failed: {e}")
        logger.debug("failure details", exc_info=True)
        return 1


# Alias for convenience
run_pipeline = main


__all__ = [
    'setup_logging',
    'remove_outputs',
    'run_report',
    'run_insertion_pipeline',
    'main',
    'run_pipeline',
]

"""
Command-line interface for the insertion finder.
"""

import argparse
import sys
from typing import List, Optional


class UsageErrorParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def positive_int(name: str):
    def convert(value: str) -> int:
        try:
            number = int(value)
        except ValueError:
            number = 0
        if number <= 0:
            raise argparse.ArgumentTypeError(f"{name} {value} must be a positive integer")
        return number
    return convert


def build_parser() -> argparse.ArgumentParser:
    parser = UsageErrorParser(
        prog='svfind',
        description="Find structural-variant insertions from pairwise alignment overlaps",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Insertions in the first genome of a two-genome alignment
  %(prog)s -a ins_a.1sv genomeA_vs_genomeB.1aln

  # Insertions in both genomes, stricter limits
  %(prog)s -w 20 -m 10000 -a ins_a.1sv -b ins_b.1sv genomeA_vs_genomeB.1aln

  # Self-alignment (only -a is possible)
  %(prog)s -a ins.1sv genome_self.1aln
        """
    )

    parser.add_argument(
        'alignment',
        help='Alignment file (.1aln) to scan'
    )

    parser.add_argument(
        '-w',
        dest='overhang_limit',
        metavar='<int>',
        type=positive_int('max_overhang'),
        help='maximum overhang (default 50)'
    )

    parser.add_argument(
        '-m',
        dest='size_limit',
        metavar='<int>',
        type=positive_int('max_size'),
        help='maximum length (default 50000)'
    )

    parser.add_argument(
        '-a',
        dest='a_output',
        metavar='<filename>',
        help='outfile for insertions/duplications in a'
    )

    parser.add_argument(
        '-b',
        dest='b_output',
        metavar='<filename>',
        help='outfile for insertions/duplications in b'
    )

    parser.add_argument(
        '--config',
        type=str,
        help='Path to configuration YAML file'
    )

    parser.add_argument(
        '--table',
        action='store_true',
        help='Also write a CSV table of insertions next to each output file'
    )

    parser.add_argument(
        '--logs-dir',
        type=str,
        help='Directory for svfind.log'
    )

    parser.add_argument(
        '--quiet',
        action='store_true',
        help='Only report warnings and errors'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug mode'
    )

    parser.add_argument(
        '--version',
        action='version',
        version='%(prog)s ' + _version()
    )

    return parser


def _version() -> str:
    from svfind import __version__
    return __version__


def build_overrides(args: argparse.Namespace) -> dict:
    """Configuration overrides from parsed arguments."""
    overrides = {}

    if args.overhang_limit is not None:
        overrides.setdefault('insertion', {})['overhang_limit'] = args.overhang_limit

    if args.size_limit is not None:
        overrides.setdefault('insertion', {})['size_limit'] = args.size_limit

    if args.table:
        overrides.setdefault('io', {})['write_table'] = True

    if args.logs_dir:
        overrides.setdefault('io', {})['logs_dir'] = args.logs_dir

    if args.quiet:
        overrides.setdefault('debug', {})['log_level'] = 'WARNING'

    if args.debug:
        overrides.setdefault('debug', {})['log_level'] = 'DEBUG'

    return overrides


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    args = build_parser().parse_args(argv)

    from svfind.pipeline.main_pipeline import main as pipeline_main

    return pipeline_main(
        args.alignment,
        a_output=args.a_output,
        b_output=args.b_output,
        config_path=args.config,
        overrides=build_overrides(args),
        command=' '.join(['svfind'] + list(argv)),
    )


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()

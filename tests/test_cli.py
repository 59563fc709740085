"""
Tests for the svfind command line.
"""

import pytest
from svfind.core.overlap import Overlap, overlaps_to_array
from svfind.io.alignment_reader import write_alignment
from svfind.io.results_writer import read_insertion_records
from svfind.scripts.run_svfind import build_overrides, build_parser, main


@pytest.mark.parametrize("argv, message", [
    (["-w", "0", "x.1aln"], "max_overhang 0 must be a positive integer"),
    (["-w", "abc", "x.1aln"], "max_overhang abc must be a positive integer"),
    (["-m", "-5", "x.1aln"], "max_size -5 must be a positive integer"),
])
def test_invalid_limits_exit_1(argv, message, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 1
    assert message in capsys.readouterr().err


def test_missing_alignment_exits_1(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 1
    assert "usage:" in capsys.readouterr().err


def test_help_exits_0(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--help"])
    assert excinfo.value.code == 0
    assert "maximum overhang" in capsys.readouterr().out


def test_overrides_from_arguments():
    args = build_parser().parse_args(["-w", "20", "-m", "1000", "--table", "--debug", "x.1aln"])
    assert build_overrides(args) == {
        'insertion': {'overhang_limit': 20, 'size_limit': 1000},
        'io': {'write_table': True},
        'debug': {'log_level': 'DEBUG'},
    }

    args = build_parser().parse_args(["x.1aln"])
    assert build_overrides(args) == {}

    args = build_parser().parse_args(["--quiet", "--logs-dir", "logs", "x.1aln"])
    assert build_overrides(args) == {
        'io': {'logs_dir': 'logs'},
        'debug': {'log_level': 'WARNING'},
    }


def test_end_to_end(tmp_path):
    """A full run writes the insertion with its bases."""
    genome_a = tmp_path / "a.fa"
    genome_b = tmp_path / "b.fa"
    genome_a.write_text(">a\nAAAACCCCGGGGTTTT\n")
    genome_b.write_text(">b\nAAAATTTT\n")
    alignment = write_alignment(
        tmp_path / "ab.1aln",
        overlaps_to_array([Overlap(0, 0, 0, 4, 0, 4), Overlap(0, 0, 12, 16, 4, 8)]),
        str(genome_a), str(genome_b))
    out = tmp_path / "ins.1sv"

    assert main(["-w", "10", "-m", "100", "-a", str(out), alignment]) == 0
    records = read_insertion_records(out)
    assert [r['sequence'] for r in records] == ["CCCCGGGG"]
    assert "o 10" in out.read_text().splitlines()


def test_end_to_end_failure(tmp_path):
    assert main(["-a", str(tmp_path / "ins.1sv"), str(tmp_path / "absent.1aln")]) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

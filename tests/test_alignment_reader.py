"""
Tests for reading and writing .1aln overlap files.
"""

import pytest
from svfind.core.overlap import Overlap, array_to_overlaps, overlaps_to_array
from svfind.core.errors import AlignmentFormatError
from svfind.io.alignment_reader import (
    read_alignment,
    read_string_field,
    write_alignment,
)

TWO_SET = """1 3 aln 1 0
2 3 seq
! 7 FastGA 3 1.0 0
< 9 genomeA.fa 1
< 9 genomeB.fa 2
< 4 /tmp 3
A 0 10 110 1 200 300
L 100 100
D 3
A 2 0 50 1 60 110
R
T 2 10 10
"""


def write(tmp_path, text, name="test.1aln"):
    path = tmp_path / name
    path.write_text(text)
    return path


def test_read_two_set_alignment(tmp_path):
    alignment = read_alignment(write(tmp_path, TWO_SET))

    assert alignment.a_source == "genomeA.fa"
    assert alignment.b_source == "genomeB.fa"
    assert alignment.cpath == "/tmp"
    assert not alignment.is_self_alignment
    assert alignment.n_overlaps == 2
    assert array_to_overlaps(alignment.overlaps) == [
        Overlap(0, 1, 10, 110, 200, 300, False),
        Overlap(2, 1, 0, 50, 60, 110, True),
    ]


def test_read_self_alignment(tmp_path):
    """Without a set B reference the file is a self-alignment."""
    alignment = read_alignment(write(tmp_path, "< 5 ref.fa 1\nA 0 0 10 1 0 10\n"))

    assert alignment.is_self_alignment
    assert alignment.b_source is None
    assert alignment.cpath is None
    assert alignment.n_overlaps == 1


def test_reference_names_may_contain_spaces():
    name, rest = read_string_field(" 11 my genome.fa 2")
    assert name == "my genome.fa"
    assert rest.split() == ["2"]


def test_truncated_string_field():
    with pytest.raises(ValueError):
        read_string_field(" 20 short 1")


@pytest.mark.parametrize("line", [
    "A 0 10 110 1 200",
    "A 0 10 x 1 200 300",
    "A 0 110 10 1 200 300",
])
def test_malformed_overlap(tmp_path, line):
    path = write(tmp_path, f"< 5 ref.fa 1\n{line}\n")
    with pytest.raises(AlignmentFormatError) as excinfo:
        read_alignment(path)
    # The message points at the offending line
    assert ":2:" in str(excinfo.value)


def test_complement_flag_before_overlap(tmp_path):
    with pytest.raises(AlignmentFormatError):
        read_alignment(write(tmp_path, "< 5 ref.fa 1\nR\nA 0 0 10 1 0 10\n"))


def test_missing_set_a_reference(tmp_path):
    with pytest.raises(AlignmentFormatError):
        read_alignment(write(tmp_path, "< 5 ref.fa 2\nA 0 0 10 1 0 10\n"))


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_alignment(tmp_path / "absent.1aln")


def test_empty_overlap_list(tmp_path):
    alignment = read_alignment(write(tmp_path, "< 5 ref.fa 1\n"))
    assert alignment.n_overlaps == 0


def test_write_then_read(tmp_path):
    """Files written by write_alignment are read back unchanged."""
    overlaps = [
        Overlap(0, 0, 0, 100, 0, 100, False),
        Overlap(0, 3, 150, 250, 100, 200, True),
        Overlap(4, 1, 7, 9, 11, 13, False),
    ]
    path = write_alignment(tmp_path / "out.1aln", overlaps_to_array(overlaps),
                           "a genome.fa", "b.fa", str(tmp_path))

    alignment = read_alignment(path)
    assert array_to_overlaps(alignment.overlaps) == overlaps
    assert alignment.a_source == "a genome.fa"
    assert alignment.b_source == "b.fa"
    assert alignment.cpath == str(tmp_path)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

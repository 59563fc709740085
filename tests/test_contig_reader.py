"""
Tests for the forward-only contig reader.
"""

import gzip

import pytest
from svfind.io.contig_reader import (
    ContigReader,
    guess_format,
    is_genome_skeleton,
    resolve_source,
)
from svfind.core.errors import (
    ContigBoundsError,
    ContigStreamExhaustedError,
    MonotonicAccessError,
    SequenceFormatError,
    SvfindError,
)

FASTA = """>chr1
ACGTNNNNacgt
TTTT
>chr2
NNGGCC-AATTN
>chr3
ACGTACGT
"""

# chr1 has two contigs (the line break does not split), chr2 has two
CONTIGS = ["ACGT", "acgtTTTT", "GGCC", "AATT", "ACGTACGT"]


@pytest.fixture
def fasta_file(tmp_path):
    path = tmp_path / "genome.fa"
    path.write_text(FASTA)
    return path


def test_contigs_split_on_invalid_bases(fasta_file):
    """Runs of valid bases become contigs; gaps at either end give no empty contig."""
    with ContigReader(fasta_file) as reader:
        assert list(reader) == CONTIGS


def test_next_contig_returns_none_at_end(fasta_file):
    reader = ContigReader(fasta_file)
    for expected in CONTIGS:
        assert reader.next_contig() == expected
    assert reader.next_contig() is None
    assert reader.exhausted
    assert reader.next_contig() is None
    reader.close()


def test_nondecreasing_access(fasta_file):
    """Repeated and increasing indices are served in a single pass."""
    with ContigReader(fasta_file) as reader:
        assert reader.index == -1
        assert reader.contig(2) == "GGCC"
        assert reader.contig(2) == "GGCC"
        assert reader.contig(4) == "ACGTACGT"
        assert reader.index == 4


def test_repeated_then_later_index(tmp_path):
    """Indices 2, 2, 5 in sequence are served."""
    path = tmp_path / "six.fa"
    path.write_text(">s\n" + "N".join(["A", "C", "GG", "T", "AC", "GT"]) + "\n")

    with ContigReader(path) as reader:
        assert [reader.contig(i) for i in (2, 2, 5)] == ["GG", "GG", "GT"]

    with ContigReader(path) as reader:
        reader.contig(5)
        with pytest.raises(MonotonicAccessError):
            reader.contig(2)


def test_decreasing_access_rejected(fasta_file):
    with ContigReader(fasta_file) as reader:
        reader.contig(3)
        with pytest.raises(MonotonicAccessError):
            reader.contig(1)


def test_negative_index_rejected(fasta_file):
    with ContigReader(fasta_file) as reader:
        with pytest.raises(IndexError):
            reader.contig(-1)


def test_stream_exhausted(fasta_file):
    """Asking past the last contig is an error naming the file."""
    with ContigReader(fasta_file) as reader:
        with pytest.raises(ContigStreamExhaustedError) as excinfo:
            reader.contig(5)
        assert "run out of contig sequences" in str(excinfo.value)
        assert isinstance(excinfo.value, SvfindError)


def test_last_contig_unavailable_after_exhaustion(fasta_file):
    """Once the stream has ended the last contig can no longer be served."""
    with ContigReader(fasta_file) as reader:
        assert list(reader) == CONTIGS
        assert reader.index == 4
        with pytest.raises(ContigStreamExhaustedError):
            reader.contig(4)
        with pytest.raises(ContigStreamExhaustedError):
            reader.extract(4, 0, 2)


def test_malformed_source(tmp_path):
    """Parse failures name the file and belong to the svfind error family."""
    path = tmp_path / "bad.fq"
    path.write_text("@r1\nACGT\n+\nII\n")

    with ContigReader(path) as reader:
        with pytest.raises(SequenceFormatError) as excinfo:
            reader.next_contig()
    assert str(path) in str(excinfo.value)
    assert isinstance(excinfo.value, SvfindError)


GDB = """1 3 gdb 1 0
2 3 seq
! 6 FAtoGDB 3 1.0 0
< 9 genome.fa 1
f 4 0.25 0.25 0.25 0.25
S 4 chr1
C 4
"""


def test_genome_skeleton_resolves_to_parent(fasta_file, tmp_path, monkeypatch):
    """A .1gdb reference is followed to the sequence file it was built from."""
    (tmp_path / "genome.1gdb").write_text(GDB)
    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()
    monkeypatch.chdir(elsewhere)

    assert is_genome_skeleton(tmp_path / "genome.1gdb")
    assert not is_genome_skeleton(fasta_file)
    assert resolve_source("genome.1gdb", str(tmp_path)) == tmp_path / "genome.fa"

    with ContigReader("genome.1gdb", cpath=str(tmp_path)) as reader:
        assert reader.fmt == "fasta"
        assert list(reader) == CONTIGS


def test_genome_skeleton_without_parent(tmp_path):
    path = tmp_path / "orphan.1gdb"
    path.write_text("1 3 gdb 1 0\n< 9 genome.fa 2\nS 4 chr1\n")

    with pytest.raises(SequenceFormatError):
        ContigReader(path)


def test_genome_skeleton_parent_missing(tmp_path):
    (tmp_path / "genome.1gdb").write_text(GDB)

    with pytest.raises(FileNotFoundError):
        ContigReader(tmp_path / "genome.1gdb")


def test_extract(fasta_file):
    with ContigReader(fasta_file) as reader:
        assert reader.extract(1, 2, 6) == "gtTT"
        assert reader.extract(1, 3, 3) == ""
        assert reader.extract(4, 0, 8) == "ACGTACGT"


def test_extract_outside_contig(fasta_file):
    with ContigReader(fasta_file) as reader:
        with pytest.raises(ContigBoundsError):
            reader.extract(0, 2, 5)
        with pytest.raises(ContigBoundsError):
            reader.extract(0, 3, 2)


def test_custom_valid_bases(fasta_file):
    """N counts as a base when listed as valid."""
    with ContigReader(fasta_file, valid_bases="ACGTNacgt") as reader:
        assert reader.next_contig() == "ACGTNNNNacgtTTTT"
        assert reader.next_contig() == "NNGGCC"


def test_source_relative_to_cpath(fasta_file, tmp_path, monkeypatch):
    """A relative source is looked up in the recorded directory."""
    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()
    monkeypatch.chdir(elsewhere)

    assert resolve_source("genome.fa", str(tmp_path)) == tmp_path / "genome.fa"
    with ContigReader("genome.fa", cpath=str(tmp_path)) as reader:
        assert reader.next_contig() == "ACGT"


def test_missing_source(tmp_path):
    with pytest.raises(FileNotFoundError) as excinfo:
        ContigReader(tmp_path / "absent.fa", cpath=str(tmp_path / "dir"))
    assert "failed to open sequence file" in str(excinfo.value)


def test_gzipped_fasta(tmp_path):
    path = tmp_path / "genome.fa.gz"
    with gzip.open(path, 'wt') as f:
        f.write(FASTA)

    with ContigReader(path) as reader:
        assert list(reader) == CONTIGS


def test_fastq(tmp_path):
    path = tmp_path / "reads.fq"
    path.write_text("@r1\nACGTNNGG\n+\nIIIIIIII\n@r2\nTTTT\n+\nIIII\n")

    with ContigReader(path) as reader:
        assert reader.fmt == "fastq"
        assert list(reader) == ["ACGT", "GG", "TTTT"]


def test_guess_format(tmp_path):
    assert guess_format(tmp_path / "x.fasta") == "fasta"
    assert guess_format(tmp_path / "x.fastq.gz") == "fastq"
    assert guess_format(tmp_path / "x.seq") == "fasta"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

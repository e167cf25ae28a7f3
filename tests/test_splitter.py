import io

import pytest

from fsplit.errors import (
    ConfigurationConflictError,
    InvalidArgumentError,
    InvalidPathError,
    IOFailureError,
)
from fsplit.file import splitter
from fsplit.file.splitter import SplitState, split_file


def chunk_sizes(directory):
    return [p.stat().st_size for p in sorted(directory.glob("chunk-*.fsplit"))]


def test_split_into_equal_chunks(make_file, tmp_path):
    source = make_file(10000)
    out = tmp_path / "chunks"

    result = split_file(source, 4, out, block_size=1000)

    assert result.state is SplitState.DONE
    assert result.chunks_written == 4
    assert result.bytes_written == 10000
    assert sorted(p.name for p in out.iterdir()) == [
        "chunk-000.fsplit",
        "chunk-001.fsplit",
        "chunk-002.fsplit",
        "chunk-003.fsplit",
    ]
    assert chunk_sizes(out) == [2500, 2500, 2500, 2500]


def test_last_chunk_absorbs_remainder(make_file, tmp_path):
    source = make_file(10003)
    out = tmp_path / "chunks"

    split_file(source, 4, out, block_size=100)

    assert chunk_sizes(out) == [2500, 2500, 2500, 2503]
    joined = b"".join(p.read_bytes() for p in sorted(out.glob("chunk-*.fsplit")))
    assert joined == source.read_bytes()


def test_rejects_fewer_than_two_chunks(make_file, tmp_path):
    source = make_file(10000)
    out = tmp_path / "chunks"

    with pytest.raises(InvalidArgumentError):
        split_file(source, 1, out, block_size=1000)
    assert not out.exists()


def test_rejects_missing_source(tmp_path):
    with pytest.raises(InvalidPathError):
        split_file(tmp_path / "nope.bin", 2, tmp_path / "chunks", block_size=10)


def test_rejects_directory_as_source(tmp_path):
    with pytest.raises(InvalidPathError):
        split_file(tmp_path, 2, tmp_path / "chunks", block_size=10)


def test_rejects_uncreatable_output_dir(make_file, tmp_path):
    source = make_file(10000)
    blocker = tmp_path / "blocker"
    blocker.write_bytes(b"")

    with pytest.raises(InvalidPathError):
        split_file(source, 2, blocker, block_size=10)
    with pytest.raises(InvalidPathError):
        split_file(source, 2, blocker / "sub", block_size=10)


def test_rejects_block_size_larger_than_chunk(make_file, tmp_path):
    source = make_file(10000)
    out = tmp_path / "chunks"

    with pytest.raises(ConfigurationConflictError):
        split_file(source, 4, out, block_size=2501)
    assert list(out.iterdir()) == []


@pytest.mark.parametrize("block_size", [0, -1])
def test_rejects_non_positive_block_size(make_file, tmp_path, block_size):
    with pytest.raises(InvalidArgumentError):
        split_file(make_file(100), 2, tmp_path / "chunks", block_size=block_size)


def test_creates_nested_output_dir(make_file, tmp_path):
    out = tmp_path / "a" / "b" / "c"

    split_file(make_file(400), 2, out, block_size=50)

    assert chunk_sizes(out) == [200, 200]


def test_progress_reported_per_chunk(make_file, tmp_path):
    seen = []

    split_file(make_file(900), 3, tmp_path / "chunks", block_size=100, progress_callback=seen.append)

    assert [p.chunk_index for p in seen] == [0, 1, 2]
    assert [p.bytes_written for p in seen] == [300, 600, 900]
    assert seen[-1].progress_percent == 100.0


def test_stops_when_source_runs_out(make_file, tmp_path, monkeypatch):
    source = make_file(10000)
    out = tmp_path / "chunks"
    real_open = open

    # Source shrinks to 5000 bytes after its size was taken.
    def fake_open(path, mode='r', *args, **kwargs):
        if mode == 'rb' and str(path) == str(source):
            return io.BytesIO(source.read_bytes()[:5000])
        return real_open(path, mode, *args, **kwargs)

    monkeypatch.setattr(splitter, "open", fake_open, raising=False)

    result = split_file(source, 4, out, block_size=1000)

    assert result.state is SplitState.EXHAUSTED_EARLY
    assert result.bytes_written == 5000
    assert chunk_sizes(out) == [2500, 2500, 0]
    assert not (out / "chunk-003.fsplit").exists()


def test_write_failure_keeps_earlier_chunks(make_file, tmp_path):
    source = make_file(1000)
    out = tmp_path / "chunks"
    (out / "chunk-001.fsplit").mkdir(parents=True)

    with pytest.raises(IOFailureError):
        split_file(source, 2, out, block_size=100)

    assert (out / "chunk-000.fsplit").stat().st_size == 500


def test_split_into_max_chunks(make_file, tmp_path):
    source = make_file(10000)
    out = tmp_path / "chunks"

    result = split_file(source, 1000, out, block_size=10)

    assert result.chunks_written == 1000
    assert result.chunk_paths[-1].name == "chunk-999.fsplit"
    joined = b"".join(p.read_bytes() for p in result.chunk_paths)
    assert joined == source.read_bytes()

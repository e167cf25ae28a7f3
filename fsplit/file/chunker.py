"""
Chunk Naming and Block Copying

Design Decision: Chunk Naming
=============================

Options Considered:
1. Source-derived names (report.pdf_chunk00001)
   - Self-describing, but ties merge to the original name
2. Hash-named chunks
   - Needs a manifest to know the order
3. Fixed prefix + zero-padded index (chunk-000.fsplit)
   - Order is encoded in the name, no metadata file needed

Decision: chunk-%03d.fsplit
- Index starts at 0 and is padded to 3 digits
- Order comes from the index, never from directory listing order
- Existing chunk directories stay readable, so the format is frozen

Design Decision: Block Size
===========================

Block size is the most bytes moved per read/write call. It only bounds
memory use; chunk boundaries come from ChunkSpec. Default is 64000 bytes.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterable, List, Optional, Tuple, Union

from ..errors import ConfigurationConflictError, InvalidArgumentError

logger = logging.getLogger(__name__)

CHUNK_PREFIX = "chunk-"
CHUNK_SUFFIX = ".fsplit"
DEFAULT_BLOCK_SIZE = 64000
MIN_CHUNKS = 2
MAX_CHUNKS = 1000  # 3-digit index


def chunk_name(index: int) -> str:
    """File name for the chunk at `index`."""
    return f"{CHUNK_PREFIX}{index:03d}{CHUNK_SUFFIX}"


def is_chunk_name(name: str) -> bool:
    return name.startswith(CHUNK_PREFIX) and name.endswith(CHUNK_SUFFIX)


def chunk_index(name: str) -> Optional[int]:
    """
    Parse the index out of a chunk file name.

    Returns:
        The index, or None if the name does not follow the convention
    """
    if not is_chunk_name(name):
        return None
    middle = name[len(CHUNK_PREFIX):len(name) - len(CHUNK_SUFFIX)]
    if not middle.isdigit():
        return None
    return int(middle)


def list_chunk_files(directory: Union[str, Path]) -> List[str]:
    """
    List chunk file names in a directory, ordered by index.

    Names that match the prefix/suffix but carry no numeric index sort last.
    """
    names = [name for name in os.listdir(directory) if is_chunk_name(name)]

    def sort_key(name):
        index = chunk_index(name)
        return (index is None, index if index is not None else 0, name)

    return sorted(names, key=sort_key)


def find_missing_indices(names: Iterable[str]) -> List[int]:
    """Indices absent from 0..max(index) for the given chunk names."""
    indices = {chunk_index(n) for n in names}
    indices.discard(None)
    if not indices:
        return []
    return [i for i in range(max(indices) + 1) if i not in indices]


@dataclass(frozen=True)
class ChunkSpec:
    """
    How a source file is laid out across chunk files.

    chunk_size comes from integer division. Every chunk except the last
    holds exactly chunk_size bytes; the last one also takes the remainder.
    """
    total_size: int
    chunk_count: int

    @property
    def chunk_size(self) -> int:
        return self.total_size // self.chunk_count

    @property
    def remainder(self) -> int:
        return self.total_size - self.chunk_size * self.chunk_count

    def is_last(self, index: int) -> bool:
        return index == self.chunk_count - 1

    def get_chunk_bounds(self, index: int) -> Tuple[int, int]:
        """
        Get byte range for a specific chunk.

        Returns:
            (start_offset, length) tuple
        """
        if index < 0 or index >= self.chunk_count:
            raise IndexError(f"chunk index out of range: {index}")
        start = index * self.chunk_size
        length = self.chunk_size
        if self.is_last(index):
            length += self.remainder
        return start, length

    def expected_sizes(self) -> List[int]:
        return [self.get_chunk_bounds(i)[1] for i in range(self.chunk_count)]

    @classmethod
    def plan(cls, total_size: int, chunk_count: int, block_size: int) -> 'ChunkSpec':
        """
        Build a spec, rejecting combinations the copy loop cannot honour.

        Raises:
            InvalidArgumentError: chunk_count outside 2..MAX_CHUNKS
            ConfigurationConflictError: block_size exceeds chunk_size
        """
        validate_chunk_count(chunk_count)
        spec = cls(total_size=total_size, chunk_count=chunk_count)
        if block_size > spec.chunk_size:
            raise ConfigurationConflictError(
                f"input file size / number of chunks ({spec.chunk_size}) "
                f"must not be smaller than block size ({block_size})"
            )
        return spec


def validate_chunk_count(chunk_count: int):
    if chunk_count < MIN_CHUNKS:
        raise InvalidArgumentError(
            f"number of chunks must be greater than 1 (got {chunk_count})"
        )
    if chunk_count > MAX_CHUNKS:
        raise InvalidArgumentError(
            f"number of chunks must not exceed {MAX_CHUNKS} (got {chunk_count})"
        )


def validate_block_size(block_size: int):
    if not isinstance(block_size, int) or isinstance(block_size, bool) or block_size <= 0:
        raise InvalidArgumentError(f"block size must be a positive integer (got {block_size!r})")


def copy_blocks(src: BinaryIO, dst: BinaryIO, block_size: int,
                limit: Optional[int] = None) -> int:
    """
    Copy from `src` to `dst` one block at a time.

    Args:
        src: Readable binary stream
        dst: Writable binary stream
        block_size: Most bytes read per call
        limit: Stop after this many bytes (None = until end of stream)

    Returns:
        Bytes copied. Less than `limit` means `src` ran out.
    """
    copied = 0
    while limit is None or copied < limit:
        want = block_size if limit is None else min(block_size, limit - copied)
        data = src.read(want)
        if not data:
            break
        dst.write(data)
        copied += len(data)
    return copied

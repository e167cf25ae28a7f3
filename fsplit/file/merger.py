"""
Chunk Merger

Rebuilds a file by concatenating chunk files in index order.

The directory listing is only used to count chunk files. The names read
are re-derived from 0..count-1, so the indices must be contiguous. A gap
fails the merge instead of being skipped. No manifest is consulted, so a
merge cannot tell whether the chunks came from one split.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from ..errors import ChunkNotFoundError, InvalidPathError, IOFailureError
from .chunker import DEFAULT_BLOCK_SIZE, chunk_name, copy_blocks, is_chunk_name, validate_block_size

logger = logging.getLogger(__name__)


@dataclass
class MergeProgress:
    """Progress of an ongoing merge, reported once per chunk file."""
    chunk_index: int
    chunk_count: int
    bytes_written: int


@dataclass
class MergeResult:
    """Outcome of a merge."""
    output_path: Path
    chunk_count: int = 0
    bytes_written: int = 0


def count_chunk_files(chunk_dir: Union[str, Path]) -> int:
    """
    Count chunk files in a directory.

    Raises:
        InvalidPathError: Not a directory, unreadable, or empty
    """
    chunk_dir = Path(chunk_dir)
    if not chunk_dir.is_dir():
        raise InvalidPathError(f"invalid directory: {chunk_dir}")

    try:
        entries = os.listdir(chunk_dir)
    except OSError as e:
        raise InvalidPathError(f"cannot list directory {chunk_dir}: {e}") from e

    if not entries:
        raise InvalidPathError(f"empty directory: {chunk_dir}")

    return sum(1 for name in entries if is_chunk_name(name))


def merge_chunks(chunk_dir: Union[str, Path], output_path: Union[str, Path],
                 block_size: int = DEFAULT_BLOCK_SIZE,
                 progress_callback: Optional[Callable[[MergeProgress], None]] = None
                 ) -> MergeResult:
    """
    Merge the chunk files in `chunk_dir` into `output_path`.

    Args:
        chunk_dir: Directory holding chunk-NNN.fsplit files
        output_path: File to write, truncated if it exists
        block_size: Bytes moved per read/write call
        progress_callback: Called after each chunk is appended

    Returns:
        MergeResult with the chunk count and bytes written

    Raises:
        InvalidArgumentError: Bad block size
        InvalidPathError: chunk_dir missing, unreadable or empty
        ChunkNotFoundError: An index in 0..count-1 has no file
        IOFailureError: Any other read or write failure
    """
    validate_block_size(block_size)

    chunk_dir = Path(chunk_dir)
    output_path = Path(output_path)
    total_files = count_chunk_files(chunk_dir)

    if total_files == 0:
        logger.warning(f"No chunk files to merge in {chunk_dir}")

    logger.info(f"Merging {chunk_dir} into {output_path}")
    logger.info(f"  Chunk files: {total_files}")
    logger.info(f"  Block size: {block_size}")

    result = MergeResult(output_path=output_path)

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'wb') as dst:
            for index in range(total_files):
                chunk_path = chunk_dir / chunk_name(index)
                logger.info(f"Merging file {index + 1} of {total_files}...")

                try:
                    src = open(chunk_path, 'rb')
                except FileNotFoundError as e:
                    raise ChunkNotFoundError(f"missing chunk {chunk_path.name} in {chunk_dir}") from e

                with src:
                    result.bytes_written += copy_blocks(src, dst, block_size)
                result.chunk_count += 1

                if progress_callback:
                    progress_callback(MergeProgress(
                        chunk_index=index,
                        chunk_count=total_files,
                        bytes_written=result.bytes_written,
                    ))
    except IOFailureError:
        raise
    except OSError as e:
        raise IOFailureError(f"merge into {output_path} failed: {e}") from e

    logger.info("Operation completed!")
    return result

"""
File Splitter

Splits one source file into a fixed number of chunk files.

State machine:
```
FILLING(0) -> FILLING(1) -> ... -> FILLING(n-1) -> DONE
    |             |                    |
    +-------------+--------------------+--> EXHAUSTED_EARLY
```
EXHAUSTED_EARLY happens when the source has fewer bytes than planned
(e.g. it was truncated during the split). It is a normal end state, not
an error. Chunks written before it stay on disk.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Union

from ..errors import InvalidPathError, IOFailureError
from .chunker import (
    DEFAULT_BLOCK_SIZE,
    ChunkSpec,
    chunk_name,
    copy_blocks,
    validate_block_size,
    validate_chunk_count,
)

logger = logging.getLogger(__name__)


class SplitState(Enum):
    """Terminal states of a split."""
    DONE = "done"
    EXHAUSTED_EARLY = "exhausted_early"


@dataclass
class SplitProgress:
    """Progress of an ongoing split, reported once per chunk file."""
    chunk_index: int
    chunk_count: int
    bytes_written: int
    total_size: int

    @property
    def progress_percent(self) -> float:
        if self.total_size == 0:
            return 100.0
        return (self.bytes_written / self.total_size) * 100


@dataclass
class SplitResult:
    """Outcome of a split."""
    spec: ChunkSpec
    block_size: int
    state: SplitState = SplitState.DONE
    chunk_paths: List[Path] = field(default_factory=list)
    bytes_written: int = 0

    @property
    def chunks_written(self) -> int:
        return len(self.chunk_paths)


def split_file(source: Union[str, Path], chunk_count: int,
               output_dir: Union[str, Path],
               block_size: int = DEFAULT_BLOCK_SIZE,
               progress_callback: Optional[Callable[[SplitProgress], None]] = None
               ) -> SplitResult:
    """
    Split a file into `chunk_count` chunk files inside `output_dir`.

    All checks run before any chunk file is opened, in this order:
    chunk count, source file, output directory, block size.

    Args:
        source: File to split
        chunk_count: Number of chunk files to create (2..1000)
        output_dir: Directory for the chunk files, created if absent
        block_size: Bytes moved per read/write call
        progress_callback: Called after each chunk file is closed

    Returns:
        SplitResult describing the chunks written

    Raises:
        InvalidArgumentError: Bad chunk count or block size
        InvalidPathError: Source not a regular file, output dir unusable
        ConfigurationConflictError: Block size larger than chunk size
        IOFailureError: Read or write failure mid-split
    """
    validate_chunk_count(chunk_count)
    validate_block_size(block_size)

    source = Path(source)
    if not source.is_file():
        raise InvalidPathError(f"invalid input file: {source}")

    output_dir = Path(output_dir)
    if not output_dir.is_dir():
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise InvalidPathError(f"error creating output directory: {output_dir} ({e})") from e

    try:
        total_size = source.stat().st_size
    except OSError as e:
        raise IOFailureError(f"cannot stat {source}: {e}") from e

    spec = ChunkSpec.plan(total_size, chunk_count, block_size)
    result = SplitResult(spec=spec, block_size=block_size)

    logger.info(f"Splitting {source} into {output_dir}")
    logger.info(f"  Number of chunks: {spec.chunk_count}")
    logger.info(f"  Chunk size: {spec.chunk_size}")
    logger.info(f"  Block size: {block_size}")

    try:
        with open(source, 'rb') as src:
            for index in range(spec.chunk_count):
                chunk_path = output_dir / chunk_name(index)
                logger.info(f"Creating file {index + 1} of {spec.chunk_count}...")

                # The last chunk has no quota; it takes the remainder too.
                quota = None if spec.is_last(index) else spec.chunk_size
                with open(chunk_path, 'wb') as dst:
                    written = copy_blocks(src, dst, block_size, limit=quota)

                result.chunk_paths.append(chunk_path)
                result.bytes_written += written

                if progress_callback:
                    progress_callback(SplitProgress(
                        chunk_index=index,
                        chunk_count=spec.chunk_count,
                        bytes_written=result.bytes_written,
                        total_size=spec.total_size,
                    ))

                if quota is not None and written < quota:
                    result.state = SplitState.EXHAUSTED_EARLY
                    logger.warning(
                        f"Source exhausted after {index + 1} of {spec.chunk_count} chunks"
                    )
                    break
    except OSError as e:
        raise IOFailureError(f"split of {source} failed: {e}") from e

    logger.info("Operation completed!")
    return result

"""
fsplit - File Splitter and Merger

Splits a file into a fixed number of chunk files and merges them back.
"""

__version__ = "1.0.0"

from .config import Config, load_config
from .errors import (
    FSplitError,
    InvalidArgumentError,
    InvalidPathError,
    ConfigurationConflictError,
    IOFailureError,
    ChunkNotFoundError,
)
from .file import ChunkSpec, SplitResult, SplitState, MergeResult, split_file, merge_chunks

__all__ = [
    '__version__',
    'Config',
    'load_config',
    'FSplitError',
    'InvalidArgumentError',
    'InvalidPathError',
    'ConfigurationConflictError',
    'IOFailureError',
    'ChunkNotFoundError',
    'ChunkSpec',
    'SplitResult',
    'SplitState',
    'MergeResult',
    'split_file',
    'merge_chunks',
]

"""
File Module - Splitting and Merging

This module handles the chunk file operations for fsplit.
"""

from .chunker import (
    CHUNK_PREFIX,
    CHUNK_SUFFIX,
    DEFAULT_BLOCK_SIZE,
    MAX_CHUNKS,
    ChunkSpec,
    chunk_index,
    chunk_name,
    copy_blocks,
    find_missing_indices,
    is_chunk_name,
    list_chunk_files,
)
from .splitter import SplitProgress, SplitResult, SplitState, split_file
from .merger import MergeProgress, MergeResult, count_chunk_files, merge_chunks

__all__ = [
    'CHUNK_PREFIX',
    'CHUNK_SUFFIX',
    'DEFAULT_BLOCK_SIZE',
    'MAX_CHUNKS',
    'ChunkSpec',
    'chunk_index',
    'chunk_name',
    'copy_blocks',
    'find_missing_indices',
    'is_chunk_name',
    'list_chunk_files',
    'SplitProgress',
    'SplitResult',
    'SplitState',
    'split_file',
    'MergeProgress',
    'MergeResult',
    'count_chunk_files',
    'merge_chunks',
]

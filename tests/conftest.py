import os
from pathlib import Path

import pytest


@pytest.fixture
def make_file(tmp_path):
    """Create a file of `size` pseudo-random bytes and return its path."""
    def _make(size: int, name: str = "source.bin") -> Path:
        path = tmp_path / name
        path.write_bytes(os.urandom(size))
        return path
    return _make

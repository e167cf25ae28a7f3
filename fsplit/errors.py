"""
Error Types

Every failure in a split or merge is raised immediately to the caller.
Nothing is retried and nothing already written is rolled back.
"""


class FSplitError(Exception):
    """Base class for all split/merge failures."""


class InvalidArgumentError(FSplitError, ValueError):
    """A parameter is out of range (e.g. fewer than 2 chunks)."""


class InvalidPathError(FSplitError):
    """Source, destination or chunk directory is not usable."""


class ConfigurationConflictError(FSplitError, ValueError):
    """Block size is larger than the computed chunk size."""


class IOFailureError(FSplitError, OSError):
    """An underlying read or write failed."""


class ChunkNotFoundError(IOFailureError):
    """An expected chunk index is missing during a merge."""

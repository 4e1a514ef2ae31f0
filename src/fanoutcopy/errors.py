"""
Exception hierarchy for fanoutcopy.

Validation errors abort a run before any file is copied. ``CopyFailure`` is the
only per-operation error and is always recorded on an outcome instead of being
raised out of a batch.
"""

from pathlib import Path


class FanoutCopyError(Exception):
    """Base exception for all fanoutcopy errors."""


class InvalidThreadCountError(FanoutCopyError, ValueError):
    """Raised when the requested thread count is out of range."""

    def __init__(self, requested: int, host_parallelism: int):
        self.requested = requested
        self.host_parallelism = host_parallelism
        super().__init__(
            f"Thread count must be greater than 0 and at most {host_parallelism} "
            f"(available processors), got {requested}"
        )


class PathFormatError(FanoutCopyError, ValueError):
    """Raised when a token cannot be interpreted as a filesystem path."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Not a valid path: {token!r}")


class EmptyPathSetError(FanoutCopyError):
    """Raised when a path set is empty after filtering."""

    label = "paths"

    def __init__(self):
        super().__init__(f"At least one existing entry is required in {self.label}")


class EmptySourceSetError(EmptyPathSetError):
    label = "source files"


class EmptyTargetSetError(EmptyPathSetError):
    label = "target directories"


class CopyFailure(FanoutCopyError):
    """
    A single copy operation failed.

    Parameters
    ----------
    source : Path
        Source file that could not be copied
    target_dir : Path
        Target directory of the failed operation
    reason : str
        Human readable cause
    """

    def __init__(self, source: Path, target_dir: Path, reason: str):
        self.source = source
        self.target_dir = target_dir
        self.reason = reason
        super().__init__(f"Could not copy {source.name} into {target_dir}: {reason}")


class ExecutionError(FanoutCopyError):
    """Top-level error wrapping whatever stopped a run."""

    MESSAGE = "Error executing the copy batch."

    def __init__(self, message: str = MESSAGE):
        super().__init__(message)

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__

"""Worker pool sizing."""

import logging
import os

from .errors import InvalidThreadCountError

logger = logging.getLogger(__name__)


def host_parallelism() -> int:
    """Number of processors available to this process (at least 1)."""
    return os.cpu_count() or 1


def validate_thread_count(requested: int, parallelism: int) -> None:
    """
    Check the requested thread count against host parallelism.

    Raises
    ------
    InvalidThreadCountError
        If ``requested <= 0`` or ``requested > parallelism``
    """
    if requested <= 0 or requested > parallelism:
        raise InvalidThreadCountError(requested, parallelism)


def size_pool(
    requested: int,
    parallelism: int,
    source_count: int,
    log: logging.Logger | None = None,
) -> int:
    """
    Compute the number of workers for one run.

    Never allocates more workers than there are source files; fan-out to
    several targets does not add workers.

    Parameters
    ----------
    requested : int
        Thread count asked for by the caller
    parallelism : int
        Processors available on the host
    source_count : int
        Number of distinct source files

    Returns
    -------
    int
        ``min(requested, source_count)``
    """
    validate_thread_count(requested, parallelism)
    if source_count < 1:
        raise ValueError(f"Source count must be at least 1, got {source_count}")

    pool_size = min(requested, source_count)
    (log or logger).info("Using %d thread(s) for the copy batch", pool_size)
    return pool_size

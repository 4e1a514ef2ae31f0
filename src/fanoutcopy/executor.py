"""
Bounded-concurrency execution of copy operations.

Every operation produces exactly one ``CopyOutcome``. A failed copy is logged
and recorded; it never cancels sibling operations and never escapes
``CopyExecutor.run``.
"""

import logging
import shutil
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from .errors import CopyFailure
from .tasks import CopyOperation
from .verify import VerificationMode, verify_copy

logger = logging.getLogger(__name__)

CopyFunction = Callable[[Path, Path], object]


@dataclass(frozen=True)
class CopyOutcome:
    """
    Result of one copy operation.

    Attributes
    ----------
    operation : CopyOperation
        The operation that produced this outcome
    destination : Path | None, default=None
        Written destination path on success
    failure : CopyFailure | None, default=None
        Failure record if the copy did not complete
    """

    operation: CopyOperation
    destination: Path | None = None
    failure: CopyFailure | None = None

    @property
    def success(self) -> bool:
        return self.failure is None


def copy_file(
    operation: CopyOperation,
    copy_function: CopyFunction = shutil.copyfile,
    verification: VerificationMode = VerificationMode.NONE,
    hash_algorithm: str = "xxh64",
) -> Path:
    """
    Copy one source file into its target directory, replacing any existing file.

    Parameters
    ----------
    operation : CopyOperation
        Operation to perform
    copy_function : callable, default=shutil.copyfile
        ``copy_function(src, dst)`` primitive performing the actual copy
    verification : VerificationMode, default=VerificationMode.NONE
        Check applied to the destination after the copy
    hash_algorithm : str, default="xxh64"
        Algorithm used by ``VerificationMode.HASH``

    Returns
    -------
    Path
        The destination path

    Raises
    ------
    CopyFailure
        If the copy or its verification failed
    """
    destination = operation.destination
    try:
        copy_function(operation.source, destination)
        mismatch = verify_copy(
            operation.source, destination, verification, hash_algorithm
        )
    except Exception as e:
        raise CopyFailure(operation.source, operation.target_dir, str(e)) from e

    if mismatch:
        raise CopyFailure(operation.source, operation.target_dir, mismatch)
    return destination


class CopyExecutor:
    """
    Runs copy operations on a fixed-size thread pool.

    Parameters
    ----------
    pool_size : int
        Number of worker threads (at least 1)
    copy_function : callable, default=shutil.copyfile
        Copy primitive, ``copy_function(src, dst)``
    verification : VerificationMode, default=VerificationMode.NONE
        Post-copy check for every operation
    hash_algorithm : str, default="xxh64"
        Algorithm used by ``VerificationMode.HASH``
    log : logging.Logger | None, default=None
        Logger for per-operation lines (module logger if None)
    """

    def __init__(
        self,
        pool_size: int,
        copy_function: CopyFunction = shutil.copyfile,
        verification: VerificationMode = VerificationMode.NONE,
        hash_algorithm: str = "xxh64",
        log: logging.Logger | None = None,
    ):
        if pool_size < 1:
            raise ValueError(f"Pool size must be at least 1, got {pool_size}")
        self.pool_size = pool_size
        self.copy_function = copy_function
        self.verification = verification
        self.hash_algorithm = hash_algorithm
        self._log = log or logger

    def run(self, tasks: Iterable[CopyOperation]) -> list[CopyOutcome]:
        """
        Execute all operations and wait for every one of them.

        Parameters
        ----------
        tasks : Iterable[CopyOperation]
            Operations to run; each is executed exactly once

        Returns
        -------
        list[CopyOutcome]
            One outcome per operation, in no particular order
        """
        with ThreadPoolExecutor(
            max_workers=self.pool_size, thread_name_prefix="fanoutcopy"
        ) as executor:
            futures = [executor.submit(self._run_one, task) for task in tasks]

        # The pool is drained on exit, every future is done here
        return [future.result() for future in futures]

    def _run_one(self, operation: CopyOperation) -> CopyOutcome:
        try:
            destination = copy_file(
                operation,
                copy_function=self.copy_function,
                verification=self.verification,
                hash_algorithm=self.hash_algorithm,
            )
        except CopyFailure as e:
            self._log.error(
                "Could not copy %s into %s (%s), continuing",
                operation.source.name,
                operation.target_dir,
                e.reason,
            )
            return CopyOutcome(operation=operation, failure=e)

        self._log.info("Copied %s", destination)
        return CopyOutcome(operation=operation, destination=destination)

"""
Orchestration of one copy batch.

Validation (thread count, source set, target set, pool size, task list) is
all-or-nothing and happens before any file is copied. Execution is
best-effort: failed copies end up in the report, not in an exception.
"""

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from .errors import (
    EmptySourceSetError,
    EmptyTargetSetError,
    ExecutionError,
    FanoutCopyError,
)
from .executor import CopyExecutor, CopyFunction, CopyOutcome
from .paths import PathKind, parse_paths
from .pool import host_parallelism, size_pool, validate_thread_count
from .tasks import build_tasks
from .verify import HashCalculator, VerificationMode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchReport:
    """
    Aggregate result of a copy batch.

    Attributes
    ----------
    outcomes : tuple[CopyOutcome, ...]
        One outcome per attempted operation, unordered
    pool_size : int
        Number of workers used for the batch
    """

    outcomes: tuple[CopyOutcome, ...] = field(default_factory=tuple)
    pool_size: int = 1

    @property
    def attempted(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.success)

    @property
    def failed(self) -> int:
        return self.attempted - self.succeeded

    @property
    def failures(self) -> list[CopyOutcome]:
        return [o for o in self.outcomes if not o.success]

    @property
    def destinations(self) -> set[Path]:
        return {o.destination for o in self.outcomes if o.success}

    @property
    def success(self) -> bool:
        """True if every attempted copy succeeded."""
        return self.failed == 0

    def summary(self) -> str:
        return (
            f"{self.attempted} copy operation(s) attempted, "
            f"{self.succeeded} succeeded, {self.failed} failed"
        )


class FanoutCopier:
    """
    Copies every source file into every target directory.

    Parameters
    ----------
    parallelism : int | None, default=None
        Host parallelism used to bound the thread count (detected if None)
    copy_function : callable, default=shutil.copyfile
        Copy primitive, ``copy_function(src, dst)``
    verification : VerificationMode, default=VerificationMode.NONE
        Post-copy check for every operation
    hash_algorithm : str, default="xxh64"
        Algorithm used by ``VerificationMode.HASH``
    log : logging.Logger | None, default=None
        Logger passed down to every stage (module logger if None)

    Raises
    ------
    ValueError
        If ``verification`` is HASH and ``hash_algorithm`` is not supported
    """

    def __init__(
        self,
        parallelism: int | None = None,
        copy_function: CopyFunction = shutil.copyfile,
        verification: VerificationMode = VerificationMode.NONE,
        hash_algorithm: str = "xxh64",
        log: logging.Logger | None = None,
    ):
        if verification is VerificationMode.HASH:
            # Raises ValueError for an unknown algorithm before any copy starts
            HashCalculator(hash_algorithm)
        self.parallelism = parallelism if parallelism is not None else host_parallelism()
        self.copy_function = copy_function
        self.verification = verification
        self.hash_algorithm = hash_algorithm
        self._log = log or logger

    def execute(self, sources: str, targets: str, threads: int = 1) -> BatchReport:
        """
        Run one batch.

        Parameters
        ----------
        sources : str
            ``;``-delimited source file paths
        targets : str
            ``;``-delimited target directory paths
        threads : int, default=1
            Requested worker count, within ``(0, parallelism]``

        Returns
        -------
        BatchReport
            Outcomes of all attempted copies

        Raises
        ------
        ExecutionError
            If validation failed or the batch machinery itself broke. The
            original exception is chained as ``__cause__``.
        """
        try:
            validate_thread_count(threads, self.parallelism)

            source_set = parse_paths(sources, PathKind.FILE, log=self._log)
            self._log.info("%d distinct source file(s) to copy", len(source_set))
            if not source_set:
                raise EmptySourceSetError()

            target_set = parse_paths(targets, PathKind.DIRECTORY, log=self._log)
            self._log.info("%d distinct target directory(ies)", len(target_set))
            if not target_set:
                raise EmptyTargetSetError()

            pool_size = size_pool(
                threads, self.parallelism, len(source_set), log=self._log
            )
            tasks = build_tasks(source_set, target_set)

            executor = CopyExecutor(
                pool_size,
                copy_function=self.copy_function,
                verification=self.verification,
                hash_algorithm=self.hash_algorithm,
                log=self._log,
            )
            outcomes = executor.run(tasks)
        except FanoutCopyError as e:
            raise ExecutionError() from e
        except Exception as e:
            self._log.debug("Unexpected error during copy batch", exc_info=True)
            raise ExecutionError() from e

        report = BatchReport(outcomes=tuple(outcomes), pool_size=pool_size)
        if report.success:
            self._log.info(report.summary())
        else:
            self._log.warning(report.summary())
        return report

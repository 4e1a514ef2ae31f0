"""
fanoutcopy: parallel copy of many files into many directories.

Every source file is copied into every target directory on a bounded thread
pool. Individual copy failures are collected in a report instead of aborting
the batch.
"""

from .errors import (
    CopyFailure,
    EmptyPathSetError,
    EmptySourceSetError,
    EmptyTargetSetError,
    ExecutionError,
    FanoutCopyError,
    InvalidThreadCountError,
    PathFormatError,
)
from .executor import CopyExecutor, CopyOutcome, copy_file
from .cli import CopyConfig, main
from .orchestrator import BatchReport, FanoutCopier
from .paths import PathKind, parse_paths
from .pool import host_parallelism, size_pool, validate_thread_count
from .tasks import CopyOperation, build_tasks
from .verify import HashCalculator, VerificationMode

__version__ = "1.0.0"
__description__ = "Parallel copy of many files into many directories"

__all__ = [
    "BatchReport",
    "CopyConfig",
    "CopyExecutor",
    "CopyFailure",
    "CopyOperation",
    "CopyOutcome",
    "EmptyPathSetError",
    "EmptySourceSetError",
    "EmptyTargetSetError",
    "ExecutionError",
    "FanoutCopier",
    "FanoutCopyError",
    "HashCalculator",
    "InvalidThreadCountError",
    "PathFormatError",
    "PathKind",
    "VerificationMode",
    "build_tasks",
    "copy_file",
    "host_parallelism",
    "main",
    "parse_paths",
    "size_pool",
    "validate_thread_count",
]

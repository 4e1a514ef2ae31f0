#!/usr/bin/env python3
"""
fanoutcopy - copy a set of files into a set of directories in parallel.

Every source file is copied into every target directory on a bounded thread
pool. Paths are given as ``;``-delimited lists, either on the command line or
through environment variables exported by the hosting build tool.
"""

import argparse
import logging
import os
import sys
from dataclasses import dataclass

from .errors import ExecutionError
from .orchestrator import FanoutCopier
from .paths import SEPARATOR
from .verify import HASH_ALGORITHMS, VerificationMode

ENV_SOURCES = "FANOUTCOPY_SOURCES"
ENV_TARGETS = "FANOUTCOPY_TARGETS"
ENV_THREADS = "FANOUTCOPY_THREADS"


@dataclass
class CopyConfig:
    """Configuration for one fanoutcopy run."""

    sources: str
    targets: str
    threads: int = 1
    verification: VerificationMode = VerificationMode.NONE
    hash_algorithm: str = "xxh64"
    fail_on_error: bool = False
    verbose: bool = False

    def __post_init__(self):
        """Validate configuration."""
        if self.hash_algorithm.lower() not in HASH_ALGORITHMS:
            raise ValueError(f"Invalid hash algorithm: {self.hash_algorithm}")
        self.hash_algorithm = self.hash_algorithm.lower()

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "CopyConfig":
        """Create config from command-line arguments."""
        return cls(
            sources=args.sources,
            targets=args.targets,
            threads=args.threads,
            verification=VerificationMode(args.mode),
            hash_algorithm=args.hash_algorithm,
            fail_on_error=args.fail_on_error,
            verbose=args.verbose,
        )


def setup_logging(verbose: bool = False) -> None:
    """
    Configure logging for the application.

    Parameters
    ----------
    verbose : bool
        Enable verbose logging
    """
    log_level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(levelname)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Sources and targets fall back to the ``FANOUTCOPY_SOURCES`` and
    ``FANOUTCOPY_TARGETS`` environment variables.

    Returns
    -------
    argparse.Namespace
        Parsed command line arguments
    """
    parser = argparse.ArgumentParser(
        prog="fanoutcopy",
        description="Copy every source file into every target directory in parallel",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Paths are separated by '{SEPARATOR}'.

Examples:
  %(prog)s -s "a.txt;b.txt" -t "/tmp/x;/tmp/y" -n 2
  %(prog)s -s "app.jar" -t "/srv/node1;/srv/node2" -m hash --fail-on-error
        """,
    )

    parser.add_argument(
        "-s",
        "--sources",
        type=str,
        default=os.environ.get(ENV_SOURCES),
        help=f"Source files to copy (default: ${ENV_SOURCES})",
    )

    parser.add_argument(
        "-t",
        "--targets",
        type=str,
        default=os.environ.get(ENV_TARGETS),
        help=f"Target directories to copy into (default: ${ENV_TARGETS})",
    )

    parser.add_argument(
        "-n",
        "--threads",
        type=int,
        default=None,
        help=f"Number of worker threads (default: ${ENV_THREADS} or 1)",
    )

    parser.add_argument(
        "-m",
        "--mode",
        type=str,
        default="none",
        choices=[mode.value for mode in VerificationMode],
        help="Post-copy verification mode (default: none)",
    )

    parser.add_argument(
        "--hash-algorithm",
        type=str,
        default="xxh64",
        choices=list(HASH_ALGORITHMS),
        help="Hash algorithm for hash verification (default: xxh64)",
    )

    parser.add_argument(
        "--fail-on-error",
        action="store_true",
        help="Exit with status 1 if any single copy failed",
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )

    args = parser.parse_args(argv)

    if args.sources is None:
        parser.error(f"the following arguments are required: -s/--sources (or ${ENV_SOURCES})")
    if args.targets is None:
        parser.error(f"the following arguments are required: -t/--targets (or ${ENV_TARGETS})")
    if args.threads is None:
        value = os.environ.get(ENV_THREADS) or "1"
        try:
            args.threads = int(value)
        except ValueError:
            parser.error(f"${ENV_THREADS} must be an integer, got {value!r}")

    return args


def main(argv: list[str] | None = None) -> int:
    """
    CLI entry point.

    Returns
    -------
    int
        Exit code: 0 for success, 1 for failure, 130 for keyboard interrupt
    """
    args = parse_arguments(argv)

    try:
        config = CopyConfig.from_args(args)
    except ValueError as e:
        print(f"Invalid parameter: {e}", file=sys.stderr)
        return 2

    setup_logging(config.verbose)

    copier = FanoutCopier(
        verification=config.verification,
        hash_algorithm=config.hash_algorithm,
    )

    try:
        report = copier.execute(config.sources, config.targets, config.threads)
    except KeyboardInterrupt:
        logging.error("Operation interrupted by user")
        return 130
    except ExecutionError as e:
        logging.error(f"{e} {e.cause}")
        if config.verbose:
            logging.exception("Traceback")
        return 1

    for outcome in report.failures:
        logging.error(f"Failed: {outcome.failure}")

    if config.fail_on_error and not report.success:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

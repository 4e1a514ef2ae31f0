"""Copy operations: one per (source file, target directory) pair."""

import itertools
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class CopyOperation:
    """
    Copy of one source file into one target directory.

    Attributes
    ----------
    source : Path
        Source file
    target_dir : Path
        Directory the file is copied into
    """

    source: Path
    target_dir: Path

    @property
    def destination(self) -> Path:
        """Target directory joined with the source file name."""
        return self.target_dir / self.source.name


def build_tasks(
    sources: Iterable[Path], targets: Iterable[Path]
) -> frozenset[CopyOperation]:
    """Build the cartesian product of sources and targets."""
    return frozenset(
        CopyOperation(source=source, target_dir=target)
        for source, target in itertools.product(set(sources), set(targets))
    )

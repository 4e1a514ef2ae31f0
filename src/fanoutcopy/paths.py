"""Parsing of ``;``-delimited path lists into validated path sets."""

import logging
from enum import Enum
from pathlib import Path

from .errors import PathFormatError

SEPARATOR = ";"

logger = logging.getLogger(__name__)


class PathKind(Enum):
    """
    Filter applied to parsed paths.

    Attributes
    ----------
    FILE : str
        Path exists and is a regular file
    DIRECTORY : str
        Path exists and is a directory
    """

    FILE = "file"
    DIRECTORY = "directory"

    def matches(self, path: Path) -> bool:
        if self is PathKind.FILE:
            return path.is_file()
        return path.is_dir()

    @property
    def description(self) -> str:
        if self is PathKind.FILE:
            return "source file"
        return "target directory"


def parse_paths(
    raw: str,
    kind: PathKind,
    separator: str = SEPARATOR,
    log: logging.Logger | None = None,
) -> frozenset[Path]:
    """
    Split a delimited string into a deduplicated set of existing paths.

    Parameters
    ----------
    raw : str
        Delimited list of paths, e.g. ``"a.txt;b.txt"``
    kind : PathKind
        Which paths to keep; everything else is dropped with an info line
    separator : str, default=";"
        Token delimiter
    log : logging.Logger | None, default=None
        Logger for accepted/rejected entries (module logger if None)

    Returns
    -------
    frozenset[Path]
        Accepted paths, possibly empty

    Raises
    ------
    PathFormatError
        If any token cannot be interpreted as a path (embedded NUL byte, or a
        name the filesystem refuses to look up, e.g. too long).
    """
    log = log or logger
    candidates = []
    for token in raw.split(separator):
        if not token:
            continue
        if "\x00" in token:
            raise PathFormatError(token)
        candidates.append(Path(token))

    accepted = set()
    seen = set()
    for path in candidates:
        if path in seen:
            continue
        seen.add(path)
        try:
            matched = kind.matches(path)
        except OSError as e:
            raise PathFormatError(str(path)) from e
        if matched:
            log.info("Accepted %s: %s", kind.description, path)
            accepted.add(path)
        else:
            log.info("Skipping %s, not an existing %s", path, kind.value)

    return frozenset(accepted)

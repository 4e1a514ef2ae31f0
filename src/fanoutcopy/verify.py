"""
Post-copy verification of destination files.

Verification runs inside the worker that performed the copy, so a mismatch is
reported on that operation's outcome like any other copy failure.
"""

import hashlib
from enum import Enum
from pathlib import Path

import xxhash

# Constants
BUFFER_SIZE = 8 * 1024 * 1024  # 8MB
HASH_ALGORITHMS = ("xxh64", "md5", "sha1", "sha256")


class VerificationMode(Enum):
    """
    Verification strategy applied after each copy.

    Attributes
    ----------
    NONE : str
        Trust the copy primitive
    SIZE : str
        Destination size must equal source size
    HASH : str
        Destination digest must equal source digest
    """

    NONE = "none"
    SIZE = "size"
    HASH = "hash"


class HashCalculator:
    """
    Hash calculator supporting multiple algorithms.

    Parameters
    ----------
    algorithm : str, default="xxh64"
        Hash algorithm to use. Supported: xxh64, md5, sha1, sha256
    """

    def __init__(self, algorithm: str = "xxh64"):
        self.algorithm = algorithm.lower()
        if self.algorithm == "xxh64":
            self._hasher = xxhash.xxh64()
        elif self.algorithm in ("md5", "sha1", "sha256"):
            self._hasher = hashlib.new(self.algorithm)
        else:
            raise ValueError(f"Unsupported hash algorithm: {algorithm}")

    def update(self, data: bytes) -> None:
        self._hasher.update(data)

    def hexdigest(self) -> str:
        return self._hasher.hexdigest()

    @staticmethod
    def hash_file(
        path: Path, algorithm: str = "xxh64", buffer_size: int = BUFFER_SIZE
    ) -> str:
        """
        Hash a whole file.

        Parameters
        ----------
        path : Path
            File to hash
        algorithm : str, default="xxh64"
            Hash algorithm to use
        buffer_size : int, default=8MB
            Read chunk size

        Returns
        -------
        str
            Hexadecimal digest
        """
        hasher = HashCalculator(algorithm)
        with open(path, "rb") as f:
            while chunk := f.read(buffer_size):
                hasher.update(chunk)
        return hasher.hexdigest()


def verify_copy(
    source: Path,
    destination: Path,
    mode: VerificationMode,
    algorithm: str = "xxh64",
) -> str | None:
    """
    Compare a destination file against its source.

    Returns
    -------
    str | None
        Description of the mismatch, or None if the copy verified
    """
    if mode is VerificationMode.NONE:
        return None

    source_size = source.stat().st_size
    dest_size = destination.stat().st_size
    if dest_size != source_size:
        return f"Size mismatch: expected {source_size}, got {dest_size}"

    if mode is VerificationMode.HASH:
        source_hash = HashCalculator.hash_file(source, algorithm)
        dest_hash = HashCalculator.hash_file(destination, algorithm)
        if dest_hash != source_hash:
            return f"Hash mismatch: {dest_hash} != {source_hash}"

    return None

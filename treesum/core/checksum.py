"""
Content checksums for manifest entries.

Checksums are SHA-1 digests rendered as 40 lowercase hex characters. The
algorithm is fixed; the manifest only needs content sensitivity and
determinism, not collision resistance.
"""

from __future__ import annotations

import hashlib
import re
from pathlib import Path

from treesum.core.walk import FileSystem, LocalFileSystem
from treesum.errors import ChecksumError

CHECKSUM_LENGTH = 40
CHECKSUM_PATTERN = re.compile(r"^[0-9a-f]{40}$")


def compute_bytes_checksum(data: bytes) -> str:
    """
    Compute the checksum of raw bytes.

    Args:
        data: Bytes to hash.

    Returns:
        Hex-encoded SHA-1 digest.

    Examples:
        >>> compute_bytes_checksum(b"hello")
        'aaf4c61ddcc5e8a2dabede0f3b482cd9aea9434d'
    """
    return hashlib.sha1(data).hexdigest()


def compute_file_checksum(path: str | Path, fs: FileSystem | None = None) -> str:
    """
    Compute the checksum of a file's entire contents.

    The whole file is read into memory before hashing.

    Args:
        path: Absolute path of the file.
        fs: Filesystem to read from (default: local disk).

    Returns:
        Hex-encoded SHA-1 digest.

    Raises:
        ChecksumError: If the file cannot be read.
    """
    fs = fs if fs is not None else LocalFileSystem()

    try:
        data = fs.read_bytes(str(path))
    except OSError as e:
        raise ChecksumError(
            "Failed to calculate checksum", path=path, original_error=e
        ) from e

    return compute_bytes_checksum(data)


def validate_checksum(value: str) -> bool:
    """
    Check that a string is a well-formed checksum.

    Examples:
        >>> validate_checksum("aaf4c61ddcc5e8a2dabede0f3b482cd9aea9434d")
        True
        >>> validate_checksum("AAF4")
        False
    """
    return bool(CHECKSUM_PATTERN.match(value))

"""
Atomic file writes for manifest artifacts.

Data goes to a temporary file next to the destination and is renamed into
place only after a successful flush, so the destination is never truncated.
"""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from pathlib import Path

from treesum.errors import WriteError

logger = logging.getLogger(__name__)

TEMP_PREFIX = ".treesum-"
TEMP_SUFFIX = ".tmp"
FILE_MODE = 0o644


def write_atomic(path: str | Path, data: bytes) -> None:
    """
    Write bytes to path atomically.

    Args:
        path: Destination file.
        data: Complete file contents.

    Raises:
        WriteError: If the file cannot be written. The destination is left
            untouched and the temporary file is removed.
    """
    path = Path(path)
    tmp_name: str | None = None

    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=TEMP_PREFIX, suffix=TEMP_SUFFIX, dir=path.parent
        )
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_name, FILE_MODE)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
        raise WriteError(
            "Failed to write checksums to file", path=path, original_error=e
        ) from e

    logger.debug("Wrote %d bytes to %s", len(data), path)

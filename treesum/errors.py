"""
Error hierarchy for manifest generation.

Every failure is fatal to the run. Errors carry the offending path and the
underlying cause so the CLI can report what failed and where.
"""

from __future__ import annotations

from pathlib import Path


class TreesumError(Exception):
    """Base class for all treesum errors."""

    operation = "generating manifest"

    def __init__(
        self,
        message: str,
        path: str | Path | None = None,
        original_error: BaseException | None = None,
    ):
        self.message = message
        self.path = str(path) if path is not None else None
        self.original_error = original_error
        super().__init__(self._format())

    def _format(self) -> str:
        text = self.message
        if self.path is not None:
            text = f"{text}: {self.path}"
        if self.original_error is not None:
            text = f"{text} ({self.original_error})"
        return text


class PathResolutionError(TreesumError):
    """The root directory could not be converted to an absolute path."""

    operation = "resolving root directory"


class TraversalError(TreesumError):
    """A directory could not be listed during the walk."""

    operation = "walking directory"


class ChecksumError(TreesumError):
    """A file could not be read while computing its checksum."""

    operation = "calculating checksum"


class SerializationError(TreesumError):
    """The manifest could not be encoded as JSON."""

    operation = "serializing manifest"


class WriteError(TreesumError):
    """The manifest artifact could not be written to its destination."""

    operation = "saving checksums"


class ConfigError(TreesumError):
    """A configuration file is unreadable or invalid."""

    operation = "loading config"

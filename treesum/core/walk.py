"""
Directory traversal with ignore-aware pruning.

The walk is a lazy, depth-first generator over visited entries. Children are
visited in lexicographic name order, so the same tree always yields the same
sequence. Filesystem access goes through the FileSystem protocol, which lets
tests inject an in-memory tree.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterator, Protocol

from treesum.core.ignore import IgnoreSpec
from treesum.errors import TraversalError

logger = logging.getLogger(__name__)

# Relative path of the root directory itself
ROOT_REL_PATH = "."
REL_PATH_SEPARATOR = "/"


class EntryKind(str, Enum):
    """Classification of a directory entry."""

    DIRECTORY = "directory"
    FILE = "file"
    OTHER = "other"


@dataclass(frozen=True)
class ListedEntry:
    """A single child returned by FileSystem.list_dir."""

    name: str
    kind: EntryKind


@dataclass(frozen=True)
class WalkEntry:
    """An entry visited during a walk."""

    rel_path: str
    abs_path: str
    kind: EntryKind

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


class FileSystem(Protocol):
    """Minimal filesystem interface used by the walker and checksummer."""

    def list_dir(self, path: str) -> list[ListedEntry]:
        """List the children of a directory. Raises OSError on failure."""
        ...

    def read_bytes(self, path: str) -> bytes:
        """Read a whole file. Raises OSError on failure."""
        ...


class LocalFileSystem:
    """
    FileSystem backed by the local disk.

    Symlinks are never followed into directories. A symlink whose target is a
    regular file is reported as FILE; broken symlinks, symlinks to
    directories, FIFOs, sockets and devices are reported as OTHER.
    """

    def list_dir(self, path: str) -> list[ListedEntry]:
        entries = []
        with os.scandir(path) as it:
            for dir_entry in it:
                entries.append(ListedEntry(dir_entry.name, _classify(dir_entry)))
        return entries

    def read_bytes(self, path: str) -> bytes:
        with open(path, "rb") as f:
            return f.read()


def _classify(dir_entry: os.DirEntry) -> EntryKind:
    if dir_entry.is_dir(follow_symlinks=False):
        return EntryKind.DIRECTORY
    if dir_entry.is_file():
        return EntryKind.FILE
    return EntryKind.OTHER


def _printable_name(name: str) -> str:
    """Decode a file name for the manifest, replacing invalid UTF-8 with U+FFFD."""
    return os.fsencode(name).decode("utf-8", "replace")


def _list_children(fs: FileSystem, parent: WalkEntry) -> list[WalkEntry]:
    try:
        listed = fs.list_dir(parent.abs_path)
    except OSError as e:
        raise TraversalError(
            "Failed to read directory", path=parent.abs_path, original_error=e
        ) from e

    children = []
    for child in sorted(listed, key=lambda c: c.name):
        name = _printable_name(child.name)
        if parent.rel_path == ROOT_REL_PATH:
            rel_path = name
        else:
            rel_path = f"{parent.rel_path}{REL_PATH_SEPARATOR}{name}"
        children.append(
            WalkEntry(
                rel_path=rel_path,
                abs_path=os.path.join(parent.abs_path, child.name),
                kind=child.kind,
            )
        )
    return children


def walk_tree(
    root: str | Path,
    *,
    ignore: IgnoreSpec | None = None,
    fs: FileSystem | None = None,
) -> Iterator[WalkEntry]:
    """
    Walk a directory tree depth-first, pruning ignored entries.

    The root is yielded first with relative path ".". An ignored directory is
    never listed, so nothing beneath it is visited. An ignored file is
    skipped and the walk continues with its siblings.

    Args:
        root: Absolute path of the directory to walk.
        ignore: Prefixes to exclude (default: nothing ignored).
        fs: Filesystem to read from (default: local disk).

    Yields:
        WalkEntry for every non-ignored entry, in visitation order.

    Raises:
        TraversalError: If any directory, including the root, cannot be read.
    """
    ignore = ignore if ignore is not None else IgnoreSpec()
    fs = fs if fs is not None else LocalFileSystem()

    root_entry = WalkEntry(ROOT_REL_PATH, str(root), EntryKind.DIRECTORY)
    if ignore.matches(root_entry.rel_path):
        logger.debug("Ignoring root directory %s", root_entry.abs_path)
        return

    yield root_entry

    # Stack of pending sibling iterators; avoids recursion limits on deep trees
    stack = [iter(_list_children(fs, root_entry))]
    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            continue

        if ignore.matches(entry.rel_path):
            if entry.is_dir:
                logger.debug("Pruning ignored directory %s", entry.rel_path)
            else:
                logger.debug("Skipping ignored entry %s", entry.rel_path)
            continue

        yield entry

        if entry.is_dir:
            stack.append(iter(_list_children(fs, entry)))

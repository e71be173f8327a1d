"""Shared fixtures: an in-memory filesystem and on-disk tree helpers."""

from __future__ import annotations

import posixpath
from pathlib import Path

import pytest

from treesum.core.walk import EntryKind, ListedEntry


class MemoryFileSystem:
    """
    In-memory FileSystem for walker and builder tests.

    Paths are absolute POSIX strings under ``root``. Failures can be
    injected per path for listing and reading.
    """

    def __init__(self, root: str = "/mem"):
        self.root = root
        self.kinds: dict[str, EntryKind] = {root: EntryKind.DIRECTORY}
        self.contents: dict[str, bytes] = {}
        self.list_errors: dict[str, OSError] = {}
        self.read_errors: dict[str, OSError] = {}
        self.listed: list[str] = []
        self.read: list[str] = []

    def abs(self, rel_path: str) -> str:
        return posixpath.join(self.root, rel_path)

    def _add_parents(self, path: str) -> None:
        parent = posixpath.dirname(path)
        while parent != self.root and parent not in self.kinds:
            self.kinds[parent] = EntryKind.DIRECTORY
            parent = posixpath.dirname(parent)

    def add_file(self, rel_path: str, data: bytes = b"") -> str:
        path = self.abs(rel_path)
        self._add_parents(path)
        self.kinds[path] = EntryKind.FILE
        self.contents[path] = data
        return path

    def add_dir(self, rel_path: str) -> str:
        path = self.abs(rel_path)
        self._add_parents(path)
        self.kinds[path] = EntryKind.DIRECTORY
        return path

    def add_other(self, rel_path: str) -> str:
        path = self.abs(rel_path)
        self._add_parents(path)
        self.kinds[path] = EntryKind.OTHER
        return path

    def fail_list(self, rel_path: str, error: OSError) -> None:
        self.list_errors[self.abs(rel_path) if rel_path else self.root] = error

    def fail_read(self, rel_path: str, error: OSError) -> None:
        self.read_errors[self.abs(rel_path)] = error

    def list_dir(self, path: str) -> list[ListedEntry]:
        self.listed.append(path)
        if path in self.list_errors:
            raise self.list_errors[path]
        if self.kinds.get(path) is not EntryKind.DIRECTORY:
            raise FileNotFoundError(2, "No such directory", path)

        # Unsorted on purpose; the walker must order children itself
        children = [
            ListedEntry(posixpath.basename(p), kind)
            for p, kind in self.kinds.items()
            if p != path and posixpath.dirname(p) == path
        ]
        return list(reversed(children))

    def read_bytes(self, path: str) -> bytes:
        self.read.append(path)
        if path in self.read_errors:
            raise self.read_errors[path]
        if path not in self.contents:
            raise FileNotFoundError(2, "No such file", path)
        return self.contents[path]


@pytest.fixture
def memfs() -> MemoryFileSystem:
    """Empty in-memory filesystem rooted at /mem."""
    return MemoryFileSystem()


@pytest.fixture
def memfs_at():
    """Factory for in-memory filesystems rooted at a given path."""
    return MemoryFileSystem


@pytest.fixture
def make_tree():
    """Factory that writes {rel_path: bytes} files under a root."""
    return write_tree


def write_tree(root: Path, files: dict[str, bytes]) -> Path:
    """Create files (and parent directories) under root."""
    for rel_path, data in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    return root


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """The hello/world tree: a.txt and sub/b.txt."""
    root = tmp_path / "project"
    root.mkdir()
    return write_tree(root, {"a.txt": b"hello", "sub/b.txt": b"world"})

"""
Checksum manifest schema.

A manifest is an ordered list of (path, checksum) records in traversal
order. It is created fresh for each run and has no identity across runs.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

from pydantic import BaseModel, ConfigDict, Field, RootModel

from treesum.core.checksum import CHECKSUM_PATTERN
from treesum.core.json_canonical import canonical_json_bytes, canonical_json_loads


class ChecksumEntry(BaseModel):
    """Checksum of a single file."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str = Field(description="Root-relative path, '/' separated")
    checksum: str = Field(
        pattern=CHECKSUM_PATTERN.pattern,
        description="Lowercase hex SHA-1 of the file contents",
    )


class Manifest(RootModel[list[ChecksumEntry]]):
    """
    Ordered sequence of checksum entries.

    Serializes directly as a JSON array of {"path", "checksum"} objects.
    """

    model_config = ConfigDict(frozen=True)

    root: list[ChecksumEntry] = Field(default_factory=list)

    def __iter__(self) -> Iterator[ChecksumEntry]:
        return iter(self.root)

    def __getitem__(self, index: int) -> ChecksumEntry:
        return self.root[index]

    def __len__(self) -> int:
        return len(self.root)

    def paths(self) -> list[str]:
        """Relative paths in manifest order."""
        return [entry.path for entry in self.root]

    def checksums(self) -> dict[str, str]:
        """Mapping of relative path to checksum."""
        return {entry.path: entry.checksum for entry in self.root}

    def to_json_bytes(self) -> bytes:
        """Serialize to pretty-printed JSON bytes."""
        return canonical_json_bytes(self.model_dump())

    def to_json(self) -> str:
        """Serialize to pretty-printed JSON."""
        return self.to_json_bytes().decode("utf-8")

    def save(self, path: Path) -> None:
        """Atomically write the manifest to a file."""
        from treesum.core.manifest.writer import write_atomic

        write_atomic(path, self.to_json_bytes())

    @classmethod
    def load(cls, path: Path) -> Manifest:
        """Load a manifest from file."""
        data = canonical_json_loads(Path(path).read_bytes())
        return cls.model_validate(data)

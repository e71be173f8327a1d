"""
Manifest builder: walk, filter, hash, collect.

Building is all-or-nothing. The first traversal or checksum failure aborts
the run and no partial manifest is returned.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from treesum.core.checksum import compute_file_checksum
from treesum.core.ignore import IgnoreSpec
from treesum.core.manifest.models import ChecksumEntry, Manifest
from treesum.core.walk import EntryKind, FileSystem, walk_tree

if TYPE_CHECKING:
    from treesum.config import ManifestConfig

logger = logging.getLogger(__name__)


def build_manifest(
    root: str | Path,
    ignore: IgnoreSpec | None = None,
    fs: FileSystem | None = None,
) -> Manifest:
    """
    Build a checksum manifest for a directory tree.

    Only regular files produce entries. Directories and entries that are
    neither files nor directories (broken symlinks, sockets, FIFOs) are
    skipped.

    Args:
        root: Absolute path of the directory to scan.
        ignore: Prefixes to exclude.
        fs: Filesystem to read from (default: local disk).

    Returns:
        Manifest with one entry per file, in traversal order.

    Raises:
        TraversalError: If a directory cannot be read.
        ChecksumError: If a file cannot be read.
    """
    entries: list[ChecksumEntry] = []

    for entry in walk_tree(root, ignore=ignore, fs=fs):
        if entry.kind is EntryKind.DIRECTORY:
            continue
        if entry.kind is EntryKind.OTHER:
            logger.debug("Skipping non-regular file %s", entry.rel_path)
            continue

        checksum = compute_file_checksum(entry.abs_path, fs=fs)
        logger.debug("%s  %s", checksum, entry.rel_path)
        entries.append(ChecksumEntry(path=entry.rel_path, checksum=checksum))

    return Manifest(entries)


def generate_manifest(
    config: ManifestConfig,
    fs: FileSystem | None = None,
) -> tuple[Manifest, Path]:
    """
    Run the full pipeline: resolve root, build, and save the manifest.

    Args:
        config: Run configuration.
        fs: Filesystem to scan (default: local disk). The artifact is always
            written to the local disk.

    Returns:
        Tuple of (manifest, output path).

    Raises:
        TreesumError: Any subclass, depending on which step failed.
    """
    root = config.resolve_root()
    logger.info("Calculating checksums under %s", root)
    if config.ignore:
        logger.info("Ignoring prefixes: %s", ", ".join(config.ignore.prefixes))

    manifest = build_manifest(root, ignore=config.ignore, fs=fs)

    output_path = config.output_path(root)
    manifest.save(output_path)
    logger.info("Saved %d checksums to %s", len(manifest), output_path)

    return manifest, output_path

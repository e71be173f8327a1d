"""Manifest system: checksum records, building, and atomic persistence."""

from treesum.core.manifest.builder import build_manifest, generate_manifest
from treesum.core.manifest.models import ChecksumEntry, Manifest
from treesum.core.manifest.writer import write_atomic

__all__ = [
    "ChecksumEntry",
    "Manifest",
    "build_manifest",
    "generate_manifest",
    "write_atomic",
]

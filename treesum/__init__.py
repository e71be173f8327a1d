"""
treesum: Deterministic checksum manifests for directory trees.

Walks a directory, skips ignored path prefixes, and records a SHA-1 checksum
for every regular file in a pretty-printed JSON manifest.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]

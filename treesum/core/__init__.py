"""Core manifest machinery: ignore rules, traversal, checksums, serialization."""

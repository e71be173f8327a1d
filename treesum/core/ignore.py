"""
Ignore specification for directory walks.

Paths are matched by plain string prefix against their root-relative form.
Matching is not segment aware: the prefix "src" also matches "src-old".
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

IGNORE_SEPARATOR = ","


class IgnoreSpec(BaseModel):
    """Immutable set of root-relative path prefixes to exclude."""

    model_config = ConfigDict(frozen=True)

    prefixes: tuple[str, ...] = Field(
        default=(), description="Root-relative path prefixes to ignore"
    )

    @classmethod
    def parse(cls, value: str | None) -> IgnoreSpec:
        """
        Build an ignore spec from a comma-separated list.

        Empty items are dropped, so a trailing comma does not produce a
        prefix that matches every path. Items are otherwise kept verbatim.

        Args:
            value: Comma-separated prefixes, or None/empty for no ignores.

        Returns:
            New IgnoreSpec.

        Examples:
            >>> IgnoreSpec.parse("build,dist").prefixes
            ('build', 'dist')
            >>> IgnoreSpec.parse("").prefixes
            ()
        """
        if not value:
            return cls()
        return cls.from_list(value.split(IGNORE_SEPARATOR))

    @classmethod
    def from_list(cls, items: list[str] | tuple[str, ...]) -> IgnoreSpec:
        """Build an ignore spec from already-split prefixes."""
        return cls(prefixes=tuple(item for item in items if item))

    def matches(self, rel_path: str) -> bool:
        """Return True if rel_path starts with any ignored prefix."""
        return any(rel_path.startswith(prefix) for prefix in self.prefixes)

    def __bool__(self) -> bool:
        return bool(self.prefixes)

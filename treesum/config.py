"""
Configuration for manifest runs.

Values come from three layers, highest precedence first: command-line
options (or their TREESUM_* environment variables), an optional YAML config
file, and the defaults below.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from treesum.core.ignore import IgnoreSpec
from treesum.errors import ConfigError, PathResolutionError

DEFAULT_ROOT_DIR = "."  # Scan the current directory
DEFAULT_OUTPUT = "checksums.json"  # Written inside the root directory
ENV_PREFIX = "TREESUM"  # TREESUM_DIR, TREESUM_OUTPUT, TREESUM_IGNORE


class ConfigFile(BaseModel):
    """Schema of the optional YAML config file."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    root_dir: str | None = Field(default=None, alias="dir")
    output: str | None = None
    ignore: str | list[str] | None = None

    def ignore_spec(self) -> IgnoreSpec | None:
        if self.ignore is None:
            return None
        if isinstance(self.ignore, str):
            return IgnoreSpec.parse(self.ignore)
        return IgnoreSpec.from_list(self.ignore)


class ManifestConfig(BaseModel):
    """Configuration for a single manifest run."""

    model_config = ConfigDict(frozen=True)

    root_dir: str = Field(default=DEFAULT_ROOT_DIR, description="Directory to scan")
    output: str = Field(
        default=DEFAULT_OUTPUT, description="Manifest filename, relative to root"
    )
    ignore: IgnoreSpec = Field(
        default_factory=IgnoreSpec, description="Path prefixes to exclude"
    )

    def resolve_root(self) -> Path:
        """
        Resolve the root directory to an absolute path.

        Symlinks in the path are kept as given.

        Raises:
            PathResolutionError: If the path is invalid or the working
                directory cannot be determined.
        """
        if "\x00" in self.root_dir:
            raise PathResolutionError(
                "Invalid root directory", path=repr(self.root_dir)
            )
        try:
            return Path(os.path.abspath(self.root_dir))
        except (OSError, ValueError) as e:
            raise PathResolutionError(
                "Failed to resolve root directory", path=self.root_dir, original_error=e
            ) from e

    def output_path(self, root: Path) -> Path:
        """Manifest destination; relative names are placed inside root."""
        return root / self.output

    @classmethod
    def from_sources(
        cls,
        file_config: ConfigFile | None = None,
        *,
        root_dir: str | None = None,
        output: str | None = None,
        ignore: str | None = None,
    ) -> ManifestConfig:
        """
        Merge explicit values over config file values over defaults.

        Args:
            file_config: Parsed config file, if any.
            root_dir: Explicit root directory.
            output: Explicit output filename.
            ignore: Explicit comma-separated ignore list.

        Returns:
            New ManifestConfig.
        """
        file_config = file_config or ConfigFile()
        values: dict[str, Any] = {}

        if root_dir is not None:
            values["root_dir"] = root_dir
        elif file_config.root_dir is not None:
            values["root_dir"] = file_config.root_dir

        if output is not None:
            values["output"] = output
        elif file_config.output is not None:
            values["output"] = file_config.output

        if ignore is not None:
            values["ignore"] = IgnoreSpec.parse(ignore)
        elif file_config.ignore is not None:
            values["ignore"] = file_config.ignore_spec()

        return cls(**values)


def load_config_file(path: str | Path) -> ConfigFile:
    """
    Load and validate a YAML config file.

    Recognized keys are ``dir``, ``output`` and ``ignore`` (a
    comma-separated string or a list of prefixes). An empty file is valid.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed ConfigFile.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, or has
            unknown keys or wrong value types.
    """
    path = Path(path)

    try:
        raw = path.read_bytes()
    except OSError as e:
        raise ConfigError("Failed to read config file", path=path, original_error=e) from e

    try:
        # Bytes are decoded by the YAML reader; bad encodings raise YAMLError
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError("Error parsing config", path=path, original_error=e) from e

    if data is None:
        return ConfigFile()
    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a mapping", path=path)

    try:
        return ConfigFile.model_validate(data)
    except ValidationError as e:
        raise ConfigError("Invalid config", path=path, original_error=e) from e

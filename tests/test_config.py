"""Tests for run configuration and config files."""

import os
from pathlib import Path

import pytest

from treesum.config import (
    DEFAULT_OUTPUT,
    ConfigFile,
    ManifestConfig,
    load_config_file,
)
from treesum.core.ignore import IgnoreSpec
from treesum.errors import ConfigError, PathResolutionError


class TestManifestConfig:
    """Tests for ManifestConfig."""

    def test_defaults(self):
        config = ManifestConfig()
        assert config.root_dir == "."
        assert config.output == DEFAULT_OUTPUT
        assert config.ignore.prefixes == ()

    def test_resolve_root_absolute(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert ManifestConfig().resolve_root() == Path(os.path.abspath(tmp_path))
        assert ManifestConfig(root_dir="sub").resolve_root() == tmp_path / "sub"

    def test_resolve_root_keeps_symlinks(self, tmp_path: Path):
        (tmp_path / "real").mkdir()
        os.symlink(tmp_path / "real", tmp_path / "alias")
        config = ManifestConfig(root_dir=str(tmp_path / "alias"))
        assert config.resolve_root() == tmp_path / "alias"

    def test_resolve_root_invalid(self):
        with pytest.raises(PathResolutionError):
            ManifestConfig(root_dir="bad\x00path").resolve_root()

    def test_output_path_relative_to_root(self, tmp_path: Path):
        config = ManifestConfig(output="sums.json")
        assert config.output_path(tmp_path) == tmp_path / "sums.json"

    def test_output_path_absolute_honored(self, tmp_path: Path):
        target = tmp_path / "elsewhere" / "sums.json"
        config = ManifestConfig(output=str(target))
        assert config.output_path(Path("/some/root")) == target


class TestFromSources:
    """Tests for merging config layers."""

    def test_no_sources_uses_defaults(self):
        assert ManifestConfig.from_sources() == ManifestConfig()

    def test_explicit_values(self):
        config = ManifestConfig.from_sources(
            root_dir="/data", output="out.json", ignore="build,dist"
        )
        assert config.root_dir == "/data"
        assert config.output == "out.json"
        assert config.ignore.prefixes == ("build", "dist")

    def test_file_values_used(self):
        file_config = ConfigFile.model_validate(
            {"dir": "/data", "output": "file.json", "ignore": ["a", "b"]}
        )
        config = ManifestConfig.from_sources(file_config)
        assert config.root_dir == "/data"
        assert config.output == "file.json"
        assert config.ignore == IgnoreSpec(prefixes=("a", "b"))

    def test_explicit_overrides_file(self):
        file_config = ConfigFile.model_validate(
            {"dir": "/data", "output": "file.json", "ignore": "a,b"}
        )
        config = ManifestConfig.from_sources(file_config, output="cli.json", ignore="c")
        assert config.root_dir == "/data"
        assert config.output == "cli.json"
        assert config.ignore.prefixes == ("c",)

    def test_explicit_empty_ignore_clears_file(self):
        file_config = ConfigFile.model_validate({"ignore": "a"})
        config = ManifestConfig.from_sources(file_config, ignore="")
        assert config.ignore.prefixes == ()


class TestLoadConfigFile:
    """Tests for YAML config loading."""

    def test_load_valid(self, tmp_path: Path):
        path = tmp_path / "treesum.yaml"
        path.write_text("dir: src\noutput: sums.json\nignore:\n  - build\n  - .git\n")

        file_config = load_config_file(path)
        assert file_config.root_dir == "src"
        assert file_config.output == "sums.json"
        assert file_config.ignore_spec().prefixes == ("build", ".git")

    def test_comma_string_ignore(self, tmp_path: Path):
        path = tmp_path / "treesum.yaml"
        path.write_text("ignore: build,dist\n")
        assert load_config_file(path).ignore_spec().prefixes == ("build", "dist")

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "treesum.yaml"
        path.write_text("")
        assert load_config_file(path) == ConfigFile()

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError) as exc_info:
            load_config_file(tmp_path / "missing.yaml")
        assert isinstance(exc_info.value.original_error, FileNotFoundError)

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "treesum.yaml"
        path.write_text("dir: [unclosed\n")
        with pytest.raises(ConfigError):
            load_config_file(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "treesum.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            load_config_file(path)

    def test_unknown_key(self, tmp_path: Path):
        path = tmp_path / "treesum.yaml"
        path.write_text("algorithm: md5\n")
        with pytest.raises(ConfigError):
            load_config_file(path)

    def test_wrong_type(self, tmp_path: Path):
        path = tmp_path / "treesum.yaml"
        path.write_text("output: 42\n")
        with pytest.raises(ConfigError):
            load_config_file(path)

    def test_invalid_encoding(self, tmp_path: Path):
        path = tmp_path / "treesum.yaml"
        path.write_bytes(b"output: \xff.json\n")
        with pytest.raises(ConfigError) as exc_info:
            load_config_file(path)
        assert exc_info.value.operation == "loading config"

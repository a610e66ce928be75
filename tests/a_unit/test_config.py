"""Unit tests for build configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from es2yui.config import BuildConfig, find_build_config, load_build_config
from es2yui.errors import ConfigError


class TestLoadBuildConfig:
    """Tests for load_build_config."""

    def test_full_config(self, tmp_path: Path) -> None:
        config_file = tmp_path / "es2yui.yaml"
        config_file.write_text(
            "root: src\n"
            "output_dir: build\n"
            "format: yui\n"
            'version: "3.18.1"\n'
            "modules:\n"
            "  - app/main.js\n"
            "  - app/util.js\n"
        )
        config = load_build_config(config_file)
        assert config.root == tmp_path / "src"
        assert config.output_dir == tmp_path / "build"
        assert config.format == "yui"
        assert config.version == "3.18.1"
        assert config.modules == ["app/main.js", "app/util.js"]

    def test_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "es2yui.yaml"
        config_file.write_text("")
        config = load_build_config(config_file)
        assert config.root == tmp_path / "."
        assert config.output_dir is None
        assert config.version == "@VERSION@"
        assert config.modules == []

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="cannot read configuration"):
            load_build_config(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "es2yui.yaml"
        config_file.write_text("modules: [unclosed\n")
        with pytest.raises(ConfigError, match="invalid YAML"):
            load_build_config(config_file)

    def test_top_level_must_be_mapping(self, tmp_path: Path) -> None:
        config_file = tmp_path / "es2yui.yaml"
        config_file.write_text("- a.js\n")
        with pytest.raises(ConfigError, match="expected a mapping"):
            load_build_config(config_file)

    def test_modules_must_be_list(self, tmp_path: Path) -> None:
        config_file = tmp_path / "es2yui.yaml"
        config_file.write_text("modules: main.js\n")
        with pytest.raises(ConfigError, match="must be a list"):
            load_build_config(config_file)


class TestFindBuildConfig:
    """Tests for configuration discovery."""

    def test_found_in_parent(self, tmp_path: Path) -> None:
        (tmp_path / "es2yui.yaml").write_text("modules: []\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_build_config(nested) == (tmp_path / "es2yui.yaml").resolve()

    def test_default_config(self) -> None:
        config = BuildConfig()
        assert config.format == "yui"
        assert config.root == Path()

"""Build configuration.

Loads an optional `es2yui.yaml` describing where modules live, where wrapped
output goes and which modules to start from:

    root: src
    output_dir: build
    format: yui
    version: "@VERSION@"
    modules:
      - app/main.js
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from es2yui.errors import ConfigError
from es2yui.formatters.base import VERSION_MARKER

DEFAULT_CONFIG_NAME = "es2yui.yaml"


@dataclass
class BuildConfig:
    """Configuration for a build.

    Attributes:
        root: Directory module names are relative to.
        output_dir: Directory for wrapped output (None prints to stdout).
        format: Name of the target module format.
        version: Version marker passed to the loader.
        modules: Entry module paths, relative to `root`.
    """

    root: Path = field(default_factory=Path)
    output_dir: Path | None = None
    format: str = "yui"
    version: str = VERSION_MARKER
    modules: list[str] = field(default_factory=list)


def load_build_config(config_path: Path | str) -> BuildConfig:
    """Load a build configuration from YAML.

    Relative `root` and `output_dir` values are resolved against the directory
    holding the configuration file.

    Args:
        config_path: Path to the YAML file.

    Returns:
        BuildConfig with defaults for missing keys.

    Raises:
        ConfigError: If the file cannot be read or has the wrong shape.
    """
    config_path = Path(config_path)
    try:
        with config_path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        msg = f"cannot read configuration {config_path}: {e}"
        raise ConfigError(msg) from e
    except yaml.YAMLError as e:
        msg = f"invalid YAML in {config_path}: {e}"
        raise ConfigError(msg) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        msg = f"{config_path}: expected a mapping at the top level"
        raise ConfigError(msg)

    base_path = config_path.parent
    root = base_path / str(data.get("root", "."))

    output_dir = None
    if data.get("output_dir"):
        output_dir = base_path / str(data["output_dir"])

    modules = data.get("modules", [])
    if not isinstance(modules, list):
        msg = f"{config_path}: `modules` must be a list of paths"
        raise ConfigError(msg)

    return BuildConfig(
        root=root,
        output_dir=output_dir,
        format=str(data.get("format", "yui")),
        version=str(data.get("version", VERSION_MARKER)),
        modules=[str(m) for m in modules],
    )


def find_build_config(start: Path | str) -> Path | None:
    """Return `es2yui.yaml` in `start` or its parents, if there is one."""
    start = Path(start).resolve()
    for directory in (start, *start.parents):
        candidate = directory / DEFAULT_CONFIG_NAME
        if candidate.is_file():
            return candidate
    return None


__all__ = ["DEFAULT_CONFIG_NAME", "BuildConfig", "find_build_config", "load_build_config"]

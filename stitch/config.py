"""
config.py

Responsibility: Load build settings from an optional YAML file into a typed model.

Every key is optional. Relative paths in the file are resolved against the
directory holding the file, so a site can be built from anywhere. The CLI
applies its flags on top of the result.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from stitch.errors import ConfigError
from stitch.registry import DEFAULT_EXTENSIONS

DEFAULT_CONFIG_NAME = "stitch.yaml"


@dataclass(frozen=True)
class BuildConfig:
    """Settings for one build of a root document."""

    components_dir: Path = Path("components")
    index: Path = Path("index.html")
    output: Path | None = None
    root_tag: str = "body"
    max_depth: int | None = 64
    inline_styles: bool = False
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS


_PATH_KEYS = ("components_dir", "index", "output")


def _as_path(key: str, raw: Any, base_dir: Path) -> Path:
    if not isinstance(raw, str) or not raw.strip():
        raise ConfigError(f"`{key}` must be a non-empty string path.")
    p = Path(raw.strip()).expanduser()
    return p if p.is_absolute() else base_dir / p


def _as_max_depth(raw: Any) -> int | None:
    if raw is None:
        return None
    if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
        raise ConfigError("`max_depth` must be a non-negative integer (0 disables the limit).")
    return raw or None


def _as_extensions(raw: Any) -> tuple[str, ...]:
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list) or not raw or not all(isinstance(e, str) and e for e in raw):
        raise ConfigError("`extensions` must be a non-empty list of file suffixes.")
    return tuple(e if e.startswith(".") else f".{e}" for e in raw)


def config_from_mapping(data: dict[str, Any], base_dir: Path) -> BuildConfig:
    known = {f.name for f in fields(BuildConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config key(s): {', '.join(map(str, unknown))}")

    values: dict[str, Any] = {}
    for key in _PATH_KEYS:
        if data.get(key) is not None:
            values[key] = _as_path(key, data[key], base_dir)

    if "root_tag" in data:
        root_tag = data["root_tag"]
        if not isinstance(root_tag, str) or not root_tag.strip():
            raise ConfigError("`root_tag` must be a non-empty string.")
        values["root_tag"] = root_tag.strip().lower()

    if "max_depth" in data:
        values["max_depth"] = _as_max_depth(data["max_depth"])

    if "inline_styles" in data:
        if not isinstance(data["inline_styles"], bool):
            raise ConfigError("`inline_styles` must be true or false.")
        values["inline_styles"] = data["inline_styles"]

    if "extensions" in data:
        values["extensions"] = _as_extensions(data["extensions"])

    if "components_dir" not in values:
        values["components_dir"] = base_dir / BuildConfig.components_dir
    if "index" not in values:
        values["index"] = base_dir / BuildConfig.index

    return BuildConfig(**values)


def load_config(config_path: str | Path | None = None) -> BuildConfig:
    """
    Load a `BuildConfig`.

    With no path, `stitch.yaml` in the current directory is used when present;
    otherwise defaults apply. An explicit path that does not exist is an error.
    """
    if config_path is None:
        path = Path(DEFAULT_CONFIG_NAME)
        if not path.exists():
            return BuildConfig()
    else:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Config file does not exist: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("Config file must be a mapping/object at the top level.")

    return config_from_mapping(data, path.resolve().parent)

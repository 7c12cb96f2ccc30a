"""Load WilsonConfig from wilson.yaml if present.

Merges file config with CLI kwargs. CLI overrides file.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import yaml

from wilson._errors import ConfigError
from wilson.config import WilsonConfig

CONFIG_NAMES = ("wilson.yaml", "wilson.yml", "wilson.toml")

_KNOWN_KEYS = frozenset({"pages_dir", "extensions", "page_size", "output"})


def load_config(root: Path, **overrides: object) -> WilsonConfig:
    """Load WilsonConfig from root, optionally merging wilson.yaml.

    Looks for wilson.yaml, wilson.yml, or wilson.toml in root. If found,
    loads and merges with overrides. Overrides take precedence; ``None``
    overrides are ignored so CLI defaults don't mask file values.
    """
    root = Path(root)
    file_config = _read_wilson_config(root)
    merged = {**file_config, **{k: v for k, v in overrides.items() if v is not None}}
    if "output" in merged and not isinstance(merged["output"], Path):
        merged["output"] = Path(str(merged["output"]))
    if "extensions" in merged and isinstance(merged["extensions"], str):
        merged["extensions"] = (merged["extensions"],)
    if "extensions" in merged:
        merged["extensions"] = tuple(merged["extensions"])  # type: ignore[arg-type]
    return WilsonConfig(root=root, **merged)  # type: ignore[arg-type]


def _read_wilson_config(root: Path) -> dict[str, object]:
    """Read wilson config from yaml/toml if present. Returns empty dict otherwise."""
    for name in CONFIG_NAMES[:2]:
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / CONFIG_NAMES[2]
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        msg = f"Malformed config file {path.name}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"Config file {path.name} must contain a mapping"
        raise ConfigError(msg)
    return _flatten_wilson_section(data)


def _parse_toml(path: Path) -> dict[str, object]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Malformed config file {path.name}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_wilson_section(data)


def _flatten_wilson_section(data: dict[str, object]) -> dict[str, object]:
    """Extract wilson.* keys into top-level config."""
    result: dict[str, object] = {}
    for k, v in data.items():
        if k != "wilson" and k in _KNOWN_KEYS:
            result[k] = v
    section = data.get("wilson")
    if isinstance(section, dict):
        for k, v in section.items():
            if k not in _KNOWN_KEYS:
                msg = f"Unknown config key: wilson.{k}"
                raise ConfigError(msg)
            result[k] = v
    return result

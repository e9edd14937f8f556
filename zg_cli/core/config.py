"""Configuration loading and persistence."""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # Python 3.9-3.10
    import tomli as tomllib  # type: ignore[no-redef]

from zg_cli.core.constants import (
    DEFAULT_CALORIES_PER_MINUTE,
    DEFAULT_DURATION_MINUTES,
    DURATION_CHOICES,
)


class ConfigError(RuntimeError):
    """Raised when config file parsing fails."""


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def expand_path(path_str: str) -> Path:
    """Expand user/env vars and return absolute path."""
    return Path(os.path.expandvars(path_str)).expanduser().resolve()


def default_data_dir() -> Path:
    """Resolve XDG-style data directory with env override."""
    raw = os.getenv("ZG_DATA_DIR", "~/.local/share/zg")
    return expand_path(raw)


def default_config_path() -> Path:
    """Get default config file path."""
    raw = os.getenv("ZG_CONFIG_FILE", "~/.config/zg/config.toml")
    return expand_path(raw)


def _default_config() -> Dict[str, Any]:
    data_dir = default_data_dir()
    return {
        "profile": {
            "name": "",
            "restrictions": [],
            "onboarding_complete": False,
        },
        "workout": {
            "default_duration": DEFAULT_DURATION_MINUTES,
            "durations": list(DURATION_CHOICES),
        },
        "catalog": {
            "path": "",
        },
        "store": {
            "path": str(data_dir / "zengym.json"),
        },
        "health": {
            "calories_per_minute": DEFAULT_CALORIES_PER_MINUTE,
        },
        "export": {
            "default_directory": "./zengym-export",
        },
    }


DEFAULT_CONFIG: Dict[str, Any] = _default_config()


def _read_config(path: Path) -> Dict[str, Any]:
    suffix = path.suffix.lower()
    text = path.read_text()
    try:
        if suffix in {".toml", ""}:
            loaded = tomllib.loads(text)
        else:
            loaded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {path} must contain an object/table at the root")
    return loaded


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from disk, merged with defaults."""
    cfg_path = path or default_config_path()
    cfg = _default_config()
    if cfg_path.exists():
        cfg = _deep_merge(cfg, _read_config(cfg_path))
    return cfg


def _toml_literal(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    if isinstance(value, list):
        items = ", ".join(_toml_literal(item) for item in value if item is not None)
        return f"[{items}]"
    raise TypeError(f"Unsupported TOML value type: {type(value)!r}")


def _dict_to_toml(data: Dict[str, Any], prefix: Optional[str] = None) -> str:
    lines = []
    plain_keys = []
    nested_keys = []

    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, dict):
            nested_keys.append((key, value))
        else:
            plain_keys.append((key, value))

    if prefix is not None:
        lines.append(f"[{prefix}]")

    for key, value in plain_keys:
        lines.append(f"{key} = {_toml_literal(value)}")

    if plain_keys and nested_keys:
        lines.append("")

    for index, (key, value) in enumerate(nested_keys):
        table_name = key if prefix is None else f"{prefix}.{key}"
        lines.append(_dict_to_toml(value, prefix=table_name))
        if index != len(nested_keys) - 1:
            lines.append("")

    return "\n".join(lines)


def save_config(config: Dict[str, Any], path: Optional[Path] = None) -> Path:
    """Save configuration to disk as TOML (default) or JSON."""
    cfg_path = path or default_config_path()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)

    if cfg_path.suffix.lower() == ".json":
        cfg_path.write_text(json.dumps(config, indent=2) + "\n")
        return cfg_path

    cfg_path.write_text(_dict_to_toml(config).strip() + "\n")
    return cfg_path


def resolve_store_path(config: Dict[str, Any]) -> Path:
    """Resolve the session store file from env/config."""
    raw = os.getenv("ZG_STORE_FILE") or config.get("store", {}).get("path")
    if not raw:
        raw = str(default_data_dir() / "zengym.json")
    return expand_path(raw)


def resolve_catalog_path(config: Dict[str, Any], explicit: Optional[Path] = None) -> Optional[Path]:
    """Resolve a custom catalog file; None means the bundled catalog."""
    if explicit is not None:
        return explicit.expanduser().resolve()
    raw = os.getenv("ZG_CATALOG_FILE") or config.get("catalog", {}).get("path")
    if not raw:
        return None
    return expand_path(raw)


def resolve_output_dir(config: Dict[str, Any], explicit: Optional[Path] = None) -> Path:
    """Resolve output directory with CLI override first."""
    if explicit is not None:
        return explicit.expanduser().resolve()
    raw = os.getenv("ZG_OUTPUT_DIR") or config.get("export", {}).get(
        "default_directory",
        "./zengym-export",
    )
    return expand_path(raw)


def calories_per_minute(config: Dict[str, Any]) -> float:
    try:
        return float(config.get("health", {}).get("calories_per_minute", DEFAULT_CALORIES_PER_MINUTE))
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"health.calories_per_minute must be a number: {exc}") from exc

"""Configuration loading for jsondoc (.jsondoc.yml)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_FILENAME = ".jsondoc.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class JsonDocConfig:
    """Settings read from .jsondoc.yml; paths are resolved against its directory."""

    root: Path
    output_dir: Path
    indent: Optional[int] = None
    log_file: Optional[Path] = None


def load_config(config_path: Path) -> JsonDocConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(Path(config_path))
    root = config_file.parent.resolve()

    if not config_file.exists():
        return JsonDocConfig(root=root, output_dir=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    output_dir_str = _as_str(data.get("output_dir"))
    log_file_str = _as_str(data.get("log_file"))

    indent = _as_int(data.get("indent"))
    if indent is not None and indent < 0:
        raise ConfigError("indent must be zero or a positive integer")

    return JsonDocConfig(
        root=root,
        output_dir=(root / output_dir_str) if output_dir_str else root,
        indent=indent,
        log_file=(root / log_file_str) if log_file_str else None,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError as exc:
            raise ConfigError(f"Expected an integer, got {value!r}") from exc
    if value is None:
        return None
    raise ConfigError(f"Expected an integer, got {value!r}")


__all__ = ["CONFIG_FILENAME", "ConfigError", "JsonDocConfig", "load_config"]

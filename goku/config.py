"""Configuration loading for goku (.goku.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError
from .generation.constants import DEFAULT_INTERFACE_SUFFIX

CONFIG_FILENAME = ".goku.yml"

_FORMATTERS = {"builtin", "gofmt"}


@dataclass
class GokuConfig:
    """Represents the defaults defined in .goku.yml."""

    mock_name: Optional[str] = None
    include_private: bool = False
    package_override: Optional[str] = None
    interface_suffix: str = DEFAULT_INTERFACE_SUFFIX
    exclude_paths: List[str] = field(default_factory=list)
    formatter: str = "builtin"


def load_config(config_path: Path) -> GokuConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(config_path)
    if not config_file.exists():
        return GokuConfig()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    formatter = _as_str(data.get("formatter")) or "builtin"
    if formatter not in _FORMATTERS:
        choices = ", ".join(sorted(_FORMATTERS))
        raise ConfigError(f"Unknown formatter '{formatter}' in {CONFIG_FILENAME} (expected one of: {choices})")

    return GokuConfig(
        mock_name=_as_str(data.get("mock")),
        include_private=_as_bool(data.get("include_private")) or False,
        package_override=_as_str(data.get("package")),
        interface_suffix=_as_str(data.get("interface_suffix")) or DEFAULT_INTERFACE_SUFFIX,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
        formatter=formatter,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool) or value is None:
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["CONFIG_FILENAME", "GokuConfig", "load_config"]

"""Tests for goku.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from goku.config import GokuConfig, load_config
from goku.errors import ConfigError


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config == GokuConfig()
    assert config.mock_name is None
    assert config.include_private is False
    assert config.package_override is None
    assert config.interface_suffix == "Interface"
    assert config.exclude_paths == []
    assert config.formatter == "builtin"


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".goku.yml"
    config_file.write_text(
        """
mock: MockStore
include_private: yes
package: mocks
interface_suffix: API
formatter: gofmt
exclude_paths:
  - "zz_*.go"
  - "*_gen.go"
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.mock_name == "MockStore"
    assert config.include_private is True
    assert config.package_override == "mocks"
    assert config.interface_suffix == "API"
    assert config.formatter == "gofmt"
    assert config.exclude_paths == ["zz_*.go", "*_gen.go"]


def test_load_config_accepts_sibling_file_path(tmp_path: Path) -> None:
    (tmp_path / ".goku.yml").write_text("mock: M\n", encoding="utf-8")
    config = load_config(tmp_path / "store.go")
    assert config.mock_name == "M"


def test_load_config_empty_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".goku.yml").write_text("\n", encoding="utf-8")
    assert load_config(tmp_path).formatter == "builtin"


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    (tmp_path / ".goku.yml").write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_rejects_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / ".goku.yml").write_text("mock: [unterminated\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_rejects_unknown_formatter(tmp_path: Path) -> None:
    (tmp_path / ".goku.yml").write_text("formatter: clang\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)

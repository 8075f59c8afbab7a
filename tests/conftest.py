from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.package_builder import PackageBuilder

FIXTURES = Path(__file__).parent / "_fixtures"


@pytest.fixture
def package_builder(tmp_path: Path) -> PackageBuilder:
    """Provide a Go package directory rooted at the pytest tmp_path."""
    return PackageBuilder(tmp_path)


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES

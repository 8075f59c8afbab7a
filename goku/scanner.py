"""Discovers the Go files that make up one package directory."""

from __future__ import annotations

from fnmatch import fnmatchcase
from pathlib import Path
from typing import List, Sequence

from .logging import get_logger

_LOGGER = get_logger("scanner")

_GO_SUFFIX = ".go"
_TEST_SUFFIX = "_test.go"


class PackageScanner:
    """Lists non-test ``.go`` files in a single directory, sorted by name."""

    def __init__(self, exclude_paths: Sequence[str] | None = None) -> None:
        self._exclude = list(exclude_paths or [])

    def scan(self, directory: Path) -> List[Path]:
        root = Path(directory)
        if not root.is_dir():
            raise FileNotFoundError(f"{directory} is not a directory")

        files: List[Path] = []
        for entry in sorted(root.iterdir(), key=lambda path: path.name):
            if entry.is_dir():
                continue
            name = entry.name
            if not name.endswith(_GO_SUFFIX) or name.endswith(_TEST_SUFFIX):
                continue
            if self._is_excluded(name):
                _LOGGER.debug("Excluding %s", name)
                continue
            files.append(entry)
        _LOGGER.debug("Found %d Go files in %s", len(files), root)
        return files

    def _is_excluded(self, name: str) -> bool:
        return any(fnmatchcase(name, pattern) for pattern in self._exclude)


__all__ = ["PackageScanner"]

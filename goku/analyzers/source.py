"""Aggregates the parsed files of a single Go package."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from tree_sitter import Node, Parser

from ..errors import PackageMismatchError, ParseError
from ..logging import get_logger
from .tree_sitter import first_error, named_children, new_parser, node_text, position

_LOGGER = get_logger("source")


@dataclass(frozen=True)
class ParsedFile:
    """One successfully parsed Go file."""

    root: Node
    source: bytes
    package_name: str
    filename: Optional[str] = None

    def text(self, node: Node) -> str:
        return node_text(node, self.source)


class SourceUnit:
    """Accumulates parsed Go files that must all belong to one package."""

    def __init__(self, parser: Parser | None = None) -> None:
        self._parser = parser or new_parser()
        self._files: List[ParsedFile] = []
        self._package_name: Optional[str] = None

    @property
    def package_name(self) -> Optional[str]:
        return self._package_name

    @property
    def files(self) -> Sequence[ParsedFile]:
        return tuple(self._files)

    def __len__(self) -> int:
        return len(self._files)

    def ingest(self, text: str, *, filename: str | None = None) -> ParsedFile:
        """Parse ``text`` and add it to the unit.

        Raises ``ParseError`` for invalid source and ``PackageMismatchError`` when
        the file declares a package other than the one fixed by the first file.
        Files accepted before a failure stay in the unit.
        """
        source = text.encode("utf-8")
        tree = self._parser.parse(source)
        root = tree.root_node

        error = first_error(root)
        if error is not None:
            line, column = position(error)
            snippet = node_text(error, source).strip().splitlines()
            detail = f"syntax error near {snippet[0]!r}" if snippet else "syntax error"
            raise ParseError(detail, line=line, column=column, filename=filename)

        package_name = self._package_of(root, source)
        if package_name is None:
            raise ParseError("missing package clause", line=1, column=1, filename=filename)

        if self._package_name is None:
            self._package_name = package_name
        elif package_name != self._package_name:
            raise PackageMismatchError(self._package_name, package_name)

        parsed = ParsedFile(root=root, source=source, package_name=package_name, filename=filename)
        self._files.append(parsed)
        _LOGGER.debug("Ingested %s (package %s)", filename or "<source>", package_name)
        return parsed

    def ingest_file(self, path: Path) -> ParsedFile:
        """Read ``path`` as UTF-8 and ingest its contents."""
        text = Path(path).read_text(encoding="utf-8")
        return self.ingest(text, filename=str(path))

    @staticmethod
    def _package_of(root: Node, source: bytes) -> Optional[str]:
        for child in named_children(root):
            if child.type != "package_clause":
                continue
            for part in named_children(child):
                if part.type == "package_identifier":
                    return node_text(part, source)
        return None


__all__ = ["ParsedFile", "SourceUnit"]

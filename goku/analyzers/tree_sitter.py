"""Tree-sitter plumbing for the Go grammar."""

from __future__ import annotations

from typing import Iterator, Optional, Tuple

import tree_sitter_go
from tree_sitter import Language, Node, Parser

GO_LANGUAGE = Language(tree_sitter_go.language())


def new_parser() -> Parser:
    """Return a parser bound to the Go grammar."""
    return Parser(GO_LANGUAGE)


def node_text(node: Node, source_bytes: bytes) -> str:
    return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")


def named_children(node: Node) -> Iterator[Node]:
    """Yield named children, skipping comments interleaved with the grammar nodes."""
    for child in node.named_children:
        if child.type != "comment":
            yield child


def first_error(node: Node) -> Optional[Node]:
    """Return the first ERROR or missing node in document order, if any."""
    if not node.has_error:
        return None
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        found = first_error(child)
        if found is not None:
            return found
    return node


def position(node: Node) -> Tuple[int, int]:
    """Return the 1-based (line, column) where the node starts."""
    row, column = node.start_point
    return row + 1, column + 1


__all__ = ["GO_LANGUAGE", "first_error", "named_children", "new_parser", "node_text", "position"]

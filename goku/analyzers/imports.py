"""Import bookkeeping: which qualifier maps to which import path."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Mapping, Tuple

from ..errors import ImportResolutionError
from ..logging import get_logger
from ..models import ImportRef
from .source import ParsedFile
from .tree_sitter import named_children

_LOGGER = get_logger("imports")


def declared_imports(parsed: ParsedFile) -> Iterator[Tuple[str, ImportRef]]:
    """Yield ``(qualifier, import)`` for every import spec declared in ``parsed``.

    The qualifier is the explicit alias when present, otherwise the last
    segment of the import path.
    """
    for declaration in named_children(parsed.root):
        if declaration.type != "import_declaration":
            continue
        for spec in _import_specs(declaration):
            path_node = spec.child_by_field_name("path")
            if path_node is None:
                continue
            path = parsed.text(path_node).strip().strip('"`')
            name_node = spec.child_by_field_name("name")
            alias = parsed.text(name_node) if name_node is not None else ""
            qualifier = alias or path.rsplit("/", 1)[-1]
            yield qualifier, ImportRef(alias=alias, path=path)


def _import_specs(declaration):  # type: ignore[no-untyped-def]
    for child in named_children(declaration):
        if child.type == "import_spec":
            yield child
        elif child.type == "import_spec_list":
            for spec in named_children(child):
                if spec.type == "import_spec":
                    yield spec


class ImportResolver:
    """Maps qualifiers touched while rendering types back to declared imports."""

    def __init__(self) -> None:
        self._lookup: Dict[str, ImportRef] = {}

    @property
    def lookup(self) -> Mapping[str, ImportRef]:
        return dict(self._lookup)

    def add_file(self, parsed: ParsedFile) -> None:
        for qualifier, ref in declared_imports(parsed):
            # last writer wins when two files import different paths under one name
            self._lookup[qualifier] = ref

    def resolve(self, touched: Iterable[str]) -> List[ImportRef]:
        """Return the imports for ``touched`` in first-touch order, deduplicated by path.

        Raises ``ImportResolutionError`` for the first qualifier with no import.
        """
        resolved: List[ImportRef] = []
        seen_paths = set()
        for qualifier in touched:
            ref = self._lookup.get(qualifier)
            if ref is None:
                raise ImportResolutionError(qualifier)
            if ref.path in seen_paths:
                continue
            seen_paths.add(ref.path)
            resolved.append(ref)
            _LOGGER.debug("Resolved qualifier %s -> %s", qualifier, ref.path)
        return resolved


__all__ = ["ImportResolver", "declared_imports"]

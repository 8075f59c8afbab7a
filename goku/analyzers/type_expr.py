"""Go type expressions as a closed set of variants, and their canonical rendering.

Tree-sitter nodes are first converted into ``TypeExpr`` values with
:func:`from_node`; :func:`render` then turns a value into source text while
recording every package qualifier it passes through, in first-touch order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Mapping, Tuple, Union

from tree_sitter import Node

from ..logging import get_logger
from .tree_sitter import named_children

_LOGGER = get_logger("type_expr")


@dataclass(frozen=True)
class Name:
    value: str


@dataclass(frozen=True)
class Pointer:
    elem: "TypeExpr"


@dataclass(frozen=True)
class Slice:
    elem: "TypeExpr"


@dataclass(frozen=True)
class Array:
    length: str
    elem: "TypeExpr"


@dataclass(frozen=True)
class MapType:
    key: "TypeExpr"
    value: "TypeExpr"


@dataclass(frozen=True)
class Qualified:
    package: str
    name: str


@dataclass(frozen=True)
class Func:
    """A function type; parameters and results are not needed for interface shape."""


@dataclass(frozen=True)
class Generic:
    base: "TypeExpr"
    args: Tuple["TypeExpr", ...]


@dataclass(frozen=True)
class Variadic:
    elem: "TypeExpr"


@dataclass(frozen=True)
class Channel:
    direction: str  # "chan", "<-chan" or "chan<-"
    elem: "TypeExpr"


@dataclass(frozen=True)
class TermUnion:
    """Constraint terms joined with ``|``."""

    terms: Tuple["TypeExpr", ...]


@dataclass(frozen=True)
class Tilde:
    elem: "TypeExpr"


@dataclass(frozen=True)
class Unsupported:
    kind: str


TypeExpr = Union[
    Name,
    Pointer,
    Slice,
    Array,
    MapType,
    Qualified,
    Func,
    Generic,
    Variadic,
    Channel,
    TermUnion,
    Tilde,
    Unsupported,
]


@dataclass(frozen=True)
class RenderedType:
    """Canonical text of a type and the package qualifiers it references."""

    text: str
    qualifiers: Tuple[str, ...] = ()


def render(expr: TypeExpr) -> RenderedType:
    """Render ``expr`` to Go source text; identical input always renders identically."""
    touched: List[str] = []
    text = _render(expr, touched)
    return RenderedType(text=text, qualifiers=tuple(dict.fromkeys(touched)))


def _render(expr: TypeExpr, touched: List[str]) -> str:
    if isinstance(expr, Name):
        return expr.value
    if isinstance(expr, Pointer):
        return "*" + _render(expr.elem, touched)
    if isinstance(expr, Slice):
        return "[]" + _render(expr.elem, touched)
    if isinstance(expr, Array):
        return f"[{expr.length}]" + _render(expr.elem, touched)
    if isinstance(expr, MapType):
        key = _render(expr.key, touched)
        return f"map[{key}]" + _render(expr.value, touched)
    if isinstance(expr, Qualified):
        touched.append(expr.package)
        return f"{expr.package}.{expr.name}"
    if isinstance(expr, Func):
        return "func"
    if isinstance(expr, Generic):
        base = _render(expr.base, touched)
        args = ", ".join(_render(arg, touched) for arg in expr.args)
        return f"{base}[{args}]"
    if isinstance(expr, Variadic):
        return "..." + _render(expr.elem, touched)
    if isinstance(expr, Channel):
        return f"{expr.direction} " + _render(expr.elem, touched)
    if isinstance(expr, TermUnion):
        return " | ".join(_render(term, touched) for term in expr.terms)
    if isinstance(expr, Tilde):
        return "~" + _render(expr.elem, touched)
    if isinstance(expr, Unsupported):
        return f"<{expr.kind}>"
    raise TypeError(f"not a type expression: {expr!r}")


def substitute(expr: TypeExpr, names: Mapping[str, str]) -> TypeExpr:
    """Return ``expr`` with every bare ``Name`` found in ``names`` replaced."""
    if not names:
        return expr

    def sub(inner: TypeExpr) -> TypeExpr:
        return substitute(inner, names)

    if isinstance(expr, Name):
        return Name(names.get(expr.value, expr.value))
    if isinstance(expr, Pointer):
        return Pointer(sub(expr.elem))
    if isinstance(expr, Slice):
        return Slice(sub(expr.elem))
    if isinstance(expr, Array):
        return Array(expr.length, sub(expr.elem))
    if isinstance(expr, MapType):
        return MapType(sub(expr.key), sub(expr.value))
    if isinstance(expr, Generic):
        return Generic(sub(expr.base), tuple(sub(arg) for arg in expr.args))
    if isinstance(expr, Variadic):
        return Variadic(sub(expr.elem))
    if isinstance(expr, Channel):
        return Channel(expr.direction, sub(expr.elem))
    if isinstance(expr, TermUnion):
        return TermUnion(tuple(sub(term) for term in expr.terms))
    if isinstance(expr, Tilde):
        return Tilde(sub(expr.elem))
    return expr


TextOf = Callable[[Node], str]


def from_node(node: Node, text_of: TextOf) -> TypeExpr:
    """Convert a tree-sitter Go type node into a ``TypeExpr``."""
    kind = node.type
    if kind in {"type_identifier", "identifier", "package_identifier"}:
        return Name(text_of(node))
    if kind == "qualified_type":
        package = node.child_by_field_name("package")
        name = node.child_by_field_name("name")
        if package is not None and name is not None:
            return Qualified(text_of(package), text_of(name))
    if kind == "pointer_type":
        return Pointer(_only_child(node, text_of))
    if kind == "slice_type":
        return Slice(_field(node, "element", text_of))
    if kind == "array_type":
        length = node.child_by_field_name("length")
        return Array(text_of(length) if length is not None else "", _field(node, "element", text_of))
    if kind == "implicit_length_array_type":
        return Array("...", _field(node, "element", text_of))
    if kind == "map_type":
        return MapType(_field(node, "key", text_of), _field(node, "value", text_of))
    if kind == "function_type":
        return Func()
    if kind == "generic_type":
        base = _field(node, "type", text_of)
        arguments = node.child_by_field_name("type_arguments")
        args: Tuple[TypeExpr, ...] = ()
        if arguments is not None:
            args = tuple(from_node(arg, text_of) for arg in named_children(arguments))
        return Generic(base, args)
    if kind == "variadic_parameter_declaration":
        return Variadic(_field(node, "type", text_of))
    if kind == "channel_type":
        return Channel(_channel_direction(node), _field(node, "value", text_of))
    if kind in {"type_elem", "type_constraint", "constraint_elem"}:
        terms = tuple(from_node(term, text_of) for term in named_children(node))
        if len(terms) == 1:
            return terms[0]
        return TermUnion(terms)
    if kind in {"negated_type", "constraint_term"}:
        inner = _only_child(node, text_of)
        if text_of(node).lstrip().startswith("~"):
            return Tilde(inner)
        return inner
    if kind == "parenthesized_type":
        return _only_child(node, text_of)
    if kind in {"interface_type", "struct_type"} and _is_empty_literal(node):
        return Name(kind.split("_", 1)[0] + "{}")

    _LOGGER.warning("Unsupported type node %s: %s", kind, text_of(node))
    return Unsupported(kind)


def _field(node: Node, field_name: str, text_of: TextOf) -> TypeExpr:
    child = node.child_by_field_name(field_name)
    if child is None:
        return Unsupported(f"{node.type}.{field_name}")
    return from_node(child, text_of)


def _only_child(node: Node, text_of: TextOf) -> TypeExpr:
    for child in named_children(node):
        return from_node(child, text_of)
    return Unsupported(node.type)


def _channel_direction(node: Node) -> str:
    tokens = [child.type for child in node.children if not child.is_named]
    if tokens and tokens[0] == "<-":
        return "<-chan"
    if "<-" in tokens:
        return "chan<-"
    return "chan"


def _is_empty_literal(node: Node) -> bool:
    for child in named_children(node):
        if child.type == "field_declaration_list" and not any(True for _ in named_children(child)):
            continue
        return False
    return True


__all__ = [
    "Array",
    "Channel",
    "Func",
    "Generic",
    "MapType",
    "Name",
    "Pointer",
    "Qualified",
    "RenderedType",
    "Slice",
    "TermUnion",
    "Tilde",
    "TypeExpr",
    "Unsupported",
    "Variadic",
    "from_node",
    "render",
    "substitute",
]

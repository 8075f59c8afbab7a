"""Extracts the method set and generic parameters of a target struct."""

from __future__ import annotations

from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from tree_sitter import Node

from ..errors import NoSourceError
from ..logging import get_logger
from ..models import MethodInfo, ReceiverKind, StructContract, TypeInfo
from .imports import ImportResolver
from .source import ParsedFile, SourceUnit
from .tree_sitter import named_children
from .type_expr import from_node, render, substitute

_LOGGER = get_logger("extractor")

_DEFAULT_CONSTRAINT = "any"


class StructInfoExtractor:
    """Walks the files of a ``SourceUnit`` and builds a ``StructContract``.

    The extractor is cheap to construct and holds no state between calls to
    :meth:`extract`; every call either returns a complete contract or raises.
    """

    def __init__(self, unit: SourceUnit) -> None:
        self._unit = unit

    def extract(self, target: str) -> StructContract:
        files = self._unit.files
        if not files:
            raise NoSourceError()

        resolver = ImportResolver()
        for parsed in files:
            resolver.add_file(parsed)

        walk = _Walk(target)
        struct_params: List[TypeInfo] = []
        found_type = False
        for parsed in files:
            for spec in _type_specs(parsed.root):
                name = spec.child_by_field_name("name")
                if name is None or parsed.text(name) != target:
                    continue
                found_type = True
                struct_params.extend(walk.type_params(spec, parsed))

        declared_names = [param.name or "" for param in struct_params]
        methods: List[MethodInfo] = []
        for parsed in files:
            for declaration in named_children(parsed.root):
                if declaration.type != "method_declaration":
                    continue
                method = walk.method(declaration, parsed, declared_names)
                if method is not None:
                    methods.append(method)

        if not found_type and not methods:
            _LOGGER.warning("No type or methods named %s found in package %s", target, self._unit.package_name)

        imports = resolver.resolve(walk.touched)
        _LOGGER.debug("Extracted %d methods for %s", len(methods), target)
        return StructContract(
            package_name=self._unit.package_name or "",
            struct_name=target,
            imports=tuple(imports),
            struct_generic_params=tuple(struct_params),
            methods=tuple(methods),
        )


class _Walk:
    """Per-extraction rendering state: the target name and qualifiers touched so far."""

    def __init__(self, target: str) -> None:
        self.target = target
        self._touched: Dict[str, None] = {}

    @property
    def touched(self) -> Tuple[str, ...]:
        return tuple(self._touched)

    def render(self, node: Node, parsed: ParsedFile, names: Mapping[str, str] | None = None) -> str:
        expr = from_node(node, parsed.text)
        if names:
            expr = substitute(expr, names)
        rendered = render(expr)
        for qualifier in rendered.qualifiers:
            self._touched.setdefault(qualifier, None)
        return rendered.text

    def type_params(self, spec: Node, parsed: ParsedFile) -> List[TypeInfo]:
        param_list = spec.child_by_field_name("type_parameters")
        if param_list is None:
            return []
        params: List[TypeInfo] = []
        for declaration in named_children(param_list):
            if declaration.type != "type_parameter_declaration":
                continue
            constraint_node = declaration.child_by_field_name("type")
            constraint = _DEFAULT_CONSTRAINT
            if constraint_node is not None:
                constraint = self.render(constraint_node, parsed)
            for name in declaration.children_by_field_name("name"):
                params.append(TypeInfo(name=parsed.text(name), rendered=constraint))
        return params

    def method(
        self, declaration: Node, parsed: ParsedFile, declared_names: List[str]
    ) -> Optional[MethodInfo]:
        receiver = _receiver(declaration, parsed)
        if receiver is None:
            return None
        name, kind, receiver_params = receiver
        if name != self.target:
            return None

        method_name = declaration.child_by_field_name("name")
        if method_name is None:
            return None

        renames: Dict[str, str] = {}
        if len(receiver_params) == len(declared_names):
            renames = {
                local: declared
                for local, declared in zip(receiver_params, declared_names)
                if local != declared and local != "_"
            }

        generic_params = list(receiver_params)
        own_params = declaration.child_by_field_name("type_parameters")
        if own_params is not None:
            for param in named_children(own_params):
                generic_params.extend(parsed.text(n) for n in param.children_by_field_name("name"))

        arguments: List[TypeInfo] = []
        parameters = declaration.child_by_field_name("parameters")
        if parameters is not None:
            for param in named_children(parameters):
                if param.type == "variadic_parameter_declaration":
                    param_name = param.child_by_field_name("name")
                    arguments.append(
                        TypeInfo(
                            name=parsed.text(param_name) if param_name is not None else None,
                            rendered=self.render(param, parsed, renames),
                        )
                    )
                elif param.type == "parameter_declaration":
                    arguments.extend(self._expand(param, parsed, renames))

        returns: List[str] = []
        result = declaration.child_by_field_name("result")
        if result is not None:
            if result.type == "parameter_list":
                for param in named_children(result):
                    returns.extend(info.rendered for info in self._expand(param, parsed, renames))
            else:
                returns.append(self.render(result, parsed, renames))

        method = MethodInfo(
            name=parsed.text(method_name),
            receiver_kind=kind,
            generic_params=tuple(generic_params),
            arguments=tuple(arguments),
            returns=tuple(returns),
        )
        _LOGGER.debug("Matched method %s.%s", self.target, method.name)
        return method

    def _expand(self, param: Node, parsed: ParsedFile, renames: Mapping[str, str]) -> Iterator[TypeInfo]:
        """Yield one entry per declared name; ``x, y int`` gives two entries."""
        type_node = param.child_by_field_name("type")
        if type_node is None:
            return
        rendered = self.render(type_node, parsed, renames)
        names = param.children_by_field_name("name")
        if not names:
            yield TypeInfo(name=None, rendered=rendered)
            return
        for name in names:
            yield TypeInfo(name=parsed.text(name), rendered=rendered)


def _type_specs(root: Node) -> Iterator[Node]:
    for declaration in named_children(root):
        if declaration.type != "type_declaration":
            continue
        for spec in named_children(declaration):
            if spec.type == "type_spec":
                yield spec


def _receiver(
    declaration: Node, parsed: ParsedFile
) -> Optional[Tuple[str, ReceiverKind, Tuple[str, ...]]]:
    """Return the receiver's base type name, kind and instantiation names."""
    receiver = declaration.child_by_field_name("receiver")
    if receiver is None:
        return None
    param = next((c for c in named_children(receiver) if c.type == "parameter_declaration"), None)
    if param is None:
        return None
    type_node = param.child_by_field_name("type")

    kind = ReceiverKind.VALUE
    while type_node is not None and type_node.type in {"pointer_type", "parenthesized_type"}:
        if type_node.type == "pointer_type":
            kind = ReceiverKind.POINTER
        type_node = next(named_children(type_node), None)
    if type_node is None:
        return None

    params: Tuple[str, ...] = ()
    if type_node.type == "generic_type":
        arguments = type_node.child_by_field_name("type_arguments")
        if arguments is not None:
            params = tuple(render(from_node(arg, parsed.text)).text for arg in named_children(arguments))
        type_node = type_node.child_by_field_name("type")
        if type_node is None:
            return None

    if type_node.type != "type_identifier":
        return None
    return parsed.text(type_node), kind, params


__all__ = ["StructInfoExtractor"]

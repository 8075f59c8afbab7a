"""Renders interfaces and mocks for a ``StructContract``."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Protocol, Sequence, TextIO

from jinja2 import Environment, FileSystemLoader

from ..logging import get_logger
from ..models import ImportRef, MethodInfo, StructContract
from ..postproc.gofmt import GoSourceFormatter
from .constants import IFACE_TEMPLATE, MOCK_FIELD_SUFFIX, MOCK_RECEIVER

_LOGGER = get_logger("generation")


@dataclass(frozen=True)
class GeneratorOptions:
    """Per-render settings; every field is independently optional."""

    mock_name: str = ""
    include_private: bool = False
    package_override: str = ""


@dataclass
class GeneratorView:
    """Plain data handed to the template for one render call."""

    package_name: str
    imports: Sequence[ImportRef]
    interface_name: str
    original: str
    mock_name: str = ""
    type_params: str = ""
    type_aliases: str = ""
    assert_struct: bool = False
    assert_mock: bool = False
    public_methods: List[str] = field(default_factory=list)
    private_methods: List[str] = field(default_factory=list)
    public_mock_fields: List[str] = field(default_factory=list)
    private_mock_fields: List[str] = field(default_factory=list)
    public_mock_implementations: List[str] = field(default_factory=list)
    private_mock_implementations: List[str] = field(default_factory=list)

    def as_context(self) -> Dict[str, Any]:
        return {item.name: getattr(self, item.name) for item in fields(self)}


class TemplateRenderer:
    """Loads Jinja2 templates and renders views by template name."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        directories = []
        if templates_dir:
            directories.append(str(templates_dir))
        directories.append(str(Path(__file__).with_name("templates")))
        loader = FileSystemLoader(directories)
        self._env = Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def render(self, template_name: str, context: Dict[str, Any]) -> str:
        template = self._env.get_template(template_name)
        return template.render(**context)


class Formatter(Protocol):
    def format(self, source: str) -> str:
        ...


class InterfaceGenerator:
    """Builds the interface, mock struct and mock methods for a contract."""

    def __init__(
        self,
        renderer: TemplateRenderer | None = None,
        formatter: Formatter | None = None,
        *,
        template_name: str = IFACE_TEMPLATE,
    ) -> None:
        self._renderer = renderer or TemplateRenderer()
        self._formatter = formatter or GoSourceFormatter()
        self._template_name = template_name

    def render(
        self,
        contract: StructContract,
        writer: TextIO,
        interface_name: str,
        options: GeneratorOptions | None = None,
    ) -> None:
        """Write the formatted Go source for ``contract`` to ``writer``.

        Nothing is written when formatting fails; the ``FormattingError`` is raised.
        """
        writer.write(self.generate(contract, interface_name, options))

    def generate(
        self,
        contract: StructContract,
        interface_name: str,
        options: GeneratorOptions | None = None,
    ) -> str:
        view = self.build_view(contract, interface_name, options or GeneratorOptions())
        text = self._renderer.render(self._template_name, view.as_context())
        return self._formatter.format(text)

    def build_view(
        self, contract: StructContract, interface_name: str, options: GeneratorOptions
    ) -> GeneratorView:
        package_name = options.package_override or contract.package_name
        view = GeneratorView(
            package_name=package_name,
            imports=list(contract.imports),
            interface_name=interface_name,
            original=contract.struct_name,
            mock_name=options.mock_name,
        )
        if contract.is_generic:
            view.type_params = _bracketed(str(param) for param in contract.struct_generic_params)
            view.type_aliases = _bracketed(param.name or "" for param in contract.struct_generic_params)
        else:
            view.assert_struct = package_name == contract.package_name
            view.assert_mock = bool(options.mock_name)

        for method in contract.methods:
            if not method.name:
                continue
            if method.is_private:
                if not options.include_private:
                    _LOGGER.debug("Skipping private method %s", method.name)
                    continue
                methods, mock_fields, implementations = (
                    view.private_methods,
                    view.private_mock_fields,
                    view.private_mock_implementations,
                )
            else:
                methods, mock_fields, implementations = (
                    view.public_methods,
                    view.public_mock_fields,
                    view.public_mock_implementations,
                )
            methods.append(method.name + _signature(method))
            if options.mock_name:
                mock_fields.append(f"{method.name}{MOCK_FIELD_SUFFIX} func{_signature(method)}")
                implementations.append(_mock_method(method, options.mock_name + view.type_aliases))
        return view


def _bracketed(parts) -> str:  # type: ignore[no-untyped-def]
    return "[" + ", ".join(parts) + "]"


def _results(returns: Sequence[str]) -> str:
    if not returns:
        return ""
    if len(returns) == 1:
        return " " + returns[0]
    return " (" + ", ".join(returns) + ")"


def _signature(method: MethodInfo, names: Sequence[str] | None = None) -> str:
    if names is None:
        arguments = [str(argument) for argument in method.arguments]
    else:
        arguments = [f"{name} {argument.rendered}" for name, argument in zip(names, method.arguments)]
    return "(" + ", ".join(arguments) + ")" + _results(method.returns)


def _call_names(method: MethodInfo) -> List[str]:
    """Names usable to forward every argument.

    Unnamed, blank or receiver-shadowing parameters make every argument ``argN``.
    """
    names = [argument.name for argument in method.arguments]
    if all(name and name not in {"_", MOCK_RECEIVER} for name in names):
        return [name for name in names if name]
    return [f"arg{index}" for index in range(len(names))]


def _mock_method(method: MethodInfo, receiver_type: str) -> str:
    names = _call_names(method)
    forwarded = list(names)
    if forwarded and method.is_variadic:
        forwarded[-1] += "..."
    call = f"{MOCK_RECEIVER}.{method.name}{MOCK_FIELD_SUFFIX}({', '.join(forwarded)})"
    if method.returns:
        call = "return " + call
    header = f"func ({MOCK_RECEIVER} {receiver_type}) {method.name}{_signature(method, names)}"
    return f"{header} {{\n\t{call}\n}}"


__all__ = ["Formatter", "GeneratorOptions", "GeneratorView", "InterfaceGenerator", "TemplateRenderer"]

"""Tests for interface and mock generation."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from goku.analyzers.extractor import StructInfoExtractor
from goku.errors import FormattingError
from goku.generation.builder import GeneratorOptions, InterfaceGenerator, TemplateRenderer
from goku.models import MethodInfo, ReceiverKind, StructContract, TypeInfo
from tests._fixtures.package_builder import unit_from


def _contract(*methods: MethodInfo, params: tuple[TypeInfo, ...] = ()) -> StructContract:
    return StructContract(
        package_name="x",
        struct_name="X",
        struct_generic_params=params,
        methods=methods,
    )


def _method(name: str, *arguments: TypeInfo, returns: tuple[str, ...] = ()) -> MethodInfo:
    return MethodInfo(
        name=name,
        receiver_kind=ReceiverKind.POINTER,
        arguments=arguments,
        returns=returns,
    )


def test_golden_file_with_mock_private_and_override(fixtures_dir: Path) -> None:
    source = (fixtures_dir / "target.go.txt").read_text(encoding="utf-8")
    expected = (fixtures_dir / "target_expected.go.txt").read_text(encoding="utf-8")

    contract = StructInfoExtractor(unit_from(source)).extract("Target")
    buffer = io.StringIO()
    InterfaceGenerator().render(
        contract,
        buffer,
        "TargetInterface",
        GeneratorOptions(mock_name="Mock", include_private=True, package_override="override"),
    )

    got = buffer.getvalue().strip().splitlines()
    wanted = expected.strip().splitlines()
    assert [line.strip() for line in got] == [line.strip() for line in wanted]


def test_interface_only_for_plain_struct_asserts_implementation() -> None:
    contract = _contract(
        _method("Get", TypeInfo("key", "string"), returns=("[]byte", "error")),
        _method("Close", returns=("error",)),
    )
    text = InterfaceGenerator().generate(contract, "XInterface")

    assert "package x\n" in text
    assert "import" not in text
    assert "var _ XInterface = (*X)(nil)" in text
    assert "\tGet(key string) ([]byte, error)\n" in text
    assert "\tClose() error\n" in text
    assert "struct {" not in text
    assert text.endswith("}\n")


def test_package_override_drops_struct_assertion() -> None:
    contract = _contract(_method("Run"))
    text = InterfaceGenerator().generate(
        contract, "Runner", GeneratorOptions(mock_name="MockRunner", package_override="mocks")
    )

    assert "package mocks\n" in text
    assert "(*X)(nil)" not in text
    assert "var _ Runner = MockRunner{}" in text
    assert "\tRunFn func()\n" in text
    assert "func (mockImplementation MockRunner) Run() {\n\tmockImplementation.RunFn()\n}" in text


def test_private_methods_are_dropped_unless_requested() -> None:
    contract = _contract(_method("Public"), _method("private"), _method("Another"))
    generator = InterfaceGenerator()

    public_view = generator.build_view(contract, "I", GeneratorOptions(mock_name="M"))
    full_view = generator.build_view(contract, "I", GeneratorOptions(mock_name="M", include_private=True))

    assert public_view.public_methods == ["Public()", "Another()"]
    assert public_view.private_methods == []
    assert public_view.private_mock_fields == []
    assert full_view.public_methods == public_view.public_methods
    assert full_view.public_mock_implementations == public_view.public_mock_implementations
    assert full_view.private_methods == ["private()"]
    assert full_view.private_mock_fields == ["privateFn func()"]


def test_generic_struct_carries_params_and_aliases() -> None:
    contract = _contract(
        _method("Put", TypeInfo("k", "K"), TypeInfo("v", "V")),
        params=(TypeInfo("K", "comparable"), TypeInfo("V", "any")),
    )
    generator = InterfaceGenerator()
    view = generator.build_view(contract, "Store", GeneratorOptions(mock_name="MockStore"))

    assert view.type_params == "[K comparable, V any]"
    assert view.type_aliases == "[K, V]"
    assert view.assert_struct is False
    assert view.assert_mock is False

    text = generator.generate(contract, "Store", GeneratorOptions(mock_name="MockStore"))
    assert "type Store[K comparable, V any] interface {" in text
    assert "type MockStore[K comparable, V any] struct {" in text
    assert "func (mockImplementation MockStore[K, V]) Put(k K, v V) {" in text


def test_variadic_arguments_are_spread_when_forwarded() -> None:
    contract = _contract(
        _method("Logf", TypeInfo("format", "string"), TypeInfo("args", "...any"), returns=("int",))
    )
    view = InterfaceGenerator().build_view(contract, "I", GeneratorOptions(mock_name="M"))

    (implementation,) = view.public_mock_implementations
    assert implementation == (
        "func (mockImplementation M) Logf(format string, args ...any) int {\n"
        "\treturn mockImplementation.LogfFn(format, args...)\n"
        "}"
    )


def test_unnamed_arguments_get_forwardable_names() -> None:
    contract = _contract(_method("Pair", TypeInfo(None, "int"), TypeInfo("_", "string")))
    view = InterfaceGenerator().build_view(contract, "I", GeneratorOptions(mock_name="M"))

    assert view.public_methods == ["Pair(int, _ string)"]
    assert view.public_mock_implementations == [
        "func (mockImplementation M) Pair(arg0 int, arg1 string) {\n"
        "\tmockImplementation.PairFn(arg0, arg1)\n"
        "}"
    ]


def test_argument_named_like_mock_receiver_is_renamed() -> None:
    contract = _contract(_method("Use", TypeInfo("mockImplementation", "int"), TypeInfo("n", "string")))
    view = InterfaceGenerator().build_view(contract, "I", GeneratorOptions(mock_name="M"))

    assert view.public_methods == ["Use(mockImplementation int, n string)"]
    assert view.public_mock_implementations == [
        "func (mockImplementation M) Use(arg0 int, arg1 string) {\n"
        "\tmockImplementation.UseFn(arg0, arg1)\n"
        "}"
    ]


def test_rendering_is_idempotent() -> None:
    contract = StructInfoExtractor(
        unit_from(
            """
            package x

            import "context"

            type X struct{}

            func (x *X) Do(ctx context.Context, n int) (int, error) { return n, nil }
            func (x *X) undo() {}
            """
        )
    ).extract("X")
    generator = InterfaceGenerator()
    options = GeneratorOptions(mock_name="MockX", include_private=True)

    first = generator.generate(contract, "XInterface", options)
    second = generator.generate(contract, "XInterface", options)

    assert first == second
    assert '\t"context"\n' in first


def test_malformed_output_raises_formatting_error_and_contract_stays_usable() -> None:
    contract = _contract(_method("Broken", TypeInfo("v", "<interface_type>")), _method("fine"))
    generator = InterfaceGenerator()

    with pytest.raises(FormattingError):
        generator.generate(contract, "I", GeneratorOptions(include_private=True))

    text = generator.generate(_contract(*contract.methods[1:]), "I", GeneratorOptions(include_private=True))
    assert "\tfine()\n" in text


def test_custom_template_directory_overrides_default(tmp_path: Path) -> None:
    (tmp_path / "iface.go.j2").write_text(
        "package {{ package_name }}\n\ntype {{ interface_name }} interface {}\n",
        encoding="utf-8",
    )
    generator = InterfaceGenerator(renderer=TemplateRenderer(tmp_path))
    text = generator.generate(_contract(_method("Run")), "Empty")
    assert text == "package x\n\ntype Empty interface {}\n"


class _Recorder:
    def __init__(self) -> None:
        self.seen: list[str] = []

    def format(self, source: str) -> str:
        self.seen.append(source)
        return source.upper()


def test_formatter_is_injected() -> None:
    recorder = _Recorder()
    text = InterfaceGenerator(formatter=recorder).generate(_contract(_method("Run")), "Runner")
    assert len(recorder.seen) == 1
    assert text == recorder.seen[0].upper()

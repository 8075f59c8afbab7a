"""Tests for generated-source formatting."""

from __future__ import annotations

import subprocess

import pytest

from goku.errors import FormattingError
from goku.postproc.gofmt import GofmtFormatter, GoSourceFormatter


def test_go_source_formatter_normalises_whitespace() -> None:
    source = "\r\n\r\npackage x  \r\n\r\n\r\n\r\ntype I interface {\r\n\tRun()\t\r\n}\r\n\r\n"
    formatted = GoSourceFormatter().format(source)
    assert formatted == "package x\n\ntype I interface {\n\tRun()\n}\n"


def test_go_source_formatter_accepts_source_without_trailing_newline() -> None:
    source = "package x\n\ntype Empty interface {}"
    assert GoSourceFormatter().format(source) == "package x\n\ntype Empty interface {}\n"


def test_go_source_formatter_reports_position_of_malformed_code() -> None:
    with pytest.raises(FormattingError) as excinfo:
        GoSourceFormatter().format("package x\n\ntype I interface {\n\tRun(v <struct_type>)\n}\n")
    assert excinfo.value.line in (3, 4)
    assert "generated source is malformed at" in str(excinfo.value)


def test_gofmt_formatter_uses_runner_output() -> None:
    calls: list[tuple[list[str], str]] = []

    def runner(args, source):  # type: ignore[no-untyped-def]
        calls.append((list(args), source))
        return "formatted\n"

    assert GofmtFormatter(runner=runner).format("package x") == "formatted\n"
    assert calls == [(["gofmt"], "package x")]


def test_gofmt_formatter_wraps_process_failures() -> None:
    def failing(args, source):  # type: ignore[no-untyped-def]
        raise subprocess.CalledProcessError(2, args, stderr="<standard input>:3:1: expected '}'")

    with pytest.raises(FormattingError) as excinfo:
        GofmtFormatter(runner=failing).format("package x\n{")
    assert "expected '}'" in str(excinfo.value)


def test_gofmt_formatter_reports_missing_binary() -> None:
    def missing(args, source):  # type: ignore[no-untyped-def]
        raise FileNotFoundError(args[0])

    with pytest.raises(FormattingError) as excinfo:
        GofmtFormatter(runner=missing, binary="gofmt-does-not-exist").format("package x\n")
    assert "gofmt-does-not-exist not found" in str(excinfo.value)

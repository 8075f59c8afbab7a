"""Validation and formatting of generated Go source."""

from __future__ import annotations

import subprocess
from typing import Callable, List, Sequence

from tree_sitter import Parser

from ..analyzers.tree_sitter import first_error, new_parser, node_text, position
from ..errors import FormattingError


class GoSourceFormatter:
    """Re-parses generated Go and normalizes whitespace.

    Indentation is left as emitted; trailing whitespace, carriage returns and
    runs of blank lines are cleaned up and the file ends with one newline.
    """

    def __init__(self, parser: Parser | None = None) -> None:
        self._parser = parser or new_parser()

    def format(self, source: str) -> str:
        normalized = source.replace("\r\n", "\n").replace("\r", "\n").rstrip("\n") + "\n"
        encoded = normalized.encode("utf-8")
        tree = self._parser.parse(encoded)
        error = first_error(tree.root_node)
        if error is not None:
            line, column = position(error)
            snippet = node_text(error, encoded).strip().splitlines()
            raise FormattingError(
                f"unexpected {snippet[0]!r}" if snippet else "syntax error",
                line=line,
                column=column,
            )

        cleaned: List[str] = []
        previous_blank = True
        for line in normalized.split("\n"):
            stripped = line.rstrip()
            if not stripped:
                if previous_blank:
                    continue
                previous_blank = True
                cleaned.append("")
                continue
            cleaned.append(stripped)
            previous_blank = False

        while cleaned and cleaned[-1] == "":
            cleaned.pop()
        return "\n".join(cleaned) + "\n"


Runner = Callable[[Sequence[str], str], str]


class GofmtFormatter:
    """Formats generated source with the ``gofmt`` binary."""

    def __init__(self, runner: Runner | None = None, *, binary: str = "gofmt") -> None:
        self._runner = runner or self._default_runner
        self._binary = binary

    def format(self, source: str) -> str:
        try:
            return self._runner([self._binary], source)
        except FileNotFoundError as exc:
            raise FormattingError(f"{self._binary} not found on PATH") from exc
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip() or f"{self._binary} exited with status {exc.returncode}"
            raise FormattingError(detail) from exc

    @staticmethod
    def _default_runner(args: Sequence[str], source: str) -> str:
        completed = subprocess.run(
            list(args),
            input=source,
            check=True,
            text=True,
            capture_output=True,
        )
        return completed.stdout


__all__ = ["GoSourceFormatter", "GofmtFormatter"]

"""Error kinds raised while extracting and generating interfaces."""

from __future__ import annotations

from typing import Optional


class GokuError(RuntimeError):
    """Base class for every error goku reports to its callers."""


class NoSourceError(GokuError):
    """Raised when extraction is requested before any source was ingested."""

    def __init__(self) -> None:
        super().__init__("no source files provided: ingest at least one Go file before extracting")


class ParseError(GokuError):
    """Raised when a supplied text is not valid Go source."""

    def __init__(
        self,
        message: str,
        *,
        line: Optional[int] = None,
        column: Optional[int] = None,
        filename: Optional[str] = None,
    ) -> None:
        self.message = message
        self.line = line
        self.column = column
        self.filename = filename
        super().__init__(self._describe())

    def _describe(self) -> str:
        location = self.filename or "<source>"
        if self.line is not None:
            location += f":{self.line}"
            if self.column is not None:
                location += f":{self.column}"
        return f"{location}: {self.message}"


class PackageMismatchError(GokuError):
    """Raised when an ingested file declares a different package than earlier files."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"invalid package: based on previous adds, wanted pkg {expected}, but got {actual}"
        )


class ImportResolutionError(GokuError):
    """Raised when a qualifier used by a method signature has no matching import."""

    def __init__(self, qualifier: str) -> None:
        self.qualifier = qualifier
        super().__init__(
            f"failed resolving package '{qualifier}': this package name is used in your source code "
            "but it doesn't match any import alias or basename in your import paths. This means that "
            "the basename of the import doesn't match the package name (e.g. you're importing "
            "'github.com/user/imported' but when you go to the actual source code for that module, "
            "the package name isn't 'package imported' but rather something else like "
            "'package imprted'). An easy fix for this is to give this import in the source code an "
            "alias, and code generation will work again"
        )


class FormattingError(GokuError):
    """Raised when generated Go text fails validation or formatting."""

    def __init__(
        self, message: str, *, line: Optional[int] = None, column: Optional[int] = None
    ) -> None:
        self.message = message
        self.line = line
        self.column = column
        if line is not None:
            message = f"generated source is malformed at {line}:{column or 1}: {message}"
        else:
            message = f"generated source could not be formatted: {message}"
        super().__init__(message)


class ConfigError(GokuError):
    """Raised when the configuration file cannot be parsed."""


__all__ = [
    "ConfigError",
    "FormattingError",
    "GokuError",
    "ImportResolutionError",
    "NoSourceError",
    "PackageMismatchError",
    "ParseError",
]

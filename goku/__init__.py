"""Generate Go interfaces and mocks from the methods of a struct."""

from __future__ import annotations

from .analyzers.extractor import StructInfoExtractor
from .analyzers.source import SourceUnit
from .errors import (
    FormattingError,
    GokuError,
    ImportResolutionError,
    NoSourceError,
    PackageMismatchError,
    ParseError,
)
from .generation.builder import GeneratorOptions, InterfaceGenerator
from .models import ImportRef, MethodInfo, ReceiverKind, StructContract, TypeInfo

__all__ = [
    "FormattingError",
    "GeneratorOptions",
    "GokuError",
    "ImportRef",
    "ImportResolutionError",
    "InterfaceGenerator",
    "MethodInfo",
    "NoSourceError",
    "PackageMismatchError",
    "ParseError",
    "ReceiverKind",
    "SourceUnit",
    "StructContract",
    "StructInfoExtractor",
    "TypeInfo",
]

"""Parsing and metadata extraction for Go packages."""

from __future__ import annotations

from .extractor import StructInfoExtractor
from .imports import ImportResolver
from .source import ParsedFile, SourceUnit

__all__ = ["ImportResolver", "ParsedFile", "SourceUnit", "StructInfoExtractor"]

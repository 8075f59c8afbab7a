"""Shared constants for interface and mock generation."""

from __future__ import annotations

IFACE_TEMPLATE = "iface.go.j2"

MOCK_RECEIVER = "mockImplementation"

MOCK_FIELD_SUFFIX = "Fn"

DEFAULT_INTERFACE_SUFFIX = "Interface"

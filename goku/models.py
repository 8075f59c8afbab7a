"""Core data models shared across goku components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True)
class TypeInfo:
    """A rendered type with the optional name bound to it (e.g. a parameter name)."""

    name: Optional[str]
    rendered: str

    def __str__(self) -> str:
        if self.name:
            return f"{self.name} {self.rendered}"
        return self.rendered


class ReceiverKind(str, Enum):
    """How a method binds to its receiver."""

    VALUE = "value"
    POINTER = "pointer"


@dataclass(frozen=True)
class MethodInfo:
    """Normalized signature of one method bound to the target struct."""

    name: str
    receiver_kind: ReceiverKind
    generic_params: Tuple[str, ...] = ()
    arguments: Tuple[TypeInfo, ...] = ()
    returns: Tuple[str, ...] = ()

    @property
    def is_private(self) -> bool:
        return bool(self.name) and self.name[0].islower()

    @property
    def is_variadic(self) -> bool:
        return bool(self.arguments) and self.arguments[-1].rendered.startswith("...")


@dataclass(frozen=True)
class ImportRef:
    """An import kept in the generated file; alias is empty unless the source declared one."""

    alias: str
    path: str


@dataclass(frozen=True)
class StructContract:
    """Everything the generator needs to know about the target struct."""

    package_name: str
    struct_name: str
    imports: Tuple[ImportRef, ...] = ()
    struct_generic_params: Tuple[TypeInfo, ...] = ()
    methods: Tuple[MethodInfo, ...] = field(default_factory=tuple)

    @property
    def is_generic(self) -> bool:
        return bool(self.struct_generic_params)


__all__ = ["ImportRef", "MethodInfo", "ReceiverKind", "StructContract", "TypeInfo"]

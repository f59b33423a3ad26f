"""
Runtime interface shared by every generated companion module.

This module is imported by generated code and is never regenerated. It
defines the generic companion interface that records with default accessor
names implement, the per-field metadata protocol and the two recoverable
runtime errors.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, Generic, NamedTuple, Protocol, TypeVar, runtime_checkable

F = TypeVar("F")
V = TypeVar("V")


class EnumCompanion(ABC, Generic[F, V]):
    """Generic access to the fields of a record through its companion types.

    Generated records inherit from this class only when they keep the
    default ``value``/``update``/``fields`` method names.
    """

    @abstractmethod
    def value(self, field: F) -> V:
        """Return the value of a specific field."""

    @abstractmethod
    def update(self, value: V) -> None:
        """Update the field carried by ``value``."""

    @classmethod
    @abstractmethod
    def fields(cls) -> Sequence[F]:
        """Return all field identifiers in declaration order."""

    @abstractmethod
    def as_values(self) -> list[V]:
        """Return the value of every field."""


@runtime_checkable
class FieldMetadata(Protocol):
    """Read-only metadata exposed by every generated field identifier."""

    @property
    def name(self) -> str: ...

    @property
    def type_name(self) -> str: ...

    @property
    def title(self) -> str: ...

    @property
    def description(self) -> str: ...

    @property
    def order(self) -> int: ...


class FieldInfo(NamedTuple):
    """Metadata of a single generated field identifier."""

    type_name: str
    title: str
    description: str = ""
    order: int = 0


class UnknownFieldName(ValueError):
    """Raised by ``from_str`` when no field identifier matches the input."""

    def __init__(self, input: str):
        self.input = input
        super().__init__(f"Invalid field name: {input}")


class ConversionMismatch(TypeError):
    """Raised when a reverse conversion does not match.

    Attributes:
        payload: The value handed to the conversion, returned untouched
    """

    def __init__(self, payload: Any):
        self.payload = payload
        super().__init__(f"cannot convert {payload!r}")


def conversion_table(*entries: tuple[Any, tuple[F, ...]]) -> dict[Any, frozenset[F]]:
    """Build a reverse conversion table from ``(type, fields)`` entries.

    Type expressions spelled differently but equal at runtime, such as
    ``int | None`` and ``Optional[int]``, share a single entry.
    """
    table: dict[Any, frozenset[F]] = {}
    for target, fields in entries:
        table[target] = table.get(target, frozenset()) | frozenset(fields)
    return table


__all__ = [
    "ConversionMismatch",
    "conversion_table",
    "EnumCompanion",
    "FieldInfo",
    "FieldMetadata",
    "UnknownFieldName",
]

"""
Generation-time errors.

Every error raised while turning a record declaration into companion code
derives from :class:`GenerationError`. They are all fatal for the current
run: the generator never emits partial output.
"""

from __future__ import annotations


class GenerationError(Exception):
    """Base class for all generation failures.

    Attributes:
        record: Name of the record being generated, if known
    """

    def __init__(self, message: str, record: str | None = None):
        self.record = record
        if record:
            message = f"{record}: {message}"
        super().__init__(message)


class UnsupportedShape(GenerationError):
    """The declaration is not a record with named fields."""


class MalformedDeclaration(GenerationError):
    """The structural part of a declaration (names, types, keys) is invalid."""


class UnknownAttribute(GenerationError):
    """An annotation surface contains a key the generator does not know."""

    def __init__(self, key: str, record: str | None = None, field: str | None = None):
        self.key = key
        self.field = field
        location = f"field '{field}'" if field else "record"
        super().__init__(f"unknown companion attribute '{key}' on {location}", record)


class MalformedAttribute(GenerationError):
    """A known annotation key carries a value of the wrong shape."""

    def __init__(self, key: str, reason: str, record: str | None = None, field: str | None = None):
        self.key = key
        self.field = field
        location = f" on field '{field}'" if field else ""
        super().__init__(f"malformed companion attribute '{key}'{location}: {reason}", record)


class InvalidRename(GenerationError):
    """A ``rename`` value cannot be used as a variant name."""

    def __init__(self, field: str, value: str, record: str | None = None):
        self.field = field
        self.value = value
        super().__init__(f"field '{field}' cannot be renamed to {value!r}: not a usable identifier", record)


class InvalidFieldName(GenerationError):
    """A field name does not produce a usable canonical name."""

    def __init__(self, field: str, canonical: str, record: str | None = None):
        self.field = field
        self.canonical = canonical
        super().__init__(
            f"field '{field}' resolves to {canonical!r}, which is not a usable variant name; use 'rename'",
            record,
        )


class DuplicateFieldName(GenerationError):
    """Two emitted fields resolve to the same canonical name."""

    def __init__(self, name: str, first: str, second: str, record: str | None = None):
        self.name = name
        self.first = first
        self.second = second
        super().__init__(f"fields '{first}' and '{second}' both resolve to variant '{name}'", record)


class AccessorConflict(GenerationError):
    """An accessor method name clashes with another accessor or a field."""

    def __init__(self, accessor: str, other: str, record: str | None = None):
        self.accessor = accessor
        self.other = other
        super().__init__(f"accessor name '{accessor}' conflicts with {other}", record)


class OutputValidationError(Exception):
    """Generated code failed validation before being written."""

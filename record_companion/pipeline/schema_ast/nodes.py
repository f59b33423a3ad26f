"""
Schema model for record declarations.

These nodes hold the parsed and validated declaration of a record before
any code is emitted. They carry no behaviour.
"""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_VALUE_FN = "value"
DEFAULT_UPDATE_FN = "update"
DEFAULT_FIELDS_FN = "fields"
SNAPSHOT_FN = "as_values"


@dataclass
class CompanionOptions:
    """Record-level companion options."""

    # Accessor method names
    value_fn: str = DEFAULT_VALUE_FN
    update_fn: str = DEFAULT_UPDATE_FN
    fields_fn: str = DEFAULT_FIELDS_FN

    # Dotted decorator paths applied to the field enum / value variants
    derive_field: list[str] = field(default_factory=list)
    derive_value: list[str] = field(default_factory=list)

    # Opaque serialization payloads, forwarded verbatim
    serde_field: str | None = None
    serde_value: str | None = None


@dataclass
class FieldSchema:
    """One declared field of a record."""

    source_name: str = ""
    value_type: str = ""  # Normalized Python type expression

    skip: bool = False
    rename: str | None = None
    title: str | None = None
    description: str = ""
    order: int = 0

    # Whether the type mentions one of the record's type parameters
    is_generic: bool = False

    # Set by the name resolver
    canonical_name: str = ""

    @property
    def display_title(self) -> str:
        return self.title if self.title is not None else self.canonical_name or self.source_name


@dataclass
class RecordSchema:
    """A record type and everything needed to generate its companions."""

    record_name: str = ""
    fields: list[FieldSchema] = field(default_factory=list)
    options: CompanionOptions = field(default_factory=CompanionOptions)
    type_params: list[str] = field(default_factory=list)
    doc: str = ""

    @property
    def emitted_fields(self) -> list[FieldSchema]:
        """Non-skipped fields in emission (declaration) order."""
        return [f for f in self.fields if not f.skip]


@dataclass
class DeclarationFile:
    """Root of a parsed declaration document."""

    records: list[RecordSchema] = field(default_factory=list)

    # Import statements copied to the generated module
    imports: list[str] = field(default_factory=list)

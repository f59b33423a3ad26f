"""
Name resolver for companion variants.

Derives the canonical variant name of every emitted field, detects
collisions and builds the lookup table used by the generated string parser.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ...errors import AccessorConflict, DuplicateFieldName, InvalidFieldName
from ...utils import is_variant_name, to_pascal_case
from ..schema_ast.nodes import SNAPSHOT_FN, RecordSchema

logger = logging.getLogger(__name__)


@dataclass
class NameMapping:
    """Result of name resolution."""

    # Source field name -> canonical variant name (emitted fields only)
    canonical_names: dict[str, str] = field(default_factory=dict)

    # Accepted parser input -> canonical variant name
    parse_names: dict[str, str] = field(default_factory=dict)


class NameResolver:
    """Resolves canonical names and fixes emission order."""

    def resolve(self, record: RecordSchema) -> NameMapping:
        """
        Resolve the canonical names of a record's fields.

        Sets ``canonical_name`` on every non-skipped field in place. Emission
        order stays the declaration order; the ``order`` metadata is never
        used as a sort key.

        Args:
            record: The parsed record

        Returns:
            NameMapping with canonical and parser names
        """
        mapping = NameMapping()
        owners: dict[str, str] = {}

        for f in record.emitted_fields:
            canonical = f.rename if f.rename is not None else to_pascal_case(f.source_name)
            if f.rename is None and not is_variant_name(canonical):
                raise InvalidFieldName(f.source_name, canonical, record.record_name)

            if canonical in owners:
                raise DuplicateFieldName(canonical, owners[canonical], f.source_name, record.record_name)
            owners[canonical] = f.source_name

            f.canonical_name = canonical
            mapping.canonical_names[f.source_name] = canonical

        # Canonical names first so that they win over another field's source name
        for canonical in owners:
            mapping.parse_names[canonical] = canonical
        for f in record.emitted_fields:
            if f.rename is None:
                mapping.parse_names.setdefault(f.source_name, f.canonical_name)

        self._check_accessors(record)

        logger.debug(
            "Resolved %s: %s",
            record.record_name,
            ", ".join(f"{source} -> {canonical}" for source, canonical in mapping.canonical_names.items()),
        )
        return mapping

    def _check_accessors(self, record: RecordSchema) -> None:
        """Reject accessor names that shadow each other or a record field."""
        options = record.options
        accessors = [options.value_fn, options.update_fn, options.fields_fn, SNAPSHOT_FN]

        seen: set[str] = set()
        for name in accessors:
            if name in seen:
                raise AccessorConflict(name, "another accessor", record.record_name)
            seen.add(name)

        for f in record.fields:
            if f.source_name in seen:
                raise AccessorConflict(f.source_name, f"field '{f.source_name}'", record.record_name)

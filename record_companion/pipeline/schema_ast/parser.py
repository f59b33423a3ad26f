"""
Record declaration parser.

Phase 1 of the pipeline: turn a structured (JSON) record declaration and its
``companion`` annotation surfaces into the schema model, applying defaults
and rejecting anything the generator cannot handle.
"""

from __future__ import annotations

import ast
import logging
from typing import Any

from ...errors import (
    InvalidRename,
    MalformedAttribute,
    MalformedDeclaration,
    UnknownAttribute,
    UnsupportedShape,
)
from ...utils import is_dotted_path, is_identifier, is_variant_name
from .nodes import CompanionOptions, DeclarationFile, FieldSchema, RecordSchema

logger = logging.getLogger(__name__)


def import_bindings(statement: str) -> list[tuple[str, str]]:
    """List the names an import statement binds, each with a canonical spelling of its binding.

    ``import a.b`` binds ``a`` exactly like ``import a`` does; star imports
    bind nothing that can be listed.
    """
    bindings = []
    for node in ast.parse(statement).body:
        if isinstance(node, ast.Import):
            for alias in node.names:
                if alias.asname:
                    bindings.append((alias.asname, f"import {alias.name} as {alias.asname}"))
                else:
                    root = alias.name.split(".", 1)[0]
                    bindings.append((root, f"import {root}"))
        elif isinstance(node, ast.ImportFrom):
            module = "." * node.level + (node.module or "")
            for alias in node.names:
                if alias.name == "*":
                    continue
                binding = f"from {module} import {alias.name}"
                if alias.asname:
                    binding += f" as {alias.asname}"
                bindings.append((alias.asname or alias.name, binding))
    return bindings


class DeclarationParser:
    """Parses record declarations into the schema model."""

    RECORD_KEYS = {"name", "fields", "type_params", "doc", "companion"}
    FIELD_KEYS = {"name", "type", "companion"}

    RECORD_NAME_OPTIONS = {"value_fn", "update_fn", "fields_fn"}
    RECORD_DERIVE_OPTIONS = {"derive_field", "derive_value"}
    RECORD_SERDE_OPTIONS = {"serde_field", "serde_value"}

    def parse(self, document: Any) -> DeclarationFile:
        """
        Parse a declaration document.

        Args:
            document: Either a single record object or ``{"records": [...]}``,
                both optionally carrying an ``imports`` list

        Returns:
            DeclarationFile with one RecordSchema per record
        """
        if not isinstance(document, dict):
            raise MalformedDeclaration("a declaration document must be a JSON object")

        declaration = DeclarationFile(imports=self._parse_imports(document.get("imports", [])))

        if "records" in document:
            extra = set(document) - {"records", "imports"}
            if extra:
                raise MalformedDeclaration(f"unexpected keys next to 'records': {', '.join(sorted(extra))}")
            records = document["records"]
            if not isinstance(records, list):
                raise MalformedDeclaration("'records' must be a list of record objects")
        else:
            records = [{k: v for k, v in document.items() if k != "imports"}]

        for raw_record in records:
            declaration.records.append(self.parse_record(raw_record))

        return declaration

    def parse_record(self, raw: Any) -> RecordSchema:
        """
        Parse a single record declaration.

        Args:
            raw: The record object (name, fields, companion options)

        Returns:
            RecordSchema with fields in declaration order
        """
        if not isinstance(raw, dict):
            raise UnsupportedShape("a record must be an object with named fields")

        name = raw.get("name")
        if not isinstance(name, str) or not is_identifier(name):
            raise MalformedDeclaration(f"record name {name!r} is not a valid identifier")

        unknown = set(raw) - self.RECORD_KEYS
        if unknown:
            raise MalformedDeclaration(f"unexpected record keys: {', '.join(sorted(unknown))}", name)

        record = RecordSchema(record_name=name)
        record.type_params = self._parse_type_params(raw.get("type_params", []), name)

        doc = raw.get("doc", "")
        if not isinstance(doc, str):
            raise MalformedDeclaration("'doc' must be a string", name)
        record.doc = doc

        record.options = self._parse_record_options(raw.get("companion", {}), name)

        # Only records whose fields are all named are supported
        raw_fields = raw.get("fields")
        if not isinstance(raw_fields, list) or not raw_fields:
            raise UnsupportedShape("only records with at least one named field are supported", name)

        seen: set[str] = set()
        for raw_field in raw_fields:
            field = self._parse_field(raw_field, record)
            if field.source_name in seen:
                raise MalformedDeclaration(f"field '{field.source_name}' is declared twice", name)
            seen.add(field.source_name)
            record.fields.append(field)

        logger.debug("Parsed record %s with %d fields", name, len(record.fields))
        return record

    def _parse_imports(self, imports: Any) -> list[str]:
        """Validate the verbatim import statements of a document."""
        if not isinstance(imports, list) or not all(isinstance(i, str) for i in imports):
            raise MalformedDeclaration("'imports' must be a list of import statements")

        for statement in imports:
            try:
                tree = ast.parse(statement)
            except SyntaxError as e:
                raise MalformedDeclaration(f"invalid import statement {statement!r}: {e.msg}") from e
            if not tree.body or not all(isinstance(node, (ast.Import, ast.ImportFrom)) for node in tree.body):
                raise MalformedDeclaration(f"{statement!r} is not an import statement")

        return list(imports)

    def _parse_type_params(self, params: Any, record: str) -> list[str]:
        """Validate the type parameter names of a generic record."""
        if not isinstance(params, list) or not all(isinstance(p, str) and is_identifier(p) for p in params):
            raise MalformedDeclaration("'type_params' must be a list of identifiers", record)
        if len(set(params)) != len(params):
            raise MalformedDeclaration("'type_params' contains duplicates", record)
        return list(params)

    def _parse_record_options(self, raw: Any, record: str) -> CompanionOptions:
        """Parse the record-level ``companion`` annotation surface."""
        if not isinstance(raw, dict):
            raise MalformedAttribute("companion", "expected an object of options", record)

        options = CompanionOptions()
        for key, value in raw.items():
            if key in self.RECORD_NAME_OPTIONS:
                if not isinstance(value, str):
                    raise MalformedAttribute(key, "expected a string", record)
                if not is_identifier(value) or value.startswith("__"):
                    raise MalformedAttribute(key, f"{value!r} is not a valid method name", record)
                setattr(options, key, value)

            elif key in self.RECORD_DERIVE_OPTIONS:
                if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                    raise MalformedAttribute(key, "expected a list of decorator paths", record)
                for path in value:
                    if not is_dotted_path(path):
                        raise MalformedAttribute(key, f"{path!r} is not a dotted name", record)
                setattr(options, key, list(value))

            elif key in self.RECORD_SERDE_OPTIONS:
                if not isinstance(value, str):
                    raise MalformedAttribute(key, "expected a string payload", record)
                setattr(options, key, value)

            else:
                raise UnknownAttribute(key, record)

        return options

    def _parse_field(self, raw: Any, record: RecordSchema) -> FieldSchema:
        """Parse a field object and its ``companion`` annotation surface."""
        name = record.record_name

        # Positional fields (plain types or lists) have no name
        if not isinstance(raw, dict) or "name" not in raw:
            raise UnsupportedShape("all fields must be named", name)

        source_name = raw["name"]
        if not isinstance(source_name, str) or not is_identifier(source_name):
            raise MalformedDeclaration(f"field name {source_name!r} is not a valid identifier", name)

        unknown = set(raw) - self.FIELD_KEYS
        if unknown:
            raise MalformedDeclaration(f"unexpected keys on field '{source_name}': {', '.join(sorted(unknown))}", name)

        field = FieldSchema(source_name=source_name)
        field.value_type, type_tree = self._parse_type(raw.get("type"), source_name, name)
        field.is_generic = self._mentions_type_params(type_tree, record.type_params)

        self._apply_field_options(field, raw.get("companion", {}), name)
        return field

    def _parse_type(self, type_expr: Any, field: str, record: str) -> tuple[str, ast.expr]:
        """Parse a type expression and return its normalized text and AST."""
        if not isinstance(type_expr, str) or not type_expr.strip():
            raise MalformedDeclaration(f"field '{field}' needs a 'type' expression", record)
        try:
            tree = ast.parse(type_expr.strip(), mode="eval")
        except SyntaxError as e:
            raise MalformedDeclaration(f"field '{field}' has an invalid type {type_expr!r}: {e.msg}", record) from e
        return ast.unparse(tree.body), tree.body

    def _mentions_type_params(self, type_tree: ast.expr, type_params: list[str]) -> bool:
        """Check whether a type expression refers to a record type parameter."""
        if not type_params:
            return False
        return any(isinstance(node, ast.Name) and node.id in type_params for node in ast.walk(type_tree))

    def _apply_field_options(self, field: FieldSchema, raw: Any, record: str) -> None:
        """Apply the field-level ``companion`` options to ``field``."""
        name = field.source_name
        if not isinstance(raw, dict):
            raise MalformedAttribute("companion", "expected an object of options", record, name)

        for key, value in raw.items():
            if key == "skip":
                if not isinstance(value, bool):
                    raise MalformedAttribute(key, "expected a boolean", record, name)
                field.skip = value

            elif key == "rename":
                if not isinstance(value, str):
                    raise MalformedAttribute(key, "expected a string", record, name)
                if not is_variant_name(value):
                    raise InvalidRename(name, value, record)
                field.rename = value

            elif key in ("title", "description"):
                if not isinstance(value, str):
                    raise MalformedAttribute(key, "expected a string", record, name)
                setattr(field, key, value)

            elif key == "order":
                # bool is an int subclass but never a valid order
                if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                    raise MalformedAttribute(key, "expected a non-negative integer", record, name)
                field.order = value

            else:
                raise UnknownAttribute(key, record, name)

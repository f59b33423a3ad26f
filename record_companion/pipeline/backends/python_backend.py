"""
Python code generation backend.

Emits, for every record, the record dataclass together with its companion
field enum, tagged value union, accessors, string parser and reverse
conversion table.
"""

from __future__ import annotations

import collections
import logging
from typing import Any

from ...utils import to_upper_snake_case
from ..analyzer.binding import CompanionBinding, decide_binding
from ..analyzer.name_resolver import NameMapping
from ..config import CodeGeneratorConfig
from ..schema_ast.nodes import DeclarationFile, RecordSchema
from .base import CodeBackend

logger = logging.getLogger(__name__)


class PythonBackend(CodeBackend):
    """Python code generation backend."""

    TEMPLATE_LANG = "python"
    FILE_EXTENSION = "py"

    def __init__(self, config: CodeGeneratorConfig):
        super().__init__(config)
        self.python_imports: set[tuple[str, str]] = set()
        self.module_imports: set[str] = set()

    def generate(
        self,
        declaration: DeclarationFile,
        mappings: dict[str, NameMapping],
        generation_comment: str = "",
    ) -> str:
        """Generate a Python module for every record of ``declaration``."""
        # Reset import tracking
        self.python_imports = {
            ("__future__", "annotations"),
            ("copy", ""),
            ("dataclasses", "dataclass"),
            ("enum", "Enum"),
            ("typing", "Any"),
            ("typing", "ClassVar"),
            ("typing", "TypeVar"),
            ("typing", "assert_never"),
            (self.config.runtime_module, "ConversionMismatch"),
            (self.config.runtime_module, "FieldInfo"),
            (self.config.runtime_module, "UnknownFieldName"),
            (self.config.runtime_module, "conversion_table"),
        }
        self.module_imports = set()

        type_params: list[str] = []
        record_content = []
        record_contexts = []
        for record in declaration.records:
            record_ctx = self._prepare_record_context(record, mappings[record.record_name])
            for param in record.type_params:
                if param not in type_params:
                    type_params.append(param)
            record_content.append(self.record_template.render(record_ctx))
            record_contexts.append(record_ctx)

        # Conversion tables evaluate field types, which may name any record
        # of the module
        conversions = self.conversions_template.render(records=record_contexts)

        if type_params:
            self.python_imports.add(("typing", "Generic"))

        prefix = self.prefix_template.render(
            generation_comment=generation_comment,
            required_imports=self._assemble_imports(),
            declared_imports=declaration.imports,
            module_imports=sorted(self.module_imports),
            type_params=type_params,
        )

        return prefix + "\n\n".join(record_content) + conversions

    def _prepare_record_context(self, record: RecordSchema, mapping: NameMapping) -> dict[str, Any]:
        """
        Prepare the template context for a record.

        Args:
            record: The resolved record
            mapping: Its name mapping

        Returns:
            Dictionary of template variables
        """
        name = record.record_name
        options = record.options
        binding = decide_binding(options)
        if binding is CompanionBinding.BIND:
            self.python_imports.add((self.config.runtime_module, "EnumCompanion"))

        field_enum = f"{name}Field"
        value_base = f"{name}Value"
        type_args = ", ".join(record.type_params)
        value_ref = f"{value_base}[{type_args}]" if type_args else value_base

        fields = []
        for f in record.emitted_fields:
            fields.append(
                {
                    "source": f.source_name,
                    "canonical": f.canonical_name,
                    "type": f.value_type,
                    "title": f.display_title,
                    "description": f.description,
                    "order": f.order,
                    "variant": f"{value_base}{f.canonical_name}",
                }
            )

        for decorator in [*options.derive_field, *options.derive_value]:
            if "." in decorator:
                self.module_imports.add(decorator.rsplit(".", 1)[0])

        logger.debug("Record %s: %d emitted fields, binding %s", name, len(fields), binding.value)

        return {
            "record_name": name,
            "doc": record.doc or f"Record with companion field access through :class:`{field_enum}`.",
            "prefix": f"_{to_upper_snake_case(name)}",
            "field_enum": field_enum,
            "value_base": value_base,
            "value_ref": value_ref,
            "type_args": type_args,
            "record_bases": self._record_bases(field_enum, value_ref, type_args, binding),
            "record_fields": [{"name": f.source_name, "type": f.value_type} for f in record.fields],
            "fields": fields,
            "parse_names": list(mapping.parse_names.items()),
            "conversions": [
                (type_expr, "(" + "".join(f"{field_enum}.{c}, " for c in names).rstrip(" ") + ")")
                for type_expr, names in self._conversion_groups(record)
            ],
            "value_fn": options.value_fn,
            "update_fn": options.update_fn,
            "fields_fn": options.fields_fn,
            "derive_field": options.derive_field,
            "derive_value": options.derive_value,
            "serde_field": options.serde_field,
            "serde_value": options.serde_value,
        }

    def _record_bases(self, field_enum: str, value_ref: str, type_args: str, binding: CompanionBinding) -> str:
        """Build the base class list of the record class."""
        bases = []
        if binding is CompanionBinding.BIND:
            bases.append(f"EnumCompanion[{field_enum}, {value_ref}]")
        if type_args:
            bases.append(f"Generic[{type_args}]")
        return f"({', '.join(bases)})" if bases else ""

    def _conversion_groups(self, record: RecordSchema) -> list[tuple[str, list[str]]]:
        """Group emitted fields by value type for reverse conversions.

        Types that mention a record type parameter are left out. Groups keep
        the order in which each type first appears.
        """
        groups: dict[str, list[str]] = collections.defaultdict(list)
        for f in record.emitted_fields:
            if not f.is_generic:
                groups[f.value_type].append(f.canonical_name)
        return list(groups.items())

    def _assemble_imports(self) -> list[str]:
        """Assemble Python import statements."""
        # Group imports by module; an empty name means "import module"
        import_groups: dict[str, set[str]] = collections.defaultdict(set)
        for module, name in self.python_imports:
            import_groups[module].add(name)

        runtime_module = self.config.runtime_module
        stdlib_groups = {m: import_groups[m] for m in import_groups if m not in ("__future__", runtime_module)}

        assembled = []

        # __future__ imports first
        if "__future__" in import_groups:
            names = sorted(import_groups["__future__"])
            assembled.append(f"from __future__ import {', '.join(names)}")
            assembled.append("")

        # Standard library: plain imports before from-imports
        for module in sorted(stdlib_groups):
            if "" in stdlib_groups[module]:
                assembled.append(f"import {module}")
        for module in sorted(stdlib_groups):
            names = sorted(n for n in stdlib_groups[module] if n)
            if names:
                assembled.append(f"from {module} import {', '.join(names)}")

        # Runtime interface
        assembled.append("")
        names = sorted(import_groups[runtime_module], key=str.lower)
        assembled.append(f"from {runtime_module} import {', '.join(names)}")

        return assembled

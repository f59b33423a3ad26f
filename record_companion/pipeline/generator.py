"""
Pipeline generator.

Runs the phases of companion generation for one declaration document:

1. Parser: declaration + annotation surfaces -> schema model
2. Name resolver: canonical names, collisions, emission order
3. Backend: companion code, including the interface binding decision
4. Formatter: optional post-processing
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from ..errors import MalformedDeclaration
from ..utils import to_upper_snake_case
from .analyzer.name_resolver import NameMapping, NameResolver
from .backends.python_backend import PythonBackend
from .config import CodeGeneratorConfig
from .formatters import FORMATTERS
from .schema_ast.nodes import DeclarationFile, RecordSchema
from .schema_ast.parser import DeclarationParser, import_bindings
from .writer.atomic_writer import AtomicWriter

logger = logging.getLogger(__name__)

# Names every generated module imports, with the statement binding them
MODULE_IMPORTS = {
    "annotations": "from __future__ import annotations",
    "copy": "import copy",
    "dataclass": "from dataclasses import dataclass",
    "Enum": "from enum import Enum",
    "Any": "from typing import Any",
    "ClassVar": "from typing import ClassVar",
    "Generic": "from typing import Generic",
    "TypeVar": "from typing import TypeVar",
    "assert_never": "from typing import assert_never",
}

RUNTIME_NAMES = ("ConversionMismatch", "EnumCompanion", "FieldInfo", "UnknownFieldName", "conversion_table")


class PipelineGenerator:
    """Generates a companion module from a record declaration document."""

    def __init__(
        self,
        document: dict[str, Any],
        config: CodeGeneratorConfig | None = None,
        generation_comment: str = "",
    ):
        """
        Initialize the generator.

        Args:
            document: The declaration document (a record or ``{"records": [...]}``)
            config: Code generation configuration
            generation_comment: Comment placed at the top of the module
        """
        self.document = document
        self.config = config or CodeGeneratorConfig()
        self.generation_comment = generation_comment if self.config.add_generation_comment else ""

    def generate(self) -> str:
        """
        Run the pipeline.

        Returns:
            The generated Python module

        Raises:
            GenerationError: On any declaration problem; nothing is emitted
        """
        declaration = DeclarationParser().parse(self.document)
        mappings = self._resolve(declaration)

        backend = PythonBackend(self.config)
        code = backend.generate(declaration, mappings, self.generation_comment)
        logger.debug("Generated %d records", len(declaration.records))

        formatter_config = self.config.formatter
        if formatter_config.enabled:
            formatter_cls = FORMATTERS.get(formatter_config.tool)
            if formatter_cls is None:
                raise ValueError(f"Unknown formatter '{formatter_config.tool}', expected one of {sorted(FORMATTERS)}")
            code = formatter_cls().format(code, formatter_config)

        return code

    def write(self, path: Path) -> str:
        """Generate the module and write it to ``path``."""
        code = self.generate()
        AtomicWriter(self.config.output).write(path, code)
        return code

    def _resolve(self, declaration: DeclarationFile) -> dict[str, NameMapping]:
        """Resolve names of every record and check module-level collisions."""
        resolver = NameResolver()
        mappings: dict[str, NameMapping] = {}
        owners = self._module_bindings(declaration)

        for record in declaration.records:
            if record.record_name in mappings:
                raise MalformedDeclaration(f"record '{record.record_name}' is declared twice")
            mappings[record.record_name] = resolver.resolve(record)

            for name in self._top_level_names(record):
                self._claim(owners, name, f"record '{record.record_name}'", record.record_name)

        return mappings

    def _module_bindings(self, declaration: DeclarationFile) -> dict[str, str]:
        """Map every imported or type parameter name of the module to what binds it.

        The same name bound twice by an identical statement is not a clash:
        ``import typing`` declared next to a ``typing.final`` decorator, or a
        type parameter shared by several records.
        """
        owners = dict(MODULE_IMPORTS)
        runtime_module = self.config.runtime_module
        for name in RUNTIME_NAMES:
            owners[name] = f"from {runtime_module} import {name}"
        owners["_Target"] = "the generated module"

        for statement in declaration.imports:
            for name, binding in import_bindings(statement):
                self._claim(owners, name, binding)

        for record in declaration.records:
            options = record.options
            for decorator in [*options.derive_field, *options.derive_value]:
                if "." in decorator:
                    root = decorator.split(".", 1)[0]
                    self._claim(owners, root, f"import {root}", record.record_name)
            for param in record.type_params:
                self._claim(owners, param, f"type parameter '{param}'", record.record_name)

        return owners

    @staticmethod
    def _claim(owners: dict[str, str], name: str, owner: str, record: str | None = None) -> None:
        """Bind ``name`` to ``owner`` unless something else already binds it."""
        if name in owners and owners[name] != owner:
            raise MalformedDeclaration(f"module-level name '{name}' of {owner} clashes with {owners[name]}", record)
        owners[name] = owner

    @staticmethod
    def _top_level_names(record: RecordSchema) -> list[str]:
        """List the module-level names generated for ``record``."""
        name = record.record_name
        prefix = f"_{to_upper_snake_case(name)}"
        names = [name, f"{name}Field", f"{name}Value"]
        names.extend(f"{name}Value{f.canonical_name}" for f in record.emitted_fields)
        names.extend(f"{prefix}_{suffix}" for suffix in ("FIELDS", "FIELD_INFO", "FIELD_NAMES", "VARIANTS", "CONVERSIONS"))
        return names


def generate_companion(document: dict[str, Any], config: CodeGeneratorConfig | None = None) -> str:
    """Convenience function returning the companion module for ``document``."""
    return PipelineGenerator(document, config).generate()

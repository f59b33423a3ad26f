"""
Base class for code generation backends.

Defines the interface that language-specific backends implement and sets up
the Jinja2 environment they render with.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

import jinja2

from ..analyzer.name_resolver import NameMapping
from ..config import CodeGeneratorConfig
from ..schema_ast.nodes import DeclarationFile


def _docstring(text: str) -> str:
    """Escape text for use inside a triple-quoted docstring."""
    return text.replace("\\", "\\\\").replace('"', '\\"')


class CodeBackend(ABC):
    """Abstract base class for code generation backends."""

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the backend.

        Args:
            config: Code generation configuration
        """
        self.config = config
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
            undefined=jinja2.StrictUndefined,
        )
        # Add custom filters
        self.jinja_env.filters["pyrepr"] = repr
        self.jinja_env.filters["docstring"] = _docstring

        self.prefix_template = self.jinja_env.get_template(f"prefix.{self.FILE_EXTENSION}.jinja2")
        self.record_template = self.jinja_env.get_template(f"record.{self.FILE_EXTENSION}.jinja2")
        self.conversions_template = self.jinja_env.get_template(f"conversions.{self.FILE_EXTENSION}.jinja2")

    @abstractmethod
    def generate(
        self,
        declaration: DeclarationFile,
        mappings: dict[str, NameMapping],
        generation_comment: str = "",
    ) -> str:
        """
        Generate code for every record of a declaration.

        Args:
            declaration: The parsed declaration, names already resolved
            mappings: Name mapping of each record, keyed by record name
            generation_comment: Comment placed at the top of the output

        Returns:
            Generated code as a string
        """

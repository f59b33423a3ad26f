"""
Atomic file writer for generated modules.

Ensures that an interrupted or rejected write never leaves a half-written
companion module behind.
"""

from __future__ import annotations

import ast
import logging
import tempfile
from collections.abc import Callable
from pathlib import Path

from ...errors import OutputValidationError
from ..config import OutputConfig, OutputMode

logger = logging.getLogger(__name__)


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file
    """

    def __init__(self, config: OutputConfig | None = None, validate: Callable[[str], None] | None = None):
        """Initialize the atomic writer.

        Args:
            config: Output configuration (mode, validation, atomicity)
            validate: Optional validation function, defaults to parsing the code
        """
        self.config = config or OutputConfig()
        self._validate = validate or self._default_validate

    def write(self, path: Path, content: str) -> None:
        """Write a generated module to ``path``.

        Args:
            path: Target file path
            content: Generated code

        Raises:
            FileExistsError: If the file exists and the mode is ``error``
            OutputValidationError: If validation fails
            OSError: If file operations fail
        """
        if path.exists() and self.config.mode is OutputMode.ERROR_IF_EXISTS:
            raise FileExistsError(f"Output file already exists: {path}. Use force mode to overwrite.")

        if self.config.validate_before_write:
            self._validate(content)

        path.parent.mkdir(parents=True, exist_ok=True)

        if not self.config.atomic_write:
            path.write_text(content, encoding="utf-8")
            logger.debug("Wrote %s", path)
            return

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
            temp_path.replace(path)
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise

        logger.debug("Wrote %s atomically", path)

    def _default_validate(self, content: str) -> None:
        """Check that the content is valid Python.

        Raises:
            OutputValidationError: If the code does not parse
        """
        try:
            ast.parse(content)
        except SyntaxError as e:
            raise OutputValidationError(f"Generated Python code is not valid: {e}") from e

"""
Tests for the atomic writer and the file output of the pipeline.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from record_companion.errors import OutputValidationError
from record_companion.pipeline import AtomicWriter, CodeGeneratorConfig, OutputConfig, OutputMode, PipelineGenerator

SIMPLE_DECLARATION = {"name": "Person", "fields": [{"name": "name", "type": "str"}]}

VALID_CODE = """
from __future__ import annotations

class Person:
    pass
"""


class TestAtomicWriter:
    """Tests for AtomicWriter."""

    def test_write_creates_file(self):
        """Test that write creates a new file."""
        writer = AtomicWriter()

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "output.py"
            writer.write(path, VALID_CODE)

            assert path.read_text() == VALID_CODE
            # No temporary files are left behind
            assert [p.name for p in Path(tmpdir).iterdir()] == ["output.py"]

    def test_write_creates_parent_directories(self):
        """Test that missing parent directories are created."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "pkg" / "sub" / "output.py"
            AtomicWriter().write(path, VALID_CODE)

            assert path.exists()

    def test_write_raises_on_existing_by_default(self):
        """Test that the default mode refuses to overwrite."""
        writer = AtomicWriter()

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "existing.py"
            path.write_text("existing content")

            with pytest.raises(FileExistsError):
                writer.write(path, VALID_CODE)
            assert path.read_text() == "existing content"

    def test_write_overwrites_in_force_mode(self):
        """Test that force mode overwrites an existing file."""
        writer = AtomicWriter(OutputConfig(mode=OutputMode.FORCE))

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "existing.py"
            path.write_text("old content")

            writer.write(path, VALID_CODE)

            assert path.read_text() == VALID_CODE

    def test_write_validates_python(self):
        """Test that invalid code is never written."""
        writer = AtomicWriter()

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "output.py"

            with pytest.raises(OutputValidationError):
                writer.write(path, "class Broken(")

            assert not path.exists()

    def test_write_without_validation(self):
        """Test that validation can be disabled."""
        writer = AtomicWriter(OutputConfig(validate_before_write=False))

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "output.py"
            writer.write(path, "not really python code")

            assert path.read_text() == "not really python code"

    def test_custom_validator(self):
        """Test that a custom validator replaces the default one."""

        def reject(content: str) -> None:
            raise OutputValidationError("rejected")

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "output.py"

            with pytest.raises(OutputValidationError, match="rejected"):
                AtomicWriter(validate=reject).write(path, VALID_CODE)
            assert not path.exists()

    def test_non_atomic_write(self):
        """Test the direct write path."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "output.py"
            AtomicWriter(OutputConfig(atomic_write=False)).write(path, VALID_CODE)

            assert path.read_text() == VALID_CODE


class TestGeneratorWrite:
    """Tests for PipelineGenerator.write."""

    def test_write_returns_written_code(self):
        """Test that the written file holds the generated module."""
        gen = PipelineGenerator(SIMPLE_DECLARATION)

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "person.py"
            code = gen.write(path)

            assert path.read_text() == code
            assert "class PersonField(Enum):" in code

    def test_write_error_if_exists(self):
        """Test that the default mode raises if the file exists."""
        gen = PipelineGenerator(SIMPLE_DECLARATION)

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "person.py"
            path.write_text("existing content")

            with pytest.raises(FileExistsError):
                gen.write(path)

    def test_write_force(self):
        """Test that force mode replaces the file."""
        config = CodeGeneratorConfig()
        config.output.mode = OutputMode.FORCE
        gen = PipelineGenerator(SIMPLE_DECLARATION, config)

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "person.py"
            path.write_text("existing content")

            code = gen.write(path)

            assert path.read_text() == code

"""
Tests for the post-processing formatters.
"""

from __future__ import annotations

import ast

import pytest

from record_companion.pipeline import CodeGeneratorConfig, FormatterConfig, generate_companion
from record_companion.pipeline.formatters import FORMATTERS, BlackFormatter, RuffFormatter, split_generation_comment

UNFORMATTED = "x = {'a':1,\n 'b':2}\n"
HEADER = "#Generated by record_companion example.json\n# Do not edit by hand\n"


class TestBlackFormatter:
    """Tests for BlackFormatter."""

    def test_formats_code(self):
        """Test that black normalizes strings and spacing."""
        pytest.importorskip("black")

        formatted = BlackFormatter().format(UNFORMATTED, FormatterConfig(enabled=True))

        assert formatted == 'x = {"a": 1, "b": 2}\n'

    def test_respects_string_normalization(self):
        """Test that string normalization can be disabled."""
        pytest.importorskip("black")

        config = FormatterConfig(enabled=True, string_normalization=False)
        formatted = BlackFormatter().format(UNFORMATTED, config)

        assert formatted == "x = {'a': 1, 'b': 2}\n"

    def test_invalid_input_is_returned_unchanged(self):
        """Test that black errors never fail generation."""
        pytest.importorskip("black")

        assert BlackFormatter().format("class Broken(", FormatterConfig(enabled=True)) == "class Broken("

    def test_generation_comment_is_kept(self):
        """Test that the header comment is not touched by black."""
        pytest.importorskip("black")

        formatted = BlackFormatter().format(HEADER + "\n\n\n" + UNFORMATTED, FormatterConfig(enabled=True))

        assert formatted == HEADER + '\nx = {"a": 1, "b": 2}\n'

    def test_formatted_code_is_returned_unchanged(self):
        """Test that already formatted code comes back as is."""
        pytest.importorskip("black")

        code = HEADER + '\nx = {"a": 1, "b": 2}\n'

        assert BlackFormatter().format(code, FormatterConfig(enabled=True)) == code

    def test_unknown_target_version(self):
        """Test that an unknown target version lets black infer one."""
        pytest.importorskip("black")

        config = FormatterConfig(enabled=True, target_version="py2")

        assert BlackFormatter().format(UNFORMATTED, config) == 'x = {"a": 1, "b": 2}\n'

    def test_unavailable_formatter_returns_code(self, monkeypatch):
        """Test that a missing black leaves the code untouched."""
        formatter = BlackFormatter()
        monkeypatch.setattr(formatter, "is_available", lambda: False)

        assert formatter.format(UNFORMATTED, FormatterConfig(enabled=True)) == UNFORMATTED

    def test_formats_generated_module(self, load_declaration):
        """Test the formatter inside the pipeline."""
        pytest.importorskip("black")

        config = CodeGeneratorConfig(formatter=FormatterConfig(enabled=True, tool="black"))
        code = generate_companion(load_declaration("user_profile.json"), config)

        ast.parse(code)
        assert '    UserId = "UserId"\n' in code


class TestRuffFormatter:
    """Tests for RuffFormatter."""

    def test_formats_code(self):
        """Test that ruff formats through stdin."""
        formatter = RuffFormatter()
        if not formatter.is_available():
            pytest.skip("ruff not installed")

        formatted = formatter.format(UNFORMATTED, FormatterConfig(enabled=True, tool="ruff"))

        assert formatted == 'x = {"a": 1, "b": 2}\n'

    def test_unavailable_formatter_returns_code(self, monkeypatch):
        """Test that a missing ruff leaves the code untouched."""
        formatter = RuffFormatter()
        monkeypatch.setattr(formatter, "is_available", lambda: False)

        assert formatter.format(UNFORMATTED, FormatterConfig(enabled=True, tool="ruff")) == UNFORMATTED


def test_registry():
    assert FORMATTERS == {"black": BlackFormatter, "ruff": RuffFormatter}


@pytest.mark.parametrize(
    "code,expected",
    [
        ("x = 1\n", ("", "x = 1\n")),
        (HEADER + "\n\n\nx = 1\n", (HEADER + "\n", "x = 1\n")),
        (HEADER + "x = 1\n", (HEADER + "\n", "x = 1\n")),
        ("# only a comment", ("# only a comment\n\n", "")),
        ("x = 1  # trailing\n", ("", "x = 1  # trailing\n")),
    ],
)
def test_split_generation_comment(code, expected):
    assert split_generation_comment(code) == expected

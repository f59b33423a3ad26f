"""
Base class for code formatters.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..config import FormatterConfig


class Formatter(ABC):
    """Abstract base class for formatters run on generated modules.

    A formatter that is not installed, or that rejects its input, returns
    the code unchanged: formatting never makes generation fail.
    """

    name: str = ""

    @abstractmethod
    def format(self, code: str, config: FormatterConfig) -> str:
        """
        Format the given code.

        Args:
            code: The generated module
            config: Formatter configuration

        Returns:
            Formatted code, or ``code`` itself if formatting was not possible
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Check whether the formatter can be used."""


def split_generation_comment(code: str) -> tuple[str, str]:
    """Split the leading comment block off a generated module.

    Returns:
        ``(header, body)`` where ``header`` is empty or the comment lines
        followed by one blank line, and ``body`` is the rest of the module
    """
    lines = code.splitlines(keepends=True)
    count = 0
    while count < len(lines) and lines[count].startswith("#"):
        count += 1
    if not count:
        return "", code
    header = "".join(lines[:count]).rstrip("\n") + "\n\n"
    return header, "".join(lines[count:]).lstrip("\n")

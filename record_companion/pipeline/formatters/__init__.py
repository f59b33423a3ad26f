"""
Post-processing formatters for generated code.
"""

from __future__ import annotations

from .base import Formatter, split_generation_comment
from .black_formatter import BlackFormatter
from .ruff_formatter import RuffFormatter

FORMATTERS: dict[str, type[Formatter]] = {
    "black": BlackFormatter,
    "ruff": RuffFormatter,
}

__all__ = [
    "FORMATTERS",
    "BlackFormatter",
    "Formatter",
    "RuffFormatter",
    "split_generation_comment",
]

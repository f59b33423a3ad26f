"""
Schema model and declaration parser.
"""

from __future__ import annotations

from .nodes import CompanionOptions, DeclarationFile, FieldSchema, RecordSchema
from .parser import DeclarationParser

__all__ = [
    "CompanionOptions",
    "DeclarationFile",
    "DeclarationParser",
    "FieldSchema",
    "RecordSchema",
]

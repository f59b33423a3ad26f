"""
Analysis passes run between parsing and emission.
"""

from __future__ import annotations

from .binding import CompanionBinding, decide_binding
from .name_resolver import NameMapping, NameResolver

__all__ = [
    "CompanionBinding",
    "NameMapping",
    "NameResolver",
    "decide_binding",
]

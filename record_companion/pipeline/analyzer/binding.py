"""
Generic companion interface binding.

A record is bound to ``EnumCompanion`` only when it keeps the default
accessor names: generic callers have no way to discover custom ones.
"""

from __future__ import annotations

from enum import Enum

from ..schema_ast.nodes import (
    DEFAULT_FIELDS_FN,
    DEFAULT_UPDATE_FN,
    DEFAULT_VALUE_FN,
    CompanionOptions,
)


class CompanionBinding(str, Enum):
    """Whether the generated record implements the generic interface."""

    BIND = "bind"
    SKIP = "skip"


def decide_binding(options: CompanionOptions) -> CompanionBinding:
    """Decide the binding from the finalized accessor names."""
    if (
        options.value_fn == DEFAULT_VALUE_FN
        and options.update_fn == DEFAULT_UPDATE_FN
        and options.fields_fn == DEFAULT_FIELDS_FN
    ):
        return CompanionBinding.BIND
    return CompanionBinding.SKIP

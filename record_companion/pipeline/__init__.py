"""
Pipeline - record declaration to companion code generator.

Generation runs in phases:

1. Parser: parse the declaration and its annotation surfaces
2. Name resolver: canonical names, collisions and emission order
3. Backend: emit the companion code and decide the interface binding
4. Formatter: optional post-processing (black or ruff)
5. Writer: validate and write the module atomically
"""

from __future__ import annotations

from .config import CodeGeneratorConfig, FormatterConfig, OutputConfig, OutputMode
from .generator import PipelineGenerator, generate_companion
from .writer import AtomicWriter

__all__ = [
    "AtomicWriter",
    "CodeGeneratorConfig",
    "FormatterConfig",
    "OutputConfig",
    "OutputMode",
    "PipelineGenerator",
    "generate_companion",
]

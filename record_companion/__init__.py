"""Record Companion Generator

Generates, from a record declaration, a Python module holding the record
dataclass together with a companion field enum and tagged value union, so
that fields can be enumerated, read and written generically at runtime.
"""

__version__ = "0.1.0"

from .errors import (
    AccessorConflict,
    DuplicateFieldName,
    GenerationError,
    InvalidFieldName,
    InvalidRename,
    MalformedAttribute,
    MalformedDeclaration,
    OutputValidationError,
    UnknownAttribute,
    UnsupportedShape,
)
from .pipeline import (
    AtomicWriter,
    CodeGeneratorConfig,
    FormatterConfig,
    OutputConfig,
    OutputMode,
    PipelineGenerator,
    generate_companion,
)

__all__ = [
    "PipelineGenerator",
    "generate_companion",
    "CodeGeneratorConfig",
    "FormatterConfig",
    "OutputConfig",
    "OutputMode",
    "AtomicWriter",
    "GenerationError",
    "UnsupportedShape",
    "MalformedDeclaration",
    "UnknownAttribute",
    "MalformedAttribute",
    "InvalidRename",
    "InvalidFieldName",
    "DuplicateFieldName",
    "AccessorConflict",
    "OutputValidationError",
]

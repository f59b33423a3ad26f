"""
Utility functions for the record companion generator.
"""

import keyword
import re

# Names a generated field enum or value union defines for itself
RESERVED_VARIANT_NAMES = frozenset(
    {
        # Field enum
        "name",
        "value",
        "type_name",
        "title",
        "description",
        "order",
        "from_str",
        # Value union
        "field",
        "tag",
        "try_into",
        "try_from_pair",
    }
)

_DOTTED_PATH = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")


def to_pascal_case(text: str) -> str:
    """Convert a snake_case field name to PascalCase.

    Only underscores separate words; the rest of each word is kept as is.

    Examples:
        "first_name" -> "FirstName"
        "is_HTTP" -> "IsHTTP"
        "distance" -> "Distance"
        "_private" -> "Private"

    Args:
        text: The field name to convert

    Returns:
        PascalCase string (empty if ``text`` has no word characters)
    """
    return "".join(word[:1].upper() + word[1:] for word in text.split("_") if word)


def to_upper_snake_case(text: str) -> str:
    """Convert a PascalCase class name to UPPER_SNAKE_CASE.

    Examples:
        "UserProfile" -> "USER_PROFILE"
        "HTTPRequest" -> "HTTP_REQUEST"
    """
    text = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", text)
    text = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", text)
    return text.upper()


def is_identifier(text: str) -> bool:
    """Check that ``text`` is a Python identifier and not a keyword."""
    return text.isidentifier() and not keyword.iskeyword(text)


def is_variant_name(text: str) -> bool:
    """Check that ``text`` can name a field enum member and a value variant."""
    return is_identifier(text) and not text.startswith("_") and text not in RESERVED_VARIANT_NAMES


def is_dotted_path(text: str) -> bool:
    """Check that ``text`` is a dotted path such as ``enum.unique``."""
    return bool(_DOTTED_PATH.match(text)) and not any(keyword.iskeyword(part) for part in text.split("."))

"""
Python-specific naming utilities.

Handles Python reserved words, the names generated files import or
use as builtins, and the name styles for each identifier scope.
"""

from typing import FrozenSet

from ...core.naming import Namer, NamingCase, make_name_style
from ...core.strings import (
    is_ascii_letter_or_underscore_or_digit,
    is_part_character,
    legalize_characters,
)


# Python reserved keywords
PYTHON_RESERVED_WORDS = frozenset(
    {
        "False",
        "None",
        "True",
        "and",
        "as",
        "assert",
        "async",
        "await",
        "break",
        "class",
        "continue",
        "def",
        "del",
        "elif",
        "else",
        "except",
        "finally",
        "for",
        "from",
        "global",
        "if",
        "import",
        "in",
        "is",
        "lambda",
        "nonlocal",
        "not",
        "or",
        "pass",
        "raise",
        "return",
        "try",
        "while",
        "with",
        "yield",
    }
)

# Soft keywords, valid identifiers but confusing ones
PYTHON_SOFT_KEYWORDS = frozenset({"match", "case", "type", "_"})

# Names a generated file may import
PYTHON_IMPORTED_NAMES = frozenset(
    {
        "Any",
        "Optional",
        "Union",
        "Enum",
        "date",
        "time",
        "datetime",
        "annotations",
    }
)

# Builtins the generated code refers to
PYTHON_BUILTIN_TYPES = frozenset(
    {
        "int",
        "float",
        "str",
        "bool",
        "list",
        "dict",
        "object",
        "property",
        "staticmethod",
        "classmethod",
        "super",
    }
)

# Forbidden in every scope that is not an enum
GLOBAL_FORBIDDEN_NAMES = frozenset({"type", "id"})


def global_forbidden_words() -> FrozenSet[str]:
    """Names a type or top-level alias must not take."""
    return (
        PYTHON_RESERVED_WORDS
        | PYTHON_SOFT_KEYWORDS
        | PYTHON_IMPORTED_NAMES
        | PYTHON_BUILTIN_TYPES
        | GLOBAL_FORBIDDEN_NAMES
    )


def property_forbidden_words() -> FrozenSet[str]:
    """Names a class property must not take."""
    return global_forbidden_words() | {"self"}


def enum_case_forbidden_words() -> FrozenSet[str]:
    """Names an enum case must not take."""
    return PYTHON_RESERVED_WORDS | {"mro"}


def python_name_style(case: NamingCase, ascii_only: bool = True):
    """
    Name style producing valid Python identifiers.

    Args:
        case: Target case style
        ascii_only: Keep only ASCII letters, digits and underscores

    Returns:
        Function mapping raw labels to identifiers
    """
    if ascii_only:
        legalize = legalize_characters(is_ascii_letter_or_underscore_or_digit)
    else:
        legalize = legalize_characters(is_part_character)
    return make_name_style(case, legalize)


def create_python_namer(
    case: NamingCase, scope: str = "global", ascii_only: bool = True
) -> Namer:
    """Create a namer for one Python identifier scope."""
    if scope == "global":
        forbidden = global_forbidden_words()
    elif scope == "property":
        forbidden = property_forbidden_words()
    elif scope == "enum_case":
        forbidden = enum_case_forbidden_words()
    else:
        raise ValueError(f"Unknown naming scope: {scope}")

    return Namer(python_name_style(case, ascii_only), forbidden, scope=scope)

"""
Python-specific configuration and type mappings.

Maps type graph kinds to Python syntax and names the import each
non-builtin name needs.
"""

from typing import Dict, Iterable, List, Set

from ...core.config import GeneratorConfig
from ...core.types import TypeKind


# Python type mappings for kinds rendered as a single name
PYTHON_TYPE_MAP = {
    TypeKind.ANY: "Any",
    TypeKind.NULL: "None",
    TypeKind.BOOL: "bool",
    TypeKind.INTEGER: "int",
    TypeKind.DOUBLE: "float",
    TypeKind.STRING: "str",
    TypeKind.DATE: "date",
    TypeKind.TIME: "time",
    TypeKind.DATE_TIME: "datetime",
}

# Module each importable name comes from
PYTHON_IMPORT_MAP = {
    "Any": "typing",
    "Optional": "typing",
    "Union": "typing",
    "Enum": "enum",
    "date": "datetime",
    "time": "datetime",
    "datetime": "datetime",
}

FUTURE_IMPORT = "from __future__ import annotations"


def get_import_statements(names_used: Iterable[str]) -> List[str]:
    """
    Build ``from ... import ...`` lines for the names used.

    One line per module, modules and names sorted.
    """
    by_module: Dict[str, Set[str]] = {}
    for name in names_used:
        module = PYTHON_IMPORT_MAP.get(name)
        if module is None:
            raise KeyError(f"No import known for {name!r}")
        by_module.setdefault(module, set()).add(name)

    return [
        f"from {module} import {', '.join(sorted(names))}"
        for module, names in sorted(by_module.items())
    ]


# Default configurations for different output flavours
def get_default_config() -> GeneratorConfig:
    """Configuration with inline unions, the default."""
    return GeneratorConfig()


def get_declared_unions_config() -> GeneratorConfig:
    """Configuration that declares each union as a named alias."""
    return GeneratorConfig(declare_unions=True)


def get_topological_config() -> GeneratorConfig:
    """Configuration that orders declarations dependencies first."""
    return GeneratorConfig(declaration_order="topological")

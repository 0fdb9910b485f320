"""
Python code generator module.

Generates plain Python classes, enums and union aliases from a type graph.
"""

from .generator import (
    PythonGenerator,
    PythonTypeSource,
    create_python_generator,
    create_declared_unions_generator,
)
from .naming import (
    create_python_namer,
    python_name_style,
    global_forbidden_words,
    property_forbidden_words,
    enum_case_forbidden_words,
)
from .config import (
    PYTHON_TYPE_MAP,
    get_import_statements,
    get_default_config,
    get_declared_unions_config,
    get_topological_config,
)

__all__ = [
    # Generator
    "PythonGenerator",
    "PythonTypeSource",
    "create_python_generator",
    "create_declared_unions_generator",
    # Naming
    "create_python_namer",
    "python_name_style",
    "global_forbidden_words",
    "property_forbidden_words",
    "enum_case_forbidden_words",
    # Configuration
    "PYTHON_TYPE_MAP",
    "get_import_statements",
    "get_default_config",
    "get_declared_unions_config",
    "get_topological_config",
]

"""
Core code generation components.

Provides base classes and utilities used by all language generators.
"""

from .generator import (
    CodeGenerator,
    ContractViolationError,
    GenerationResult,
    GeneratorError,
    generate_code,
)
from .types import (
    TypeGraph,
    TypeGraphError,
    TypeKind,
    TypeVisitor,
    build_type_graph,
)
from .naming import Namer, NamingCase, make_name_style
from .ordering import DeclarationOrder, order_declarations
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "ContractViolationError",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    # Type graph
    "TypeGraph",
    "TypeGraphError",
    "TypeKind",
    "TypeVisitor",
    "build_type_graph",
    # Naming utilities - language-agnostic
    "Namer",
    "NamingCase",
    "make_name_style",
    # Declaration order
    "DeclarationOrder",
    "order_declarations",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system - language-agnostic
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]

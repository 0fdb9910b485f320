"""
typegraph code generation module.

Renders a type graph into source code.
"""

from typing import Any, Mapping, Optional, Sequence

from .core.generator import CodeGenerator, GenerationResult, generate_code
from .core.types import TypeGraph, build_type_graph
from .core.config import GeneratorConfig, ConfigManager, load_config
from .languages.python import PythonGenerator, create_python_generator


# Convenience functions
def render_python(
    graph: TypeGraph, leading_comments: Optional[Sequence[str]] = None, **options
) -> str:
    """
    Render a type graph to Python source.

    Args:
        graph: Type graph to render
        leading_comments: Comment lines for the top of the file
        **options: Generator options

    Returns:
        Generated code string
    """
    generator = create_python_generator(**options)
    result = generate_code(generator, graph, leading_comments)

    if result.success:
        return result.code
    else:
        raise RuntimeError(
            f"Code generation failed: {result.error_message}"
        ) from result.exception


def render_from_description(description: Mapping[str, Any], **options) -> str:
    """
    Build a type graph from a plain description and render it.

    Args:
        description: Dict with ``top_levels`` and optional ``definitions``
        **options: Generator options

    Returns:
        Generated code string
    """
    return render_python(build_type_graph(description), **options)


# Export main interfaces
__all__ = [
    "CodeGenerator",
    "GenerationResult",
    "TypeGraph",
    "GeneratorConfig",
    "ConfigManager",
    "PythonGenerator",
    "build_type_graph",
    "create_python_generator",
    "generate_code",
    "load_config",
    "render_from_description",
    "render_python",
]

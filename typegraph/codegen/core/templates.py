"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering of
declarations. Rendered text is returned as a list of lines.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from jinja2 import DictLoader, Environment, FileSystemLoader, StrictUndefined

from ...logging_config import get_logger

logger = get_logger(__name__)


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(
        self,
        template_dir: Optional[Path] = None,
        templates: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files
            templates: In-memory templates, used when no directory is given
        """
        self.template_dir = template_dir
        self._env = None
        self._setup_environment(templates or {})

    def _setup_environment(self, templates: Dict[str, str]):
        """Setup Jinja2 environment for source code output."""
        if self.template_dir and self.template_dir.exists():
            loader = FileSystemLoader(str(self.template_dir))
        else:
            if self.template_dir:
                logger.warning("Template directory not found: %s", self.template_dir)
            loader = DictLoader(dict(templates))

        # Generated source is never HTML: no autoescaping
        self._env = Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=False,
            undefined=StrictUndefined,
        )

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template file
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except Exception as e:
            raise TemplateError(
                f"Failed to render template {template_name}: {str(e)}"
            ) from e

    def render_lines(self, template_name: str, context: Dict[str, Any]) -> List[str]:
        """Render a template and split the result into lines."""
        rendered = self.render_template(template_name, context)
        return rendered.rstrip("\n").split("\n")


def create_template_engine(
    template_dir: Optional[Path] = None, templates: Optional[Dict[str, str]] = None
) -> TemplateEngine:
    """Create a template engine for a directory or an in-memory template set."""
    return TemplateEngine(template_dir, templates)

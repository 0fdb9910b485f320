"""
Base generator interface for all code generation targets.

A generator renders one type graph into the lines of one source file:
names are assigned for the whole graph first, then every declarable type
is emitted in the order the target's declaration order policy asks for.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from ...logging_config import get_logger
from .config import GeneratorConfig, get_config_manager
from .naming import Namer
from .ordering import DeclarationOrder, order_declarations
from .templates import TemplateEngine, create_template_engine
from .types import (
    ClassProperty,
    ClassType,
    EnumType,
    Type,
    TypeGraph,
    UnionType,
    direct_dependencies,
)

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class ContractViolationError(GeneratorError):
    """A node the upstream stage should have replaced reached the renderer."""

    def __init__(self, message: str, node: Optional[Type] = None, location: str = ""):
        if location:
            message = f"{message} (at {location})"
        super().__init__(message)
        self.node = node
        self.location = location


@contextmanager
def located(location: str):
    """Attach a location to a ContractViolationError raised inside the block."""
    try:
        yield
    except ContractViolationError as e:
        if e.location:
            raise
        raise ContractViolationError(str(e), node=e.node, location=location) from e


class NameTable:
    """Names assigned during one render."""

    def __init__(self):
        self.type_names: Dict[Type, str] = {}
        self.top_level_names: Dict[str, str] = {}
        self.property_names: Dict[ClassType, Dict[str, str]] = {}
        self.enum_case_names: Dict[EnumType, Dict[str, str]] = {}
        self.renames: List[str] = []

    def name_for(self, t: Type) -> str:
        """Assigned top-level name of a declared type."""
        try:
            return self.type_names[t]
        except KeyError:
            raise GeneratorError(f"No name assigned to {t!r}") from None


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    # Blank lines between two declarations
    declaration_spacing = 2

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self.names = NameTable()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'python')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.py')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    def render_template(self, template_name: str, context: Dict[str, Any]) -> List[str]:
        """Render a declaration template into lines."""
        return self.template_engine.render_lines(template_name, context)

    # Naming hooks

    @abstractmethod
    def make_named_type_namer(self) -> Namer:
        """Namer for the global scope: named types and top-level aliases."""
        pass

    @abstractmethod
    def make_property_namer(self, class_type: ClassType) -> Namer:
        """Namer for the properties of one class."""
        pass

    @abstractmethod
    def make_enum_case_namer(self, enum_type: EnumType) -> Namer:
        """Namer for the cases of one enum."""
        pass

    def proposed_name(self, t: Type) -> str:
        """Raw label offered to the namer for a named type."""
        if isinstance(t, UnionType):
            return t.proposed_name
        return t.name

    # Emission hooks

    @abstractmethod
    def source_for(self, t: Type) -> str:
        """Target syntax for a reference to ``t``."""
        pass

    @abstractmethod
    def emit_class(self, class_type: ClassType, class_name: str) -> List[str]:
        pass

    @abstractmethod
    def emit_enum(self, enum_type: EnumType, enum_name: str) -> List[str]:
        pass

    @abstractmethod
    def emit_union(self, union_type: UnionType, union_name: str) -> List[str]:
        pass

    @abstractmethod
    def emit_top_level_alias(self, alias_name: str, t: Type) -> List[str]:
        pass

    @abstractmethod
    def emit_header(self, leading_comments: Optional[Sequence[str]]) -> List[str]:
        """File header; called after every declaration has been emitted."""
        pass

    def start_render(self):
        """Reset per-render state. Subclasses extend this."""
        self.names = NameTable()

    # Rendering

    def render(
        self, graph: TypeGraph, leading_comments: Optional[Sequence[str]] = None
    ) -> List[str]:
        """
        Render a type graph into source lines.

        Args:
            graph: Type graph to render, not modified
            leading_comments: Comment lines for the top of the file

        Returns:
            Output lines, complete or not at all
        """
        self.start_render()
        self._assign_names(graph)

        body = self._emit_declarations(graph)
        header = self.emit_header(leading_comments)

        lines = list(header)
        if header and body:
            lines.extend([""] * self.declaration_spacing)
        lines.extend(body)

        logger.info(
            "Rendered %d named types and %d top-levels into %d lines",
            len(self.names.type_names),
            len(graph.top_levels),
            len(lines),
        )
        return lines

    def declared_types(self, graph: TypeGraph) -> List[Type]:
        """Named types that get a declaration, in canonical order."""
        declared = []
        for t in graph.named_types():
            if isinstance(t, UnionType) and not self.config.declare_unions:
                continue
            declared.append(t)
        return declared

    def _assign(self, namer: Namer, proposal: str, description: str) -> str:
        """Assign a name, noting it when the namer had to change it."""
        name = namer.assign(proposal)
        if name != namer.name_style(proposal):
            self.names.renames.append(f"{description} renamed to {name}")
        return name

    def _assign_names(self, graph: TypeGraph):
        """Fill the name table; top-levels are named first."""
        namer = self.make_named_type_namer()
        declared = self.declared_types(graph)
        declared_set = set(declared)

        for top_level_name, t in graph.top_levels.items():
            description = f"Top-level {top_level_name}"
            if t in declared_set and t not in self.names.type_names:
                self.names.type_names[t] = self._assign(
                    namer, top_level_name, description
                )
            else:
                self.names.top_level_names[top_level_name] = self._assign(
                    namer, top_level_name, description
                )

        for t in declared:
            if t not in self.names.type_names:
                proposal = self.proposed_name(t)
                self.names.type_names[t] = self._assign(
                    namer, proposal, f"Type {proposal}"
                )

        for t in declared:
            type_name = self.names.type_names[t]
            if isinstance(t, ClassType):
                property_namer = self.make_property_namer(t)
                self.names.property_names[t] = {
                    label: self._assign(
                        property_namer, label, f"Property {type_name}.{label}"
                    )
                    for label in t.properties
                }
            elif isinstance(t, EnumType):
                case_namer = self.make_enum_case_namer(t)
                self.names.enum_case_names[t] = {
                    case: self._assign(case_namer, case, f"Enum case {type_name}.{case}")
                    for case in t.cases
                }

    def _declaration_order(self) -> DeclarationOrder:
        try:
            return DeclarationOrder(self.config.declaration_order)
        except ValueError:
            raise GeneratorError(
                f"Invalid declaration_order: {self.config.declaration_order}"
            ) from None

    def _emit_declarations(self, graph: TypeGraph) -> List[str]:
        """Emit enums, classes, then declared unions, then top-level aliases."""
        policy = self._declaration_order()
        unions = graph.unions() if self.config.declare_unions else []

        groups = [
            (graph.enums(), self.emit_enum),
            (graph.classes(), self.emit_class),
            (unions, self.emit_union),
        ]

        blocks: List[List[str]] = []
        for types, emit in groups:
            for t in order_declarations(types, policy, direct_dependencies):
                name = self.names.name_for(t)
                logger.debug("Emitting %s %s", t.kind.value, name)
                blocks.append(emit(t, name))

        for top_level_name, t in graph.top_levels.items():
            alias_name = self.names.top_level_names.get(top_level_name)
            if alias_name is not None:
                logger.debug("Emitting top-level alias %s", alias_name)
                blocks.append(self.emit_top_level_alias(alias_name, t))

        lines: List[str] = []
        for block in blocks:
            if lines:
                lines.extend([""] * self.declaration_spacing)
            lines.extend(block)
        return lines

    def for_each_class_property(
        self, class_type: ClassType
    ) -> Iterator[Tuple[str, str, ClassProperty]]:
        """Yield (name, label, property) in upstream order."""
        names = self.names.property_names[class_type]
        for label, prop in class_type.properties.items():
            yield names[label], label, prop

    def for_each_enum_case(self, enum_type: EnumType) -> Iterator[Tuple[str, str]]:
        """Yield (name, label) in upstream order."""
        names = self.names.enum_case_names[enum_type]
        for case in enum_type.cases:
            yield names[case], case

    def collect_warnings(self, graph: TypeGraph) -> List[str]:
        """
        Notes about the output worth showing to a user.

        Args:
            graph: Graph being rendered

        Returns:
            List of warning messages (empty if nothing to report)
        """
        warnings = []

        for t in graph.named_types():
            if isinstance(t, ClassType) and not t.properties:
                warnings.append(f"Class '{t.name}' has no properties")
            elif isinstance(t, EnumType) and not t.cases:
                warnings.append(f"Enum '{t.name}' has no cases")

        warnings.extend(self.names.renames)
        return warnings


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        lines: List[str],
        warnings: Optional[List[str]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize generation result.

        Args:
            lines: Generated source lines
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.lines = lines
        self.code = "\n".join(lines) + "\n" if lines else ""
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(lines=[])
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(
    generator: CodeGenerator,
    graph: TypeGraph,
    leading_comments: Optional[Sequence[str]] = None,
) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Args:
        generator: Code generator instance
        graph: Type graph to render
        leading_comments: Comment lines for the top of the file

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    try:
        lines = generator.render(graph, leading_comments)
        warnings = get_config_manager().validate_config(generator.config)
        warnings.extend(generator.collect_warnings(graph))
    except Exception as e:
        logger.error("Code generation failed: %s", e, exc_info=True)
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)

    names = generator.names
    metadata = {
        "language": generator.language_name,
        "file_extension": generator.file_extension,
        "class_count": len(names.property_names),
        "enum_count": len(names.enum_case_names),
        "union_count": sum(1 for t in names.type_names if isinstance(t, UnionType)),
        "top_level_count": len(graph.top_levels),
        "line_count": len(lines),
    }

    return GenerationResult(lines, warnings, metadata)

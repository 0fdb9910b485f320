"""
Python code generator implementation.

Renders a type graph into plain Python classes, ``Enum`` subclasses and
``Union`` aliases using templates.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Set

from ...core.config import GeneratorConfig
from ...core.generator import (
    CodeGenerator,
    ContractViolationError,
    GeneratorError,
    NameTable,
    located,
)
from ...core.naming import Namer, NamingCase
from ...core.types import (
    ArrayType,
    ClassProperty,
    ClassType,
    EnumType,
    MapType,
    PrimitiveType,
    Type,
    TypeKind,
    TypeVisitor,
    UnionType,
    nullable_from_union,
)
from .config import (
    FUTURE_IMPORT,
    PYTHON_IMPORT_MAP,
    PYTHON_TYPE_MAP,
    get_import_statements,
)
from .naming import create_python_namer


class PythonTypeSource(TypeVisitor):
    """Python syntax for references to types, recording the imports used."""

    def __init__(self, names: NameTable, declare_unions: bool = False):
        self.names = names
        self.declare_unions = declare_unions
        self.imports_used: Set[str] = set()
        # Names already bound in the output, and whether a name outside them was used
        self.declared: Set[str] = set()
        self.forward_reference = False

    def _named(self, source: str) -> str:
        if source in PYTHON_IMPORT_MAP:
            self.imports_used.add(source)
        return source

    def _declared_name(self, t: Type) -> str:
        name = self.names.name_for(t)
        if name not in self.declared:
            self.forward_reference = True
        return name

    def _primitive(self, t: PrimitiveType) -> str:
        return self._named(PYTHON_TYPE_MAP[t.kind])

    def visit_none(self, t: PrimitiveType) -> str:
        raise ContractViolationError(
            "Type of kind 'none' should have been replaced before rendering", node=t
        )

    visit_any = _primitive
    visit_null = _primitive
    visit_bool = _primitive
    visit_integer = _primitive
    visit_double = _primitive
    visit_string = _primitive
    visit_date = _primitive
    visit_time = _primitive
    visit_date_time = _primitive

    def visit_array(self, t: ArrayType) -> str:
        return f"list[{self.visit(t.items)}]"

    def visit_map(self, t: MapType) -> str:
        return f"dict[str, {self.visit(t.values)}]"

    def visit_class(self, t: ClassType) -> str:
        return self._declared_name(t)

    def visit_enum(self, t: EnumType) -> str:
        return self._declared_name(t)

    def visit_union(self, t: UnionType) -> str:
        nullable = nullable_from_union(t)
        if nullable is not None:
            return f"{self._named('Optional')}[{self.visit(nullable)}]"
        if self.declare_unions:
            return self._declared_name(t)
        return " | ".join(self.visit(member) for member in t.members)

    def property_source(self, prop: ClassProperty) -> str:
        """Source for a property, wrapped in ``Optional`` when it may be missing."""
        source = self.visit(prop.type)
        if prop.optional and not _is_nullable(prop.type):
            source = f"{self._named('Optional')}[{source}]"
        return source


def _is_nullable(t: Type) -> bool:
    """Types that already admit ``None``."""
    if t.kind in (TypeKind.ANY, TypeKind.NULL):
        return True
    if isinstance(t, UnionType):
        return any(member.kind == TypeKind.NULL for member in t.members)
    return False


class PythonGenerator(CodeGenerator):
    """Code generator for plain Python classes, enums and union aliases."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize Python generator with configuration."""
        super().__init__(config)
        self.type_source = PythonTypeSource(self.names, self.config.declare_unions)
        self.has_forward_references = False

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "python"

    @property
    def file_extension(self) -> str:
        """Return Python file extension."""
        return ".py"

    def get_template_directory(self) -> Path:
        """Return the Python templates directory."""
        return Path(__file__).parent / "templates"

    def start_render(self):
        super().start_render()
        self.type_source = PythonTypeSource(self.names, self.config.declare_unions)
        self.has_forward_references = False

    # Naming

    def _case(self, option: str) -> NamingCase:
        value = getattr(self.config, option)
        try:
            return NamingCase(value)
        except ValueError:
            raise GeneratorError(f"Invalid {option}: {value}") from None

    def _namer(self, option: str, scope: str) -> Namer:
        return create_python_namer(
            self._case(option), scope, self.config.ascii_identifiers
        )

    def make_named_type_namer(self) -> Namer:
        return self._namer("struct_case", "global")

    def make_property_namer(self, class_type: ClassType) -> Namer:
        return self._namer("field_case", "property")

    def make_enum_case_namer(self, enum_type: EnumType) -> Namer:
        return self._namer("constant_case", "enum_case")

    # Emission

    def source_for(self, t: Type) -> str:
        return self.type_source.visit(t)

    def emit_class(self, class_type: ClassType, class_name: str) -> List[str]:
        fields = []
        for name, label, prop in self.for_each_class_property(class_type):
            self.type_source.forward_reference = False
            with located(f"{class_name}.{label}"):
                source = self.type_source.property_source(prop)
            if self.type_source.forward_reference:
                # Annotation names a type bound later in the file
                self.has_forward_references = True
            fields.append({"name": name, "type": source})
        self.type_source.declared.add(class_name)

        return self.render_template(
            "class.py.j2", {"class_name": class_name, "fields": fields}
        )

    def emit_enum(self, enum_type: EnumType, enum_name: str) -> List[str]:
        self.type_source.imports_used.add("Enum")
        cases = [
            {"name": name, "value": ordinal}
            for ordinal, (name, _label) in enumerate(self.for_each_enum_case(enum_type))
        ]
        self.type_source.declared.add(enum_name)

        return self.render_template(
            "enum.py.j2", {"enum_name": enum_name, "cases": cases}
        )

    def emit_union(self, union_type: UnionType, union_name: str) -> List[str]:
        self.type_source.imports_used.add("Union")
        members = []
        with located(union_name):
            for member in union_type.members:
                self.type_source.forward_reference = False
                source = self.source_for(member)
                # Alias is evaluated eagerly, members bound later go in as strings
                if self.type_source.forward_reference:
                    source = f'"{source}"'
                members.append(source)
        self.type_source.declared.add(union_name)

        return self.render_template(
            "union.py.j2", {"union_name": union_name, "members": members}
        )

    def emit_top_level_alias(self, alias_name: str, t: Type) -> List[str]:
        with located(alias_name):
            source = self.source_for(t)

        return self.render_template(
            "alias.py.j2", {"alias_name": alias_name, "source": source}
        )

    def emit_header(self, leading_comments: Optional[Sequence[str]]) -> List[str]:
        """Leading comments, the future import and the imports used."""
        sections: List[List[str]] = []

        if leading_comments:
            comment_lines = []
            for comment in leading_comments:
                for line in comment.splitlines() or [""]:
                    comment_lines.append(f"# {line}".rstrip())
            sections.append(comment_lines)

        if self.config.postponed_annotations or self.has_forward_references:
            sections.append([FUTURE_IMPORT])

        imports = get_import_statements(self.type_source.imports_used)
        if imports:
            sections.append(imports)

        lines: List[str] = []
        for section in sections:
            if lines:
                lines.append("")
            lines.extend(section)
        return lines

    def get_import_statements(self) -> List[str]:
        """Import lines needed by the last render."""
        return get_import_statements(self.type_source.imports_used)


# Factory functions
def create_python_generator(
    config: Optional[GeneratorConfig] = None, **options
) -> PythonGenerator:
    """
    Create a Python generator.

    Args:
        config: Complete configuration, defaults loaded when omitted
        **options: Overrides applied on top of the loaded defaults

    Returns:
        Configured PythonGenerator
    """
    if config is None:
        from ...core.config import load_config

        config = load_config("python", options or None)
    elif options:
        raise ValueError("Pass either a config or option overrides, not both")

    return PythonGenerator(config)


def create_declared_unions_generator() -> PythonGenerator:
    """Create generator that declares unions as named aliases."""
    from .config import get_declared_unions_config

    return PythonGenerator(get_declared_unions_config())

"""
Core type graph representation for code generation.

The type graph is produced upstream (inference, schema conversion) and is
read-only for a render. Named types (classes, enums, unions) keep their
identity: two structurally identical classes are different types.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple


class TypeGraphError(ValueError):
    """Raised when a type graph description cannot be converted."""

    pass


class TypeKind(Enum):
    """Every variant of the type graph."""

    NONE = "none"  # sentinel, replaced upstream
    ANY = "any"
    NULL = "null"
    BOOL = "bool"
    INTEGER = "integer"
    DOUBLE = "double"
    STRING = "string"
    DATE = "date"
    TIME = "time"
    DATE_TIME = "date_time"
    ARRAY = "array"
    MAP = "map"
    CLASS = "class"
    ENUM = "enum"
    UNION = "union"


PRIMITIVE_KINDS = frozenset(
    {
        TypeKind.NONE,
        TypeKind.ANY,
        TypeKind.NULL,
        TypeKind.BOOL,
        TypeKind.INTEGER,
        TypeKind.DOUBLE,
        TypeKind.STRING,
        TypeKind.DATE,
        TypeKind.TIME,
        TypeKind.DATE_TIME,
    }
)

NAMED_KINDS = frozenset({TypeKind.CLASS, TypeKind.ENUM, TypeKind.UNION})


class Type:
    """Base class of every type graph node."""

    kind: TypeKind

    @property
    def is_named(self) -> bool:
        return self.kind in NAMED_KINDS

    def children(self) -> Tuple["Type", ...]:
        """Types directly referenced by this one."""
        return ()


@dataclass(frozen=True)
class PrimitiveType(Type):
    """A type without children, compared by kind."""

    kind: TypeKind

    def __post_init__(self):
        if self.kind not in PRIMITIVE_KINDS:
            raise ValueError(f"Not a primitive type kind: {self.kind}")


@dataclass(frozen=True)
class ArrayType(Type):
    """A sequence of ``items``."""

    items: Type
    kind: TypeKind = field(default=TypeKind.ARRAY, init=False)

    def children(self) -> Tuple[Type, ...]:
        return (self.items,)


@dataclass(frozen=True)
class MapType(Type):
    """A string-keyed mapping to ``values``."""

    values: Type
    kind: TypeKind = field(default=TypeKind.MAP, init=False)

    def children(self) -> Tuple[Type, ...]:
        return (self.values,)


@dataclass(frozen=True)
class ClassProperty:
    """A single property of a class."""

    type: Type
    optional: bool = False


@dataclass(eq=False)
class ClassType(Type):
    """A class with properties kept in upstream order."""

    name: str
    properties: Dict[str, ClassProperty] = field(default_factory=dict, repr=False)
    kind: TypeKind = field(default=TypeKind.CLASS, init=False, repr=False)

    def add_property(self, name: str, type: Type, optional: bool = False) -> None:
        """Add a property after the existing ones."""
        self.properties[name] = ClassProperty(type, optional)

    def children(self) -> Tuple[Type, ...]:
        return tuple(prop.type for prop in self.properties.values())


@dataclass(eq=False)
class EnumType(Type):
    """An enumeration of string labels kept in upstream order."""

    name: str
    cases: Tuple[str, ...] = ()
    kind: TypeKind = field(default=TypeKind.ENUM, init=False, repr=False)

    def __post_init__(self):
        # Repeated labels collapse, first occurrence keeps its position
        self.cases = tuple(dict.fromkeys(self.cases))


@dataclass(eq=False)
class UnionType(Type):
    """A union of at least two distinct member types."""

    members: Tuple[Type, ...]
    name: Optional[str] = None
    kind: TypeKind = field(default=TypeKind.UNION, init=False, repr=False)

    def __post_init__(self):
        # Equal members collapse, first occurrence keeps its position
        self.members = tuple(dict.fromkeys(self.members))
        if len(self.members) < 2:
            raise ValueError("A union needs at least two distinct members")

    def children(self) -> Tuple[Type, ...]:
        return self.members

    @property
    def proposed_name(self) -> str:
        """Upstream name, or one derived from the members."""
        if self.name:
            return self.name
        return "_or_".join(_describe(member) for member in self.members)


def _describe(t: Type) -> str:
    """Short label for a type, used to name anonymous unions."""
    if isinstance(t, ArrayType):
        return f"{_describe(t.items)}_array"
    if isinstance(t, MapType):
        return f"{_describe(t.values)}_map"
    if isinstance(t, UnionType):
        return t.proposed_name
    if isinstance(t, (ClassType, EnumType)):
        return t.name
    return t.kind.value


# Shared primitive instances
NONE_TYPE = PrimitiveType(TypeKind.NONE)
ANY_TYPE = PrimitiveType(TypeKind.ANY)
NULL_TYPE = PrimitiveType(TypeKind.NULL)
BOOL_TYPE = PrimitiveType(TypeKind.BOOL)
INTEGER_TYPE = PrimitiveType(TypeKind.INTEGER)
DOUBLE_TYPE = PrimitiveType(TypeKind.DOUBLE)
STRING_TYPE = PrimitiveType(TypeKind.STRING)
DATE_TYPE = PrimitiveType(TypeKind.DATE)
TIME_TYPE = PrimitiveType(TypeKind.TIME)
DATE_TIME_TYPE = PrimitiveType(TypeKind.DATE_TIME)


def nullable_from_union(union: UnionType) -> Optional[Type]:
    """Return ``T`` if the union is exactly ``{T, Null}``, else None."""
    if len(union.members) != 2:
        return None
    non_null = [m for m in union.members if m.kind != TypeKind.NULL]
    if len(non_null) != 1:
        return None
    return non_null[0]


def is_declarable(t: Type) -> bool:
    """Named types that need a declaration of their own."""
    if not t.is_named:
        return False
    return not (isinstance(t, UnionType) and nullable_from_union(t) is not None)


def direct_dependencies(t: Type) -> List[Type]:
    """
    Declarable types referenced by ``t``.

    Arrays, maps and nullable unions are looked through, so
    ``list[Optional[Person]]`` depends on ``Person``. Other unions are
    both listed and looked through, so ``B | str`` depends on ``B``.
    """
    found: List[Type] = []

    def collect(child: Type):
        if is_declarable(child):
            if any(child is seen for seen in found):
                return
            found.append(child)
            if not isinstance(child, UnionType):
                return
        for grandchild in child.children():
            collect(grandchild)

    for child in t.children():
        collect(child)
    return found


class TypeGraph:
    """Top-level type bindings plus the named types they reach."""

    def __init__(self, top_levels: Mapping[str, Type]):
        """
        Initialize type graph.

        Args:
            top_levels: Ordered mapping of top-level name to type
        """
        self.top_levels: Dict[str, Type] = dict(top_levels)

    def named_types(self) -> List[Type]:
        """
        Declarable named types in canonical order.

        Canonical order is the reverse of a depth-first post-order walk
        from the roots: every type comes before the types it references
        (cycles aside). Roots and properties are walked in their given order.
        """
        seen: Set[Type] = set()
        postorder: List[Type] = []

        def visit(t: Type):
            if t.is_named:
                if t in seen:
                    return
                seen.add(t)
            for child in t.children():
                visit(child)
            if is_declarable(t):
                postorder.append(t)

        for root in self.top_levels.values():
            visit(root)

        postorder.reverse()
        return postorder

    def classes(self) -> List[ClassType]:
        return [t for t in self.named_types() if isinstance(t, ClassType)]

    def enums(self) -> List[EnumType]:
        return [t for t in self.named_types() if isinstance(t, EnumType)]

    def unions(self) -> List[UnionType]:
        """Non-nullable unions in canonical order."""
        return [t for t in self.named_types() if isinstance(t, UnionType)]


class TypeVisitor:
    """
    Exhaustive dispatch over type kinds.

    A subclass must define ``visit_<kind>`` for every ``TypeKind`` member.
    The check runs when the subclass is defined, so adding a kind without
    handling it everywhere fails at import time. Intermediate bases can
    opt out with ``class Base(TypeVisitor, abstract=True)``.
    """

    def __init_subclass__(cls, abstract: bool = False, **kwargs):
        super().__init_subclass__(**kwargs)
        if abstract:
            return
        missing = [
            kind.value
            for kind in TypeKind
            if not callable(getattr(cls, f"visit_{kind.value}", None))
        ]
        if missing:
            raise TypeError(
                f"{cls.__name__} does not handle type kinds: {', '.join(missing)}"
            )

    def visit(self, t: Type) -> Any:
        return getattr(self, f"visit_{t.kind.value}")(t)


_PRIMITIVES_BY_NAME = {kind.value: PrimitiveType(kind) for kind in PRIMITIVE_KINDS}


def build_type_graph(description: Mapping[str, Any]) -> TypeGraph:
    """
    Build a type graph from a plain description.

    Types are described as primitive names (``"integer"``) or dicts:
    ``{"array": T}``, ``{"map": T}``, ``{"union": [T, ...], "name": N}``,
    ``{"class": N, "properties": {label: T | {"type": T, "optional": B}}}``,
    ``{"enum": N, "cases": [...]}`` and ``{"ref": key}``. References point
    into ``definitions`` and share one instance per key, which also allows
    recursive classes.

    Args:
        description: Dict with ``top_levels`` and optional ``definitions``

    Returns:
        TypeGraph with the described top-levels

    Raises:
        TypeGraphError: If the description is malformed
    """
    top_levels = description.get("top_levels")
    if not isinstance(top_levels, Mapping):
        raise TypeGraphError("Description needs a 'top_levels' mapping")
    definitions = description.get("definitions", {})
    if not isinstance(definitions, Mapping):
        raise TypeGraphError("'definitions' must be a mapping")

    built: Dict[str, Type] = {}
    in_progress: Set[str] = set()

    def resolve(key: str) -> Type:
        if key in built:
            return built[key]
        if key not in definitions:
            raise TypeGraphError(f"Unknown type reference: {key}")
        if key in in_progress:
            raise TypeGraphError(f"Reference cycle through non-class type: {key}")
        in_progress.add(key)
        try:
            result = convert(definitions[key], key)
        finally:
            in_progress.discard(key)
        built[key] = result
        return result

    def convert(node: Any, key: Optional[str] = None) -> Type:
        if isinstance(node, str):
            if node not in _PRIMITIVES_BY_NAME:
                raise TypeGraphError(f"Unknown primitive type: {node}")
            return _PRIMITIVES_BY_NAME[node]

        if not isinstance(node, Mapping):
            raise TypeGraphError(f"Unrecognized type description: {node!r}")

        if "ref" in node:
            return resolve(node["ref"])
        if "array" in node:
            return ArrayType(convert(node["array"]))
        if "map" in node:
            return MapType(convert(node["map"]))

        if "class" in node:
            class_type = ClassType(str(node["class"]))
            # Registered before the properties so they can refer back to it
            if key is not None:
                built[key] = class_type
            properties = node.get("properties", {})
            if not isinstance(properties, Mapping):
                raise TypeGraphError(f"Properties of {class_type.name} must be a mapping")
            for label, prop in properties.items():
                if isinstance(prop, Mapping) and "type" in prop:
                    class_type.add_property(
                        label, convert(prop["type"]), bool(prop.get("optional", False))
                    )
                else:
                    class_type.add_property(label, convert(prop))
            return class_type

        if "enum" in node:
            cases = node.get("cases", [])
            if isinstance(cases, (str, bytes)) or not isinstance(cases, (list, tuple)):
                raise TypeGraphError(f"Cases of enum {node['enum']} must be a list")
            return EnumType(str(node["enum"]), tuple(str(case) for case in cases))

        if "union" in node:
            members = node["union"]
            if not isinstance(members, (list, tuple)):
                raise TypeGraphError("Union members must be a list")
            try:
                return UnionType(
                    tuple(convert(member) for member in members), name=node.get("name")
                )
            except ValueError as e:
                if isinstance(e, TypeGraphError):
                    raise
                raise TypeGraphError(str(e)) from e

        raise TypeGraphError(f"Unrecognized type description: {dict(node)!r}")

    return TypeGraph({name: convert(node) for name, node in top_levels.items()})

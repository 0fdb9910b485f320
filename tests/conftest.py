"""Shared pytest fixtures for the typegraph test suite.

Provides reusable fixtures for:
- Small type graphs (point, person, nested classes, enums, unions, a mix of all)
- Python generators with default and adjusted configuration
"""

from __future__ import annotations

import pytest

from typegraph.codegen.core.config import GeneratorConfig
from typegraph.codegen.core.types import (
    DATE_TIME_TYPE,
    INTEGER_TYPE,
    NULL_TYPE,
    STRING_TYPE,
    ArrayType,
    ClassType,
    EnumType,
    MapType,
    TypeGraph,
    UnionType,
)
from typegraph.codegen.languages.python.generator import PythonGenerator


# ---------------------------------------------------------------------------
# Type graphs
# ---------------------------------------------------------------------------


@pytest.fixture
def point_graph() -> TypeGraph:
    """``Point{x: Integer, y: Integer}`` bound to the top-level ``Point``."""
    point = ClassType("Point")
    point.add_property("x", INTEGER_TYPE)
    point.add_property("y", INTEGER_TYPE)
    return TypeGraph({"Point": point})


@pytest.fixture
def person_graph() -> TypeGraph:
    """``Person{name: String, age: Integer}``."""
    person = ClassType("Person")
    person.add_property("name", STRING_TYPE)
    person.add_property("age", INTEGER_TYPE)
    return TypeGraph({"Person": person})


@pytest.fixture
def nested_graph() -> TypeGraph:
    """``A`` references ``B``; only ``A`` is a top-level."""
    b = ClassType("B")
    b.add_property("value", STRING_TYPE)
    a = ClassType("A")
    a.add_property("b", b)
    return TypeGraph({"A": a})


@pytest.fixture
def shirt_graph() -> TypeGraph:
    """A class with two enum properties."""
    color = EnumType("Color", ("red", "green", "blue"))
    size = EnumType("Size", ("small", "large"))
    shirt = ClassType("Shirt")
    shirt.add_property("color", color)
    shirt.add_property("size", size)
    return TypeGraph({"Shirt": shirt})


@pytest.fixture
def union_graph() -> TypeGraph:
    """A class with a nullable string and an integer-or-string union."""
    record = ClassType("Record")
    record.add_property("nickname", UnionType((STRING_TYPE, NULL_TYPE)))
    record.add_property("key", UnionType((INTEGER_TYPE, STRING_TYPE)))
    return TypeGraph({"Record": record})


@pytest.fixture
def people_graph() -> TypeGraph:
    """A top-level array of classes, rendered as an alias."""
    person = ClassType("Person")
    person.add_property("name", STRING_TYPE)
    return TypeGraph({"People": ArrayType(person)})


@pytest.fixture
def mixed_graph() -> TypeGraph:
    """Self reference, classes and unions nested in unions, a repeated enum case."""
    color = EnumType("Color", ("red", "red", "green"))
    b = ClassType("B")
    b.add_property("value", INTEGER_TYPE)
    a = ClassType("A")
    a.add_property("x", UnionType((b, STRING_TYPE)))
    a.add_property(
        "nested",
        UnionType((ArrayType(UnionType((INTEGER_TYPE, STRING_TYPE))), b)),
    )
    node = ClassType("Node")
    node.add_property("next", UnionType((node, NULL_TYPE)))
    node.add_property("parent", a)
    node.add_property("color", color)
    node.add_property("when", DATE_TIME_TYPE, optional=True)
    return TypeGraph({"Node": node, "Lookup": MapType(a)})


# ---------------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------------


@pytest.fixture
def generator() -> PythonGenerator:
    """Python generator with default configuration."""
    return PythonGenerator(GeneratorConfig())


@pytest.fixture
def plain_generator() -> PythonGenerator:
    """Python generator adding the ``__future__`` import only when needed."""
    return PythonGenerator(GeneratorConfig(postponed_annotations=False))


@pytest.fixture
def declared_unions_generator() -> PythonGenerator:
    """Python generator that declares unions, future import only where needed."""
    return PythonGenerator(
        GeneratorConfig(declare_unions=True, postponed_annotations=False)
    )

"""
Declaration order policies.

Targets differ in how they treat forward references: some accept any
order, some need every referenced type declared first. The canonical order
of a type graph lists referencing types before referenced ones, so a full
reversal is enough for a DAG; the topological policy also copes with
types whose canonical order came from elsewhere.
"""

from enum import Enum
from typing import Callable, Iterable, List, Optional, Sequence, TypeVar

T = TypeVar("T")


class DeclarationOrder(Enum):
    """How named type declarations are ordered."""

    CANONICAL = "canonical"  # as supplied
    REVERSE = "reverse"  # supplied order reversed
    TOPOLOGICAL = "topological"  # dependencies first


def order_declarations(
    types: Sequence[T],
    policy: DeclarationOrder,
    dependencies: Optional[Callable[[T], Iterable[T]]] = None,
) -> List[T]:
    """
    Order declarations according to a policy.

    Args:
        types: Types in canonical order
        policy: Declaration order policy
        dependencies: Types directly referenced by a type (topological only)

    Returns:
        New list in declaration order
    """
    if policy == DeclarationOrder.CANONICAL:
        return list(types)
    if policy == DeclarationOrder.REVERSE:
        return list(reversed(types))
    if policy == DeclarationOrder.TOPOLOGICAL:
        if dependencies is None:
            raise ValueError("Topological ordering needs a dependency function")
        return _topological_order(types, dependencies)
    raise ValueError(f"Unknown declaration order: {policy}")


def _topological_order(
    types: Sequence[T], dependencies: Callable[[T], Iterable[T]]
) -> List[T]:
    """Depth-first ordering that emits dependencies before dependents."""
    members = {id(t) for t in types}
    visited = set()
    visiting = set()
    ordered: List[T] = []

    def visit(t: T):
        key = id(t)
        if key in visited or key not in members:
            return

        if key in visiting:
            return  # Circular dependency - skip

        visiting.add(key)
        for dependency in dependencies(t):
            visit(dependency)

        visiting.remove(key)
        visited.add(key)
        ordered.append(t)

    for t in types:
        visit(t)

    return ordered

"""CSG trees over leaf shapes.

A tree node is either a :class:`Shape` (leaf: the intersection of the
half-spaces bounded by its surfaces) or an :class:`OperationNode` combining
two child nodes. Trees are immutable and validated when built, so
classification can share one tree across every query.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator, List, Sequence, Tuple, Union

from .surfaces import Surface


class Operation(str, Enum):
    UNION = "union"
    SUBTRACT = "subtract"
    INTERSECT = "intersect"


class _Composable:
    """Boolean combinators shared by every node type."""

    __slots__ = ()

    def union(self, other: "NodeLike") -> "OperationNode":
        """Return the union of this node and *other*."""
        return OperationNode(Operation.UNION, self, other)

    def subtract(self, other: "NodeLike") -> "OperationNode":
        """Subtract *other* from this node."""
        return OperationNode(Operation.SUBTRACT, self, other)

    def intersect(self, other: "NodeLike") -> "OperationNode":
        """Return the intersection of this node and *other*."""
        return OperationNode(Operation.INTERSECT, self, other)

    def iter_surfaces(self) -> Iterator[Surface]:
        raise NotImplementedError

    def surfaces(self) -> List[Surface]:
        """Distinct surfaces of the tree, left to right, first occurrence kept."""
        seen = set()
        out: List[Surface] = []
        for s in self.iter_surfaces():
            if id(s) not in seen:
                seen.add(id(s))
                out.append(s)
        return out


class Shape(_Composable):
    """Leaf: a convex region bounded by *surfaces*.

    Membership tests compare surfaces by identity.
    """

    __slots__ = ("_surfaces",)

    def __init__(self, surfaces: Sequence[Surface]) -> None:
        surfaces = tuple(surfaces)
        if not surfaces:
            raise ValueError("a shape needs at least one surface")
        for s in surfaces:
            if not isinstance(s, Surface):
                raise TypeError(f"expected Surface, got {type(s).__name__}")
        self._surfaces = surfaces

    @property
    def members(self) -> Tuple[Surface, ...]:
        return self._surfaces

    def contains(self, surface: Surface) -> bool:
        return any(s is surface for s in self._surfaces)

    def iter_surfaces(self) -> Iterator[Surface]:
        return iter(self._surfaces)

    def __iter__(self) -> Iterator[Surface]:
        return iter(self._surfaces)

    def __len__(self) -> int:
        return len(self._surfaces)

    def __repr__(self) -> str:
        return f"Shape({list(self._surfaces)!r})"


class OperationNode(_Composable):
    """Internal node: ``left <operation> right``."""

    __slots__ = ("_operation", "_left", "_right")

    def __init__(self, operation: Union[Operation, str], left: "NodeLike",
                 right: "NodeLike") -> None:
        self._operation = Operation(operation)
        self._left = as_node(left)
        self._right = as_node(right)

    @property
    def operation(self) -> Operation:
        return self._operation

    @property
    def left(self) -> "CSGNode":
        return self._left

    @property
    def right(self) -> "CSGNode":
        return self._right

    def iter_surfaces(self) -> Iterator[Surface]:
        yield from self._left.iter_surfaces()
        yield from self._right.iter_surfaces()

    def __repr__(self) -> str:
        return f"OperationNode({self._operation.value}, {self._left!r}, {self._right!r})"


CSGNode = Union[Shape, OperationNode]
NodeLike = Union[Shape, OperationNode, Sequence[Surface]]


def as_node(node: NodeLike) -> CSGNode:
    """Return *node* as a tree node, wrapping surface sequences in a :class:`Shape`."""
    if isinstance(node, (Shape, OperationNode)):
        return node
    return Shape(node)


def union(left: NodeLike, right: NodeLike) -> OperationNode:
    return OperationNode(Operation.UNION, left, right)


def subtract(left: NodeLike, right: NodeLike) -> OperationNode:
    return OperationNode(Operation.SUBTRACT, left, right)


def intersect(left: NodeLike, right: NodeLike) -> OperationNode:
    return OperationNode(Operation.INTERSECT, left, right)

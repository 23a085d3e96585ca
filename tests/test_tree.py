"""Tests for csgpoints.tree."""

import pytest

from csgpoints import (
    Operation,
    OperationNode,
    PlaneSurface,
    Shape,
    SphereSurface,
    intersect,
    subtract,
    union,
)
from csgpoints.tree import as_node


class TestShape:
    def test_members_kept_in_order(self):
        a, b = PlaneSurface(), SphereSurface(1.0)
        shape = Shape([a, b])
        assert shape.members == (a, b)
        assert list(shape) == [a, b]
        assert len(shape) == 2

    def test_contains_uses_identity(self):
        s1, s2 = SphereSurface(1.0), SphereSurface(1.0)
        shape = Shape([s1])
        assert shape.contains(s1)
        assert not shape.contains(s2)

    def test_empty_shape_raises(self):
        with pytest.raises(ValueError):
            Shape([])

    def test_non_surface_raises(self):
        with pytest.raises(TypeError):
            Shape([PlaneSurface(), "not a surface"])


class TestOperationNode:
    def test_builders(self):
        a, b = [SphereSurface(1.0)], [PlaneSurface()]
        assert union(a, b).operation is Operation.UNION
        assert subtract(a, b).operation is Operation.SUBTRACT
        assert intersect(a, b).operation is Operation.INTERSECT

    def test_methods(self):
        a, b = Shape([SphereSurface(1.0)]), Shape([PlaneSurface()])
        node = a.subtract(b).union(a).intersect(b)
        assert node.operation is Operation.INTERSECT
        assert node.left.operation is Operation.UNION
        assert node.left.left.operation is Operation.SUBTRACT

    def test_string_operation(self):
        node = OperationNode("union", [SphereSurface(1.0)], [PlaneSurface()])
        assert node.operation is Operation.UNION

    def test_unknown_operation_rejected(self):
        with pytest.raises(ValueError):
            OperationNode("xor", [SphereSurface(1.0)], [PlaneSurface()])

    def test_sequences_wrapped_in_shapes(self):
        s = SphereSurface(1.0)
        node = union([s], [PlaneSurface()])
        assert isinstance(node.left, Shape)
        assert node.left.contains(s)


class TestTreeSurfaces:
    def test_surfaces_deduplicated_in_order(self):
        s, p, q = SphereSurface(1.0), PlaneSurface(), PlaneSurface()
        tree = subtract([s, p], union([p, q], [s]))
        assert tree.surfaces() == [s, p, q]

    def test_as_node_passthrough(self):
        shape = Shape([PlaneSurface()])
        assert as_node(shape) is shape

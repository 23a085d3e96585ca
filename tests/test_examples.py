"""Tests for csgpoints.examples assemblies."""

import numpy as np
import pytest

from csgpoints import (
    ChamferSurface,
    Classification,
    CSGConfig,
    CylinderSurface,
    Operation,
    SphereSurface,
    classify,
)


class TestCarvedSphere:
    def test_import(self):
        from csgpoints.examples import CarvedSphere  # noqa

    def test_registration_order(self):
        from csgpoints.examples import CarvedSphere
        model, _ = CarvedSphere()
        kinds = [s.kind for s in model.surfaces]
        assert kinds == ["cylinder"] + ["plane"] * 6 + ["sphere", "chamfer"]

    def test_tree_uses_every_surface(self):
        from csgpoints.examples import CarvedSphere
        model, tree = CarvedSphere()
        assert tree.operation is Operation.SUBTRACT
        assert {id(s) for s in tree.surfaces()} == {id(s) for s in model.surfaces}

    def test_chamfer_blends_bottom_and_cylinder(self):
        from csgpoints.examples import CarvedSphere
        model, _ = CarvedSphere(model_size=8.0)
        chamfer = model.surfaces[-1]
        assert isinstance(chamfer, ChamferSurface)
        assert chamfer.first is model.surfaces[2]
        assert isinstance(chamfer.second, CylinderSurface)
        assert chamfer.length == pytest.approx(1.0)

    def test_point_classification(self):
        from csgpoints.examples import CarvedSphere
        model, tree = CarvedSphere(model_size=8.0)
        sphere = model.surfaces[7]
        assert isinstance(sphere, SphereSurface)
        # Below the cube: untouched sphere boundary.
        assert classify(np.array([0.0, 0.0, -8.0]), sphere, tree) == Classification.ON
        # Inside the drilled hole: the hole was removed from the cube, so it stays.
        assert classify(np.array([0.0, 0.0, 4.0]), None, tree) == Classification.INSIDE
        # Inside the cube but outside the hole: carved away.
        assert classify(np.array([6.0, 0.0, 4.0]), None, tree) == Classification.OUTSIDE

    def test_sampling_pass(self):
        from csgpoints.examples import CarvedSphere
        model, tree = CarvedSphere(model_size=8.0)
        cfg = CSGConfig(density=1.0, seed=0)
        result = model.sample(tree, cfg)
        assert len(result.boundary_points) == 9
        sphere_pts = result.boundary_points[7]
        assert len(sphere_pts) > 0
        np.testing.assert_allclose(np.linalg.norm(sphere_pts, axis=-1), 8.0, atol=1e-9)


class TestSphereMinusBox:
    def test_returns_tuple(self):
        from csgpoints.examples import SphereMinusBox
        result = SphereMinusBox(radius=1.0)
        assert len(result) == 2

    def test_parametric_radius(self):
        from csgpoints.examples import SphereMinusBox
        model, tree = SphereMinusBox(radius=3.0)
        sphere = model.surfaces[0]
        assert sphere.radius == 3.0
        assert classify(np.array([0.0, 0.0, -3.0]), sphere, tree) == Classification.ON
        assert classify(np.array([0.0, 0.0, 3.0]), sphere, tree) == Classification.OUTSIDE

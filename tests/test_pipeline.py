"""Tests for csgpoints.pipeline (sampling passes and the Model registry)."""

from dataclasses import replace

import numpy as np
import numpy.testing as npt
import pytest

from csgpoints import (
    Classification,
    CSGConfig,
    Model,
    PlaneSurface,
    SphereSurface,
    classify,
    filter_boundary,
    sample_and_classify,
)
from csgpoints.examples import SphereMinusBox


@pytest.fixture
def config():
    return CSGConfig(bounds=((-3.0, 3.0),) * 3, density=20.0, seed=0)


@pytest.fixture
def scene():
    return SphereMinusBox(radius=2.0)


class TestSampleAndClassify:
    def test_lists_parallel_to_surfaces(self, scene, config):
        model, tree = scene
        result = model.sample(tree, config)
        n = len(model.surfaces)
        assert n == 7
        for bucket in (result.surface_points, result.surface_edges,
                       result.boundary_points, result.boundary_edges):
            assert len(bucket) == n
        assert result.tags == model.tags
        assert result.cloud.shape == (int(216 * 20), 3)

    def test_boundary_points_classify_on(self, scene, config):
        model, tree = scene
        result = model.sample(tree, config)
        assert result.boundary_count > 0
        for surface, pts in zip(model.surfaces, result.boundary_points):
            if len(pts):
                assert np.all(classify(pts, surface, tree, config) == Classification.ON)

    def test_boundary_is_subset_of_raw(self, scene, config):
        model, tree = scene
        result = model.sample(tree, config)
        for raw, kept in zip(result.surface_points, result.boundary_points):
            assert len(kept) <= len(raw)
            raw_rows = {tuple(r) for r in raw}
            assert all(tuple(r) in raw_rows for r in kept)

    def test_sphere_keeps_lower_hemisphere(self, scene, config):
        model, tree = scene
        result = model.sample(tree, config)
        sphere_pts = result.boundary_points[0]
        assert len(sphere_pts) > 0
        below = sphere_pts[:, 2] <= config.epsilon + 1e-9
        # The cube's side faces touch the sphere's equator.
        touching = np.abs(sphere_pts[:, :2]).max(axis=1) >= 2.0 - config.epsilon - 1e-9
        assert np.all(below | touching)
        assert below.sum() > 0.9 * len(sphere_pts)

    def test_box_top_culled_and_bottom_is_disc(self, scene, config):
        model, tree = scene
        result = model.sample(tree, config)
        top, bottom = result.boundary_points[1], result.boundary_points[2]
        assert len(top) == 0
        assert len(bottom) > 0
        assert np.all(np.linalg.norm(bottom, axis=-1) <= 2.0 + config.epsilon)

    def test_edges_lie_near_rim(self, scene, config):
        model, tree = scene
        result = model.sample(tree, config)
        rim = np.concatenate([result.boundary_edges[0], result.boundary_edges[2]])
        assert len(rim) > 0
        npt.assert_allclose(np.linalg.norm(rim, axis=-1), 2.0, atol=1.5e-3)
        assert np.all(np.abs(rim[:, 2]) <= 0.1)

    def test_seeded_runs_are_identical(self, scene, config):
        model, tree = scene
        a = model.sample(tree, config)
        b = model.sample(tree, config)
        npt.assert_array_equal(a.cloud, b.cloud)
        for x, y in zip(a.boundary_points, b.boundary_points):
            npt.assert_array_equal(x, y)

    def test_explicit_rng(self, scene, config):
        model, tree = scene
        a = sample_and_classify(model.surfaces, tree, config, np.random.default_rng(5))
        b = sample_and_classify(model.surfaces, tree, config, np.random.default_rng(5))
        npt.assert_array_equal(a.cloud, b.cloud)

    def test_surface_mode(self, scene):
        model, tree = scene
        cfg = CSGConfig(sampling="surface", surface_samples=400, surface_extent=3.0, seed=2)
        result = model.sample(tree, cfg)
        assert result.cloud.shape == (7 * 400, 3)
        assert len(result.boundary_points[0]) > 0

    def test_threaded_pass_matches_serial(self, scene, config):
        model, tree = scene
        serial = model.sample(tree, config)
        threaded = model.sample(tree, replace(config, workers=3))
        for x, y in zip(serial.boundary_edges, threaded.boundary_edges):
            npt.assert_array_equal(x, y)


class TestFilterBoundary:
    def test_empty(self):
        s = SphereSurface(1.0)
        assert filter_boundary(np.empty((0, 3)), s, [s]).shape == (0, 3)

    def test_keeps_on_rows(self):
        s = SphereSurface(1.0)
        pts = np.array([[1.0, 0.0, 0.0], [0.0, 0.0, 0.0], [3.0, 0.0, 0.0]])
        kept = filter_boundary(pts, None, [s])
        npt.assert_array_equal(kept, [[1.0, 0.0, 0.0]])


class TestModel:
    def test_register_deduplicates(self):
        model = Model()
        s, p = SphereSurface(1.0, "blue"), PlaneSurface("red")
        model.register(s, p, s)
        model.register(p)
        assert model.surfaces == (s, p)
        assert model.tags == ["blue", "red"]

    def test_shape_registers_members(self):
        model = Model()
        s = SphereSurface(1.0)
        shape = model.shape(s)
        assert shape.contains(s)
        assert model.surfaces == (s,)

    def test_register_rejects_non_surface(self):
        with pytest.raises(TypeError):
            Model().register("sphere")

"""
csgpoints: point-sampled CSG over implicit surfaces
=====================================================

Approximates the boundary of a Constructive Solid Geometry tree by sampling
points, projecting them onto implicit surfaces and keeping the ones that
classify as ON the composed solid. No mesh or B-rep is ever built.

Implemented features
--------------------
- Surfaces: Plane, Cylinder (optionally height-bounded), Sphere, Chamfer
- Edge search: :func:`find_edge` (alternating reprojection)
- CSG trees: :class:`Shape` leaves, union / subtract / intersect nodes
- Classification: :func:`classify_surface`, :func:`classify_shape`,
  :func:`classify` with OUTSIDE / ON / INSIDE results
- Sampling: volumetric point clouds and surface-local samples
- Pass orchestration: :func:`sample_and_classify`, :class:`Model`
- Example assemblies: :func:`~csgpoints.examples.CarvedSphere`,
  :func:`~csgpoints.examples.SphereMinusBox`

Quick start
-----------

::

    import numpy as np
    from csgpoints import CSGConfig, SphereSurface, box_surfaces, subtract
    from csgpoints import sample_and_classify

    sphere = SphereSurface(8.0, tag="blue")
    box = box_surfaces(16.0, center=(0.0, 0.0, 8.0), tag="red")
    tree = subtract([sphere], box)

    config = CSGConfig(density=5.0, seed=1)
    result = sample_and_classify([sphere, *box], tree, config)
    result.boundary_points[0]   # (N, 3) points on the lower hemisphere
"""

from .config import CSGConfig, DEFAULT_CONFIG
from .transform import Transform
from .surfaces import (
    Surface,
    PlaneSurface,
    CylinderSurface,
    SphereSurface,
    ChamferSurface,
    box_surfaces,
)
from .edges import find_edge
from .tree import Operation, Shape, OperationNode, union, subtract, intersect
from .classify import (
    Classification,
    classify_surface,
    classify_shape,
    combine,
    classify,
    is_boundary,
)
from .sampling import (
    generate_point_cloud,
    sample_surfaces,
    generate_candidates,
    project_points,
)
from .pipeline import Model, SampleResult, filter_boundary, sample_and_classify

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "CSGConfig",
    "DEFAULT_CONFIG",
    "Transform",

    # Surfaces
    "Surface",
    "PlaneSurface",
    "CylinderSurface",
    "SphereSurface",
    "ChamferSurface",
    "box_surfaces",

    # Edge search
    "find_edge",

    # CSG trees
    "Operation",
    "Shape",
    "OperationNode",
    "union",
    "subtract",
    "intersect",

    # Classification
    "Classification",
    "classify_surface",
    "classify_shape",
    "combine",
    "classify",
    "is_boundary",

    # Sampling
    "generate_point_cloud",
    "sample_surfaces",
    "generate_candidates",
    "project_points",

    # Pass orchestration
    "Model",
    "SampleResult",
    "filter_boundary",
    "sample_and_classify",
]

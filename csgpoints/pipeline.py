"""Sampling pass: candidates -> projection -> classification -> filtering.

The output is plain arrays grouped per surface together with each surface's
display tag; turning them into something drawable is left to the caller
(see ``scripts/render_points.py``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from ._math import _F
from .classify import is_boundary
from .config import DEFAULT_CONFIG, CSGConfig
from .sampling import generate_candidates, project_points
from .surfaces import Surface
from .tree import CSGNode, NodeLike, Shape, as_node

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SampleResult:
    """Point sets of one sampling pass.

    All lists are parallel to the ``surfaces`` the pass was run with.

    Attributes
    ----------
    cloud:
        ``(N, 3)`` candidate points.
    tags:
        Display tag of each surface.
    surface_points, surface_edges:
        Raw projections and edge points per surface, before classification.
    boundary_points, boundary_edges:
        The subsets classified ON against the tree.
    """

    cloud: _F
    tags: List[Any]
    surface_points: List[_F]
    surface_edges: List[_F]
    boundary_points: List[_F]
    boundary_edges: List[_F]

    @property
    def boundary_count(self) -> int:
        return sum(len(p) for p in self.boundary_points)

    @property
    def edge_count(self) -> int:
        return sum(len(p) for p in self.boundary_edges)


def filter_boundary(points: _F, origin_surface: Optional[Surface], tree: NodeLike,
                    config: CSGConfig = DEFAULT_CONFIG) -> _F:
    """Rows of *points* that lie on the boundary of the solid *tree*."""
    if len(points) == 0:
        return points
    return points[is_boundary(points, origin_surface, tree, config)]


def sample_and_classify(
    surfaces: Sequence[Surface],
    tree: NodeLike,
    config: CSGConfig = DEFAULT_CONFIG,
    rng: Optional[np.random.Generator] = None,
) -> SampleResult:
    """Run one sampling pass over *surfaces* and keep the boundary of *tree*.

    Parameters
    ----------
    surfaces:
        Surfaces to sample, in output order. Usually every surface of the
        tree; a surface missing here contributes no points.
    tree:
        The CSG tree the points are classified against.
    config:
        Pass configuration.
    rng:
        Random source; defaults to ``numpy.random.default_rng(config.seed)``.
    """
    if rng is None:
        rng = np.random.default_rng(config.seed)
    tree = as_node(tree)
    surfaces = list(surfaces)

    cloud = generate_candidates(surfaces, config, rng)
    surface_points, surface_edges = project_points(cloud, surfaces, config)

    boundary_points = [
        filter_boundary(pts, s, tree, config) for s, pts in zip(surfaces, surface_points)
    ]
    boundary_edges = [
        filter_boundary(pts, s, tree, config) for s, pts in zip(surfaces, surface_edges)
    ]

    for s, raw, kept, edges in zip(surfaces, surface_points, boundary_points, boundary_edges):
        logger.debug("%r: kept %d/%d surface point(s), %d edge point(s)",
                     s, len(kept), len(raw), len(edges))

    result = SampleResult(
        cloud=cloud,
        tags=[s.tag for s in surfaces],
        surface_points=surface_points,
        surface_edges=surface_edges,
        boundary_points=boundary_points,
        boundary_edges=boundary_edges,
    )
    logger.info(
        "Sampled %d candidate(s) (%s mode): %d boundary point(s), %d edge point(s)",
        len(cloud), config.sampling, result.boundary_count, result.edge_count,
    )
    return result


class Model:
    """Registry of surfaces in display order.

    Surfaces are registered once and kept by identity; building a
    :class:`~csgpoints.tree.Shape` through :meth:`shape` registers its
    members on the way.
    """

    def __init__(self) -> None:
        self._surfaces: List[Surface] = []

    def register(self, *surfaces: Surface) -> Tuple[Surface, ...]:
        """Add *surfaces* (ignoring ones already registered) and return them."""
        for s in surfaces:
            if not isinstance(s, Surface):
                raise TypeError(f"expected Surface, got {type(s).__name__}")
            if not any(s is known for known in self._surfaces):
                self._surfaces.append(s)
        return surfaces

    def shape(self, *surfaces: Surface) -> Shape:
        """Register *surfaces* and return them as a leaf shape."""
        self.register(*surfaces)
        return Shape(surfaces)

    @property
    def surfaces(self) -> Tuple[Surface, ...]:
        return tuple(self._surfaces)

    @property
    def tags(self) -> List[Any]:
        return [s.tag for s in self._surfaces]

    def sample(self, tree: CSGNode, config: CSGConfig = DEFAULT_CONFIG,
               rng: Optional[np.random.Generator] = None) -> SampleResult:
        """:func:`sample_and_classify` over the registered surfaces."""
        return sample_and_classify(self._surfaces, tree, config, rng)

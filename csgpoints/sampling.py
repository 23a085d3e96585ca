"""Candidate point generation and per-surface projection.

Candidates come either from a uniform volumetric cloud over
``config.bounds`` or from each surface's own parameterization. Candidates
are then assigned to the surfaces they sit close to, and pairs of nearby
surfaces are refined into edge points.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Sequence, Tuple

import numpy as np

from ._math import _F, as_points, length
from .config import DEFAULT_CONFIG, CSGConfig
from .edges import find_edge
from .surfaces import Surface

logger = logging.getLogger(__name__)


def _empty() -> _F:
    return np.empty((0, 3))


# ===========================================================================
# Candidate generation
# ===========================================================================

def generate_point_cloud(config: CSGConfig, rng: np.random.Generator) -> _F:
    """Uniform random points filling ``config.bounds``.

    The count is ``floor(volume * config.density)``.

    Returns
    -------
    numpy.ndarray
        ``(N, 3)`` world points.
    """
    (x0, x1), (y0, y1), (z0, z1) = config.bounds
    count = int(np.floor(config.volume * config.density))
    lo = np.array([x0, y0, z0], dtype=np.float64)
    hi = np.array([x1, y1, z1], dtype=np.float64)
    cloud = rng.uniform(lo, hi, size=(count, 3))
    logger.debug("Generated point cloud of %d points", count)
    return cloud


def sample_surfaces(surfaces: Sequence[Surface], config: CSGConfig,
                    rng: np.random.Generator) -> _F:
    """Concatenate ``config.surface_samples`` surface-local points per surface."""
    chunks = [s.sample(config.surface_samples, rng, config) for s in surfaces]
    if not chunks:
        return _empty()
    cloud = np.concatenate(chunks)
    logger.debug("Sampled %d surface-local points over %d surface(s)",
                 len(cloud), len(surfaces))
    return cloud


def generate_candidates(surfaces: Sequence[Surface], config: CSGConfig,
                        rng: np.random.Generator) -> _F:
    """Candidates for the sampling mode selected by ``config.sampling``."""
    if config.sampling == "surface":
        return sample_surfaces(surfaces, config, rng)
    return generate_point_cloud(config, rng)


# ===========================================================================
# Projection
# ===========================================================================

def project_points(
    points: _F,
    surfaces: Sequence[Surface],
    config: CSGConfig = DEFAULT_CONFIG,
) -> Tuple[List[_F], List[_F]]:
    """Assign candidate *points* to surfaces and discover edge points.

    A point is accepted by a surface when its projection moves it by at most
    ``config.max_projection_distance``; the projection joins that surface's
    points. For every other surface within the looser
    ``config.edge_projection_distance`` the point seeds
    :func:`~csgpoints.edges.find_edge`, and converged edge points join the
    accepting surface's edge points. One point may be accepted by several
    surfaces.

    Returns
    -------
    tuple
        ``(surface_points, edge_points)``: two lists parallel to *surfaces*
        holding ``(N_i, 3)`` arrays.
    """
    pts = as_points(points).reshape(-1, 3)
    projected = [s.project_point(pts, config) for s in surfaces]
    # NaN projections compare False and are never accepted.
    distances = [length(proj - pts) for proj in projected]
    near = [d <= config.max_projection_distance for d in distances]
    edge_near = [d <= config.edge_projection_distance for d in distances]

    def _bucket(i: int) -> Tuple[_F, _F]:
        surface = surfaces[i]
        accepted = projected[i][near[i]]
        edges: List[_F] = []
        for j, other in enumerate(surfaces):
            if j == i:
                continue
            candidates = near[i] & edge_near[j]
            if not candidates.any():
                continue
            edge, found = find_edge(pts[candidates], surface, other, config)
            edges.append(edge[found])
        edge_points = np.concatenate(edges) if edges else _empty()
        logger.debug("%r: %d surface point(s), %d edge point(s)",
                     surface, len(accepted), len(edge_points))
        return accepted, edge_points

    indices = range(len(surfaces))
    if config.workers > 1 and len(surfaces) > 1:
        with ThreadPoolExecutor(max_workers=config.workers) as pool:
            buckets = list(pool.map(_bucket, indices))
    else:
        buckets = [_bucket(i) for i in indices]

    surface_points = [b[0] for b in buckets]
    edge_points = [b[1] for b in buckets]
    return surface_points, edge_points

"""Configuration for sampling, edge search and classification."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Tuple

_Bounds3D = Tuple[Tuple[float, float], Tuple[float, float], Tuple[float, float]]

SamplingMode = Literal["volume", "surface"]


@dataclass(frozen=True, slots=True)
class CSGConfig:
    """Every tunable constant of a sampling pass.

    The same instance is threaded through projection, edge search,
    classification and sampling, so ``epsilon`` is the one on-surface
    tolerance the whole kernel shares.

    Attributes
    ----------
    density:
        Point-cloud points per unit volume of ``bounds``.
    bounds:
        ``((x0, x1), (y0, y1), (z0, z1))`` box the volumetric cloud fills.
    max_projection_distance:
        A sample is accepted by a surface when its projection moves it at
        most this far.
    edge_projection_distance:
        Looser threshold on the second surface of an edge candidate.
    epsilon:
        On-surface tolerance for classification.
    edge_max_iterations:
        Iteration cap of :func:`csgpoints.edges.find_edge`.
    edge_tolerance:
        Gap between the two projections below which an edge point counts as
        converged. Must be tighter than ``epsilon``.
    edge_min_improvement:
        Relative gap reduction an edge iteration must achieve; anything less
        counts as a stall.
    sampling:
        ``"volume"`` for a uniform cloud, ``"surface"`` for surface-local
        samples.
    surface_samples:
        Samples per surface in ``"surface"`` mode.
    surface_extent:
        Half-width used to parameterize unbounded planes and cylinders.
    workers:
        Threads used to process surfaces; ``1`` runs serially.
    seed:
        Seed for the default random generator.
    """

    density: float = 20.0
    bounds: _Bounds3D = ((-10.0, 10.0), (-10.0, 10.0), (-10.0, 10.0))
    max_projection_distance: float = 0.3
    edge_projection_distance: float = 0.45
    epsilon: float = 1e-3
    edge_max_iterations: int = 100
    edge_tolerance: float = 1e-4
    edge_min_improvement: float = 1e-3
    sampling: SamplingMode = "volume"
    surface_samples: int = 2000
    surface_extent: float = 10.0
    workers: int = 1
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.density <= 0:
            raise ValueError(f"density must be positive, got {self.density}")
        if len(self.bounds) != 3:
            raise ValueError("bounds must hold three (lo, hi) pairs")
        for lo, hi in self.bounds:
            if not lo < hi:
                raise ValueError(f"invalid bounds interval ({lo}, {hi})")
        if self.max_projection_distance <= 0:
            raise ValueError("max_projection_distance must be positive")
        if self.edge_projection_distance < self.max_projection_distance:
            raise ValueError(
                "edge_projection_distance must not be tighter than max_projection_distance"
            )
        if self.epsilon <= 0:
            raise ValueError(f"epsilon must be positive, got {self.epsilon}")
        if not 0 < self.edge_tolerance <= self.epsilon:
            raise ValueError("edge_tolerance must lie in (0, epsilon]")
        if self.edge_max_iterations < 1:
            raise ValueError("edge_max_iterations must be at least 1")
        if not 0 <= self.edge_min_improvement < 1:
            raise ValueError("edge_min_improvement must lie in [0, 1)")
        if self.sampling not in ("volume", "surface"):
            raise ValueError(f"unknown sampling mode {self.sampling!r}")
        if self.surface_samples < 0:
            raise ValueError("surface_samples must be non-negative")
        if self.surface_extent <= 0:
            raise ValueError("surface_extent must be positive")
        if self.workers < 1:
            raise ValueError("workers must be at least 1")

    @property
    def volume(self) -> float:
        """Volume of :attr:`bounds`."""
        (x0, x1), (y0, y1), (z0, z1) = self.bounds
        return (x1 - x0) * (y1 - y0) * (z1 - z0)


DEFAULT_CONFIG = CSGConfig()

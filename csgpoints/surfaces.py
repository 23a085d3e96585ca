"""Implicit surface primitives.

A surface is known only through two queries:

* ``project_point(p)`` maps world points onto the surface with a closed-form
  projection (the Euclidean closest point for the primitives, a
  plane-through-the-edge construction for chamfers).
* ``normal_at(p)`` returns the outward unit normal at points assumed to lie
  on the surface.

All queries accept ``(..., 3)`` point arrays and broadcast over the leading
dimensions. The set of kinds is closed: :class:`PlaneSurface`,
:class:`CylinderSurface`, :class:`SphereSurface` and :class:`ChamferSurface`.
Surfaces are never modified after construction and are compared by
identity, so one instance can be shared by several shapes.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

import numpy as np

from ._math import _F, as_points, dot, length, normalize
from .config import DEFAULT_CONFIG, CSGConfig
from .edges import find_edge
from .transform import Transform

_LOCAL_Z = np.array([0.0, 0.0, 1.0])


# ===========================================================================
# Base class
# ===========================================================================

class Surface:
    """Base class for implicit surfaces.

    Parameters
    ----------
    tag:
        Opaque identity/display tag (e.g. a colour). The kernel never
        inspects it.
    position:
        World position of the local origin.
    orientation:
        XYZ Euler angles in radians of the local frame.
    """

    kind = "surface"

    def __init__(self, tag: Any = None,
                 position: Sequence[float] = (0.0, 0.0, 0.0),
                 orientation: Sequence[float] = (0.0, 0.0, 0.0)) -> None:
        self.tag = tag
        self.transform = Transform.from_euler(position, orientation)

    def to_local(self, p: _F) -> _F:
        return self.transform.to_local(p)

    def to_world(self, q: _F) -> _F:
        return self.transform.to_world(q)

    def rotate_to_world(self, v: _F) -> _F:
        return self.transform.rotate_to_world(v)

    def project_point(self, p: _F, config: CSGConfig = DEFAULT_CONFIG) -> _F:
        """Project world points *p* onto the surface."""
        raise NotImplementedError

    def normal_at(self, p: _F) -> _F:
        """Outward unit normal at surface points *p*."""
        raise NotImplementedError

    def sample(self, count: int, rng: np.random.Generator,
               config: CSGConfig = DEFAULT_CONFIG) -> _F:
        """Draw up to *count* world points on the surface."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(tag={self.tag!r})"


# ===========================================================================
# Primitive surfaces
# ===========================================================================

class PlaneSurface(Surface):
    """Infinite plane through the local origin with local normal ``+z``."""

    kind = "plane"

    def project_point(self, p: _F, config: CSGConfig = DEFAULT_CONFIG) -> _F:
        q = self.to_local(as_points(p))
        q[..., 2] = 0.0
        return self.to_world(q)

    def normal_at(self, p: _F) -> _F:
        p = as_points(p)
        return np.broadcast_to(self.rotate_to_world(_LOCAL_Z), p.shape).copy()

    def sample(self, count: int, rng: np.random.Generator,
               config: CSGConfig = DEFAULT_CONFIG) -> _F:
        e = config.surface_extent
        uv = rng.uniform(-e, e, size=(count, 2))
        q = np.column_stack([uv, np.zeros(count)])
        return self.to_world(q)


class CylinderSurface(Surface):
    """Cylinder of *radius* around the local Z axis.

    With *height* set, the surface is bounded to ``|z| <= height / 2`` in
    local space and projections clamp the axial coordinate.
    """

    kind = "cylinder"

    def __init__(self, radius: float, tag: Any = None,
                 position: Sequence[float] = (0.0, 0.0, 0.0),
                 orientation: Sequence[float] = (0.0, 0.0, 0.0),
                 height: Optional[float] = None) -> None:
        if radius <= 0:
            raise ValueError(f"radius must be positive, got {radius}")
        if height is not None and height <= 0:
            raise ValueError(f"height must be positive, got {height}")
        super().__init__(tag, position, orientation)
        self.radius = float(radius)
        self.height = None if height is None else float(height)

    def _radial(self, q: _F) -> _F:
        r = q.copy()
        r[..., 2] = 0.0
        return normalize(r)

    def project_point(self, p: _F, config: CSGConfig = DEFAULT_CONFIG) -> _F:
        q = self.to_local(as_points(p))
        out = self._radial(q) * self.radius
        z = q[..., 2]
        if self.height is not None:
            z = np.clip(z, -self.height / 2.0, self.height / 2.0)
        out[..., 2] = z
        return self.to_world(out)

    def normal_at(self, p: _F) -> _F:
        return self.rotate_to_world(self._radial(self.to_local(as_points(p))))

    def sample(self, count: int, rng: np.random.Generator,
               config: CSGConfig = DEFAULT_CONFIG) -> _F:
        half = self.height / 2.0 if self.height is not None else config.surface_extent
        theta = rng.uniform(0.0, 2.0 * np.pi, size=count)
        z = rng.uniform(-half, half, size=count)
        q = np.column_stack([self.radius * np.cos(theta), self.radius * np.sin(theta), z])
        return self.to_world(q)


class SphereSurface(Surface):
    """Sphere of *radius* centred at the local origin."""

    kind = "sphere"

    def __init__(self, radius: float, tag: Any = None,
                 position: Sequence[float] = (0.0, 0.0, 0.0),
                 orientation: Sequence[float] = (0.0, 0.0, 0.0)) -> None:
        if radius <= 0:
            raise ValueError(f"radius must be positive, got {radius}")
        super().__init__(tag, position, orientation)
        self.radius = float(radius)

    def project_point(self, p: _F, config: CSGConfig = DEFAULT_CONFIG) -> _F:
        q = self.to_local(as_points(p))
        return self.to_world(normalize(q) * self.radius)

    def normal_at(self, p: _F) -> _F:
        return self.rotate_to_world(normalize(self.to_local(as_points(p))))

    def sample(self, count: int, rng: np.random.Generator,
               config: CSGConfig = DEFAULT_CONFIG) -> _F:
        return self.to_world(_unit_sphere(count, rng) * self.radius)


def _unit_sphere(count: int, rng: np.random.Generator) -> _F:
    """Uniform directions by rejection sampling in the cube ``[-1, 1]^3``."""
    chunks: List[_F] = []
    n = 0
    while n < count:
        v = rng.uniform(-1.0, 1.0, size=(2 * (count - n) + 8, 3))
        r = length(v)
        keep = (r > 1e-6) & (r <= 1.0)
        v = v[keep] / r[keep][:, None]
        chunks.append(v)
        n += len(v)
    if not chunks:
        return np.empty((0, 3))
    return np.concatenate(chunks)[:count]


# ===========================================================================
# Composite surfaces
# ===========================================================================

class ChamferSurface(Surface):
    """Flat chamfer blending the edge between *first* and *second*.

    For a query point the edge point ``e`` between the two parents is found
    with :func:`~csgpoints.edges.find_edge`; the chamfer is then the plane
    with normal ``n = normalize(n_second(e) - n_first(e))`` through
    ``e + length * n``. Where no edge point converges the projection is the
    NaN sentinel: the chamfer is undefined there.

    Only near-convex neighbourhoods are supported; far from the edge the
    construction follows whichever edge point the search lands on. Around a
    curved parent the chamfer planes sweep a cone, and projections of points
    beyond its apex are not stable: the projected point can cross to the far
    side, where the search picks the opposite edge point and the projection
    no longer classifies ON.
    """

    kind = "chamfer"

    def __init__(self, first: Surface, second: Surface, length: float,
                 tag: Any = None) -> None:
        if first is second:
            raise ValueError("a chamfer needs two distinct surfaces")
        if length <= 0:
            raise ValueError(f"length must be positive, got {length}")
        super().__init__(tag)
        self.first = first
        self.second = second
        self.length = float(length)

    def normal_at(self, p: _F) -> _F:
        p = as_points(p)
        return normalize(self.second.normal_at(p) - self.first.normal_at(p))

    def project_point(self, p: _F, config: CSGConfig = DEFAULT_CONFIG) -> _F:
        p = as_points(p)
        edge, found = find_edge(p, self.first, self.second, config)
        n = self.normal_at(edge)
        anchor = edge + self.length * n
        out = p - dot(p - anchor, n)[..., None] * n
        return np.where(found[..., None], out, np.nan)

    def sample(self, count: int, rng: np.random.Generator,
               config: CSGConfig = DEFAULT_CONFIG) -> _F:
        # No natural parameterization: reuse the first parent's samples.
        seeds = self.first.sample(count, rng, config)
        out = self.project_point(seeds, config)
        return out[np.isfinite(out).all(axis=-1)]


# ===========================================================================
# Helpers
# ===========================================================================

def box_surfaces(side: float, center: Sequence[float] = (0.0, 0.0, 0.0),
                 tag: Any = None) -> List[PlaneSurface]:
    """Six outward-facing planes bounding an axis-aligned cube.

    Returned in the order top, bottom, front, back, right, left.
    """
    if side <= 0:
        raise ValueError(f"side must be positive, got {side}")
    h = side / 2.0
    c = np.asarray(center, dtype=np.float64)
    faces = [
        ((0.0, 0.0, h), (0.0, 0.0, 0.0)),             # top
        ((0.0, 0.0, -h), (np.pi, 0.0, 0.0)),          # bottom
        ((0.0, h, 0.0), (-np.pi / 2, 0.0, 0.0)),      # front
        ((0.0, -h, 0.0), (np.pi / 2, 0.0, 0.0)),      # back
        ((h, 0.0, 0.0), (0.0, np.pi / 2, 0.0)),       # right
        ((-h, 0.0, 0.0), (0.0, -np.pi / 2, 0.0)),     # left
    ]
    return [PlaneSurface(tag, c + np.asarray(pos), rot) for pos, rot in faces]

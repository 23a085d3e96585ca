"""Shared vector helpers for the csgpoints kernels.

This module provides:

* **Type alias**: :data:`_F`
* **Vector constructors**: :func:`as_points`
* **Math helpers**: :func:`length`, :func:`dot`, :func:`normalize`
* **Rotations**: :func:`rotation_x`, :func:`rotation_y`, :func:`rotation_z`,
  :func:`euler_to_matrix`

Every helper works on ``(..., 3)`` arrays and broadcasts over leading batch
dimensions.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
import numpy.typing as npt

# ---------------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------------
_F = npt.NDArray[np.floating]

# Guard for normalising zero-length vectors.
_TINY = 1e-12

__all__ = [
    "_F",
    "as_points",
    "length", "dot", "normalize",
    "rotation_x", "rotation_y", "rotation_z", "euler_to_matrix",
]


# ===========================================================================
# Vector constructors
# ===========================================================================


def as_points(p) -> _F:
    """Return *p* as a float64 array whose last axis has length 3."""
    arr = np.asarray(p, dtype=np.float64)
    if arr.shape[-1:] != (3,):
        raise ValueError(f"expected points of shape (..., 3), got {arr.shape}")
    return arr


# ===========================================================================
# Math helpers
# ===========================================================================

def length(v: _F) -> _F:
    """Euclidean length along the last axis."""
    return np.linalg.norm(v, axis=-1)


def dot(a: _F, b: _F) -> _F:
    """Dot product along the last axis."""
    return np.sum(a * b, axis=-1)


def normalize(v: _F, fallback: Sequence[float] = (1.0, 0.0, 0.0)) -> _F:
    """Unit vectors along the last axis.

    Rows shorter than ``1e-12`` are replaced by *fallback* so that points on
    an axis or at a centre still get a well-defined direction.
    """
    n = length(v)[..., None]
    fb = np.broadcast_to(np.asarray(fallback, dtype=np.float64), v.shape)
    return np.where(n > _TINY, v / np.maximum(n, _TINY), fb)


# ===========================================================================
# Rotations
# ===========================================================================

def rotation_x(angle_rad: float) -> _F:
    """Rotation matrix about the X axis."""
    c, s = np.cos(angle_rad), np.sin(angle_rad)
    return np.array([[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]])


def rotation_y(angle_rad: float) -> _F:
    """Rotation matrix about the Y axis."""
    c, s = np.cos(angle_rad), np.sin(angle_rad)
    return np.array([[c, 0.0, s], [0.0, 1.0, 0.0], [-s, 0.0, c]])


def rotation_z(angle_rad: float) -> _F:
    """Rotation matrix about the Z axis."""
    c, s = np.cos(angle_rad), np.sin(angle_rad)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])


def euler_to_matrix(angles: Sequence[float]) -> _F:
    """Rotation matrix for intrinsic XYZ Euler *angles* ``(ax, ay, az)``.

    The composed matrix is ``Rx @ Ry @ Rz``, so a local vector is rotated
    about Z first, then Y, then X.
    """
    ax, ay, az = (float(a) for a in angles)
    return rotation_x(ax) @ rotation_y(ay) @ rotation_z(az)

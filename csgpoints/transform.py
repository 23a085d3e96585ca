"""Rigid local/world transforms for surfaces."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ._math import _F, euler_to_matrix


class Transform:
    """Position plus rotation, unit scale.

    Local coordinates are obtained with ``R.T @ (p - position)`` and mapped
    back with ``R @ q + position``. Both arrays are read-only.
    """

    __slots__ = ("position", "rotation")

    def __init__(self, position: Sequence[float] = (0.0, 0.0, 0.0),
                 rotation: _F | None = None) -> None:
        pos = np.array(position, dtype=np.float64)
        rot = np.eye(3) if rotation is None else np.array(rotation, dtype=np.float64)
        if pos.shape != (3,) or rot.shape != (3, 3):
            raise ValueError("position must be (3,) and rotation (3, 3)")
        pos.flags.writeable = False
        rot.flags.writeable = False
        self.position = pos
        self.rotation = rot

    @classmethod
    def from_euler(cls, position: Sequence[float] = (0.0, 0.0, 0.0),
                   orientation: Sequence[float] = (0.0, 0.0, 0.0)) -> "Transform":
        """Build from a position and XYZ Euler angles in radians."""
        return cls(position, euler_to_matrix(orientation))

    def to_local(self, p: _F) -> _F:
        """World points ``(..., 3)`` to local space."""
        # Row vectors: (R.T @ v).T == v @ R
        return (p - self.position) @ self.rotation

    def to_world(self, q: _F) -> _F:
        """Local points ``(..., 3)`` to world space."""
        return q @ self.rotation.T + self.position

    def rotate_to_world(self, v: _F) -> _F:
        """Rotate local direction vectors into world space (no translation)."""
        return v @ self.rotation.T

    def __repr__(self) -> str:
        return f"Transform(position={self.position.tolist()})"

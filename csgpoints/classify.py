"""Three-valued point classification against surfaces, shapes and trees.

Every function returns an ``int8`` array of :class:`Classification` values
with the leading shape of the query points, so a single ``(3,)`` point gives
a 0-d array that compares equal to the enum members.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable, Optional, Union

import numpy as np

from ._math import _F, as_points, dot
from .config import DEFAULT_CONFIG, CSGConfig
from .surfaces import Surface
from .tree import CSGNode, NodeLike, Operation, OperationNode, Shape, as_node


class Classification(IntEnum):
    OUTSIDE = 0
    ON = 1
    INSIDE = 2


_OUT = np.int8(Classification.OUTSIDE)
_ON = np.int8(Classification.ON)
_IN = np.int8(Classification.INSIDE)


# ===========================================================================
# Single surface
# ===========================================================================

def classify_surface(points: _F, surface: Surface,
                     config: CSGConfig = DEFAULT_CONFIG) -> np.ndarray:
    """Side of *surface* each point lies on.

    With ``closest = surface.project_point(p)`` the signed depth is
    ``d = dot(closest - p, surface.normal_at(closest))``: INSIDE when
    ``d > epsilon``, OUTSIDE when ``d < -epsilon``, ON otherwise. Points
    whose projection is undefined (NaN sentinel) are OUTSIDE.
    """
    p = as_points(points)
    closest = surface.project_point(p, config)
    d = dot(closest - p, surface.normal_at(closest))
    eps = config.epsilon
    return np.select(
        [~np.isfinite(d), d > eps, d < -eps],
        [_OUT, _IN, _OUT],
        default=_ON,
    ).astype(np.int8)


# ===========================================================================
# Leaf shape
# ===========================================================================

def classify_shape(points: _F, origin_surface: Optional[Surface],
                   surfaces: Union[Shape, Iterable[Surface]],
                   config: CSGConfig = DEFAULT_CONFIG) -> np.ndarray:
    """Classify points against the intersection of half-spaces *surfaces*.

    Points generated on *origin_surface* are ON any shape that has it as a
    member, whatever the other members report. Otherwise this is a logical
    AND: any OUTSIDE makes the point OUTSIDE, else any ON makes it ON, else
    it is INSIDE. Pass ``origin_surface=None`` for free points.
    """
    p = as_points(points)
    shape = p.shape[:-1]
    members = tuple(surfaces)

    if origin_surface is not None and any(s is origin_surface for s in members):
        return np.full(shape, _ON, dtype=np.int8)

    flat = p.reshape(-1, 3)
    outside = np.zeros(len(flat), dtype=bool)
    on = np.zeros(len(flat), dtype=bool)
    for surface in members:
        idx = np.flatnonzero(~outside)
        if len(idx) == 0:
            break
        c = classify_surface(flat[idx], surface, config)
        outside[idx[c == _OUT]] = True
        on[idx[c == _ON]] = True

    result = np.select([outside, on], [_OUT, _ON], default=_IN).astype(np.int8)
    return result.reshape(shape)


# ===========================================================================
# CSG tree
# ===========================================================================

def combine(operation: Union[Operation, str], a, b) -> np.ndarray:
    """Combine child classifications *a* and *b* under *operation*.

    ========== ================================================================
    union      OUTSIDE if both OUTSIDE, INSIDE if either INSIDE, else ON
    subtract   ``a`` if ``a`` is not OUTSIDE and ``b`` is OUTSIDE; ON if ``a``
               is not OUTSIDE and ``b`` is ON; else OUTSIDE
    intersect  OUTSIDE if either OUTSIDE, ON if either ON, else INSIDE
    ========== ================================================================

    Any other operation yields OUTSIDE.
    """
    a = np.asarray(a, dtype=np.int8)
    b = np.asarray(b, dtype=np.int8)

    if operation == Operation.UNION:
        result = np.select(
            [(a == _OUT) & (b == _OUT), (a == _IN) | (b == _IN)],
            [_OUT, _IN],
            default=_ON,
        )
    elif operation == Operation.SUBTRACT:
        kept = a != _OUT
        result = np.select(
            [kept & (b == _OUT), kept & (b == _ON)],
            [a, _ON],
            default=_OUT,
        )
    elif operation == Operation.INTERSECT:
        result = np.select(
            [(a == _OUT) | (b == _OUT), (a == _ON) | (b == _ON)],
            [_OUT, _ON],
            default=_IN,
        )
    else:
        result = np.full(np.broadcast(a, b).shape, _OUT)
    return np.asarray(result, dtype=np.int8)


def classify(points: _F, origin_surface: Optional[Surface], node: NodeLike,
             config: CSGConfig = DEFAULT_CONFIG) -> np.ndarray:
    """Classify points against the solid described by the tree *node*.

    Only the leaf short-circuit knows where a point came from. A point
    spawned on a surface that the tree culls can still come out ON when it
    also lies on another surface that survives; such points are reported,
    not filtered.
    """
    node = as_node(node)
    if isinstance(node, OperationNode):
        a = classify(points, origin_surface, node.left, config)
        b = classify(points, origin_surface, node.right, config)
        return combine(node.operation, a, b)
    return classify_shape(points, origin_surface, node, config)


def is_boundary(points: _F, origin_surface: Optional[Surface], node: CSGNode,
                config: CSGConfig = DEFAULT_CONFIG) -> np.ndarray:
    """Boolean mask of points classified ON against *node*."""
    return classify(points, origin_surface, node, config) == _ON

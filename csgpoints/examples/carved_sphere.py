"""Sphere/box/cylinder assemblies.

Usage::

    from csgpoints import sample_and_classify
    from csgpoints.examples import CarvedSphere

    model, tree = CarvedSphere(model_size=8.0)
    result = model.sample(tree)
"""

from __future__ import annotations

from typing import Tuple

from csgpoints.pipeline import Model
from csgpoints.surfaces import (
    ChamferSurface,
    CylinderSurface,
    SphereSurface,
    box_surfaces,
)
from csgpoints.tree import OperationNode, subtract, union

RED = 0xFF0000
GREEN = 0x00FF00
BLUE = 0x0000FF
YELLOW = 0xFFFF00


def SphereMinusBox(radius: float = 8.0) -> Tuple[Model, OperationNode]:
    """Sphere of *radius* at the origin minus a cube of side ``2 * radius``.

    The cube sits on the XY plane (centre ``(0, 0, radius)``), so the solid
    left over is the lower hemisphere.

    Returns
    -------
    tuple
        ``(Model, tree)``.
    """
    model = Model()
    sphere = SphereSurface(radius, BLUE)
    box = box_surfaces(2.0 * radius, center=(0.0, 0.0, radius), tag=RED)
    tree = subtract(model.shape(sphere), model.shape(*box))
    return model, tree


def CarvedSphere(model_size: float = 8.0) -> Tuple[Model, OperationNode]:
    """Sphere minus a cube that is drilled by a chamfered cylinder.

    The model consists of:

    * A sphere of radius *model_size* at the origin.
    * A cube of side ``2 * model_size`` resting on the XY plane.
    * An infinite cylinder of radius ``model_size / 2`` along the cube's
      vertical axis, drilled out of the cube.
    * A chamfer of length ``model_size / 8`` blending the cube's bottom face
      into the cylinder.

    The tree is ``sphere - (cube - (cylinder | chamfer))``.

    Returns
    -------
    tuple
        ``(Model, tree)`` with surfaces registered in the order cylinder,
        cube faces, sphere, chamfer.
    """
    s = float(model_size)
    center = (0.0, 0.0, s)

    box = box_surfaces(2.0 * s, center=center, tag=RED)
    cylinder = CylinderSurface(s / 2.0, GREEN, position=center)
    sphere = SphereSurface(s, BLUE)
    chamfer = ChamferSurface(box[1], cylinder, s / 8.0, YELLOW)

    model = Model()
    model.register(cylinder, *box, sphere, chamfer)

    tree = subtract(
        [sphere],
        subtract(box, union([cylinder], [chamfer])),
    )
    return model, tree

"""csgpoints.examples: ready-made surface models.

Implemented assemblies
----------------------
:func:`SphereMinusBox`
    Sphere with the upper half cut away by a cube.

:func:`CarvedSphere`
    Sphere minus a cube that is itself drilled by a chamfered cylinder.
"""

from .carved_sphere import CarvedSphere, SphereMinusBox

__all__ = ["CarvedSphere", "SphereMinusBox"]

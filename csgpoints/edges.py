"""Edge points: points lying on two surfaces at once.

:func:`find_edge` refines seed points by alternating reprojection. Each
iteration projects the current estimate onto the first surface and that
result onto the second; the distance between the two projections is the
*gap*. A seed

* converges once ``gap < config.edge_tolerance`` and yields the point on the
  second surface,
* stalls when an iteration fails to shrink the gap by at least the relative
  ``config.edge_min_improvement`` (parallel planes, disjoint spheres, ...),
* fails once ``config.edge_max_iterations`` iterations are spent.

Stalled and exhausted seeds are reported with ``found == False`` and a NaN
point. This is a local fixed-point search, not a global solver: a seed far
from any intersection may converge to a different branch or not at all.

The stop rule bounds the gap, not the distance to the true edge. Where the
surfaces meet at angle ``theta`` the returned point can sit up to
``gap / tan(theta)`` from the intersection, so it is within
``edge_tolerance`` only for ``theta >= 45`` degrees; shallower crossings
land proportionally further away.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Tuple

import numpy as np

from ._math import _F, as_points, length
from .config import DEFAULT_CONFIG, CSGConfig

if TYPE_CHECKING:
    from .surfaces import Surface

logger = logging.getLogger(__name__)


def find_edge(
    points: _F,
    first: "Surface",
    second: "Surface",
    config: CSGConfig = DEFAULT_CONFIG,
) -> Tuple[_F, np.ndarray]:
    """Refine seed *points* towards the intersection of *first* and *second*.

    Parameters
    ----------
    points:
        ``(..., 3)`` seed points.
    first, second:
        The two surfaces; *first* is projected onto first in every iteration.
    config:
        Supplies ``edge_max_iterations``, ``edge_tolerance`` and
        ``edge_min_improvement``.

    Returns
    -------
    tuple
        ``(edge_points, found)`` with shapes ``(..., 3)`` and ``(...)``.
        Rows where ``found`` is ``False`` are NaN.
    """
    seeds = as_points(points)
    shape = seeds.shape[:-1]
    p = seeds.reshape(-1, 3).copy()
    n = len(p)

    result = np.full((n, 3), np.nan)
    found = np.zeros(n, dtype=bool)
    active = np.ones(n, dtype=bool)
    prev_gap = np.full(n, np.inf)
    shrink = 1.0 - config.edge_min_improvement

    iterations = 0
    for _ in range(config.edge_max_iterations):
        if not active.any():
            break
        iterations += 1
        idx = np.flatnonzero(active)

        on_first = first.project_point(p[idx], config)
        on_second = second.project_point(on_first, config)
        gap = length(on_second - on_first)

        converged = gap < config.edge_tolerance
        # NaN gaps fail both comparisons and land here as stalled.
        stalled = ~converged & ~(gap < prev_gap[idx] * shrink)

        done = idx[converged]
        result[done] = on_second[converged]
        found[done] = True
        active[idx[converged | stalled]] = False

        prev_gap[idx] = gap
        p[idx] = on_second

    logger.debug(
        "find_edge: %d/%d seeds converged in %d iteration(s)",
        int(found.sum()), n, iterations,
    )
    return result.reshape(shape + (3,)), found.reshape(shape)

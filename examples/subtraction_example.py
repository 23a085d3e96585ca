"""
Subtraction Example: Sphere with its upper half cut away by a cube

Geometric expectation:
- Sphere at (0, 0, 0) radius 2
- Cube of side 4 centred at (0, 0, 2), resting on the XY plane
- Result = sphere - cube = lower hemisphere
- Sphere points kept by the sampler lie on |p| = 2 with z <= 0
  (up to the ON band, plus the equator where the cube's side faces touch)
- Cube bottom points kept form the disc x^2 + y^2 <= 4 at z = 0
- Cube top and side faces contribute (almost) nothing
- Edge points (sphere/bottom intersection) lie on the rim circle
"""
import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import numpy as np

from csgpoints import CSGConfig
from csgpoints.examples import SphereMinusBox


def main():
    config = CSGConfig(bounds=((-3.0, 3.0),) * 3, density=40.0, seed=0)
    model, tree = SphereMinusBox(radius=2.0)
    result = model.sample(tree, config)

    sphere_pts = result.boundary_points[0]
    bottom_pts = result.boundary_points[2]
    top_pts = result.boundary_points[1]
    rim = np.concatenate([result.boundary_edges[0], result.boundary_edges[2]])

    print("=" * 60)
    print("SUBTRACTION EXAMPLE: Sphere minus cube")
    print("=" * 60)
    print(f"Candidate points: {len(result.cloud)}")
    for tag, pts, edges in zip(result.tags, result.boundary_points, result.boundary_edges):
        print(f"  surface #{tag:06x}: {len(pts):6d} boundary, {len(edges):5d} edge")

    radius_err = np.abs(np.linalg.norm(sphere_pts, axis=-1) - 2.0).max()
    below = (sphere_pts[:, 2] <= config.epsilon).mean()
    disc_ok = np.all(np.linalg.norm(bottom_pts[:, :2], axis=-1) <= 2.0 + config.epsilon)
    rim_err = np.abs(np.linalg.norm(rim, axis=-1) - 2.0).max() if len(rim) else np.inf

    print(f"Max sphere radius error: {radius_err:.3e}")
    print(f"Sphere points below the cut: {100 * below:.1f}%")
    print(f"Bottom face points inside the disc: {disc_ok}")
    print(f"Top face points kept: {len(top_pts)}")
    print(f"Max rim radius error: {rim_err:.3e}")

    success = (
        radius_err < 1e-9 and
        below > 0.9 and
        disc_ok and
        len(top_pts) == 0 and
        rim_err < 1.5e-3
    )
    print("\n" + "=" * 60)
    if success:
        print("✅ SUBTRACTION TEST PASSED: Boundary is the lower hemisphere and its cap")
    else:
        print("❌ SUBTRACTION TEST FAILED")
    print("=" * 60)


if __name__ == "__main__":
    main()

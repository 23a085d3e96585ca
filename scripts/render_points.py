"""Render a sampled CSG model as coloured point sets.

Runs one sampling pass over :func:`csgpoints.examples.CarvedSphere` and draws
the result with matplotlib's 3-D axes. Three views are available:

* ``model``    : boundary points of the composed solid plus its edges (black)
* ``surfaces`` : every accepted point of every surface, before CSG evaluation
* ``cloud``    : the raw candidate points

Usage::

    python scripts/render_points.py                          # saves carved_sphere.png
    python scripts/render_points.py --view surfaces --out s.png
    python scripts/render_points.py --density 5 --seed 3      # faster, sparser

Requirements: numpy, matplotlib
"""
from __future__ import annotations

import argparse
import logging
from dataclasses import replace

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np

from csgpoints import DEFAULT_CONFIG, SampleResult
from csgpoints.examples import CarvedSphere
from csgpoints.logging_config import setup_logging

logger = logging.getLogger("csgpoints.scripts.render_points")

_BACKGROUND = "#d0d0d0"
_POINT_SIZE = 1.5


def _hex_color(tag) -> str:
    if isinstance(tag, int):
        return f"#{tag:06x}"
    return str(tag)


def _layers(result: SampleResult, view: str) -> list[tuple[np.ndarray, str]]:
    if view == "cloud":
        return [(result.cloud, "#ffffff")]
    if view == "surfaces":
        return [(pts, _hex_color(tag)) for pts, tag in zip(result.surface_points, result.tags)]
    layers = [(pts, _hex_color(tag)) for pts, tag in zip(result.boundary_points, result.tags)]
    layers += [(pts, "#000000") for pts in result.boundary_edges]
    return layers


def render(result: SampleResult, view: str, out_path: str, extent: float) -> None:
    fig = plt.figure(figsize=(8.0, 8.0), facecolor=_BACKGROUND)
    ax = fig.add_subplot(1, 1, 1, projection="3d")
    ax.set_facecolor(_BACKGROUND)
    ax.set_axis_off()

    drawn = 0
    for pts, color in _layers(result, view):
        if len(pts) == 0:
            continue
        ax.scatter(pts[:, 0], pts[:, 1], pts[:, 2], s=_POINT_SIZE, c=color,
                   depthshade=False, linewidths=0)
        drawn += len(pts)

    ax.set_xlim(-extent, extent)
    ax.set_ylim(-extent, extent)
    ax.set_zlim(-extent, extent)
    ax.set_box_aspect([1, 1, 1])
    ax.view_init(elev=20, azim=35)

    fig.savefig(out_path, dpi=150, bbox_inches="tight", facecolor=fig.get_facecolor())
    plt.close(fig)
    logger.info("Saved %d point(s) (%s view) to %s", drawn, view, out_path)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Sample the carved-sphere CSG model and render its points to a PNG."
    )
    parser.add_argument("--out", default="carved_sphere.png", help="Output PNG path")
    parser.add_argument("--view", choices=("model", "surfaces", "cloud"), default="model")
    parser.add_argument("--size", type=float, default=8.0, help="Model size (sphere radius)")
    parser.add_argument("--density", type=float, default=DEFAULT_CONFIG.density,
                        help="Points per unit volume (default %(default)s)")
    parser.add_argument("--mode", choices=("volume", "surface"), default="volume",
                        help="Candidate generation mode")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--workers", type=int, default=1)
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()

    setup_logging(getattr(logging, args.log_level.upper(), logging.INFO))

    extent = 1.25 * args.size
    config = replace(
        DEFAULT_CONFIG,
        density=args.density,
        bounds=((-extent, extent),) * 3,
        sampling=args.mode,
        surface_extent=extent,
        seed=args.seed,
        workers=args.workers,
    )

    model, tree = CarvedSphere(model_size=args.size)
    result = model.sample(tree, config)
    render(result, args.view, args.out, extent)


if __name__ == "__main__":
    main()

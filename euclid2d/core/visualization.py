"""Debug drawing of lines and of the relation between two lines."""
from __future__ import annotations

import os as _os
from typing import Optional, Sequence

import matplotlib as _mpl
# Ensure a non-interactive backend in headless environments before importing pyplot
if not _os.environ.get('MPLBACKEND'):
    _mpl.use('Agg')
import matplotlib.pyplot as plt
import numpy as np

from .config import DEFAULT_TOLERANCES, LineTolerances
from .line2d import Line2D
from .logging_utils import get_logger
from .relations import closest_points, try_get_overlap, try_intersect
from .vectorized import lines_to_array
from .xline2d import XKind, classify

logger = get_logger('euclid2d.viz')

_COLOR_A = (0.15, 0.35, 0.8)
_COLOR_B = (0.85, 0.2, 0.2)


def plot_lines(
    lines: Sequence[Line2D],
    outname="lines.png",
    labels: Optional[Sequence[str]] = None,
    highlight_intersections=True,
):
    """Plot lines with their start points and, optionally, all crossings.

    Args:
        lines: Line2D objects to draw
        outname: output image path
        labels: optional text per line, drawn at the line's middle
        highlight_intersections: if True, mark every pairwise crossing in red
    """
    arr = lines_to_array(lines)
    plt.figure(figsize=(6, 6))
    for i, row in enumerate(arr):
        plt.plot(row[[0, 2]], row[[1, 3]], color='black', linewidth=1.2)
        if labels is not None and i < len(labels):
            plt.text((row[0] + row[2]) * 0.5, (row[1] + row[3]) * 0.5, str(labels[i]), fontsize=8)
    if arr.size:
        plt.scatter(arr[:, 0], arr[:, 1], s=8, color='black')
    n_cross = 0
    if highlight_intersections:
        pts = []
        for i in range(len(lines)):
            for j in range(i + 1, len(lines)):
                p = try_intersect(lines[i], lines[j])
                if p is not None:
                    pts.append(p.as_tuple())
        n_cross = len(pts)
        if pts:
            xy = np.array(pts)
            plt.scatter(xy[:, 0], xy[:, 1], s=24, color='red', zorder=3)
        plt.title(f'{len(lines)} lines, {n_cross} crossings')
    plt.gca().set_aspect('equal')
    plt.savefig(outname, dpi=150)
    plt.close()
    logger.info('Wrote %s (%d lines, %d crossings)', outname, len(lines), n_cross)


def _draw_ray(ln: Line2D, color):
    if ln.is_tiny(DEFAULT_TOLERANCES.length):
        return
    ray = ln.extend_rel(0.5, 0.5)
    plt.plot([ray.from_x, ray.to_x], [ray.from_y, ray.to_y], color=color, linestyle='--', linewidth=0.6)


def plot_relation(line_a: Line2D, line_b: Line2D, outname="relation.png",
                  tol: LineTolerances = DEFAULT_TOLERANCES):
    """Draw two lines, their ray extensions, closest points and overlap.

    The figure title names the classification of the pair.
    """
    x = classify(line_a, line_b, tol)
    plt.figure(figsize=(6, 6))
    for ln, color, name in ((line_a, _COLOR_A, 'A'), (line_b, _COLOR_B, 'B')):
        _draw_ray(ln, color)
        plt.plot([ln.from_x, ln.to_x], [ln.from_y, ln.to_y], color=color, linewidth=2.0, label=name)
        plt.scatter([ln.from_x], [ln.from_y], s=16, color=color)
    pa, pb = closest_points(line_a, line_b, tol)
    plt.plot([pa.x, pb.x], [pa.y, pb.y], color='gray', linestyle=':', marker='o', markersize=4)
    if x.kind == XKind.INTERSECT:
        p = line_a.evaluate_at(x.t)
        plt.scatter([p.x], [p.y], s=40, color='green', zorder=3)
        title = f'{x.kind.name} t={x.t:.4g} u={x.u:.4g}'
    elif x.kind == XKind.PARALLEL:
        overlap = try_get_overlap(line_a, line_b, tol)
        if overlap is not None:
            seg = line_a.segment(*overlap)
            plt.plot([seg.from_x, seg.to_x], [seg.from_y, seg.to_y], color='green', linewidth=4.0, alpha=0.5)
            title = f'{x.kind.name} overlap {overlap[0]:.4g}..{overlap[1]:.4g}'
        else:
            title = f'{x.kind.name} distance {pa.distance_to(pb):.4g}'
    else:
        title = f'{x.kind.name} distance {pa.distance_to(pb):.4g}'
    plt.title(title)
    plt.legend(loc='best', fontsize=8)
    plt.gca().set_aspect('equal')
    plt.savefig(outname, dpi=150)
    plt.close()
    logger.info('Wrote %s: %s', outname, title)
    return x


__all__ = ['plot_lines', 'plot_relation']

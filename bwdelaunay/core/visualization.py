"""Static rendering of a point set and its triangulation.

Draws what an interactive front end shows each frame (points, triangle
edges, optionally circumcircles) into an image file.
"""
from __future__ import annotations

import os as _os
import matplotlib as _mpl
# Ensure a non-interactive backend in headless environments before importing pyplot
if not _os.environ.get('MPLBACKEND'):
    _mpl.use('Agg')
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection
from matplotlib.patches import Circle as _CirclePatch

from .config import PlotConfig
from .geometry import as_points
from .logging_utils import get_logger
from .triangulation import Triangulation

logger = get_logger('bwdelaunay.viz')

__all__ = ['plot_triangulation']


def plot_triangulation(points, result: Triangulation, outname: str = 'delaunay.png',
                       config: PlotConfig = None) -> str:
    """Plot input points, triangulation edges and optional circumcircles.

    Args:
        points: the input point sequence (drawn even when the result is empty)
        result: Triangulation to draw
        outname: output image path
        config: PlotConfig; defaults apply when omitted

    Returns the output path.
    """
    cfg = config or PlotConfig()
    pts = np.array([p.as_tuple() for p in as_points(points)], dtype=np.float64).reshape(-1, 2)

    fig, ax = plt.subplots(figsize=cfg.figsize)
    if result.edges:
        segs = [((float(e.p0.x), float(e.p0.y)), (float(e.p1.x), float(e.p1.y))) for e in result.unique_edges()]
        ax.add_collection(LineCollection(segs, colors=[cfg.edge_color], linewidths=cfg.edge_width))
    if cfg.show_circumcircles:
        skipped = 0
        for tri in result.triangles:
            c = tri.circle
            if not c.is_finite:
                skipped += 1
                continue
            ax.add_patch(_CirclePatch((float(c.x), float(c.y)), float(np.sqrt(c.radius_sq)),
                                      fill=False, edgecolor=cfg.circle_color, linewidth=cfg.circle_width))
        if skipped:
            logger.debug("skipped %d non-finite circumcircle(s)", skipped)
    if pts.shape[0]:
        ax.scatter(pts[:, 0], pts[:, 1], s=cfg.point_size, color=cfg.point_color, zorder=3)
    ax.set_title(cfg.title or f"{len(result)} triangles, {pts.shape[0]} points")
    ax.set_aspect('equal')
    ax.autoscale_view()
    fig.savefig(outname, dpi=cfg.dpi)
    plt.close(fig)
    logger.debug("wrote %s", outname)
    return outname

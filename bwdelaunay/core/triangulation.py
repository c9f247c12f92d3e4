"""Bowyer-Watson Delaunay triangulation driver.

Incremental construction: a super-triangle enclosing every input point
seeds the mesh, each point is inserted by removing the triangles whose
circumcircle contains it and re-triangulating the resulting cavity, and
triangles touching the super-triangle corners are discarded at the end.

The driver is a pure function of its input: nothing is cached or reused
between calls.
"""
from __future__ import annotations

import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .constants import EPS, SUPER_TRIANGLE_MARGIN
from .geometry import Edge, Point, Triangle, as_points
from .logging_utils import get_logger
from .stats import TriangulationStats

logger = get_logger('bwdelaunay.triangulation')

__all__ = [
    'Triangulation',
    'triangulate',
    'bounding_box',
    'super_triangle',
    'boundary_edges',
]


@dataclass
class Triangulation:
    """Result of one triangulation call.

    ``edges`` is the concatenation of every triangle's (e0, e1, e2) in
    triangle order; an edge shared by two triangles appears twice.
    """
    triangles: List[Triangle] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.triangles)

    @property
    def is_empty(self) -> bool:
        return not self.triangles

    def unique_edges(self) -> List[Edge]:
        """Edges with duplicates removed, in first-seen order."""
        return list(dict.fromkeys(self.edges))

    def to_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return (points (N,2) float64, tris (M,3) int32).

        Vertices are numbered in the order they are first met while walking
        the triangles.
        """
        index: Dict[Point, int] = {}
        tris = []
        for tri in self.triangles:
            row = []
            for p in tri.vertices:
                if p not in index:
                    index[p] = len(index)
                row.append(index[p])
            tris.append(row)
        if not index:
            return np.empty((0, 2), dtype=np.float64), np.empty((0, 3), dtype=np.int32)
        pts = np.array([(float(p.x), float(p.y)) for p in index], dtype=np.float64)
        return pts, np.asarray(tris, dtype=np.int32)


def bounding_box(points: Sequence[Point]):
    """Axis-aligned bounding box as (xmin, ymin, xmax, ymax)."""
    xmin = xmax = points[0].x
    ymin = ymax = points[0].y
    for p in points:
        xmin = min(xmin, p.x)
        xmax = max(xmax, p.x)
        ymin = min(ymin, p.y)
        ymax = max(ymax, p.y)
    return xmin, ymin, xmax, ymax


def super_triangle(points: Sequence[Point]) -> Triangle:
    """Synthetic triangle enclosing ``points``.

    Corners sit SUPER_TRIANGLE_MARGIN * dmax from the bounding-box center.
    The margin is a heuristic that covers well-conditioned inputs.
    """
    xmin, ymin, xmax, ymax = bounding_box(points)
    dmax = max(xmax - xmin, ymax - ymin)
    midx = (xmin + xmax) / 2
    midy = (ymin + ymax) / 2
    scalar = type(points[0].x)
    margin = scalar(SUPER_TRIANGLE_MARGIN)
    return Triangle(
        Point(midx - margin * dmax, midy - dmax),
        Point(midx, midy + margin * dmax),
        Point(midx + margin * dmax, midy - dmax),
    )


def boundary_edges(edges: Sequence[Edge]) -> List[Edge]:
    """Keep only edges occurring exactly once, preserving order.

    Edges shared by two removed triangles are interior to the cavity; the
    ones left over form its boundary. A valid mesh never has an edge shared
    by more than two triangles.
    """
    counts = Counter(edges)
    return [e for e in edges if counts[e] == 1]


def triangulate(points, scalar=np.float64, stats: Optional[TriangulationStats] = None) -> Triangulation:
    """Delaunay triangulation of ``points``.

    Args:
        points: sequence of Point, sequence of (x, y) pairs, or (N,2) array.
            Processed in the given order.
        scalar: numpy floating type of the coordinates; integer or other
            non-floating types raise TypeError.
        stats: optional TriangulationStats filled in place.

    Returns:
        Triangulation; empty when fewer than 3 points are given.
    """
    pts = as_points(points, scalar)
    if stats is not None:
        stats.points = len(pts)
    if len(pts) < 3:
        logger.debug("triangulate: %d point(s), nothing to do", len(pts))
        return Triangulation()

    t0 = time.perf_counter()
    sup = super_triangle(pts)
    corners = sup.vertices
    triangles: List[Triangle] = [sup]

    for p in pts:
        bad_edges: List[Edge] = []
        kept: List[Triangle] = []
        n_bad = 0
        for tri in triangles:
            if tri.circle.contains(p, EPS):
                bad_edges.extend(tri.edges)
                n_bad += 1
            else:
                kept.append(tri)

        cavity = boundary_edges(bad_edges)
        for e in cavity:
            tri = Triangle(e.p0, e.p1, p)
            if not tri.circle.is_finite:
                logger.debug("degenerate circumcircle for %s", tri)
                if stats is not None:
                    stats.degenerate_circles += 1
            kept.append(tri)
        triangles = kept
        if stats is not None:
            stats.record_insertion(n_bad, len(cavity))

    result = Triangulation()
    for tri in triangles:
        if any(tri.has_vertex(c) for c in corners):
            continue
        result.triangles.append(tri)
        result.edges.extend(tri.edges)

    elapsed = time.perf_counter() - t0
    if stats is not None:
        stats.super_removed = len(triangles) - len(result.triangles)
        stats.triangles = len(result.triangles)
        stats.edges = len(result.edges)
        stats.time_total = elapsed
    logger.debug("triangulate: %d points -> %d triangles, %d edges in %.3f ms",
                 len(pts), len(result.triangles), len(result.edges), elapsed * 1000.0)
    return result

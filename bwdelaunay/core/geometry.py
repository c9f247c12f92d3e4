"""Geometry primitives for the Bowyer-Watson triangulation.

Scalar primitives (Point, Edge, Circle, Triangle) used by the incremental
driver, plus a few vectorized numpy helpers operating on the canonical
array form (points: (N,2) float64, tris: (M,3) int) used by diagnostics,
I/O and plotting.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

from .constants import EPS

__all__ = [
    'Point', 'Edge', 'Circle', 'Triangle',
    'circumcircle', 'floating_scalar', 'as_points',
    'circumcircles', 'triangles_signed_areas',
]


def floating_scalar(scalar=np.float64):
    """Resolve ``scalar`` to a numpy floating scalar type.

    Raises TypeError for integer, boolean, complex or non-numeric types; the
    triangulation is only defined over floating coordinates.
    """
    try:
        dt = np.dtype(scalar)
    except TypeError as exc:
        raise TypeError(f"unsupported scalar type {scalar!r}") from exc
    if not np.issubdtype(dt, np.floating):
        raise TypeError(f"scalar type must be floating point, got {dt.name}")
    return dt.type


@dataclass(frozen=True)
class Point:
    """2D coordinate. Equality is exact (no tolerance)."""
    x: float
    y: float

    @classmethod
    def of(cls, x, y, scalar=np.float64) -> 'Point':
        """Build a point casting both coordinates to ``scalar``."""
        scalar = floating_scalar(scalar)
        return cls(scalar(x), scalar(y))

    def dist_sq(self, other: 'Point') -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def as_tuple(self) -> Tuple[float, float]:
        return (float(self.x), float(self.y))


@dataclass(frozen=True, eq=False)
class Edge:
    """Undirected segment: (a, b) == (b, a)."""
    p0: Point
    p1: Point

    def __eq__(self, other):
        if not isinstance(other, Edge):
            return NotImplemented
        return ((self.p0 == other.p0 and self.p1 == other.p1) or
                (self.p0 == other.p1 and self.p1 == other.p0))

    def __hash__(self):
        return hash(frozenset((self.p0, self.p1)))


@dataclass(frozen=True)
class Circle:
    """Circle with a *squared* radius.

    ``radius_sq`` holds the squared distance from the center to the defining
    vertices; every comparison against it uses squared distances.
    """
    x: float
    y: float
    radius_sq: float

    @property
    def center(self) -> Point:
        return Point(self.x, self.y)

    @property
    def is_finite(self) -> bool:
        return bool(np.isfinite(self.x) and np.isfinite(self.y) and np.isfinite(self.radius_sq))

    def dist_sq(self, p: Point) -> float:
        dx = self.x - p.x
        dy = self.y - p.y
        return dx * dx + dy * dy

    def contains(self, p: Point, eps: float = EPS) -> bool:
        """True when ``p`` lies inside or on the circle within ``eps``.

        Non-finite circles never contain anything: comparisons with NaN are false.
        """
        with np.errstate(invalid='ignore', over='ignore'):
            return bool((self.dist_sq(p) - self.radius_sq) <= eps)


def circumcircle(p0: Point, p1: Point, p2: Point) -> Circle:
    """Circumcircle of three points.

    Collinear or coincident points give a zero denominator; the returned
    circle then holds inf/NaN values instead of raising.
    """
    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        ax = p1.x - p0.x
        ay = p1.y - p0.y
        bx = p2.x - p0.x
        by = p2.y - p0.y

        m = p1.x * p1.x - p0.x * p0.x + p1.y * p1.y - p0.y * p0.y
        u = p2.x * p2.x - p0.x * p0.x + p2.y * p2.y - p0.y * p0.y
        s = np.true_divide(1, 2 * (ax * by - ay * bx))

        cx = ((p2.y - p0.y) * m + (p0.y - p1.y) * u) * s
        cy = ((p0.x - p2.x) * m + (p1.x - p0.x) * u) * s

        dx = p0.x - cx
        dy = p0.y - cy
        return Circle(cx, cy, dx * dx + dy * dy)


@dataclass(frozen=True)
class Triangle:
    """Three vertices in fixed order with derived edges and circumcircle.

    Edges are e0 = p0-p1, e1 = p1-p2, e2 = p0-p2. The circumcircle is
    computed once here; triangles are never mutated.
    """
    p0: Point
    p1: Point
    p2: Point
    e0: Edge = field(init=False, repr=False, compare=False)
    e1: Edge = field(init=False, repr=False, compare=False)
    e2: Edge = field(init=False, repr=False, compare=False)
    circle: Circle = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'e0', Edge(self.p0, self.p1))
        object.__setattr__(self, 'e1', Edge(self.p1, self.p2))
        object.__setattr__(self, 'e2', Edge(self.p0, self.p2))
        object.__setattr__(self, 'circle', circumcircle(self.p0, self.p1, self.p2))

    @property
    def vertices(self) -> Tuple[Point, Point, Point]:
        return (self.p0, self.p1, self.p2)

    @property
    def edges(self) -> Tuple[Edge, Edge, Edge]:
        return (self.e0, self.e1, self.e2)

    def has_vertex(self, p: Point) -> bool:
        return self.p0 == p or self.p1 == p or self.p2 == p


def as_points(points, scalar=np.float64) -> List[Point]:
    """Convert Points, (x, y) pairs or an (N,2) array into Points of ``scalar`` type."""
    scalar = floating_scalar(scalar)
    if isinstance(points, np.ndarray):
        if points.size == 0:
            return []
        if points.ndim != 2 or points.shape[1] != 2:
            raise ValueError(f"points must be (N, 2), got shape {points.shape}")
        return [Point(scalar(x), scalar(y)) for x, y in points]
    out = []
    for p in points:
        if isinstance(p, Point):
            out.append(Point(scalar(p.x), scalar(p.y)))
        else:
            x, y = p
            out.append(Point(scalar(x), scalar(y)))
    return out


# ----------------------------------------------------------------------------
# Vectorized helpers on (points, tris) arrays
# ----------------------------------------------------------------------------

def circumcircles(points, tris):
    """Vectorized circumcircles for a batch of triangles.

    points: (N,2) float array
    tris:   (M,3) int array
    Returns: (centers (M,2), radius_sq (M,)); degenerate rows hold inf/NaN.
    """
    pts = np.asarray(points, dtype=np.float64)
    T = np.asarray(tris, dtype=np.int64)
    if T.size == 0:
        return np.empty((0, 2), dtype=float), np.empty((0,), dtype=float)
    p0 = pts[T[:, 0]]; p1 = pts[T[:, 1]]; p2 = pts[T[:, 2]]
    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        a = p1 - p0
        b = p2 - p0
        n0 = np.sum(p0 * p0, axis=1)
        m = np.sum(p1 * p1, axis=1) - n0
        u = np.sum(p2 * p2, axis=1) - n0
        s = 1.0 / (2.0 * (a[:, 0] * b[:, 1] - a[:, 1] * b[:, 0]))
        cx = ((p2[:, 1] - p0[:, 1]) * m + (p0[:, 1] - p1[:, 1]) * u) * s
        cy = ((p0[:, 0] - p2[:, 0]) * m + (p1[:, 0] - p0[:, 0]) * u) * s
        centers = np.column_stack([cx, cy])
        radius_sq = np.sum((p0 - centers) ** 2, axis=1)
    return centers, radius_sq


def triangles_signed_areas(points, tris):
    """Vectorized signed area for a batch of triangles.

    points: (N,2) float array
    tris:   (M,3) int array
    Returns: (M,) float64 array of signed areas.
    """
    pts = np.asarray(points, dtype=np.float64)
    T = np.asarray(tris, dtype=np.int64)
    if T.size == 0:
        return np.empty((0,), dtype=float)
    p0 = pts[T[:, 0]]; p1 = pts[T[:, 1]]; p2 = pts[T[:, 2]]
    d1 = p1 - p0
    d2 = p2 - p0
    return 0.5 * (d1[:, 0] * d2[:, 1] - d1[:, 1] * d2[:, 0])

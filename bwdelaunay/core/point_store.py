"""Owned, mutable point collection for interactive front ends.

The triangulation driver is stateless; a front end that edits points
(add on click, clear, remove the point nearest to a cursor) keeps them in a
PointStore and hands an immutable snapshot to each triangulation call.
"""
from __future__ import annotations

import threading
from typing import Iterator, List, Optional, Tuple

from .config import PointStoreConfig
from .geometry import Point, floating_scalar
from .logging_utils import get_logger
from .stats import TriangulationStats
from .triangulation import Triangulation, triangulate

logger = get_logger('bwdelaunay.point_store')

__all__ = ['PointStore']


class PointStore:
    """Thread-safe list of points with viewer-style editing operations."""

    def __init__(self, points=(), config: Optional[PointStoreConfig] = None):
        self.config = config or PointStoreConfig()
        self._scalar = floating_scalar(self.config.scalar)
        self._lock = threading.RLock()
        self._points: List[Point] = []
        for p in points:
            if isinstance(p, Point):
                self.add(p.x, p.y)
            else:
                self.add(p[0], p[1])

    def __len__(self) -> int:
        with self._lock:
            return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.snapshot())

    def add(self, x, y) -> Point:
        p = Point.of(x, y, self._scalar)
        with self._lock:
            self._points.append(p)
        return p

    def clear(self) -> None:
        with self._lock:
            n = len(self._points)
            self._points.clear()
        logger.debug("cleared %d point(s)", n)

    def nearest(self, x, y) -> Optional[Tuple[int, float]]:
        """Index and squared distance of the closest point within the pick radius."""
        q = Point.of(x, y, self._scalar)
        best = None
        best_dist = self.config.pick_radius_sq
        with self._lock:
            for i, p in enumerate(self._points):
                d = p.dist_sq(q)
                if d < best_dist:
                    best = i
                    best_dist = d
        if best is None:
            return None
        return best, float(best_dist)

    def remove_nearest(self, x, y) -> Optional[Point]:
        """Remove the closest point strictly within the pick radius; None if there is none."""
        with self._lock:
            found = self.nearest(x, y)
            if found is None:
                return None
            return self._points.pop(found[0])

    def snapshot(self) -> Tuple[Point, ...]:
        with self._lock:
            return tuple(self._points)

    def triangulate(self, stats: Optional[TriangulationStats] = None) -> Triangulation:
        return triangulate(self.snapshot(), scalar=self._scalar, stats=stats)

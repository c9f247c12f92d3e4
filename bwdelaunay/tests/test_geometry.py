"""Unit tests for the geometric primitives."""
import dataclasses
import math
import warnings

import numpy as np
import pytest

from bwdelaunay.core.geometry import (
    Circle, Edge, Point, Triangle, as_points, circumcircle, circumcircles,
    floating_scalar, triangles_signed_areas,
)


class TestPoint:
    def test_of_casts_to_scalar(self):
        p = Point.of(1, 2)
        assert isinstance(p.x, np.float64) and isinstance(p.y, np.float64)
        q = Point.of(1, 2, np.float32)
        assert isinstance(q.x, np.float32)

    def test_equality_is_exact(self):
        assert Point(0.5, 0.25) == Point(0.5, 0.25)
        assert Point(0.1 + 0.2, 0.0) != Point(0.3, 0.0)

    def test_hashable_and_frozen(self):
        p = Point(1.0, 2.0)
        assert len({p, Point(1.0, 2.0)}) == 1
        with pytest.raises(dataclasses.FrozenInstanceError):
            p.x = 3.0

    def test_rejects_non_floating_scalar(self):
        with pytest.raises(TypeError):
            Point.of(1, 2, np.int32)
        with pytest.raises(TypeError):
            Point.of(1, 2, int)

    def test_dist_sq(self):
        assert Point(0.0, 0.0).dist_sq(Point(3.0, 4.0)) == 25.0


def test_floating_scalar_resolution():
    assert floating_scalar(float) is np.float64
    assert floating_scalar('float32') is np.float32
    for bad in (int, bool, complex, np.int64, 'not-a-type'):
        with pytest.raises(TypeError):
            floating_scalar(bad)


class TestEdge:
    def test_order_insensitive_equality(self):
        a, b, c = Point(0.0, 0.0), Point(1.0, 0.0), Point(0.0, 1.0)
        assert Edge(a, b) == Edge(b, a)
        assert hash(Edge(a, b)) == hash(Edge(b, a))
        assert Edge(a, b) != Edge(a, c)

    def test_not_equal_to_other_types(self):
        e = Edge(Point(0.0, 0.0), Point(1.0, 1.0))
        assert e != (Point(0.0, 0.0), Point(1.0, 1.0))


class TestCircumcircle:
    def test_right_triangle(self):
        c = circumcircle(Point(0.0, 0.0), Point(1.0, 0.0), Point(0.0, 1.0))
        assert abs(c.x - 0.5) < 1e-12
        assert abs(c.y - 0.5) < 1e-12
        # squared radius, not linear
        assert abs(c.radius_sq - 0.5) < 1e-12

    def test_equilateral(self):
        h = 10 * math.sqrt(3) / 2
        c = circumcircle(Point(0.0, 0.0), Point(10.0, 0.0), Point(5.0, h))
        assert abs(c.x - 5.0) < 1e-9
        assert abs(c.radius_sq - 100.0 / 3.0) < 1e-9

    def test_passes_through_vertices(self):
        rng = np.random.default_rng(3)
        for _ in range(20):
            a, b, d = (Point.of(*xy) for xy in rng.uniform(-50, 50, size=(3, 2)))
            c = circumcircle(a, b, d)
            for v in (a, b, d):
                assert abs(c.dist_sq(v) - c.radius_sq) <= 1e-8 * max(1.0, c.radius_sq)

    def test_collinear_is_non_finite(self):
        c = circumcircle(Point.of(0, 0), Point.of(1, 0), Point.of(2, 0))
        assert not c.is_finite
        assert not c.contains(Point.of(1, 0))
        assert not c.contains(Point.of(100, 100))

    def test_degenerate_contains_is_silent(self):
        c = Circle(np.float64(np.inf), np.float64(np.nan), np.float64(np.inf))
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert not c.contains(Point(1.0, 2.0))
            assert not Circle(np.float64(np.inf), np.float64(0.0), np.float64(np.inf)).contains(Point(0.0, 0.0))

    def test_collinear_plain_floats_do_not_raise(self):
        c = circumcircle(Point(0.0, 0.0), Point(1.0, 1.0), Point(2.0, 2.0))
        assert not c.is_finite

    def test_contains_uses_squared_distance(self):
        c = Circle(0.0, 0.0, 4.0)      # radius 2
        assert c.contains(Point(1.9, 0.0))
        assert c.contains(Point(2.0, 0.0))
        assert not c.contains(Point(2.1, 0.0))
        assert c.center == Point(0.0, 0.0)


class TestTriangle:
    def test_derived_edges_and_circle(self):
        a, b, c = Point(0.0, 0.0), Point(4.0, 0.0), Point(0.0, 3.0)
        t = Triangle(a, b, c)
        assert t.e0 == Edge(a, b)
        assert t.e1 == Edge(b, c)
        assert t.e2 == Edge(a, c)
        assert t.edges == (t.e0, t.e1, t.e2)
        assert t.vertices == (a, b, c)
        assert abs(t.circle.x - 2.0) < 1e-12 and abs(t.circle.y - 1.5) < 1e-12
        assert abs(t.circle.radius_sq - 6.25) < 1e-12

    def test_immutable(self):
        t = Triangle(Point(0.0, 0.0), Point(1.0, 0.0), Point(0.0, 1.0))
        with pytest.raises(dataclasses.FrozenInstanceError):
            t.p0 = Point(5.0, 5.0)

    def test_has_vertex_exact(self):
        t = Triangle(Point(0.0, 0.0), Point(1.0, 0.0), Point(0.0, 1.0))
        assert t.has_vertex(Point(1.0, 0.0))
        assert not t.has_vertex(Point(1.0 + 1e-15, 0.0))

    def test_structural_equality(self):
        a, b, c = Point(0.0, 0.0), Point(1.0, 0.0), Point(0.0, 1.0)
        assert Triangle(a, b, c) == Triangle(a, b, c)
        assert Triangle(a, b, c) != Triangle(b, a, c)


class TestAsPoints:
    def test_accepts_pairs_points_and_arrays(self):
        src = [(0, 0), Point(1.0, 2.0)]
        pts = as_points(src)
        assert pts == [Point(0.0, 0.0), Point(1.0, 2.0)]
        arr = as_points(np.array([[0.0, 1.0], [2.0, 3.0]]))
        assert arr == [Point(0.0, 1.0), Point(2.0, 3.0)]

    def test_bad_array_shape(self):
        with pytest.raises(ValueError):
            as_points(np.zeros((3, 3)))

    def test_empty(self):
        assert as_points([]) == []
        assert as_points(np.empty((0, 2))) == []


def test_vectorized_circumcircles_match_scalar():
    rng = np.random.default_rng(7)
    pts = rng.uniform(0, 100, size=(12, 2))
    tris = np.array([[0, 1, 2], [3, 4, 5], [6, 7, 8], [9, 10, 11]])
    centers, rsq = circumcircles(pts, tris)
    for k, t in enumerate(tris):
        c = circumcircle(*(Point.of(*pts[i]) for i in t))
        assert abs(centers[k, 0] - c.x) < 1e-9
        assert abs(centers[k, 1] - c.y) < 1e-9
        assert abs(rsq[k] - c.radius_sq) < 1e-6


def test_vectorized_circumcircles_degenerate_and_empty():
    pts = np.array([[0.0, 0.0], [1.0, 0.0], [2.0, 0.0]])
    centers, rsq = circumcircles(pts, np.array([[0, 1, 2]]))
    assert not np.isfinite(rsq[0])
    centers, rsq = circumcircles(pts, np.empty((0, 3), dtype=int))
    assert centers.shape == (0, 2) and rsq.shape == (0,)


def test_signed_areas():
    pts = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]])
    assert triangles_signed_areas(pts, [[0, 1, 2]])[0] == pytest.approx(0.5)
    assert triangles_signed_areas(pts, [[0, 2, 1]])[0] == pytest.approx(-0.5)

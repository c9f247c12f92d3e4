"""Verification helpers for triangulation results.

These checks are not used by the driver itself; they exist to validate a
result after the fact (tests, CLI ``--check``, debugging sessions).
"""
from __future__ import annotations

from typing import List, Set, Tuple, FrozenSet

import numpy as np
from scipy.spatial import Delaunay

from .constants import EPS, EPS_AREA, EPS_RESIDUAL
from .geometry import as_points, circumcircles, floating_scalar, triangles_signed_areas
from .logging_utils import get_logger
from .triangulation import Triangulation, super_triangle

logger = get_logger('bwdelaunay.diagnostics')

__all__ = [
    'circle_arrays',
    'circle_residuals',
    'circle_mismatch',
    'delaunay_violations',
    'check_triangulation',
    'triangle_keys',
    'scipy_reference_keys',
    'compare_with_scipy',
]

TriKey = FrozenSet[Tuple[float, float]]

# upper bound on (triangles x points) entries held at once by delaunay_violations
_CHUNK_ENTRIES = 1 << 20


def circle_arrays(result: Triangulation) -> Tuple[np.ndarray, np.ndarray]:
    """Stored circumcircles as (centers (M,2), radius_sq (M,)) float64 arrays."""
    if result.is_empty:
        return np.empty((0, 2), dtype=np.float64), np.empty((0,), dtype=np.float64)
    centers = np.array([(t.circle.x, t.circle.y) for t in result.triangles], dtype=np.float64)
    rsq = np.array([t.circle.radius_sq for t in result.triangles], dtype=np.float64)
    return centers, rsq


def circle_residuals(result: Triangulation) -> np.ndarray:
    """Per-triangle max |dist_sq(vertex, center) - radius_sq|, relative to max(radius_sq, 1).

    NaN for triangles whose circle is not finite.
    """
    pts, tris = result.to_arrays()
    centers, rsq = circle_arrays(result)
    if tris.size == 0:
        return np.empty((0,), dtype=np.float64)
    with np.errstate(invalid='ignore', over='ignore'):
        verts = pts[tris]                                   # (M,3,2)
        d = np.sum((verts - centers[:, None, :]) ** 2, axis=2)  # (M,3)
        res = np.max(np.abs(d - rsq[:, None]), axis=1) / np.maximum(rsq, 1.0)
    res[~np.isfinite(rsq)] = np.nan
    return res


def delaunay_violations(points, result: Triangulation, eps: float = EPS, scalar=np.float64) -> List[Tuple[int, int, float]]:
    """List (triangle index, point index, dist_sq - radius_sq) with value <= -eps.

    Points that are a vertex of the triangle (exact equality) are skipped;
    triangles with a non-finite circle never report violations here.
    """
    P = np.array([p.as_tuple() for p in as_points(points, scalar)], dtype=np.float64).reshape(-1, 2)
    pts, tris = result.to_arrays()
    if tris.size == 0 or P.size == 0:
        return []
    centers, rsq = circle_arrays(result)
    verts = pts[tris]                                                    # (M,3,2)
    step = max(1, _CHUNK_ENTRIES // P.shape[0])
    out: List[Tuple[int, int, float]] = []
    for lo in range(0, tris.shape[0], step):
        hi = lo + step
        v = verts[lo:hi]
        is_vertex = np.any(np.all(v[:, :, None, :] == P[None, None, :, :], axis=3), axis=1)  # (m,N)
        with np.errstate(invalid='ignore', over='ignore'):
            dist = np.sum((P[None, :, :] - centers[lo:hi, None, :]) ** 2, axis=2)  # (m,N)
            margin = dist - rsq[lo:hi, None]
            bad = (margin <= -eps) & ~is_vertex
        ti, pi = np.nonzero(bad)
        out.extend((lo + int(t), int(p), float(margin[t, p])) for t, p in zip(ti, pi))
    return out


def circle_mismatch(result: Triangulation) -> np.ndarray:
    """Per-triangle relative difference between the stored radius_sq and the
    one recomputed from the vertex arrays with ``circumcircles``.

    0 where both are non-finite, inf where only one of them is.
    """
    pts, tris = result.to_arrays()
    if tris.size == 0:
        return np.empty((0,), dtype=np.float64)
    _, stored = circle_arrays(result)
    _, fresh = circumcircles(pts, tris)
    with np.errstate(invalid='ignore', over='ignore'):
        diff = np.abs(stored - fresh) / np.maximum(np.abs(fresh), 1.0)
    ok_s = np.isfinite(stored)
    ok_f = np.isfinite(fresh)
    diff[~ok_s & ~ok_f] = 0.0
    diff[ok_s != ok_f] = np.inf
    return diff


def check_triangulation(points, result: Triangulation, eps: float = EPS,
                        reject_degenerate: bool = False, verbose: bool = False,
                        scalar=np.float64):
    """Validate a result against the invariants of the construction.

    Returns (ok, msgs). Checks: edge list is the per-triangle concatenation,
    every circle is finite, passes through its vertices and agrees with a
    fresh vectorized recomputation, no super-triangle corner survives, and the (eps-relaxed) empty-circle property. Near-zero
    area triangles are reported, and fail the check only with
    ``reject_degenerate``.
    """
    msgs: List[str] = []
    ok = True
    pts_in = as_points(points, scalar)

    if len(result.edges) != 3 * len(result.triangles):
        msgs.append(f"Edge count {len(result.edges)} != 3 * {len(result.triangles)} triangles.")
        ok = False
    else:
        for i, tri in enumerate(result.triangles):
            if list(tri.edges) != result.edges[3 * i:3 * i + 3]:
                msgs.append(f"Edges of triangle {i} are out of order in the edge list.")
                ok = False
                break

    if len(pts_in) < 3:
        if not result.is_empty:
            msgs.append("Non-empty result for fewer than 3 points.")
            ok = False
        return ok, msgs

    corners = super_triangle(pts_in).vertices
    for i, tri in enumerate(result.triangles):
        if any(tri.has_vertex(c) for c in corners):
            msgs.append(f"Triangle {i} keeps a super-triangle corner.")
            ok = False

    residuals = circle_residuals(result)
    nonfinite = np.nonzero(~np.isfinite(residuals))[0]
    for i in nonfinite[:50]:
        msgs.append(f"Triangle {int(i)} has a non-finite circumcircle.")
    if nonfinite.size:
        ok = False
    off = np.nonzero(residuals > EPS_RESIDUAL)[0]
    for i in off[:50]:
        msgs.append(f"Triangle {int(i)} circle residual {residuals[i]:.3e}.")
    if off.size:
        ok = False

    # stored circles are computed in the result's scalar type
    rtol = float(np.sqrt(np.finfo(floating_scalar(scalar)).eps))
    stale = np.nonzero(circle_mismatch(result) > rtol)[0]
    for i in stale[:50]:
        msgs.append(f"Triangle {int(i)} stored circumcircle does not match its vertices.")
    if stale.size:
        ok = False

    pts, tris = result.to_arrays()
    if tris.size:
        areas = np.abs(triangles_signed_areas(pts, tris))
        small = np.nonzero(areas < EPS_AREA)[0]
        for i in small[:50]:
            msgs.append(f"Triangle {int(i)} has near-zero area ({areas[i]:.3e}).")
        if small.size and reject_degenerate:
            ok = False

    violations = delaunay_violations(pts_in, result, eps, scalar)
    for t, p, margin in violations[:50]:
        msgs.append(f"Point {p} lies inside circumcircle of triangle {t} (margin {margin:.3e}).")
    if violations:
        ok = False

    if verbose:
        for m in msgs:
            logger.info(m)
    return ok, msgs


def triangle_keys(result: Triangulation) -> Set[TriKey]:
    """Order-free identity of each triangle: frozenset of vertex coordinates."""
    return {frozenset(p.as_tuple() for p in t.vertices) for t in result.triangles}


def scipy_reference_keys(points) -> Set[TriKey]:
    """Triangles of scipy's (Qhull) Delaunay triangulation, keyed like triangle_keys()."""
    P = np.array([p.as_tuple() for p in as_points(points)], dtype=np.float64).reshape(-1, 2)
    if P.shape[0] < 3:
        return set()
    tri = Delaunay(P)
    return {frozenset(tuple(map(float, P[i])) for i in s) for s in tri.simplices}


def compare_with_scipy(points, result: Triangulation) -> Tuple[Set[TriKey], Set[TriKey]]:
    """Return (missing, extra) triangles of ``result`` relative to scipy.

    Only meaningful for points in general position (no four co-circular
    points), where the Delaunay triangulation is unique.
    """
    ours = triangle_keys(result)
    ref = scipy_reference_keys(points)
    missing = ref - ours
    extra = ours - ref
    if missing or extra:
        logger.debug("compare_with_scipy: %d missing, %d extra", len(missing), len(extra))
    return missing, extra

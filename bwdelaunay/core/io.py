"""Lightweight file I/O for point sets and triangulation results.

- read_points / write_points: plain-text ``x y`` (or ``x,y``) rows
- write_vtk: legacy VTK unstructured grid for ParaView/VisIt

Results are exported through their canonical array form
(``Triangulation.to_arrays()``): points (N, 2) float64, triangles (M, 3) int32.
"""
from __future__ import annotations

import warnings
from typing import Dict, List, Optional

import numpy as np

from .geometry import Point, as_points
from .triangulation import Triangulation


def read_points(filepath: str, scalar=np.float64) -> List[Point]:
    """Read 2D points from a text file.

    One point per line, coordinates separated by whitespace or a comma.
    Blank lines and ``#`` comments are skipped.

    Raises
    ------
    FileNotFoundError
        If the file doesn't exist
    ValueError
        If a row does not hold exactly two numbers, or no point is found
    """
    rows = []
    with open(filepath, 'r') as f:
        for lineno, line in enumerate(f, start=1):
            text = line.split('#', 1)[0].strip()
            if not text:
                continue
            fields = text.replace(',', ' ').split()
            if len(fields) != 2:
                raise ValueError(f"{filepath}:{lineno}: expected 2 columns, got {len(fields)}")
            try:
                rows.append((float(fields[0]), float(fields[1])))
            except ValueError as exc:
                raise ValueError(f"{filepath}:{lineno}: {exc}") from exc
    if not rows:
        raise ValueError(f"No points found in {filepath}")
    return as_points(rows, scalar)


def write_points(filepath: str, points) -> None:
    """Write points as ``x y`` rows with full float64 precision."""
    with open(filepath, 'w') as f:
        for p in as_points(points):
            f.write(f"{float(p.x):.17g} {float(p.y):.17g}\n")


def write_vtk(filepath: str,
              result: Triangulation,
              cell_data: Optional[Dict[str, np.ndarray]] = None,
              title: str = "bwdelaunay triangulation") -> None:
    """Write a triangulation to legacy VTK format (ASCII).

    Parameters
    ----------
    filepath : str
        Output .vtk file path
    result : Triangulation
        Triangles to export; vertices are numbered as in ``to_arrays()``
    cell_data : dict, optional
        Per-triangle scalar arrays of shape (M,). A ``radius_sq`` field with
        the squared circumradius is always written.
    title : str
        Dataset title line

    Examples
    --------
    >>> res = triangulate(points)
    >>> write_vtk('mesh.vtk', res)
    """
    points, triangles = result.to_arrays()
    num_points = len(points)
    num_triangles = len(triangles)
    fields: Dict[str, np.ndarray] = {}
    if num_triangles:
        fields['radius_sq'] = np.array([float(t.circle.radius_sq) for t in result.triangles])
    for name, data in (cell_data or {}).items():
        data = np.asarray(data, dtype=np.float64)
        if data.shape != (num_triangles,):
            warnings.warn(f"Skipping cell_data['{name}'] with unsupported shape {data.shape}")
            continue
        fields[name] = data

    with open(filepath, 'w') as f:
        f.write("# vtk DataFile Version 2.0\n")
        f.write(f"{title}\n")
        f.write("ASCII\n")
        f.write("DATASET UNSTRUCTURED_GRID\n")

        # z = 0 for every vertex
        f.write(f"POINTS {num_points} double\n")
        for x, y in points:
            f.write(f"{x:.16e} {y:.16e} {0.0:.16e}\n")

        f.write(f"\nCELLS {num_triangles} {num_triangles * 4}\n")
        for tri in triangles:
            f.write(f"3 {tri[0]} {tri[1]} {tri[2]}\n")

        # 5 = VTK_TRIANGLE
        f.write(f"\nCELL_TYPES {num_triangles}\n")
        for _ in range(num_triangles):
            f.write("5\n")

        if fields:
            f.write(f"\nCELL_DATA {num_triangles}\n")
            for name, data in fields.items():
                f.write(f"SCALARS {name} double 1\n")
                f.write("LOOKUP_TABLE default\n")
                for val in data:
                    f.write(f"{val:.16e}\n")


__all__ = ['read_points', 'write_points', 'write_vtk']

"""Triangulation run statistics and presentation utilities."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class TriangulationStats:
    points: int = 0
    insertions: int = 0
    bad_total: int = 0
    max_cavity: int = 0           # largest number of bad triangles removed by one insertion
    max_boundary: int = 0         # largest cavity boundary (edges) seen
    degenerate_circles: int = 0   # triangles created with a non-finite circumcircle
    super_removed: int = 0        # triangles dropped with the super-triangle
    triangles: int = 0
    edges: int = 0
    time_total: float = 0.0

    def record_insertion(self, n_bad: int, n_boundary: int) -> None:
        self.insertions += 1
        self.bad_total += n_bad
        if n_bad > self.max_cavity:
            self.max_cavity = n_bad
        if n_boundary > self.max_boundary:
            self.max_boundary = n_boundary

    def to_dict(self) -> Dict[str, Any]:
        return {
            'points': self.points,
            'insertions': self.insertions,
            'bad_total': self.bad_total,
            'bad_avg': (self.bad_total / self.insertions) if self.insertions else 0.0,
            'max_cavity': self.max_cavity,
            'max_boundary': self.max_boundary,
            'degenerate_circles': self.degenerate_circles,
            'super_removed': self.super_removed,
            'triangles': self.triangles,
            'edges': self.edges,
            'time_total': self.time_total,
            'time_per_point': (self.time_total / self.insertions) if self.insertions else 0.0,
        }


def format_stats_table(stats_dict) -> str:
    """Return a human readable two-column table of a stats dict."""
    if not stats_dict:
        return "<no stats>"
    rows = []
    for key, val in stats_dict.items():
        if isinstance(val, float):
            if key.startswith('time'):
                rows.append((key, f"{val * 1000.0:.3f} ms"))
            else:
                rows.append((key, f"{val:.3f}"))
        else:
            rows.append((key, str(val)))
    kw = max(len(k) for k, _ in rows)
    vw = max(len(v) for _, v in rows)
    lines = [f"{'stat'.ljust(kw)} {'value'.rjust(vw)}", "-" * (kw + vw + 1)]
    lines += [f"{k.ljust(kw)} {v.rjust(vw)}" for k, v in rows]
    return "\n".join(lines)


__all__ = ['TriangulationStats', 'format_stats_table']

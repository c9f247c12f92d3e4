"""Central numerical tolerances and construction constants.

Every threshold used by the triangulation lives here so it can be referenced
by name instead of scattering literals across modules.
"""
from __future__ import annotations

# In-circle tolerance: a point counts as inside a circumcircle when
# dist_sq - radius_sq <= EPS. Global, not configurable per call.
EPS: float = 1e-4

# Super-triangle corners sit SUPER_TRIANGLE_MARGIN * dmax away from the
# bounding-box center.
SUPER_TRIANGLE_MARGIN: float = 20.0

# Diagnostics only
EPS_AREA: float = 1e-12           # triangles below this absolute area are reported as degenerate
EPS_RESIDUAL: float = 1e-6        # relative tolerance for circumcircle residual checks

# Point store pick radius (squared distance, viewer units)
PICK_RADIUS_SQ: float = 100.0

__all__ = [
    'EPS',
    'SUPER_TRIANGLE_MARGIN',
    'EPS_AREA',
    'EPS_RESIDUAL',
    'PICK_RADIUS_SQ',
]

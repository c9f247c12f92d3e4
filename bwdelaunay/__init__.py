"""Public package API for bwdelaunay.

Bowyer-Watson Delaunay triangulation of 2D point sets. This facade gives a
flat import surface on top of ``bwdelaunay.core`` and defers the
dependency-rich modules (matplotlib plotting, scipy-backed diagnostics)
until first use so ``import bwdelaunay`` stays fast.

Example
-------
    from bwdelaunay import triangulate, Point

    res = triangulate([Point(0.0, 0.0), Point(1.0, 0.0), Point(0.0, 1.0)])
    len(res.triangles), len(res.edges)   # (1, 3)
"""
from importlib import import_module as _imp
import logging as _logging

from importlib.metadata import version as _pkg_version, PackageNotFoundError as _PkgNotFound

try:
    __version__ = _pkg_version("bwdelaunay")
except _PkgNotFound:  # pragma: no cover - running from a source tree
    __version__ = "0.0.0+dev"

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

# Eager light-weight submodules
_geom = _imp('bwdelaunay.core.geometry')
_const = _imp('bwdelaunay.core.constants')
_tri = _imp('bwdelaunay.core.triangulation')
_stats = _imp('bwdelaunay.core.stats')
_conf = _imp('bwdelaunay.core.config')
_store = _imp('bwdelaunay.core.point_store')
_io = _imp('bwdelaunay.core.io')
_log = _imp('bwdelaunay.core.logging_utils')


def _lazy_module(mod_name):
    class _ModuleProxy:
        __slots__ = ('_m',)

        def _load(self):
            try:
                return self._m
            except AttributeError:
                self._m = _imp(mod_name)
                return self._m

        def __getattr__(self, item):
            if item == "_m":
                raise AttributeError(item)
            return getattr(self._load(), item)

        def __dir__(self):
            return dir(self._load())
    return _ModuleProxy()


def _lazy_attr(mod_name, name):
    def _wrapper(*args, **kwargs):
        return getattr(_imp(mod_name), name)(*args, **kwargs)
    _wrapper.__name__ = name
    _wrapper.__doc__ = f"Lazily forwards to {mod_name}.{name}."
    return _wrapper


# Lazily loaded heavy / dependency-rich modules
visualization = _lazy_module('bwdelaunay.core.visualization')
diagnostics = _lazy_module('bwdelaunay.core.diagnostics')
plot_triangulation = _lazy_attr('bwdelaunay.core.visualization', 'plot_triangulation')
check_triangulation = _lazy_attr('bwdelaunay.core.diagnostics', 'check_triangulation')
compare_with_scipy = _lazy_attr('bwdelaunay.core.diagnostics', 'compare_with_scipy')

# Primitives
Point = _geom.Point
Edge = _geom.Edge
Circle = _geom.Circle
Triangle = _geom.Triangle
circumcircle = _geom.circumcircle

# Driver
Triangulation = _tri.Triangulation
triangulate = _tri.triangulate
super_triangle = _tri.super_triangle
bounding_box = _tri.bounding_box
boundary_edges = _tri.boundary_edges
TriangulationStats = _stats.TriangulationStats

# Tolerances
EPS = _const.EPS
SUPER_TRIANGLE_MARGIN = _const.SUPER_TRIANGLE_MARGIN

# Point store, configuration, I/O, logging
PointStore = _store.PointStore
PointStoreConfig = _conf.PointStoreConfig
PlotConfig = _conf.PlotConfig
read_points = _io.read_points
write_points = _io.write_points
write_vtk = _io.write_vtk
configure_logging = _log.configure_logging

# Namespace submodules
geometry = _geom
constants = _const
triangulation = _tri
stats = _stats
config = _conf
io = _io

__all__ = [
    '__version__',
    # primitives
    'Point', 'Edge', 'Circle', 'Triangle', 'circumcircle',
    # driver
    'Triangulation', 'triangulate', 'super_triangle', 'bounding_box', 'boundary_edges',
    'TriangulationStats',
    # tolerances
    'EPS', 'SUPER_TRIANGLE_MARGIN',
    # point store / config / io
    'PointStore', 'PointStoreConfig', 'PlotConfig',
    'read_points', 'write_points', 'write_vtk', 'configure_logging',
    # lazy helpers
    'plot_triangulation', 'check_triangulation', 'compare_with_scipy',
    # submodules / namespaces
    'geometry', 'constants', 'triangulation', 'stats', 'config', 'io',
    'visualization', 'diagnostics',
]

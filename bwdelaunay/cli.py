"""Command line entry point: triangulate a point file or a random point set."""
from __future__ import annotations

import argparse
import sys

import numpy as np

from .core.config import PlotConfig
from .core.io import read_points, write_points, write_vtk
from .core.logging_utils import configure_logging, get_logger
from .core.stats import TriangulationStats, format_stats_table
from .core.triangulation import triangulate

logger = get_logger('bwdelaunay.cli')

_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
_SCALARS = {'float32': np.float32, 'float64': np.float64}


def random_points(npts: int, seed: int = 42, extent: float = 600.0) -> np.ndarray:
    """Uniform random points in [0, extent)^2."""
    rng = np.random.default_rng(seed)
    return rng.uniform(0.0, extent, size=(npts, 2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='bwdelaunay', description='Bowyer-Watson Delaunay triangulation of 2D points.')
    parser.add_argument('--log-level', type=str, choices=_LEVELS, default='INFO', help='Logging verbosity (default: INFO)')
    src = parser.add_mutually_exclusive_group(required=True)
    src.add_argument('--input', type=str, default=None, help='Text file with one "x y" point per line')
    src.add_argument('--random', type=int, default=None, metavar='N', help='Triangulate N uniform random points')
    parser.add_argument('--seed', type=int, default=42, help='Seed for --random (default: 42)')
    parser.add_argument('--extent', type=float, default=600.0, help='Side of the square sampled by --random (default: 600)')
    parser.add_argument('--scalar', type=str, choices=sorted(_SCALARS), default='float64', help='Coordinate floating type')
    parser.add_argument('--save-points', type=str, default=None, help='Write the input points to this text file')
    parser.add_argument('--vtk', type=str, default=None, help='Write the triangulation as legacy VTK')
    parser.add_argument('--plot', type=str, default=None, help='Render points and edges to this image file')
    parser.add_argument('--circles', action='store_true', help='Draw circumcircles in --plot')
    parser.add_argument('--stats', action='store_true', help='Print the run statistics table')
    parser.add_argument('--check', action='store_true', help='Verify the result (empty-circle property, circle residuals)')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    scalar = _SCALARS[args.scalar]

    if args.input is not None:
        try:
            points = read_points(args.input, scalar)
        except (OSError, ValueError) as exc:
            logger.error("cannot read points: %s", exc)
            return 2
    else:
        if args.random < 0:
            logger.error("--random must be non-negative, got %d", args.random)
            return 2
        points = random_points(args.random, seed=args.seed, extent=args.extent)

    if args.save_points:
        write_points(args.save_points, points)

    stats = TriangulationStats()
    result = triangulate(points, scalar=scalar, stats=stats)
    logger.info("%d points -> %d triangles, %d edges (%.3f ms)",
                stats.points, stats.triangles, stats.edges, stats.time_total * 1000.0)

    status = 0
    if args.check:
        from .core.diagnostics import check_triangulation
        ok, msgs = check_triangulation(points, result, scalar=scalar)
        for m in msgs[:20]:
            logger.warning(m)
        if ok:
            logger.info("check passed")
        else:
            logger.error("check failed (%d issue(s))", len(msgs))
            status = 1
    if args.vtk:
        write_vtk(args.vtk, result)
        logger.info("wrote %s", args.vtk)
    if args.plot:
        from .core.visualization import plot_triangulation
        plot_triangulation(points, result, args.plot, PlotConfig(show_circumcircles=args.circles))
        logger.info("wrote %s", args.plot)
    if args.stats:
        print(format_stats_table(stats.to_dict()))
    return status


if __name__ == '__main__':  # pragma: no cover
    sys.exit(main())

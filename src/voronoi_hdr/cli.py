# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""
Command-line entry point.

Triangulates a sample of observations, selects its HDR with one of the
boundary-graph policies and reports the areas next to the theoretical HDR of
the generating normal distribution.
"""

import argparse
import sys
import time
from typing import List, Optional

import numpy as np

from . import geometry, hdr, io, utils, visualization
from .errors import VoronoiHDRError


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for ``voronoi-hdr``."""
    parser = argparse.ArgumentParser(
        description='Voronoi-based highest density region of a 2D sample'
    )
    parser.add_argument(
        '--input',
        type=str,
        default=None,
        help='Tab-separated observation file (default: generate a normal sample)'
    )
    parser.add_argument(
        '--save-observations',
        type=str,
        default=None,
        help='Write the generated sample to this file'
    )
    parser.add_argument(
        '-n', '--n-observations',
        type=int,
        default=utils.DEFAULT_N_OBSERVATIONS,
        help=f'Sample size when generating (default: {utils.DEFAULT_N_OBSERVATIONS})'
    )
    parser.add_argument(
        '--alpha',
        type=float,
        default=utils.DEFAULT_ALPHA,
        help=f'Fraction of observations left out of the HDR (default: {utils.DEFAULT_ALPHA})'
    )
    parser.add_argument(
        '--method',
        type=str,
        choices=['simple', 'top-down', 'bottom-up'],
        default=utils.DEFAULT_METHOD.replace('_', '-'),
        help='HDR selection policy (default: top-down)'
    )
    parser.add_argument('--mu-x', type=float, default=utils.DEFAULT_MU_X,
                        help=f'Mean along X (default: {utils.DEFAULT_MU_X})')
    parser.add_argument('--sigma-x', type=float, default=utils.DEFAULT_SIGMA_X,
                        help=f'Standard deviation along X (default: {utils.DEFAULT_SIGMA_X})')
    parser.add_argument('--mu-y', type=float, default=utils.DEFAULT_MU_Y,
                        help=f'Mean along Y (default: {utils.DEFAULT_MU_Y})')
    parser.add_argument('--sigma-y', type=float, default=utils.DEFAULT_SIGMA_Y,
                        help=f'Standard deviation along Y (default: {utils.DEFAULT_SIGMA_Y})')
    parser.add_argument(
        '--dependent',
        action='store_true',
        help='Shift Y by |X| when generating (non-elliptical HDR)'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed for the generated sample'
    )
    parser.add_argument(
        '--output',
        type=str,
        default=None,
        help='Save a Voronoi/HDR figure to this path'
    )
    parser.add_argument(
        '--show-delaunay',
        action='store_true',
        help='Draw the triangulation edges in the figure'
    )
    parser.add_argument(
        '--no-reference',
        action='store_true',
        help='Skip the theoretical HDR ellipse'
    )
    parser.add_argument(
        '--dpi',
        type=int,
        default=300,
        help='Figure DPI (default: 300)'
    )
    return parser


def _load_observations(args) -> np.ndarray:
    if args.input:
        print(f"Loading observations from: {args.input}")
        return io.read_observations(args.input)

    print(f"Generating {args.n_observations} observations "
          f"({'dependent' if args.dependent else 'independent'} normal)")
    rng = np.random.default_rng(args.seed)
    points = utils.sample_normal(
        args.n_observations,
        mu_x=args.mu_x, sigma_x=args.sigma_x,
        mu_y=args.mu_y, sigma_y=args.sigma_y,
        independent=not args.dependent,
        rng=rng
    )
    if args.save_observations:
        io.write_observations(points, args.save_observations)
        print(f"Observations saved to: {args.save_observations}")
    return points


def run(args) -> int:
    """Run one analysis from parsed arguments and print a summary."""
    points = _load_observations(args)

    start = time.perf_counter()
    tri = geometry.Triangulation(points)
    t_tri = time.perf_counter() - start
    print(f"Triangulation: {len(tri.vertices)} vertices, "
          f"{len(tri.triangles)} triangles ({t_tri:.3f} s)")

    start = time.perf_counter()
    tri.compute_voronoi()
    t_vor = time.perf_counter() - start
    print(f"Voronoi cells derived ({t_vor:.3f} s)")

    start = time.perf_counter()
    graph = hdr.compute_hdr(tri, alpha=args.alpha, method=args.method)
    t_hdr = time.perf_counter() - start
    print(f"HDR selected with {args.method}: {graph.observations_included()} of "
          f"{tri.n_observations} observations ({t_hdr:.3f} s)")

    print(f"\nTriangulation area: {tri.area():.6f}")
    print(f"HDR area:           {graph.get_area():.6f}")

    reference = None
    if not args.no_reference and not args.dependent and 0.0 < args.alpha < 1.0:
        reference = hdr.ReferenceRegion(args.mu_x, args.sigma_x, args.mu_y, args.sigma_y,
                                        args.alpha)
        coverage = reference.coverage(tri.vertices, tri.n_observations)
        print(f"Theoretical area:   {reference.area:.6f}")
        print(f"Coverage:           {coverage:.2f} %")

    if args.output:
        visualization.plot_voronoi_hdr(
            tri,
            output_path=args.output,
            show_delaunay=args.show_delaunay,
            reference=reference,
            title=f"{1.0 - args.alpha:.0%} HDR ({args.method})",
            dpi=args.dpi
        )
        print(f"\nFigure saved to: {args.output}")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for ``voronoi-hdr``."""
    args = build_parser().parse_args(argv)
    try:
        return run(args)
    except (OSError, ValueError, VoronoiHDRError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())

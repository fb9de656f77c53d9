# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""
Voronoi HDR Package

Estimates the highest density region (HDR) of a two-dimensional sample from
the Voronoi cells of its Delaunay triangulation. Small cells mark dense areas;
the HDR is grown or peeled cell by cell on the boundary of the region so that
it stays connected and hole-free.

Modules:
--------
- geometry: Bowyer-Watson triangulation, Voronoi cells and convex hulls
- hdr: Boundary-graph HDR selection and the theoretical normal reference
- io: Tab-separated observation files
- visualization: Voronoi/HDR figures
- utils: Defaults, sampling and helpers

Example Usage:
--------------
    import voronoi_hdr as vh

    points = vh.utils.sample_normal(10000, rng=np.random.default_rng(0))
    tri = vh.geometry.Triangulation(points)
    graph = vh.hdr.compute_hdr(tri, alpha=0.1, method='top_down')
    print(graph.get_area())
    # ... (see scripts/ directory for a complete example)
"""

__version__ = '0.1.0'
__author__ = 'Rami Ardati'

# Import key classes and functions for convenience
from . import errors
from . import geometry
from . import hdr
from . import io
from . import visualization
from . import utils

from .errors import (
    VoronoiHDRError,
    TopologyError,
    DegenerateGeometryError,
    InsufficientPointsError,
    NoEligibleCellError
)
from .geometry import Triangulation, compute_delaunay
from .hdr import BoundaryGraph, compute_hdr

__all__ = [
    'errors',
    'geometry',
    'hdr',
    'io',
    'visualization',
    'utils',
    'VoronoiHDRError',
    'TopologyError',
    'DegenerateGeometryError',
    'InsufficientPointsError',
    'NoEligibleCellError',
    'Triangulation',
    'compute_delaunay',
    'BoundaryGraph',
    'compute_hdr',
]

# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""Geometry module: triangulation entities, Bowyer-Watson engine and hulls."""

from .ordering import (
    clockwise_compare,
    sort_clockwise,
    shoelace_area
)

from .vertex import Vertex
from .edge import Edge
from .triangle import Triangle

from .triangulation import (
    Triangulation,
    compute_delaunay
)

from .boundaries import (
    compute_convex_hull,
    cell_polygon,
    hdr_cell_polygons
)

__all__ = [
    # Ordering
    'clockwise_compare',
    'sort_clockwise',
    'shoelace_area',
    # Entities
    'Vertex',
    'Edge',
    'Triangle',
    # Triangulation
    'Triangulation',
    'compute_delaunay',
    # Boundaries
    'compute_convex_hull',
    'cell_polygon',
    'hdr_cell_polygons',
]

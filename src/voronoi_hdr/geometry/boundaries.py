# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""
Convex hull and cell polygon utilities.

This module turns point sets and Voronoi cells into Shapely polygons, used for
the hull-area check of a triangulation and for drawing HDR cells.
"""

import numpy as np
from scipy.spatial import ConvexHull
from shapely.geometry import Polygon
from typing import List, Optional, Tuple

from .vertex import Vertex


def compute_convex_hull(points: np.ndarray) -> Tuple[ConvexHull, Polygon]:
    """
    Compute convex hull from point coordinates.

    :param points: (N, 2) array of point coordinates.
    :type points: np.ndarray
    :return: Tuple of (ConvexHull object, Shapely Polygon).
    :rtype: Tuple[ConvexHull, Polygon]
    """
    points = np.asarray(points, dtype=np.float64)
    hull = ConvexHull(points)
    hull_polygon = Polygon(points[hull.vertices])
    return hull, hull_polygon


def cell_polygon(vertex: Vertex) -> Optional[Polygon]:
    """
    Voronoi cell of a vertex as a Shapely polygon.

    Bound cells are open towards the hull, so their circumcenters do not
    describe the full cell; None is returned for them and for cells with
    fewer than three corners.

    :param vertex: Vertex whose cell has been derived.
    :type vertex: Vertex
    :return: Polygon of the cell, or None.
    :rtype: Optional[Polygon]
    """
    corners = vertex.voronoi_cell
    if vertex.bound or len(corners) < 3:
        return None
    return Polygon(corners)


def hdr_cell_polygons(vertices: List[Vertex]) -> List[Polygon]:
    """
    Polygons of all bounded cells currently in the HDR.

    :param vertices: Vertices with derived Voronoi cells.
    :type vertices: List[Vertex]
    :return: List of cell polygons.
    :rtype: List[Polygon]
    """
    polygons = []
    for vertex in vertices:
        if not vertex.in_hdr:
            continue
        poly = cell_polygon(vertex)
        if poly is not None:
            polygons.append(poly)
    return polygons

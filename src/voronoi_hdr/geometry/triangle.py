# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""
Triangle faces of the Delaunay triangulation.

A triangle keeps the ids and coordinates of its three vertices, the ids of its
incident edges, and a lazily computed circumcircle.
"""

import math
from typing import Optional, Set, Tuple

from ..errors import TopologyError

Point = Tuple[float, float]


class Triangle:
    """
    Face spanned by three vertices.

    Coordinates are copied at creation; vertices never move, so the cached
    circumcircle stays valid for the lifetime of the triangle.
    """

    def __init__(self, triangle_id: int, vertex_ids: Tuple[int, int, int],
                 points: Tuple[Point, Point, Point]):
        """
        :param triangle_id: Arena id of this triangle.
        :type triangle_id: int
        :param vertex_ids: Ids of the three vertices.
        :type vertex_ids: Tuple[int, int, int]
        :param points: Coordinates of the three vertices, same order as ids.
        :type points: Tuple[Point, Point, Point]
        """
        self.id = triangle_id
        self.vertex_ids = tuple(vertex_ids)
        self.points = tuple(points)
        self.edges: Set[int] = set()
        self._circumcircle: Optional[Tuple[float, float, float]] = None

    def __repr__(self) -> str:
        return f"Triangle(id={self.id}, vertices={self.vertex_ids})"

    def add_edge(self, edge_id: int) -> None:
        if edge_id in self.edges:
            raise TopologyError(f"Triangle {self.id} already contains edge {edge_id}")
        if len(self.edges) >= 3:
            raise TopologyError(f"Triangle {self.id} already has three edges")
        self.edges.add(edge_id)

    def _compute_circumcircle(self) -> Tuple[float, float, float]:
        (ax, ay), (bx, by), (cx, cy) = self.points

        d = 2.0 * (ax * (by - cy) + bx * (cy - ay) + cx * (ay - by))
        if d == 0.0:
            # Collinear: no circle passes through all three points
            return math.nan, math.nan, math.nan

        da = ax * ax + ay * ay
        db = bx * bx + by * by
        dc = cx * cx + cy * cy
        ux = (da * (by - cy) + db * (cy - ay) + dc * (ay - by)) / d
        uy = (da * (cx - bx) + db * (ax - cx) + dc * (bx - ax)) / d
        return ux, uy, math.hypot(ax - ux, ay - uy)

    @property
    def circumcircle(self) -> Tuple[float, float, float]:
        """
        Circumcenter and radius as ``(x, y, r)``, computed on first access.

        All three values are NaN for a degenerate (collinear) triangle.
        """
        if self._circumcircle is None:
            self._circumcircle = self._compute_circumcircle()
        return self._circumcircle

    @property
    def circumcenter(self) -> Point:
        x, y, _ = self.circumcircle
        return x, y

    @property
    def radius(self) -> float:
        return self.circumcircle[2]

    @property
    def is_degenerate(self) -> bool:
        return math.isnan(self.radius)

    def in_circumcircle(self, x: float, y: float) -> bool:
        """
        Check whether (x, y) lies inside or on the circumcircle.

        The test is inclusive (distance <= radius). A degenerate triangle has
        no circumcircle and contains nothing.

        :param x: X coordinate of the query point.
        :type x: float
        :param y: Y coordinate of the query point.
        :type y: float
        :return: True if the point is within the circumcircle.
        :rtype: bool
        """
        ux, uy, r = self.circumcircle
        if math.isnan(r):
            return False
        return math.hypot(x - ux, y - uy) <= r

    def area(self) -> float:
        """Absolute area of the triangle."""
        (ax, ay), (bx, by), (cx, cy) = self.points
        return abs((ax - cx) * (by - ay) - (ax - bx) * (cy - ay)) * 0.5

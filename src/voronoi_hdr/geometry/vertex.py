# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""
Vertices of the triangulation and sites of the Voronoi diagram.

A vertex carries its own topology (neighbor ids, incident edge ids), the
Voronoi cell built from the circumcenters of its adjacent triangles, the cell
area and the HDR membership flag set by the boundary graph.
"""

import math
from typing import List, Optional, Sequence, Set, Tuple

from ..errors import TopologyError
from .ordering import shoelace_area, sort_clockwise

Point = Tuple[float, float]


class Vertex:
    """
    Site of one or more identical observations.

    Identical observations collapse into a single vertex; ``duplicates``
    counts the extra copies, so the vertex stands for ``1 + duplicates``
    observations and its reported area is shared between them.
    """

    def __init__(self, vertex_id: int, x: float, y: float):
        """
        :param vertex_id: Stable id, assigned in order of first occurrence.
        :type vertex_id: int
        :param x: X coordinate.
        :type x: float
        :param y: Y coordinate.
        :type y: float
        """
        self._id = vertex_id
        self._x = float(x)
        self._y = float(y)
        self.duplicates = 0
        self.neighbors: Set[int] = set()
        self.edges: Set[int] = set()
        self.bound = False
        self.in_hdr = False

        self._voronoi: List[Point] = []
        self._voronoi_sources: Set[int] = set()
        self._voronoi_ready = False
        self._area: Optional[float] = None

    def __repr__(self) -> str:
        return (f"Vertex(id={self._id}, x={self._x!r}, y={self._y!r}, "
                f"duplicates={self.duplicates})")

    @property
    def id(self) -> int:
        return self._id

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    @property
    def xy(self) -> Point:
        return self._x, self._y

    @property
    def observations(self) -> int:
        """Number of observations represented by this vertex."""
        return self.duplicates + 1

    def add_duplicate(self) -> None:
        self.duplicates += 1

    # -- topology -----------------------------------------------------------

    def add_neighbor(self, vertex_id: int) -> None:
        self.neighbors.add(vertex_id)

    def remove_neighbor(self, vertex_id: int) -> None:
        self.neighbors.discard(vertex_id)

    def add_edge(self, edge_id: int) -> None:
        """
        Register an incident edge.

        :param edge_id: Id of the edge.
        :type edge_id: int
        :raises TopologyError: If the edge is already registered.
        """
        if edge_id in self.edges:
            raise TopologyError(f"Vertex {self._id} already contains edge {edge_id}")
        self.edges.add(edge_id)

    def remove_edge(self, edge_id: int) -> None:
        self.edges.discard(edge_id)

    def check_invariants(self, edges: dict) -> None:
        """
        Verify that neighbors and incident edges agree.

        :param edges: Arena mapping edge id -> Edge.
        :type edges: dict
        :raises TopologyError: If an incident edge is missing, does not end at
                               this vertex, or the neighbor set differs from the
                               set of opposite endpoints.
        """
        if len(self.neighbors) != len(self.edges):
            raise TopologyError(
                f"Vertex {self._id} has {len(self.neighbors)} neighbors "
                f"but {len(self.edges)} incident edges"
            )
        opposite = set()
        for edge_id in self.edges:
            edge = edges.get(edge_id)
            if edge is None or not edge.has_vertex(self._id):
                raise TopologyError(f"Vertex {self._id} lists foreign edge {edge_id}")
            opposite.add(edge.other(self._id))
        if opposite != self.neighbors:
            raise TopologyError(f"Vertex {self._id} neighbor set disagrees with its edges")

    # -- Voronoi cell -------------------------------------------------------

    def add_voronoi_edge(self, triangle_ids: Sequence[int],
                         circumcenters: Sequence[Point]) -> None:
        """
        Add the circumcenters of the triangles adjacent to one incident edge.

        An edge with a single triangle is a hull edge and makes this cell
        unbounded. Each triangle contributes its circumcenter once.

        :param triangle_ids: Ids of the edge's adjacent triangles (1 or 2).
        :type triangle_ids: Sequence[int]
        :param circumcenters: Circumcenters of those triangles, same order.
        :type circumcenters: Sequence[Point]
        """
        if len(triangle_ids) == 1:
            self.bound = True
        for triangle_id, center in zip(triangle_ids, circumcenters):
            if triangle_id not in self._voronoi_sources:
                self._voronoi_sources.add(triangle_id)
                self._voronoi.append(center)
        self._area = None

    def sort_voronoi_cell(self) -> None:
        """Put the cell polygon in clockwise order around this vertex."""
        self._voronoi = sort_clockwise(self._voronoi, self.xy)
        self._voronoi_ready = True

    @property
    def voronoi_cell(self) -> List[Point]:
        """Voronoi polygon as a list of (x, y) circumcenters."""
        return list(self._voronoi)

    @property
    def raw_area(self) -> float:
        """
        Shoelace area of the (sorted) cell polygon, not shared between duplicates.

        :raises ValueError: If the cell has not been derived yet.
        """
        if not self._voronoi_ready:
            raise ValueError(f"Voronoi cell of vertex {self._id} not derived. "
                             "Call Triangulation.compute_voronoi() first.")
        return shoelace_area(self._voronoi)

    def calc_area(self) -> float:
        """
        Compute and cache the per-observation cell area.

        Cells touching the convex hull are unbounded and get ``inf``.

        :return: Cell area divided by the number of observations.
        :rtype: float
        """
        if self.bound:
            self._area = math.inf
        else:
            self._area = self.raw_area / self.observations
        return self._area

    @property
    def area(self) -> float:
        if self._area is None:
            return self.calc_area()
        return self._area

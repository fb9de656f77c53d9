# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""Edges of the Delaunay triangulation."""

from typing import List, Tuple

from ..errors import TopologyError


class Edge:
    """
    Segment between two vertices, with up to two adjacent triangles.

    Only ids are stored; the triangulation arena resolves them. An edge with a
    single triangle lies on the convex hull of the finalized triangulation.
    """

    def __init__(self, edge_id: int, origin: int, destination: int):
        self.id = edge_id
        self.vertex_ids: Tuple[int, int] = (origin, destination)
        self.triangles: List[int] = []

    def __repr__(self) -> str:
        return f"Edge(id={self.id}, vertices={self.vertex_ids}, triangles={self.triangles})"

    def add_triangle(self, triangle_id: int) -> None:
        """
        Attach a triangle to this edge.

        :param triangle_id: Id of the adjacent triangle.
        :type triangle_id: int
        :raises TopologyError: If the triangle is already attached or the
                               edge already has two triangles.
        """
        if triangle_id in self.triangles:
            raise TopologyError(f"Edge {self.id} already borders triangle {triangle_id}")
        if len(self.triangles) >= 2:
            raise TopologyError(
                f"Edge {self.id} already borders two triangles {self.triangles}; "
                f"cannot add {triangle_id}"
            )
        self.triangles.append(triangle_id)

    def remove_triangle(self, triangle_id: int) -> None:
        if triangle_id not in self.triangles:
            raise TopologyError(f"Edge {self.id} does not border triangle {triangle_id}")
        self.triangles.remove(triangle_id)

    def other(self, vertex_id: int) -> int:
        """Return the endpoint opposite ``vertex_id``."""
        a, b = self.vertex_ids
        if vertex_id == a:
            return b
        if vertex_id == b:
            return a
        raise TopologyError(f"Vertex {vertex_id} is not an endpoint of edge {self.id}")

    def has_vertex(self, vertex_id: int) -> bool:
        return vertex_id in self.vertex_ids

    @property
    def is_hull(self) -> bool:
        return len(self.triangles) == 1

# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""
Delaunay triangulation by incremental insertion (Bowyer-Watson).

This module builds the triangulation of a planar point set, derives the dual
Voronoi cells of every vertex, and exposes the finalized vertices, edges and
triangles. Vertices, edges and triangles live in an arena owned by
:class:`Triangulation` and refer to each other by integer id only.
"""

import math
from collections import deque
from typing import Dict, List, Optional, Sequence, Set, Tuple

import numpy as np
import structlog

from ..errors import (
    DegenerateGeometryError,
    InsufficientPointsError,
    TopologyError,
)
from .boundaries import compute_convex_hull
from .edge import Edge
from .triangle import Point, Triangle
from .vertex import Vertex

logger = structlog.get_logger()


def _as_points(points) -> np.ndarray:
    arr = np.asarray(points, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"Expected an (N, 2) array of observations, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ValueError("Observations must have finite coordinates")
    return arr


def _orient(p: Point, q: Point, r: Point) -> float:
    """Twice the signed area of (p, q, r); positive for a left turn."""
    return (q[0] - p[0]) * (r[1] - p[1]) - (q[1] - p[1]) * (r[0] - p[0])


def _all_collinear(vertices: Sequence[Vertex]) -> bool:
    a = vertices[0].xy
    b = vertices[1].xy
    return all(_orient(a, b, v.xy) == 0.0 for v in vertices[2:])


def _hull_cycle(vertices: Sequence[Vertex]) -> List[Vertex]:
    """
    Counter-clockwise convex hull by monotone chain.

    Points lying on a hull side are kept, so consecutive entries never have
    another input point between them.

    :param vertices: Distinct, not all collinear, vertices.
    :type vertices: Sequence[Vertex]
    :return: Hull vertices in counter-clockwise order.
    :rtype: List[Vertex]
    """
    ordered = sorted(vertices, key=lambda v: (v.x, v.y))

    def chain(seq):
        hull: List[Vertex] = []
        for v in seq:
            while len(hull) >= 2 and _orient(hull[-2].xy, hull[-1].xy, v.xy) < 0.0:
                hull.pop()
            hull.append(v)
        return hull

    lower = chain(ordered)
    upper = chain(reversed(ordered))
    return lower[:-1] + upper[:-1]


class Triangulation:
    """
    Delaunay triangulation of a set of observations.

    The constructor runs the whole construction: duplicate collapsing,
    super-triangle creation, point insertion in ascending x order and removal
    of the super-triangle.

    The super-triangle hugs the bounding box, so some Delaunay triangles along
    the hull have a synthetic vertex inside their circumcircle and are never
    built. Before the removal every missing convex hull side is recovered by
    edge flips, and Lawson flips afterwards make the inner edges Delaunay
    again. The finished triangulation always covers the convex hull.

    Call :meth:`compute_voronoi` afterwards to derive the Voronoi cells and
    their areas.

    Example::

        tri = Triangulation(points)
        tri.compute_voronoi()
        areas = [v.area for v in tri.vertices]
    """

    def __init__(self, observations):
        """
        :param observations: (N, 2) array-like of (x, y) observations.
        :type observations: array-like
        :raises ValueError: If the input is not (N, 2) or not finite.
        :raises InsufficientPointsError: If fewer than 3 distinct points.
        :raises DegenerateGeometryError: If all distinct points are collinear.
        """
        obs = _as_points(observations)
        self._n_observations = len(obs)

        self._vertices: List[Vertex] = []
        self._super_vertices: List[Vertex] = []
        self._edges: Dict[int, Edge] = {}
        self._triangles: Dict[int, Triangle] = {}
        self._next_edge_id = 0
        self._next_triangle_id = 0
        self._n_flips = 0
        self._voronoi_done = False

        self.observation_index = self._collapse_duplicates(obs)

        if len(self._vertices) < 3:
            raise InsufficientPointsError(
                f"Triangulation needs at least 3 distinct points, got {len(self._vertices)}"
            )
        if _all_collinear(self._vertices):
            raise DegenerateGeometryError("All observations are collinear")

        pts = self.points
        self.bounds: Tuple[float, float, float, float] = (
            float(pts[:, 0].min()), float(pts[:, 0].max()),
            float(pts[:, 1].min()), float(pts[:, 1].max()),
        )

        self._create_super_triangle()
        for vertex in sorted(self._vertices, key=lambda v: v.x):
            self._add_point(vertex)
        forced = self._force_hull_edges()
        self._remove_super_triangle()
        self._restore_delaunay()
        self._finalize()

        logger.info(
            "Triangulation built",
            observations=self._n_observations,
            vertices=len(self._vertices),
            duplicates=self._n_observations - len(self._vertices),
            triangles=len(self._triangles),
            edges=len(self._edges),
            forced_hull_edges=forced,
            flips=self._n_flips,
        )

    # -- construction -------------------------------------------------------

    def _collapse_duplicates(self, obs: np.ndarray) -> np.ndarray:
        seen: Dict[Tuple[float, float], Vertex] = {}
        index = np.empty(len(obs), dtype=np.int64)
        for i, (x, y) in enumerate(obs.tolist()):
            vertex = seen.get((x, y))
            if vertex is None:
                vertex = Vertex(len(self._vertices), x, y)
                self._vertices.append(vertex)
                seen[(x, y)] = vertex
            else:
                vertex.add_duplicate()
            index[i] = vertex.id
        return index

    def _vertex(self, vertex_id: int) -> Vertex:
        n = len(self._vertices)
        if vertex_id < n:
            return self._vertices[vertex_id]
        return self._super_vertices[vertex_id - n]

    def _create_super_triangle(self) -> None:
        x_min, x_max, y_min, y_max = self.bounds
        n = len(self._vertices)
        left = Vertex(n, 1.5 * x_min - 0.5 * x_max, y_min)
        right = Vertex(n + 1, -0.5 * x_min + 1.5 * x_max, y_min)
        top = Vertex(n + 2, 0.5 * x_min + 0.5 * x_max, -y_min + 2.0 * y_max)
        self._super_vertices = [left, right, top]

        triangle = self._create_triangle(left, top, right)
        for a, b in ((left, top), (top, right), (right, left)):
            self._create_edge(a, b, triangle)

    def _create_triangle(self, a: Vertex, b: Vertex, c: Vertex) -> Triangle:
        triangle = Triangle(self._next_triangle_id, (a.id, b.id, c.id), (a.xy, b.xy, c.xy))
        self._next_triangle_id += 1
        self._triangles[triangle.id] = triangle
        return triangle

    def _create_edge(self, a: Vertex, b: Vertex,
                     triangle: Optional[Triangle] = None) -> Edge:
        if b.id in a.neighbors:
            raise TopologyError(f"Vertices {a.id} and {b.id} are already connected")
        edge = Edge(self._next_edge_id, a.id, b.id)
        self._next_edge_id += 1
        a.add_neighbor(b.id)
        b.add_neighbor(a.id)
        a.add_edge(edge.id)
        b.add_edge(edge.id)
        self._edges[edge.id] = edge
        if triangle is not None:
            self._attach(edge, triangle)
        return edge

    def _attach(self, edge: Edge, triangle: Triangle) -> None:
        edge.add_triangle(triangle.id)
        triangle.add_edge(edge.id)

    def _remove_triangle(self, triangle: Triangle) -> None:
        for edge_id in triangle.edges:
            self._edges[edge_id].remove_triangle(triangle.id)
        del self._triangles[triangle.id]

    def _remove_edge(self, edge_id: int) -> None:
        edge = self._edges[edge_id]
        if edge.triangles:
            raise TopologyError(f"Edge {edge_id} still borders triangles {edge.triangles}")
        a, b = (self._vertex(i) for i in edge.vertex_ids)
        a.remove_neighbor(b.id)
        b.remove_neighbor(a.id)
        a.remove_edge(edge_id)
        b.remove_edge(edge_id)
        del self._edges[edge_id]

    def _find_bad_triangle(self, vertex: Vertex) -> Triangle:
        # Most recently created triangles are nearest to the x-sorted insertion front
        for triangle in reversed(self._triangles.values()):
            if triangle.in_circumcircle(vertex.x, vertex.y):
                return triangle
        raise TopologyError(f"No triangle circumcircle contains vertex {vertex.id}")

    def _add_point(self, vertex: Vertex) -> None:
        seed = self._find_bad_triangle(vertex)

        bad: List[Triangle] = []
        classified: Set[int] = {seed.id}
        queue = deque([seed])
        # Insertion-ordered set of cavity boundary edges
        boundary: Dict[int, None] = {}
        interior: List[int] = []

        while queue:
            triangle = queue.popleft()
            if not triangle.in_circumcircle(vertex.x, vertex.y):
                continue
            bad.append(triangle)
            for edge_id in sorted(triangle.edges):
                if edge_id in boundary:
                    del boundary[edge_id]
                    interior.append(edge_id)
                else:
                    boundary[edge_id] = None
                for neighbor_id in self._edges[edge_id].triangles:
                    if neighbor_id not in classified:
                        classified.add(neighbor_id)
                        queue.append(self._triangles[neighbor_id])

        for triangle in bad:
            self._remove_triangle(triangle)
        for edge_id in interior:
            self._remove_edge(edge_id)

        spokes: Dict[int, Edge] = {}
        for edge_id in boundary:
            edge = self._edges[edge_id]
            a, b = (self._vertex(i) for i in edge.vertex_ids)
            triangle = self._create_triangle(a, b, vertex)
            self._attach(edge, triangle)
            for end in (a, b):
                spoke = spokes.get(end.id)
                if spoke is None:
                    spokes[end.id] = self._create_edge(end, vertex, triangle)
                else:
                    self._attach(spoke, triangle)

    def _remove_super_triangle(self) -> None:
        super_edges: Dict[int, None] = {}
        super_triangles: Dict[int, None] = {}
        for vertex in self._super_vertices:
            for edge_id in sorted(vertex.edges):
                super_edges[edge_id] = None
                for triangle_id in self._edges[edge_id].triangles:
                    super_triangles[triangle_id] = None

        for triangle_id in super_triangles:
            self._remove_triangle(self._triangles[triangle_id])
        for edge_id in super_edges:
            self._remove_edge(edge_id)
        self._super_vertices = []

    # -- hull repair ----------------------------------------------------------

    def _find_edge(self, a_id: int, b_id: int) -> Edge:
        for edge_id in self._vertex(a_id).edges:
            edge = self._edges[edge_id]
            if edge.other(a_id) == b_id:
                return edge
        raise TopologyError(f"Vertices {a_id} and {b_id} are not connected")

    def _quad(self, edge: Edge) -> Tuple[int, int, int, int]:
        """Endpoints (a, b) of an inner edge and the opposite vertices (c, d)."""
        a, b = edge.vertex_ids
        c, d = (
            next(i for i in self._triangles[t].vertex_ids if i != a and i != b)
            for t in edge.triangles
        )
        return a, b, c, d

    def _is_convex_quad(self, a: int, b: int, c: int, d: int) -> bool:
        pa, pb, pc, pd = (self._vertex(i).xy for i in (a, b, c, d))
        oa = _orient(pc, pd, pa)
        ob = _orient(pc, pd, pb)
        return (oa > 0.0 and ob < 0.0) or (oa < 0.0 and ob > 0.0)

    def _crosses(self, edge: Edge, u: Vertex, v: Vertex) -> bool:
        a, b = edge.vertex_ids
        if a in (u.id, v.id) or b in (u.id, v.id):
            return False
        pa = self._vertex(a).xy
        pb = self._vertex(b).xy
        o1 = _orient(u.xy, v.xy, pa)
        o2 = _orient(u.xy, v.xy, pb)
        o3 = _orient(pa, pb, u.xy)
        o4 = _orient(pa, pb, v.xy)
        return ((o1 > 0.0 > o2) or (o1 < 0.0 < o2)) and ((o3 > 0.0 > o4) or (o3 < 0.0 < o4))

    def _flip(self, edge: Edge) -> Edge:
        """Replace the diagonal of a convex quad by the other diagonal."""
        a, b, c, d = self._quad(edge)
        for triangle_id in list(edge.triangles):
            self._remove_triangle(self._triangles[triangle_id])
        self._remove_edge(edge.id)

        vc, vd = self._vertex(c), self._vertex(d)
        diagonal = self._create_edge(vc, vd)
        for end in (self._vertex(a), self._vertex(b)):
            triangle = self._create_triangle(vc, vd, end)
            self._attach(diagonal, triangle)
            self._attach(self._find_edge(c, end.id), triangle)
            self._attach(self._find_edge(d, end.id), triangle)
        self._n_flips += 1
        return diagonal

    def _force_edge(self, u: Vertex, v: Vertex) -> None:
        """
        Make the segment (u, v) an edge by flipping the edges that cross it.

        A crossing edge whose quad is not strictly convex is postponed; a
        full pass over the queue without any flip is a topology failure.
        """
        queue = deque(e for e in self._edges.values() if self._crosses(e, u, v))
        stalled = 0
        while queue:
            edge = queue.popleft()
            if not self._is_convex_quad(*self._quad(edge)):
                queue.append(edge)
                stalled += 1
                if stalled > len(queue):
                    raise TopologyError(f"Cannot recover hull edge ({u.id}, {v.id})")
                continue
            stalled = 0
            diagonal = self._flip(edge)
            if self._crosses(diagonal, u, v):
                queue.append(diagonal)

        if v.id not in u.neighbors:
            raise TopologyError(f"Hull edge ({u.id}, {v.id}) missing after recovery")

    def _force_hull_edges(self) -> int:
        """
        Recover every convex hull side of the input before the super-triangle
        goes, so that removing it leaves the whole hull triangulated.

        :return: Number of hull sides that had to be recovered.
        :rtype: int
        """
        cycle = _hull_cycle(self._vertices)
        forced = 0
        for u, v in zip(cycle, cycle[1:] + cycle[:1]):
            if v.id not in u.neighbors:
                self._force_edge(u, v)
                forced += 1
        return forced

    def _is_locally_delaunay(self, edge: Edge) -> bool:
        a, b, c, d = self._quad(edge)
        x, y, r = self._triangles[edge.triangles[0]].circumcircle
        px, py = self._vertex(d).xy
        # Strict with a relative margin so cocircular quads never flip back and forth
        return not math.hypot(px - x, py - y) < r * (1.0 - 1e-12)

    def _restore_delaunay(self) -> None:
        """Lawson flips until every inner edge is locally Delaunay."""
        stack = sorted(self._edges)
        while stack:
            edge = self._edges.get(stack.pop())
            if edge is None or len(edge.triangles) != 2:
                continue
            if self._is_locally_delaunay(edge):
                continue
            a, b, c, d = self._quad(edge)
            if not self._is_convex_quad(a, b, c, d):
                continue
            self._flip(edge)
            for p, q in ((a, c), (a, d), (b, c), (b, d)):
                stack.append(self._find_edge(p, q).id)

    def _finalize(self) -> None:
        for triangle in self._triangles.values():
            if triangle.is_degenerate:
                raise DegenerateGeometryError(
                    f"Degenerate triangle {triangle.vertex_ids} left in the triangulation"
                )
        self.validate()

    def validate(self) -> None:
        """
        Re-check the arena invariants.

        :raises TopologyError: If any vertex, edge or triangle is inconsistent.
        """
        for vertex in self._vertices:
            vertex.check_invariants(self._edges)
        for edge in self._edges.values():
            if not 1 <= len(edge.triangles) <= 2:
                raise TopologyError(f"Edge {edge.id} borders {len(edge.triangles)} triangles")
        for triangle in self._triangles.values():
            if len(triangle.edges) != 3:
                raise TopologyError(f"Triangle {triangle.id} has {len(triangle.edges)} edges")

    # -- Voronoi ------------------------------------------------------------

    def compute_voronoi(self) -> None:
        """
        Derive the Voronoi cell and area of every vertex.

        Each incident edge contributes the circumcenters of its adjacent
        triangles; a hull edge (one triangle) marks the cell as bound, which
        gives it an infinite area. Cells are sorted clockwise before their
        shoelace area is computed.
        """
        if self._voronoi_done:
            return
        for vertex in self._vertices:
            for edge_id in sorted(vertex.edges):
                triangle_ids = self._edges[edge_id].triangles
                centers = [self._triangles[t].circumcenter for t in triangle_ids]
                vertex.add_voronoi_edge(triangle_ids, centers)
            vertex.sort_voronoi_cell()
            vertex.calc_area()
        self._voronoi_done = True

        logger.info(
            "Voronoi cells derived",
            vertices=len(self._vertices),
            bound=sum(1 for v in self._vertices if v.bound),
        )

    @property
    def voronoi_computed(self) -> bool:
        return self._voronoi_done

    # -- views --------------------------------------------------------------

    @property
    def vertices(self) -> List[Vertex]:
        """Canonical vertices in id order."""
        return list(self._vertices)

    @property
    def edges(self) -> Dict[int, Edge]:
        return dict(self._edges)

    @property
    def triangles(self) -> List[Triangle]:
        return list(self._triangles.values())

    @property
    def points(self) -> np.ndarray:
        """(n, 2) coordinates of the canonical vertices, indexed by vertex id."""
        return np.array([v.xy for v in self._vertices], dtype=np.float64)

    @property
    def duplicates(self) -> np.ndarray:
        return np.array([v.duplicates for v in self._vertices], dtype=np.int64)

    @property
    def n_observations(self) -> int:
        """Number of input observations, duplicates included."""
        return self._n_observations

    def vertex(self, vertex_id: int) -> Vertex:
        return self._vertices[vertex_id]

    def area(self) -> float:
        """Total area of all triangles (equals the convex hull area)."""
        return float(sum(t.area() for t in self._triangles.values()))

    def hull_area(self) -> float:
        """Area of the convex hull of the canonical vertices."""
        _, hull_polygon = compute_convex_hull(self.points)
        return float(hull_polygon.area)

    def hdr_mask(self) -> np.ndarray:
        """Boolean HDR membership per vertex id."""
        return np.array([v.in_hdr for v in self._vertices], dtype=bool)

    def delaunay_segments(self) -> List[Tuple[Point, Point]]:
        """Endpoints of every triangulation edge."""
        segments = []
        for edge in self._edges.values():
            a, b = edge.vertex_ids
            segments.append((self._vertices[a].xy, self._vertices[b].xy))
        return segments

    def voronoi_segment(self, edge: Edge) -> Optional[Tuple[Point, Point]]:
        """
        Voronoi edge dual to ``edge``.

        :return: The two circumcenters of the adjacent triangles, or None for
                 a hull edge.
        :rtype: Optional[Tuple[Point, Point]]
        """
        if len(edge.triangles) != 2:
            return None
        t0, t1 = (self._triangles[t] for t in edge.triangles)
        return t0.circumcenter, t1.circumcenter

    def voronoi_segments(self) -> List[Tuple[Point, Point]]:
        segments = []
        for edge in self._edges.values():
            segment = self.voronoi_segment(edge)
            if segment is not None:
                segments.append(segment)
        return segments


def compute_delaunay(x: np.ndarray, y: np.ndarray, voronoi: bool = True) -> Triangulation:
    """
    Compute the Delaunay triangulation from x and y coordinates.

    :param x: X coordinates of observations.
    :type x: np.ndarray
    :param y: Y coordinates of observations.
    :type y: np.ndarray
    :param voronoi: Also derive Voronoi cells and areas (default True).
    :type voronoi: bool
    :return: Finalized triangulation.
    :rtype: Triangulation
    """
    points = np.column_stack([x, y])
    tri = Triangulation(points)
    if voronoi:
        tri.compute_voronoi()
    return tri

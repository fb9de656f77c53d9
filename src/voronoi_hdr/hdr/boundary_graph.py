# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""
Highest density region selection on the Voronoi cell graph.

The boundary graph works on the finalized vertices of a triangulation. Each
vertex is a Voronoi cell; two cells are adjacent when their vertices share a
Delaunay edge. Three policies decide which cells belong to the HDR:

- ``simple``: exclude cells in id order, no connectivity guarantee.
- ``top_down``: start with every cell, peel off the largest boundary cells.
- ``bottom_up``: start with the smallest cell, grow by the smallest boundary
  cells.

The last two only change a cell whose clockwise-ordered neighbors show one or
two membership switches, which keeps the region connected and hole-free.
"""

import math
from collections import deque
from typing import Dict, List, Sequence

import structlog

from ..errors import NoEligibleCellError
from ..geometry.ordering import sort_clockwise
from ..geometry.vertex import Vertex

logger = structlog.get_logger()

HDR_METHODS = ('simple', 'top_down', 'bottom_up')


class BoundaryGraph:
    """
    HDR selector over a set of Voronoi cells.

    The vertex topology must be final and every vertex must have its Voronoi
    area derived. Only the ``in_hdr`` flags are modified.
    """

    def __init__(self, vertices: Sequence[Vertex]):
        """
        :param vertices: Finalized vertices with derived Voronoi areas.
        :type vertices: Sequence[Vertex]
        """
        self.vertices: List[Vertex] = sorted(vertices, key=lambda v: v.id)
        self._by_id: Dict[int, Vertex] = {v.id: v for v in self.vertices}
        self.method = None
        self.target = None

    @property
    def total_observations(self) -> int:
        return sum(v.observations for v in self.vertices)

    def _check_target(self, k: int) -> int:
        k = int(k)
        total = self.total_observations
        if k < 0 or k > total:
            raise ValueError(f"Target must be between 0 and {total} observations, got {k}")
        return k

    # -- switches -----------------------------------------------------------

    def sorted_neighbors(self, vertex: Vertex) -> List[Vertex]:
        """Neighbors of ``vertex`` in clockwise order, starting at 12 o'clock."""
        neighbors = [self._by_id[i] for i in sorted(vertex.neighbors)]
        return sort_clockwise(neighbors, vertex.xy, key=lambda v: v.xy)

    def count_switches(self, vertex: Vertex, wraparound: bool = False) -> int:
        """
        Count membership changes between consecutive clockwise neighbors.

        By default the last and first neighbor are not compared, so the count
        may be odd. With ``wraparound=True`` the ring is closed and the count
        is always even.

        :param vertex: Cell whose neighborhood is inspected.
        :type vertex: Vertex
        :param wraparound: Also compare last and first neighbor.
        :type wraparound: bool
        :return: Number of switches.
        :rtype: int
        """
        ring = self.sorted_neighbors(vertex)
        switches = sum(1 for prev, cur in zip(ring, ring[1:]) if prev.in_hdr != cur.in_hdr)
        if wraparound and len(ring) > 1 and ring[-1].in_hdr != ring[0].in_hdr:
            switches += 1
        return switches

    def has_valid_switches(self, vertex: Vertex) -> bool:
        """True when the cell has 1 or 2 (non-wrapping) switches."""
        return 1 <= self.count_switches(vertex) <= 2

    # -- policies -----------------------------------------------------------

    def simple(self, n_remove: int) -> None:
        """
        Exclude cells in id order until ``n_remove`` observations are out.

        A cell is excluded when its observations fit in what is left to
        remove; every other cell is included. The result need not be
        connected.

        :param n_remove: Number of observations to exclude.
        :type n_remove: int
        """
        remaining = self._check_target(n_remove)
        self.method, self.target = 'simple', remaining
        for vertex in self.vertices:
            if vertex.observations <= remaining:
                vertex.in_hdr = False
                remaining -= vertex.observations
            else:
                vertex.in_hdr = True
        self._log_selection()

    def top_down(self, n_remove: int) -> None:
        """
        Remove the largest boundary cells until ``n_remove`` observations are out.

        All cells start in the HDR. Each step scans cells by descending area
        and removes the first included cell that fits the remaining budget and
        is either bound or has 1-2 switches.

        :param n_remove: Number of observations to exclude.
        :type n_remove: int
        :raises NoEligibleCellError: If no cell can be removed before the
                                     budget is met.
        """
        remaining = self._check_target(n_remove)
        self.method, self.target = 'top_down', remaining
        order = sorted(self.vertices, key=lambda v: v.area, reverse=True)
        for vertex in self.vertices:
            vertex.in_hdr = True

        while remaining > 0:
            chosen = None
            for vertex in order:
                if not vertex.in_hdr or vertex.observations > remaining:
                    continue
                if vertex.bound or self.has_valid_switches(vertex):
                    chosen = vertex
                    break
            if chosen is None:
                raise NoEligibleCellError('top_down', remaining)
            chosen.in_hdr = False
            remaining -= chosen.observations
        self._log_selection()

    def bottom_up(self, n_add: int) -> None:
        """
        Grow the HDR from the smallest cell until ``n_add`` observations are in.

        The smallest cell is always included first, even if it overshoots.
        Each further step scans cells by ascending area and adds the first
        excluded cell that fits the remaining budget and has 1-2 switches.

        :param n_add: Number of observations to include.
        :type n_add: int
        :raises NoEligibleCellError: If no cell can be added before the
                                     budget is met.
        """
        remaining = self._check_target(n_add)
        self.method, self.target = 'bottom_up', remaining
        order = sorted(self.vertices, key=lambda v: v.area)
        for vertex in self.vertices:
            vertex.in_hdr = False

        first = order[0]
        first.in_hdr = True
        remaining -= first.observations

        while remaining > 0:
            chosen = None
            for vertex in order:
                if vertex.in_hdr or vertex.observations > remaining:
                    continue
                if self.has_valid_switches(vertex):
                    chosen = vertex
                    break
            if chosen is None:
                raise NoEligibleCellError('bottom_up', remaining)
            chosen.in_hdr = True
            remaining -= chosen.observations
        self._log_selection()

    def run(self, method: str, k: int) -> None:
        """
        Dispatch to one of the selection policies by name.

        :param method: One of ``HDR_METHODS`` (dashes are accepted).
        :type method: str
        :param k: Observations to exclude (simple, top_down) or include
                  (bottom_up).
        :type k: int
        """
        name = method.replace('-', '_')
        if name not in HDR_METHODS:
            raise ValueError(f"Unknown HDR method '{method}'. Available: {HDR_METHODS}")
        getattr(self, name)(k)

    # -- results ------------------------------------------------------------

    def get_area(self) -> float:
        """
        Total area of the HDR.

        Cell areas are per observation, so each is scaled back by the number
        of observations of its vertex. Infinite if a bound cell is included.
        """
        return float(sum(v.area * v.observations for v in self.vertices if v.in_hdr))

    def observations_included(self) -> int:
        return sum(v.observations for v in self.vertices if v.in_hdr)

    def _components(self, in_hdr: bool) -> List[List[Vertex]]:
        members = {v.id for v in self.vertices if v.in_hdr == in_hdr}
        seen = set()
        components = []
        for start in sorted(members):
            if start in seen:
                continue
            seen.add(start)
            queue = deque([start])
            component = []
            while queue:
                vid = queue.popleft()
                component.append(self._by_id[vid])
                for nid in self._by_id[vid].neighbors:
                    if nid in members and nid not in seen:
                        seen.add(nid)
                        queue.append(nid)
            components.append(component)
        return components

    def is_connected(self) -> bool:
        """True when the HDR cells form exactly one component."""
        return len(self._components(True)) == 1

    def count_holes(self) -> int:
        """Number of excluded components that do not reach the hull."""
        return sum(1 for c in self._components(False) if not any(v.bound for v in c))

    def _log_selection(self) -> None:
        area = self.get_area()
        logger.info(
            "HDR selected",
            method=self.method,
            target=self.target,
            included=self.observations_included(),
            area=area if math.isfinite(area) else 'inf',
        )


def compute_hdr(triangulation, alpha: float = 0.1, method: str = 'top_down') -> BoundaryGraph:
    """
    Select the (1 - alpha) HDR of a triangulation.

    ``simple`` and ``top_down`` exclude ``int(alpha * N)`` observations;
    ``bottom_up`` includes ``int(N * (1 - alpha))``, where N counts
    duplicates.

    :param triangulation: Finalized triangulation; Voronoi cells are derived
                          if that has not happened yet.
    :type triangulation: Triangulation
    :param alpha: Fraction of observations left out of the HDR, in [0, 1].
    :type alpha: float
    :param method: One of ``HDR_METHODS`` (dashes are accepted).
    :type method: str
    :return: The boundary graph after selection.
    :rtype: BoundaryGraph
    """
    if not 0.0 <= alpha <= 1.0:
        raise ValueError(f"alpha must be within [0, 1], got {alpha}")
    triangulation.compute_voronoi()

    n = triangulation.n_observations
    name = method.replace('-', '_')
    if name == 'bottom_up':
        k = int(n * (1.0 - alpha))
    else:
        k = int(alpha * n)

    graph = BoundaryGraph(triangulation.vertices)
    graph.run(name, k)
    return graph

# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""
Angular ordering and polygon area helpers.

The clockwise comparator is shared by Voronoi cell construction (ordering
circumcenters around a site) and by the boundary graph (ordering neighbors
around a cell before counting switches).
"""

import functools
from typing import Callable, List, Sequence, Tuple, TypeVar

T = TypeVar('T')


def clockwise_compare(mx: float, my: float,
                      a: Tuple[float, float], b: Tuple[float, float]) -> int:
    """
    Compare two points by clockwise angle around a center, starting at 12 o'clock.

    Points right of the vertical line through the center come before points
    left of it. Two points on that line are ordered by descending y. All
    other pairs are decided by the sign of the cross product
    ``(a - c) x (b - c)``.

    :param mx: X coordinate of the center.
    :type mx: float
    :param my: Y coordinate of the center.
    :type my: float
    :param a: First point (x, y).
    :type a: Tuple[float, float]
    :param b: Second point (x, y).
    :type b: Tuple[float, float]
    :return: -1 if ``a`` sorts first, 1 otherwise. Never 0.
    :rtype: int
    """
    ax, ay = a
    bx, by = b
    if ax >= mx and bx < mx:
        return -1
    if ax <= mx and bx > mx:
        return 1
    if ax == mx and bx == mx:
        return -1 if ay > by else 1

    det = (ax - mx) * (by - my) - (bx - mx) * (ay - my)
    return 1 if det > 0 else -1


def sort_clockwise(items: Sequence[T], center: Tuple[float, float],
                   key: Callable[[T], Tuple[float, float]] = lambda p: p) -> List[T]:
    """
    Return ``items`` sorted clockwise around ``center``.

    :param items: Objects to sort.
    :type items: Sequence
    :param center: (x, y) of the center.
    :type center: Tuple[float, float]
    :param key: Maps an item to its (x, y) coordinates (identity by default).
    :type key: Callable
    :return: New list in clockwise order.
    :rtype: list
    """
    mx, my = center
    cmp = functools.cmp_to_key(lambda a, b: clockwise_compare(mx, my, key(a), key(b)))
    return sorted(items, key=cmp)


def shoelace_area(polygon: Sequence[Tuple[float, float]]) -> float:
    """
    Shoelace area of a clockwise polygon.

    Uses ``sum((x_prev + x_cur) * (y_prev - y_cur)) / 2``, which is positive
    for clockwise vertex order and negative for counter-clockwise order.

    :param polygon: Ordered (x, y) vertices, not closed.
    :type polygon: Sequence[Tuple[float, float]]
    :return: Signed area (positive when clockwise).
    :rtype: float
    """
    total = 0.0
    n = len(polygon)
    for i in range(n):
        px, py = polygon[i - 1]
        cx, cy = polygon[i]
        total += (px + cx) * (py - cy)
    return total / 2.0

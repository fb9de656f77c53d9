# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""
Theoretical HDR of a bivariate normal sample.

For independent normal axes the (1 - alpha) highest density region is an
ellipse centered on the mean with semi-axes ``sigma * sqrt(-2 ln alpha)``.
It is used as a reference for the empirical HDR.
"""

import numpy as np
from shapely import affinity, contains_xy
from shapely.geometry import Point, Polygon
from typing import Sequence

from ..geometry.vertex import Vertex


class ReferenceRegion:
    """
    Elliptical (1 - alpha) HDR of an independent bivariate normal.

    :param mu_x: Mean along X.
    :type mu_x: float
    :param sigma_x: Standard deviation along X.
    :type sigma_x: float
    :param mu_y: Mean along Y.
    :type mu_y: float
    :param sigma_y: Standard deviation along Y.
    :type sigma_y: float
    :param alpha: Excluded probability mass, in (0, 1).
    :type alpha: float
    :param quad_segs: Segments per quarter circle of the polygon outline.
    :type quad_segs: int
    """

    def __init__(self, mu_x: float, sigma_x: float, mu_y: float, sigma_y: float,
                 alpha: float, quad_segs: int = 64):
        if not 0.0 < alpha < 1.0:
            raise ValueError(f"alpha must be within (0, 1), got {alpha}")
        if sigma_x <= 0 or sigma_y <= 0:
            raise ValueError("Standard deviations must be positive")

        self.alpha = alpha
        self.center = (float(mu_x), float(mu_y))
        scale = np.sqrt(-2.0 * np.log(alpha))
        self.width = float(sigma_x * scale)
        self.height = float(sigma_y * scale)

        circle = Point(self.center).buffer(1.0, quad_segs=quad_segs)
        self.polygon: Polygon = affinity.scale(circle, xfact=self.width, yfact=self.height,
                                               origin=self.center)

    @property
    def area(self) -> float:
        """Exact ellipse area (the polygon outline is slightly smaller)."""
        return float(np.pi * self.width * self.height)

    def contains(self, x, y) -> np.ndarray:
        """Vectorized point-in-ellipse test on the polygon outline."""
        return contains_xy(self.polygon, np.asarray(x, dtype=float), np.asarray(y, dtype=float))

    def coverage(self, vertices: Sequence[Vertex], n_observations: int) -> float:
        """
        Percentage of the expected HDR observations found inside the ellipse.

        Counts HDR observations (duplicates included) inside the ellipse and
        divides by ``(1 - alpha) * n_observations``.

        :param vertices: Vertices after HDR selection.
        :type vertices: Sequence[Vertex]
        :param n_observations: Total number of observations.
        :type n_observations: int
        :return: Coverage in percent.
        :rtype: float
        """
        members = [v for v in vertices if v.in_hdr]
        if not members or n_observations == 0:
            return 0.0
        xs = np.array([v.x for v in members])
        ys = np.array([v.y for v in members])
        weights = np.array([v.observations for v in members])
        inside = int(weights[self.contains(xs, ys)].sum())
        return 100.0 * inside / ((1.0 - self.alpha) * n_observations)

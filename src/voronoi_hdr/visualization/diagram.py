# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""
Voronoi diagram and HDR plotting.

Draws the HDR cells, Voronoi edges, optional Delaunay edges, the observations
and an optional theoretical reference ellipse for one triangulation.
"""

from typing import Optional

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.collections import LineCollection, PolyCollection

from ..geometry import hdr_cell_polygons
from ..utils import compute_figure_size, ensure_dir_exists


def plot_voronoi_hdr(
    triangulation,
    output_path: Optional[str] = None,
    show_hdr: bool = True,
    show_delaunay: bool = False,
    reference=None,
    title: Optional[str] = None,
    page_w: Optional[float] = None,
    page_h: Optional[float] = None,
    margin: float = 0.05,
    dpi: int = 300
):
    """
    Plot the Voronoi diagram of a triangulation with its HDR.

    :param triangulation: Triangulation with derived Voronoi cells.
    :type triangulation: Triangulation
    :param output_path: Path to save the figure. If None, the figure is
                        returned open instead.
    :type output_path: Optional[str]
    :param show_hdr: Fill bounded cells that are in the HDR (light gray).
    :type show_hdr: bool
    :param show_delaunay: Also draw triangulation edges (gray).
    :type show_delaunay: bool
    :param reference: Optional ReferenceRegion drawn as a red outline.
    :type reference: Optional[ReferenceRegion]
    :param title: Plot title.
    :type title: Optional[str]
    :param page_w: Figure width in inches (default: full page width).
    :type page_w: Optional[float]
    :param page_h: Figure height in inches (default: half page height).
    :type page_h: Optional[float]
    :param margin: Fraction of the data range added around the points.
    :type margin: float
    :param dpi: Figure DPI.
    :type dpi: int
    :return: The matplotlib figure when ``output_path`` is None, else None.
    :rtype: Optional[matplotlib.figure.Figure]
    """
    default_w, default_h = compute_figure_size(1.0, 0.5)
    fig, ax = plt.subplots(figsize=(page_w or default_w, page_h or default_h))

    if show_hdr:
        polygons = hdr_cell_polygons(triangulation.vertices)
        if polygons:
            cells = PolyCollection([np.asarray(p.exterior.coords) for p in polygons],
                                   facecolors='lightgray', edgecolors='none')
            ax.add_collection(cells)

    if show_delaunay:
        ax.add_collection(LineCollection(triangulation.delaunay_segments(),
                                         colors='gray', linewidths=0.3))

    ax.add_collection(LineCollection(triangulation.voronoi_segments(),
                                     colors='black', linewidths=0.4))

    points = triangulation.points
    ax.scatter(points[:, 0], points[:, 1], s=1, c='black')

    if reference is not None:
        x, y = reference.polygon.exterior.xy
        ax.plot(x, y, color='red', linewidth=1.0)

    x_min, x_max, y_min, y_max = triangulation.bounds
    dx = (x_max - x_min) * margin
    dy = (y_max - y_min) * margin
    ax.set_xlim(x_min - dx, x_max + dx)
    ax.set_ylim(y_min - dy, y_max + dy)
    ax.set_aspect('equal')
    ax.set_xlabel('X Coordinate')
    ax.set_ylabel('Y Coordinate')
    if title:
        ax.set_title(title)

    if output_path is None:
        return fig

    ensure_dir_exists(output_path)
    plt.tight_layout()
    plt.savefig(output_path, dpi=dpi)
    plt.close(fig)
    return None

# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""Visualization module for plotting and figure generation."""

from .diagram import plot_voronoi_hdr

__all__ = [
    'plot_voronoi_hdr',
]

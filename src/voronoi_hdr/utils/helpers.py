# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""
Utility functions, defaults and helpers.

This module contains the default run parameters and small helpers that don't
fit neatly into other categories.
"""

import os
from typing import Tuple


# Default run parameters
DEFAULT_N_OBSERVATIONS = 10000
DEFAULT_ALPHA = 0.1
DEFAULT_METHOD = 'top_down'
DEFAULT_MU_X = 0.0
DEFAULT_SIGMA_X = 2.0
DEFAULT_MU_Y = 0.0
DEFAULT_SIGMA_Y = 1.0

# Standard page dimensions
PAGE_WIDTH_PT = 455.24411  # LaTeX page width in points
PAGE_HEIGHT_PT = 702.78308  # LaTeX page height in points
POINTS_PER_INCH = 72.27

PAGE_WIDTH_IN = PAGE_WIDTH_PT / POINTS_PER_INCH  # ≈ 6.30 inches
PAGE_HEIGHT_IN = PAGE_HEIGHT_PT / POINTS_PER_INCH  # ≈ 9.73 inches


def compute_figure_size(width_fraction: float = 1.0,
                        height_fraction: float = 1.0) -> Tuple[float, float]:
    """
    Compute figure size as fraction of page dimensions.

    :param width_fraction: Fraction of page width (default 1.0).
    :type width_fraction: float
    :param height_fraction: Fraction of page height (default 1.0).
    :type height_fraction: float
    :return: Tuple of (width, height) in inches.
    :rtype: Tuple[float, float]
    """
    return PAGE_WIDTH_IN * width_fraction, PAGE_HEIGHT_IN * height_fraction


def ensure_dir_exists(path: str) -> None:
    """
    Ensure the parent directory of a file path exists.

    :param path: File path.
    :type path: str
    """
    os.makedirs(os.path.dirname(path) if os.path.dirname(path) else '.', exist_ok=True)

# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""Synthetic bivariate normal samples."""

import numpy as np
from typing import Optional


def sample_normal(n: int,
                  mu_x: float = 0.0,
                  sigma_x: float = 2.0,
                  mu_y: float = 0.0,
                  sigma_y: float = 1.0,
                  independent: bool = True,
                  rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """
    Draw n observations from a bivariate normal distribution.

    With ``independent=False`` the Y coordinate is shifted by ``|x|``, giving
    a banana-shaped sample whose HDR is not an ellipse.

    :param n: Number of observations.
    :type n: int
    :param mu_x: Mean along X.
    :type mu_x: float
    :param sigma_x: Standard deviation along X.
    :type sigma_x: float
    :param mu_y: Mean along Y.
    :type mu_y: float
    :param sigma_y: Standard deviation along Y.
    :type sigma_y: float
    :param independent: If False, add ``|x|`` to every Y.
    :type independent: bool
    :param rng: NumPy random generator for reproducibility.
    :type rng: Optional[np.random.Generator]
    :return: (n, 2) array of observations.
    :rtype: np.ndarray
    """
    if n < 0:
        raise ValueError(f"Number of observations must be non-negative, got {n}")
    if rng is None:
        rng = np.random.default_rng()

    x = mu_x + sigma_x * rng.standard_normal(n)
    y = mu_y + sigma_y * rng.standard_normal(n)
    if not independent:
        y = y + np.abs(x)
    return np.column_stack([x, y])

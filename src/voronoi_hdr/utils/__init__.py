# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""Utils module for defaults, sampling and helpers."""

from .helpers import (
    DEFAULT_N_OBSERVATIONS,
    DEFAULT_ALPHA,
    DEFAULT_METHOD,
    DEFAULT_MU_X,
    DEFAULT_SIGMA_X,
    DEFAULT_MU_Y,
    DEFAULT_SIGMA_Y,
    PAGE_WIDTH_IN,
    PAGE_HEIGHT_IN,
    compute_figure_size,
    ensure_dir_exists
)

from .sampling import sample_normal

__all__ = [
    'DEFAULT_N_OBSERVATIONS',
    'DEFAULT_ALPHA',
    'DEFAULT_METHOD',
    'DEFAULT_MU_X',
    'DEFAULT_SIGMA_X',
    'DEFAULT_MU_Y',
    'DEFAULT_SIGMA_Y',
    'PAGE_WIDTH_IN',
    'PAGE_HEIGHT_IN',
    'compute_figure_size',
    'ensure_dir_exists',
    'sample_normal',
]

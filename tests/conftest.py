# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

import os
import sys

import matplotlib
import numpy as np
import pytest

matplotlib.use('Agg')

# Add src to path if running from source
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

"""Shared fixtures: the plus pattern and a seeded normal sample."""


PLUS = [(0.0, 0.0), (1.0, 0.0), (-1.0, 0.0), (0.0, 1.0), (0.0, -1.0)]


@pytest.fixture
def plus_points():
    return np.array(PLUS)


@pytest.fixture
def normal_sample():
    from voronoi_hdr.utils import sample_normal

    return sample_normal(300, rng=np.random.default_rng(12345))

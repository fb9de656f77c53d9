# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

import numpy as np
import pytest

from voronoi_hdr.geometry import Vertex
from voronoi_hdr.hdr import ReferenceRegion
from voronoi_hdr.utils import PAGE_HEIGHT_IN, PAGE_WIDTH_IN, compute_figure_size, sample_normal

"""Tests for synthetic samples, the reference ellipse and small helpers."""


def test_sample_normal_shape_and_seed():
    a = sample_normal(100, rng=np.random.default_rng(1))
    b = sample_normal(100, rng=np.random.default_rng(1))
    assert a.shape == (100, 2)
    np.testing.assert_array_equal(a, b)


def test_dependent_sample_shifts_y_by_abs_x():
    ind = sample_normal(50, mu_x=1.0, sigma_x=3.0, rng=np.random.default_rng(2))
    dep = sample_normal(50, mu_x=1.0, sigma_x=3.0, independent=False,
                        rng=np.random.default_rng(2))
    np.testing.assert_array_equal(dep[:, 0], ind[:, 0])
    np.testing.assert_allclose(dep[:, 1], ind[:, 1] + np.abs(ind[:, 0]))


def test_sample_normal_rejects_negative_size():
    with pytest.raises(ValueError):
        sample_normal(-1)


def test_reference_ellipse_axes_and_area():
    # alpha = exp(-1/2) gives semi-axes equal to the standard deviations
    region = ReferenceRegion(0.0, 2.0, 0.0, 1.0, alpha=np.exp(-0.5))
    assert np.isclose(region.width, 2.0)
    assert np.isclose(region.height, 1.0)
    assert np.isclose(region.area, 2.0 * np.pi)
    assert np.isclose(region.polygon.area, region.area, rtol=1e-3)


def test_reference_contains():
    region = ReferenceRegion(1.0, 2.0, -1.0, 1.0, alpha=np.exp(-0.5))
    inside = region.contains([1.0, 2.9, 1.0, 3.5], [-1.0, -1.0, -0.05, -1.0])
    np.testing.assert_array_equal(inside, [True, True, True, False])


def test_reference_coverage_counts_duplicates():
    region = ReferenceRegion(0.0, 1.0, 0.0, 1.0, alpha=0.5)
    inner = Vertex(0, 0.0, 0.0)
    inner.add_duplicate()
    outer = Vertex(1, 5.0, 5.0)
    excluded = Vertex(2, 0.1, 0.1)
    inner.in_hdr = True
    outer.in_hdr = True

    # 2 of the expected (1 - 0.5) * 8 = 4 HDR observations lie inside
    assert np.isclose(region.coverage([inner, outer, excluded], 8), 50.0)


def test_reference_rejects_bad_parameters():
    with pytest.raises(ValueError):
        ReferenceRegion(0.0, 1.0, 0.0, 1.0, alpha=0.0)
    with pytest.raises(ValueError):
        ReferenceRegion(0.0, -1.0, 0.0, 1.0, alpha=0.1)


def test_figure_size_is_fraction_of_page():
    w, h = compute_figure_size(0.5, 0.25)
    assert np.isclose(w, PAGE_WIDTH_IN / 2)
    assert np.isclose(h, PAGE_HEIGHT_IN / 4)

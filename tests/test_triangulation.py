# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

import math

import numpy as np
import pytest
from scipy.spatial import ConvexHull

from voronoi_hdr.errors import DegenerateGeometryError, InsufficientPointsError
from voronoi_hdr.geometry import Triangle, Triangulation, compute_delaunay

"""Tests for Bowyer-Watson construction and Voronoi cell derivation.

The plus pattern {(0,0), (1,0), (-1,0), (0,1), (0,-1)} is small enough to
check by hand: four right triangles around the center, whose circumcenters
(+-0.5, +-0.5) form a unit square Voronoi cell.
"""


def _assert_empty_circumcircles(tri, rtol=1e-9):
    points = tri.points
    for triangle in tri.triangles:
        x, y, r = triangle.circumcircle
        others = np.delete(points, list(triangle.vertex_ids), axis=0)
        dist = np.hypot(others[:, 0] - x, others[:, 1] - y)
        assert np.all(dist >= r * (1.0 - rtol))


def test_plus_pattern_has_four_triangles(plus_points):
    tri = Triangulation(plus_points)

    assert len(tri.vertices) == 5
    assert len(tri.triangles) == 4
    assert len(tri.edges) == 8
    for triangle in tri.triangles:
        assert 0 in triangle.vertex_ids
    _assert_empty_circumcircles(tri)


def test_plus_pattern_areas(plus_points):
    tri = compute_delaunay(plus_points[:, 0], plus_points[:, 1])

    assert np.isclose(tri.area(), 2.0)
    assert np.isclose(tri.hull_area(), 2.0)

    center = tri.vertex(0)
    assert not center.bound
    assert np.isclose(center.area, 1.0)
    assert sorted(center.voronoi_cell) == [(-0.5, -0.5), (-0.5, 0.5), (0.5, -0.5), (0.5, 0.5)]
    for vertex in tri.vertices[1:]:
        assert vertex.bound
        assert vertex.area == math.inf


def test_vertex_ids_follow_input_order(plus_points):
    tri = Triangulation(plus_points)
    np.testing.assert_array_equal(tri.points, plus_points)
    np.testing.assert_array_equal(tri.observation_index, np.arange(5))


def test_duplicates_collapse_into_one_vertex(plus_points):
    points = np.vstack([plus_points, [[0.0, 0.0]] * 3])
    tri = compute_delaunay(points[:, 0], points[:, 1])

    assert len(tri.vertices) == 5
    assert tri.n_observations == 8
    np.testing.assert_array_equal(tri.duplicates, [3, 0, 0, 0, 0])
    np.testing.assert_array_equal(tri.observation_index, [0, 1, 2, 3, 4, 0, 0, 0])

    center = tri.vertex(0)
    assert center.observations == 4
    assert np.isclose(center.raw_area, 1.0)
    assert np.isclose(center.area, center.raw_area / 4)


def test_negative_zero_merges_with_zero(plus_points):
    points = np.vstack([plus_points, [[-0.0, 0.0]]])
    tri = Triangulation(points)
    assert len(tri.vertices) == 5
    assert tri.vertex(0).duplicates == 1


def test_coincident_points_fail_minimum_input():
    with pytest.raises(InsufficientPointsError):
        Triangulation([(1.0, 1.0)] * 4 + [(2.0, 3.0)])
    with pytest.raises(InsufficientPointsError):
        Triangulation([(0.0, 0.0), (1.0, 1.0)])


def test_insufficient_points_is_a_value_error():
    with pytest.raises(ValueError):
        Triangulation([(0.0, 0.0), (0.0, 0.0), (1.0, 1.0)])


def test_collinear_points_raise():
    with pytest.raises(DegenerateGeometryError):
        Triangulation([(0.0, 0.0), (1.0, 1.0), (2.0, 2.0), (3.0, 3.0)])


def test_malformed_input_raises_value_error():
    with pytest.raises(ValueError):
        Triangulation(np.zeros((4, 3)))
    with pytest.raises(ValueError):
        Triangulation([(0.0, 0.0), (1.0, np.nan), (2.0, 1.0)])


def test_random_sample_is_delaunay(normal_sample):
    tri = Triangulation(normal_sample)
    tri.validate()

    assert len(tri.vertices) == len(normal_sample)
    _assert_empty_circumcircles(tri)
    for triangle in tri.triangles:
        assert not triangle.is_degenerate
        assert triangle.area() > 0.0
    assert np.isclose(tri.area(), tri.hull_area())


def test_edges_border_one_or_two_triangles(normal_sample):
    tri = Triangulation(normal_sample)
    for edge in tri.edges.values():
        assert 1 <= len(edge.triangles) <= 2
        for vid in edge.vertex_ids:
            assert edge.id in tri.vertex(vid).edges


def test_voronoi_areas(normal_sample):
    tri = compute_delaunay(normal_sample[:, 0], normal_sample[:, 1])

    hull = ConvexHull(normal_sample)
    bound = {v.id for v in tri.vertices if v.bound}
    assert bound == {int(vid) for vid in hull.vertices}

    bounded = [v for v in tri.vertices if not v.bound]
    assert bounded
    for vertex in bounded:
        assert np.isfinite(vertex.area)
        assert vertex.area > 0.0
    for vertex in tri.vertices:
        if vertex.bound:
            assert vertex.area == math.inf


def test_compute_voronoi_is_idempotent(plus_points):
    tri = Triangulation(plus_points)
    assert not tri.voronoi_computed
    tri.compute_voronoi()
    tri.compute_voronoi()
    assert tri.voronoi_computed
    assert len(tri.vertex(0).voronoi_cell) == 4


def test_voronoi_segments_skip_hull_edges(plus_points):
    tri = compute_delaunay(plus_points[:, 0], plus_points[:, 1])

    hull_edges = [e for e in tri.edges.values() if e.is_hull]
    assert len(hull_edges) == 4
    for edge in hull_edges:
        assert tri.voronoi_segment(edge) is None

    assert len(tri.delaunay_segments()) == 8
    segments = tri.voronoi_segments()
    assert len(segments) == 4
    for a, b in segments:
        assert np.isclose(math.dist(a, b), 1.0)


def test_hdr_mask_defaults_to_false(plus_points):
    tri = Triangulation(plus_points)
    assert not tri.hdr_mask().any()


@pytest.mark.parametrize('seed', range(8))
def test_triangulation_covers_convex_hull(seed):
    rng = np.random.default_rng(seed)
    points = rng.standard_normal((200, 2))
    tri = Triangulation(points)

    assert np.isclose(tri.area(), tri.hull_area())
    hull = ConvexHull(points)
    tri.compute_voronoi()
    bound = {v.id for v in tri.vertices if v.bound}
    assert bound == {int(vid) for vid in hull.vertices}
    _assert_empty_circumcircles(tri)


def test_points_on_bounding_box_sides():
    # Corners sit on the super-triangle sides, and (1,0), (2,0), (3,0) lie
    # on the hull side between two of them
    rng = np.random.default_rng(11)
    boundary = np.array([(0.0, 0.0), (4.0, 0.0), (4.0, 2.0), (0.0, 2.0),
                         (1.0, 0.0), (2.0, 0.0), (3.0, 0.0)])
    inner = np.column_stack([rng.uniform(0.2, 3.8, 40), rng.uniform(0.2, 1.8, 40)])
    tri = compute_delaunay(*np.vstack([boundary, inner]).T)

    assert np.isclose(tri.area(), 8.0)
    assert {v.id for v in tri.vertices if v.bound} == set(range(7))
    for edge_ids in ((0, 4), (4, 5), (5, 6), (6, 1)):
        assert edge_ids[1] in tri.vertex(edge_ids[0]).neighbors
    _assert_empty_circumcircles(tri)


def test_degenerate_face_fails_finalization(plus_points):
    tri = Triangulation(plus_points)
    sliver = Triangle(99, (1, 0, 2), (tri.vertex(1).xy, tri.vertex(0).xy, tri.vertex(2).xy))
    assert sliver.is_degenerate
    tri._triangles[sliver.id] = sliver

    with pytest.raises(DegenerateGeometryError):
        tri._finalize()

# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""
Exception hierarchy for triangulation and HDR selection failures.

Every failure raised by the core derives from :class:`VoronoiHDRError`, so
callers can catch the whole family at once. Construction never continues after
one of these is raised.
"""


class VoronoiHDRError(Exception):
    """Base class for all core failures."""


class TopologyError(VoronoiHDRError, RuntimeError):
    """
    Vertex/edge/triangle bookkeeping became inconsistent.

    Raised for duplicate edge ids, overfull edges, missing seed triangles and
    failed invariant checks. Always fatal for the current construction.
    """


class DegenerateGeometryError(VoronoiHDRError, ArithmeticError):
    """
    Input geometry has no well-defined circumcircle.

    Raised when every input point is collinear, or when a zero-area triangle
    would survive into the finalized triangulation.
    """


class InsufficientPointsError(VoronoiHDRError, ValueError):
    """Fewer than three distinct points were supplied."""


class NoEligibleCellError(VoronoiHDRError, RuntimeError):
    """
    The boundary-graph scan found no cell it may add or remove.

    :param method: Selection policy that ran out of candidates.
    :type method: str
    :param remaining: Observations still to be excluded/included.
    :type remaining: int
    """

    def __init__(self, method: str, remaining: int):
        self.method = method
        self.remaining = remaining
        super().__init__(
            f"No eligible boundary cell left for '{method}' "
            f"({remaining} observations still to assign)"
        )

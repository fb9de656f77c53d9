# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""HDR module: boundary-graph selection and theoretical reference regions."""

from .boundary_graph import (
    HDR_METHODS,
    BoundaryGraph,
    compute_hdr
)

from .reference import ReferenceRegion

__all__ = [
    'HDR_METHODS',
    'BoundaryGraph',
    'compute_hdr',
    'ReferenceRegion',
]

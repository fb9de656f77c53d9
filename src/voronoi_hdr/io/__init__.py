# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""I/O module for observation files."""

from .observations import (
    read_observations,
    write_observations
)

__all__ = [
    'read_observations',
    'write_observations',
]

# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""
Delimited-text persistence of observations.

Each line holds one observation: X and Y separated by a tab. Files written by
older tools end every line with an extra tab and CRLF; both are accepted on
read.
"""

import os

import numpy as np

from ..utils.helpers import ensure_dir_exists


def read_observations(path: str, delimiter: str = '\t') -> np.ndarray:
    """
    Read observations from a delimited text file.

    Blank lines are skipped. Only the first two fields of a line are used.

    :param path: Path to the text file.
    :type path: str
    :param delimiter: Field separator (default tab).
    :type delimiter: str
    :return: (N, 2) array of observations.
    :rtype: np.ndarray
    :raises FileNotFoundError: If the file does not exist.
    :raises ValueError: If a line has fewer than two numeric fields.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Observation file not found: {path}")

    xs = []
    ys = []
    with open(path, 'r', encoding='utf-8') as f:
        for line_no, line in enumerate(f, start=1):
            fields = [s for s in line.strip().split(delimiter) if s.strip()]
            if not fields:
                continue
            if len(fields) < 2:
                raise ValueError(f"{path}:{line_no}: expected two fields, got {len(fields)}")
            try:
                xs.append(float(fields[0]))
                ys.append(float(fields[1]))
            except ValueError as exc:
                raise ValueError(f"{path}:{line_no}: {exc}") from exc

    return np.column_stack([np.array(xs, dtype=np.float64), np.array(ys, dtype=np.float64)])


def write_observations(points: np.ndarray, path: str, delimiter: str = '\t') -> None:
    """
    Write observations as delimited text, one per line.

    Values are written with ``repr`` precision so that reading the file back
    gives bit-identical coordinates (duplicate detection depends on it).

    :param points: (N, 2) array of observations.
    :type points: np.ndarray
    :param path: Output file path; parent directories are created.
    :type path: str
    :param delimiter: Field separator (default tab).
    :type delimiter: str
    """
    points = np.asarray(points, dtype=np.float64)
    if points.ndim != 2 or points.shape[1] != 2:
        raise ValueError(f"Expected an (N, 2) array of observations, got shape {points.shape}")

    ensure_dir_exists(path)
    with open(path, 'w', encoding='utf-8') as f:
        for x, y in points.tolist():
            f.write(f"{x!r}{delimiter}{y!r}\n")

# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

import matplotlib.pyplot as plt
import numpy as np

from voronoi_hdr.cli import build_parser, main
from voronoi_hdr.geometry import Triangulation
from voronoi_hdr.hdr import ReferenceRegion, compute_hdr
from voronoi_hdr.io import write_observations
from voronoi_hdr.visualization import plot_voronoi_hdr

"""Smoke tests for plotting (Agg backend) and the command-line entry point."""


def test_plot_returns_figure_without_path(plus_points):
    tri = Triangulation(plus_points)
    compute_hdr(tri, alpha=0.8, method='top_down')

    fig = plot_voronoi_hdr(tri, show_delaunay=True, title='plus')
    assert fig is not None
    ax = fig.axes[0]
    assert len(ax.collections) >= 3
    plt.close(fig)


def test_plot_saves_figure(normal_sample, tmp_path):
    tri = Triangulation(normal_sample)
    compute_hdr(tri, alpha=0.1, method='top_down')
    region = ReferenceRegion(0.0, 2.0, 0.0, 1.0, alpha=0.1)
    output = tmp_path / 'figs' / 'hdr.png'

    result = plot_voronoi_hdr(tri, output_path=str(output), reference=region, dpi=50)

    assert result is None
    assert output.exists()


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.method == 'top-down'
    assert args.alpha == 0.1
    assert args.input is None


def test_cli_generated_sample(tmp_path, capsys):
    obs = tmp_path / 'obs.txt'
    fig = tmp_path / 'hdr.png'
    code = main(['-n', '200', '--seed', '4', '--method', 'bottom-up',
                 '--save-observations', str(obs), '--output', str(fig), '--dpi', '50'])

    out = capsys.readouterr().out
    assert code == 0
    assert obs.exists()
    assert fig.exists()
    assert 'HDR area' in out
    assert 'Coverage' in out


def test_cli_reads_input_file(tmp_path, capsys):
    path = tmp_path / 'obs.txt'
    write_observations(np.array([(0.0, 0.0), (1.0, 0.0), (-1.0, 0.0), (0.0, 1.0), (0.0, -1.0)]),
                       str(path))

    code = main(['--input', str(path), '--alpha', '0.8', '--method', 'top-down',
                 '--no-reference'])

    out = capsys.readouterr().out
    assert code == 0
    assert 'Theoretical area' not in out


def test_cli_reports_errors(tmp_path, capsys):
    code = main(['--input', str(tmp_path / 'missing.txt')])
    assert code == 1
    assert 'Error' in capsys.readouterr().err


def test_cli_reports_core_failures(tmp_path, capsys):
    path = tmp_path / 'line.txt'
    write_observations(np.array([(0.0, 0.0), (1.0, 1.0), (2.0, 2.0)]), str(path))
    code = main(['--input', str(path)])
    assert code == 1
    assert 'collinear' in capsys.readouterr().err

#!/usr/bin/env python3
"""
Voronoi HDR analysis script.

This script triangulates a sample of observations, selects its highest
density region with a boundary-graph policy and compares the result with the
theoretical HDR of the generating normal distribution.
"""

import sys
import os

# Add src to path if running from source
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from voronoi_hdr.cli import main


if __name__ == '__main__':
    sys.exit(main())

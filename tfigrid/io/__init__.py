"""
I/O module for the grid generator.

Provides grid writers and readers (CSV, Plot3D) and grid plots.
"""

from .output import write_grid_csv, read_grid_csv, points_to_grid
from .plot3d import write_plot3d_ascii, read_plot3d_ascii
from .plotting import plot_grid

__all__ = [
    'write_grid_csv',
    'read_grid_csv',
    'points_to_grid',
    'write_plot3d_ascii',
    'read_plot3d_ascii',
    'plot_grid',
]

"""
Plot3D structured grid files (2D, single block, ASCII).

Layout: a header line ``ni nj`` followed by all x-coordinates and then all
y-coordinates, one value per line, in Fortran (i fastest) order.
"""

from pathlib import Path
from typing import Tuple, Union

import numpy as np


def write_plot3d_ascii(filename: Union[str, Path], X: np.ndarray, Y: np.ndarray) -> Path:
    """
    Write a grid in ASCII Plot3D format.

    Parameters
    ----------
    filename : str or Path
        Output file path.
    X, Y : ndarray, shape (ni, nj)
        Node coordinates.

    Returns
    -------
    Path
        Path to the written file.
    """
    path = Path(filename)
    if path.parent != Path('.'):
        path.parent.mkdir(parents=True, exist_ok=True)

    ni, nj = X.shape

    with open(path, 'w') as f:
        f.write(f"{ni:10d}{nj:10d}\n")

        for val in X.flatten(order='F'):
            f.write(f"  {val:18.10E}\n")

        for val in Y.flatten(order='F'):
            f.write(f"  {val:18.10E}\n")

    return path


def read_plot3d_ascii(filename: Union[str, Path]) -> Tuple[np.ndarray, np.ndarray]:
    """
    Read a 2D single-block ASCII Plot3D file.

    Returns
    -------
    X, Y : ndarray
        Grid coordinates with shape (ni, nj).
    """
    with open(filename, 'r') as f:
        tokens = f.read().split()

    if len(tokens) < 2:
        raise ValueError(f"Plot3D file too short: {filename}")

    ni, nj = int(tokens[0]), int(tokens[1])
    n_points = ni * nj

    if len(tokens) < 2 + 2 * n_points:
        raise ValueError(
            f"Plot3D file {filename} declares {ni} x {nj} nodes "
            f"but holds only {len(tokens) - 2} values"
        )

    values = np.array(tokens[2:2 + 2 * n_points], dtype=float)

    X = values[:n_points].reshape((ni, nj), order='F')
    Y = values[n_points:].reshape((ni, nj), order='F')

    return X, Y

"""
CSV export of structured grids.

File Format:
    Plain text, no header, one ``x,y`` line per grid node. Nodes are written
    with the i index running fastest: all i for j = 0, then all i for j = 1,
    and so on. Values use Python's default float text, which round-trips
    exactly.
"""

from pathlib import Path
from typing import Tuple, Union

import numpy as np


def write_grid_csv(filename: Union[str, Path], X: np.ndarray, Y: np.ndarray) -> Path:
    """
    Write grid nodes to a comma-separated file.

    Parameters
    ----------
    filename : str or Path
        Output file path. Parent directories are created if needed.
    X, Y : ndarray, shape (ni, nj)
        Node coordinates indexed [i, j].

    Returns
    -------
    Path
        Path to the written file.
    """
    if X.shape != Y.shape:
        raise ValueError(f"Coordinate arrays differ in shape: {X.shape} vs {Y.shape}")

    path = Path(filename)
    if path.parent != Path('.'):
        path.parent.mkdir(parents=True, exist_ok=True)

    # Fortran order: i fastest, matching index j*ni + i
    xs = X.flatten(order='F').tolist()
    ys = Y.flatten(order='F').tolist()

    with open(path, 'w') as f:
        for x, y in zip(xs, ys):
            f.write(f"{x},{y}\n")

    return path


def read_grid_csv(filename: Union[str, Path]) -> np.ndarray:
    """
    Read grid nodes written by :func:`write_grid_csv`.

    Returns
    -------
    points : ndarray, shape (N, 2)
        Node coordinates in file order.
    """
    points = []
    with open(filename, 'r') as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            fields = line.split(',')
            if len(fields) != 2:
                raise ValueError(f"{filename}:{line_no}: expected 'x,y', got {line!r}")
            points.append((float(fields[0]), float(fields[1])))

    return np.array(points, dtype=float).reshape(-1, 2)


def points_to_grid(points: np.ndarray, ni: int, nj: int) -> Tuple[np.ndarray, np.ndarray]:
    """Reshape row-major (N, 2) points back to (ni, nj) coordinate arrays."""
    if points.shape[0] != ni * nj:
        raise ValueError(f"Expected {ni * nj} points for a {ni} x {nj} grid, got {points.shape[0]}")
    X = points[:, 0].reshape((ni, nj), order='F')
    Y = points[:, 1].reshape((ni, nj), order='F')
    return X, Y

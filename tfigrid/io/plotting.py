"""
Visualization of generated grids.
"""

from pathlib import Path
from typing import Optional, Union

import numpy as np

# Lazy import matplotlib to avoid backend setup on import
_plt = None


def _ensure_matplotlib():
    """Ensure matplotlib is available and configured."""
    global _plt
    if _plt is None:
        import matplotlib
        matplotlib.use('Agg')  # Non-interactive backend
        import matplotlib.pyplot as plt
        _plt = plt
    return _plt


def plot_grid(X: np.ndarray, Y: np.ndarray, filename: Union[str, Path],
              title: Optional[str] = None, show_nodes: bool = False) -> Path:
    """
    Draw the grid lines of a structured grid and save the figure.

    Parameters
    ----------
    X, Y : ndarray, shape (ni, nj)
        Node coordinates.
    filename : str or Path
        Output image path (format from the extension, e.g. .png or .pdf).
    title : str, optional
        Figure title. Defaults to the grid dimensions.
    show_nodes : bool
        Also mark the nodes.

    Returns
    -------
    Path
        Path to the saved figure.
    """
    plt = _ensure_matplotlib()

    path = Path(filename)
    if path.parent != Path('.'):
        path.parent.mkdir(parents=True, exist_ok=True)

    ni, nj = X.shape

    fig, ax = plt.subplots(figsize=(12, 5))

    for i in range(ni):
        ax.plot(X[i, :], Y[i, :], 'k-', linewidth=0.5)
    for j in range(nj):
        ax.plot(X[:, j], Y[:, j], 'k-', linewidth=0.5)

    if show_nodes:
        ax.scatter(X.flatten(), Y.flatten(), s=2, c='tab:blue', zorder=3)

    ax.set_aspect('equal')
    ax.set_title(title or f'Transfinite grid ({ni - 1} x {nj - 1} cells)')
    ax.set_xlabel('x')
    ax.set_ylabel('y')

    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)

    return path

"""
Transfinite interpolation (TFI) grid generation on a four-sided domain.

The domain is bounded by four curves in the roles bottom, right, top and
left. Every curve runs with increasing parameter from the left side to the
right side (bottom, top) or from the bottom side to the top side (left,
right), so the corners of the quadrilateral are

    lower-left   left(0)  == bottom(0)
    lower-right  bottom(1) == right(0)
    upper-right  right(1) == top(1)
    upper-left   top(0)   == left(1)

Grid nodes are stored as two arrays of shape (nx+1, ny+1) indexed [i, j],
where i runs along bottom/top (xi, uniform) and j along left/right (eta,
tanh-clustered toward the bottom).
"""

import copy
from numbers import Integral
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

import numpy as np
from loguru import logger

from .clustering import DEFAULT_STRETCHING, tanh_clustering, uniform_parameters
from .curves import CurveLike
from ..io.output import write_grid_csv
from ..io.plot3d import write_plot3d_ascii

# Absolute tolerance for matching curve end points at the corners
SMALL = 1e-5

SIDES = ('bottom', 'right', 'top', 'left')

# corner -> ((side, t), (side, t)) pairs that must coincide
CORNERS = {
    'lower-left': (('left', 0.0), ('bottom', 0.0)),
    'lower-right': (('bottom', 1.0), ('right', 0.0)),
    'upper-right': (('right', 1.0), ('top', 1.0)),
    'upper-left': (('top', 0.0), ('left', 1.0)),
}


class DomainError(Exception):
    """Base class for grid domain errors."""
    pass


class InconsistentBoundaryError(DomainError):
    """The four boundary curves do not close at the corners."""

    def __init__(self, mismatches: Dict[str, Tuple[float, float]]):
        self.mismatches = mismatches
        failing = [
            f"{corner} (dx={dx:.3e}, dy={dy:.3e})"
            for corner, (dx, dy) in mismatches.items()
            if not (dx < SMALL and dy < SMALL)
        ]
        super().__init__(
            "Boundary curves do not match at corner(s): " + ", ".join(failing)
        )


class InvalidGridSizeError(DomainError, ValueError):
    """Requested number of grid divisions is not a positive integer."""
    pass


class GridNotGeneratedError(DomainError, RuntimeError):
    """An operation needs a grid but generate_grid() has not been called."""
    pass


def _sample(curve: CurveLike, params: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Evaluate a curve at each parameter value."""
    xs = np.array([curve.x(t) for t in params], dtype=float)
    ys = np.array([curve.y(t) for t in params], dtype=float)
    return xs, ys


class Domain:
    """
    Four-sided domain that generates a structured grid by TFI.

    The curves are held by reference; the caller keeps ownership and must
    not mutate them while the domain is in use.

    Parameters
    ----------
    bottom, right, top, left : CurveLike
        Boundary curves, each evaluated through ``x(t)`` and ``y(t)``.
    stretching : float
        Factor of the tanh clustering along eta.

    Raises
    ------
    InconsistentBoundaryError
        If any corner mismatch reaches the tolerance ``SMALL``.

    Example
    -------
    >>> domain = Domain(HLine(0, 1, 0), VLine(0, 1, 1), HLine(0, 1, 1), VLine(0, 1, 0))
    >>> domain.generate_grid(10, 5)
    >>> domain.write_grid("grid.csv")
    """

    def __init__(self, bottom: CurveLike, right: CurveLike, top: CurveLike,
                 left: CurveLike, stretching: float = DEFAULT_STRETCHING):
        if not stretching > 0.0:
            raise ValueError(f"Stretching factor must be positive, got {stretching}")

        self._sides = {'bottom': bottom, 'right': right, 'top': top, 'left': left}
        self.stretching = float(stretching)

        mismatches = self.corner_mismatches()
        if not self._corners_match(mismatches):
            err = InconsistentBoundaryError(mismatches)
            logger.error(f"No valid boundary curves provided: {err}")
            raise err

        logger.debug(f"Boundary curves consistent: {mismatches}")

        self._nx = 0
        self._ny = 0
        self._x: Optional[np.ndarray] = None
        self._y: Optional[np.ndarray] = None

    # ------------------------------------------------------------------
    # Boundary consistency
    # ------------------------------------------------------------------

    def corner_mismatches(self) -> Dict[str, Tuple[float, float]]:
        """Absolute (dx, dy) mismatch of the curve end points at each corner."""
        mismatches = {}
        for corner, ((side_a, t_a), (side_b, t_b)) in CORNERS.items():
            a = self._sides[side_a]
            b = self._sides[side_b]
            dx = abs(a.x(t_a) - b.x(t_b))
            dy = abs(a.y(t_a) - b.y(t_b))
            mismatches[corner] = (float(dx), float(dy))
        return mismatches

    @staticmethod
    def _corners_match(mismatches: Dict[str, Tuple[float, float]]) -> bool:
        return all(dx < SMALL and dy < SMALL for dx, dy in mismatches.values())

    def check_consistency(self) -> bool:
        """True if all four corners match within ``SMALL``."""
        return self._corners_match(self.corner_mismatches())

    # ------------------------------------------------------------------
    # Grid generation
    # ------------------------------------------------------------------

    def generate_grid(self, nx: int, ny: int) -> None:
        """
        Generate the grid by transfinite interpolation.

        Any previously generated grid is replaced.

        Parameters
        ----------
        nx : int
            Number of divisions along bottom/top (xi).
        ny : int
            Number of divisions along left/right (eta).

        Raises
        ------
        InvalidGridSizeError
            If nx or ny is not a positive integer. The current grid is kept.
        """
        for name, n in (('nx', nx), ('ny', ny)):
            if isinstance(n, bool) or not isinstance(n, Integral) or n <= 0:
                logger.error(f"Invalid grid sizes provided: nx={nx!r}, ny={ny!r}")
                raise InvalidGridSizeError(f"{name} must be a positive integer, got {n!r}")

        nx = int(nx)
        ny = int(ny)

        xi = uniform_parameters(nx)
        eta = tanh_clustering(ny, self.stretching)

        bot_x, bot_y = _sample(self._sides['bottom'], xi)
        top_x, top_y = _sample(self._sides['top'], xi)
        left_x, left_y = _sample(self._sides['left'], eta)
        right_x, right_y = _sample(self._sides['right'], eta)

        # Broadcast to (nx+1, ny+1): xi varies along axis 0, eta along axis 1
        s = xi[:, np.newaxis]
        e = eta[np.newaxis, :]
        phi0_s, phi1_s = 1.0 - s, s
        phi0_e, phi1_e = 1.0 - e, e

        # Corner terms differ between x and y: x uses bottom(0) and right(0),
        # y uses left(0) and top(0).
        X = (phi0_s * left_x[np.newaxis, :]
             + phi1_s * right_x[np.newaxis, :]
             + phi0_e * bot_x[:, np.newaxis]
             + phi1_e * top_x[:, np.newaxis]
             - phi0_s * phi0_e * bot_x[0]
             - phi1_s * phi0_e * right_x[0]
             - phi0_s * phi1_e * bot_x[0]
             - phi1_s * phi1_e * right_x[0])

        Y = (phi0_s * left_y[np.newaxis, :]
             + phi1_s * right_y[np.newaxis, :]
             + phi0_e * bot_y[:, np.newaxis]
             + phi1_e * top_y[:, np.newaxis]
             - phi0_s * phi0_e * left_y[0]
             - phi1_s * phi0_e * left_y[0]
             - phi0_s * phi1_e * top_y[0]
             - phi1_s * phi1_e * top_y[0])

        self._nx, self._ny = nx, ny
        self._x, self._y = X, Y

        logger.info(f"Generated TFI grid: {nx} x {ny} cells ({X.size} nodes)")

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def nx(self) -> int:
        return self._nx

    @property
    def ny(self) -> int:
        return self._ny

    @property
    def x(self) -> Optional[np.ndarray]:
        """Node x-coordinates, shape (nx+1, ny+1), or None before generation."""
        return self._x

    @property
    def y(self) -> Optional[np.ndarray]:
        """Node y-coordinates, shape (nx+1, ny+1), or None before generation."""
        return self._y

    @property
    def has_grid(self) -> bool:
        return self._x is not None and self._y is not None

    @property
    def shape(self) -> Tuple[int, int]:
        """Grid dimensions in nodes (nx+1, ny+1); (0, 0) before generation."""
        if not self.has_grid:
            return (0, 0)
        return self._x.shape

    @property
    def curves(self) -> Dict[str, CurveLike]:
        return dict(self._sides)

    @property
    def eta(self) -> np.ndarray:
        """Clustered eta samples of the current grid."""
        self._require_grid()
        return tanh_clustering(self._ny, self.stretching)

    @property
    def points(self) -> np.ndarray:
        """Nodes as an (N, 2) array in row-major order (index j*(nx+1) + i)."""
        self._require_grid()
        return np.column_stack([
            self._x.flatten(order='F'),
            self._y.flatten(order='F'),
        ])

    def _require_grid(self) -> None:
        if not self.has_grid:
            logger.error("No grid has been generated previously.")
            raise GridNotGeneratedError(
                "No grid has been generated; call generate_grid(nx, ny) first"
            )

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def write_grid(self, filename: Union[str, Path] = "grid.csv") -> Path:
        """
        Export the grid nodes as ``x,y`` lines (CSV, no header).

        Raises
        ------
        GridNotGeneratedError
            If no grid has been generated.
        """
        self._require_grid()
        path = write_grid_csv(filename, self._x, self._y)
        logger.info(f"Grid written to {path}")
        return path

    def write_plot3d(self, filename: Union[str, Path] = "grid.p3d") -> Path:
        """Export the grid in ASCII Plot3D format."""
        self._require_grid()
        path = write_plot3d_ascii(filename, self._x, self._y)
        logger.info(f"Plot3D grid written to {path}")
        return path

    def plot(self, filename: Union[str, Path] = "grid.png", **kwargs) -> Path:
        """Save a figure of the grid lines."""
        from ..io.plotting import plot_grid

        self._require_grid()
        path = plot_grid(self._x, self._y, filename, **kwargs)
        logger.info(f"Grid plot saved to {path}")
        return path

    # ------------------------------------------------------------------
    # Copying
    # ------------------------------------------------------------------

    def copy(self) -> 'Domain':
        """Copy sharing the boundary curves, with independent grid arrays."""
        new = self.__class__.__new__(self.__class__)
        new._sides = dict(self._sides)
        new.stretching = self.stretching
        new._nx, new._ny = self._nx, self._ny
        new._x = None if self._x is None else self._x.copy()
        new._y = None if self._y is None else self._y.copy()
        return new

    __copy__ = copy

    def __deepcopy__(self, memo):
        new = self.copy()
        new._sides = copy.deepcopy(self._sides, memo)
        return new

    def __repr__(self) -> str:
        state = f"{self._nx} x {self._ny} grid" if self.has_grid else "no grid"
        return f"Domain({state}, stretching={self.stretching})"

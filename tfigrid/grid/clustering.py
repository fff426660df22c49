"""
Parameter distributions along the grid directions.

The xi direction (bottom/top curves) is sampled uniformly. The eta direction
(left/right curves) uses a hyperbolic-tangent map that concentrates points
near eta = 0, i.e. toward the bottom boundary.
"""

import numpy as np

# Stretching factor of the tanh clustering map
DEFAULT_STRETCHING = 3.0


def uniform_parameters(n: int) -> np.ndarray:
    """Uniform samples i/n for i = 0..n."""
    if n <= 0:
        raise ValueError(f"Number of divisions must be positive, got {n}")
    h = 1.0 / n
    return h * np.arange(n + 1)


def tanh_clustering(n: int, stretching: float = DEFAULT_STRETCHING) -> np.ndarray:
    """
    Clustered samples eta_j = 1 + tanh(k (j/n - 1)) / tanh(k), j = 0..n.

    The map fixes eta(0) = 0 and eta(n) = 1 (up to the rounding of j * (1/n))
    and is strictly increasing.
    Spacing grows monotonically toward eta = 1, so nodes gather near
    eta = 0; larger k clusters harder.

    Parameters
    ----------
    n : int
        Number of divisions.
    stretching : float
        Clustering factor k > 0.

    Returns
    -------
    eta : ndarray, shape (n+1,)
    """
    if not stretching > 0.0:
        raise ValueError(f"Stretching factor must be positive, got {stretching}")
    s = uniform_parameters(n)
    return 1.0 + np.tanh(stretching * (s - 1.0)) / np.tanh(stretching)

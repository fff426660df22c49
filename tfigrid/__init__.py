"""
Structured grid generation by transfinite interpolation.

Four boundary curves close a quadrilateral domain; the interior nodes are
blended from the boundaries, with tanh clustering toward the bottom wall.
"""

from .grid import (
    Curve,
    HLine,
    VLine,
    ParametricCurve,
    BumpCurve,
    Domain,
    DomainError,
    InconsistentBoundaryError,
    InvalidGridSizeError,
    GridNotGeneratedError,
)

__version__ = "0.1.0"

__all__ = [
    'Curve',
    'HLine',
    'VLine',
    'ParametricCurve',
    'BumpCurve',
    'Domain',
    'DomainError',
    'InconsistentBoundaryError',
    'InvalidGridSizeError',
    'GridNotGeneratedError',
]

"""
Grid generation module.

This module provides tools for:
- Describing boundary curves (straight segments, arc-length parameterised curves)
- Clustering grid parameters with a tanh stretching map
- Generating structured grids by transfinite interpolation
"""

from .curves import (
    CurveLike,
    Curve,
    HLine,
    VLine,
    ParametricCurve,
    BumpCurve,
    CURVE_TYPES,
    build_curve,
)

from .clustering import (
    DEFAULT_STRETCHING,
    uniform_parameters,
    tanh_clustering,
)

from .domain import (
    SMALL,
    Domain,
    DomainError,
    InconsistentBoundaryError,
    InvalidGridSizeError,
    GridNotGeneratedError,
)

__all__ = [
    # Curves
    'CurveLike',
    'Curve',
    'HLine',
    'VLine',
    'ParametricCurve',
    'BumpCurve',
    'CURVE_TYPES',
    'build_curve',
    # Clustering
    'DEFAULT_STRETCHING',
    'uniform_parameters',
    'tanh_clustering',
    # Domain
    'SMALL',
    'Domain',
    'DomainError',
    'InconsistentBoundaryError',
    'InvalidGridSizeError',
    'GridNotGeneratedError',
]

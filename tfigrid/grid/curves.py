"""
Boundary curves for transfinite grid generation.

Every curve is evaluated at a normalised parameter t in [0, 1] through
``x(t)`` and ``y(t)``. The grid domain only relies on that pair of methods,
so any object providing them can be used as a boundary.

Curves given in a raw parameter p (e.g. the x-coordinate of a graph) are
re-parameterised by normalised arc length, so that uniform samples in t are
uniform in distance along the curve.
"""

from abc import ABC, abstractmethod
from typing import Dict, Protocol, Tuple, Type

import numpy as np
from scipy.integrate import quad
from scipy.optimize import brentq


class CurveLike(Protocol):
    """Anything that can be used as a domain boundary."""

    def x(self, t: float) -> float: ...

    def y(self, t: float) -> float: ...


class Curve(ABC):
    """Base class for boundary curves parameterised over t in [0, 1]."""

    @abstractmethod
    def x(self, t: float) -> float:
        """x-coordinate at normalised parameter t."""

    @abstractmethod
    def y(self, t: float) -> float:
        """y-coordinate at normalised parameter t."""

    def point(self, t: float) -> Tuple[float, float]:
        return self.x(t), self.y(t)

    @property
    def start(self) -> Tuple[float, float]:
        return self.point(0.0)

    @property
    def end(self) -> Tuple[float, float]:
        return self.point(1.0)


class HLine(Curve):
    """Horizontal segment from (x_start, y) to (x_end, y)."""

    def __init__(self, x_start: float, x_end: float, y: float):
        self.x_start = float(x_start)
        self.x_end = float(x_end)
        self.y_const = float(y)

    def x(self, t: float) -> float:
        return self.x_start + t * (self.x_end - self.x_start)

    def y(self, t: float) -> float:
        return self.y_const

    def __repr__(self) -> str:
        return f"HLine(x_start={self.x_start}, x_end={self.x_end}, y={self.y_const})"


class VLine(Curve):
    """Vertical segment from (x, y_start) to (x, y_end)."""

    def __init__(self, y_start: float, y_end: float, x: float):
        self.y_start = float(y_start)
        self.y_end = float(y_end)
        self.x_const = float(x)

    def x(self, t: float) -> float:
        return self.x_const

    def y(self, t: float) -> float:
        return self.y_start + t * (self.y_end - self.y_start)

    def __repr__(self) -> str:
        return f"VLine(y_start={self.y_start}, y_end={self.y_end}, x={self.x_const})"


class ParametricCurve(Curve):
    """
    Curve given by (xp(p), yp(p)) for p in [a, b], evaluated by arc length.

    Subclasses provide the raw parameterisation and its derivatives. The
    public ``x(s)`` / ``y(s)`` map the normalised arc length s in [0, 1] to
    the raw parameter p that satisfies ``length(a, p) = s * length(a, b)``.

    Parameters
    ----------
    a, b : float
        Raw parameter interval, a < b.
    """

    def __init__(self, a: float, b: float):
        if not b > a:
            raise ValueError(f"Parameter interval must satisfy a < b, got [{a}, {b}]")
        self.a = float(a)
        self.b = float(b)
        self._length = None

    @abstractmethod
    def xp(self, p: float) -> float: ...

    @abstractmethod
    def yp(self, p: float) -> float: ...

    @abstractmethod
    def dxp(self, p: float) -> float: ...

    @abstractmethod
    def dyp(self, p: float) -> float: ...

    def _speed(self, p: float) -> float:
        return np.hypot(self.dxp(p), self.dyp(p))

    def integrate(self, p: float) -> float:
        """Arc length from a to p."""
        value, _ = quad(self._speed, self.a, p, epsabs=1e-12, epsrel=1e-10, limit=200)
        return value

    @property
    def length(self) -> float:
        """Total arc length (cached)."""
        if self._length is None:
            self._length = self.integrate(self.b)
        return self._length

    def parameter(self, s: float) -> float:
        """Raw parameter p at normalised arc length s."""
        if s < 0.0 or s > 1.0:
            raise ValueError(f"Arc-length parameter must lie in [0, 1], got {s}")
        if s == 0.0:
            return self.a
        if s == 1.0:
            return self.b
        target = s * self.length
        return brentq(lambda p: self.integrate(p) - target, self.a, self.b, xtol=1e-12)

    def x(self, s: float) -> float:
        return self.xp(self.parameter(s))

    def y(self, s: float) -> float:
        return self.yp(self.parameter(s))


def _logistic(z: float) -> float:
    """1 / (1 + exp(-z)) without overflow for large |z|."""
    e = np.exp(-abs(z))
    return 1.0 / (1.0 + e) if z >= 0.0 else e / (1.0 + e)


def _logistic_slope(z: float) -> float:
    """Derivative of the logistic function, exp(-|z|) / (1 + exp(-|z|))**2."""
    e = np.exp(-abs(z))
    return e / (1.0 + e) ** 2


class BumpCurve(ParametricCurve):
    """
    Channel wall with a smooth bump, given as the graph y = f(x).

    f(x) = 0.5 / (1 + exp(-3 (x + 6)))   for x <  breakpoint
    f(x) = 0.5 / (1 + exp(3 x))          for x >= breakpoint

    shifted by ``y_offset``. Both branches meet at x = -3 where they take the
    same value.
    """

    def __init__(self, x_start: float = -10.0, x_end: float = 5.0,
                 y_offset: float = 0.0, breakpoint: float = -3.0):
        super().__init__(x_start, x_end)
        self.y_offset = float(y_offset)
        self.breakpoint = float(breakpoint)

    def xp(self, p: float) -> float:
        return p

    def yp(self, p: float) -> float:
        if p < self.breakpoint:
            return 0.5 * _logistic(3.0 * (p + 6.0)) + self.y_offset
        return 0.5 * _logistic(-3.0 * p) + self.y_offset

    def dxp(self, p: float) -> float:
        return 1.0

    def dyp(self, p: float) -> float:
        if p < self.breakpoint:
            return 1.5 * _logistic_slope(3.0 * (p + 6.0))
        return -1.5 * _logistic_slope(3.0 * p)

    def __repr__(self) -> str:
        return (f"BumpCurve(x_start={self.a}, x_end={self.b}, "
                f"y_offset={self.y_offset}, breakpoint={self.breakpoint})")


CURVE_TYPES: Dict[str, Type[Curve]] = {
    'hline': HLine,
    'vline': VLine,
    'bump': BumpCurve,
}


def build_curve(spec) -> Curve:
    """
    Build a curve from a ``CurveConfig`` (or any object with ``type`` and
    ``params`` attributes).
    """
    curve_type = spec.type.lower()
    if curve_type not in CURVE_TYPES:
        raise ValueError(
            f"Unknown curve type '{spec.type}'. Available: {', '.join(sorted(CURVE_TYPES))}"
        )
    try:
        return CURVE_TYPES[curve_type](**spec.params)
    except TypeError as e:
        raise ValueError(f"Invalid parameters for curve type '{spec.type}': {e}") from e

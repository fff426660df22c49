"""
Shared pytest fixtures for the test suite.

Boundary sets used across tests:
- ``rectangle``: straight-sided channel [-10, 5] x [0, 3], corners match exactly
- ``reference``: the same channel with the bump on the bottom wall
- ``skewed``: four straight segments forming a general quadrilateral
"""

import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tfigrid.grid import HLine, VLine, BumpCurve, Domain


class Segment:
    """Straight segment between two points, exposing only x(t) and y(t)."""

    def __init__(self, start, end):
        self.start = start
        self.end = end

    def x(self, t):
        return self.start[0] + t * (self.end[0] - self.start[0])

    def y(self, t):
        return self.start[1] + t * (self.end[1] - self.start[1])


def quadrilateral(ll, lr, ur, ul):
    """Bottom, right, top, left segments of the quadrilateral ll-lr-ur-ul."""
    return {
        'bottom': Segment(ll, lr),
        'right': Segment(lr, ur),
        'top': Segment(ul, ur),
        'left': Segment(ll, ul),
    }


@pytest.fixture
def rectangle_curves():
    return {
        'bottom': HLine(-10.0, 5.0, 0.0),
        'right': VLine(0.0, 3.0, 5.0),
        'top': HLine(-10.0, 5.0, 3.0),
        'left': VLine(0.0, 3.0, -10.0),
    }


@pytest.fixture(scope="session")
def reference_curves():
    """
    Channel with a bump on the bottom wall.

    Session-scoped: the arc-length curve caches its length.
    """
    return {
        'bottom': BumpCurve(-10.0, 5.0, 0.0, -3.0),
        'right': VLine(0.0, 3.0, 5.0),
        'top': HLine(-10.0, 5.0, 3.0),
        'left': VLine(0.0, 3.0, -10.0),
    }


@pytest.fixture
def skewed_curves():
    return quadrilateral((0.0, 0.0), (4.0, 0.5), (3.5, 3.0), (-0.5, 2.0))


@pytest.fixture
def rectangle(rectangle_curves):
    return Domain(**rectangle_curves)


@pytest.fixture
def reference_domain(reference_curves):
    return Domain(**reference_curves)


@pytest.fixture
def make_quadrilateral():
    """Factory: corner points (ll, lr, ur, ul) -> dict of boundary segments."""
    return quadrilateral

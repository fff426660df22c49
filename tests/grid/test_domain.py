"""
Tests for the transfinite interpolation domain (tfigrid/grid/domain.py).

Validates:
1. Corner consistency checks at construction
2. Grid shape and boundary reproduction
3. Interior blending against an explicit loop implementation
4. Grid replacement, invalid sizes, copying and export preconditions
"""

import copy
import math

import numpy as np
import pytest

from tfigrid.grid import (
    SMALL,
    Domain,
    DomainError,
    InconsistentBoundaryError,
    InvalidGridSizeError,
    GridNotGeneratedError,
    tanh_clustering,
)


def loop_tfi(curves, nx, ny, k=3.0):
    """Node-by-node evaluation of the blending formula, for comparison."""
    bottom, right, top, left = (curves[s] for s in ('bottom', 'right', 'top', 'left'))
    hx, hy = 1.0 / nx, 1.0 / ny

    bot = [(bottom.x(hx * i), bottom.y(hx * i)) for i in range(nx + 1)]
    tp = [(top.x(hx * i), top.y(hx * i)) for i in range(nx + 1)]
    etas = [1.0 + math.tanh(k * (hy * j - 1.0)) / math.tanh(k) for j in range(ny + 1)]
    lft = [(left.x(e), left.y(e)) for e in etas]
    rgt = [(right.x(e), right.y(e)) for e in etas]

    X = np.zeros((nx + 1, ny + 1))
    Y = np.zeros((nx + 1, ny + 1))
    for j in range(ny + 1):
        for i in range(nx + 1):
            s, e = hx * i, etas[j]
            X[i, j] = ((1 - s) * lft[j][0] + s * rgt[j][0] + (1 - e) * bot[i][0] + e * tp[i][0]
                       - (1 - s) * (1 - e) * bot[0][0] - s * (1 - e) * rgt[0][0]
                       - (1 - s) * e * bot[0][0] - s * e * rgt[0][0])
            Y[i, j] = ((1 - s) * lft[j][1] + s * rgt[j][1] + (1 - e) * bot[i][1] + e * tp[i][1]
                       - (1 - s) * (1 - e) * lft[0][1] - s * (1 - e) * lft[0][1]
                       - (1 - s) * e * tp[0][1] - s * e * tp[0][1])
    return X, Y


class TestConsistency:
    """Corner matching at construction."""

    def test_matching_corners_accepted(self, rectangle):
        assert rectangle.check_consistency()
        assert all(m == (0.0, 0.0) for m in rectangle.corner_mismatches().values())

    def test_reference_domain_within_tolerance(self, reference_domain):
        # Bump wall ends are ~3e-6 above the channel floor
        mismatches = reference_domain.corner_mismatches()
        assert 0.0 < mismatches['lower-left'][1] < SMALL
        assert reference_domain.check_consistency()

    @pytest.mark.parametrize("corner, perturb", [
        ('lower-left', lambda q, d: q['left'].start.__setitem__(1, d)),
        ('lower-right', lambda q, d: q['right'].start.__setitem__(0, 1.0 + d)),
        ('upper-right', lambda q, d: q['right'].end.__setitem__(1, 1.0 + d)),
        ('upper-left', lambda q, d: q['left'].end.__setitem__(0, d)),
    ])
    def test_single_corner_mismatch(self, make_quadrilateral, corner, perturb):
        curves = make_quadrilateral([0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0])
        # Each segment gets its own end point lists
        for seg in curves.values():
            seg.start, seg.end = list(seg.start), list(seg.end)

        perturb(curves, 2e-5)

        with pytest.raises(InconsistentBoundaryError) as exc_info:
            Domain(**curves)

        err = exc_info.value
        assert corner in str(err)
        assert max(err.mismatches[corner]) == pytest.approx(2e-5)
        others = [c for c in err.mismatches if c != corner]
        assert all(err.mismatches[c] == (0.0, 0.0) for c in others)

    def test_mismatch_below_tolerance_accepted(self, make_quadrilateral):
        curves = make_quadrilateral((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0))
        curves['left'].start = (5e-6, -5e-6)
        assert Domain(**curves).check_consistency()

    def test_swapped_roles_rejected(self, rectangle_curves):
        c = rectangle_curves
        with pytest.raises(InconsistentBoundaryError):
            Domain(c['top'], c['right'], c['bottom'], c['left'])

    def test_errors_share_base_class(self):
        assert issubclass(InconsistentBoundaryError, DomainError)
        assert issubclass(InvalidGridSizeError, ValueError)
        assert issubclass(GridNotGeneratedError, RuntimeError)

    @pytest.mark.parametrize("stretching", [0.0, -1.0, float("nan")])
    def test_nonpositive_stretching_rejected(self, rectangle_curves, stretching):
        with pytest.raises(ValueError):
            Domain(stretching=stretching, **rectangle_curves)


class TestGeneration:
    """Grid shape, boundaries and interior values."""

    def test_initial_state(self, rectangle):
        assert rectangle.nx == 0 and rectangle.ny == 0
        assert rectangle.x is None and rectangle.y is None
        assert not rectangle.has_grid
        assert rectangle.shape == (0, 0)

    @pytest.mark.parametrize("nx, ny", [(1, 1), (2, 2), (7, 3), (49, 19)])
    def test_point_count(self, rectangle, nx, ny):
        rectangle.generate_grid(nx, ny)
        assert rectangle.x.shape == (nx + 1, ny + 1)
        assert rectangle.y.shape == (nx + 1, ny + 1)
        assert rectangle.points.shape == ((nx + 1) * (ny + 1), 2)
        assert (rectangle.nx, rectangle.ny) == (nx, ny)

    def test_two_by_two_grid(self, rectangle, rectangle_curves):
        rectangle.generate_grid(2, 2)
        X, Y = rectangle.x, rectangle.y

        # Corners equal the curve end points used by the consistency check
        c = rectangle_curves
        assert (X[0, 0], Y[0, 0]) == pytest.approx((c['bottom'].x(0.0), c['bottom'].y(0.0)))
        assert (X[-1, 0], Y[-1, 0]) == pytest.approx((c['bottom'].x(1.0), c['bottom'].y(1.0)))
        assert (X[-1, -1], Y[-1, -1]) == pytest.approx((c['top'].x(1.0), c['top'].y(1.0)))
        assert (X[0, -1], Y[0, -1]) == pytest.approx((c['top'].x(0.0), c['top'].y(0.0)))

        # Center node by hand: xi = 1/2, eta = 1 + tanh(-1.5)/tanh(3)
        eta = 1.0 + math.tanh(-1.5) / math.tanh(3.0)
        assert X[1, 1] == pytest.approx(-2.5)
        assert Y[1, 1] == pytest.approx(3.0 * eta)

    def test_rectangle_boundaries_reproduced(self, rectangle, rectangle_curves):
        nx, ny = 6, 5
        rectangle.generate_grid(nx, ny)
        X, Y = rectangle.x, rectangle.y
        c = rectangle_curves
        xi = np.arange(nx + 1) / nx
        eta = tanh_clustering(ny)

        np.testing.assert_allclose(X[:, 0], [c['bottom'].x(t) for t in xi], atol=1e-12)
        np.testing.assert_allclose(Y[:, 0], [c['bottom'].y(t) for t in xi], atol=1e-12)
        np.testing.assert_allclose(X[:, -1], [c['top'].x(t) for t in xi], atol=1e-12)
        np.testing.assert_allclose(Y[:, -1], [c['top'].y(t) for t in xi], atol=1e-12)
        np.testing.assert_allclose(X[0, :], [c['left'].x(e) for e in eta], atol=1e-12)
        np.testing.assert_allclose(Y[0, :], [c['left'].y(e) for e in eta], atol=1e-12)
        np.testing.assert_allclose(X[-1, :], [c['right'].x(e) for e in eta], atol=1e-12)
        np.testing.assert_allclose(Y[-1, :], [c['right'].y(e) for e in eta], atol=1e-12)

    def test_reference_boundaries_reproduced(self, reference_domain, reference_curves):
        nx, ny = 10, 6
        reference_domain.generate_grid(nx, ny)
        X, Y = reference_domain.x, reference_domain.y
        bottom = reference_curves['bottom']
        xi = np.arange(nx + 1) / nx

        # Bottom wall follows the bump
        np.testing.assert_allclose(X[:, 0], [bottom.x(t) for t in xi], atol=1e-9)
        np.testing.assert_allclose(Y[:, 0], [bottom.y(t) for t in xi], atol=1e-9)
        # Top wall, inlet and outlet up to the corner tolerance
        np.testing.assert_allclose(Y[:, -1], 3.0, atol=1e-9)
        np.testing.assert_allclose(X[0, :], -10.0, atol=SMALL)
        np.testing.assert_allclose(X[-1, :], 5.0, atol=SMALL)

    def test_matches_loop_evaluation(self, skewed_curves):
        domain = Domain(**skewed_curves)
        domain.generate_grid(5, 4)
        X_ref, Y_ref = loop_tfi(skewed_curves, 5, 4)
        np.testing.assert_allclose(domain.x, X_ref, rtol=0, atol=1e-13)
        np.testing.assert_allclose(domain.y, Y_ref, rtol=0, atol=1e-13)

    def test_corner_terms_kept_asymmetric(self, make_quadrilateral):
        # Sloped bottom wall: the y-correction only uses left(0) and top(0),
        # so the right-wall term does not cancel on the j = 0 row and it
        # sits at bottom_y + xi * right_y[0].
        curves = make_quadrilateral((0.0, 0.0), (2.0, 1.0), (2.0, 3.0), (0.0, 2.0))
        domain = Domain(**curves)
        domain.generate_grid(4, 4)
        X_ref, Y_ref = loop_tfi(curves, 4, 4)
        np.testing.assert_allclose(domain.y, Y_ref, atol=1e-13)

        xi = np.arange(5) / 4
        bottom_y = xi * 1.0
        np.testing.assert_allclose(domain.y[:, 0], bottom_y + xi * 1.0, atol=1e-13)

    def test_custom_stretching(self, rectangle_curves):
        domain = Domain(stretching=1.5, **rectangle_curves)
        domain.generate_grid(3, 4)
        np.testing.assert_allclose(domain.y[0, :], 3.0 * tanh_clustering(4, 1.5), atol=1e-12)
        np.testing.assert_allclose(domain.eta, tanh_clustering(4, 1.5))

    def test_points_row_major(self, rectangle):
        rectangle.generate_grid(3, 2)
        pts = rectangle.points
        nx = rectangle.nx
        for j in range(rectangle.ny + 1):
            for i in range(nx + 1):
                assert tuple(pts[j * (nx + 1) + i]) == (rectangle.x[i, j], rectangle.y[i, j])


class TestLifecycle:
    """Regeneration, invalid input and copying."""

    def test_regenerate_replaces_grid(self, rectangle):
        rectangle.generate_grid(8, 6)
        rectangle.generate_grid(2, 3)
        assert rectangle.x.shape == (3, 4)
        assert rectangle.points.shape == (12, 2)

        fresh = rectangle.copy()
        fresh.generate_grid(2, 3)
        np.testing.assert_array_equal(rectangle.x, fresh.x)

    def test_regenerate_same_size_allocates_same_shape(self, rectangle):
        rectangle.generate_grid(4, 4)
        first = rectangle.x.copy()
        for _ in range(3):
            rectangle.generate_grid(4, 4)
        assert rectangle.x.shape == first.shape
        np.testing.assert_array_equal(rectangle.x, first)

    @pytest.mark.parametrize("nx, ny", [(0, 5), (-1, 5), (5, 0), (3, -2), (2.5, 3), (True, 2), ("4", 4)])
    def test_invalid_sizes_rejected(self, rectangle, nx, ny):
        rectangle.generate_grid(3, 3)
        x_before = rectangle.x
        y_before = rectangle.y.copy()

        with pytest.raises(InvalidGridSizeError):
            rectangle.generate_grid(nx, ny)

        assert rectangle.x is x_before
        np.testing.assert_array_equal(rectangle.y, y_before)
        assert (rectangle.nx, rectangle.ny) == (3, 3)

    def test_invalid_size_on_empty_domain(self, rectangle):
        with pytest.raises(InvalidGridSizeError):
            rectangle.generate_grid(0, 5)
        assert not rectangle.has_grid

    def test_numpy_integer_sizes(self, rectangle):
        rectangle.generate_grid(np.int64(3), np.int32(2))
        assert rectangle.shape == (4, 3)

    def test_copy_shares_curves_and_owns_grid(self, rectangle):
        rectangle.generate_grid(4, 3)
        clone = copy.copy(rectangle)

        for side, curve in rectangle.curves.items():
            assert clone.curves[side] is curve
        assert clone.x is not rectangle.x
        np.testing.assert_array_equal(clone.x, rectangle.x)

        clone.x[1, 1] = 99.0
        assert rectangle.x[1, 1] != 99.0

        clone.generate_grid(2, 2)
        assert rectangle.shape == (5, 4)

    def test_copy_without_grid(self, rectangle):
        clone = rectangle.copy()
        assert not clone.has_grid
        assert clone.nx == 0 and clone.ny == 0

    def test_deepcopy_copies_curves(self, rectangle):
        rectangle.generate_grid(2, 2)
        clone = copy.deepcopy(rectangle)
        assert clone.curves['bottom'] is not rectangle.curves['bottom']
        np.testing.assert_array_equal(clone.y, rectangle.y)


class TestExportPreconditions:
    """Operations that need a grid."""

    def test_write_without_grid(self, rectangle, tmp_path):
        with pytest.raises(GridNotGeneratedError):
            rectangle.write_grid(tmp_path / "grid.csv")
        assert not (tmp_path / "grid.csv").exists()

    def test_plot3d_without_grid(self, rectangle, tmp_path):
        with pytest.raises(GridNotGeneratedError):
            rectangle.write_plot3d(tmp_path / "grid.p3d")

    def test_points_without_grid(self, rectangle):
        with pytest.raises(GridNotGeneratedError):
            rectangle.points

    def test_write_returns_path(self, rectangle, tmp_path):
        rectangle.generate_grid(2, 2)
        path = rectangle.write_grid(tmp_path / "sub" / "grid.csv")
        assert path.exists()
        assert len(path.read_text().splitlines()) == 9

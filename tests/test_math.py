"""
Tests for easing/util/math.py
"""

from __future__ import annotations

import numpy as np
import pytest

from easing.util.math import (
    DERIVATIVE_DELTA,
    derivative,
    fast_inverse_sqrt,
    fast_normalize,
)


class TestFastInverseSqrt:
    """Test the bit-hack reciprocal square root."""

    def test_one(self):
        assert abs(fast_inverse_sqrt(1.0) - 1.0) < 1e-9

    def test_four(self):
        assert abs(fast_inverse_sqrt(4.0) - 0.5) < 1e-6

    def test_quarter(self):
        assert abs(fast_inverse_sqrt(0.25) - 2.0) < 1e-6

    def test_returns_float_for_scalar(self):
        assert isinstance(fast_inverse_sqrt(2.0), float)
        assert isinstance(fast_inverse_sqrt(np.float64(2.0)), float)

    def test_unit_interval_accuracy(self):
        x = np.linspace(1e-3, 1.0, 1000)
        np.testing.assert_allclose(fast_inverse_sqrt(x), 1.0 / np.sqrt(x), rtol=1e-9)

    def test_wide_range_accuracy(self):
        x = np.geomspace(1e-300, 1e300, 601)
        np.testing.assert_allclose(fast_inverse_sqrt(x), 1.0 / np.sqrt(x), rtol=1e-9)

    def test_monotonic_decreasing(self):
        x = np.geomspace(1e-6, 1e6, 2000)
        y = fast_inverse_sqrt(x)
        assert np.all(np.diff(y) < 0.0)

    def test_array_shape_preserved(self):
        x = np.array([[1.0, 4.0], [16.0, 0.25]])
        y = fast_inverse_sqrt(x)
        assert y.shape == (2, 2)
        np.testing.assert_allclose(y, [[1.0, 0.5], [0.25, 2.0]], rtol=1e-9)

    def test_input_not_modified(self):
        x = np.array([4.0, 9.0])
        fast_inverse_sqrt(x)
        np.testing.assert_array_equal(x, [4.0, 9.0])

    @pytest.mark.parametrize("bad", [0.0, -1.0, float("nan"), float("inf")])
    def test_outside_domain_does_not_raise(self, bad):
        with np.errstate(all="ignore"):
            out = fast_inverse_sqrt(bad)
        assert isinstance(out, float)


class TestDerivative:
    """Test the central-difference slope."""

    def test_square_at_two(self):
        assert derivative(lambda x: x * x, 2.0, 1e-6) == pytest.approx(4.0, abs=1e-6)

    def test_default_step_is_smallest_normal(self):
        assert DERIVATIVE_DELTA == np.finfo(np.float64).tiny
        assert DERIVATIVE_DELTA > 0.0

    def test_default_step_absorbed_away_from_origin(self):
        # 2 +/- tiny rounds to 2, so the estimate collapses.
        assert derivative(lambda x: x * x, 2.0) == 0.0

    def test_default_step_exact_at_origin(self):
        assert derivative(lambda x: 3.0 * x, 0.0) == 3.0

    def test_vector_valued(self):
        d = derivative(lambda t: np.array([t, 2.0 * t, -t]), 0.5, 1e-4)
        np.testing.assert_allclose(d, [1.0, 2.0, -1.0], rtol=1e-9)

    def test_sine(self):
        assert derivative(np.sin, 0.3, 1e-5) == pytest.approx(np.cos(0.3), abs=1e-8)


class TestFastNormalize:
    def test_unit_length(self):
        v = fast_normalize(np.array([3.0, 4.0, 0.0]))
        np.testing.assert_allclose(v, [0.6, 0.8, 0.0], rtol=1e-9, atol=1e-12)

    def test_matches_exact_norm(self):
        v = np.array([0.1, -2.5, 7.0])
        np.testing.assert_allclose(fast_normalize(v), v / np.linalg.norm(v), rtol=1e-9)

    def test_accepts_sequence(self):
        np.testing.assert_allclose(fast_normalize([0.0, 2.0, 0.0]), [0.0, 1.0, 0.0], rtol=1e-9)

    def test_zero_vector(self):
        z = np.zeros(3)
        np.testing.assert_array_equal(fast_normalize(z), z)

"""Unit tests for the series coefficients and Clenshaw summation."""

import numpy as np
import pytest

from geodesic.clenshaw import sin_cos_series
from geodesic.series import (
    SeriesTables,
    a1m1f,
    a2m1f,
    a3_coeff,
    c1f,
    c1pf,
    c2f,
    c3_coeff,
    c4_coeff,
    expansion_parameter,
    polyval,
)


class TestPolyval:
    """Test suite for polyval."""

    def test_horner(self):
        """Test 2x² - 3x + 5 at a few points."""
        coeffs = (2, -3, 5)
        x = np.array([0.0, 1.0, 2.0, -1.5])
        np.testing.assert_allclose(polyval(2, coeffs, 0, x), 2 * x ** 2 - 3 * x + 5)

    def test_offset_into_table(self):
        """Test evaluation starting part way through a packed table."""
        coeffs = (9, 9, 1, 4)
        assert polyval(1, coeffs, 2, 2.0) == pytest.approx(6.0)

    def test_negative_order_is_zero(self):
        assert polyval(-1, (1, 2), 0, 3.0) == 0


class TestExpansionParameter:
    """Test suite for expansion_parameter."""

    def test_zero(self):
        assert float(expansion_parameter(0.0)) == 0.0

    def test_matches_direct_form(self):
        """Test against (sqrt(1 + k²) - 1) / (sqrt(1 + k²) + 1)."""
        k2 = np.array([1e-3, 6.7e-3, 0.1, 0.5])
        root = np.sqrt(1 + k2)
        np.testing.assert_allclose(expansion_parameter(k2), (root - 1) / (root + 1), rtol=1e-13)

    def test_small_k2(self):
        """Test ε ≈ k²/4 for small k²."""
        assert float(expansion_parameter(1e-12)) == pytest.approx(2.5e-13, rel=1e-9)


class TestPerQueryCoefficients:
    """Test suite for coefficients that depend on ε only."""

    def test_vanish_on_sphere(self):
        """Test every correction is zero when ε = 0."""
        eps = np.zeros(3)
        np.testing.assert_array_equal(a1m1f(eps), 0.0)
        np.testing.assert_array_equal(a2m1f(eps), 0.0)
        np.testing.assert_array_equal(c1f(eps), 0.0)
        np.testing.assert_array_equal(c1pf(eps), 0.0)
        np.testing.assert_array_equal(c2f(eps), 0.0)

    def test_shapes(self):
        """Test the sine-series coefficients have one row per order plus row 0."""
        eps = np.full(5, 1e-3)
        assert c1f(eps).shape == (7, 5)
        assert c1pf(eps).shape == (7, 5)
        assert c2f(eps).shape == (7, 5)

    def test_leading_terms(self):
        """Test the lowest-order terms of the expansions."""
        eps = np.array([1e-4])
        np.testing.assert_allclose(a1m1f(eps), eps, rtol=1e-3)
        np.testing.assert_allclose(a2m1f(eps), -eps, rtol=1e-3)
        np.testing.assert_allclose(c1f(eps)[1], -eps / 2, rtol=1e-3)
        np.testing.assert_allclose(c1pf(eps)[1], eps / 2, rtol=1e-3)
        np.testing.assert_allclose(c2f(eps)[1], eps / 2, rtol=1e-3)

    def test_c1p_reverts_c1(self):
        """Test τ = σ + B1(σ) is inverted by σ = τ + B1'(τ)."""
        eps = np.full(4, 0.005)
        sigma = np.array([0.1, 0.7, 2.0, -1.3])
        tau = sigma + sin_cos_series(True, np.sin(sigma), np.cos(sigma), c1f(eps))
        back = tau + sin_cos_series(True, np.sin(tau), np.cos(tau), c1pf(eps))
        np.testing.assert_allclose(back, sigma, rtol=0, atol=1e-13)


class TestEllipsoidTables:
    """Test suite for the tables that depend on the third flattening."""

    def test_a3_on_sphere(self):
        """Test A3 = 1 - ε/2 - ε²/4 - ε³/16 - 3ε⁴/64 - 3ε⁵/128 when n = 0."""
        expected = [-3 / 128, -3 / 64, -1 / 16, -1 / 4, -1 / 2, 1.0]
        np.testing.assert_allclose(a3_coeff(0.0), expected, rtol=1e-15)

    def test_c4_leading_constant(self):
        """Test the constant term of C4[0] is 2/3 when n = 0."""
        assert c4_coeff(0.0)[5] == pytest.approx(2.0 / 3.0, rel=1e-15)

    def test_table_sizes(self):
        assert a3_coeff(0.001).shape == (6,)
        assert c3_coeff(0.001).shape == (15,)
        assert c4_coeff(0.001).shape == (21,)

    def test_tables_are_read_only(self):
        """Test shared tables cannot be modified in place."""
        tables = SeriesTables.from_third_flattening(0.00168)
        with pytest.raises(ValueError):
            tables.a3x[0] = 1.0
        with pytest.raises(ValueError):
            tables.c4x[0] = 1.0


class TestSinCosSeries:
    """Test suite for sin_cos_series."""

    def test_sine_series(self):
        """Test against the sum Σ c_k sin(2kx)."""
        c = np.array([[0.0], [0.1], [0.02], [0.003]])
        x = np.array([0.4])
        expected = sum(c[k, 0] * np.sin(2 * k * x) for k in range(1, 4))
        result = sin_cos_series(True, np.sin(x), np.cos(x), c)
        np.testing.assert_allclose(result, expected, atol=1e-15)

    def test_cosine_series(self):
        """Test against the sum Σ c_k cos((2k+1)x)."""
        c = np.array([[0.5], [0.2], [-0.05]])
        x = np.array([1.1])
        expected = sum(c[k, 0] * np.cos((2 * k + 1) * x) for k in range(3))
        result = sin_cos_series(False, np.sin(x), np.cos(x), c)
        np.testing.assert_allclose(result, expected, atol=1e-15)

    def test_columnwise(self):
        """Test each column is summed with its own coefficients."""
        c = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]])
        x = np.array([0.3, 0.3])
        result = sin_cos_series(True, np.sin(x), np.cos(x), c)
        np.testing.assert_allclose(result, [np.sin(0.6), np.sin(1.2)], atol=1e-15)

    def test_zero_angle(self):
        """Test a sine series vanishes exactly at x = 0."""
        c = c1f(np.array([0.003]))
        assert sin_cos_series(True, np.array([0.0]), np.array([1.0]), c)[0] == 0.0

"""
Series Coefficients for Geodesics on an Ellipsoid of Revolution.

The distance, longitude, reduced-length and area integrals along a
geodesic have no closed form. They are expanded in the small parameter

    ε = (sqrt(1 + k²) - 1) / (sqrt(1 + k²) + 1),   k² = e'² cos²α0

and, where the ellipsoid enters separately, in the third flattening
n = f / (2 - f). All expansions are truncated at sixth order, which is
accurate to round-off for |f| <= 1/50.

Two kinds of quantity live here:

* Ellipsoid tables (`SeriesTables`): polynomials in n that depend only on
  the ellipsoid. They are built once per ellipsoid and shared read-only.
* Per-query coefficients: functions of ε (one value per geodesic),
  vectorised over numpy arrays.

The coefficient layout is the packed form used by GeographicLib: each
polynomial is stored highest power first, followed by its divisor.

References
----------
- Karney, C.F.F. (2013). Algorithms for geodesics. J. Geodesy, 87(1),
  43-55.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from common.constants import PhysicalConstants


ORDER = PhysicalConstants.SERIES_ORDER

N_A1 = ORDER
N_C1 = ORDER
N_C1P = ORDER
N_A2 = ORDER
N_C2 = ORDER
N_A3 = ORDER
N_A3X = N_A3
N_C3 = ORDER
N_C3X = (N_C3 * (N_C3 - 1)) // 2
N_C4 = ORDER
N_C4X = (N_C4 * (N_C4 + 1)) // 2


_A1M1_COEFF = (1, 4, 64, 0, 256)

_C1_COEFF = (
    -1, 6, -16, 32,
    -9, 64, -128, 2048,
    9, -16, 768,
    3, -5, 512,
    -7, 1280,
    -7, 2048,
)

_C1P_COEFF = (
    205, -432, 768, 1536,
    4005, -4736, 3840, 12288,
    -225, 116, 384,
    -7173, 2695, 7680,
    3467, 7680,
    38081, 61440,
)

_A2M1_COEFF = (-11, -28, -192, 0, 256)

_C2_COEFF = (
    1, 2, 16, 32,
    35, 64, 384, 2048,
    15, 80, 768,
    7, 35, 512,
    63, 1280,
    77, 2048,
)

_A3_COEFF = (
    -3, 128,
    -2, -3, 64,
    -1, -3, -1, 16,
    3, -1, -2, 8,
    1, -1, 2,
    1, 1,
)

_C3_COEFF = (
    3, 128,
    2, 5, 128,
    -1, 3, 3, 64,
    -1, 0, 1, 8,
    -1, 1, 4,
    5, 256,
    1, 3, 128,
    -3, -2, 3, 64,
    1, -3, 2, 32,
    7, 512,
    -10, 9, 384,
    5, -9, 5, 192,
    7, 512,
    -14, 7, 512,
    21, 2560,
)

_C4_COEFF = (
    97, 15015,
    1088, 156, 45045,
    -224, -4784, 1573, 45045,
    -10656, 14144, -4576, -858, 45045,
    64, 624, -4576, 6864, -3003, 15015,
    100, 208, 572, 3432, -12012, 30030, 45045,
    1, 9009,
    -2944, 468, 135135,
    5792, 1040, -1287, 135135,
    5952, -11648, 9152, -2574, 135135,
    -64, -624, 4576, -6864, 3003, 135135,
    8, 10725,
    1856, -936, 225225,
    -8448, 4992, -1144, 225225,
    -1440, 4160, -4576, 1716, 225225,
    -136, 63063,
    1024, -208, 105105,
    3584, -3328, 1144, 315315,
    -128, 135135,
    -2560, 832, 405405,
    128, 99099,
)


def polyval(order: int, coeffs, start: int, x):
    """Evaluate a polynomial by Horner's method.

    Parameters
    ----------
    order : int
        Degree of the polynomial; a negative order gives 0.
    coeffs : sequence of float
        Flat coefficient table.
    start : int
        Index of the leading (highest power) coefficient in `coeffs`.
    x : float or ndarray
        Evaluation point(s).

    Returns
    -------
    float or ndarray
        p(x) with the same shape as x.
    """
    y = coeffs[start] + 0 * x if order >= 0 else 0 * x
    for k in range(1, order + 1):
        y = y * x + coeffs[start + k]
    return y


def expansion_parameter(k2: ArrayLike) -> NDArray[np.float64]:
    """ε from k² = e'² cos²α0, in the cancellation-free form."""
    k2 = np.asarray(k2, dtype=np.float64)
    return k2 / (2 * (1 + np.sqrt(1 + k2)) + k2)


# =========================================================================
# Ellipsoid tables (polynomials in n)
# =========================================================================

@dataclass(frozen=True)
class SeriesTables:
    """Coefficient tables that depend only on the ellipsoid.

    Attributes
    ----------
    n : float
        Third flattening the tables were built for.
    a3x : ndarray
        Coefficients of A3 in ε, highest power first (6 entries).
    c3x : ndarray
        Coefficients of C3[l] in ε, packed by l (15 entries).
    c4x : ndarray
        Coefficients of C4[l] in ε, packed by l (21 entries).

    The arrays are read-only so that a cached instance can be shared
    between threads.
    """
    n: float
    a3x: NDArray[np.float64]
    c3x: NDArray[np.float64]
    c4x: NDArray[np.float64]

    @classmethod
    def from_third_flattening(cls, n: float) -> 'SeriesTables':
        """Build the tables for third flattening n."""
        tables = cls(n=float(n), a3x=a3_coeff(n), c3x=c3_coeff(n), c4x=c4_coeff(n))
        for table in (tables.a3x, tables.c3x, tables.c4x):
            table.flags.writeable = False
        return tables


def a3_coeff(n: float) -> NDArray[np.float64]:
    """Coefficients of A3 as polynomials in n."""
    a3x = np.zeros(N_A3X)
    o = 0
    k = 0
    for j in range(N_A3 - 1, -1, -1):       # coeff of eps^j
        m = min(N_A3 - j - 1, j)            # order of polynomial in n
        a3x[k] = polyval(m, _A3_COEFF, o, n) / _A3_COEFF[o + m + 1]
        k += 1
        o += m + 2
    return a3x


def c3_coeff(n: float) -> NDArray[np.float64]:
    """Coefficients of C3[l] as polynomials in n."""
    c3x = np.zeros(N_C3X)
    o = 0
    k = 0
    for l in range(1, N_C3):
        for j in range(N_C3 - 1, l - 1, -1):
            m = min(N_C3 - j - 1, j)
            c3x[k] = polyval(m, _C3_COEFF, o, n) / _C3_COEFF[o + m + 1]
            k += 1
            o += m + 2
    return c3x


def c4_coeff(n: float) -> NDArray[np.float64]:
    """Coefficients of C4[l] as polynomials in n."""
    c4x = np.zeros(N_C4X)
    o = 0
    k = 0
    for l in range(N_C4):
        for j in range(N_C4 - 1, l - 1, -1):
            m = N_C4 - j - 1
            c4x[k] = polyval(m, _C4_COEFF, o, n) / _C4_COEFF[o + m + 1]
            k += 1
            o += m + 2
    return c4x


# =========================================================================
# Per-query coefficients (functions of ε)
# =========================================================================

def a1m1f(eps: NDArray[np.float64]) -> NDArray[np.float64]:
    """A1 - 1."""
    m = N_A1 // 2
    t = polyval(m, _A1M1_COEFF, 0, eps * eps) / _A1M1_COEFF[m + 1]
    return (t + eps) / (1 - eps)


def c1f(eps: NDArray[np.float64]) -> NDArray[np.float64]:
    """C1[l] for l = 1..6. Row 0 is unused."""
    return _sine_coefficients(eps, _C1_COEFF, N_C1)


def c1pf(eps: NDArray[np.float64]) -> NDArray[np.float64]:
    """C1'[l] for l = 1..6, the reversion of the C1 series."""
    return _sine_coefficients(eps, _C1P_COEFF, N_C1P)


def a2m1f(eps: NDArray[np.float64]) -> NDArray[np.float64]:
    """A2 - 1."""
    m = N_A2 // 2
    t = polyval(m, _A2M1_COEFF, 0, eps * eps) / _A2M1_COEFF[m + 1]
    return (t - eps) / (1 + eps)


def c2f(eps: NDArray[np.float64]) -> NDArray[np.float64]:
    """C2[l] for l = 1..6. Row 0 is unused."""
    return _sine_coefficients(eps, _C2_COEFF, N_C2)


def _sine_coefficients(eps, coeff, order):
    eps = np.asarray(eps, dtype=np.float64)
    eps2 = eps * eps
    c = np.zeros((order + 1,) + eps.shape)
    d = eps
    o = 0
    for l in range(1, order + 1):
        m = (order - l) // 2                # order of polynomial in eps^2
        c[l] = d * polyval(m, coeff, o, eps2) / coeff[o + m + 1]
        o += m + 2
        d = d * eps
    return c


def a3f(eps: NDArray[np.float64], tables: SeriesTables) -> NDArray[np.float64]:
    """A3 evaluated from the ellipsoid table."""
    return polyval(N_A3 - 1, tables.a3x, 0, np.asarray(eps, dtype=np.float64))


def c3f(eps: NDArray[np.float64], tables: SeriesTables) -> NDArray[np.float64]:
    """C3[l] for l = 1..5. Row 0 is unused."""
    eps = np.asarray(eps, dtype=np.float64)
    c = np.zeros((N_C3,) + eps.shape)
    mult = np.ones_like(eps)
    o = 0
    for l in range(1, N_C3):
        m = N_C3 - l - 1                    # order of polynomial in eps
        mult = mult * eps
        c[l] = mult * polyval(m, tables.c3x, o, eps)
        o += m + 1
    return c


def c4f(eps: NDArray[np.float64], tables: SeriesTables) -> NDArray[np.float64]:
    """C4[l] for l = 0..5."""
    eps = np.asarray(eps, dtype=np.float64)
    c = np.zeros((N_C4,) + eps.shape)
    mult = np.ones_like(eps)
    o = 0
    for l in range(N_C4):
        m = N_C4 - l - 1
        c[l] = mult * polyval(m, tables.c4x, o, eps)
        o += m + 1
        mult = mult * eps
    return c

"""
Clenshaw Summation of Trigonometric Series.

Every ellipsoidal correction in the solver is a truncated Fourier series
in the arc length σ on the auxiliary sphere. They are summed here with
Clenshaw's backward recurrence, which needs only sin σ and cos σ and is
numerically stable for the small, rapidly decreasing coefficients
produced by `geodesic.series`.

References
----------
- Clenshaw, C.W. (1955). A note on the summation of Chebyshev series.
  Math. Tables Aids Comput. 9(51), 118-120.
- Karney, C.F.F. (2013). Algorithms for geodesics. J. Geodesy, 87(1), 43-55.
"""

import numpy as np
from numpy.typing import NDArray


def sin_cos_series(
    sinp: bool,
    sinx: NDArray[np.float64],
    cosx: NDArray[np.float64],
    c: NDArray[np.float64]
) -> NDArray[np.float64]:
    """Evaluate a sine or cosine series by Clenshaw summation.

    Parameters
    ----------
    sinp : bool
        True to evaluate Σ_{k=1}^{K} c[k] sin(2kx); c[0] is ignored.
        False to evaluate Σ_{k=0}^{K-1} c[k] cos((2k+1)x).
    sinx, cosx : ndarray
        sin x and cos x, shape (N,). Passing them instead of x keeps exact
        zeros exact.
    c : ndarray
        Series coefficients, shape (K + 1, N) for sine series or (K, N)
        for cosine series. Columns match the elements of sinx.

    Returns
    -------
    ndarray
        The series value for each element, shape (N,).

    Notes
    -----
    The recurrence is b_k = 2 cos(2x) b_{k+1} - b_{k+2} + c_k, unrolled
    two steps at a time. Results depend only on the arguments.
    """
    k = c.shape[0]
    n = k - (1 if sinp else 0)
    # 2 * cos(2 * x)
    ar = 2 * (cosx - sinx) * (cosx + sinx)
    y1 = np.zeros_like(ar)
    if n & 1:
        k -= 1
        y0 = c[k] + y1
    else:
        y0 = np.zeros_like(ar)

    n = n // 2
    while n:
        n -= 1
        k -= 1
        y1 = ar * y0 - y1 + c[k]
        k -= 1
        y0 = ar * y1 - y0 + c[k]

    if sinp:
        # sin(2 * x) * y0
        return 2 * sinx * cosx * y0
    # cos(x) * (y0 - y1)
    return cosx * (y0 - y1)

from __future__ import annotations

from typing import Callable

import numpy as np

# Smallest positive normal float64.
DERIVATIVE_DELTA = float(np.finfo(np.float64).tiny)

# sqrt(2**1023) as a float64 bit pattern.
_RSQRT_MAGIC = np.uint64(0x5FE6A09E667F3BC8)
_ONE = np.uint64(1)


def fast_normalize(v: np.ndarray) -> np.ndarray:
    """Unit vector along v, scaled by fast_inverse_sqrt of the squared length.

    A zero vector is returned unchanged.
    """
    v = np.asarray(v, dtype=np.float64)
    n2 = float(np.dot(v, v))
    if n2 == 0.0:
        return v
    return v * fast_inverse_sqrt(n2)


def fast_inverse_sqrt(x):
    """Approximate 1/sqrt(x) with the 64-bit "Quake" bit hack.

    The float64 bits of x are reinterpreted as uint64, shifted and subtracted
    from a magic constant, reinterpreted back as float64 and refined with three
    Newton-Raphson steps on g(y) = 1/y**2 - x. For x in (0, 1] the result is
    within ~1e-9 relative error of the exact value.

    Accepts a float or an array (vectorized). Zero, negative, NaN and infinite
    inputs are outside the domain: the result is unspecified and no error is
    raised.
    """
    scalar = np.ndim(x) == 0
    # ndmin=1 keeps the uint64 math on arrays, which wrap instead of warning.
    xf = np.array(x, dtype=np.float64, ndmin=1)
    bits = xf.view(np.uint64)
    y = (_RSQRT_MAGIC - (bits >> _ONE)).view(np.float64)
    y = y * (1.5 - 0.5 * xf * y * y)
    y = y * (1.5 - 0.5 * xf * y * y)
    y = y * (1.5 - 0.5 * xf * y * y)
    if scalar:
        return float(y[0])
    return y.reshape(np.shape(x))


def derivative(f: Callable[[float], float], x: float, delta: float = DERIVATIVE_DELTA):
    """Central-difference slope of f at x.

    With the default delta (smallest normal float64) x +/- delta rounds back to
    x for any |x| well above delta, so the estimate collapses to 0 there. Only
    functions evaluated near the origin see a meaningful slope; pass a larger
    delta for a usable estimate elsewhere.

    f may return a scalar or an array; the result has the same shape.
    """
    return (np.asarray(f(x + delta)) - np.asarray(f(x - delta))) / (2.0 * delta)

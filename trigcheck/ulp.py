"""ULP distances and bit-level comparison of binary64 values."""

import math

from .utils import bits_of

SIGN_BIT = 1 << 63
# sign and the 11 exponent bits
SIGN_EXPONENT_MASK = 0xFFF0000000000000
# distance reported when either operand is NaN
INCOMPARABLE = (1 << 63) - 1


def ordinal(x):
    """Position of ``x`` on the integer line of binary64 values.

    Same-sign values are monotonic in their bit patterns, so the magnitude
    bits give the position and the sign bit gives the side of zero. Both
    zeros map to 0.
    """
    bits = bits_of(x)
    if bits & SIGN_BIT:
        return -(bits - SIGN_BIT)
    return bits


def ulp_distance(x, y):
    """Signed count of binary64 steps from ``y`` up to ``x``.

    Positive when ``x`` is above ``y``. The distance between 0.0 and -0.0 is
    0. If either operand is NaN the result is ``INCOMPARABLE``. Distances
    between values of opposite sign can exceed 64 bits; they are clamped to
    ``[-INCOMPARABLE, INCOMPARABLE]``, so no comparable pair is farther apart
    than a NaN.
    """
    if math.isnan(x) or math.isnan(y):
        return INCOMPARABLE
    d = ordinal(x) - ordinal(y)
    return max(-INCOMPARABLE, min(INCOMPARABLE, d))


def about(old, new):
    """Describe how the bit patterns of ``old`` and ``new`` differ."""
    a, b = bits_of(old), bits_of(new)
    if (a ^ b) & SIGN_EXPONENT_MASK:
        return "Exponents or signs differ !"
    # position of the most significant set bit, at least 1
    n = max(abs(a - b).bit_length(), 1)
    return f"Mantissas differ in {n:2d} bits"

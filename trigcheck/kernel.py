"""Sine, cosine and one-minus-cosine from one range reduction.

The polynomials and reduction constants are those of the Cephes Math
Library's ``sin.c`` (Stephen L. Moshier). The aim is an accurate
``1 - cos(x)``; the sine and cosine come out of the same evaluation. The
kernel is not correct for arguments of huge magnitude, which would need a
more elaborate range reduction.
"""

import math
from typing import NamedTuple

FOUR_OVER_PI = 1.27323954473516268615

# pi/4 split into three parts of decreasing magnitude
DP1 = 7.85398125648498535156e-1
DP2 = 3.77489470793079817668e-8
DP3 = 2.69515142907905952645e-15

# sin(z) = z + z**3 * P(z**2), 0 <= z <= pi/4
SIN_COEFFS = (
    1.58962301576546568060e-10,
    -2.50507477628578072866e-8,
    2.75573136213857245213e-6,
    -1.98412698295895385996e-4,
    8.33333333332211858878e-3,
    -1.66666666666666307295e-1,
)

# 1 - cos(z) = z**2 / 2 - z**4 * Q(z**2), 0 <= z <= pi/4
OMC_COEFFS = (
    -1.13585365213876817300e-11,
    2.08757008419747316778e-9,
    -2.75573141792967388112e-7,
    2.48015872888517045348e-5,
    -1.38888888888730564116e-3,
    4.16666666666665929218e-2,
)


class SinCosOmc(NamedTuple):
    sin: float
    cos: float
    omc: float


def _horner(coeffs, zz):
    acc = coeffs[0]
    for c in coeffs[1:]:
        acc = acc * zz + c
    return acc


def sincos1cos(x: float) -> SinCosOmc:
    if x == 0:
        # keeps the sign of a negative zero
        return SinCosOmc(x, 1.0, 0.0)
    if math.isnan(x):
        return SinCosOmc(x, x, x)
    if math.isinf(x):
        nan = x - x
        return SinCosOmc(nan, nan, nan)

    sign = csign = 1
    if x < 0:
        sign = -1
        x = -x

    t = x * FOUR_OVER_PI
    if math.isinf(t):
        # no octant to reduce to
        nan = t - t
        return SinCosOmc(nan, nan, nan)
    j = int(t)
    y = float(j)
    # map zeros to origin
    if j & 1:
        j += 1
        y += 1
    j &= 7
    # reflect in x axis
    if j > 3:
        sign = -sign
        csign = -csign
        j -= 4
    if j > 1:
        csign = -csign

    # extended precision modular arithmetic
    z = ((x - y * DP1) - y * DP2) - y * DP3
    zz = z * z
    s = z + zz * z * _horner(SIN_COEFFS, zz)
    omc = 0.5 * zz - zz * zz * _horner(OMC_COEFFS, zz)

    if j == 1 or j == 2:
        if csign < 0:
            s = -s
        cos = s
        s = 1 - omc
        omc = 1 - cos
    elif csign < 0:
        cos = omc - 1
        omc = 1 - cos
    else:
        cos = 1 - omc

    if sign < 0:
        s = -s
    return SinCosOmc(s, cos, omc)

import math

from .datatypes import BinaryType, float64_t, uint64_t


def bitcast(eltype, value):
    tp = BinaryType.byid(eltype.element_id)
    return tp.from_bytes(value.to_bytearray())


def bits_of(x):
    """Bit pattern of the binary64 value ``x`` as an unsigned integer."""
    return int(bitcast(uint64_t, float64_t(x)))


def float_of(bits):
    return float(bitcast(float64_t, uint64_t(bits)))


def ieee_div(num, den):
    """``num / den`` in double precision, dividing by zero the way IEEE 754 does."""
    num, den = float(num), float(den)
    if den != 0 or math.isnan(den):
        return num / den
    if num == 0 or math.isnan(num):
        return math.nan
    return math.copysign(math.inf, num) * math.copysign(1.0, den)

"""The fixed set of mathematical functions under test."""

import math
from enum import IntEnum

from .kernel import SinCosOmc

# 21 significant digits, the width the oracle is configured to echo back
FLOAT_FORMAT = "27.20e"


class Function(IntEnum):
    SIN = 0
    COS = 1
    OMC = 2

    @property
    def short_name(self):
        return _SHORT_NAMES[self]

    @property
    def oracle_template(self):
        """Request line for the FriCAS ``CNF`` package, with an ``x`` field."""
        return f"{_ORACLE_NAMES[self]}({{x:{FLOAT_FORMAT}}})$CNF\n"

    @classmethod
    def from_short_name(cls, name):
        for fn in cls:
            if fn.short_name == name:
                return fn
        raise ValueError(f"unknown function {name!r}, expected one of sin, cos, omc")


_SHORT_NAMES = {Function.SIN: "sin", Function.COS: "cos", Function.OMC: "omc"}
_ORACLE_NAMES = {Function.SIN: "cnf_sin", Function.COS: "cnf_cos", Function.OMC: "cnf_1cs"}


def libm_sincos1cos(x):
    """The platform library's values, with one-minus-cosine by plain subtraction."""
    if math.isinf(x):
        # math.sin raises for infinities where libm returns NaN
        nan = x - x
        return SinCosOmc(nan, nan, nan)
    cos = math.cos(x)
    return SinCosOmc(math.sin(x), cos, 1 - cos)

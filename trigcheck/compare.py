"""Per-point comparison of the platform library against the kernel."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from .functions import Function, libm_sincos1cos
from .kernel import sincos1cos
from .ulp import about, ulp_distance
from .utils import ieee_div

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 1e-7


@dataclass
class FunctionValue:
    old: float
    new: float
    # only fetched for interesting points
    accurate: float = math.nan

    def is_null(self) -> bool:
        return self.old == self.new


@dataclass(frozen=True)
class InterestingPoint:
    verdict: str
    x: float
    function: Function
    about: str
    distance: int
    old: float
    new: float
    accurate: float


def interesting(distance: int) -> bool:
    return distance != 0


def accuracy_distances(v: FunctionValue) -> tuple[int, int]:
    """ULP distances of the old and the new value from the accurate one."""
    return abs(ulp_distance(v.old, v.accurate)), abs(ulp_distance(v.new, v.accurate))


def quite_interesting(v: FunctionValue, threshold: float = DEFAULT_THRESHOLD) -> str | None:
    """Return "better" or "worse" when the change is significant, else None.

    ``threshold`` needs to be positive and close to zero.
    """
    ac, bc = accuracy_distances(v)
    if ieee_div(ac - bc, bc) > threshold:
        return "better"
    if ieee_div(bc - ac, ac) > threshold:
        return "worse"
    return None


def check_point(
    x: float,
    oracle,
    kernel=sincos1cos,
    reference=libm_sincos1cos,
    threshold: float = DEFAULT_THRESHOLD,
) -> tuple[list[FunctionValue], list[InterestingPoint]]:
    """Evaluate every function at ``x``, consulting the oracle where old and new differ.

    Returns the values indexed by ``Function`` and the records of the points
    whose difference is significant relative to the accurate value.
    """
    old, new = reference(x), kernel(x)
    values = []
    records = []
    for fn in Function:
        v = FunctionValue(old[fn], new[fn])
        values.append(v)
        distance = ulp_distance(v.old, v.new)
        if not interesting(distance):
            continue
        v.accurate = oracle.evaluate(fn.oracle_template, x)
        verdict = quite_interesting(v, threshold)
        logger.debug("%s(%r): old=%r new=%r accurate=%r", fn.short_name, x, v.old, v.new, v.accurate)
        if verdict is not None:
            records.append(
                InterestingPoint(
                    verdict, x, fn, about(v.old, v.new), distance, v.old, v.new, v.accurate
                )
            )
    return values, records

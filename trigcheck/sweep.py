"""Driving loop: check consecutive binary64 points range by range."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Callable

from .compare import FunctionValue, InterestingPoint, check_point
from .config import SweepConfig
from .functions import libm_sincos1cos
from .kernel import sincos1cos
from .report import build_reports

logger = logging.getLogger(__name__)


@dataclass
class Range:
    limits: tuple[float, float]
    # values[point][function]
    values: list[list[FunctionValue]] = field(default_factory=list)


@dataclass
class SweepResult:
    ranges: list[Range]
    interesting: list[InterestingPoint]
    points_per_range: int

    def reports(self):
        return build_reports(self.ranges)


def successors(x: float, count: int) -> list[float]:
    """``count`` consecutive binary64 values starting at ``x``, plus the next one."""
    points = [x]
    for _ in range(count):
        points.append(math.nextafter(points[-1], math.inf))
    return points


class Sweep:
    def __init__(
        self,
        oracle,
        config: SweepConfig | None = None,
        kernel=sincos1cos,
        reference=libm_sincos1cos,
    ) -> None:
        self.oracle = oracle
        self.config = config or SweepConfig()
        self.kernel = kernel
        self.reference = reference

    def check_range(
        self, x: float, on_interesting: Callable[[InterestingPoint], None] | None = None
    ) -> tuple[Range, list[InterestingPoint]]:
        points = successors(x, self.config.points_per_range)
        rng = Range((points[0], points[-1]))
        records = []
        for point in points[:-1]:
            values, found = check_point(
                point, self.oracle, self.kernel, self.reference, self.config.threshold
            )
            rng.values.append(values)
            for record in found:
                if on_interesting is not None:
                    on_interesting(record)
                records.append(record)
        return rng, records

    def run(
        self, on_interesting: Callable[[InterestingPoint], None] | None = None
    ) -> SweepResult:
        starts = self.config.range_starts()
        logger.info(
            "Sweeping %d ranges of %d points from %r",
            len(starts),
            self.config.points_per_range,
            self.config.start,
        )
        result = SweepResult([], [], self.config.points_per_range)
        for i, start in enumerate(starts):
            rng, records = self.check_range(start, on_interesting)
            result.ranges.append(rng)
            result.interesting.extend(records)
            logger.debug("Range %d/%d done: %d interesting points", i + 1, len(starts), len(records))
        logger.info("Sweep done: %d interesting points", len(result.interesting))
        return result

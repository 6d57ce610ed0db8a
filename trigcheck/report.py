"""Per-range statistics of how the kernel compares with the platform library.

The integer score (iscore) of a point is how many ULPs closer to the
accurate value the new result is than the old one; the relative score
(fscore) is the iscore divided by the new result's distance from the
accurate value. Only points where old and new differ, and where that
difference moves them relative to the accurate value, are counted.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import NamedTuple

from .compare import FunctionValue, accuracy_distances
from .functions import Function
from .utils import ieee_div


class Scores(NamedTuple):
    iscore: int
    fscore: float


def scores_of(v: FunctionValue) -> Scores:
    ac, bc = accuracy_distances(v)
    iscore = ac - bc
    return Scores(iscore, ieee_div(iscore, bc))


@dataclass
class MicroReport:
    count: int = 0
    # extreme integer score
    max: int = 0
    # extreme relative score
    max_score: float = 0.0
    # sum of squared relative scores until finalized, then their quadratic mean
    mean_square: float = 0.0

    def update(self, iscore: int, fscore: float) -> None:
        self.count += 1
        self.mean_square += fscore * fscore
        if 0 <= iscore and self.max < iscore or iscore <= 0 and iscore <= self.max:
            self.max = iscore
        if math.copysign(self.max_score, 1.0) < math.copysign(fscore, 1.0):
            self.max_score = fscore

    def finalize(self) -> None:
        # an empty bucket ends up NaN, like 0/0
        self.mean_square = math.sqrt(ieee_div(self.mean_square, self.count))


@dataclass
class RangeReport:
    # first point and one past the last point of the range
    limits: tuple[float, float]
    improvements: MicroReport = field(default_factory=MicroReport)
    worsenings: MicroReport = field(default_factory=MicroReport)
    # sum of relative scores until finalized, then their arithmetic mean
    mean_relative: float = 0.0

    def add(self, scores: Scores) -> None:
        bucket = self.improvements if scores.iscore > 0 else self.worsenings
        bucket.update(scores.iscore, scores.fscore)
        self.mean_relative += scores.fscore

    def finalize(self) -> None:
        self.improvements.finalize()
        self.worsenings.finalize()
        self.mean_relative /= self.improvements.count + self.worsenings.count


def range_report(limits, values: list[FunctionValue]) -> RangeReport | None:
    """Report for one function over one range, or None if no point counts."""
    report = None
    for v in values:
        # skip points without a change
        if v.is_null():
            continue
        scores = scores_of(v)
        # skip points without a relevant change
        if scores.iscore == 0:
            continue
        if report is None:
            report = RangeReport(tuple(limits))
        report.add(scores)
    if report is not None:
        report.finalize()
    return report


def build_reports(ranges) -> dict[Function, list[RangeReport]]:
    """Reports for every function, in range order, for all ranges of a sweep."""
    reports = {fn: [] for fn in Function}
    for fn in Function:
        for rng in ranges:
            report = range_report(rng.limits, [point[fn] for point in rng.values])
            if report is not None:
                reports[fn].append(report)
    return reports

"""Run configuration for the oracle and the range sweep."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .errors import ConfigError

# One turn either side of zero, twice: [-4*pi, 4*pi].
FOUR_PI = 12.5663706143591729539
POINTS_IN_ONE_RANGE = 32


@dataclass(frozen=True)
class OracleConfig:
    executable: str = "fricas"
    # directory holding the compiled CNF package, passed to ")lib )dir"
    lib_dir: str | None = None
    bits: int = 32768
    output_digits: int = 21
    # coupled to the FriCAS version's start-up banner
    banner_lines: int = 17
    exit_timeout: float = 5.0

    def __post_init__(self) -> None:
        if self.bits < 53:
            raise ConfigError(f"bits must be >= 53, got {self.bits!r}")
        if self.output_digits < 17:
            raise ConfigError(f"output_digits must be >= 17, got {self.output_digits!r}")
        if self.banner_lines < 0:
            raise ConfigError(f"banner_lines must be non-negative, got {self.banner_lines!r}")

    def eval_commands(self) -> list[str]:
        commands = [")set output algebra off"]
        if self.lib_dir:
            commands.append(f")lib )dir {self.lib_dir}")
        commands += [
            ")set history off",
            ")set messages prompt none",
            ")set messages type off",
            f"bits({self.bits})$Float",
            f"outputGeneral({self.output_digits})$Float",
            "outputSpacing(0)$Float",
            ")set output algebra on",
        ]
        return commands

    def argv(self) -> list[str]:
        argv = [self.executable, "-nosman"]
        for command in self.eval_commands():
            argv += ["-eval", command]
        return argv


@dataclass(frozen=True)
class SweepConfig:
    start: float = -FOUR_PI
    step: float = 0.03125
    # None means enough ranges to cover [start, -start]
    ranges: int | None = None
    points_per_range: int = POINTS_IN_ONE_RANGE
    threshold: float = 1e-7

    def __post_init__(self) -> None:
        if not math.isfinite(self.start):
            raise ConfigError(f"start must be finite, got {self.start!r}")
        if not self.step > 0:
            raise ConfigError(f"step must be positive, got {self.step!r}")
        if self.ranges is not None and self.ranges < 1:
            raise ConfigError(f"ranges must be >= 1, got {self.ranges!r}")
        if self.points_per_range < 1:
            raise ConfigError(f"points_per_range must be >= 1, got {self.points_per_range!r}")
        if not self.threshold > 0:
            raise ConfigError(f"threshold must be positive, got {self.threshold!r}")

    @property
    def range_count(self) -> int:
        if self.ranges is not None:
            return self.ranges
        return 2 * int((abs(self.start) + 0.5) / self.step + 0.5) + 1

    def range_starts(self) -> list[float]:
        return [self.start + self.step * i for i in range(self.range_count)]

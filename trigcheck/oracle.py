"""Client for a FriCAS process used as a high-precision oracle.

FriCAS echoes each result on a line like one of these (note the space after
the minus sign)::

    (13)  0.3300000000000000000000000E1
    (1)  - 0.3300000000000000000000000E1

Failures while talking to the process never raise: ``evaluate`` returns NaN
and the caller decides whether to skip the point or stop.
"""

from __future__ import annotations

import logging
import math
import re
import subprocess
from typing import IO

from .config import OracleConfig
from .errors import OracleStartError

logger = logging.getLogger(__name__)

# the part of a reply strtod would consume
_FLOAT_PREFIX = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_value(line: str) -> float:
    """Parse the value part of a reply line, or return NaN."""
    if line.startswith("- "):
        line = "-" + line[2:]
    match = _FLOAT_PREFIX.match(line)
    if match is None:
        return math.nan
    return float(match.group())


class FricasOracle:
    def __init__(
        self,
        stdin: IO[str],
        stdout: IO[str],
        process: subprocess.Popen | None = None,
        exit_timeout: float = 5.0,
    ) -> None:
        self.stdin = stdin
        self.stdout = stdout
        self._process = process
        self._exit_timeout = exit_timeout

    @classmethod
    def start(cls, config: OracleConfig | None = None) -> FricasOracle:
        """Spawn FriCAS, configure its float output and skip its banner."""
        config = config or OracleConfig()
        argv = config.argv()
        logger.debug("Spawning oracle: %s", " ".join(argv))
        try:
            process = subprocess.Popen(
                argv,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                text=True,
            )
        except OSError as exc:
            raise OracleStartError(f"failed to spawn {config.executable!r}: {exc}") from exc

        oracle = cls(process.stdin, process.stdout, process, config.exit_timeout)
        try:
            oracle.skip_lines(config.banner_lines)
        except OracleStartError:
            oracle.close()
            raise
        logger.info("Oracle ready (%d bits of precision)", config.bits)
        return oracle

    def skip_lines(self, count: int) -> None:
        for i in range(count):
            try:
                line = self.stdout.readline()
            except (OSError, ValueError) as exc:
                raise OracleStartError(f"I/O error reading start-up line {i}: {exc}") from exc
            if not line.endswith("\n"):
                raise OracleStartError(f"EOF after {i} of {count} start-up lines")

    def evaluate(self, template: str, x: float) -> float:
        """Ask the oracle for ``template.format(x=x)``; NaN if there is no answer."""
        try:
            self.stdin.write(template.format(x=x))
            self.stdin.flush()
        except (OSError, ValueError, LookupError) as exc:
            logger.warning("Oracle request failed for x=%r: %s", x, exc)
            return math.nan

        try:
            line = self._read_reply()
        except (OSError, ValueError) as exc:
            logger.warning("Oracle reply failed for x=%r: %s", x, exc)
            return math.nan
        if line is None:
            logger.warning("Oracle reply truncated for x=%r", x)
            return math.nan

        value = parse_value(line)
        if math.isnan(value):
            logger.warning("Unparsable oracle reply for x=%r: %r", x, line)
        return value

    def try_evaluate(self, template: str, x: float) -> float | None:
        value = self.evaluate(template, x)
        return None if math.isnan(value) else value

    def _read_reply(self) -> str | None:
        # skip the statement number "(13)" and the two spaces after it
        while True:
            c = self.stdout.read(1)
            if not c:
                return None
            if c == ")":
                break
        if len(self.stdout.read(2)) != 2:
            return None
        line = self.stdout.readline()
        if not line.endswith("\n"):
            return None
        return line.rstrip("\r\n")

    def close(self) -> bool:
        """Close both streams and reap the process; False if a close failed."""
        ok = True
        for stream in (self.stdin, self.stdout):
            try:
                stream.close()
            except OSError as exc:
                logger.debug("Closing oracle stream failed: %s", exc)
                ok = False
        if self._process is not None:
            try:
                self._process.wait(timeout=self._exit_timeout)
            except subprocess.TimeoutExpired:
                logger.warning("Oracle did not exit after %.1fs, killing it", self._exit_timeout)
                self._process.kill()
                self._process.wait()
        if not ok:
            logger.warning("Failed to close oracle pipes")
        return ok

    def __enter__(self) -> FricasOracle:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

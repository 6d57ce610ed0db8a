import io
import math
import stat
import sys

import pytest

from trigcheck import FricasOracle, Function, OracleConfig, libm_sincos1cos

FAKE_BANNER = """#!/bin/sh
i=0
while [ $i -lt {banner} ]; do
    echo "banner line $i"
    i=$((i+1))
done
"""

FAKE_SERVE = """n=1
while read line; do
    echo "($n)  {reply}"
    n=$((n+1))
done
"""


class LibmOracle:
    """Answers with libm's own values, as if they were exact."""

    def __init__(self):
        self.requests = []
        self._by_template = {fn.oracle_template: fn for fn in Function}

    def evaluate(self, template, x):
        self.requests.append((self._by_template[template], x))
        return libm_sincos1cos(x)[self._by_template[template]]


@pytest.fixture
def libm_oracle():
    return LibmOracle()


@pytest.fixture
def scripted_oracle():
    def make(replies):
        return FricasOracle(io.StringIO(), io.StringIO(replies))

    return make


@pytest.fixture
def fake_fricas(tmp_path):
    """Write a shell script that talks like FriCAS and return a config for it."""
    if sys.platform == "win32":
        pytest.skip("fake FriCAS is a POSIX shell script")

    def make(banner=3, reply="0.5E0", banner_lines=None, serve=True):
        script = FAKE_BANNER.format(banner=banner)
        if serve:
            script += FAKE_SERVE.format(reply=reply)
        path = tmp_path / "fricas"
        path.write_text(script)
        path.chmod(path.stat().st_mode | stat.S_IEXEC)
        return OracleConfig(
            executable=str(path),
            banner_lines=banner if banner_lines is None else banner_lines,
        )

    return make


def successor(x, steps=1):
    for _ in range(steps):
        x = math.nextafter(x, math.inf)
    return x

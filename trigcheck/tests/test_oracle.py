import io
import math
import os
import shutil

import pytest
from pytest import mark

from trigcheck import (
    ConfigError,
    FricasOracle,
    Function,
    OracleConfig,
    OracleStartError,
    ulp_distance,
)
from trigcheck.oracle import parse_value


class TestEvaluate:
    def test_positive(self, scripted_oracle):
        oracle = scripted_oracle("(1)  0.33000000000000000000000E1\n")
        assert oracle.evaluate(Function.SIN.oracle_template, 3.3) == 3.3

    def test_negative_quirk(self, scripted_oracle):
        oracle = scripted_oracle("(1)  - 0.33000000000000000000000E1\n")
        assert oracle.evaluate(Function.SIN.oracle_template, -3.3) == -3.3

    def test_request_line(self, scripted_oracle):
        oracle = scripted_oracle("(1)  0.5E0\n")
        oracle.evaluate(Function.OMC.oracle_template, 0.5)
        assert oracle.stdin.getvalue() == "cnf_1cs( 5.00000000000000000000e-01)$CNF\n"

    def test_request_keeps_21_digits(self, scripted_oracle):
        oracle = scripted_oracle("(1)  0.1E1\n")
        oracle.evaluate(Function.COS.oracle_template, -0.1)
        assert oracle.stdin.getvalue() == "cnf_cos(-1.00000000000000005551e-01)$CNF\n"

    def test_consecutive_replies(self, scripted_oracle):
        oracle = scripted_oracle(
            "(12)  0.1E1\n(13)  - 0.25E0\n(14)  0.70710678118654752440084436E0\n"
        )
        template = Function.SIN.oracle_template
        assert oracle.evaluate(template, 1.0) == 1.0
        assert oracle.evaluate(template, 2.0) == -0.25
        assert oracle.evaluate(template, 3.0) == 0.7071067811865476
        assert oracle.stdin.getvalue().count("\n") == 3

    def test_echo_before_counter_is_skipped(self, scripted_oracle):
        oracle = scripted_oracle("   (1)  0.1E1\n")
        assert oracle.evaluate(Function.SIN.oracle_template, 1.0) == 1.0

    @mark.parametrize(
        "replies",
        [
            "",
            "(1",
            "(1) ",
            "(1)  0.33E1",
            "(1)  abc\n",
            "(1)  \n",
            "(1)  -\n",
        ],
    )
    def test_failure_is_nan(self, scripted_oracle, replies):
        oracle = scripted_oracle(replies)
        assert math.isnan(oracle.evaluate(Function.SIN.oracle_template, 3.3))

    def test_try_evaluate(self, scripted_oracle):
        oracle = scripted_oracle("(1)  0.2E1\n")
        assert oracle.try_evaluate(Function.SIN.oracle_template, 1.0) == 2.0
        assert oracle.try_evaluate(Function.SIN.oracle_template, 1.0) is None

    def test_closed_stream_is_nan(self, scripted_oracle):
        oracle = scripted_oracle("(1)  0.2E1\n")
        oracle.stdin.close()
        assert math.isnan(oracle.evaluate(Function.SIN.oracle_template, 1.0))

    @mark.parametrize("template", ["cnf_sin({})$CNF\n", "cnf_sin({y})$CNF\n"])
    def test_bad_template_is_nan(self, scripted_oracle, template):
        oracle = scripted_oracle("(1)  0.1E1\n")
        assert math.isnan(oracle.evaluate(template, 1.0))
        assert oracle.stdin.getvalue() == ""


@mark.parametrize(
    "line, expected",
    [
        ("0.33E1", 3.3),
        ("- 0.33E1", -3.3),
        ("-0.33E1", -3.3),
        ("0.33E1 trailing", 3.3),
        ("0.1E-400", 0.0),
        ("0.1E400", math.inf),
        ("- 0.1E400", -math.inf),
        ("12.", 12.0),
        ("1E", 1.0),
    ],
)
def test_parse_value(line, expected):
    assert parse_value(line) == expected


class _FailingStream(io.StringIO):
    failed = False

    def close(self):
        if not self.failed:
            self.failed = True
            raise OSError("close failed")
        super().close()


class TestClose:
    def test_close(self, scripted_oracle):
        oracle = scripted_oracle("")
        assert oracle.close() is True
        assert oracle.stdin.closed and oracle.stdout.closed

    def test_close_failure_is_reported(self):
        oracle = FricasOracle(io.StringIO(), _FailingStream())
        assert oracle.close() is False
        assert oracle.stdin.closed

    def test_context_manager(self, scripted_oracle):
        with scripted_oracle("(1)  0.1E1\n") as oracle:
            assert oracle.evaluate(Function.SIN.oracle_template, 1.0) == 1.0
        assert oracle.stdout.closed


class TestStart:
    def test_missing_executable(self, tmp_path):
        config = OracleConfig(executable=str(tmp_path / "no-such-fricas"))
        with pytest.raises(OracleStartError, match="TC_ORACLE_START"):
            FricasOracle.start(config)

    def test_handshake_and_requests(self, fake_fricas):
        with FricasOracle.start(fake_fricas(banner=4, reply="- 0.5E0")) as oracle:
            assert oracle.evaluate(Function.SIN.oracle_template, 1.0) == -0.5
            assert oracle.evaluate(Function.COS.oracle_template, 2.0) == -0.5

    def test_short_banner(self, fake_fricas):
        with pytest.raises(OracleStartError, match="start-up lines"):
            FricasOracle.start(fake_fricas(banner=1, banner_lines=3, serve=False))

    def test_close_reaps_process(self, fake_fricas):
        oracle = FricasOracle.start(fake_fricas())
        assert oracle.close() is True
        assert oracle._process.returncode is not None

    def test_undecodable_banner(self):
        stdout = io.TextIOWrapper(io.BytesIO(b"\xff\xfe\n"), encoding="utf-8")
        oracle = FricasOracle(io.StringIO(), stdout)
        with pytest.raises(OracleStartError, match="start-up line 0"):
            oracle.skip_lines(1)


class TestConfig:
    def test_argv(self):
        argv = OracleConfig(lib_dir="/opt/cnf").argv()
        assert argv[:2] == ["fricas", "-nosman"]
        assert argv[2::2] == ["-eval"] * ((len(argv) - 2) // 2)
        commands = argv[3::2]
        assert commands[0] == ")set output algebra off"
        assert commands[-1] == ")set output algebra on"
        assert ")lib )dir /opt/cnf" in commands
        assert "bits(32768)$Float" in commands
        assert "outputGeneral(21)$Float" in commands

    def test_no_lib_dir(self):
        assert not any(c.startswith(")lib") for c in OracleConfig().eval_commands())

    @mark.parametrize(
        "kwargs", [dict(bits=16), dict(output_digits=10), dict(banner_lines=-1)]
    )
    def test_invalid(self, kwargs):
        with pytest.raises(ConfigError):
            OracleConfig(**kwargs)


@mark.fricas
@mark.skipif(shutil.which("fricas") is None, reason="fricas is not in PATH")
def test_real_fricas():
    lib_dir = os.environ.get("TRIGCHECK_FRICAS_LIBDIR")
    if not lib_dir:
        pytest.skip("TRIGCHECK_FRICAS_LIBDIR does not point at the CNF package")
    with FricasOracle.start(OracleConfig(lib_dir=lib_dir)) as oracle:
        value = oracle.evaluate(Function.COS.oracle_template, 0.5)
    assert abs(ulp_distance(value, math.cos(0.5))) <= 1

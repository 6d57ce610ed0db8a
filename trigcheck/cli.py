import logging

import click

from .config import OracleConfig, SweepConfig
from .errors import TrigcheckError
from .functions import Function, libm_sincos1cos
from .kernel import sincos1cos
from .oracle import FricasOracle
from .sweep import Sweep
from .ulp import about, ulp_distance

FLTFMT = "%27.20e"
POINT_LINE = f"%6s {FLTFMT} %3s: %30s %22d {FLTFMT} {FLTFMT} {FLTFMT}"
MICRO_LINE = f"%7d %22d {FLTFMT} {FLTFMT}"


def format_point(record):
    return POINT_LINE % (
        record.verdict,
        record.x,
        record.function.short_name,
        record.about,
        record.distance,
        record.old,
        record.new,
        record.accurate,
    )


def format_micro(micro):
    return MICRO_LINE % (micro.count, micro.max, micro.max_score, micro.mean_square)


def format_reports(reports, points_per_range):
    lines = ["", "", "PointsInOneRange: %5d" % points_per_range, "", ""]
    for fn in Function:
        lines.append("%3s:" % fn.short_name)
        for report in reports[fn]:
            lines += [
                f"{FLTFMT} {FLTFMT}" % report.limits,
                format_micro(report.improvements),
                format_micro(report.worsenings),
                FLTFMT % report.mean_relative,
                "",
            ]
        lines.append("")
    return "\n".join(lines)


def oracle_options(func):
    func = click.option(
        "--fricas",
        "executable",
        envvar="TRIGCHECK_FRICAS",
        default="fricas",
        show_default=True,
        help="FriCAS executable",
    )(func)
    func = click.option(
        "--lib-dir",
        envvar="TRIGCHECK_FRICAS_LIBDIR",
        default=None,
        help="Directory containing the compiled CNF FriCAS package",
    )(func)
    func = click.option(
        "--bits", default=32768, show_default=True, help="Oracle working precision"
    )(func)
    func = click.option(
        "--banner-lines",
        default=17,
        show_default=True,
        help="Start-up lines FriCAS prints before it is ready",
    )(func)
    return func


def _start_oracle(executable, lib_dir, bits, banner_lines):
    try:
        config = OracleConfig(
            executable=executable, lib_dir=lib_dir, bits=bits, banner_lines=banner_lines
        )
        return FricasOracle.start(config)
    except TrigcheckError as exc:
        raise click.ClickException(str(exc)) from exc


def _close_oracle(oracle):
    if not oracle.close():
        click.echo("trigcheck: failed to close fricas pipes", err=True)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log debug messages")
def main(verbose):
    """Compare a sin/cos/1-cos kernel against libm using FriCAS as the oracle."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command(help="Sweep ranges of consecutive doubles and report the differences")
@click.option("--start", type=float, default=SweepConfig.start, show_default=True)
@click.option("--step", type=float, default=SweepConfig.step, show_default=True)
@click.option("--ranges", type=int, default=None, help="Number of ranges [default: up to -start]")
@click.option(
    "--threshold",
    type=float,
    default=SweepConfig.threshold,
    show_default=True,
    help="Relative change needed to print a point",
)
@oracle_options
def sweep(*, start, step, ranges, threshold, executable, lib_dir, bits, banner_lines):
    try:
        config = SweepConfig(start=start, step=step, ranges=ranges, threshold=threshold)
    except TrigcheckError as exc:
        raise click.BadParameter(str(exc)) from exc

    oracle = _start_oracle(executable, lib_dir, bits, banner_lines)
    try:
        result = Sweep(oracle, config).run(
            on_interesting=lambda record: click.echo(format_point(record))
        )
    finally:
        _close_oracle(oracle)
    click.echo(format_reports(result.reports(), result.points_per_range))


@main.command("eval", help="Print the oracle's value of FUNCTION at each X")
@click.argument("function", type=click.Choice(["sin", "cos", "omc"]))
@click.argument("xs", metavar="X...", type=float, nargs=-1, required=True)
@oracle_options
def eval_(*, function, xs, executable, lib_dir, bits, banner_lines):
    fn = Function.from_short_name(function)
    oracle = _start_oracle(executable, lib_dir, bits, banner_lines)
    try:
        for x in xs:
            click.echo(f"{FLTFMT} {FLTFMT}" % (x, oracle.evaluate(fn.oracle_template, x)))
    finally:
        _close_oracle(oracle)


@main.command(help="Print the kernel's and libm's values at each X")
@click.argument("xs", metavar="X...", type=float, nargs=-1, required=True)
def kernel(*, xs):
    for x in xs:
        old, new = libm_sincos1cos(x), sincos1cos(x)
        for fn in Function:
            click.echo(
                f"{FLTFMT} %3s {FLTFMT} {FLTFMT} %22d  %s"
                % (
                    x,
                    fn.short_name,
                    old[fn],
                    new[fn],
                    ulp_distance(old[fn], new[fn]),
                    about(old[fn], new[fn]),
                )
            )

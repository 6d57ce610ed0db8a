from .ulp import ulp_distance


def assert_ulp(actual, expected, input, max_ulp=1):
    """Fail unless every ``actual`` is within ``max_ulp`` of ``expected``.

    Arguments are sequences of floats.
    """
    __tracebackhide__ = True  # Hide traceback for py.test
    actual, expected, input = (list(arg) for arg in (actual, expected, input))
    ulp = [abs(ulp_distance(a, e)) for a, e in zip(actual, expected)]
    if any(u > max_ulp for u in ulp):
        vals = [
            str((input[i], actual[i], expected[i], u))
            for i, u in enumerate(ulp)
            if u > max_ulp
        ]
        raise AssertionError(
            f"Expected ULP distance {max_ulp}, worst {max(ulp)}, "
            "interleaved(input, actual, expected, ulp) as follow:\n "
            + "\n ".join(vals)
            + "\n"
        )

import math


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, with halves going towards +infinity.

    Python's round() uses banker's rounding, which would make 2.5 -> 2; the
    weather figures are expected to round 2.5 -> 3 and -2.5 -> -2.
    """
    return int(math.floor(value + 0.5))

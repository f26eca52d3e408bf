import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero on the positive side.

    Built-in round() uses banker's rounding, which would score 12.5 as 12.
    """
    return int(math.floor(value + 0.5))

"""Gregorian Easter Sunday. Pure computation, no external dependencies."""

from datetime import date


def easter_sunday(year: int) -> date:
    """Compute Easter Sunday using the Anonymous Gregorian algorithm.

    Works on the proleptic Gregorian calendar, so it is exact from 1583 on.
    Earlier years get the Gregorian rule applied backwards.
    """
    a = year % 19  # golden number - 1
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30  # epact
    i, k = divmod(c, 4)
    l = (32 + 2 * e + 2 * i - h - k) % 7  # days to the following Sunday
    m = (a + 11 * h + 22 * l) // 451
    month, day = divmod(h + l - 7 * m + 114, 31)
    return date(year, month, day + 1)

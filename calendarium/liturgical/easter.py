"""Date of Easter Sunday in the Gregorian calendar."""

from datetime import date

# The computus below is defined for the Gregorian calendar, adopted in 1582.
# Earlier years still produce a date, but it has no civil meaning.
GREGORIAN_MIN_YEAR = 1583
GREGORIAN_MAX_YEAR = 9999


def easter_date(year):
    """Easter Sunday of ``year`` by the Meeus/Jones/Butcher computus."""
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7  # noqa: E741
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = ((h + l - 7 * m + 114) % 31) + 1
    return date(year, month, day)

"""
Exact time and duration values.

Times and durations are rational numbers so that nested tuplets and dots
never accumulate rounding error. One time unit is one whole note.
"""

from fractions import Fraction
from typing import Union

Time = Fraction
Duration = Fraction

TimeLike = Union[int, float, str, Fraction]


def as_duration(value: TimeLike) -> Duration:
    """
    Convert a number or a numeric string to an exact duration.

    Floats are converted exactly, so 0.1 becomes 3602879701896397/36028797018963968.
    Prefer ints, strings ("3/4") or Fractions.

    Args:
        value: int, float, str or Fraction

    Returns:
        Fraction equal to the given value
    """
    if isinstance(value, Fraction):
        return value
    if isinstance(value, bool):
        raise TypeError(f"Could not convert {value!r} to a duration")
    if isinstance(value, (int, float, str)):
        return Fraction(value)
    raise TypeError(f"Could not convert {value!r} to a duration")


as_time = as_duration


def format_duration(value: Fraction) -> str:
    """Format a fraction as 'n/d' (or 'n' for integers)."""
    if value.denominator == 1:
        return str(value.numerator)
    return f"{value.numerator}/{value.denominator}"

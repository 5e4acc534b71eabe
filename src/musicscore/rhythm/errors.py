"""
Errors raised by the rhythm quantizer.
"""

from fractions import Fraction
from typing import Any, Optional, Sequence, Tuple

from ..score.time import format_duration


def _format_pairs(pairs: Sequence[Tuple[Fraction, Any]]) -> str:
    return ", ".join(
        f"({format_duration(d) if isinstance(d, Fraction) else d!r}, {x!r})"
        for d, x in pairs
    )


class QuantizationError(Exception):
    """
    A bar could not be quantized.

    Attributes:
        remainder: Input pairs that were not matched
        consumed: Input pairs matched before the failure
    """

    def __init__(self, message: str, remainder: Sequence = (), consumed: Sequence = ()):
        super().__init__(message)
        self.remainder = tuple(remainder)
        self.consumed = tuple(consumed)

    @property
    def remainder_duration(self) -> Fraction:
        return sum((Fraction(d) for d, _ in self.remainder), Fraction(0))

    @property
    def consumed_duration(self) -> Fraction:
        return sum((Fraction(d) for d, _ in self.consumed), Fraction(0))


class InvalidInputError(QuantizationError):
    """The bar is empty or holds a negative, float or all-zero duration."""


class UnquantizableDurationError(QuantizationError):
    """No beat, dotted beat or tuplet matches the start of the bar."""

    def __init__(self, remainder: Sequence, consumed: Sequence = ()):
        super().__init__(
            f"Could not quantize this bar: [{_format_pairs(remainder)}]",
            remainder=remainder,
            consumed=consumed
        )


class TrailingInputError(QuantizationError):
    """
    A prefix of the bar was quantized but input remained.

    Attributes:
        rhythm: Rhythm tree of the quantized prefix
    """

    def __init__(self, remainder: Sequence, consumed: Sequence, rhythm: Optional[Any] = None):
        super().__init__(
            f"Unexpected trailing input: [{_format_pairs(remainder)}]",
            remainder=remainder,
            consumed=consumed
        )
        self.rhythm = rhythm

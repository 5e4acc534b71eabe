"""
Track data structure: values with absolute onsets and no duration.
"""

from dataclasses import dataclass, field
from fractions import Fraction
from functools import reduce
from typing import Any, Callable, Iterator, Tuple

from .time import Duration, Time, TimeLike, as_duration, as_time


@dataclass(frozen=True)
class Track:
    """
    A sorted list of (time, value) occurrences.

    Track is a monoid under parallel composition: Track() is the empty track
    and + interleaves values. bind delays each inner track to the time of the
    occurrence it replaces.
    """
    occurrences: Tuple[Tuple[Time, Any], ...] = field(default_factory=tuple)

    def __post_init__(self):
        occurrences = tuple((as_time(t), x) for t, x in self.occurrences)
        object.__setattr__(self, 'occurrences', tuple(sorted(occurrences, key=lambda o: o[0])))

    @classmethod
    def of(cls, value: Any) -> 'Track':
        """A track holding value at time zero."""
        return cls(((Fraction(0), value),))

    def __iter__(self) -> Iterator[Tuple[Time, Any]]:
        return iter(self.occurrences)

    def __len__(self) -> int:
        return len(self.occurrences)

    def __add__(self, other: 'Track') -> 'Track':
        if not isinstance(other, Track):
            return NotImplemented
        return Track(self.occurrences + other.occurrences)

    @property
    def onset(self) -> Time:
        if not self.occurrences:
            return Fraction(0)
        return self.occurrences[0][0]

    @property
    def offset(self) -> Time:
        if not self.occurrences:
            return Fraction(0)
        return self.occurrences[-1][0]

    @property
    def duration(self) -> Duration:
        return self.offset - self.onset

    def delay(self, amount: TimeLike) -> 'Track':
        amount = as_duration(amount)
        return Track(tuple((t + amount, x) for t, x in self.occurrences))

    def stretch(self, factor: TimeLike) -> 'Track':
        factor = as_duration(factor)
        return Track(tuple((t * factor, x) for t, x in self.occurrences))

    def map(self, f: Callable[[Any], Any]) -> 'Track':
        return Track(tuple((t, f(x)) for t, x in self.occurrences))

    def bind(self, f: Callable[[Any], 'Track']) -> 'Track':
        """Replace every value by a track delayed to its time."""
        return reduce(
            lambda acc, o: acc + f(o[1]).delay(o[0]),
            self.occurrences,
            Track()
        )

"""
Part data structure: values with relative durations, played in sequence.
"""

from dataclasses import dataclass, field
from fractions import Fraction
from typing import Any, Callable, Iterator, Tuple

from .score import Score, note, rest, scat
from .time import Duration, TimeLike, as_duration


@dataclass(frozen=True)
class Part:
    """
    A list of (duration, value) pairs.

    Part is a monoid under sequential composition: Part() is the empty part
    and + appends. bind scales each inner part by the duration of the value
    it replaces.
    """
    pairs: Tuple[Tuple[Duration, Any], ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, 'pairs', tuple((as_duration(d), x) for d, x in self.pairs))

    @classmethod
    def of(cls, value: Any) -> 'Part':
        """A part holding value for duration one."""
        return cls(((Fraction(1), value),))

    def __iter__(self) -> Iterator[Tuple[Duration, Any]]:
        return iter(self.pairs)

    def __len__(self) -> int:
        return len(self.pairs)

    def __add__(self, other: 'Part') -> 'Part':
        if not isinstance(other, Part):
            return NotImplemented
        return Part(self.pairs + other.pairs)

    @property
    def duration(self) -> Duration:
        return sum((d for d, _ in self.pairs), Fraction(0))

    def stretch(self, factor: TimeLike) -> 'Part':
        factor = as_duration(factor)
        return Part(tuple((d * factor, x) for d, x in self.pairs))

    def map(self, f: Callable[[Any], Any]) -> 'Part':
        return Part(tuple((d, f(x)) for d, x in self.pairs))

    def bind(self, f: Callable[[Any], 'Part']) -> 'Part':
        """Replace every value by a part scaled by its duration."""
        result = Part()
        for d, x in self.pairs:
            result = result + f(x).stretch(d)
        return result

    def to_score(self) -> Score:
        """Convert to a score, each value lasting its duration; None becomes a rest."""
        return scat([(rest() if x is None else note(x)).stretch(d) for d, x in self.pairs])

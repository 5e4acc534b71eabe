"""
Rhythm tree for one quantized bar.

A rhythm is a tree of beats, dotted beats, tuplets and sequences. Durations
stored in the tree are notated durations; dotted and tuplet nodes re-apply
their multiplier, so the duration of the whole tree is the actual duration
of the bar it was built from.
"""

from dataclasses import dataclass, field
from fractions import Fraction
from typing import Any, Dict, Iterator, Tuple, Union

from ..score.time import format_duration


MAX_DOTS = 3


def dot_modifier(dots: int) -> Fraction:
    """
    Duration multiplier for a note with the given number of dots.

    Returns (2^(n+1) - 1) / 2^n, i.e. 3/2, 7/4, 15/8, ...
    """
    if dots < 1:
        raise ValueError(f"Invalid dot count: {dots}. Must be >= 1.")
    return Fraction(2 ** (dots + 1) - 1, 2 ** dots)


def _value_to_dict(value: Any) -> Any:
    if value is None:
        return None
    if hasattr(value, 'to_dict'):
        return value.to_dict()
    if isinstance(value, Fraction):
        return format_duration(value)
    return value


@dataclass(frozen=True)
class Beat:
    """
    A single notated note or rest.

    Attributes:
        duration: Notated duration, a power of two of the whole note
        value: Note value, None for a rest
    """
    duration: Fraction
    value: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'beat',
            'duration': format_duration(self.duration),
            'value': _value_to_dict(self.value),
        }


@dataclass(frozen=True)
class Dotted:
    """A beat extended by one or more dots."""
    dots: int
    rhythm: 'Rhythm'

    def __post_init__(self):
        if not 1 <= self.dots <= MAX_DOTS:
            raise ValueError(f"Invalid dot count: {self.dots}. Must be 1-{MAX_DOTS}.")

    @property
    def duration(self) -> Fraction:
        return self.rhythm.duration * dot_modifier(self.dots)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'dotted',
            'dots': self.dots,
            'rhythm': self.rhythm.to_dict(),
        }


@dataclass(frozen=True)
class Tuplet:
    """
    A group whose notated duration is scaled by ratio.

    A ratio of 2/3 is a triplet: three notated eighths last as long as two.
    """
    ratio: Fraction
    rhythm: 'Rhythm'

    def __post_init__(self):
        if self.ratio <= 0:
            raise ValueError(f"Invalid tuplet ratio: {self.ratio}. Must be > 0.")

    @property
    def duration(self) -> Fraction:
        return self.rhythm.duration * self.ratio

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'tuplet',
            'ratio': format_duration(self.ratio),
            'rhythm': self.rhythm.to_dict(),
        }


@dataclass(frozen=True)
class Sequence:
    """Rhythms played one after another."""
    children: Tuple['Rhythm', ...] = field(default_factory=tuple)

    @property
    def duration(self) -> Fraction:
        return sum((child.duration for child in self.children), Fraction(0))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'sequence',
            'children': [child.to_dict() for child in self.children],
        }


Rhythm = Union[Beat, Dotted, Tuplet, Sequence]


def duration(rhythm: Rhythm) -> Fraction:
    """Actual duration of a rhythm tree."""
    return rhythm.duration


@dataclass(frozen=True)
class Leaf:
    """
    A beat as seen by a notation emitter.

    Attributes:
        duration: Actual duration, all enclosing dots and tuplets applied
        notated: Notated duration of the beat (power of two)
        dots: Number of dots on the beat
        tuplets: Ratios of the enclosing tuplets, outermost first
        value: Note value, None for a rest
    """
    duration: Fraction
    notated: Fraction
    dots: int
    tuplets: Tuple[Fraction, ...]
    value: Any


def iter_leaves(rhythm: Rhythm) -> Iterator[Leaf]:
    """
    Walk a rhythm tree depth-first and yield its beats in order.

    Dot and tuplet multipliers are applied as the walk descends.
    """
    yield from _walk(rhythm, Fraction(1), 0, ())


def _walk(rhythm: Rhythm, scale: Fraction, dots: int,
          tuplets: Tuple[Fraction, ...]) -> Iterator[Leaf]:
    if isinstance(rhythm, Beat):
        yield Leaf(
            duration=rhythm.duration * scale,
            notated=rhythm.duration,
            dots=dots,
            tuplets=tuplets,
            value=rhythm.value
        )
    elif isinstance(rhythm, Dotted):
        yield from _walk(rhythm.rhythm, scale * dot_modifier(rhythm.dots),
                         rhythm.dots, tuplets)
    elif isinstance(rhythm, Tuplet):
        yield from _walk(rhythm.rhythm, scale * rhythm.ratio, 0,
                         tuplets + (rhythm.ratio,))
    elif isinstance(rhythm, Sequence):
        for child in rhythm.children:
            yield from _walk(child, scale, dots, tuplets)
    else:
        raise TypeError(f"Not a rhythm: {rhythm!r}")

"""
Score data structure.

A score is a collection of absolute-time events. An event is a note (a value
with onset and duration) or a rest (onset and duration, no value). Scores
compose in parallel (+) and in sequence (>>), and can be delayed and
stretched; all times are exact fractions.
"""

from dataclasses import dataclass, field
from fractions import Fraction
from functools import reduce
from typing import Any, Callable, Dict, Iterable, Iterator, List, Tuple

from .time import Duration, Time, TimeLike, as_duration, as_time, format_duration


@dataclass(frozen=True)
class Event:
    """
    A single note or rest placed in time.

    Attributes:
        onset: Start time
        duration: Duration (>= 0)
        value: Note value, None for a rest
    """
    onset: Time
    duration: Duration
    value: Any = None

    def __post_init__(self):
        """Validate and normalize event times."""
        object.__setattr__(self, 'onset', as_time(self.onset))
        object.__setattr__(self, 'duration', as_duration(self.duration))
        if self.duration < 0:
            raise ValueError(f"Invalid duration: {self.duration}. Must be >= 0.")

    @property
    def offset(self) -> Time:
        """Calculate event end time."""
        return self.onset + self.duration

    @property
    def is_rest(self) -> bool:
        return self.value is None

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary representation."""
        result = {
            'onset': format_duration(self.onset),
            'duration': format_duration(self.duration),
        }
        if self.value is not None:
            result['value'] = self.value.to_dict() if hasattr(self.value, 'to_dict') else self.value
        return result


def _merge(a: Iterable[Event], b: Iterable[Event]) -> Tuple[Event, ...]:
    return tuple(sorted([*a, *b], key=lambda e: e.onset))


@dataclass(frozen=True)
class Score:
    """
    A parallel collection of events, sorted by onset.

    Score is a monoid under parallel composition: Score() is the empty score
    and + interleaves events. Sequential composition is >>, which moves the
    right score to start at the offset of the left one.
    """
    events: Tuple[Event, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, 'events', _merge(self.events, ()))

    def __iter__(self) -> Iterator[Event]:
        return iter(self.events)

    def __len__(self) -> int:
        return len(self.events)

    @property
    def onset(self) -> Time:
        """Earliest onset (0 for the empty score)."""
        if not self.events:
            return Fraction(0)
        return min(e.onset for e in self.events)

    @property
    def offset(self) -> Time:
        """Latest offset (0 for the empty score)."""
        if not self.events:
            return Fraction(0)
        return max(e.offset for e in self.events)

    @property
    def duration(self) -> Duration:
        return self.offset - self.onset

    # Composition

    def __add__(self, other: 'Score') -> 'Score':
        if not isinstance(other, Score):
            return NotImplemented
        return Score(_merge(self.events, other.events))

    def __rshift__(self, other: 'Score') -> 'Score':
        if not isinstance(other, Score):
            return NotImplemented
        return self + other.start_at(self.offset)

    # Transformations

    def delay(self, amount: TimeLike) -> 'Score':
        """Move every event later by amount."""
        amount = as_duration(amount)
        return Score(tuple(Event(e.onset + amount, e.duration, e.value) for e in self.events))

    def stretch(self, factor: TimeLike) -> 'Score':
        """Scale onsets and durations by factor."""
        factor = as_duration(factor)
        if factor < 0:
            raise ValueError(f"Invalid stretch factor: {factor}. Must be >= 0.")
        return Score(tuple(Event(e.onset * factor, e.duration * factor, e.value) for e in self.events))

    def compress(self, factor: TimeLike) -> 'Score':
        """Divide onsets and durations by factor."""
        factor = as_duration(factor)
        if factor <= 0:
            raise ValueError(f"Invalid compress factor: {factor}. Must be > 0.")
        return self.stretch(1 / factor)

    def stretch_to(self, target: TimeLike) -> 'Score':
        """Stretch the score to last target."""
        if self.duration == 0:
            raise ValueError("Cannot stretch a score of zero duration")
        return self.stretch(as_duration(target) / self.duration)

    def start_at(self, time: TimeLike) -> 'Score':
        """Move the score so that it starts at time."""
        return self.delay(as_time(time) - self.onset)

    def stop_at(self, time: TimeLike) -> 'Score':
        """Move the score so that it stops at time."""
        return self.delay(as_time(time) - self.offset)

    # Values

    def map(self, f: Callable[[Any], Any]) -> 'Score':
        """Apply f to every note value; rests are kept."""
        return Score(tuple(
            Event(e.onset, e.duration, None if e.is_rest else f(e.value))
            for e in self.events
        ))

    def bind(self, f: Callable[[Any], 'Score']) -> 'Score':
        """
        Replace every note by a score.

        Each score returned by f is stretched to the duration of its note and
        delayed to its onset (a unit score fills the note exactly). Rests
        stay rests.
        """
        parts = []
        for e in self.events:
            if e.is_rest:
                parts.append(Score((e,)))
            else:
                parts.append(f(e.value).stretch(e.duration).delay(e.onset))
        return pcat(parts)

    # Performance

    def perform_absolute(self) -> List[Tuple[Time, Duration, Any]]:
        """List (onset, duration, value) of every note, rests removed."""
        return [(e.onset, e.duration, e.value) for e in self.events if not e.is_rest]

    def perform_relative(self) -> List[Tuple[Duration, Duration, Any]]:
        """Like perform_absolute, but onsets relative to the previous note."""
        result = []
        now = Fraction(0)
        for t, d, x in self.perform_absolute():
            result.append((t - now, d, x))
            now = t
        return result

    def to_dict(self) -> Dict[str, Any]:
        """Convert score to dictionary representation."""
        return {
            'onset': format_duration(self.onset),
            'duration': format_duration(self.duration),
            'events': [e.to_dict() for e in self.events],
        }


# Constructors

def rest() -> Score:
    """A score of duration 1 with no value."""
    return Score((Event(0, 1, None),))


def note(value: Any) -> Score:
    """A score of duration 1 holding value."""
    if value is None:
        raise ValueError("A note needs a value; use rest() for rests")
    return Score((Event(0, 1, value),))


def melody(values: Iterable[Any]) -> Score:
    """Notes composed in sequence."""
    return scat([note(x) for x in values])


def chord(values: Iterable[Any]) -> Score:
    """Notes composed in parallel."""
    return pcat([note(x) for x in values])


def melodies(values: Iterable[Iterable[Any]]) -> Score:
    """Melodies composed in parallel."""
    return pcat([melody(xs) for xs in values])


def chords(values: Iterable[Iterable[Any]]) -> Score:
    """Chords composed in sequence."""
    return scat([chord(xs) for xs in values])


def melody_stretch(pairs: Iterable[Tuple[TimeLike, Any]]) -> Score:
    """Like melody, but stretching each note by the given factor."""
    return scat([note(x).stretch(d) for d, x in pairs])


def chord_delay(pairs: Iterable[Tuple[TimeLike, Any]]) -> Score:
    """Like chord, but delaying each note by the given amount."""
    return pcat([note(x).delay(t) for t, x in pairs])


def chord_delay_stretch(triples: Iterable[Tuple[TimeLike, TimeLike, Any]]) -> Score:
    """Like chord, but delaying and stretching each note."""
    return pcat([note(x).stretch(d).delay(t) for t, d, x in triples])


# Functional forms

def delay(amount: TimeLike, score: Score) -> Score:
    return score.delay(amount)


def stretch(factor: TimeLike, score: Score) -> Score:
    return score.stretch(factor)


def compress(factor: TimeLike, score: Score) -> Score:
    return score.compress(factor)


def stretch_to(target: TimeLike, score: Score) -> Score:
    return score.stretch_to(target)


def start_at(time: TimeLike, score: Score) -> Score:
    return score.start_at(time)


def stop_at(time: TimeLike, score: Score) -> Score:
    return score.stop_at(time)


def seq(a: Score, b: Score) -> Score:
    """Compose in sequence."""
    return a >> b


def par(a: Score, b: Score) -> Score:
    """Compose in parallel."""
    return a + b


def scat(scores: Iterable[Score]) -> Score:
    """Sequential concatenation."""
    return reduce(lambda acc, s: s >> acc, reversed(list(scores)), Score())


def pcat(scores: Iterable[Score]) -> Score:
    """Parallel concatenation."""
    return reduce(par, scores, Score())


def sustain(x: Score, y: Score) -> Score:
    """Compose in parallel, stretching y to the duration of x."""
    return x + y.stretch_to(x.duration)


def overlap(x: Score, y: Score) -> Score:
    """Compose in parallel, delaying y by half the duration of x."""
    return x + y.delay(x.duration / 2)


def anticipate(amount: TimeLike, x: Score, y: Score) -> Score:
    """Compose in sequence, starting y amount before x ends (never before x starts)."""
    start = max(x.offset - as_duration(amount), x.onset)
    return x + y.start_at(start)

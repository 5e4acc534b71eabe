"""
Bar separation for notation export.

Turns an absolute performance into a lazy sequence of bars, each a list of
(duration, value) pairs that sum to exactly one bar.
"""

import logging
from fractions import Fraction
from typing import Any, Iterable, Iterator, List, Tuple

from .note import Tie
from .time import Duration, Time, TimeLike, as_duration


logger = logging.getLogger(__name__)

Entry = Tuple[Time, Duration, Any]


class BarSeparationError(ValueError):
    """An entry does not fit the bar grid."""


def add_rests(performance: Iterable[Tuple[Time, Duration, Any]]) -> List[Entry]:
    """
    Fill the gaps of a rest-free, single-voice performance with rests.

    The result covers time from zero to the end of the last entry without
    gaps. Rests have the value None.

    Args:
        performance: (onset, duration, value) triples sorted by onset

    Returns:
        (onset, duration, value) triples with rests inserted

    Raises:
        ValueError: If two entries overlap
    """
    result = []
    position = Fraction(0)
    for t, d, x in performance:
        if t > position:
            result.append((position, t - position, None))
        elif t < position:
            raise ValueError(
                f"Overlapping entries at {t}: previous entry ends at {position}. "
                "Only single-voice performances can be notated."
            )
        result.append((t, d, x))
        position = t + d
    return result


def _segment_value(value: Any, start: bool, stop: bool) -> Any:
    if value is None or not (start or stop):
        return value
    return Tie(value, start=start, stop=stop)


def separate_bars(
    entries: Iterable[Entry],
    bar_duration: TimeLike = 1,
    tie: bool = False
) -> Iterator[List[Tuple[Duration, Any]]]:
    """
    Separate contiguous entries into bars.

    Args:
        entries: Gap-free (onset, duration, value) triples starting at zero,
            as produced by add_rests
        bar_duration: Length of one bar
        tie: Split notes that cross a barline into tied segments instead
            of failing; rests are always split

    Yields:
        One list of (duration, value) pairs per bar; the last bar is padded
        with a rest

    Raises:
        BarSeparationError: If entries are not contiguous, or a note
            crosses a barline and tie is False
    """
    bar_duration = as_duration(bar_duration)
    if bar_duration <= 0:
        raise ValueError(f"Invalid bar_duration: {bar_duration}. Must be > 0.")

    bar: List[Tuple[Duration, Any]] = []
    position = Fraction(0)
    bar_end = bar_duration

    for t, d, x in entries:
        if t != position:
            raise BarSeparationError(f"Entries must be contiguous: expected onset {position}, got {t}")

        remaining = d
        first = True
        while True:
            room = bar_end - position
            if remaining <= room:
                bar.append((remaining, _segment_value(x, start=False, stop=not first)))
                position += remaining
                if position == bar_end:
                    yield bar
                    bar = []
                    bar_end += bar_duration
                break

            if not tie and x is not None:
                raise BarSeparationError(
                    f"Entry at {t} with duration {d} crosses the barline at {bar_end}"
                )
            bar.append((room, _segment_value(x, start=True, stop=not first)))
            logger.debug("Tied entry at %s across barline %s", t, bar_end)
            yield bar
            bar = []
            position = bar_end
            bar_end += bar_duration
            remaining -= room
            first = False

    if bar:
        bar.append((bar_end - position, None))
        yield bar

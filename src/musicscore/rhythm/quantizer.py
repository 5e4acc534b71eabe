"""
Rhythm quantization for one bar.

Converts a bar given as (duration, value) pairs into a rhythm tree of beats,
dotted beats and tuplets. The conversion is an ordered-choice grammar:

    rhythm  = element+
    element = beat | dotted | tuplet

At every choice point the first alternative that matches wins, so plain
beats are preferred over dotted beats, and dotted beats over tuplets.
"""

import logging
from dataclasses import dataclass, replace
from fractions import Fraction
from typing import Any, Iterable, List, Optional, Sequence as SequenceType, Tuple

from .errors import InvalidInputError, TrailingInputError, UnquantizableDurationError
from .rhythm import MAX_DOTS, Beat, Dotted, Rhythm, Sequence, Tuplet, dot_modifier


logger = logging.getLogger(__name__)

MAX_TUPLET_DEPTH = 1

# Triplet, quintuplet, septuplet, nonuplet
TUPLET_RATIOS: Tuple[Fraction, ...] = (
    Fraction(2, 3),
    Fraction(4, 5),
    Fraction(4, 7),
    Fraction(8, 9),
)

Pair = Tuple[Fraction, Any]
Match = Optional[Tuple[Rhythm, int]]


@dataclass
class QuantizationConfig:
    """Policy for rhythm quantization."""
    max_dots: int = MAX_DOTS
    tuplet_ratios: Tuple[Fraction, ...] = TUPLET_RATIOS
    max_tuplet_depth: int = MAX_TUPLET_DEPTH

    def __post_init__(self):
        """Validate quantization policy."""
        if not 0 <= self.max_dots <= MAX_DOTS:
            raise ValueError(f"Invalid max_dots: {self.max_dots}. Must be 0-{MAX_DOTS}.")
        if not 0 <= self.max_tuplet_depth <= MAX_TUPLET_DEPTH:
            raise ValueError(
                f"Invalid max_tuplet_depth: {self.max_tuplet_depth}. "
                f"Must be 0-{MAX_TUPLET_DEPTH}."
            )
        ratios = tuple(Fraction(r) for r in self.tuplet_ratios)
        for ratio in ratios:
            if not 0 < ratio < 1:
                raise ValueError(f"Invalid tuplet ratio: {ratio}. Must be between 0 and 1.")
        self.tuplet_ratios = ratios


@dataclass(frozen=True)
class RhythmState:
    """
    Grammar state of one quantization call.

    Attributes:
        time_modification: Product of the enclosing dot and tuplet multipliers;
            notated duration * time_modification = actual duration
        tuplet_depth: Number of enclosing tuplets
    """
    time_modification: Fraction = Fraction(1)
    tuplet_depth: int = 0

    def scaled(self, factor: Fraction) -> 'RhythmState':
        return replace(self, time_modification=self.time_modification * factor)

    def in_tuplet(self, ratio: Fraction) -> 'RhythmState':
        return RhythmState(self.time_modification * ratio, self.tuplet_depth + 1)


def is_power_of_two(value: Fraction) -> bool:
    """
    Check whether value is 2^k for some integer k (k may be negative).

    Uses exact halving and doubling, never floating-point logarithms.
    """
    if value <= 0:
        return False
    x = Fraction(value)
    while x >= 2:
        x /= 2
    while x < 1:
        x *= 2
    return x == 1


class Quantizer:
    """
    Quantizes bars into rhythm trees.

    A Quantizer holds only its policy; every call to quantize() starts from
    a fresh RhythmState, so one instance may serve any number of bars.
    """

    def __init__(self, config: Optional[QuantizationConfig] = None):
        """
        Initialize quantizer.

        Args:
            config: Quantization policy (dots, tuplet ratios, nesting)
        """
        self.config = config or QuantizationConfig()

    def quantize(self, bar: Iterable[Tuple[Any, Any]]) -> Rhythm:
        """
        Quantize one bar.

        Args:
            bar: (duration, value) pairs; a value of None is a rest

        Returns:
            Rhythm tree whose duration equals the total duration of the bar

        Raises:
            InvalidInputError: Empty bar, negative or float durations, a zero
                duration before the last non-zero one, or a bar of zero total
                duration
            UnquantizableDurationError: Nothing matches the start of the bar
            TrailingInputError: Input remains after the longest match
        """
        pairs = self._validate(bar)
        match = self._rhythm(pairs, 0, RhythmState())

        if match is None:
            logger.debug("No rhythm matches bar %s", pairs)
            raise UnquantizableDurationError(remainder=pairs)

        rhythm, position = match
        if position < len(pairs):
            logger.debug("Bar quantized up to entry %d of %d", position, len(pairs))
            raise TrailingInputError(
                remainder=pairs[position:],
                consumed=pairs[:position],
                rhythm=rhythm
            )
        return rhythm

    def _validate(self, bar: Iterable[Tuple[Any, Any]]) -> Tuple[Pair, ...]:
        try:
            items = [(d, x) for d, x in bar]
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"Expected (duration, value) pairs: {e}") from e

        if not items:
            raise InvalidInputError("Cannot quantize an empty bar")

        pairs = []
        for d, x in items:
            if isinstance(d, bool) or not isinstance(d, (int, Fraction)):
                raise InvalidInputError(
                    f"Invalid duration: {d!r}. Must be an int or Fraction.",
                    remainder=items
                )
            if d < 0:
                raise InvalidInputError(
                    f"Invalid duration: {d}. Must be >= 0.",
                    remainder=items
                )
            pairs.append((Fraction(d), x))

        positive = [i for i, (d, _) in enumerate(pairs) if d > 0]
        if not positive:
            raise InvalidInputError("Cannot quantize a bar of zero duration", remainder=items)

        # Zeros after the last sounding entry are left to the grammar as trailing input
        for i in range(positive[-1]):
            if pairs[i][0] == 0:
                raise InvalidInputError(
                    f"Invalid duration at entry {i}: 0. Must be > 0.",
                    remainder=items
                )

        return tuple(pairs)

    def _rhythm(self, pairs: SequenceType[Pair], position: int, state: RhythmState) -> Match:
        elements: List[Rhythm] = []
        while position < len(pairs):
            match = self._element(pairs, position, state)
            if match is None:
                break
            element, position = match
            elements.append(element)

        if not elements:
            return None
        if len(elements) == 1:
            return elements[0], position
        return Sequence(tuple(elements)), position

    def _element(self, pairs: SequenceType[Pair], position: int, state: RhythmState) -> Match:
        for alternative in (self._beat, self._dotted, self._tuplet):
            match = alternative(pairs, position, state)
            if match is not None:
                return match
        return None

    def _beat(self, pairs: SequenceType[Pair], position: int, state: RhythmState) -> Match:
        d, x = pairs[position]
        notated = d / state.time_modification
        if is_power_of_two(notated):
            return Beat(notated, x), position + 1
        return None

    def _dotted(self, pairs: SequenceType[Pair], position: int, state: RhythmState) -> Match:
        for dots in range(1, self.config.max_dots + 1):
            match = self._beat(pairs, position, state.scaled(dot_modifier(dots)))
            if match is not None:
                beat, position = match
                return Dotted(dots, beat), position
        return None

    def _tuplet(self, pairs: SequenceType[Pair], position: int, state: RhythmState) -> Match:
        if state.tuplet_depth >= self.config.max_tuplet_depth:
            return None
        for ratio in self.config.tuplet_ratios:
            match = self._rhythm(pairs, position, state.in_tuplet(ratio))
            if match is not None:
                rhythm, position = match
                return Tuplet(ratio, rhythm), position
        return None


def quantize(bar: Iterable[Tuple[Any, Any]],
             config: Optional[QuantizationConfig] = None) -> Rhythm:
    """Quantize one bar with the given (or default) policy."""
    return Quantizer(config).quantize(bar)

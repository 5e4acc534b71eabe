"""
Notation builder for converting scores to quantized bars.

Orchestrates bar-by-bar quantization of a score.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from ..rhythm.errors import QuantizationError
from ..rhythm.quantizer import Quantizer
from ..rhythm.rhythm import Rhythm
from ..score.bars import add_rests, separate_bars
from ..score.score import Score
from ..score.time import Duration
from .config_parser import MusicScoreConfig


logger = logging.getLogger(__name__)


class BarQuantizationError(Exception):
    """
    A bar of a score could not be quantized.

    Attributes:
        bar_number: Number of the failing bar (1-indexed)
        cause: The QuantizationError raised for the bar
    """

    def __init__(self, bar_number: int, cause: QuantizationError):
        super().__init__(f"Could not quantize bar {bar_number}: {cause}")
        self.bar_number = bar_number
        self.cause = cause


@dataclass
class QuantizedBar:
    """
    One bar of a score with its rhythm tree.

    Attributes:
        number: Bar number (1-indexed)
        entries: (duration, value) pairs of the bar
        rhythm: Rhythm tree of the bar
    """
    number: int
    entries: List[Tuple[Duration, Any]]
    rhythm: Rhythm

    def to_dict(self) -> dict:
        return {
            'number': self.number,
            'rhythm': self.rhythm.to_dict(),
        }


class NotationBuilder:
    """
    Builds quantized bars from scores.

    Orchestrates the notation pipeline:
    1. Perform the score (absolute time, rests removed)
    2. Insert rests between notes
    3. Separate bars
    4. Quantize each bar
    """

    def __init__(self, config: Optional[MusicScoreConfig] = None):
        """
        Initialize notation builder.

        Args:
            config: Quantization and export configuration
        """
        self.config = config or MusicScoreConfig()
        self.quantizer = Quantizer(self.config.quantization)

    def build(self, score: Score) -> List[QuantizedBar]:
        """
        Quantize every bar of a score.

        Args:
            score: Single-voice score starting at time zero or later

        Returns:
            Quantized bars in order; bars that fail are omitted when
            skip_unquantizable is set

        Raises:
            BarQuantizationError: If a bar fails and skip_unquantizable is not set
        """
        export = self.config.export
        entries = add_rests(score.perform_absolute())
        bars = separate_bars(entries, bar_duration=export.bar_duration, tie=export.tie_across_bars)

        result = []
        for number, bar in enumerate(bars, start=1):
            try:
                rhythm = self.quantizer.quantize(bar)
            except QuantizationError as e:
                if export.skip_unquantizable:
                    logger.warning("Skipping bar %d: %s", number, e)
                    continue
                raise BarQuantizationError(number, e) from e
            result.append(QuantizedBar(number=number, entries=bar, rhythm=rhythm))

        logger.debug("Quantized %d bars", len(result))
        return result


def quantize_score(score: Score, config: Optional[MusicScoreConfig] = None) -> List[QuantizedBar]:
    """Quantize every bar of a score with the given (or default) configuration."""
    return NotationBuilder(config).build(score)

"""
Tests for NotationBuilder.
"""

import pytest
from fractions import Fraction as F

from musicscore.pipeline.config_parser import ExportConfig, MusicScoreConfig
from musicscore.pipeline.export import BarQuantizationError, NotationBuilder, QuantizedBar, quantize_score
from musicscore.rhythm.errors import UnquantizableDurationError
from musicscore.rhythm.quantizer import QuantizationConfig
from musicscore.rhythm.rhythm import Beat, Dotted, Sequence, Tuplet, duration
from musicscore.score.bars import BarSeparationError
from musicscore.score.note import Tie
from musicscore.score.score import Score, chord, melody_stretch, note


def make_config(**export_kwargs) -> MusicScoreConfig:
    return MusicScoreConfig(export=ExportConfig(**export_kwargs))


class TestNotationBuilder:
    """Test bar-by-bar quantization of scores."""

    def test_build(self):
        """Test each bar gets its own rhythm tree."""
        score = melody_stretch([
            (F(1, 2), 60), (F(1, 2), 62),
            (F(1, 3), 64), (F(1, 3), 65), (F(1, 3), 67),
        ])

        bars = NotationBuilder().build(score)

        assert [bar.number for bar in bars] == [1, 2]
        assert bars[0].rhythm == Sequence((Beat(F(1, 2), 60), Beat(F(1, 2), 62)))
        assert bars[1].rhythm == Tuplet(
            F(2, 3),
            Sequence((Beat(F(1, 2), 64), Beat(F(1, 2), 65), Beat(F(1, 2), 67)))
        )
        assert all(duration(bar.rhythm) == 1 for bar in bars)

    def test_rests_are_inserted(self):
        """Test leading silence and the incomplete last bar become rests."""
        score = note(60).stretch(F(1, 4)).delay(F(1, 2))

        bars = NotationBuilder().build(score)

        assert len(bars) == 1
        assert bars[0].entries == [(F(1, 2), None), (F(1, 4), 60), (F(1, 4), None)]
        assert bars[0].rhythm == Sequence((Beat(F(1, 2), None), Beat(F(1, 4), 60), Beat(F(1, 4), None)))

    def test_empty_score(self):
        assert NotationBuilder().build(Score()) == []

    def test_unquantizable_bar(self):
        """Test a failing bar is reported with its number."""
        score = melody_stretch([(1, 60), (F(5, 7), 62), (F(2, 7), 64)])

        with pytest.raises(BarQuantizationError) as exc_info:
            NotationBuilder().build(score)

        assert exc_info.value.bar_number == 2
        assert isinstance(exc_info.value.cause, UnquantizableDurationError)
        assert "bar 2" in str(exc_info.value)

    def test_skip_unquantizable(self):
        """Test failing bars are left out when skipping is enabled."""
        score = melody_stretch([(F(5, 7), 60), (F(2, 7), 62), (1, 64)])

        bars = NotationBuilder(make_config(skip_unquantizable=True)).build(score)

        assert [bar.number for bar in bars] == [2]
        assert bars[0].rhythm == Beat(F(1), 64)

    def test_crossing_note(self):
        score = melody_stretch([(F(3, 4), 60), (F(1, 2), 62)])

        with pytest.raises(BarSeparationError):
            NotationBuilder().build(score)

    def test_tie_across_bars(self):
        """Test a note over the barline becomes two tied beats."""
        score = melody_stretch([(F(3, 4), 60), (F(1, 2), 62)])

        bars = NotationBuilder(make_config(tie_across_bars=True)).build(score)

        assert bars[0].rhythm == Sequence((
            Dotted(1, Beat(F(1, 2), 60)),
            Beat(F(1, 4), Tie(62, start=True)),
        ))
        assert bars[1].rhythm == Sequence((
            Beat(F(1, 4), Tie(62, stop=True)),
            Dotted(1, Beat(F(1, 2), None)),
        ))

    def test_bar_duration(self):
        score = melody_stretch([(F(3, 8), 60), (F(3, 8), 62)])

        bars = NotationBuilder(make_config(bar_duration=F(3, 4))).build(score)

        assert len(bars) == 1
        assert bars[0].rhythm == Sequence((Dotted(1, Beat(F(1, 4), 60)), Dotted(1, Beat(F(1, 4), 62))))

    def test_quantization_policy(self):
        """Test the builder uses the configured quantizer."""
        config = MusicScoreConfig(quantization=QuantizationConfig(max_tuplet_depth=0))
        score = melody_stretch([(F(1, 3), 60), (F(1, 3), 62), (F(1, 3), 64)])

        with pytest.raises(BarQuantizationError):
            NotationBuilder(config).build(score)

    def test_chords_rejected(self):
        """Test only single voices can be notated."""
        with pytest.raises(ValueError):
            NotationBuilder().build(chord([60, 64]))

    def test_quantize_score(self):
        bars = quantize_score(note(60))

        assert bars == [QuantizedBar(number=1, entries=[(1, 60)], rhythm=Beat(F(1), 60))]

    def test_bar_to_dict(self):
        bar = quantize_score(note(60))[0]

        assert bar.to_dict() == {
            'number': 1,
            'rhythm': {'type': 'beat', 'duration': '1', 'value': 60},
        }

"""
Tests for rest insertion and bar separation.
"""

import pytest
from fractions import Fraction as F

from musicscore.score.bars import BarSeparationError, add_rests, separate_bars
from musicscore.score.note import Tie


class TestAddRests:
    """Test rest insertion."""

    def test_fills_gaps(self):
        """Test gaps before and between notes become rests."""
        entries = add_rests([(F(1, 4), F(1, 4), 60), (1, F(1, 2), 62)])

        assert entries == [
            (0, F(1, 4), None),
            (F(1, 4), F(1, 4), 60),
            (F(1, 2), F(1, 2), None),
            (1, F(1, 2), 62),
        ]

    def test_no_gaps(self):
        entries = [(0, F(1, 2), 60), (F(1, 2), F(1, 2), 62)]

        assert add_rests(entries) == entries

    def test_empty(self):
        assert add_rests([]) == []

    def test_overlap(self):
        """Test overlapping notes cannot be separated."""
        with pytest.raises(ValueError, match="Overlapping"):
            add_rests([(0, 1, 60), (F(1, 2), 1, 64)])


class TestSeparateBars:
    """Test bar separation."""

    def test_two_bars(self):
        """Test the last bar is padded with a rest."""
        bars = list(separate_bars([(0, F(1, 2), 60), (F(1, 2), F(1, 2), 62), (1, F(1, 4), 64)]))

        assert bars == [
            [(F(1, 2), 60), (F(1, 2), 62)],
            [(F(1, 4), 64), (F(3, 4), None)],
        ]

    def test_bars_sum_to_bar_duration(self):
        bars = list(separate_bars([(0, F(3, 8), 60), (F(3, 8), F(3, 8), 62)], bar_duration=F(3, 4)))

        assert all(sum(d for d, _ in bar) == F(3, 4) for bar in bars)

    def test_crossing_note_fails(self):
        """Test a note over the barline is rejected without ties."""
        with pytest.raises(BarSeparationError, match="crosses the barline"):
            list(separate_bars([(0, F(3, 4), 60), (F(3, 4), F(1, 2), 62)]))

    def test_crossing_note_tied(self):
        """Test a note over the barline is split into tied segments."""
        bars = list(separate_bars([(0, F(3, 4), 60), (F(3, 4), F(1, 2), 62)], tie=True))

        assert bars == [
            [(F(3, 4), 60), (F(1, 4), Tie(62, start=True))],
            [(F(1, 4), Tie(62, stop=True)), (F(3, 4), None)],
        ]

    def test_tie_over_several_bars(self):
        """Test middle segments both stop and start a tie."""
        bars = list(separate_bars([(0, F(5, 2), 60)], tie=True))

        assert bars == [
            [(1, Tie(60, start=True))],
            [(1, Tie(60, start=True, stop=True))],
            [(F(1, 2), Tie(60, stop=True)), (F(1, 2), None)],
        ]
        assert bars[1][0][1].tie_type == 'continue'

    def test_rests_always_split(self):
        """Test rests over the barline are split even without ties."""
        bars = list(separate_bars([(0, F(3, 2), None), (F(3, 2), F(1, 2), 60)]))

        assert bars == [
            [(1, None)],
            [(F(1, 2), None), (F(1, 2), 60)],
        ]

    def test_not_contiguous(self):
        with pytest.raises(BarSeparationError, match="contiguous"):
            list(separate_bars([(0, F(1, 2), 60), (1, F(1, 2), 62)]))

    def test_invalid_bar_duration(self):
        with pytest.raises(ValueError, match="Invalid bar_duration"):
            list(separate_bars([(0, 1, 60)], bar_duration=0))

    def test_lazy(self):
        """Test bars are produced before later entries are checked."""
        bars = separate_bars([(0, 1, 60), (2, 1, 62)])

        assert next(bars) == [(1, 60)]
        with pytest.raises(BarSeparationError):
            next(bars)

    def test_empty(self):
        assert list(separate_bars([])) == []

"""
Tests for Track and Part.
"""

import pytest
from fractions import Fraction as F

from musicscore.score.part import Part
from musicscore.score.track import Track


class TestTrack:
    """Test Track dataclass."""

    def test_occurrences_sorted(self):
        track = Track(((1, 'b'), (0, 'a')))

        assert list(track) == [(0, 'a'), (1, 'b')]
        assert track.onset == 0
        assert track.offset == 1
        assert track.duration == 1

    def test_of(self):
        assert list(Track.of('a')) == [(0, 'a')]

    def test_empty(self):
        track = Track()

        assert len(track) == 0
        assert track.duration == 0

    def test_add(self):
        track = Track.of('a').delay(2) + Track.of('b')

        assert list(track) == [(0, 'b'), (2, 'a')]

    def test_stretch(self):
        track = Track(((1, 'a'), (2, 'b'))).stretch(F(1, 2))

        assert list(track) == [(F(1, 2), 'a'), (1, 'b')]

    def test_map(self):
        assert list(Track.of(60).map(lambda p: p + 1)) == [(0, 61)]

    def test_bind(self):
        """Test each inner track is delayed to its occurrence."""
        track = Track(((0, 'a'), (2, 'b'))).bind(lambda x: Track(((0, x), (1, x + '!'))))

        assert list(track) == [(0, 'a'), (1, 'a!'), (2, 'b'), (3, 'b!')]


class TestPart:
    """Test Part dataclass."""

    def test_of(self):
        part = Part.of('a')

        assert list(part) == [(1, 'a')]
        assert part.duration == 1

    def test_durations_converted(self):
        part = Part((("1/2", 'a'),))

        assert list(part) == [(F(1, 2), 'a')]

    def test_add_appends(self):
        part = Part.of('a') + Part(((F(1, 2), 'b'),))

        assert [x for _, x in part] == ['a', 'b']
        assert part.duration == F(3, 2)

    def test_stretch_and_map(self):
        part = Part.of(60).stretch(F(1, 4)).map(lambda p: p + 2)

        assert list(part) == [(F(1, 4), 62)]

    def test_bind(self):
        """Test each inner part is scaled by the duration it replaces."""
        part = Part(((F(1, 2), 'a'), (1, 'b'))).bind(
            lambda x: Part(((F(1, 2), x), (F(1, 2), x.upper())))
        )

        assert list(part) == [(F(1, 4), 'a'), (F(1, 4), 'A'), (F(1, 2), 'b'), (F(1, 2), 'B')]
        assert part.duration == F(3, 2)

    def test_to_score(self):
        """Test values play in sequence and None becomes a rest."""
        score = Part(((1, 60), (F(1, 2), None), (F(1, 2), 62))).to_score()

        assert len(score) == 3
        assert score.duration == 2
        assert score.perform_absolute() == [(0, 1, 60), (F(3, 2), F(1, 2), 62)]

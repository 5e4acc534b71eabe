"""
Tests for Note, Tie and pitch spelling.
"""

import pytest

from musicscore.score import pitch
from musicscore.score.note import Articulation, Dynamic, Note, Tie
from musicscore.score.pitch import pitch_from_name, pitch_name, spell


class TestNote:
    """Test Note dataclass."""

    def test_note_creation(self):
        """Test creating a note."""
        note = Note(pitch=60, velocity=100)

        assert note.pitch == 60
        assert note.velocity == 100
        assert note.pitch_name == 'C4'
        assert note.dynamic is None

    def test_invalid_pitch(self):
        """Test invalid pitch raises error."""
        with pytest.raises(ValueError, match="Invalid pitch"):
            Note(pitch=128)

    def test_invalid_velocity(self):
        """Test invalid velocity raises error."""
        with pytest.raises(ValueError, match="Invalid velocity"):
            Note(pitch=60, velocity=-1)

    def test_infer_dynamic_from_velocity(self):
        """Test dynamic inference."""
        assert Note(pitch=60, velocity=0).infer_dynamic_from_velocity() == Dynamic.PPP
        assert Note(pitch=60, velocity=64).infer_dynamic_from_velocity() == Dynamic.MF
        assert Note(pitch=60, velocity=80).infer_dynamic_from_velocity() == Dynamic.F
        assert Note(pitch=60, velocity=127).infer_dynamic_from_velocity() == Dynamic.FFF

    def test_from_dict(self):
        """Test pitch names and markings are read from a dictionary."""
        note = Note.from_dict({
            'pitch': 'eb4',
            'velocity': 90,
            'dynamic': 'mf',
            'articulation': 'staccato',
        })

        assert note == Note(pitch=63, velocity=90, dynamic=Dynamic.MF,
                            articulation=Articulation.STACCATO)

    def test_to_dict(self):
        data = Note(pitch=60, dynamic=Dynamic.P).to_dict()

        assert data == {'pitch': 60, 'pitch_name': 'C4', 'velocity': 80, 'dynamic': 'p'}


class TestTie:
    """Test tied segments."""

    def test_tie_types(self):
        assert Tie(60, start=True).tie_type == 'start'
        assert Tie(60, stop=True).tie_type == 'stop'
        assert Tie(60, start=True, stop=True).tie_type == 'continue'
        assert Tie(60).tie_type is None

    def test_to_dict(self):
        assert Tie(Note(pitch=60), start=True).to_dict()['value']['pitch'] == 60
        assert Tie(60, stop=True).to_dict() == {'tie': 'stop', 'value': 60}


class TestPitch:
    """Test pitch names and spelling."""

    def test_pitch_name(self):
        assert pitch_name(60) == 'C4'
        assert pitch_name(61) == 'C#4'
        assert pitch_name(21) == 'A0'

    def test_pitch_from_name(self):
        assert pitch_from_name('c4') == 60
        assert pitch_from_name('eb3') == 51
        assert pitch_from_name('F#5') == 78
        assert pitch_from_name('bb') == 70
        assert pitch_from_name('C-1') == 0
        assert pitch_from_name('g9') == 127

    def test_default_octave(self):
        assert pitch_from_name('a', default_octave=3) == 57

    def test_invalid_name(self):
        with pytest.raises(ValueError, match="Invalid pitch name"):
            pitch_from_name('h4')

    def test_out_of_range(self):
        with pytest.raises(ValueError, match="out of MIDI range"):
            pitch_from_name('a9')

    def test_spell_naturals(self):
        assert spell(60) == ('C', None, 4)
        assert spell(71) == ('B', None, 4)
        assert spell(57) == ('A', None, 3)

    def test_spell_uses_flats(self):
        """Test chromatic pitches are spelled as flats."""
        assert spell(61) == ('D', -1, 4)
        assert spell(66) == ('G', -1, 4)
        assert spell(70) == ('B', -1, 4)

    def test_literals(self):
        assert pitch.c == 60
        assert pitch.eb == 63
        assert pitch.fs == 66
        assert pitch.bb == 70

"""
Format converters for scores.

Exports scores to different formats (JSON, MIDI, MusicXML).
"""

import json
import logging
from abc import ABC, abstractmethod
from fractions import Fraction
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import mido

from ..pipeline.config_parser import MusicScoreConfig
from ..pipeline.export import NotationBuilder
from ..rhythm.rhythm import Leaf, iter_leaves
from ..score.note import Note, Tie
from ..score.pitch import pitch_from_name, spell
from ..score.score import Event, Score
from ..score.time import as_duration, format_duration


# Quarter notes per time unit (one time unit is one whole note)
QUARTERS_PER_UNIT = 4

_DURATION_TYPES = {
    Fraction(8): 'breve',
    Fraction(4): 'whole',
    Fraction(2): 'half',
    Fraction(1): 'quarter',
    Fraction(1, 2): 'eighth',
    Fraction(1, 4): '16th',
    Fraction(1, 8): '32nd',
    Fraction(1, 16): '64th',
    Fraction(1, 32): '128th',
    Fraction(1, 64): '256th',
}


def to_midi_note(value: Any, default_velocity: int = 80) -> Tuple[int, int]:
    """
    Convert a note value to (pitch, velocity).

    Numbers are MIDI pitches (floats are rounded), strings are pitch names,
    pairs are (pitch, velocity).

    Raises:
        TypeError: If value cannot be played as a MIDI note
    """
    if isinstance(value, Tie):
        return to_midi_note(value.value, default_velocity)
    if isinstance(value, Note):
        return value.pitch, value.velocity
    if isinstance(value, bool):
        raise TypeError(f"Cannot convert {value!r} to a MIDI note")
    if isinstance(value, int):
        return value, default_velocity
    if isinstance(value, (float, Fraction)):
        return round(value), default_velocity
    if isinstance(value, str):
        return pitch_from_name(value), default_velocity
    if isinstance(value, (tuple, list)) and len(value) == 2:
        pitch, velocity = value
        return round(pitch), round(velocity)
    raise TypeError(f"Cannot convert {value!r} to a MIDI note")


class Converter(ABC):
    """Abstract base class for format converters."""

    def __init__(self, config: Optional[MusicScoreConfig] = None):
        """
        Initialize converter.

        Args:
            config: Quantization and export configuration
        """
        self.config = config or MusicScoreConfig()
        self.logger = logging.getLogger(__name__)

    @abstractmethod
    def convert(self, score: Score, output_path: Union[str, Path]) -> None:
        """
        Convert score to target format.

        Args:
            score: Score to convert
            output_path: Output file path
        """
        pass


class JSONConverter(Converter):
    """Converts score and its quantized bars to JSON format."""

    def convert(self, score: Score, output_path: Union[str, Path]) -> None:
        """
        Export score to JSON file.

        Args:
            score: Score to export
            output_path: Output JSON file path
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        data = self.to_dict(score)

        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

        self.logger.info(f"JSON file saved to {output_path}")

    def to_dict(self, score: Score) -> Dict[str, Any]:
        """Score, configuration and quantized bars as a dictionary."""
        bars = NotationBuilder(self.config).build(score)
        return {
            'metadata': self.config.to_dict(),
            'score': score.to_dict(),
            'bars': [bar.to_dict() for bar in bars],
        }

    @staticmethod
    def load(file_path: Union[str, Path]) -> dict:
        """
        Load JSON file.

        Args:
            file_path: Path to JSON file

        Returns:
            Dictionary with score data
        """
        with open(file_path, 'r', encoding='utf-8') as f:
            return json.load(f)

    @staticmethod
    def score_from_dict(data: Dict[str, Any]) -> Score:
        """
        Build a score from a dictionary.

        Each event has "onset" and "duration" (numbers or strings such as
        "3/4") and either a "value" or note fields ("pitch", "velocity",
        "dynamic", "articulation"). Events without a pitch are rests.
        """
        events = []
        for item in data.get('events', []):
            value = item.get('value')
            if value is None and item.get('pitch') is not None:
                value = item
            if isinstance(value, dict):
                value = Note.from_dict(value)
            events.append(Event(
                onset=as_duration(item['onset']),
                duration=as_duration(item['duration']),
                value=value
            ))
        return Score(tuple(events))

    @classmethod
    def load_score(cls, file_path: Union[str, Path]) -> Score:
        """Load a score from a JSON file."""
        return cls.score_from_dict(cls.load(file_path))


class MIDIConverter(Converter):
    """Converts score to MIDI format."""

    def convert(self, score: Score, output_path: Union[str, Path]) -> None:
        """
        Export score to MIDI file.

        Args:
            score: Score to export
            output_path: Output MIDI file path
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        midi = self.to_midi_file(score)
        midi.save(output_path)

        self.logger.info(f"MIDI file saved to {output_path}")

    def to_midi_file(self, score: Score) -> mido.MidiFile:
        """Build a MIDI file holding the notes of a score."""
        export = self.config.export

        midi = mido.MidiFile(ticks_per_beat=export.ticks_per_beat)
        track = mido.MidiTrack()
        midi.tracks.append(track)

        # Set tempo
        track.append(mido.MetaMessage('set_tempo', tempo=mido.bpm2tempo(export.tempo)))

        # Set time signature
        numerator, denominator = export.time_signature
        track.append(mido.MetaMessage(
            'time_signature',
            numerator=numerator,
            denominator=denominator
        ))

        # Sort by tick; note_off before note_on at the same tick
        events = self._create_midi_events(score)
        events.sort(key=lambda x: (x[0], x[1]))

        current_tick = 0
        for tick, _, msg in events:
            msg.time = tick - current_tick
            track.append(msg)
            current_tick = tick

        return midi

    def _ticks(self, time: Fraction) -> int:
        return round(time * QUARTERS_PER_UNIT * self.config.export.ticks_per_beat)

    def _create_midi_events(self, score: Score) -> List[Tuple[int, int, mido.Message]]:
        """Create MIDI note on/off events from notes."""
        events = []
        for onset, duration, value in score.perform_absolute():
            pitch, velocity = to_midi_note(value, self.config.export.default_velocity)
            events.append((
                self._ticks(onset),
                1,
                mido.Message('note_on', note=pitch, velocity=velocity, time=0)
            ))
            events.append((
                self._ticks(onset + duration),
                0,
                mido.Message('note_off', note=pitch, velocity=0, time=0)
            ))
        return events


class MusicXMLConverter(Converter):
    """Converts score to MusicXML format, one quantized rhythm tree per bar."""

    def convert(self, score: Score, output_path: Union[str, Path]) -> None:
        """
        Export score to MusicXML file.

        Args:
            score: Score to export
            output_path: Output MusicXML file path
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        m21_score = self.to_stream(score)
        m21_score.write('musicxml', fp=str(output_path))

        self.logger.info(f"MusicXML file saved to {output_path}")

    def to_stream(self, score: Score):
        """
        Build a music21 score from a score.

        Raises:
            BarQuantizationError: If a bar cannot be quantized
            TypeError: If a note value cannot be notated
        """
        try:
            from music21 import stream, tempo, meter, metadata
        except ImportError:
            raise ImportError(
                "music21 library required for MusicXML export. "
                "Install with: pip install music21"
            )

        export = self.config.export
        bars = NotationBuilder(self.config).build(score)

        m21_score = stream.Score()
        m21_score.metadata = metadata.Metadata()
        m21_score.metadata.title = export.title
        if export.composer:
            m21_score.metadata.composer = export.composer

        part = stream.Part()
        part.partName = export.part_name

        for index, bar in enumerate(bars):
            measure = stream.Measure(number=bar.number)
            if index == 0:
                measure.insert(0, tempo.MetronomeMark(number=export.tempo))
                measure.insert(0, meter.TimeSignature(
                    f'{export.time_signature[0]}/{export.time_signature[1]}'
                ))

            offset = Fraction(0)
            for leaf in iter_leaves(bar.rhythm):
                for element in self._make_elements(leaf):
                    measure.insert(offset * QUARTERS_PER_UNIT, element)
                offset += leaf.duration

            part.append(measure)

        m21_score.insert(0, part)
        return m21_score

    def _make_duration(self, leaf: Leaf):
        """music21 duration for a leaf: notated type, dots and tuplets."""
        from music21 import duration

        quarter_length = leaf.notated * QUARTERS_PER_UNIT
        if quarter_length not in _DURATION_TYPES:
            raise ValueError(f"Cannot notate duration {format_duration(leaf.notated)}")

        dur = duration.Duration(_DURATION_TYPES[quarter_length], dots=leaf.dots)
        for ratio in leaf.tuplets:
            # 2/3 is three notes in the time of two
            dur.appendTuplet(duration.Tuplet(ratio.denominator, ratio.numerator))
        return dur

    def _make_elements(self, leaf: Leaf) -> list:
        """Create the music21 note or rest for a leaf, preceded by its dynamic."""
        from music21 import note, tie, dynamics, articulations

        value = leaf.value
        tie_type = None
        if isinstance(value, Tie):
            tie_type = value.tie_type
            value = value.value

        if value is None:
            return [note.Rest(duration=self._make_duration(leaf))]

        pitch, velocity = to_midi_note(value, self.config.export.default_velocity)
        step, alteration, octave = spell(pitch)
        accidental = '#' * alteration if alteration and alteration > 0 else '-' * -(alteration or 0)

        m21_note = note.Note(f'{step}{accidental}{octave}', duration=self._make_duration(leaf))
        m21_note.volume.velocity = velocity

        if tie_type is not None:
            m21_note.tie = tie.Tie(tie_type)

        elements = []
        if isinstance(value, Note):
            # Dynamics are added separately, not as articulations
            if value.dynamic is not None:
                elements.append(dynamics.Dynamic(value.dynamic.value))

            if value.articulation is not None:
                articulation_map = {
                    'staccato': articulations.Staccato,
                    'staccatissimo': articulations.Staccatissimo,
                    'tenuto': articulations.Tenuto,
                    'accent': articulations.Accent,
                    'marcato': articulations.StrongAccent,
                }
                if value.articulation.value in articulation_map:
                    m21_note.articulations.append(articulation_map[value.articulation.value]())

        elements.append(m21_note)
        return elements

"""
Score module for musicscore.

Time-stamped notes and rests as composable values.
"""

from .time import Time, Duration, as_duration, as_time, format_duration
from .note import Note, Dynamic, Articulation, Tie
from .pitch import pitch_from_name, pitch_name, spell
from .score import (
    Event,
    Score,
    rest,
    note,
    chord,
    melody,
    melodies,
    chords,
    melody_stretch,
    chord_delay,
    chord_delay_stretch,
    delay,
    stretch,
    compress,
    stretch_to,
    start_at,
    stop_at,
    seq,
    par,
    scat,
    pcat,
    sustain,
    overlap,
    anticipate,
)
from .track import Track
from .part import Part
from .bars import BarSeparationError, add_rests, separate_bars

__all__ = [
    'Time',
    'Duration',
    'as_duration',
    'as_time',
    'format_duration',
    'Note',
    'Dynamic',
    'Articulation',
    'Tie',
    'pitch_from_name',
    'pitch_name',
    'spell',
    'Event',
    'Score',
    'rest',
    'note',
    'chord',
    'melody',
    'melodies',
    'chords',
    'melody_stretch',
    'chord_delay',
    'chord_delay_stretch',
    'delay',
    'stretch',
    'compress',
    'stretch_to',
    'start_at',
    'stop_at',
    'seq',
    'par',
    'scat',
    'pcat',
    'sustain',
    'overlap',
    'anticipate',
    'Track',
    'Part',
    'BarSeparationError',
    'add_rests',
    'separate_bars',
]

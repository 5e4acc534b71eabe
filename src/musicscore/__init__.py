"""
musicscore - musical scores as composable values

Scores of exact-time notes and rests, rhythm quantization into beats,
dotted notes and tuplets, and export to MIDI, MusicXML and JSON.
"""

from .score import Score, Event, Note, rest, note, chord, melody, scat, pcat
from .rhythm import quantize, Quantizer, QuantizationConfig, QuantizationError
from .pipeline import MusicScoreConfig, ExportConfig, load_config, quantize_score

__version__ = "0.1.0"

__all__ = [
    'Score',
    'Event',
    'Note',
    'rest',
    'note',
    'chord',
    'melody',
    'scat',
    'pcat',
    'quantize',
    'Quantizer',
    'QuantizationConfig',
    'QuantizationError',
    'MusicScoreConfig',
    'ExportConfig',
    'load_config',
    'quantize_score',
]

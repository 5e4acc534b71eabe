"""
Converter module for musicscore.

Exports scores to notation and playback formats (JSON, MIDI, MusicXML).
"""

from .converter import Converter, JSONConverter, MIDIConverter, MusicXMLConverter, to_midi_note

__all__ = [
    'Converter',
    'JSONConverter',
    'MIDIConverter',
    'MusicXMLConverter',
    'to_midi_note',
]

"""
Pitch literals and spelling.

Pitches are MIDI note numbers; C4 (middle C) is 60.
"""

import re
from typing import Optional, Tuple

NOTE_NAMES = ['C', 'C#', 'D', 'D#', 'E', 'F', 'F#', 'G', 'G#', 'A', 'A#', 'B']
STEPS = ['C', 'D', 'E', 'F', 'G', 'A', 'B']

# Semitone offset of each step of the major scale
MAJOR_SCALE = [0, 2, 4, 5, 7, 9, 11]

_ALTERATIONS = {'': 0, '#': 1, '##': 2, 'b': -1, 'bb': -2}
_PITCH_RE = re.compile(r'^([a-gA-G])(##|#|bb|b)?(-?\d+)?$')


def pitch_name(pitch: int) -> str:
    """Convert MIDI pitch to note name (e.g., 60 -> C4)."""
    octave = (pitch // 12) - 1
    return f"{NOTE_NAMES[pitch % 12]}{octave}"


def pitch_from_name(name: str, default_octave: int = 4) -> int:
    """
    Convert a pitch name to a MIDI note number.

    Args:
        name: Step, optional accidental and optional octave, e.g.
            "c4", "eb3", "F#5", "bb" (B flat in the default octave)
        default_octave: Octave used when name has none

    Returns:
        MIDI note number
    """
    match = _PITCH_RE.match(name.strip())
    if match is None:
        raise ValueError(f"Invalid pitch name: {name!r}")

    step, accidental, octave = match.groups()
    octave = int(octave) if octave is not None else default_octave
    midi = (octave + 1) * 12 + MAJOR_SCALE[STEPS.index(step.upper())] + _ALTERATIONS[accidental or '']

    if not 0 <= midi <= 127:
        raise ValueError(f"Pitch out of MIDI range: {name!r} -> {midi}")
    return midi


def spell(pitch: int) -> Tuple[str, Optional[int], int]:
    """
    Spell a MIDI pitch as (step, alteration, octave).

    Chromatic pitches are spelled as the flattened next step of the major
    scale, so 61 is D flat rather than C sharp. The alteration is None for
    natural pitches.
    """
    octave = (pitch // 12) - 1
    semitone = pitch % 12
    index = next(i for i, s in enumerate(MAJOR_SCALE) if s >= semitone)
    alteration = semitone - MAJOR_SCALE[index]
    return STEPS[index], (alteration or None), octave


# Octave 4 literals
c = pitch_from_name('c')
d = pitch_from_name('d')
e = pitch_from_name('e')
f = pitch_from_name('f')
g = pitch_from_name('g')
a = pitch_from_name('a')
b = pitch_from_name('b')

cs = pitch_from_name('c#')
ds = pitch_from_name('d#')
fs = pitch_from_name('f#')
gs = pitch_from_name('g#')

db = pitch_from_name('db')
eb = pitch_from_name('eb')
gb = pitch_from_name('gb')
ab = pitch_from_name('ab')
bb = pitch_from_name('bb')

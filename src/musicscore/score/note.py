"""
Note values for scores.

A score places values in time; a Note is the usual value: a pitch with
velocity and optional expression marks.
"""

from dataclasses import dataclass
from typing import Any, Optional
from enum import Enum

from .pitch import pitch_from_name, pitch_name


class Dynamic(Enum):
    """Musical dynamics (volume/intensity markings)."""
    PPP = "ppp"  # pianississimo
    PP = "pp"    # pianissimo
    P = "p"      # piano
    MP = "mp"    # mezzo-piano
    MF = "mf"    # mezzo-forte
    F = "f"      # forte
    FF = "ff"    # fortissimo
    FFF = "fff"  # fortississimo


class Articulation(Enum):
    """Musical articulation markings."""
    STACCATO = "staccato"      # Short, detached
    STACCATISSIMO = "staccatissimo"  # Very short
    TENUTO = "tenuto"          # Held for full value
    ACCENT = "accent"          # Emphasized
    MARCATO = "marcato"        # Strongly accented
    LEGATO = "legato"          # Smooth, connected


@dataclass(frozen=True)
class Note:
    """
    A pitched note value.

    Attributes:
        pitch: MIDI note number (0-127)
        velocity: MIDI velocity (0-127, default 80)
        dynamic: Dynamic marking (optional)
        articulation: Articulation marking (optional)
    """
    pitch: int
    velocity: int = 80
    dynamic: Optional[Dynamic] = None
    articulation: Optional[Articulation] = None

    def __post_init__(self):
        """Validate note parameters."""
        if not 0 <= self.pitch <= 127:
            raise ValueError(f"Invalid pitch: {self.pitch}. Must be 0-127.")
        if not 0 <= self.velocity <= 127:
            raise ValueError(f"Invalid velocity: {self.velocity}. Must be 0-127.")

    @property
    def pitch_name(self) -> str:
        """Convert MIDI pitch to note name (e.g., 60 -> C4)."""
        return pitch_name(self.pitch)

    def infer_dynamic_from_velocity(self) -> Dynamic:
        """
        Infer dynamic marking from MIDI velocity.

        Velocity ranges (approximate):
        0-15: ppp, 16-31: pp, 32-47: p, 48-63: mp,
        64-79: mf, 80-95: f, 96-111: ff, 112-127: fff
        """
        levels = list(Dynamic)
        return levels[min(self.velocity // 16, len(levels) - 1)]

    @classmethod
    def from_dict(cls, data: dict) -> 'Note':
        """
        Create a note from its dictionary representation.

        The pitch may be a MIDI number or a pitch name such as "eb4".
        """
        pitch = data['pitch']
        if isinstance(pitch, str):
            pitch = pitch_from_name(pitch)
        dynamic = data.get('dynamic')
        articulation = data.get('articulation')
        return cls(
            pitch=pitch,
            velocity=data.get('velocity', 80),
            dynamic=Dynamic(dynamic) if dynamic is not None else None,
            articulation=Articulation(articulation) if articulation is not None else None
        )

    def to_dict(self) -> dict:
        """Convert note to dictionary representation."""
        result = {
            'pitch': self.pitch,
            'pitch_name': self.pitch_name,
            'velocity': self.velocity,
        }
        if self.dynamic is not None:
            result['dynamic'] = self.dynamic.value
        if self.articulation is not None:
            result['articulation'] = self.articulation.value
        return result


@dataclass(frozen=True)
class Tie:
    """
    A segment of a value split across a barline.

    Attributes:
        value: The tied value
        start: A tie continues from this segment into the next
        stop: A tie arrives at this segment from the previous one
    """
    value: Any
    start: bool = False
    stop: bool = False

    @property
    def tie_type(self) -> Optional[str]:
        """MusicXML tie type: 'start', 'stop', 'continue' or None."""
        if self.start and self.stop:
            return 'continue'
        if self.start:
            return 'start'
        if self.stop:
            return 'stop'
        return None

    def to_dict(self) -> dict:
        value = self.value.to_dict() if hasattr(self.value, 'to_dict') else self.value
        return {'tie': self.tie_type, 'value': value}

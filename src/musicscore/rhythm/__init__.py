"""
Rhythm module for musicscore.

Quantizes bars of exact durations into notatable rhythm trees.
"""

from .rhythm import Beat, Dotted, Tuplet, Sequence, Rhythm, Leaf, duration, dot_modifier, iter_leaves
from .quantizer import (
    QuantizationConfig,
    Quantizer,
    RhythmState,
    TUPLET_RATIOS,
    is_power_of_two,
    quantize,
)
from .errors import (
    QuantizationError,
    InvalidInputError,
    UnquantizableDurationError,
    TrailingInputError,
)

__all__ = [
    'Beat',
    'Dotted',
    'Tuplet',
    'Sequence',
    'Rhythm',
    'Leaf',
    'duration',
    'dot_modifier',
    'iter_leaves',
    'QuantizationConfig',
    'Quantizer',
    'RhythmState',
    'TUPLET_RATIOS',
    'is_power_of_two',
    'quantize',
    'QuantizationError',
    'InvalidInputError',
    'UnquantizableDurationError',
    'TrailingInputError',
]

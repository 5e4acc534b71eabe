"""
Pipeline package for musicscore.

Configuration loading and bar-by-bar quantization of scores.
"""

from .config_parser import (
    ExportConfig,
    MusicScoreConfig,
    load_config,
    load_yaml_config,
    merge_configs,
    dict_to_config,
)
from .export import BarQuantizationError, NotationBuilder, QuantizedBar, quantize_score

__all__ = [
    'ExportConfig',
    'MusicScoreConfig',
    'load_config',
    'load_yaml_config',
    'merge_configs',
    'dict_to_config',
    'BarQuantizationError',
    'NotationBuilder',
    'QuantizedBar',
    'quantize_score',
]

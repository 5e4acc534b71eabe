"""Configuration parser for musicscore export.

Handles loading YAML config and merging with command-line arguments.
Command-line arguments have higher priority than config file values.
"""

import argparse
import yaml
from fractions import Fraction
from pathlib import Path
from typing import Dict, Any, Optional, Tuple
from dataclasses import dataclass, field, asdict

from ..rhythm.quantizer import QuantizationConfig
from ..score.time import as_duration, format_duration


@dataclass
class ExportConfig:
    """Export configuration. One time unit is one whole note."""
    tempo: int = 120
    ticks_per_beat: int = 480
    time_signature: Tuple[int, int] = (4, 4)
    bar_duration: Fraction = Fraction(1)
    tie_across_bars: bool = False
    skip_unquantizable: bool = False
    default_velocity: int = 80
    title: str = "Untitled"
    composer: str = ""
    part_name: str = "Part"

    def __post_init__(self):
        """Validate export parameters."""
        if self.tempo <= 0:
            raise ValueError(f"Invalid tempo: {self.tempo}. Must be > 0.")
        if self.ticks_per_beat <= 0:
            raise ValueError(f"Invalid ticks_per_beat: {self.ticks_per_beat}. Must be > 0.")
        self.time_signature = tuple(self.time_signature)
        if len(self.time_signature) != 2 or any(x <= 0 for x in self.time_signature):
            raise ValueError(f"Invalid time_signature: {self.time_signature}")
        self.bar_duration = as_duration(self.bar_duration)
        if self.bar_duration <= 0:
            raise ValueError(f"Invalid bar_duration: {self.bar_duration}. Must be > 0.")
        if not 0 <= self.default_velocity <= 127:
            raise ValueError(f"Invalid default_velocity: {self.default_velocity}. Must be 0-127.")


@dataclass
class MusicScoreConfig:
    """Complete configuration."""
    quantization: QuantizationConfig = field(default_factory=QuantizationConfig)
    export: ExportConfig = field(default_factory=ExportConfig)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['quantization']['tuplet_ratios'] = [
            format_duration(r) for r in self.quantization.tuplet_ratios
        ]
        data['export']['bar_duration'] = format_duration(self.export.bar_duration)
        data['export']['time_signature'] = list(self.export.time_signature)
        return data


def load_yaml_config(config_path: str) -> Dict[str, Any]:
    """Load configuration from YAML file."""
    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_file, 'r', encoding='utf-8') as f:
        config_dict = yaml.safe_load(f)

    return config_dict or {}


def merge_configs(base_config: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override config into base config."""
    merged = base_config.copy()

    for key, value in overrides.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        elif value is not None:  # Only override if value is not None
            merged[key] = value

    return merged


def dict_to_config(config_dict: Dict[str, Any]) -> MusicScoreConfig:
    """Convert dictionary to MusicScoreConfig dataclass."""
    quantization = dict(config_dict.get('quantization') or {})
    if 'tuplet_ratios' in quantization:
        quantization['tuplet_ratios'] = tuple(Fraction(str(r)) for r in quantization['tuplet_ratios'])

    return MusicScoreConfig(
        quantization=QuantizationConfig(**quantization),
        export=ExportConfig(**(config_dict.get('export') or {}))
    )


def overrides_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    """Build config overrides from parsed command-line arguments."""
    export_overrides = {}
    if getattr(args, 'tempo', None) is not None:
        export_overrides['tempo'] = args.tempo
    if getattr(args, 'title', None) is not None:
        export_overrides['title'] = args.title
    if getattr(args, 'composer', None) is not None:
        export_overrides['composer'] = args.composer
    if getattr(args, 'bar_duration', None) is not None:
        export_overrides['bar_duration'] = args.bar_duration
    if getattr(args, 'tie', False):
        export_overrides['tie_across_bars'] = True
    if getattr(args, 'skip_unquantizable', False):
        export_overrides['skip_unquantizable'] = True

    quantization_overrides = {}
    if getattr(args, 'max_dots', None) is not None:
        quantization_overrides['max_dots'] = args.max_dots
    if getattr(args, 'no_tuplets', False):
        quantization_overrides['max_tuplet_depth'] = 0

    overrides = {}
    if export_overrides:
        overrides['export'] = export_overrides
    if quantization_overrides:
        overrides['quantization'] = quantization_overrides
    return overrides


def load_config(config_path: Optional[str] = None,
                overrides: Optional[Dict[str, Any]] = None) -> MusicScoreConfig:
    """Load configuration.

    Priority: overrides > YAML config > defaults
    """
    yaml_config = load_yaml_config(config_path) if config_path else {}
    merged_config = merge_configs(yaml_config, overrides or {})
    return dict_to_config(merged_config)

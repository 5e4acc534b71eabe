"""
CLI tool for rhythm quantization and score export.

Usage:
    # Quantize one bar (durations in whole notes; prefix r for rests)
    musicscore quantize 1/3 1/3 r1/3

    # Export a score to MIDI, MusicXML or JSON
    musicscore export score.json --output score.musicxml --tempo 90 --tie
"""

import argparse
import json
import logging
import sys
from fractions import Fraction
from pathlib import Path
from typing import Any, List, Optional, Tuple

from ..pipeline.config_parser import load_config, overrides_from_args
from ..pipeline.export import BarQuantizationError
from ..rhythm.errors import QuantizationError
from ..rhythm.quantizer import Quantizer
from ..score.bars import BarSeparationError
from .converter import JSONConverter, MIDIConverter, MusicXMLConverter


CONVERTERS = {
    '.mid': MIDIConverter,
    '.midi': MIDIConverter,
    '.musicxml': MusicXMLConverter,
    '.xml': MusicXMLConverter,
    '.json': JSONConverter,
}


def parse_bar(tokens: List[str]) -> List[Tuple[Fraction, Any]]:
    """
    Parse duration tokens into (duration, value) pairs.

    Each note takes its 1-based position in the bar as its value; tokens
    prefixed with 'r' are rests.
    """
    bar = []
    for index, token in enumerate(tokens, start=1):
        if token.startswith('r'):
            bar.append((Fraction(token[1:]), None))
        else:
            bar.append((Fraction(token), index))
    return bar


def quantize_command(args) -> int:
    """Quantize one bar and print its rhythm tree."""
    try:
        bar = parse_bar(args.durations)
    except (ValueError, ZeroDivisionError) as e:
        print(f"Error: invalid duration: {e}", file=sys.stderr)
        return 1

    config = load_config(args.config, overrides_from_args(args))
    quantizer = Quantizer(config.quantization)

    try:
        rhythm = quantizer.quantize(bar)
    except QuantizationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(rhythm.to_dict(), indent=2))
    return 0


def export_command(args) -> int:
    """Export a score JSON file to MIDI, MusicXML or JSON."""
    output_path = Path(args.output)
    converter_class = CONVERTERS.get(output_path.suffix.lower())
    if converter_class is None:
        print(f"Error: unsupported output format: {output_path.suffix}", file=sys.stderr)
        return 1

    print(f"Loading score from {args.input}...")
    score = JSONConverter.load_score(args.input)
    print(f"Loaded {len(score)} events, duration: {score.duration}")

    config = load_config(args.config, overrides_from_args(args))
    converter = converter_class(config)

    print(f"Exporting to {output_path}...")
    try:
        converter.convert(score, output_path)
    except (BarQuantizationError, BarSeparationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("Done!")
    return 0


def create_arg_parser() -> argparse.ArgumentParser:
    """Create argument parser with all commands."""
    parser = argparse.ArgumentParser(
        prog='musicscore',
        description="Quantize rhythms and export scores to notation formats"
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable debug logging'
    )
    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    # quantize command
    quantize_parser = subparsers.add_parser(
        'quantize',
        help='Quantize one bar of durations into a rhythm tree'
    )
    quantize_parser.add_argument(
        'durations',
        nargs='+',
        help='Durations in whole notes, e.g. 1/4 3/8; prefix r for rests'
    )
    quantize_parser.add_argument(
        '--config',
        type=str,
        help='Path to YAML configuration file'
    )
    quantize_parser.add_argument(
        '--max-dots',
        type=int,
        help='Maximum number of dots (0-3, default: 3)'
    )
    quantize_parser.add_argument(
        '--no-tuplets',
        action='store_true',
        help='Do not use tuplets'
    )
    quantize_parser.set_defaults(func=quantize_command)

    # export command
    export_parser = subparsers.add_parser(
        'export',
        help='Export a score JSON file'
    )
    export_parser.add_argument(
        'input',
        type=str,
        help='Path to score JSON file'
    )
    export_parser.add_argument(
        '--output',
        type=str,
        required=True,
        help='Output file path (.mid, .musicxml, .xml or .json)'
    )
    export_parser.add_argument(
        '--config',
        type=str,
        help='Path to YAML configuration file'
    )
    export_parser.add_argument(
        '--tempo',
        type=int,
        help='Tempo in BPM (default: 120)'
    )
    export_parser.add_argument(
        '--title',
        type=str,
        help='Score title'
    )
    export_parser.add_argument(
        '--composer',
        type=str,
        help='Composer name'
    )
    export_parser.add_argument(
        '--bar-duration',
        type=str,
        help='Bar length in whole notes (default: 1)'
    )
    export_parser.add_argument(
        '--tie',
        action='store_true',
        help='Tie notes across barlines instead of failing'
    )
    export_parser.add_argument(
        '--skip-unquantizable',
        action='store_true',
        help='Leave out bars that cannot be quantized'
    )
    export_parser.add_argument(
        '--max-dots',
        type=int,
        help='Maximum number of dots (0-3, default: 3)'
    )
    export_parser.add_argument(
        '--no-tuplets',
        action='store_true',
        help='Do not use tuplets'
    )
    export_parser.set_defaults(func=export_command)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    if not args.command:
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except (FileNotFoundError, TypeError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())

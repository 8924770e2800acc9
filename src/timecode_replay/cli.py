#!/usr/bin/env python3
"""
Command Line Interface for Timecode Replay

    timecode-replay replay dcf77 dcf77.log
    timecode-replay synth msf --start 2020-03-28T23:59 --minutes 5
"""

import sys
import logging
import argparse
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .config_utils import load_config
from .engine import replay_buffer
from .interfaces.data_models import ClassificationError
from .stations import StationType
from .telegram_encoder import synthesize_log

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_CLASSIFICATION = 2


def setup_logging(level: int = logging.INFO):
    """Configure the root logger; logs go to stderr"""
    # Force level on root logger in case it was already configured
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if not root_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('%(levelname)s:%(name)s:%(message)s'))
        root_logger.addHandler(handler)
    else:
        for handler in root_logger.handlers:
            handler.setLevel(level)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='timecode-replay',
        description='Replay DCF77/MSF time signal logs into decoded reports',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    stations = ', '.join(s.value for s in StationType)

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    # Replay command
    replay_parser = subparsers.add_parser('replay', help='Decode a recorded log')
    replay_parser.add_argument('station', help=f'Station of the log ({stations})')
    replay_parser.add_argument('logfile', help='Log file to replay')
    replay_parser.add_argument('--config', '-c', help='Configuration file path')
    replay_parser.add_argument('--output', '-o', help='Write the report here instead of stdout')
    replay_parser.add_argument('--debug', '-d', action='store_true', help='Enable DEBUG logging')

    # Synth command
    synth_parser = subparsers.add_parser('synth', help='Generate a log of consecutive minutes')
    synth_parser.add_argument('station', help=f'Station format ({stations})')
    synth_parser.add_argument('--start', required=True,
                              help='Time announced by the first minute, ISO format')
    synth_parser.add_argument('--minutes', '-n', type=int, default=1, help='Number of minutes')
    synth_parser.add_argument('--summer', action='store_true', help='Encode summer time')
    synth_parser.add_argument('--output', '-o', help='Write the log here instead of stdout')
    synth_parser.add_argument('--debug', '-d', action='store_true', help='Enable DEBUG logging')

    return parser


def write_text(text: str, output: Optional[Path]):
    if output is None:
        sys.stdout.write(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text)
    logger.info(f"Wrote {output}")


def run_replay(args) -> int:
    try:
        config = load_config(args.config)
    except FileNotFoundError:
        print(f"❌ Configuration file not found: {args.config}", file=sys.stderr)
        return EXIT_USAGE
    except ValueError as e:
        print(f"❌ Error loading configuration: {e}", file=sys.stderr)
        return EXIT_USAGE

    if not args.debug:
        setup_logging(getattr(logging, config.log_level))

    try:
        station = StationType.from_name(args.station)
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
        return EXIT_USAGE

    try:
        text = Path(args.logfile).read_text(encoding=config.encoding)
    except (OSError, UnicodeDecodeError) as e:
        print(f"❌ Could not read file '{args.logfile}': {e}", file=sys.stderr)
        return EXIT_USAGE

    try:
        lines = replay_buffer(station, text)
    except ClassificationError:
        return EXIT_CLASSIFICATION

    output = Path(args.output) if args.output else config.output_path
    write_text(''.join(line + '\n' for line in lines), output)
    return EXIT_OK


def run_synth(args) -> int:
    try:
        station = StationType.from_name(args.station)
        start = datetime.fromisoformat(args.start)
        log = synthesize_log(station, start, args.minutes, summer=args.summer)
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
        return EXIT_USAGE

    write_text(log, Path(args.output) if args.output else None)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the timecode-replay command"""
    setup_logging(logging.INFO)

    parser = build_parser()
    args = parser.parse_args(argv)

    # If no command specified, show help
    if not args.command:
        parser.print_help()
        return EXIT_USAGE

    # Update logging level if debug flag is set
    if args.debug:
        setup_logging(logging.DEBUG)
        logging.debug("DEBUG logging enabled")

    if args.command == 'replay':
        return run_replay(args)
    return run_synth(args)


if __name__ == '__main__':
    sys.exit(main())

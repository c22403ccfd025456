"""
reeltc command line

Inspect timecodes and do frame-accurate timecode arithmetic:

    reeltc info 01:00:01:00 -r 30 --broadcast
    reeltc add 00:59:59:29 1 -r 30
    reeltc subtract 00:00:10:00 00:00:02:15 -r 25
    reeltc frames 107892
"""

import argparse
import logging
import math
import sys
from typing import List, Optional, Union

from reeltc.timecode import (
    DEFAULT_FRAMERATE,
    DEFAULT_START_OFFSET,
    Number,
    Timecode,
    TimecodeOptions,
)

_logger = logging.getLogger(__name__)


def _format_number(value: Number) -> str:
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return text if text != "-0" else "0"


def _parse_value(text: str) -> Union[Number, str]:
    """Interpret an argument as a timecode string or a plain frame count."""
    if ":" in text:
        return text
    try:
        return int(text)
    except ValueError:
        pass
    try:
        value = float(text)
    except ValueError:
        value = math.nan
    if not math.isfinite(value):
        raise ValueError(f"Invalid frame count or timecode: {text}")
    return value


def _build_options(args: argparse.Namespace) -> TimecodeOptions:
    if not (math.isfinite(args.frame_rate) and args.frame_rate > 0):
        raise ValueError(f"Frame rate must be positive (got {args.frame_rate})")

    start_offset = args.start_offset
    if start_offset is None and args.broadcast:
        start_offset = DEFAULT_START_OFFSET
    return TimecodeOptions(framerate=args.frame_rate, start_offset=start_offset)


def _print_info(tc: Timecode) -> None:
    print(f"Timecode:     {tc}")
    print(f"Frame count:  {_format_number(tc.frame_count())}")
    print(f"Seconds:      {_format_number(tc.to_seconds())}")
    print(f"Milliseconds: {_format_number(tc.to_milliseconds())}")
    print(f"Frame rate:   {tc.framerate} fps")


def _run(args: argparse.Namespace) -> None:
    options = _build_options(args)
    _logger.debug(f"Options: framerate={options.framerate}, start_offset={options.start_offset}")

    if args.command == "info":
        _print_info(Timecode(args.timecode, options))
        return

    if args.command == "frames":
        print(Timecode(_parse_value(args.count), options))
        return

    tc = Timecode(args.timecode, options)
    subtract = args.command == "subtract"
    result, clamped = tc.add_checked(_parse_value(args.duration), subtract=subtract)
    if clamped:
        _logger.warning(f"{tc} {'-' if subtract else '+'} {args.duration} is before zero, clamped to {result}")
    print(result)


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-r", "--frame-rate",
        type=float,
        default=DEFAULT_FRAMERATE,
        help=f"Frame rate in fps (default: {DEFAULT_FRAMERATE})",
    )
    common.add_argument(
        "--start-offset",
        type=str,
        default=None,
        help="Timecode treated as frame zero (default: none)",
    )
    common.add_argument(
        "--broadcast",
        action="store_true",
        help=f"Use a {DEFAULT_START_OFFSET} start offset",
    )
    common.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output with detailed logging",
    )

    parser = argparse.ArgumentParser(
        prog="reeltc",
        description="SMPTE timecode conversion and arithmetic (HH:MM:SS:FF).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s info 01:00:01:00 -r 30 --broadcast
  %(prog)s add 00:59:59:29 1 -r 30
  %(prog)s subtract 00:00:10:00 00:00:02:15 -r 25
  %(prog)s frames 107892

Durations are timecodes (HH:MM:SS:FF) or plain frame counts.
        """,
    )
    sub = parser.add_subparsers(dest="command")

    info = sub.add_parser("info", parents=[common], help="Show frame count, seconds and milliseconds")
    info.add_argument("timecode", help="Timecode (HH:MM:SS:FF)")

    for name, verb in (("add", "Add"), ("subtract", "Subtract")):
        op = sub.add_parser(name, parents=[common], help=f"{verb} a duration")
        op.add_argument("timecode", help="Timecode (HH:MM:SS:FF)")
        op.add_argument("duration", help="Duration (HH:MM:SS:FF or frame count)")

    frames = sub.add_parser("frames", parents=[common], help="Convert a frame count to a timecode")
    frames.add_argument("count", help="Frame count")

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    try:
        _run(args)
    except (ValueError, TypeError, ArithmeticError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

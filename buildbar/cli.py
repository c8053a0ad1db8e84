"""Command-line interface for buildbar."""

import argparse
import logging
import sys

import tracerite

from buildbar.driver import StreamDriver
from buildbar.io import DEFAULT_LOG_FILE, open_mirror
from buildbar.terminal import descriptor_in_use

tracerite.load()

__all__ = ["main"]

HELP_TEXT = """\
Buildbar - a terminal progress bar for cmake

  Buildbar draws a command line progress bar from cmake/make build
  output given on stdin.

      make 2>&1 | buildbar
      make 2>&1 | buildbar --out cmake.log
      make 2>&1 | buildbar -o
      cat cmake.log | buildbar --replay

  If nothing is provided on stdin you will see this message.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="buildbar",
        description=HELP_TEXT,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("-h", "--help", action="store_true", help="Show this help and exit")
    parser.add_argument(
        "-o",
        dest="log_output",
        action="store_true",
        help=f"Log output to file (default: {DEFAULT_LOG_FILE})",
    )
    parser.add_argument("--out", help="Log output to the named file (implies -o)", type=str)
    parser.add_argument(
        "-r",
        "--replay",
        action="store_true",
        help="Add a short delay per progress line, for replaying a saved log",
    )
    parser.add_argument(
        "-e",
        "--est",
        action="store_true",
        help="Show estimated time remaining instead of elapsed time",
    )
    parser.add_argument(
        "--ema",
        action="store_true",
        help="Estimate with a moving average of recent progress instead of the overall rate",
    )
    parser.add_argument(
        "-w",
        "--width",
        type=int,
        default=None,
        help="Terminal width in columns (default: detected)",
    )
    parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Read stdin even if it is an interactive terminal",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose mode: debug messages on stderr",
    )
    return parser


def _main(argv=None):
    """Internal main function that may raise exceptions."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s: %(message)s",
    )

    # Bail if nothing is piped to stdin
    if not args.help and not args.force and not descriptor_in_use(0):
        args.help = True

    if args.help:
        parser.print_help()
        print()
        sys.exit(2)

    if args.width is not None and args.width < 1:
        raise ValueError(f"Invalid width: {args.width}")

    log_file = args.out or (DEFAULT_LOG_FILE if args.log_output else None)

    # Build logs are not guaranteed to be valid UTF-8
    sys.stdin.reconfigure(errors="surrogateescape")
    sys.stdout.reconfigure(errors="replace")

    with open_mirror(log_file) as mirror:
        driver = StreamDriver(
            sys.stdin,
            sys.stdout,
            mirror,
            columns=args.width,
            show_estimate=args.est,
            strategy="ema" if args.ema else "linear",
            replay=args.replay,
        )
        summary = driver.run()
    logging.debug(
        "%d lines, %d progress samples%s",
        summary.lines,
        summary.samples,
        ", failed" if summary.terminated else "",
    )


def main(argv=None):
    """Main entry point for the CLI with exception handling."""
    try:
        _main(argv)
    except (KeyboardInterrupt, BrokenPipeError):
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

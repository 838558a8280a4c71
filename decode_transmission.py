#!/usr/bin/env python3
"""
Decode a BITS transmission and print its version sum or value.

Usage:
    python decode_transmission.py 9C0141080250320F1802104A08
    python decode_transmission.py --input transmission.txt --mode versions
    echo D2FE28 | python decode_transmission.py --tree
"""

import argparse
import logging
import sys
from pathlib import Path

from logging_utils import setup_logging
from primitives.errors import TransmissionError
from protocol.evaluator import evaluate
from protocol.packet import format_tree
from protocol.transmission import decode
from protocol.versions import sum_versions

logger = logging.getLogger(__name__)

MODES = {
    'versions': sum_versions,
    'evaluate': evaluate,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Decode a hex-encoded BITS transmission'
    )
    parser.add_argument(
        'transmission',
        nargs='?',
        help='Hex transmission; read from --input or stdin when omitted'
    )
    parser.add_argument(
        '--input',
        type=Path,
        help='Path to a file holding the hex transmission'
    )
    parser.add_argument(
        '--mode',
        choices=sorted(MODES),
        default='evaluate',
        help='Reduction to apply to the decoded tree (default: evaluate)'
    )
    parser.add_argument(
        '--tree',
        action='store_true',
        help='Also print the decoded packet tree'
    )
    parser.add_argument(
        '--log-level',
        default='WARNING',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Console log level (default: WARNING)'
    )
    parser.add_argument(
        '--log-file',
        type=Path,
        help='Also write DEBUG-level logs to this file'
    )
    return parser


def read_transmission(args: argparse.Namespace) -> str:
    if args.transmission is not None:
        return args.transmission
    if args.input is not None:
        with open(args.input) as f:
            return f.read()
    return sys.stdin.read()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(console_level=getattr(logging, args.log_level), file_path=args.log_file)

    if args.transmission is not None and args.input is not None:
        print("Error: give either a transmission or --input, not both", file=sys.stderr)
        return 1
    if args.input is not None and not args.input.exists():
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        return 1

    text = read_transmission(args)
    try:
        packet = decode(text)
        result = MODES[args.mode](packet)
    except TransmissionError as e:
        logger.debug("Decode failed", exc_info=True)
        print(f"Error: {e.kind}: {e}", file=sys.stderr)
        return 1

    if args.tree:
        print(format_tree(packet))
    print(result)
    return 0


if __name__ == '__main__':
    sys.exit(main())

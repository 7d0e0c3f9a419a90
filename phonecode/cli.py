"""
CLI interface for phonecode.

Usage:
    phonecode dictionary.txt input.txt
    phonecode --keypad prechelt --encoding latin-1 dictionary.txt input.txt
    phonecode --compiled --json dictionary.dic input.txt
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Sequence

from phonecode import __version__, iter_encode, load
from phonecode.encoder import Encoding
from phonecode.keypad import DEFAULT_KEYPAD, keypad_names

logger = logging.getLogger(__name__)


# ============================================================================
# Output Formatting
# ============================================================================

def format_default(number: str, encoding: Encoding) -> str:
    """
    Default output: "<number>: <token> <token> ..."
    """
    return f"{number}: {' '.join(encoding)}"


def format_json(number: str, encoding: Encoding) -> str:
    """One JSON object per encoding."""
    return json.dumps({"number": number, "encoding": list(encoding)}, ensure_ascii=False)


def emit(out, number: str, encodings: List[Encoding], formatter=format_default):
    """Write all encodings of a number. Nothing is written when there are none."""
    for encoding in encodings:
        out.write(formatter(number, encoding))
        out.write("\n")


# ============================================================================
# Main
# ============================================================================

def check_readable(paths: Sequence[Path]):
    """
    Make sure every input file can be opened before any work starts.

    Raises:
        OSError: If a file is missing or unreadable
    """
    for path in paths:
        if not path.is_file():
            raise FileNotFoundError(f"No such file: {path}")
        with open(path, 'rb'):
            pass


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="phonecode",
        description="Encode phone numbers as dictionary words",
    )
    parser.add_argument(
        "dictionary",
        type=Path,
        help="Word list, one word per line (or a compiled dictionary with --compiled)",
    )
    parser.add_argument(
        "numbers",
        type=Path,
        help="Phone numbers, one per line",
    )
    parser.add_argument(
        "--keypad", "-k",
        choices=list(keypad_names()),
        default=None,
        help=(
            f"Letter-to-digit mapping (default: {DEFAULT_KEYPAD}, or the keypad "
            "a compiled dictionary was built with)"
        ),
    )
    parser.add_argument(
        "--always-fill",
        action="store_true",
        help="Also try filler digits where dictionary words match",
    )
    parser.add_argument(
        "--compiled", "-c",
        action="store_true",
        help="DICTIONARY was built with scripts/build_dictionary.py",
    )
    parser.add_argument(
        "--encoding", "-e",
        default="utf-8",
        help="Text encoding of the input files (default: %(default)s)",
    )
    parser.add_argument(
        "--workers", "-w",
        type=int,
        default=1,
        help="Search threads (default: %(default)s)",
    )
    parser.add_argument(
        "--json", "-j",
        action="store_true",
        help="Output as JSON lines",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug information to stderr",
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"phonecode {__version__}",
    )
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    if args.workers < 1:
        parser.error("--workers must be >= 1")

    try:
        check_readable([args.dictionary, args.numbers])
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    formatter = format_json if args.json else format_default

    try:
        index = load(
            args.dictionary,
            keypad=args.keypad,
            compiled=args.compiled,
            encoding=args.encoding,
        )
        logger.debug("Loaded %r from %s", index, args.dictionary)

        with open(args.numbers, encoding=args.encoding, errors='surrogateescape') as f:
            for number, encodings in iter_encode(
                f, index, workers=args.workers, always_fill=args.always_fill,
            ):
                emit(sys.stdout, number, encodings, formatter)
        sys.stdout.flush()

    except BrokenPipeError:
        # Output closed early (e.g. piped into head)
        sys.stderr.close()
        sys.exit(0)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

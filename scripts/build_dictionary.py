#!/usr/bin/env python3
"""
Dictionary Builder for phonecode.

This script compiles a word list into a binary dictionary: a
marisa_trie.Trie of digit strings plus a word table. A compiled
dictionary opens instantly (the trie is memory-mapped), which pays off
when the same word list is used for many runs.

Usage:
    python scripts/build_dictionary.py WORDS [--output PATH] [--keypad NAME]

The result is used with:
    phonecode --compiled PATH numbers.txt
"""

import argparse
import logging
import sys
import time
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from phonecode.dictionary import get_words_path, load_dictionary
from phonecode.keypad import DEFAULT_KEYPAD, get_keypad, keypad_names

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


# ============================================================================
# Paths
# ============================================================================

DEFAULT_OUTPUT = Path(__file__).parent.parent / "data" / "phonecode.dic"


# ============================================================================
# Build
# ============================================================================

def build_dictionary(words_path: Path, output_path: Path, keypad_name: str, encoding: str):
    """Index a word file and save it."""
    logger.info(f"Indexing {words_path} (keypad={keypad_name})...")
    index = load_dictionary(words_path, get_keypad(keypad_name), encoding=encoding)

    if index.skipped:
        logger.info(f"  Skipped {index.skipped} entries that are not plain words")
    if not index.num_keys:
        raise ValueError(f"No usable words in {words_path}")
    logger.info(f"  Distinct digit keys: {index.num_keys}")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    index.save(output_path)

    size = output_path.stat().st_size + get_words_path(output_path).stat().st_size
    logger.info(f"Saved dictionary to {output_path} ({size / 1024:.1f} KB)")

    return index


# ============================================================================
# Main
# ============================================================================

def main():
    parser = argparse.ArgumentParser(
        description="Build a phonecode binary dictionary from a word list"
    )
    parser.add_argument(
        'words',
        type=Path,
        help="Word list, one word per line"
    )
    parser.add_argument(
        '--output', '-o',
        type=Path,
        default=DEFAULT_OUTPUT,
        help=f"Output dictionary path (default: {DEFAULT_OUTPUT})"
    )
    parser.add_argument(
        '--keypad', '-k',
        choices=list(keypad_names()),
        default=DEFAULT_KEYPAD,
        help=f"Letter-to-digit mapping (default: {DEFAULT_KEYPAD})"
    )
    parser.add_argument(
        '--encoding', '-e',
        default='utf-8',
        help="Text encoding of the word list (default: utf-8)"
    )

    args = parser.parse_args()

    if not args.words.exists():
        logger.error(f"Word list not found: {args.words}")
        sys.exit(1)

    start_time = time.time()

    try:
        build_dictionary(args.words, args.output, args.keypad, args.encoding)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    elapsed = time.time() - start_time
    logger.info(f"Build completed in {elapsed:.1f} seconds")


if __name__ == '__main__':
    main()

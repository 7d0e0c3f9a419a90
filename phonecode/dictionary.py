"""
Dictionary index for phonecode.

Words are stored by their digit string (see phonecode.keypad). The distinct
digit strings live in a marisa_trie.Trie, which answers both questions the
encoder asks while walking a phone number:

- which stored digit strings are prefixes of the remaining digits, and
- whether any stored digit string starts with a given prefix.

The words for each digit string are kept in a tuple indexed by the trie's
key id. An index is built once and never modified afterwards, so it can be
shared between threads without locking.
"""

import logging
import struct
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple, Union

import marisa_trie

from phonecode.keypad import STANDARD, InvalidWord, Keypad, get_keypad

logger = logging.getLogger(__name__)

# ============================================================================
# Word Table Schema
# ============================================================================
# The word table sits next to the trie file (<path>.words):
#   - magic: 4 bytes
#   - keypad name: uint16 length + utf-8 bytes
#   - key count: uint32
#   - per key id, in order:
#       - word count: uint16
#       - per word: uint16 length + utf-8 bytes

WORDS_MAGIC = b'PHCW'
WORDS_SUFFIX = '.words'

PathLike = Union[str, Path]


def _write_text(f, text: str):
    data = text.encode('utf-8')
    f.write(struct.pack('<H', len(data)))
    f.write(data)


def _read_text(f) -> str:
    length = struct.unpack('<H', f.read(2))[0]
    data = f.read(length)
    if len(data) != length:
        raise struct.error(f"expected {length} bytes, got {len(data)}")
    return data.decode('utf-8')


def get_words_path(path: PathLike) -> Path:
    """Path of the word table belonging to a compiled trie file."""
    path = Path(path)
    return path.with_name(path.name + WORDS_SUFFIX)


# ============================================================================
# Index
# ============================================================================

class DictionaryIndex:
    """
    Read-only mapping from digit strings to the words that produce them.

    Use DictionaryIndex.build() for a word list or DictionaryIndex.open()
    for a dictionary compiled with scripts/build_dictionary.py.
    """

    def __init__(
        self,
        trie: marisa_trie.Trie,
        words: List[Tuple[str, ...]],
        keypad: Keypad,
        skipped: int = 0,
    ):
        self._trie = trie
        self._words = words
        self._size = sum(len(group) for group in words)
        self.keypad = keypad
        self.skipped = skipped

    @classmethod
    def build(cls, words: Iterable[str], keypad: Keypad = STANDARD) -> "DictionaryIndex":
        """
        Build an index from a sequence of words.

        Entries that cannot be mapped to digits are skipped. Repeated entries
        with identical text are stored once.

        Args:
            words: Dictionary words
            keypad: Letter-to-digit mapping

        Returns:
            The built index
        """
        groups = {}
        seen = set()
        skipped = 0

        for word in words:
            if word in seen:
                continue
            try:
                digits = keypad.encode(word)
            except InvalidWord as e:
                skipped += 1
                logger.debug("Skipping dictionary entry %s", e)
                continue
            seen.add(word)
            groups.setdefault(digits, []).append(word)

        trie = marisa_trie.Trie(groups.keys())
        table: List[Tuple[str, ...]] = [()] * len(trie)
        for digits, group in groups.items():
            table[trie[digits]] = tuple(group)

        index = cls(trie, table, keypad, skipped=skipped)
        logger.info(
            "Indexed %d words under %d digit keys (%d skipped, keypad=%s)",
            len(index), index.num_keys, skipped, keypad.name,
        )
        return index

    @classmethod
    def open(cls, path: PathLike, keypad: Optional[Keypad] = None) -> "DictionaryIndex":
        """
        Open a compiled dictionary.

        The trie is memory-mapped; the word table is read into memory.

        Args:
            path: Path to the compiled trie file
            keypad: If given, must match the keypad the dictionary was built with

        Raises:
            FileNotFoundError: If the trie or its word table is missing
            ValueError: If the word table is malformed or the keypad differs
        """
        path = Path(path)
        words_path = get_words_path(path)
        for p in (path, words_path):
            if not p.exists():
                raise FileNotFoundError(
                    f"Compiled dictionary not found at {p}. "
                    "Run 'python scripts/build_dictionary.py' to build it."
                )

        trie = marisa_trie.Trie()
        trie.mmap(str(path))

        with open(words_path, 'rb') as f:
            if f.read(4) != WORDS_MAGIC:
                raise ValueError(f"{words_path} is not a phonecode word table")
            try:
                keypad_name = _read_text(f)
                count = struct.unpack('<I', f.read(4))[0]
                table = []
                for _ in range(count):
                    n = struct.unpack('<H', f.read(2))[0]
                    table.append(tuple(_read_text(f) for _ in range(n)))
            except struct.error as e:
                raise ValueError(f"{words_path} is truncated or corrupt: {e}") from e

        if count != len(trie):
            raise ValueError(f"{words_path} has {count} keys, trie has {len(trie)}")

        try:
            stored = get_keypad(keypad_name)
        except KeyError as e:
            raise ValueError(f"{words_path}: {e.args[0]}") from None
        if keypad is not None and keypad.name != stored.name:
            raise ValueError(
                f"{path} was built for keypad {stored.name!r}, not {keypad.name!r}"
            )

        return cls(trie, table, stored)

    def save(self, path: PathLike):
        """Write the trie to path and the word table to <path>.words."""
        path = Path(path)
        self._trie.save(str(path))
        with open(get_words_path(path), 'wb') as f:
            f.write(WORDS_MAGIC)
            _write_text(f, self.keypad.name)
            f.write(struct.pack('<I', len(self._words)))
            for group in self._words:
                f.write(struct.pack('<H', len(group)))
                for word in group:
                    _write_text(f, word)

    # ------------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------------

    def lookup(self, digits: str) -> Tuple[str, ...]:
        """Words whose digit string equals digits exactly (empty if none)."""
        if digits not in self._trie:
            return ()
        return self._words[self._trie[digits]]

    def has_prefix(self, digits: str) -> bool:
        """Check if any word's digit string starts with digits."""
        return self._trie.has_keys_with_prefix(digits)

    def matches(self, subject: str, start: int = 0) -> List[Tuple[int, Tuple[str, ...]]]:
        """
        Find every word that matches subject at position start.

        Returns:
            List of (end, words) pairs, shortest match first, where
            subject[start:end] is the digit string of each of the words
        """
        return [
            (start + len(key), self._words[self._trie[key]])
            for key in self._trie.prefixes(subject[start:])
        ]

    def items(self) -> Iterator[Tuple[str, Tuple[str, ...]]]:
        """Iterate over (digit string, words) pairs in trie order."""
        for key, key_id in self._trie.iteritems():
            yield key, self._words[key_id]

    @property
    def num_keys(self) -> int:
        """Number of distinct digit strings."""
        return len(self._words)

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"DictionaryIndex({len(self)} words, keypad={self.keypad.name!r})"


# ============================================================================
# Word Files
# ============================================================================

def read_words(path: PathLike, encoding: str = 'utf-8') -> Iterator[str]:
    """
    Yield the words of a one-word-per-line file, skipping blank lines.

    Undecodable bytes become lone surrogates, so such a word fails to
    encode and is skipped instead of aborting the read.
    """
    with open(path, encoding=encoding, errors='surrogateescape') as f:
        for line in f:
            word = line.strip()
            if word:
                yield word


def load_dictionary(
    path: PathLike,
    keypad: Keypad = STANDARD,
    encoding: str = 'utf-8',
) -> DictionaryIndex:
    """
    Read a word file and build its index.

    Raises:
        FileNotFoundError: If the word file doesn't exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Dictionary not found at {path}")

    return DictionaryIndex.build(read_words(path, encoding=encoding), keypad)

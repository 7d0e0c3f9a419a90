"""
Keypad mappings for phonecode.

A keypad assigns every letter to a single digit. Words are turned into
digit strings by mapping each letter in turn; the digit string is the key
under which the word is stored in the dictionary index.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Sequence


class InvalidWord(ValueError):
    """Raised when a dictionary entry cannot be mapped to digits."""
    pass


DIGITS = '0123456789'


# ============================================================================
# Letter Groups
# ============================================================================
# Standard telephone keypad. 0 and 1 carry no letters.

STANDARD_GROUPS = {
    '2': 'abc',
    '3': 'def',
    '4': 'ghi',
    '5': 'jkl',
    '6': 'mno',
    '7': 'pqrs',
    '8': 'tuv',
    '9': 'wxyz',
}

# Mapping used by the "phone code" benchmark. Every digit carries letters.
PRECHELT_GROUPS = {
    '0': 'e',
    '1': 'jnq',
    '2': 'rwx',
    '3': 'dsy',
    '4': 'ft',
    '5': 'am',
    '6': 'civ',
    '7': 'bku',
    '8': 'lop',
    '9': 'ghz',
}


def _invert(groups: Dict[str, str]) -> Dict[str, str]:
    table = {}
    for digit, letters in groups.items():
        for letter in letters:
            table[letter] = digit
            table[letter.upper()] = digit
    return table


# ============================================================================
# Keypad
# ============================================================================

@dataclass(frozen=True, eq=False)
class Keypad:
    """
    An immutable letter-to-digit table.

    Attributes:
        name: Short name used on the command line and in compiled dictionaries
        table: Letter (both cases) -> digit character
    """
    name: str
    table: Mapping[str, str] = field(repr=False)

    @classmethod
    def from_groups(cls, name: str, groups: Dict[str, str]) -> "Keypad":
        return cls(name=name, table=MappingProxyType(_invert(groups)))

    def digit_for(self, letter: str) -> Optional[str]:
        """Get the digit for a letter, or None if the character has no digit."""
        return self.table.get(letter)

    def encode(self, word: str) -> str:
        """
        Map a word to its digit string.

        Args:
            word: Dictionary word, any case

        Returns:
            Digit string with one digit per letter

        Raises:
            InvalidWord: If the word is empty or contains a character
                that is not a mappable letter
        """
        if not word:
            raise InvalidWord("empty word")

        digits = []
        for ch in word:
            digit = self.table.get(ch)
            if digit is None:
                raise InvalidWord(f"{word!r}: cannot map {ch!r} to a digit")
            digits.append(digit)
        return ''.join(digits)

    def encode_tokens(self, tokens: Sequence[str]) -> str:
        """
        Concatenate the digit strings of an encoding's tokens.

        Filler tokens are single digits and encode to themselves.
        """
        parts = []
        for token in tokens:
            if len(token) == 1 and token in DIGITS:
                parts.append(token)
            else:
                parts.append(self.encode(token))
        return ''.join(parts)


STANDARD = Keypad.from_groups('standard', STANDARD_GROUPS)
PRECHELT = Keypad.from_groups('prechelt', PRECHELT_GROUPS)

KEYPADS = {kp.name: kp for kp in (STANDARD, PRECHELT)}

DEFAULT_KEYPAD = STANDARD.name


def get_keypad(name: str) -> Keypad:
    """Look up a keypad by name. Raises KeyError for unknown names."""
    try:
        return KEYPADS[name]
    except KeyError:
        raise KeyError(f"unknown keypad {name!r}; choose from {', '.join(KEYPADS)}") from None


def keypad_names() -> Iterable[str]:
    return KEYPADS.keys()


def digit_for(letter: str) -> Optional[str]:
    """Digit for a letter on the standard keypad."""
    return STANDARD.digit_for(letter)


def encode_word(word: str, keypad: Keypad = STANDARD) -> str:
    """Digit string for a word. Raises InvalidWord if it cannot be mapped."""
    return keypad.encode(word)

"""
Phone number input for phonecode.

Phone numbers arrive as text lines such as "5624-82" or "04824/1". The
separators carry no meaning and are dropped; the remaining digits are the
subject that gets encoded. The original text is kept for reporting.
"""

import logging
from pathlib import Path
from typing import Iterator, NamedTuple, Union

from phonecode.keypad import DIGITS

logger = logging.getLogger(__name__)

SEPARATORS = frozenset('-/')


class InvalidPhoneNumberLine(ValueError):
    """Raised when a phone number contains characters other than digits and separators."""
    pass


class PhoneNumber(NamedTuple):
    """A phone number as written (raw) and as digits only (subject)."""
    raw: str
    subject: str


def clean_number(text: str) -> str:
    """
    Remove separators from a phone number.

    Args:
        text: Phone number, e.g. "5624-82"

    Returns:
        The digits, e.g. "562482". Empty if text has no digits.

    Raises:
        InvalidPhoneNumberLine: If text contains anything but digits and separators
    """
    digits = []
    for ch in text.strip():
        if ch in DIGITS:
            digits.append(ch)
        elif ch not in SEPARATORS:
            raise InvalidPhoneNumberLine(f"{text!r}: unexpected character {ch!r}")
    return ''.join(digits)


def parse_number(text: str) -> PhoneNumber:
    raw = text.strip()
    return PhoneNumber(raw, clean_number(raw))


def parse_numbers(lines) -> Iterator[PhoneNumber]:
    """
    Parse phone number lines, skipping invalid and empty ones.

    Invalid lines are logged as warnings.
    """
    for lineno, line in enumerate(lines, 1):
        try:
            number = parse_number(line)
        except InvalidPhoneNumberLine as e:
            logger.warning("Skipping line %d: %s", lineno, e)
            continue
        if not number.subject:
            logger.debug("Skipping line %d: no digits", lineno)
            continue
        yield number


def read_numbers(path: Union[str, Path], encoding: str = 'utf-8') -> Iterator[PhoneNumber]:
    """
    Yield the phone numbers of a one-number-per-line file.

    Undecodable bytes are kept as lone surrogates; their lines fail to
    clean and are skipped like any other invalid line.
    """
    with open(path, encoding=encoding, errors='surrogateescape') as f:
        yield from parse_numbers(f)

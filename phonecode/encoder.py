"""
Encoder module for phonecode.

Enumerates every way of writing a digit string as a sequence of dictionary
words and single filler digits. Two fillers are never adjacent.

The search walks the digit string with an explicit stack of frames instead
of recursion, and builds each encoding in one token buffer that is truncated
on backtrack.
"""

from typing import Iterator, List, NamedTuple, Tuple

from phonecode.dictionary import DictionaryIndex
from phonecode.keypad import DIGITS

# An encoding is the tuple of tokens, e.g. ('an', '8', 'bar')
Encoding = Tuple[str, ...]


class Frame(NamedTuple):
    """A pending branch: place token at depth, then continue from position."""
    position: int
    is_filler: bool
    depth: int
    token: str


def _check_subject(subject: str):
    for ch in subject:
        if ch not in DIGITS:
            raise ValueError(f"subject must contain only digits 0-9, got {subject!r}")


def _branches(
    subject: str,
    position: int,
    after_filler: bool,
    depth: int,
    index: DictionaryIndex,
    always_fill: bool,
) -> List[Frame]:
    """Branches leaving position, in the order they should be explored."""
    frames = []
    for end, words in index.matches(subject, position):
        for word in words:
            frames.append(Frame(end, False, depth, word))

    if not after_filler and (always_fill or not frames):
        frames.append(Frame(position + 1, True, depth, subject[position]))

    return frames


def search(
    subject: str,
    index: DictionaryIndex,
    *,
    always_fill: bool = False,
) -> Iterator[Encoding]:
    """
    Generate every encoding of a digit string.

    Words matching at a position are tried shortest digit string first,
    followed by the filler digit. By default a filler is only placed where
    no word starts; always_fill also tries it where words do start. A filler
    is never placed right after another filler.

    Args:
        subject: Digits to encode (separators already removed)
        index: Dictionary index to take words from
        always_fill: Try a filler at every position not preceded by one

    Yields:
        Encodings as tuples of tokens, in discovery order

    Raises:
        ValueError: If subject contains anything but ASCII digits
    """
    _check_subject(subject)

    length = len(subject)
    if length == 0:
        yield ()
        return

    tokens: List[str] = []
    stack = _branches(subject, 0, False, 0, index, always_fill)
    stack.reverse()

    while stack:
        frame = stack.pop()
        del tokens[frame.depth:]
        tokens.append(frame.token)

        if frame.position == length:
            yield tuple(tokens)
            continue

        children = _branches(
            subject, frame.position, frame.is_filler, frame.depth + 1, index, always_fill,
        )
        children.reverse()
        stack.extend(children)


def count_encodings(subject: str, index: DictionaryIndex, *, always_fill: bool = False) -> int:
    """Number of encodings of subject."""
    return sum(1 for _ in search(subject, index, always_fill=always_fill))

"""
phonecode: phone numbers as words

Encodes phone numbers as sequences of dictionary words, using the letters
printed on a telephone keypad. Digits not covered by any word may stay as
single filler digits, but never two in a row.

Basic Usage:
    import phonecode

    index = phonecode.build_index(["an", "blah", "a", "foo", "bar"])
    for tokens in phonecode.encode("26", index):
        print(" ".join(tokens))
"""

from typing import Iterable, Iterator, List, Optional, Tuple

from phonecode.dictionary import DictionaryIndex, load_dictionary
from phonecode.encoder import Encoding, search
from phonecode.keypad import DEFAULT_KEYPAD, InvalidWord, Keypad, get_keypad
from phonecode.numbers import InvalidPhoneNumberLine, parse_number, parse_numbers

__version__ = "0.1.0"

# Threads used by the async API
MAX_WORKERS = 4

# Numbers queued per thread by iter_encode before it waits for a result
PENDING_PER_WORKER = 4


# =============================================================================
# Main API
# =============================================================================

def build_index(words: Iterable[str], keypad: str = DEFAULT_KEYPAD) -> DictionaryIndex:
    """
    Build a dictionary index from words in memory.

    Args:
        words: Dictionary words. Entries that are not plain letters are skipped.
        keypad: Keypad name ("standard" or "prechelt")

    Returns:
        The index, to be passed to encode()
    """
    return DictionaryIndex.build(words, get_keypad(keypad))


def load(
    path,
    keypad: Optional[str] = None,
    compiled: bool = False,
    encoding: str = "utf-8",
) -> DictionaryIndex:
    """
    Load a dictionary from disk.

    Args:
        path: Word file (one word per line), or a compiled dictionary
        keypad: Keypad name. Defaults to the keypad recorded in a compiled
            dictionary, or to the standard keypad for a word file
        compiled: True if path was produced by scripts/build_dictionary.py
        encoding: Text encoding of a word file

    Raises:
        FileNotFoundError: If the dictionary doesn't exist
    """
    if compiled:
        return DictionaryIndex.open(path, get_keypad(keypad) if keypad else None)
    return load_dictionary(path, get_keypad(keypad or DEFAULT_KEYPAD), encoding=encoding)


def encode(number: str, index: DictionaryIndex, always_fill: bool = False) -> List[Encoding]:
    """
    Encode one phone number.

    This is the main entry point for single numbers.

    Args:
        number: Phone number, separators ("-", "/") allowed
        index: Dictionary index
        always_fill: Also try filler digits where words match

    Returns:
        List of encodings (tuples of tokens) in discovery order

    Raises:
        InvalidPhoneNumberLine: If number contains other characters

    Example:
        >>> index = phonecode.build_index(["an", "a"])
        >>> phonecode.encode("2-6", index)
        [('a', '6'), ('an',)]
    """
    subject = parse_number(number).subject
    return list(search(subject, index, always_fill=always_fill))


def iter_encode(
    numbers: Iterable[str],
    index: DictionaryIndex,
    workers: int = 1,
    always_fill: bool = False,
) -> Iterator[Tuple[str, List[Encoding]]]:
    """
    Encode phone numbers, yielding (number, encodings) in input order.

    Invalid and empty lines are skipped. With workers > 1 the numbers are
    searched on a thread pool; results still come back in input order.
    At most workers * PENDING_PER_WORKER numbers are in flight at once.
    """
    numbers = parse_numbers(numbers)

    def run(number):
        return number.raw, list(search(number.subject, index, always_fill=always_fill))

    if workers <= 1:
        for number in numbers:
            yield run(number)
        return

    from collections import deque
    from concurrent.futures import ThreadPoolExecutor

    limit = workers * PENDING_PER_WORKER
    pending = deque()

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="phonecode") as pool:
        try:
            for number in numbers:
                pending.append(pool.submit(run, number))
                if len(pending) >= limit:
                    yield pending.popleft().result()
            while pending:
                yield pending.popleft().result()
        finally:
            for future in pending:
                future.cancel()


def encode_many(
    numbers: Iterable[str],
    index: DictionaryIndex,
    workers: int = 1,
    always_fill: bool = False,
) -> List[Tuple[str, List[Encoding]]]:
    """Encode phone numbers. See iter_encode()."""
    return list(iter_encode(numbers, index, workers=workers, always_fill=always_fill))


def get_version() -> str:
    """Get the library version."""
    return __version__


# =============================================================================
# Async API
# =============================================================================

# Thread pool for async operations
_executor = None
_executor_lock = None


def _get_executor():
    """Get or create the thread pool executor."""
    global _executor, _executor_lock
    import threading
    from concurrent.futures import ThreadPoolExecutor

    if _executor_lock is None:
        _executor_lock = threading.Lock()

    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(max_workers=MAX_WORKERS, thread_name_prefix="phonecode")

    return _executor


class EncodingTimeoutError(Exception):
    """Raised when async encoding times out."""
    pass


async def encode_async(
    number: str,
    index: DictionaryIndex,
    timeout: Optional[float] = 30.0,
    always_fill: bool = False,
) -> List[Encoding]:
    """
    Encode a phone number on the shared thread pool.

    The search itself is not interrupted on timeout; only the wait is.

    Raises:
        EncodingTimeoutError: If encoding exceeds timeout
        InvalidPhoneNumberLine: If number contains other characters
    """
    import asyncio

    loop = asyncio.get_running_loop()
    executor = _get_executor()

    try:
        future = loop.run_in_executor(executor, lambda: encode(number, index, always_fill))
        return await asyncio.wait_for(future, timeout=timeout)
    except asyncio.TimeoutError:
        raise EncodingTimeoutError(f"Encoding {number!r} timed out after {timeout}s")


def shutdown():
    """
    Shutdown the thread pool executor.

    Call this when your application is shutting down to cleanly
    release resources.
    """
    global _executor
    if _executor is not None:
        _executor.shutdown(wait=True)
        _executor = None


# =============================================================================
# Module-level exports
# =============================================================================

__all__ = [
    # Types
    "DictionaryIndex",
    "Encoding",
    "Keypad",
    # Sync API
    "build_index",
    "load",
    "encode",
    "iter_encode",
    "encode_many",
    "search",
    "get_version",
    # Async API
    "encode_async",
    "shutdown",
    # Exceptions
    "InvalidWord",
    "InvalidPhoneNumberLine",
    "EncodingTimeoutError",
    # Version
    "__version__",
]

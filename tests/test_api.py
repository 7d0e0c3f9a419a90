import asyncio

import pytest

import phonecode
from phonecode import InvalidPhoneNumberLine

from conftest import PRECHELT_WORDS, WORDS


def test_encode():
    index = phonecode.build_index(["an", "a"])
    assert phonecode.encode("2-6", index) == [("a", "6"), ("an",)]
    assert phonecode.encode("", index) == [()]
    assert phonecode.encode("2/-", index) == [("a",)]


def test_encode_invalid_number(index):
    with pytest.raises(InvalidPhoneNumberLine):
        phonecode.encode("26x", index)


def test_build_index_keypad():
    index = phonecode.build_index(PRECHELT_WORDS, keypad="prechelt")
    assert sorted(" ".join(e) for e in phonecode.encode("5624-82", index)) == [
        "Mix Tor",
        "mir Tor",
    ]
    with pytest.raises(KeyError):
        phonecode.build_index(WORDS, keypad="qwerty")


def test_load(tmp_path):
    words = tmp_path / "words.txt"
    words.write_text("\n".join(WORDS) + "\n")
    index = phonecode.load(words)
    assert len(index) == len(WORDS)

    compiled = tmp_path / "words.dic"
    index.save(compiled)
    reopened = phonecode.load(compiled, compiled=True)
    assert phonecode.encode("2524", reopened) == phonecode.encode("2524", index)


def test_load_latin1(tmp_path):
    words = tmp_path / "words.txt"
    words.write_bytes("Tor\nB\xf6\n".encode("latin-1"))
    index = phonecode.load(words, keypad="prechelt", encoding="latin-1")
    assert len(index) == 1
    assert index.skipped == 1


def test_encode_many(index):
    numbers = ["2524\n", "x\n", "\n", "26\n", "11\n", "2-6\n"]
    assert phonecode.encode_many(numbers, index) == [
        ("2524", [("a", "5", "a", "4"), ("blah",)]),
        ("26", [("a", "6"), ("an",)]),
        ("11", []),
        ("2-6", [("a", "6"), ("an",)]),
    ]


def test_encode_many_threads_keep_order(prechelt_index):
    numbers = ["112", "5624-82", "4824", "0721/608-4067", "10/783--5", "381482", "04824"] * 20
    sequential = phonecode.encode_many(numbers, prechelt_index)
    threaded = phonecode.encode_many(numbers, prechelt_index, workers=4)
    assert threaded == sequential
    assert [number for number, _ in threaded] == numbers


def test_encode_async(index):
    try:
        result = asyncio.run(phonecode.encode_async("2524", index))
    finally:
        phonecode.shutdown()
    assert result == [("a", "5", "a", "4"), ("blah",)]


def test_get_version():
    assert phonecode.get_version() == phonecode.__version__


def test_load_compiled_keeps_stored_keypad(tmp_path, prechelt_index):
    compiled = tmp_path / "prechelt.dic"
    prechelt_index.save(compiled)
    index = phonecode.load(compiled, compiled=True)
    assert index.keypad.name == "prechelt"
    with pytest.raises(ValueError):
        phonecode.load(compiled, keypad="standard", compiled=True)


def test_iter_encode_bounds_pending_numbers(index):
    consumed = []

    def lines():
        for i in range(1000):
            consumed.append(i)
            yield "2524\n"

    results = phonecode.iter_encode(lines(), index, workers=2)
    assert next(results) == ("2524", [("a", "5", "a", "4"), ("blah",)])
    assert len(consumed) <= 2 * phonecode.PENDING_PER_WORKER
    results.close()

import logging

import pytest

from phonecode.numbers import (
    InvalidPhoneNumberLine,
    PhoneNumber,
    clean_number,
    parse_number,
    parse_numbers,
    read_numbers,
)


def test_clean_number():
    assert clean_number("5624-82") == "562482"
    assert clean_number("10/783--5") == "107835"
    assert clean_number("4824\n") == "4824"
    assert clean_number("") == ""
    assert clean_number("--/") == ""


@pytest.mark.parametrize("text", ["12a4", "555 1234", "+49-30", "１２"])
def test_clean_number_invalid(text):
    with pytest.raises(InvalidPhoneNumberLine):
        clean_number(text)


def test_parse_number_keeps_raw_text():
    assert parse_number("  10/783--5\n") == PhoneNumber("10/783--5", "107835")


def test_parse_numbers_skips_bad_lines(caplog):
    lines = ["5624-82\n", "\n", "call me\n", "--\n", "04824\n"]
    with caplog.at_level(logging.WARNING, logger="phonecode.numbers"):
        numbers = list(parse_numbers(lines))

    assert numbers == [
        PhoneNumber("5624-82", "562482"),
        PhoneNumber("04824", "04824"),
    ]
    assert "line 3" in caplog.text


def test_read_numbers(tmp_path):
    path = tmp_path / "input.txt"
    path.write_text("112\n5624-82\nx\n")
    assert [n.subject for n in read_numbers(path)] == ["112", "562482"]


def test_read_numbers_undecodable_byte(tmp_path):
    path = tmp_path / "input.txt"
    path.write_bytes(b"26\n2\xff6\n2\n")
    assert [n.subject for n in read_numbers(path)] == ["26", "2"]

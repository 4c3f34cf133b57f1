# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import pytest

from textbookrsa import codec
from textbookrsa.errors import EncodingError

standard_payload = "The quick brown fox jumps over the lazy dog1234567890!@#$%^&*()-_=+[{}];:\\|<>,./?~`'\""


@pytest.mark.parametrize("text", ["", "a", "hej", "Alice signatur", "räksmörgås", "日本語", "🔑 key", standard_payload])
def test_text_round_trip(text):
    assert codec.int_to_text(codec.text_to_int(text)) == text


@pytest.mark.parametrize("text,expected", [("", 0), ("a", 0x61), ("hej", 0x68656A), ("é", 0xC3A9)])
def test_text_to_int_big_endian(text, expected):
    assert codec.text_to_int(text) == expected


def test_zero_is_empty_text():
    assert codec.int_to_text(0) == ""
    assert codec.integer_to_bytes(0) == b""


def test_text_to_int_rejects_leading_nul():
    with pytest.raises(EncodingError):
        codec.text_to_int("\x00hidden")


def test_text_to_int_allows_inner_nul():
    assert codec.int_to_text(codec.text_to_int("a\x00b")) == "a\x00b"


def test_text_to_int_rejects_surrogates():
    with pytest.raises(EncodingError):
        codec.text_to_int("\ud800")


@pytest.mark.parametrize("value", [0xFF, 0xC3, 0x80, 0xC328])
def test_int_to_text_rejects_invalid_utf8(value):
    with pytest.raises(EncodingError):
        codec.int_to_text(value)


def test_int_to_text_rejects_negative():
    with pytest.raises(EncodingError):
        codec.int_to_text(-1)


def test_encoding_error_is_value_error():
    with pytest.raises(ValueError):
        codec.int_to_text(0xFF)


@pytest.mark.parametrize("payload", [b"", b"\x01", b"Quick!", b"\xff" * 64])
def test_bytes_integer_round(payload):
    assert codec.integer_to_bytes(codec.bytes_to_integer(payload)) == payload


def test_integer_to_bytes_fixed_length():
    assert codec.integer_to_bytes(1, 4) == b"\x00\x00\x00\x01"
    with pytest.raises(EncodingError):
        codec.integer_to_bytes(2**32, 4)

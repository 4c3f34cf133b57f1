"""Conversion between text, octet strings and the integer representatives RSA operates on.

Text is encoded as UTF-8 and the resulting bytes are read as a big-endian unsigned integer. The empty string maps to
0 and back.

Typical usage example:

    m = text_to_int("hej")
    s = int_to_text(m)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from textbookrsa.errors import EncodingError


def bytes_to_integer(msg: bytes) -> int:
    """Converts a byte string to its big-endian unsigned integer.

    Args:
        msg: The bytes (AKA Octet String) to convert.

    Returns:
        The representative integer.
    """
    return int.from_bytes(msg, byteorder="big", signed=False)


def integer_to_bytes(msg: int, fixedlen: int | None = None) -> bytes:
    """Converts an integer to bytes, either minimal or of a fixed length.

    Args:
        msg: The integer to unmarshal. Must be >= 0.
        fixedlen: The target length of the byte string. If None, the shortest representation is used, which is empty
            for 0.

    Returns:
        The representative bytes. (AKA Octet String)

    Raises:
        EncodingError: If `msg` is negative or does not fit in `fixedlen` bytes.
    """
    if msg < 0:
        raise EncodingError("Integer representative must be non-negative.")
    if fixedlen is None:
        fixedlen = (msg.bit_length() + 7) // 8
    try:
        return msg.to_bytes(fixedlen, byteorder="big", signed=False)
    except OverflowError as exc:
        raise EncodingError(f"Integer representative does not fit in {fixedlen} bytes.") from exc


def text_to_int(text: str) -> int:
    """Converts text to its integer representative.

    Args:
        text: The text to convert.

    Returns:
        The UTF-8 bytes of `text` read as a big-endian integer.

    Raises:
        EncodingError: If the text cannot be encoded, or starts with NUL (which would be lost on the way back).
    """
    try:
        raw = text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise EncodingError("Text is not encodable as UTF-8.") from exc
    if raw.startswith(b"\x00"):
        raise EncodingError("Text starting with NUL cannot be represented losslessly.")
    return bytes_to_integer(raw)


def int_to_text(value: int) -> str:
    """Converts an integer representative back to text.

    Args:
        value: The integer to convert.

    Returns:
        The decoded text, "" for 0.

    Raises:
        EncodingError: If `value` is negative or its bytes are not valid UTF-8.
    """
    raw = integer_to_bytes(value)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise EncodingError("Integer representative does not decode to UTF-8 text.") from exc

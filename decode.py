#!/usr/bin/env python3
# decode.py
# Positional numeral decoding: digit strings in radix 2..36 <-> exact integers.

from errors import InvalidBaseError, MalformedDigitError

MIN_BASE = 2
MAX_BASE = 36
ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"

_DIGIT_VALUE = {ch: i for i, ch in enumerate(ALPHABET)}
_DIGIT_VALUE.update({ch.upper(): i for i, ch in enumerate(ALPHABET)})


def short_int(n: int) -> str:
    """Printable form of n that stays clear of the int-to-str digit limit."""
    if n.bit_length() > 4096:
        return f"<{n.bit_length()}-bit integer>"
    return str(n)


def check_base(base: int) -> int:
    if isinstance(base, bool) or not isinstance(base, int):
        raise InvalidBaseError(f"base must be an integer; got {base!r}")
    if not (MIN_BASE <= base <= MAX_BASE):
        raise InvalidBaseError(f"base must be in [{MIN_BASE}, {MAX_BASE}]; got {short_int(base)}")
    return base


def parse_base(text) -> int:
    """Base as it appears in a record ("16" or 16) -> checked int."""
    if isinstance(text, bool):
        raise InvalidBaseError(f"base is not numeric: {text!r}")
    if isinstance(text, int):
        return check_base(text)
    s = str(text).strip()
    if not (s.isascii() and s.isdigit()):
        raise InvalidBaseError(f"base is not numeric: {text!r}")
    return check_base(decode_value(s, 10))


def decode_value(digits: str, base: int) -> int:
    """
    Exact value of `digits` read in `base` (Horner, most significant digit first).

    Letters are case-insensitive. Unlike int(), signs, whitespace, underscores
    and 0x-style prefixes are rejected.
    """
    check_base(base)
    if not isinstance(digits, str) or digits == "":
        raise MalformedDigitError(f"empty or non-string digits: {digits!r}")
    y = 0
    for pos, ch in enumerate(digits):
        d = _DIGIT_VALUE.get(ch)
        if d is None or d >= base:
            raise MalformedDigitError(
                f"invalid digit {ch!r} at position {pos} for base {base} in {digits!r}")
        y = y * base + d
    return y


def encode_value(n: int, base: int) -> str:
    """Base-`base` digits of n >= 0 (lowercase)."""
    check_base(base)
    if n < 0:
        raise ValueError(f"only non-negative values can be encoded; got {n}")
    if n == 0:
        return "0"
    out = []
    while n:
        n, d = divmod(n, base)
        out.append(ALPHABET[d])
    return "".join(reversed(out))


def decimal_value(text: str) -> int:
    """Signed base-10 string -> int. Same digit rules as decode_value, no length cap."""
    s = text.strip()
    sign = -1 if s[:1] == "-" else 1
    body = s[1:] if s[:1] in ("+", "-") else s
    return sign * decode_value(body, 10)


def value_digits(value) -> str:
    """A sample value as digits; bare JSON integers are taken as their decimal digits."""
    if isinstance(value, int) and not isinstance(value, bool):
        if value < 0:
            raise MalformedDigitError("negative integer value is not a digit string")
        return encode_value(value, 10)
    return value

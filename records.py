#!/usr/bin/env python3
# records.py
# JSON input -> TestCase records.
#
# Document shape (a list of these, or a single one):
#   {"keys": {"n": 4, "k": 3},
#    "1": {"base": "10", "value": "4"},
#    "2": {"base": "2",  "value": "111"}, ...}

import json
from typing import Any, List, Union

from decode import decimal_value
from errors import MalformedDigitError, MalformedRecordError
from samples import TestCase


class _Pairs(list):
    """A JSON object kept as its (key, value) pairs, in order, duplicates included."""

    def get(self, key, default=None):
        for k, v in self:
            if k == key:
                return v
        return default

def _is_object(obj) -> bool:
    return isinstance(obj, (_Pairs, dict))

def _items(obj):
    return list(obj) if isinstance(obj, _Pairs) else list(obj.items())


def _parse_int(v, what: str) -> int:
    if isinstance(v, bool):
        raise MalformedRecordError(f"{what} is not an integer: {v!r}")
    if isinstance(v, int):
        return v
    try:
        return decimal_value(str(v))
    except MalformedDigitError:
        raise MalformedRecordError(f"{what} is not an integer: {v!r}") from None


def parse_case(obj: Any) -> TestCase:
    if not _is_object(obj):
        raise MalformedRecordError(f"test case must be a JSON object; got {type(obj).__name__}")
    keys = obj.get("keys")
    if not _is_object(keys):
        raise MalformedRecordError("missing 'keys' object")
    if keys.get("k") is None:
        raise MalformedRecordError("missing 'keys.k'")
    k = _parse_int(keys.get("k"), "keys.k")
    n = keys.get("n")
    n = None if n is None else _parse_int(n, "keys.n")

    raw = []
    for x, body in _items(obj):
        if x == "keys":
            continue
        if _is_object(body):
            raw.append((x, body.get("base"), body.get("value")))
        else:
            raw.append((x, None, None))  # skipped downstream as malformed
    return TestCase(k, tuple(raw), n)


def parse_document(doc: Any) -> List[Union[TestCase, MalformedRecordError]]:
    """One entry per record; unparseable records are returned as their error."""
    if _is_object(doc):
        items = [doc]
    elif isinstance(doc, list):
        items = doc
    else:
        raise MalformedRecordError(
            f"top level must be an array or object of test cases; got {type(doc).__name__}")
    out: List[Union[TestCase, MalformedRecordError]] = []
    for obj in items:
        try:
            out.append(parse_case(obj))
        except MalformedRecordError as e:
            out.append(e)
    return out


def loads_cases(text: str) -> List[Union[TestCase, MalformedRecordError]]:
    try:
        doc = json.loads(text, object_pairs_hook=_Pairs)
    except ValueError as e:  # JSONDecodeError, or an over-long integer literal
        raise MalformedRecordError(f"input is not valid JSON: {e}") from e
    cases = parse_document(doc)
    if not cases:
        raise MalformedRecordError("input contains no test cases")
    return cases


def load_cases(path: str) -> List[Union[TestCase, MalformedRecordError]]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise MalformedRecordError(f"cannot read {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise MalformedRecordError(f"{path} is not UTF-8 text: {e}") from e
    return loads_cases(text)

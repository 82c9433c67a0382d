#!/usr/bin/env python3
# samples.py
# Sample / TestCase value types and the first-k selection policy.

from typing import Any, List, NamedTuple, Optional, Sequence, Tuple

from decode import decimal_value, decode_value, parse_base, short_int, value_digits
from errors import (
    InsufficientSamplesError, InvalidDegreeError, MalformedDigitError, MalformedRecordError,
    SolverError,
)

RawSample = Tuple[Any, Any, Any]  # (x, base, value) as supplied by the record


class Sample(NamedTuple):
    x: int
    y: int


class TestCase(NamedTuple):
    k: int
    raw_samples: Tuple[RawSample, ...]
    n: Optional[int] = None  # declared sample count, informational only

    __test__ = False  # not a pytest class


class SkippedSample(NamedTuple):
    raw: RawSample
    reason: str


# ---------- Decoding ----------

def parse_x(text) -> int:
    if isinstance(text, bool):
        raise MalformedRecordError(f"x is not an integer: {text!r}")
    if isinstance(text, int):
        return text
    if text is None:
        raise MalformedRecordError("missing x")
    try:
        return decimal_value(str(text))
    except MalformedDigitError:
        raise MalformedRecordError(f"x is not an integer: {text!r}") from None

def decode_sample(x, base, value) -> Sample:
    if base is None:
        raise MalformedRecordError(f"sample {x!r} has no base")
    if value is None:
        raise MalformedRecordError(f"sample {x!r} has no value")
    return Sample(parse_x(x), decode_value(value_digits(value), parse_base(base)))

def decode_samples(raw_samples: Sequence[RawSample]) -> Tuple[List[Sample], List[SkippedSample]]:
    """Decode every raw triple in source order; failures are collected, not raised."""
    samples: List[Sample] = []
    skipped: List[SkippedSample] = []
    for raw in raw_samples:
        try:
            samples.append(decode_sample(*raw))
        except SolverError as e:
            skipped.append(SkippedSample(tuple(raw), f"{type(e).__name__}: {e}"))
    return samples, skipped

# ---------- Selection ----------

def check_k(k) -> int:
    if isinstance(k, bool) or not isinstance(k, int) or k < 1:
        raise InvalidDegreeError(
            f"k must be an integer >= 1; got {short_int(k) if isinstance(k, int) else repr(k)}")
    return k

def select_samples(samples: Sequence[Sample], k: int) -> Tuple[Sample, ...]:
    """First k samples in source order. No sorting, no filtering."""
    check_k(k)
    if len(samples) < k:
        raise InsufficientSamplesError(
            f"need k={short_int(k)} samples, only {len(samples)} decoded")
    return tuple(samples[:k])

def build_sample_set(case: TestCase):
    """Decode then select: returns (selected, decoded, skipped)."""
    samples, skipped = decode_samples(case.raw_samples)
    return select_samples(samples, case.k), samples, skipped

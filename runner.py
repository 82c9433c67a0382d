#!/usr/bin/env python3
# runner.py
# Per-case pipeline (decode -> select -> interpolate) with failure isolation,
# and a batch driver that keeps results in input order.

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple, Union

from errors import SolverError
from interp import METHODS, evaluate_at_zero, lagrange_at_zero_float
from samples import Sample, SkippedSample, TestCase, decode_samples, select_samples

# Case states. A case moves forward through these and ends in REPORTED or FAILED.
PENDING = "pending"
DECODING = "decoding"
SELECTING = "selecting"
INTERPOLATING = "interpolating"
REPORTED = "reported"
FAILED = "failed"


class Result(NamedTuple):
    case_index: int                  # 1-based position in the input
    constant_term: Optional[int]
    status: str                      # REPORTED or FAILED
    stage: Optional[str] = None      # state the case failed in
    error: Optional[str] = None
    samples: Tuple[Sample, ...] = ()
    skipped: Tuple[SkippedSample, ...] = ()
    float_check: Optional[int] = None
    declared_n: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.status == REPORTED

    @property
    def diverged(self) -> bool:
        return self.ok and self.float_check is not None and self.float_check != self.constant_term

    def to_record(self) -> Dict[str, Any]:
        rec: Dict[str, Any] = {
            "case": self.case_index,
            "status": self.status,
            "constant_term": self.constant_term,
            "samples": [{"x": s.x, "y": s.y} for s in self.samples],
            "skipped": [{"raw": list(s.raw), "reason": s.reason} for s in self.skipped],
        }
        if not self.ok:
            rec["stage"] = self.stage
            rec["error"] = self.error
        if self.float_check is not None:
            rec["float_check"] = self.float_check
        if self.declared_n is not None:
            rec["declared_n"] = self.declared_n
        return rec


def check_method(method: str) -> str:
    if method not in METHODS:
        raise ValueError(f"unknown method {method!r}; expected one of {METHODS}")
    return method


def run_case(case_index: int, case: Union[TestCase, SolverError],
             method: str = "exact", cross_check: bool = False) -> Result:
    """
    Run one case to completion. Never raises for input problems: every
    SolverError (or float overflow) becomes a FAILED Result at the stage it hit.
    A record that could not even be parsed arrives as the exception itself.
    """
    check_method(method)
    if isinstance(case, SolverError):
        return Result(case_index, None, FAILED, PENDING, f"{type(case).__name__}: {case}")

    stage = DECODING
    samples, skipped = decode_samples(case.raw_samples)
    samples_t, skipped_t = tuple(samples), tuple(skipped)

    def failed(e: Exception) -> Result:
        return Result(case_index, None, FAILED, stage, f"{type(e).__name__}: {e}",
                      samples_t, skipped_t, declared_n=case.n)

    try:
        stage = SELECTING
        points = select_samples(samples, case.k)
        stage = INTERPOLATING
        value = evaluate_at_zero(points, method)
    except (SolverError, ArithmeticError) as e:
        return failed(e)

    float_check = None
    if cross_check and method == "exact":
        try:
            float_check = lagrange_at_zero_float(points)
        except OverflowError:
            float_check = None

    return Result(case_index, value, REPORTED, None, None,
                  samples_t, skipped_t, float_check, case.n)


def run_batch(cases: Sequence[Union[TestCase, SolverError]], method: str = "exact",
              cross_check: bool = False, workers: int = 1) -> List[Result]:
    """Run independent cases, optionally on a thread pool; output is in input order."""
    check_method(method)
    jobs = list(enumerate(cases, start=1))
    if workers <= 1:
        return [run_case(i, c, method, cross_check) for i, c in jobs]

    results: Dict[int, Result] = {}
    with ThreadPoolExecutor(max_workers=workers) as ex:
        futs = {ex.submit(run_case, i, c, method, cross_check): i for i, c in jobs}
        for fut in as_completed(futs):
            results[futs[fut]] = fut.result()
    return [results[i] for i, _ in jobs]

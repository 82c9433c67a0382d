#!/usr/bin/env python3
# errors.py
# Exception taxonomy shared by the decoder, selection, interpolation and I/O layers.


class SolverError(Exception):
    """Base class for every error raised while reconstructing a constant term."""


# ---------- Decoding ----------

class MalformedDigitError(SolverError, ValueError):
    pass

class InvalidBaseError(SolverError, ValueError):
    pass

# ---------- Selection ----------

class InsufficientSamplesError(SolverError):
    pass

class InvalidDegreeError(SolverError, ValueError):
    pass

# ---------- Interpolation ----------

class DuplicateXError(SolverError, ArithmeticError):
    pass

# ---------- Input records ----------

class MalformedRecordError(SolverError, ValueError):
    pass

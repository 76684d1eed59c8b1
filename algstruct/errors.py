"""
algstruct/errors.py

Errors surfaced by the engines.

Law violations (a structure whose combine is not associative, a semiring
that does not distribute) are not detectable here and have no error type.
"""

from __future__ import annotations


class AlgebraError(Exception):
    """Base class for errors raised by algstruct."""


class EmptyReductionError(AlgebraError, ValueError):
    """Reduction over an empty sequence with no identity to fall back on."""


class DimensionMismatchError(AlgebraError, ValueError):
    """Relation is not square, is ragged, or does not match its partner's size."""

"""
algstruct/algebra/contracts.py

Structural contracts for the algebras consumed by the engines.

A semigroup (T, ·) provides:
- combine(a, b): closed associative operation

A monoid additionally provides:
- identity(): e with combine(e, x) == x == combine(x, e)

A semiring (T, ⊕, ⊗, 0, 1) is a pair of monoids over the same carrier:
- additive: (⊕, 0)
- multiplicative: (⊗, 1)
with ⊗ distributing over ⊕ on both sides and 0 absorbing under ⊗.

Laws are preconditions. Nothing here checks them; a structure that breaks
them yields silently wrong results, not exceptions.

Optional class attributes refine a structure:
- commutative: combine(a, b) == combine(b, a)
- idempotent: combine(a, a) == a
- ufunc: numpy ufunc computing combine elementwise (vectorization hint)
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar

T = TypeVar("T")


class Semigroup(Protocol[T]):
    """Protocol for a closed associative binary operation."""

    def combine(self, a: T, b: T) -> T: ...


class Monoid(Semigroup[T], Protocol[T]):
    """Protocol for a semigroup with a two-sided identity."""

    def identity(self) -> T: ...


class Semiring(Protocol[T]):
    """Protocol for two monoid witnesses sharing a carrier."""

    additive: Monoid[T]
    multiplicative: Monoid[T]


def has_identity(structure: Any) -> bool:
    """True if structure exposes a callable identity()."""
    return callable(getattr(structure, "identity", None))


def is_idempotent(structure: Any) -> bool:
    return bool(getattr(structure, "idempotent", False))


def is_commutative(structure: Any) -> bool:
    return bool(getattr(structure, "commutative", False))


def ufunc_of(structure: Any) -> Any:
    """Vectorized form of combine, or None."""
    return getattr(structure, "ufunc", None)

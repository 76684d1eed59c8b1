"""
algstruct/algebra/semiring.py

Semiring descriptors built from two monoid witnesses.

A semiring (S, ⊕, ⊗, 0, 1) provides:
- add (⊕): additive.combine
- mul (⊗): multiplicative.combine
- zero (0): additive identity, absorbing under ⊗
- one (1): multiplicative identity
- is_zero(x): check if x equals zero

The same closure algorithm answers different questions depending on the
semiring plugged in:

    tropical   (min, +)   shortest distances
    arctic     (max, +)   heaviest walks (acyclic input)
    boolean    (or, and)  reachability
    counting   (+, *)     number of paths
    bitwise    (|, &)     reachability for 64 label sets at once
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from algstruct.algebra.contracts import Monoid, is_idempotent, ufunc_of
from algstruct.algebra.monoids import (
    AllMonoid,
    AnyMonoid,
    BitAndMonoid,
    BitOrMonoid,
    MaxMonoid,
    MinMonoid,
    ProductMonoid,
    SumMonoid,
)


@dataclass(frozen=True)
class SemiringStructure:
    """
    A semiring assembled from an additive and a multiplicative monoid.

    Attributes:
        name: Identifier for the semiring type
        additive: (⊕, 0) witness; should be commutative
        multiplicative: (⊗, 1) witness
    """
    name: str
    additive: Monoid
    multiplicative: Monoid

    @property
    def zero(self) -> Any:
        return self.additive.identity()

    @property
    def one(self) -> Any:
        return self.multiplicative.identity()

    def add(self, a: Any, b: Any) -> Any:
        return self.additive.combine(a, b)

    def mul(self, a: Any, b: Any) -> Any:
        return self.multiplicative.combine(a, b)

    def is_zero(self, a: Any) -> bool:
        return bool(a == self.zero)

    @property
    def idempotent(self) -> bool:
        """True if a ⊕ a == a, which bounds closure iteration."""
        return is_idempotent(self.additive)

    def supports_vectorized(self) -> bool:
        """Check if both operations have a numpy ufunc form."""
        return ufunc_of(self.additive) is not None and ufunc_of(self.multiplicative) is not None


def tropical_semiring() -> SemiringStructure:
    """Create the min-plus semiring: zero +inf, one 0."""
    return SemiringStructure(
        name="TROPICAL",
        additive=MinMonoid(top=np.inf),
        multiplicative=SumMonoid(),
    )


def arctic_semiring() -> SemiringStructure:
    """Create the max-plus semiring: zero -inf, one 0."""
    return SemiringStructure(
        name="ARCTIC",
        additive=MaxMonoid(bottom=-np.inf),
        multiplicative=SumMonoid(),
    )


def boolean_semiring() -> SemiringStructure:
    """Create the Boolean reachability semiring: add=OR, mul=AND."""
    return SemiringStructure(
        name="BOOL",
        additive=AnyMonoid(),
        multiplicative=AllMonoid(),
    )


def counting_semiring() -> SemiringStructure:
    """Create the counting semiring over ints: add=+, mul=*."""
    return SemiringStructure(
        name="COUNT",
        additive=SumMonoid(),
        multiplicative=ProductMonoid(),
    )


def bitwise_semiring(width: int = 64) -> SemiringStructure:
    """
    Create the bitwise semiring over `width`-bit masks: add=|, mul=&.

    Each bit is an independent Boolean semiring, so one closure answers
    `width` reachability questions side by side. On ndarray input pick an
    unsigned dtype wide enough for the all-ones mask.
    """
    return SemiringStructure(
        name=f"BITWISE{width}",
        additive=BitOrMonoid(),
        multiplicative=BitAndMonoid(width=width),
    )

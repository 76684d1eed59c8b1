"""
algstruct/algebra/monoids.py

Monoid descriptors for ordinary Python values.

Every descriptor is a frozen dataclass: stateless, hashable, and safe to
share between threads. Build as many as you like; equal parameters give
equal descriptors.

Scalar structures carry the numpy ufunc that computes the same operation,
so the engines can take a vectorized path on ndarray input.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional, Tuple

import numpy as np

from algstruct.algebra.contracts import Semigroup, Monoid, is_commutative, is_idempotent


@dataclass(frozen=True)
class SumMonoid:
    """Numeric addition, identity 0."""
    commutative: ClassVar[bool] = True
    idempotent: ClassVar[bool] = False
    ufunc: ClassVar[Any] = np.add

    def combine(self, a: Any, b: Any) -> Any:
        return a + b

    def identity(self) -> int:
        return 0


@dataclass(frozen=True)
class ProductMonoid:
    """Numeric multiplication, identity 1."""
    commutative: ClassVar[bool] = True
    idempotent: ClassVar[bool] = False
    ufunc: ClassVar[Any] = np.multiply

    def combine(self, a: Any, b: Any) -> Any:
        return a * b

    def identity(self) -> int:
        return 1


@dataclass(frozen=True)
class MinMonoid:
    """Minimum over an ordered carrier; `top` must be its greatest element."""
    top: Any = np.inf
    commutative: ClassVar[bool] = True
    idempotent: ClassVar[bool] = True
    ufunc: ClassVar[Any] = np.minimum

    def combine(self, a: Any, b: Any) -> Any:
        return b if b < a else a

    def identity(self) -> Any:
        return self.top


@dataclass(frozen=True)
class MaxMonoid:
    """Maximum over an ordered carrier; `bottom` must be its least element."""
    bottom: Any = -np.inf
    commutative: ClassVar[bool] = True
    idempotent: ClassVar[bool] = True
    ufunc: ClassVar[Any] = np.maximum

    def combine(self, a: Any, b: Any) -> Any:
        return b if b > a else a

    def identity(self) -> Any:
        return self.bottom


@dataclass(frozen=True)
class AnyMonoid:
    """Boolean or, identity False."""
    commutative: ClassVar[bool] = True
    idempotent: ClassVar[bool] = True
    ufunc: ClassVar[Any] = np.logical_or

    def combine(self, a: Any, b: Any) -> bool:
        return bool(a) or bool(b)

    def identity(self) -> bool:
        return False


@dataclass(frozen=True)
class AllMonoid:
    """Boolean and, identity True."""
    commutative: ClassVar[bool] = True
    idempotent: ClassVar[bool] = True
    ufunc: ClassVar[Any] = np.logical_and

    def combine(self, a: Any, b: Any) -> bool:
        return bool(a) and bool(b)

    def identity(self) -> bool:
        return True


@dataclass(frozen=True)
class BitOrMonoid:
    """Bitwise or over non-negative ints, identity 0."""
    commutative: ClassVar[bool] = True
    idempotent: ClassVar[bool] = True
    ufunc: ClassVar[Any] = np.bitwise_or

    def combine(self, a: int, b: int) -> int:
        return a | b

    def identity(self) -> int:
        return 0


@dataclass(frozen=True)
class BitAndMonoid:
    """
    Bitwise and over `width`-bit masks.

    The identity is the all-ones mask, so the carrier is restricted to
    ints in [0, 2**width).
    """
    width: int = 64
    commutative: ClassVar[bool] = True
    idempotent: ClassVar[bool] = True
    ufunc: ClassVar[Any] = np.bitwise_and

    def __post_init__(self):
        if self.width <= 0:
            raise ValueError(f"BitAndMonoid width must be positive, got {self.width}")

    def combine(self, a: int, b: int) -> int:
        return a & b

    def identity(self) -> int:
        return (1 << self.width) - 1


@dataclass(frozen=True)
class BitXorMonoid:
    """Bitwise exclusive or, identity 0."""
    commutative: ClassVar[bool] = True
    idempotent: ClassVar[bool] = False
    ufunc: ClassVar[Any] = np.bitwise_xor

    def combine(self, a: int, b: int) -> int:
        return a ^ b

    def identity(self) -> int:
        return 0


@dataclass(frozen=True)
class ConcatMonoid:
    """
    Concatenation of strings, tuples or lists.

    `empty` fixes the carrier: "" for strings, () for tuples, [] for lists.
    Not commutative; engines must keep left-to-right order.
    """
    empty: Any = ""
    commutative: ClassVar[bool] = False
    idempotent: ClassVar[bool] = False

    def combine(self, a: Any, b: Any) -> Any:
        return a + b

    def identity(self) -> Any:
        # fresh object for mutable carriers
        return self.empty[:0]


@dataclass(frozen=True)
class ProductOf:
    """Direct product of two monoids, acting componentwise on pairs."""
    first: Monoid
    second: Monoid

    @property
    def commutative(self) -> bool:
        return is_commutative(self.first) and is_commutative(self.second)

    @property
    def idempotent(self) -> bool:
        return is_idempotent(self.first) and is_idempotent(self.second)

    def combine(self, a: Tuple[Any, Any], b: Tuple[Any, Any]) -> Tuple[Any, Any]:
        return (self.first.combine(a[0], b[0]), self.second.combine(a[1], b[1]))

    def identity(self) -> Tuple[Any, Any]:
        return (self.first.identity(), self.second.identity())


@dataclass(frozen=True)
class OptionMonoid:
    """
    A semigroup made into a monoid by adjoining None as identity.

    Lets identity-free structures (e.g. a bare max without a bottom) be
    reduced over possibly-empty input.
    """
    inner: Semigroup

    @property
    def commutative(self) -> bool:
        return is_commutative(self.inner)

    @property
    def idempotent(self) -> bool:
        return is_idempotent(self.inner)

    def combine(self, a: Optional[Any], b: Optional[Any]) -> Optional[Any]:
        if a is None:
            return b
        if b is None:
            return a
        return self.inner.combine(a, b)

    def identity(self) -> None:
        return None


@dataclass(frozen=True)
class MappingMonoid:
    """
    Key-wise merge of dicts whose values form a semigroup.

    Keys present on both sides are combined left-then-right; the rest are
    copied. Nesting MappingMonoid inside itself merges nested dicts.
    """
    values: Semigroup

    @property
    def commutative(self) -> bool:
        return is_commutative(self.values)

    @property
    def idempotent(self) -> bool:
        return is_idempotent(self.values)

    def combine(self, a: Dict[Any, Any], b: Dict[Any, Any]) -> Dict[Any, Any]:
        out = dict(a)
        for k, v in b.items():
            out[k] = self.values.combine(out[k], v) if k in out else v
        return out

    def identity(self) -> Dict[Any, Any]:
        return {}

"""
Algebra module: structural contracts and the catalog of concrete structures.
"""

from algstruct.algebra.contracts import (
    Semigroup,
    Monoid,
    Semiring,
    has_identity,
    is_idempotent,
    is_commutative,
)
from algstruct.algebra.monoids import (
    SumMonoid,
    ProductMonoid,
    MinMonoid,
    MaxMonoid,
    AnyMonoid,
    AllMonoid,
    BitOrMonoid,
    BitAndMonoid,
    BitXorMonoid,
    ConcatMonoid,
    ProductOf,
    OptionMonoid,
    MappingMonoid,
)
from algstruct.algebra.semiring import (
    SemiringStructure,
    tropical_semiring,
    arctic_semiring,
    boolean_semiring,
    counting_semiring,
    bitwise_semiring,
)
from algstruct.algebra.gaussian import Gaussian, GaussianMonoid

__all__ = [
    "Semigroup",
    "Monoid",
    "Semiring",
    "has_identity",
    "is_idempotent",
    "is_commutative",
    "SumMonoid",
    "ProductMonoid",
    "MinMonoid",
    "MaxMonoid",
    "AnyMonoid",
    "AllMonoid",
    "BitOrMonoid",
    "BitAndMonoid",
    "BitXorMonoid",
    "ConcatMonoid",
    "ProductOf",
    "OptionMonoid",
    "MappingMonoid",
    "SemiringStructure",
    "tropical_semiring",
    "arctic_semiring",
    "boolean_semiring",
    "counting_semiring",
    "bitwise_semiring",
    "Gaussian",
    "GaussianMonoid",
]

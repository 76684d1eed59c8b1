"""
algstruct: Algebraic structure => computational benefit

Semigroups, monoids and semirings as plain value descriptors, plus
generic engines that rely only on their laws.

Key components:
- algebra: Structural contracts and the catalog of concrete structures
- engine: Reductions (sequential, tree, parallel, vectorized) and
          semiring closure of square relations
- errors: EmptyReductionError, DimensionMismatchError
"""

import logging

__version__ = "1.0.0"

from algstruct.algebra.contracts import Semigroup, Monoid, Semiring
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
from algstruct.engine.reduction import reduce, fold, reduce1, fold_map, power
from algstruct.engine.closure import close, shortest_paths, reachability, count_paths
from algstruct.errors import AlgebraError, EmptyReductionError, DimensionMismatchError

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Contracts
    "Semigroup",
    "Monoid",
    "Semiring",
    # Monoids
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
    "Gaussian",
    "GaussianMonoid",
    # Semirings
    "SemiringStructure",
    "tropical_semiring",
    "arctic_semiring",
    "boolean_semiring",
    "counting_semiring",
    "bitwise_semiring",
    # Engines
    "reduce",
    "fold",
    "reduce1",
    "fold_map",
    "power",
    "close",
    "shortest_paths",
    "reachability",
    "count_paths",
    # Errors
    "AlgebraError",
    "EmptyReductionError",
    "DimensionMismatchError",
]

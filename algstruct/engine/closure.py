"""
algstruct/engine/closure.py

Semiring closure of a square relation.

For an n x n relation R the closure is

    R+ = R ⊕ R² ⊕ ... ⊕ Rⁿ

with products taken in the semiring. The algorithm never looks at what
the semiring means; swapping it changes the question answered:

    tropical   all-pairs shortest distances
    boolean    all-pairs reachability
    counting   number of paths (acyclic input)

Strategies:
  - floyd_warshall: for each via-node k, R[i][j] ⊕= R[i][k] ⊗ R[k][j].
    Row k and column k are read from the previous iteration, so every
    cell update within one k is independent.
  - doubling: the exact series ⊕_{l=1..n} Rˡ by halving, O(log n)
    relation products.
  - iterate: S₁ = R, S_{m+1} = R ⊕ S_m ⊗ R for at most n - 1 steps,
    optionally stopping once a step changes nothing.

All three run a fixed, bounded number of steps. With a non-idempotent ⊕
and cycles the value is a truncation of an infinite sum, not a fixed
point; floyd_warshall and doubling may then disagree. Acyclic input or an
idempotent ⊕ with no improving cycles makes them agree.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

import numpy as np

from algstruct.algebra.contracts import Semiring, is_idempotent, ufunc_of
from algstruct.algebra.semiring import (
    boolean_semiring,
    counting_semiring,
    tropical_semiring,
)
from algstruct.engine.relation import (
    check_square,
    relation_product,
    relation_sum,
    to_lists,
)

logger = logging.getLogger(__name__)

STRATEGIES = ("floyd_warshall", "doubling", "iterate")


# ---------------------------------------------------------------------------
# Generic (scalar) path
# ---------------------------------------------------------------------------

def _supports_vectorized(sr: Semiring) -> bool:
    return ufunc_of(sr.additive) is not None and ufunc_of(sr.multiplicative) is not None


def _floyd_warshall_lists(sr: Semiring, R: List[List[Any]], n: int) -> List[List[Any]]:
    add = sr.additive.combine
    mul = sr.multiplicative.combine
    zero = sr.additive.identity()
    for k in range(n):
        row_k = list(R[k])
        col_k = [R[i][k] for i in range(n)]
        for i in range(n):
            r_ik = col_k[i]
            # 0 ⊗ x = 0 and a ⊕ 0 = a
            if r_ik == zero:
                continue
            row_i = R[i]
            for j in range(n):
                row_i[j] = add(row_i[j], mul(r_ik, row_k[j]))
    return R


def _series(
    R: Any,
    n: int,
    product: Callable[[Any, Any], Any],
    plus: Callable[[Any, Any], Any],
) -> Any:
    """⊕_{l=1..n} Rˡ, walking the bits of n from the top."""
    S, P = R, R  # S_1, R^1
    for bit in bin(n)[3:]:
        # m -> 2m: S_2m = S_m ⊕ R^m ⊗ S_m
        S = plus(S, product(P, S))
        P = product(P, P)
        if bit == "1":
            # m -> m + 1
            P = product(P, R)
            S = plus(S, P)
    return S


def _iterate(
    R: Any,
    n: int,
    product: Callable[[Any, Any], Any],
    plus: Callable[[Any, Any], Any],
    same: Callable[[Any, Any], bool],
    early_stop: bool,
) -> Any:
    S = R
    for step in range(1, n):
        nxt = plus(R, product(S, R))
        if early_stop and same(nxt, S):
            logger.debug("close: fixed point after %d of %d steps", step, n - 1)
            return nxt
        S = nxt
    return S


def _close_lists(sr: Semiring, R: List[List[Any]], n: int, strategy: str, early_stop: bool) -> List[List[Any]]:
    if strategy == "floyd_warshall":
        return _floyd_warshall_lists(sr, R, n)

    def product(a, b):
        return relation_product(sr, a, b)

    def plus(a, b):
        return relation_sum(sr, a, b)

    if strategy == "doubling":
        return _series(R, n, product, plus)
    return _iterate(R, n, product, plus, lambda a, b: a == b, early_stop)


# ---------------------------------------------------------------------------
# Vectorized path (numpy ufuncs)
# ---------------------------------------------------------------------------

def _close_array(sr: Semiring, R: np.ndarray, n: int, strategy: str, early_stop: bool) -> np.ndarray:
    add = ufunc_of(sr.additive)
    mul = ufunc_of(sr.multiplicative)

    if strategy == "floyd_warshall":
        for k in range(n):
            col = R[:, k].copy()
            row = R[k, :].copy()
            add(R, mul(col[:, None], row[None, :]), out=R)
        return R

    def product(a, b):
        # (n, n, 1) ⊗ (1, n, n) -> ⊕ over the middle axis
        return add.reduce(mul(a[:, :, None], b[None, :, :]), axis=1).astype(R.dtype, copy=False)

    def plus(a, b):
        return add(a, b)

    if strategy == "doubling":
        return _series(R, n, product, plus)
    return _iterate(R, n, product, plus, np.array_equal, early_stop)


def _add_one_to_diagonal(sr: Semiring, R: Any, n: int) -> None:
    one = sr.multiplicative.identity()
    if isinstance(R, np.ndarray):
        idx = np.arange(n)
        R[idx, idx] = ufunc_of(sr.additive)(R[idx, idx], one)
        return
    for i in range(n):
        R[i][i] = sr.additive.combine(R[i][i], one)


def _write_back(target: Any, result: Any, n: int) -> Any:
    if isinstance(target, np.ndarray):
        if isinstance(result, np.ndarray):
            target[...] = result
            return target
        for i in range(n):
            for j in range(n):
                target[i, j] = result[i][j]
        return target
    for i in range(n):
        for j in range(n):
            target[i][j] = result[i][j]
    return target


def close(
    semiring: Semiring,
    relation: Any,
    *,
    strategy: str = "floyd_warshall",
    in_place: bool = False,
    reflexive: bool = False,
    early_stop: Optional[bool] = None,
) -> Any:
    """
    Semiring closure R ⊕ R² ⊕ ... ⊕ Rⁿ of a square relation.

    Args:
        semiring: Any semiring (SemiringStructure or compatible)
        relation: n x n list of rows or 2-d ndarray
        strategy: One of STRATEGIES
        in_place: Write the result into relation and return it; relation
                  must be mutable (list of lists or ndarray)
        reflexive: ⊕ one into the diagonal of the result (count the
                   length-zero path; Kleene star for idempotent ⊕)
        early_stop: For "iterate", stop at the first step that changes
                    nothing. None means: only if ⊕ is idempotent.

    Returns:
        The closed relation; an ndarray for ndarray input, otherwise a
        list of lists

    Raises:
        DimensionMismatchError: relation is not square
        ValueError: unknown strategy
    """
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown closure strategy: {strategy!r} (expected one of {STRATEGIES})")

    n = check_square(relation)
    if early_stop is None:
        early_stop = is_idempotent(semiring.additive)

    is_array = isinstance(relation, np.ndarray)
    vectorized = is_array and _supports_vectorized(semiring)
    logger.debug(
        "close: %s %dx%d via %s (%s)",
        getattr(semiring, "name", type(semiring).__name__),
        n,
        n,
        strategy,
        "vectorized" if vectorized else "generic",
    )

    if vectorized:
        work = relation if in_place else relation.copy()
        result = _close_array(semiring, work, n, strategy, early_stop)
    else:
        work = relation if (in_place and not is_array) else to_lists(relation)
        result = _close_lists(semiring, work, n, strategy, early_stop)

    if reflexive:
        _add_one_to_diagonal(semiring, result, n)

    if in_place:
        if result is relation:
            return relation
        return _write_back(relation, result, n)
    if is_array and not vectorized:
        out = np.empty(relation.shape, dtype=relation.dtype)
        return _write_back(out, result, n)
    return result


def shortest_paths(relation: Any, *, strategy: str = "floyd_warshall") -> Any:
    """All-pairs shortest distances; missing edges are +inf, the diagonal is 0."""
    return close(tropical_semiring(), relation, strategy=strategy, reflexive=True)


def reachability(relation: Any, *, reflexive: bool = True, strategy: str = "floyd_warshall") -> Any:
    """All-pairs reachability; every node reaches itself when reflexive."""
    return close(boolean_semiring(), relation, strategy=strategy, reflexive=reflexive)


def count_paths(relation: Any, *, strategy: str = "floyd_warshall") -> Any:
    """Number of paths of length >= 1 between every pair of an acyclic relation."""
    return close(counting_semiring(), relation, strategy=strategy)

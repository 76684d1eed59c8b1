"""
algstruct/engine/reduction.py

Structure-aware reduction.

Associativity lets the engine pick any grouping of a reduction and still
match the canonical left fold:

    sequential:  ((((e · x0) · x1) · x2) · x3)
    tree:        ((x0 · x1) · (x2 · x3))
    parallel:    contiguous chunks folded on worker threads, then the
                 partials combined in chunk order
    vectorized:  numpy ufunc.reduce along axis 0 for ndarray input, a left
                 fold for anything else

Commutativity is never assumed: every strategy keeps left-to-right order
across chunk boundaries, so concatenation-like structures are safe.

Empty input needs an identity. Structures without identity() are reduced
only over non-empty input; otherwise EmptyReductionError is raised.
"""

from __future__ import annotations

import collections.abc
import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple, TypeVar

import numpy as np

from algstruct.algebra.contracts import Monoid, Semigroup, has_identity, ufunc_of
from algstruct.errors import EmptyReductionError

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")

DEFAULT_CHUNK_SIZE = 1024
STRATEGIES = ("sequential", "tree", "parallel", "vectorized")


def _as_sequence(elements: Iterable[T]) -> Sequence[T]:
    if isinstance(elements, (collections.abc.Sequence, np.ndarray)):
        return elements
    return list(elements)


def _empty_result(structure: Semigroup, op: str) -> Any:
    if has_identity(structure):
        return structure.identity()
    raise EmptyReductionError(
        f"{op}: empty input and {type(structure).__name__} has no identity"
    )


def _fold_range(combine: Callable[[T, T], T], xs: Sequence[T], lo: int, hi: int) -> T:
    """Left fold of the non-empty range xs[lo:hi]."""
    acc = xs[lo]
    for i in range(lo + 1, hi):
        acc = combine(acc, xs[i])
    return acc


def _tree_range(combine: Callable[[T, T], T], xs: Sequence[T], lo: int, hi: int) -> T:
    """Balanced pairwise combination of the non-empty range xs[lo:hi]."""
    if hi - lo == 1:
        return xs[lo]
    mid = (lo + hi) // 2
    return combine(_tree_range(combine, xs, lo, mid), _tree_range(combine, xs, mid, hi))


def fold(monoid: Monoid[T], elements: Iterable[T]) -> T:
    """Canonical left fold starting from the identity."""
    acc = monoid.identity()
    for x in elements:
        acc = monoid.combine(acc, x)
    return acc


def reduce1(semigroup: Semigroup[T], elements: Iterable[T]) -> T:
    """
    Left fold without an identity.

    Raises:
        EmptyReductionError: if elements is empty
    """
    it = iter(elements)
    try:
        acc = next(it)
    except StopIteration:
        raise EmptyReductionError(
            f"reduce1: empty input and {type(semigroup).__name__} has no identity"
        ) from None
    for x in it:
        acc = semigroup.combine(acc, x)
    return acc


def fold_map(monoid: Monoid[U], elements: Iterable[T], f: Callable[[T], U]) -> U:
    """Map each element into the monoid and fold the images."""
    return fold(monoid, map(f, elements))


def tree_reduce(structure: Semigroup[T], elements: Iterable[T]) -> T:
    """Divide-and-conquer reduction over the index range."""
    xs = _as_sequence(elements)
    if len(xs) == 0:
        return _empty_result(structure, "tree_reduce")
    return _tree_range(structure.combine, xs, 0, len(xs))


def _chunk_bounds(n: int, chunk_size: int) -> List[Tuple[int, int]]:
    return [(lo, min(lo + chunk_size, n)) for lo in range(0, n, chunk_size)]


def parallel_reduce(
    structure: Semigroup[T],
    elements: Iterable[T],
    *,
    chunk_size: Optional[int] = None,
    max_workers: Optional[int] = None,
    executor: Optional[Executor] = None,
) -> T:
    """
    Reduce contiguous chunks concurrently, then combine the partials.

    Workers share nothing but the (immutable) structure and read-only slices
    of the input. Partials are joined before combining and are combined in
    chunk order, so chunk i always lands left of chunk i+1.

    Args:
        structure: Semigroup or monoid to reduce under
        elements: Finite input; materialized if not already a sequence
        chunk_size: Elements per worker task (default DEFAULT_CHUNK_SIZE)
        max_workers: Thread count for the internal pool
        executor: Run tasks on this executor instead of an internal pool

    Returns:
        Value equal to the left fold of elements
    """
    if chunk_size is None:
        chunk_size = DEFAULT_CHUNK_SIZE
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")

    xs = _as_sequence(elements)
    n = len(xs)
    if n == 0:
        return _empty_result(structure, "parallel_reduce")

    combine = structure.combine
    bounds = _chunk_bounds(n, chunk_size)
    if len(bounds) == 1:
        return _fold_range(combine, xs, 0, n)

    def work(span: Tuple[int, int]) -> T:
        return _fold_range(combine, xs, span[0], span[1])

    logger.debug("parallel_reduce: %d elements in %d chunks of <= %d", n, len(bounds), chunk_size)
    if executor is not None:
        futures = [executor.submit(work, span) for span in bounds]
        partials = [f.result() for f in futures]
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            partials = list(pool.map(work, bounds))

    return _tree_range(combine, partials, 0, len(partials))


def _reduce_kwargs(structure: Semigroup, arr: np.ndarray) -> dict:
    """Start ufunc.reduce from the identity when it casts to the array dtype."""
    if not has_identity(structure):
        return {}
    e = structure.identity()
    if not np.can_cast(np.min_scalar_type(e), arr.dtype, casting="safe"):
        return {}
    return {"initial": e}


def vectorized_reduce(structure: Semigroup[T], array: Any) -> Any:
    """
    Reduce a numpy array along axis 0 with the structure's ufunc.

    Only ndarray input takes the ufunc path, started from the identity when
    one exists. Any other input, or a structure without a ufunc, is left
    folded over its original elements.
    """
    if not isinstance(array, (np.ndarray, np.generic)):
        if has_identity(structure):
            return fold(structure, array)
        return reduce1(structure, array)

    if array.ndim == 0:
        raise ValueError("vectorized_reduce expects at least a 1-d array")
    if array.shape[0] == 0:
        return _empty_result(structure, "vectorized_reduce")

    uf = ufunc_of(structure)
    if uf is None:
        logger.debug("vectorized_reduce: %s has no ufunc, folding", type(structure).__name__)
        return reduce1(structure, array)
    return uf.reduce(array, axis=0, **_reduce_kwargs(structure, array))


def reduce(
    structure: Semigroup[T],
    elements: Iterable[T],
    *,
    strategy: str = "sequential",
    chunk_size: Optional[int] = None,
    max_workers: Optional[int] = None,
    executor: Optional[Executor] = None,
) -> T:
    """
    Combine all elements under structure.

    Every strategy returns a value equal (under the structure's equality)
    to the left fold; they differ only in evaluation shape.

    Args:
        structure: Monoid, or a bare semigroup for non-empty input
        elements: Finite ordered input, possibly empty
        strategy: One of STRATEGIES
        chunk_size, max_workers, executor: Passed to parallel_reduce

    Returns:
        The combined value; identity() for empty input under a monoid

    Raises:
        EmptyReductionError: empty input and no identity
        ValueError: unknown strategy
    """
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown reduction strategy: {strategy!r} (expected one of {STRATEGIES})")

    if strategy == "sequential":
        if has_identity(structure):
            return fold(structure, elements)
        return reduce1(structure, elements)
    if strategy == "tree":
        return tree_reduce(structure, elements)
    if strategy == "parallel":
        return parallel_reduce(
            structure,
            elements,
            chunk_size=chunk_size,
            max_workers=max_workers,
            executor=executor,
        )
    return vectorized_reduce(structure, elements)


def power(structure: Semigroup[T], x: T, n: int) -> T:
    """
    Combine x with itself n times by repeated squaring.

    Uses O(log n) combines. n == 0 yields the identity, so it needs a
    monoid.

    Raises:
        ValueError: n < 0
        EmptyReductionError: n == 0 and structure has no identity
    """
    if n < 0:
        raise ValueError(f"power exponent must be >= 0, got {n}")
    if n == 0:
        return _empty_result(structure, "power")

    acc = None
    base = x
    while n:
        if n & 1:
            acc = base if acc is None else structure.combine(acc, base)
        n >>= 1
        if n:
            base = structure.combine(base, base)
    return acc

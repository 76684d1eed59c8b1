"""
algstruct/engine/relation.py

Square relations over a semiring carrier.

A relation is either a list of equal-length row lists or a 2-d numpy
array. Entry [i][j] is the semiring value attached to the step i -> j;
the additive identity (zero) means "no step".

Key operations:
  - check_square: validate shape, return n
  - identity_relation: one on the diagonal, zero elsewhere
  - relation_product: ⊕/⊗ matrix product, each cell a Monoid reduction
  - relation_power: k-fold product by repeated squaring
  - relation_from_edges / relation_from_graph / relation_from_sparse:
    build relations from edge lists, networkx graphs and scipy.sparse
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, Iterable, List, Optional, Sequence, Tuple, Union

import networkx as nx
import numpy as np
import scipy.sparse as sp

from algstruct.algebra.contracts import Semiring
from algstruct.engine.reduction import fold, power
from algstruct.errors import DimensionMismatchError

Relation = Union[List[List[Any]], np.ndarray]


def relation_shape(relation: Any) -> Tuple[int, int]:
    """
    Returns (rows, cols) of a relation.

    Raises:
        DimensionMismatchError: ragged rows or an array that is not 2-d
    """
    if isinstance(relation, np.ndarray):
        if relation.ndim != 2:
            raise DimensionMismatchError(f"relation must be 2-d, got ndim={relation.ndim}")
        return int(relation.shape[0]), int(relation.shape[1])

    rows = len(relation)
    if rows == 0:
        return 0, 0
    widths = {len(row) for row in relation}
    if len(widths) != 1:
        raise DimensionMismatchError(f"ragged relation: row lengths {sorted(widths)}")
    return rows, widths.pop()


def check_square(relation: Any) -> int:
    """Returns n for an n x n relation, else raises DimensionMismatchError."""
    rows, cols = relation_shape(relation)
    if rows != cols:
        raise DimensionMismatchError(f"relation must be square, got {rows}x{cols}")
    return rows


def to_lists(relation: Any) -> List[List[Any]]:
    """Fresh list-of-lists copy of a relation."""
    if isinstance(relation, np.ndarray):
        return relation.tolist()
    return [list(row) for row in relation]


def identity_relation(semiring: Semiring, n: int) -> List[List[Any]]:
    """Multiplicative identity of n x n relations."""
    zero = semiring.additive.identity()
    one = semiring.multiplicative.identity()
    return [[one if i == j else zero for j in range(n)] for i in range(n)]


def relation_sum(semiring: Semiring, a: Any, b: Any) -> List[List[Any]]:
    """Cellwise ⊕ of two relations of the same shape."""
    if relation_shape(a) != relation_shape(b):
        raise DimensionMismatchError(
            f"cannot add relations of shapes {relation_shape(a)} and {relation_shape(b)}"
        )
    add = semiring.additive.combine
    return [[add(x, y) for x, y in zip(row_a, row_b)] for row_a, row_b in zip(a, b)]


def relation_product(semiring: Semiring, a: Any, b: Any) -> List[List[Any]]:
    """
    Semiring matrix product.

        (A ⊗ B)[i][j] = ⊕_k A[i][k] ⊗ B[k][j]

    Each cell is a fold of the ⊗-products under the additive monoid, so an
    empty inner dimension yields zero.

    Raises:
        DimensionMismatchError: inner dimensions differ
    """
    n, k_a = relation_shape(a)
    k_b, m = relation_shape(b)
    if k_a != k_b:
        raise DimensionMismatchError(f"cannot multiply {n}x{k_a} by {k_b}x{m} relation")

    mul = semiring.multiplicative.combine
    additive = semiring.additive
    rows = [list(row) for row in a]
    cols = [[b[k][j] for k in range(k_b)] for j in range(m)]
    return [
        [fold(additive, (mul(x, y) for x, y in zip(row, col))) for col in cols]
        for row in rows
    ]


@dataclass(frozen=True)
class RelationMonoid:
    """n x n relations under the semiring product, identity the unit relation."""
    semiring: Semiring
    n: int

    def combine(self, a: Any, b: Any) -> List[List[Any]]:
        return relation_product(self.semiring, a, b)

    def identity(self) -> List[List[Any]]:
        return identity_relation(self.semiring, self.n)


def relation_power(semiring: Semiring, relation: Any, k: int) -> List[List[Any]]:
    """
    k-step composition of relation with itself (R^k).

    R^0 is the identity relation.
    """
    n = check_square(relation)
    return power(RelationMonoid(semiring, n), to_lists(relation), k)


def relation_from_edges(
    semiring: Semiring,
    n: int,
    edges: Iterable[Sequence[Any]],
    *,
    reflexive: bool = False,
) -> List[List[Any]]:
    """
    Build an n x n relation from an edge list.

    Args:
        semiring: Semiring supplying zero/one and ⊕
        n: Number of nodes (0..n-1)
        edges: (i, j) pairs valued one, or (i, j, value) triples;
               repeated edges are ⊕-combined
        reflexive: ⊕ one into every diagonal entry

    Raises:
        DimensionMismatchError: an edge endpoint outside 0..n-1
    """
    if n < 0:
        raise ValueError(f"relation size must be >= 0, got {n}")

    zero = semiring.additive.identity()
    one = semiring.multiplicative.identity()
    add = semiring.additive.combine
    out = [[zero] * n for _ in range(n)]

    for edge in edges:
        if len(edge) == 2:
            i, j = edge
            value = one
        elif len(edge) == 3:
            i, j, value = edge
        else:
            raise ValueError(f"edge must be (i, j) or (i, j, value), got {edge!r}")
        if not (0 <= i < n and 0 <= j < n):
            raise DimensionMismatchError(f"edge ({i}, {j}) outside {n}x{n} relation")
        out[i][j] = add(out[i][j], value)

    if reflexive:
        for i in range(n):
            out[i][i] = add(out[i][i], one)
    return out


def relation_from_graph(
    semiring: Semiring,
    graph: nx.Graph,
    *,
    weight: Optional[str] = None,
    nodelist: Optional[Sequence[Hashable]] = None,
    reflexive: bool = False,
) -> Tuple[List[List[Any]], List[Hashable]]:
    """
    Build a relation from a networkx graph.

    Undirected edges contribute both directions. Multigraph parallel
    edges are ⊕-combined. Edges touching nodes outside nodelist are
    ignored.

    Args:
        semiring: Semiring supplying zero/one and ⊕
        graph: Any networkx graph
        weight: Edge attribute holding the value; None (or a missing
                attribute) means one
        nodelist: Node order for rows/cols (default: graph.nodes order)
        reflexive: ⊕ one into every diagonal entry

    Returns:
        (relation, nodes) where nodes[i] labels row/col i
    """
    nodes = list(graph.nodes()) if nodelist is None else list(nodelist)
    index = {v: i for i, v in enumerate(nodes)}
    one = semiring.multiplicative.identity()
    directed = graph.is_directed()

    edges = []
    for u, v, data in graph.edges(data=True):
        if u not in index or v not in index:
            continue
        value = one if weight is None else data.get(weight, one)
        edges.append((index[u], index[v], value))
        if not directed and u != v:
            edges.append((index[v], index[u], value))

    return relation_from_edges(semiring, len(nodes), edges, reflexive=reflexive), nodes


def relation_to_graph(
    semiring: Semiring,
    relation: Any,
    *,
    nodelist: Optional[Sequence[Hashable]] = None,
    weight: str = "weight",
) -> nx.DiGraph:
    """
    Directed graph with an edge i -> j for every non-zero entry.

    The entry value is stored under the `weight` edge attribute.
    """
    n = check_square(relation)
    nodes = list(range(n)) if nodelist is None else list(nodelist)
    if len(nodes) != n:
        raise DimensionMismatchError(f"nodelist has {len(nodes)} nodes for a {n}x{n} relation")

    zero = semiring.additive.identity()
    g = nx.DiGraph()
    g.add_nodes_from(nodes)
    for i, row in enumerate(to_lists(relation)):
        for j, value in enumerate(row):
            if value != zero:
                g.add_edge(nodes[i], nodes[j], **{weight: value})
    return g


def relation_from_sparse(semiring: Semiring, matrix: Any) -> List[List[Any]]:
    """
    Dense relation from a square scipy.sparse matrix.

    Stored entries (explicit zeros included) become values; absent entries
    become the semiring zero. Duplicate COO entries are ⊕-combined.
    """
    if not sp.issparse(matrix):
        raise TypeError(f"expected a scipy.sparse matrix, got {type(matrix).__name__}")
    rows, cols = matrix.shape
    if rows != cols:
        raise DimensionMismatchError(f"relation must be square, got {rows}x{cols}")

    coo = sp.coo_matrix(matrix)
    edges = zip(coo.row.tolist(), coo.col.tolist(), coo.data.tolist())
    return relation_from_edges(semiring, rows, edges)

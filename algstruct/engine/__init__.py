"""
Engine module: generic reduction and semiring closure.
"""

from algstruct.engine.reduction import (
    DEFAULT_CHUNK_SIZE,
    fold,
    reduce1,
    fold_map,
    tree_reduce,
    parallel_reduce,
    vectorized_reduce,
    reduce,
    power,
)
from algstruct.engine.relation import (
    RelationMonoid,
    check_square,
    identity_relation,
    relation_product,
    relation_sum,
    relation_power,
    relation_from_edges,
    relation_from_graph,
    relation_from_sparse,
    relation_to_graph,
)
from algstruct.engine.closure import close, shortest_paths, reachability, count_paths

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "fold",
    "reduce1",
    "fold_map",
    "tree_reduce",
    "parallel_reduce",
    "vectorized_reduce",
    "reduce",
    "power",
    "RelationMonoid",
    "check_square",
    "identity_relation",
    "relation_product",
    "relation_sum",
    "relation_power",
    "relation_from_edges",
    "relation_from_graph",
    "relation_from_sparse",
    "relation_to_graph",
    "close",
    "shortest_paths",
    "reachability",
    "count_paths",
]

"""
Tests for the semiring closure engine.
"""

import copy
import logging

import networkx as nx
import numpy as np
import pytest
import scipy.sparse as sp
from scipy.sparse.csgraph import floyd_warshall

from algstruct.algebra.semiring import (
    SemiringStructure,
    arctic_semiring,
    bitwise_semiring,
    boolean_semiring,
    counting_semiring,
    tropical_semiring,
)
from algstruct.engine.closure import STRATEGIES, close, count_paths, reachability, shortest_paths
from algstruct.engine.relation import relation_from_edges, relation_from_graph
from algstruct.errors import DimensionMismatchError

INF = np.inf

# Weighted digraph with hand-computed distances.
WEIGHTED = [
    [INF, 3.0, INF, 7.0],
    [8.0, INF, 2.0, INF],
    [5.0, INF, INF, 1.0],
    [2.0, INF, INF, INF],
]
DISTANCES = [
    [0.0, 3.0, 5.0, 6.0],
    [5.0, 0.0, 2.0, 3.0],
    [3.0, 6.0, 0.0, 1.0],
    [2.0, 5.0, 7.0, 0.0],
]


def random_weighted(n, p, seed):
    g = nx.gnp_random_graph(n, p, seed=seed, directed=True)
    rng = np.random.default_rng(seed)
    for u, v in g.edges:
        g[u][v]["weight"] = float(rng.integers(1, 10))
    return g


def random_dag(n, p, seed):
    g = nx.gnp_random_graph(n, p, seed=seed, directed=True)
    return nx.DiGraph([(u, v) for u, v in g.edges if u < v])


@pytest.mark.parametrize("strategy", STRATEGIES)
class TestTropical:
    def test_hand_computed_lists(self, strategy):
        out = close(tropical_semiring(), WEIGHTED, strategy=strategy, reflexive=True)
        assert out == DISTANCES

    def test_hand_computed_array(self, strategy):
        out = close(tropical_semiring(), np.array(WEIGHTED), strategy=strategy, reflexive=True)
        assert isinstance(out, np.ndarray)
        assert out.tolist() == DISTANCES

    def test_matches_scipy(self, strategy):
        g = random_weighted(12, 0.2, seed=4)
        n = g.number_of_nodes()
        r, nodes = relation_from_graph(tropical_semiring(), g, weight="weight", nodelist=range(n))
        edges = list(g.edges(data="weight"))
        csr = sp.csr_matrix(
            ([w for _, _, w in edges], ([u for u, _, _ in edges], [v for _, v, _ in edges])),
            shape=(n, n),
        )
        expected = floyd_warshall(csr, directed=True)
        out = close(tropical_semiring(), np.array(r), strategy=strategy, reflexive=True)
        assert np.array_equal(out, expected)

    def test_idempotent(self, strategy):
        r = np.array(WEIGHTED)
        once = close(tropical_semiring(), r, strategy=strategy)
        twice = close(tropical_semiring(), once, strategy=strategy)
        assert np.array_equal(once, twice)


@pytest.mark.parametrize("strategy", STRATEGIES)
class TestBoolean:
    def test_disconnected_node(self, strategy):
        r = relation_from_edges(boolean_semiring(), 4, [(0, 1), (1, 2)])
        out = close(boolean_semiring(), r, strategy=strategy)
        assert out[0][2] == True
        assert out[2][0] == False
        assert [out[3][j] for j in range(4)] == [False] * 4
        assert [out[i][3] for i in range(4)] == [False] * 4

    def test_matches_networkx(self, strategy):
        g = nx.gnp_random_graph(10, 0.15, seed=1, directed=True)
        r, nodes = relation_from_graph(boolean_semiring(), g, nodelist=range(10))
        tc = nx.transitive_closure(g, reflexive=False)
        out = close(boolean_semiring(), np.array(r), strategy=strategy)
        for i in range(10):
            for j in range(10):
                assert bool(out[i, j]) == tc.has_edge(i, j), (i, j)

    def test_idempotent(self, strategy):
        g = nx.gnp_random_graph(10, 0.15, seed=2, directed=True)
        r, _ = relation_from_graph(boolean_semiring(), g, nodelist=range(10))
        once = close(boolean_semiring(), r, strategy=strategy)
        assert close(boolean_semiring(), once, strategy=strategy) == once

    def test_vectorized_matches_generic(self, strategy):
        g = nx.gnp_random_graph(9, 0.2, seed=5, directed=True)
        r, _ = relation_from_graph(boolean_semiring(), g, nodelist=range(9))
        generic = close(boolean_semiring(), r, strategy=strategy)
        vectorized = close(boolean_semiring(), np.array(r, dtype=bool), strategy=strategy)
        assert vectorized.tolist() == generic


@pytest.mark.parametrize("strategy", STRATEGIES)
class TestCounting:
    def test_diamond(self, strategy):
        r = relation_from_edges(counting_semiring(), 4, [(0, 1), (0, 2), (1, 3), (2, 3), (0, 3)])
        out = close(counting_semiring(), r, strategy=strategy)
        assert out[0][3] == 3
        assert out[1][3] == 1
        assert out[3][0] == 0

    def test_matches_simple_paths(self, strategy):
        g = random_dag(9, 0.4, seed=3)
        g.add_nodes_from(range(9))
        r, _ = relation_from_graph(counting_semiring(), g, nodelist=range(9))
        out = close(counting_semiring(), r, strategy=strategy)
        for s in range(9):
            for t in range(9):
                if s != t:
                    assert out[s][t] == len(list(nx.all_simple_paths(g, s, t))), (s, t)
                else:
                    assert out[s][t] == 0

    def test_vectorized_matches_generic(self, strategy):
        g = random_dag(8, 0.5, seed=6)
        g.add_nodes_from(range(8))
        r, _ = relation_from_graph(counting_semiring(), g, nodelist=range(8))
        generic = close(counting_semiring(), r, strategy=strategy)
        vectorized = close(counting_semiring(), np.array(r, dtype=np.int64), strategy=strategy)
        assert vectorized.tolist() == generic


class TestCycles:
    def test_counting_cycle_terminates_with_bounded_walks(self):
        # 0 <-> 1: walks of length 1..2
        r = [[0, 1], [1, 0]]
        for strategy in ("doubling", "iterate"):
            assert close(counting_semiring(), r, strategy=strategy) == [[1, 1], [1, 1]]
        # floyd_warshall runs its n passes and stops; the value is a truncation
        assert close(counting_semiring(), r, strategy="floyd_warshall") == [[1, 2], [2, 2]]
        arr = close(counting_semiring(), np.array(r, dtype=np.int64), strategy="floyd_warshall")
        assert arr.tolist() == [[1, 2], [2, 2]]

    def test_tropical_diagonal_is_shortest_cycle(self):
        out = close(tropical_semiring(), WEIGHTED)
        assert out[0][0] == 8.0  # 0 -> 1 -> 2 -> 3 -> 0
        assert out[3][3] == 8.0


class TestOtherSemirings:
    def test_arctic_longest_path(self):
        r = relation_from_edges(
            arctic_semiring(), 4, [(0, 1, 2.0), (0, 2, 5.0), (1, 3, 4.0), (2, 3, 1.0), (1, 2, 4.0)]
        )
        out = close(arctic_semiring(), r)
        assert out[0][3] == 7.0
        assert out[0][2] == 6.0
        assert out[3][0] == -INF

    def test_bitwise_runs_planes_in_parallel(self):
        bw = bitwise_semiring(width=2)
        plane0 = [(0, 1), (1, 2)]
        plane1 = [(2, 0)]
        edges = [(i, j, 0b01) for i, j in plane0] + [(i, j, 0b10) for i, j in plane1]
        out = close(bw, relation_from_edges(bw, 3, edges))

        b = boolean_semiring()
        c0 = close(b, relation_from_edges(b, 3, plane0))
        c1 = close(b, relation_from_edges(b, 3, plane1))
        for i in range(3):
            for j in range(3):
                assert bool(out[i][j] & 0b01) == c0[i][j]
                assert bool(out[i][j] & 0b10) == c1[i][j]

    def test_custom_semiring_on_array_uses_generic_path(self):
        class PlainMax:
            def combine(self, a, b):
                return max(a, b)

            def identity(self):
                return -INF

        class PlainMin:
            def combine(self, a, b):
                return min(a, b)

            def identity(self):
                return INF

        widest = SemiringStructure(name="BOTTLENECK", additive=PlainMax(), multiplicative=PlainMin())
        r = np.full((3, 3), -INF)
        r[0, 1], r[1, 2], r[0, 2] = 5.0, 3.0, 2.0
        for strategy in STRATEGIES:
            out = close(widest, r, strategy=strategy)
            assert isinstance(out, np.ndarray)
            assert out.dtype == r.dtype
            assert out[0, 2] == 3.0
            assert out[2, 0] == -INF
        assert r[0, 2] == 2.0


class TestOptions:
    def test_non_square_list(self):
        with pytest.raises(DimensionMismatchError):
            close(tropical_semiring(), [[INF] * 4 for _ in range(3)])

    def test_non_square_array(self):
        with pytest.raises(DimensionMismatchError):
            close(boolean_semiring(), np.zeros((3, 4), dtype=bool))

    def test_unknown_strategy(self):
        with pytest.raises(ValueError):
            close(boolean_semiring(), [[True]], strategy="magic")

    def test_empty_relation(self):
        assert close(boolean_semiring(), []) == []
        assert close(boolean_semiring(), np.zeros((0, 0), dtype=bool)).shape == (0, 0)

    def test_input_untouched_by_default(self):
        r = copy.deepcopy(WEIGHTED)
        close(tropical_semiring(), r)
        assert r == WEIGHTED
        arr = np.array(WEIGHTED)
        close(tropical_semiring(), arr)
        assert arr.tolist() == WEIGHTED

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_in_place_list(self, strategy):
        r = copy.deepcopy(WEIGHTED)
        out = close(tropical_semiring(), r, strategy=strategy, in_place=True, reflexive=True)
        assert out is r
        assert r == DISTANCES

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_in_place_array(self, strategy):
        r = np.array(WEIGHTED)
        out = close(tropical_semiring(), r, strategy=strategy, in_place=True, reflexive=True)
        assert out is r
        assert r.tolist() == DISTANCES

    def test_early_stop_logs_fixed_point(self, caplog):
        caplog.set_level(logging.DEBUG, logger="algstruct.engine.closure")
        r = relation_from_edges(boolean_semiring(), 6, [(0, 1), (1, 2)])
        out = close(boolean_semiring(), r, strategy="iterate")
        assert out[0][2] == True
        assert "fixed point" in caplog.text

    def test_early_stop_disabled(self, caplog):
        caplog.set_level(logging.DEBUG, logger="algstruct.engine.closure")
        r = relation_from_edges(boolean_semiring(), 6, [(0, 1), (1, 2)])
        close(boolean_semiring(), r, strategy="iterate", early_stop=False)
        assert "fixed point" not in caplog.text

    def test_early_stop_forced_on_acyclic_counting(self):
        r = relation_from_edges(counting_semiring(), 5, [(0, 1), (1, 2), (0, 2)])
        assert close(counting_semiring(), r, strategy="iterate", early_stop=True) == close(counting_semiring(), r)


class TestWrappers:
    def test_shortest_paths(self):
        assert shortest_paths(WEIGHTED) == DISTANCES

    def test_reachability(self):
        r = relation_from_edges(boolean_semiring(), 3, [(0, 1)])
        out = reachability(r)
        assert out[2][2] == True
        assert out[0][1] == True
        assert out[1][0] == False

    def test_count_paths(self):
        r = relation_from_edges(counting_semiring(), 3, [(0, 1), (1, 2), (0, 2)])
        assert count_paths(r)[0][2] == 2

"""Unit tests for tree index computation."""

import pytest
import numpy as np
import logging

from cpi_aggregation.data import FullCPIBase
from cpi_aggregation.tree import Item, Group, compute_index, compute_index_cached, find, iter_nodes
from cpi_aggregation.utils import getdates


class TestComputeIndex:
    """Test weighted aggregation of item indices."""

    def setup_method(self):
        ipc = np.array([
            [100.0, 100.0, 100.0],
            [110.0, 100.0, 120.0],
            [120.0, 105.0, 130.0]
        ])
        self.base = FullCPIBase(
            ipc, np.zeros_like(ipc), np.array([1.0, 3.0, 2.0]),
            getdates("2001-01-01", 3), codes=["_011101", "_011102", "_012101"]
        )
        self.a = Item("_011101", "A", 1.0)
        self.b = Item("_011102", "B", 3.0)
        self.c = Item("_012101", "C", 2.0)
        self.pair = Group.of("_011", "Pair", self.a, self.b)
        self.single = Group.of("_012", "Single", self.c)
        self.root = Group.of("_01", "Root", self.pair, self.single)

    def test_item_index(self):
        np.testing.assert_array_equal(compute_index(self.a, self.base), [100.0, 110.0, 120.0])

    def test_weighted_average(self):
        expected = (1.0 * self.base.ipc[:, 0] + 3.0 * self.base.ipc[:, 1]) / 4.0
        np.testing.assert_allclose(compute_index(self.pair, self.base), expected)

    def test_single_child_short_circuit(self):
        np.testing.assert_array_equal(
            compute_index(self.single, self.base), compute_index(self.c, self.base)
        )

    def test_results_do_not_alias_base(self):
        item_index = compute_index(self.a, self.base)
        group_index = compute_index(self.single, self.base)
        item_index *= 2
        group_index *= 2

        np.testing.assert_array_equal(self.base.ipc[:, 0], [100.0, 110.0, 120.0])
        np.testing.assert_array_equal(self.base.ipc[:, 2], [100.0, 120.0, 130.0])
        np.testing.assert_array_equal(compute_index(self.single, self.base), [100.0, 120.0, 130.0])

    def test_nested_weights(self):
        pair = compute_index(self.pair, self.base)
        expected = (4.0 * pair + 2.0 * self.base.ipc[:, 2]) / 6.0
        np.testing.assert_allclose(compute_index(self.root, self.base), expected)

    def test_not_found_propagates(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert compute_index(find(self.root, "_099"), self.base) is None
        assert "not available" in caplog.text

    def test_flat_items_stay_at_base(self, full_base, cpi_tree):
        np.testing.assert_allclose(compute_index(cpi_tree.tree["_01"], full_base), 100.0)


class TestComputeIndexCached:
    """Test memoized aggregation."""

    def setup_method(self):
        ipc = np.array([[100.0, 100.0], [110.0, 90.0]])
        self.base = FullCPIBase(
            ipc, np.zeros_like(ipc), np.array([1.0, 1.0]),
            getdates("2001-01-01", 2), codes=["_011101", "_011102"]
        )
        self.tree = Group.of(
            "_0", "IPC",
            Group.of("_011", "Pair", Item("_011101", "A", 1.0), Item("_011102", "B", 1.0))
        )

    def test_matches_uncached(self):
        cache = {}
        np.testing.assert_allclose(
            compute_index_cached(cache, self.tree, self.base),
            compute_index(self.tree, self.base)
        )

    def test_cache_complete(self, full_base, cpi_tree):
        cache = {}
        compute_index_cached(cache, cpi_tree.tree, full_base)

        nodes = list(iter_nodes(cpi_tree.tree))
        assert len(cache) == len(nodes)
        assert all(node.code in cache for node in nodes if isinstance(node, Group))

    def test_cached_values_reused(self):
        cache = {"_011": np.array([1.0, 2.0])}
        result = compute_index_cached(cache, self.tree, self.base)

        np.testing.assert_array_equal(result, [1.0, 2.0])
        assert "_011101" not in cache

    def test_item_entries_do_not_alias_base(self):
        cache = {}
        compute_index_cached(cache, self.tree, self.base)
        cache["_011101"][0] = -1.0
        assert self.base.ipc[0, 0] == 100.0

    def test_single_child_entry_does_not_alias_base(self):
        cache = {}
        tree = Group.of("_0", "IPC", Group.of("_012", "Single", Item("_011102", "B", 1.0)))
        compute_index_cached(cache, tree, self.base)
        cache["_012"] *= 2
        np.testing.assert_array_equal(self.base.ipc[:, 1], [100.0, 90.0])

    def test_not_found(self):
        cache = {}
        assert compute_index_cached(cache, None, self.base) is None
        assert cache == {}

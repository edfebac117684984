"""Tests for the phylogenetic tree catalog."""

import pytest
import sympy as sp

from linear_covariance.core.model import LinearCovarianceModel
from linear_covariance.models.trees import (
    tree,
    trees,
    tree_catalog,
    parse_topology,
    tree_covariance,
    normalize_id
)


class TestTreeLookup:
    """Test suite for tree()."""

    def test_documented_example(self, four_leaf_tree_matrix):
        model = tree("{{1, 2}, {3, 4}}")

        assert isinstance(model, LinearCovarianceModel)
        assert model.sigma == four_leaf_tree_matrix

    def test_whitespace_is_ignored(self, four_leaf_tree_matrix):
        assert tree("{{1,2},{3,4}}").sigma == four_leaf_tree_matrix

    def test_not_found(self):
        assert tree("nonexistent-id") is None
        assert tree("{{1, 2}, {3, 5}}") is None

    def test_caterpillar_three_leaves(self):
        t = sp.symbols('t1:6')
        expected = sp.Matrix([
            [t[0], t[3], t[4]],
            [t[3], t[1], t[4]],
            [t[4], t[4], t[2]],
        ])

        assert tree("{{1, 2}, 3}").sigma == expected

    def test_star_tree_shares_root_variable(self):
        sigma = tree("{1, 2, 3, 4}").sigma
        root = sp.Symbol('t5')

        for i in range(4):
            for j in range(4):
                if i != j:
                    assert sigma[i, j] == root

    def test_lookup_returns_same_instance(self):
        assert tree("{1, 2, 3}") is tree("{1,2,3}")


class TestTreesByLeafCount:
    """Test suite for trees(n)."""

    @pytest.mark.parametrize("n, expected", [(3, 2), (4, 5), (5, 12), (6, 6)])
    def test_catalog_counts(self, n, expected):
        assert len(trees(n)) == expected

    def test_unknown_leaf_count(self):
        assert trees(7) == []

    def test_entries_unpack_as_pairs(self):
        for tree_id, model in trees(4):
            assert model.n == 4
            assert tree(tree_id) is model

    def test_named_fields(self):
        entry = trees(3)[0]

        assert entry.id == "{1, 2, 3}"
        assert entry.tree.m == 4


class TestCatalog:
    """Test invariants of the whole catalog."""

    def test_ids_are_unique(self):
        ids = [normalize_id(entry.id) for entry in tree_catalog()]

        assert len(ids) == len(set(ids))

    def test_models_fit_ambient_space(self):
        for entry in tree_catalog():
            model = entry.tree
            assert model.n == entry.n
            assert entry.n < model.m <= 2 * entry.n - 1
            assert model.m <= model.ambient_dim

    def test_catalog_is_immutable(self):
        assert isinstance(tree_catalog(), tuple)


class TestParseTopology:
    """Test suite for the nested-set parser."""

    def test_nested(self):
        assert parse_topology("{{1, 2}, {3, 4}}") == ((1, 2), (3, 4))

    def test_single_leaf(self):
        assert parse_topology("1") == 1

    @pytest.mark.parametrize("tree_id", [
        "{1}",
        "{1, 1}",
        "{1, 3}",
        "{{1, 2}",
        "{1, 2}}",
        "{1 2}",
        "{a, b}",
        "",
    ])
    def test_invalid_ids_raise(self, tree_id):
        with pytest.raises(ValueError):
            parse_topology(tree_id)

    def test_tree_covariance_numbering(self):
        """Test post-order numbering of internal clades."""
        sigma = tree_covariance(parse_topology("{{{1, 2}, 3}, 4}")).sigma

        assert sigma[0, 1] == sp.Symbol('t5')
        assert sigma[0, 2] == sp.Symbol('t6')
        assert sigma[2, 3] == sp.Symbol('t7')

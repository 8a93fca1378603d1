"""tests/test_node.py — Unit tests for Node, NodeArena and split policies."""

import pytest
from mwtree.errors import InvalidConfiguration
from mwtree.node import Node, NodeArena
from mwtree.policy import CLASSIC, PLUS, STAR, Variant, policy_for
from mwtree.tree import construct


@pytest.fixture
def arena():
    return NodeArena()


class TestNode:
    def test_new_node_is_empty_leaf(self):
        n = Node(0)
        assert n.keys == []
        assert n.children == []
        assert n.parent is None
        assert n.next is None
        assert n.is_leaf
        assert not n.pivot

    def test_node_with_children_is_internal(self):
        n = Node(0)
        n.children = [1, 2]
        assert not n.is_leaf

    def test_one_key_is_not_full(self):
        n = Node(0)
        n.keys = [1]
        assert not n.is_full(3)

    def test_three_keys_is_not_full(self):
        n = Node(0)
        n.keys = [1, 2, 3]
        assert not n.is_full(3)

    def test_five_keys_is_full(self):
        n = Node(0)
        n.keys = [1, 2, 3, 4, 5]
        assert n.is_full(3)

    def test_full_threshold_degree_two(self):
        n = Node(0)
        n.keys = [1, 2]
        assert not n.is_full(2)
        n.keys.append(3)
        assert n.is_full(2)

    def test_slots_reject_unknown_attribute(self):
        with pytest.raises(AttributeError):
            Node(0).colour = "red"


class TestNodeArena:
    def test_ids_are_sequential(self, arena):
        a = arena.allocate()
        b = arena.allocate()
        assert (a.id, b.id) == (0, 1)
        assert len(arena) == 2

    def test_get_returns_same_node(self, arena):
        n = arena.allocate()
        assert arena[n.id] is n
        assert arena.get(n.id) is n

    def test_get_none(self, arena):
        assert arena.get(None) is None

    def test_out_of_range_raises(self, arena):
        arena.allocate()
        with pytest.raises(IndexError, match="out of range"):
            arena[5]
        with pytest.raises(IndexError):
            arena[-1]

    def test_allocate_pivot(self, arena):
        assert arena.allocate(pivot=True).pivot

    def test_iteration_in_allocation_order(self, arena):
        nodes = [arena.allocate() for _ in range(3)]
        assert list(arena) == nodes

    def test_tree_node_lookup_by_id(self):
        t = construct(2, "bplus")
        for k in (10, 20, 30):
            t.insert(k)
        assert t.node(t.root_id) is t.root
        for cid in t.root.children:
            assert t.node(cid).parent == t.root_id
        with pytest.raises(IndexError):
            t.node(len(t.arena))


class TestPolicy:
    def test_parse_names(self):
        assert Variant.parse("btree") is Variant.BTREE
        assert Variant.parse("BPLUS") is Variant.BPLUS
        assert Variant.parse(Variant.BSTAR) is Variant.BSTAR

    def test_parse_unknown_raises(self):
        with pytest.raises(InvalidConfiguration, match="Unknown tree variant"):
            Variant.parse("avl")

    def test_policy_for(self):
        assert policy_for("btree") is CLASSIC
        assert policy_for(Variant.BPLUS) is PLUS
        assert policy_for("bstar") is STAR

    def test_only_classic_splits_preemptively(self):
        assert CLASSIC.preemptive
        assert not PLUS.preemptive
        assert not STAR.preemptive

    def test_chained_variants(self):
        assert not CLASSIC.chain_leaves
        assert PLUS.chain_leaves and STAR.chain_leaves

    def test_star_switches(self):
        assert STAR.donate_first and STAR.three_way and STAR.binary_descent
        assert not PLUS.donate_first

    def test_min_keys(self):
        assert CLASSIC.min_keys(3) == 2
        assert PLUS.min_keys(4) == 2
        assert STAR.min_keys(3) == 2
        assert STAR.min_keys(4) == 3

    def test_policy_is_frozen(self):
        with pytest.raises(AttributeError):
            CLASSIC.preemptive = False

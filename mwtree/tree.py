"""
mwtree/tree.py
MultiwayTree: one tree class for all three variants.

The variant is a SplitPolicy value chosen at construction time:

  construct(3)              → classic B-tree, degree 3
  construct(3, "bplus")     → B+-tree (keys in chained leaves)
  construct(3, "bstar")     → B*-tree (donate first, three-way splits)

All variants share the same Node shape stored in a NodeArena; only the
overflow handling and the search path differ.
"""

from __future__ import annotations
import logging
from typing import Any, Iterator

from mwtree import classic, leafchain, star
from mwtree.errors import InvalidConfiguration
from mwtree.node import Node, NodeArena
from mwtree.policy import CLASSIC, SplitPolicy, Variant, policy_for
from mwtree.render import render as render_tree

logger = logging.getLogger(__name__)


class MultiwayTree:
    """
    Balanced multi-way search tree over bare comparable keys.

    Keys form a multiset: inserting a key twice stores it twice.
    delete() is the simplified leaf-only removal; it never rebalances.
    """

    def __init__(self, degree: int = 3, policy: SplitPolicy = CLASSIC) -> None:
        if isinstance(degree, bool) or not isinstance(degree, int):
            raise InvalidConfiguration(f"degree must be an integer, got {type(degree).__name__}")
        if degree < 2:
            raise InvalidConfiguration(f"degree must be >= 2, got {degree}")
        self._degree = degree
        self.policy = policy
        self.arena = NodeArena()
        self.root_id: int | None = None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def degree(self) -> int:
        return self._degree

    @property
    def variant(self) -> Variant:
        return self.policy.variant

    @property
    def min_keys(self) -> int:
        return self.policy.min_keys(self._degree)

    @property
    def root(self) -> Node | None:
        return self.arena.get(self.root_id)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def insert(self, key: Any) -> None:
        """Insert key. Always succeeds; duplicates are kept."""
        if self.root is None:
            root = self.arena.allocate()
            root.keys.append(key)
            self.root_id = root.id
            return

        if self.policy.preemptive:
            classic.insert(self, key)
            return

        leaf = leafchain.insert_into_leaf(self, key)
        if leaf.is_full(self._degree):
            self._handle_node_overflow(leaf)

    def search(self, key: Any) -> Node | None:
        """Return the node holding key, or None."""
        if self.root is None:
            return None
        if self.policy.chain_leaves:
            return leafchain.search(self, key)
        return classic.search(self, self.root, key)

    def delete(self, key: Any) -> bool:
        """
        Remove one occurrence of key if it is stored in a leaf.
        Returns True if a key was removed, False otherwise.
        """
        if self.root is None:
            return False
        if self.policy.chain_leaves:
            return leafchain.delete(self, key)
        return classic.delete(self, key)

    def all_keys(self) -> list[Any]:
        """Return every stored key in ascending order."""
        if self.root is None:
            return []
        if self.policy.chain_leaves:
            return [k for leaf in leafchain.iter_leaves(self) for k in leaf.keys]
        return classic.in_order(self, self.root)

    def range_scan(self, low: Any, high: Any) -> list[Any]:
        """Return all keys in [low, high] in ascending order."""
        if self.root is None:
            return []
        if self.policy.chain_leaves:
            return leafchain.range_scan(self, low, high)
        return [k for k in classic.in_order(self, self.root) if low <= k <= high]

    def leaves(self) -> Iterator[Node]:
        """Yield leaves left to right (leaf chain order for chained variants)."""
        if self.root is None:
            return
        if self.policy.chain_leaves:
            yield from leafchain.iter_leaves(self)
            return
        stack = [self.root]
        while stack:
            node = stack.pop()
            if node.is_leaf:
                yield node
            else:
                stack.extend(self.children_of(node)[::-1])

    def height(self) -> int:
        """Number of edges from the root to a leaf; 0 for a leaf root or empty tree."""
        node = self.root
        depth = 0
        while node is not None and not node.is_leaf:
            node = self.arena[node.children[0]]
            depth += 1
        return depth

    def node(self, node_id: int) -> Node:
        return self.arena[node_id]

    def children_of(self, node: Node) -> list[Node]:
        return [self.arena[cid] for cid in node.children]

    def render(self) -> str:
        return render_tree(self)

    def __len__(self) -> int:
        return len(self.all_keys())

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:  # pragma: no cover
        return f"MultiwayTree(degree={self._degree}, variant={self.variant.value!r})"

    # ------------------------------------------------------------------
    # Internal helpers — overflow
    # ------------------------------------------------------------------

    def _handle_node_overflow(self, leaf: Node) -> None:
        if self.policy.donate_first and star.try_redistribute(self, leaf):
            return
        if self.policy.three_way:
            star.perform_three_way_split(self, leaf)
        else:
            leafchain.split_leaf(self, leaf)


def construct(degree: int, variant: Variant | str = Variant.BTREE) -> MultiwayTree:
    """Build an empty tree of the given degree and variant."""
    tree = MultiwayTree(degree, policy_for(variant))
    logger.debug("constructed %r", tree)
    return tree

"""
mwtree/leafchain.py
Leaf-chained (B+ shape) machinery shared by the B+ and B* variants.

Every key lives in a leaf. Internal nodes hold separator keys:
  - a leaf split copies the first key of the new right leaf upward,
  - an internal split moves its true median upward (no copy stays below).

Routing rule: subtree i of an internal node holds keys k with
keys[i-1] <= k <= keys[i]. Descent sends a key equal to a separator to
the left; search then walks the leaf chain forward, which reaches every
copy of that key.

Leaves are linked in ascending key order through `next`. Pivot leaves
created by B* three-way splits are part of the chain and of their
parent's child list, but are skipped when routing.
"""

from __future__ import annotations
import bisect
import logging
from typing import TYPE_CHECKING, Any, Iterator

from mwtree.node import Node

if TYPE_CHECKING:
    from mwtree.tree import MultiwayTree

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Navigation
# ------------------------------------------------------------------

def routing_children(tree: MultiwayTree, node: Node) -> list[int]:
    """Child ids that separators route to (pivot leaves excluded)."""
    return [cid for cid in node.children if not tree.arena[cid].pivot]


def child_for(tree: MultiwayTree, node: Node, key: Any) -> Node:
    routes = routing_children(tree, node)
    if tree.policy.binary_descent:
        i = bisect.bisect_left(node.keys, key)
    else:
        i = 0
        while i < len(node.keys) and key > node.keys[i]:
            i += 1
    # Past the last separator → last routing child
    if i >= len(routes):
        i = len(routes) - 1
    return tree.arena[routes[i]]


def find_leaf(tree: MultiwayTree, key: Any) -> Node:
    """Descend from the root to the leftmost leaf that may hold key."""
    node = tree.root
    while not node.is_leaf:
        node = child_for(tree, node, key)
    return node


def leftmost_leaf(tree: MultiwayTree) -> Node:
    node = tree.root
    while not node.is_leaf:
        node = tree.arena[node.children[0]]
    return node


def iter_leaves(tree: MultiwayTree) -> Iterator[Node]:
    """Yield leaves in chain order."""
    node: Node | None = leftmost_leaf(tree)
    while node is not None:
        yield node
        node = tree.arena.get(node.next)


# ------------------------------------------------------------------
# Search / delete
# ------------------------------------------------------------------

def search(tree: MultiwayTree, key: Any) -> Node | None:
    """Return the first leaf in chain order that holds key, or None."""
    leaf: Node | None = find_leaf(tree, key)
    while leaf is not None:
        i = bisect.bisect_left(leaf.keys, key)
        if i < len(leaf.keys):
            return leaf if leaf.keys[i] == key else None
        leaf = tree.arena.get(leaf.next)
    return None


def delete(tree: MultiwayTree, key: Any) -> bool:
    """Remove one occurrence of key from its leaf; separators are left as-is."""
    leaf = search(tree, key)
    if leaf is None:
        return False
    leaf.keys.remove(key)
    return True


def range_scan(tree: MultiwayTree, low: Any, high: Any) -> list[Any]:
    """Return all keys in [low, high], walking the leaf chain."""
    result: list[Any] = []
    leaf: Node | None = find_leaf(tree, low)
    while leaf is not None:
        for k in leaf.keys:
            if k > high:
                return result
            if k >= low:
                result.append(k)
        leaf = tree.arena.get(leaf.next)
    return result


# ------------------------------------------------------------------
# Insert / overflow
# ------------------------------------------------------------------

def insert_into_leaf(tree: MultiwayTree, key: Any) -> Node:
    """Place key in its leaf and return that leaf (possibly now full)."""
    leaf = find_leaf(tree, key)
    bisect.insort(leaf.keys, key)
    return leaf


def split_leaf(tree: MultiwayTree, leaf: Node) -> None:
    """
    Two-way leaf split: the upper half moves to a new right leaf and a
    copy of its first key becomes the separator in the parent.
    """
    sibling = tree.arena.allocate()
    mid = len(leaf.keys) // 2
    sibling.keys = leaf.keys[mid:]
    leaf.keys = leaf.keys[:mid]

    # Maintain leaf linked-list
    sibling.next = leaf.next
    leaf.next = sibling.id

    logger.debug("leaf split %s | %s", leaf.keys, sibling.keys)
    attach_right(tree, leaf, sibling.keys[0], [sibling])


def split_internal(tree: MultiwayTree, node: Node) -> None:
    """
    Split an overflowing internal node around its median separator.
    The median moves up (it is not kept in either half); pivot leaves
    sitting next to the median stay with the left half.
    """
    routes = routing_children(tree, node)
    assert len(routes) == len(node.keys) + 1
    mid = len(node.keys) // 2
    median = node.keys[mid]
    cut = node.children.index(routes[mid + 1])

    sibling = tree.arena.allocate()
    sibling.keys = node.keys[mid + 1:]
    sibling.children = node.children[cut:]
    node.keys = node.keys[:mid]
    node.children = node.children[:cut]
    for cid in sibling.children:
        tree.arena[cid].parent = sibling.id

    logger.debug("internal split, median %r promoted", median)
    attach_right(tree, node, median, [sibling])


def attach_right(
    tree: MultiwayTree,
    node: Node,
    separator: Any,
    new_nodes: list[Node],
    key_index: int | None = None,
) -> None:
    """
    Hook new_nodes into node's parent immediately to the right of node,
    with separator inserted before the last of them. Grows a new root
    when node is the root, and splits the parent if it is now full.
    """
    parent = tree.arena.get(node.parent)
    if parent is None:
        root = tree.arena.allocate()
        root.keys = [separator]
        root.children = [node.id] + [n.id for n in new_nodes]
        for child in [node, *new_nodes]:
            child.parent = root.id
        tree.root_id = root.id
        logger.debug("new root %r with %d children", separator, len(root.children))
        return

    if key_index is None:
        key_index = routing_children(tree, parent).index(node.id)
    parent.keys.insert(key_index, separator)
    pos = parent.children.index(node.id)
    parent.children[pos + 1:pos + 1] = [n.id for n in new_nodes]
    for child in new_nodes:
        child.parent = parent.id

    if parent.is_full(tree.degree):
        split_internal(tree, parent)

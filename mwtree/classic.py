"""
mwtree/classic.py
Classic B-tree insertion and search.

Terminology:
  degree (t): minimum degree. A node is "full" when it has 2t-1 keys.

Insertion is single-pass: every full child met on the way down is split
before the descent enters it, so a split never has to propagate upward.
Keys live in internal nodes as well as in leaves.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Any

from mwtree.node import Node

if TYPE_CHECKING:
    from mwtree.tree import MultiwayTree

logger = logging.getLogger(__name__)


def insert(tree: MultiwayTree, key: Any) -> None:
    """Insert key into a non-empty classic tree."""
    root = tree.root
    if root.is_full(tree.degree):
        # Root is full → create a new root and split old root
        new_root = tree.arena.allocate()
        new_root.children.append(root.id)
        root.parent = new_root.id
        tree.root_id = new_root.id
        split_child(tree, new_root, 0)
        logger.debug("root split, new root #%d", new_root.id)
    insert_non_full(tree, tree.root, key)


def insert_non_full(tree: MultiwayTree, node: Node, key: Any) -> None:
    if node.is_leaf:
        # Shift larger keys right and drop key into the gap
        i = len(node.keys) - 1
        node.keys.append(key)
        while i >= 0 and key < node.keys[i]:
            node.keys[i + 1] = node.keys[i]
            i -= 1
        node.keys[i + 1] = key
        return

    # Find the child to descend into
    i = len(node.keys) - 1
    while i >= 0 and key < node.keys[i]:
        i -= 1
    i += 1
    if tree.arena[node.children[i]].is_full(tree.degree):
        split_child(tree, node, i)
        if key > node.keys[i]:
            i += 1
    insert_non_full(tree, tree.arena[node.children[i]], key)


def split_child(tree: MultiwayTree, parent: Node, index: int) -> None:
    """
    Split parent.children[index] (which is full) into two nodes.
    The median key moves up into parent at `index`; the new right
    sibling becomes parent.children[index + 1].
    """
    t = tree.degree
    child = tree.arena[parent.children[index]]
    assert len(child.keys) == 2 * t - 1, "split_child called on a non-full child"

    sibling = tree.arena.allocate()
    sibling.parent = parent.id
    median = child.keys[t - 1]

    sibling.keys = child.keys[t:]
    if not child.is_leaf:
        sibling.children = child.children[t:]
        child.children = child.children[:t]
        for cid in sibling.children:
            tree.arena[cid].parent = sibling.id
    child.keys = child.keys[:t - 1]

    parent.keys.insert(index, median)
    parent.children.insert(index + 1, sibling.id)

    assert len(child.keys) == len(sibling.keys) == t - 1
    assert child.is_leaf or len(child.children) == len(sibling.children) == t


def search(tree: MultiwayTree, node: Node, key: Any) -> Node | None:
    """Return the first node on the root-to-leaf path that holds key."""
    i = 0
    while i < len(node.keys) and key > node.keys[i]:
        i += 1
    if i < len(node.keys) and key == node.keys[i]:
        return node
    if node.is_leaf:
        return None
    return search(tree, tree.arena[node.children[i]], key)


def delete(tree: MultiwayTree, key: Any) -> bool:
    """
    Remove one occurrence of key if it sits in a leaf.

    A hit in an internal node is left alone: no borrow, merge or
    rotation is performed, so underflowing leaves are tolerated.
    """
    node = search(tree, tree.root, key)
    if node is None or not node.is_leaf:
        return False
    node.keys.remove(key)
    return True


def in_order(tree: MultiwayTree, node: Node) -> list[Any]:
    if node.is_leaf:
        return list(node.keys)
    keys: list[Any] = []
    for i, cid in enumerate(node.children):
        keys.extend(in_order(tree, tree.arena[cid]))
        if i < len(node.keys):
            keys.append(node.keys[i])
    return keys

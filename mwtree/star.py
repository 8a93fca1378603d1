"""
mwtree/star.py
B*-tree overflow resolution: donate to a sibling first, split three ways
only when no sibling has room.

Occupancy:
  min_keys  ceil(2t/3)
  capacity  2t-2 keys may rest in a node; reaching 2t-1 is an overflow

Three-way leaf split of keys [l0 .. lk, m, r0 .. rj]:

      parent: [... m ...]
              /    |    \\
    [l0 .. lk]    [m]    [r0 .. rj]
                 pivot

The pivot leaf keeps the promoted key at leaf level, so the leaf chain
still holds every key exactly once. A pivot is not routed to until a
neighbour donates keys into it; it then becomes an ordinary leaf with
its own separator.
"""

from __future__ import annotations
import bisect
import logging
from typing import TYPE_CHECKING

from mwtree.leafchain import attach_right, routing_children, split_internal
from mwtree.node import Node

if TYPE_CHECKING:
    from mwtree.tree import MultiwayTree

logger = logging.getLogger(__name__)


def capacity(degree: int) -> int:
    return 2 * degree - 2


# ------------------------------------------------------------------
# Redistribution
# ------------------------------------------------------------------

def transfer_count(tree: MultiwayTree, source: Node, target: Node) -> int:
    """
    Number of keys source can hand to target: bounded by source's
    surplus over the floor, target's free room, and what brings target
    up to half of the combined keys.

    The target bound is its free room below capacity (2t-2 keys), not its
    shortfall below min_keys.
    """
    surplus = len(source.keys) - tree.min_keys
    room = capacity(tree.degree) - len(target.keys)
    combined = len(source.keys) + len(target.keys)
    return max(0, min(surplus, room, combined // 2 - len(target.keys)))


def can_donate(tree: MultiwayTree, source: Node, target: Node) -> bool:
    return transfer_count(tree, source, target) > 0


def siblings(tree: MultiwayTree, node: Node) -> tuple[Node | None, Node | None]:
    """Immediate left and right neighbours of node under the same parent."""
    parent = tree.arena.get(node.parent)
    if parent is None:
        return None, None
    pos = parent.children.index(node.id)
    left = tree.arena[parent.children[pos - 1]] if pos > 0 else None
    right = tree.arena[parent.children[pos + 1]] if pos + 1 < len(parent.children) else None
    return left, right


def redistribute_keys(tree: MultiwayTree, source: Node, target: Node) -> int:
    """
    Move boundary keys from leaf source into its adjacent leaf target and
    fix the separators between them. Returns the number of keys moved.

    Siblings are neighbours in the leaf chain, so no `next` link changes.
    A pivot target becomes an ordinary leaf and gains its own separator,
    which may overflow the parent.
    """
    count = transfer_count(tree, source, target)
    assert count > 0, "redistribute_keys called without a viable donation"
    parent = tree.arena[source.parent]
    si = routing_children(tree, parent).index(source.id)
    to_left = parent.children.index(target.id) < parent.children.index(source.id)

    if to_left:
        # hand over our smallest keys
        target.keys.extend(source.keys[:count])
        del source.keys[:count]
    else:
        # hand over our largest keys
        target.keys[0:0] = source.keys[-count:]
        del source.keys[-count:]

    logger.debug("moved %d key(s) from node %d to node %d", count, source.id, target.id)

    if target.pivot:
        target.pivot = False
        # new boundary between the two leaves; the old one stays on the far side
        boundary = source.keys[0] if to_left else target.keys[0]
        parent.keys.insert(si, boundary)
        if parent.is_full(tree.degree):
            split_internal(tree, parent)
    elif to_left:
        parent.keys[si - 1] = source.keys[0]
    else:
        parent.keys[si] = target.keys[0]
    return count


def try_redistribute(tree: MultiwayTree, node: Node) -> bool:
    """Resolve an overflow by donation, left sibling first. False if no sibling has room."""
    for sibling in siblings(tree, node):
        if sibling is not None and can_donate(tree, node, sibling):
            redistribute_keys(tree, node, sibling)
            return True
    return False


# ------------------------------------------------------------------
# Three-way split
# ------------------------------------------------------------------

def perform_three_way_split(tree: MultiwayTree, leaf: Node) -> None:
    """Replace an overflowing leaf with left, pivot and right leaves."""
    mid = len(leaf.keys) // 2
    middle = leaf.keys[mid]

    pivot = tree.arena.allocate(pivot=True)
    pivot.keys = [middle]
    right = tree.arena.allocate()
    right.keys = leaf.keys[mid + 1:]
    leaf.keys = leaf.keys[:mid]

    # left → pivot → right → old successor
    right.next = leaf.next
    pivot.next = right.id
    leaf.next = pivot.id

    logger.debug("three-way split %s | %r | %s", leaf.keys, middle, right.keys)

    parent = tree.arena.get(leaf.parent)
    key_index = None
    if parent is not None:
        key_index = bisect.bisect_left(parent.keys, middle)
    attach_right(tree, leaf, middle, [pivot, right], key_index=key_index)

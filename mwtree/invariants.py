"""
mwtree/invariants.py
Structural checks for a MultiwayTree.

find_violations() walks the whole tree and returns a list of human
readable problems; an empty list means the tree is well formed.
Used by the test-suite and by the `check` command of the console.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Any

from mwtree.leafchain import routing_children
from mwtree.node import Node

if TYPE_CHECKING:
    from mwtree.tree import MultiwayTree


def find_violations(tree: MultiwayTree, check_floor: bool = True) -> list[str]:
    """
    Return every invariant violation found in tree.

    check_floor: also check the minimum occupancy of non-root nodes.
    Pivot leaves are exempt, as is every node of a degree-2 B*-tree.
    Pass False after deletes, which never refill underflowing leaves.
    """
    problems: list[str] = []
    root = tree.root
    if root is None:
        return problems
    if root.parent is not None:
        problems.append(f"root #{root.id} has parent #{root.parent}")

    leaf_depths: set[int] = set()
    dfs_leaves: list[Node] = []
    _check_node(tree, root, 0, check_floor, problems, leaf_depths, dfs_leaves)

    if len(leaf_depths) > 1:
        problems.append(f"leaves at different depths: {sorted(leaf_depths)}")

    if tree.policy.chain_leaves:
        _check_chain(tree, dfs_leaves, problems)
    else:
        keys = tree.all_keys()
        if keys != sorted(keys):
            problems.append("in-order traversal is not sorted")
    return problems


def _check_node(
    tree: MultiwayTree,
    node: Node,
    depth: int,
    check_floor: bool,
    problems: list[str],
    leaf_depths: set[int],
    dfs_leaves: list[Node],
) -> None:
    t = tree.degree
    is_root = node.id == tree.root_id

    if any(b < a for a, b in zip(node.keys, node.keys[1:])):
        problems.append(f"node #{node.id} keys not sorted: {node.keys}")
    if len(node.keys) > 2 * t - 1:
        problems.append(f"node #{node.id} holds {len(node.keys)} keys (max {2 * t - 1})")
    # degree-2 B* splits leave one-key halves, below ceil(4/3) = 2
    floor_applies = not (tree.policy.three_way and t == 2)
    if (
        check_floor
        and floor_applies
        and not is_root
        and not node.pivot
        and len(node.keys) < tree.min_keys
    ):
        problems.append(f"node #{node.id} holds {len(node.keys)} keys (min {tree.min_keys})")
    if node.pivot and not node.is_leaf:
        problems.append(f"pivot node #{node.id} is not a leaf")

    if node.is_leaf:
        leaf_depths.add(depth)
        dfs_leaves.append(node)
        return

    routes = routing_children(tree, node)
    if len(routes) != len(node.keys) + 1:
        problems.append(
            f"node #{node.id} has {len(node.keys)} keys but {len(routes)} routing children"
        )
    for i, cid in enumerate(routes):
        child = tree.arena[cid]
        low = node.keys[i - 1] if i > 0 else None
        high = node.keys[i] if i < len(node.keys) else None
        keys = _subtree_keys(tree, child)
        if keys and low is not None and min(keys) < low:
            problems.append(f"child #{cid} of #{node.id} holds {min(keys)!r} < separator {low!r}")
        if keys and high is not None and max(keys) > high:
            problems.append(f"child #{cid} of #{node.id} holds {max(keys)!r} > separator {high!r}")

    for cid in node.children:
        child = tree.arena[cid]
        if child.parent != node.id:
            problems.append(f"node #{cid} points to parent #{child.parent}, expected #{node.id}")
        _check_node(tree, child, depth + 1, check_floor, problems, leaf_depths, dfs_leaves)


def _subtree_keys(tree: MultiwayTree, node: Node) -> list[Any]:
    if node.is_leaf:
        return list(node.keys)
    if tree.policy.chain_leaves:
        # separators are copies; leaves hold the real keys
        return [k for cid in node.children for k in _subtree_keys(tree, tree.arena[cid])]
    keys = list(node.keys)
    for cid in node.children:
        keys.extend(_subtree_keys(tree, tree.arena[cid]))
    return keys


def _check_chain(tree: MultiwayTree, dfs_leaves: list[Node], problems: list[str]) -> None:
    chained: list[Node] = []
    seen: set[int] = set()
    node = dfs_leaves[0] if dfs_leaves else None
    while node is not None:
        if node.id in seen:
            problems.append(f"leaf chain loops back to #{node.id}")
            return
        seen.add(node.id)
        chained.append(node)
        node = tree.arena.get(node.next)

    if [n.id for n in chained] != [n.id for n in dfs_leaves]:
        problems.append(
            f"leaf chain {[n.id for n in chained]} does not match leaf order {[n.id for n in dfs_leaves]}"
        )
    keys = [k for leaf in chained for k in leaf.keys]
    if keys != sorted(keys):
        problems.append("leaf chain keys are not in ascending order")

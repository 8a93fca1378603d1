"""
mwtree/node.py
Node and NodeArena: the storage layer shared by every tree variant.

Nodes never hold references to each other. Parent, child and next-leaf
links are integer node ids resolved through the NodeArena that owns all
nodes of one tree, in the same way PageBTree-style nodes refer to each
other by page id.

Node fields:
  keys      ascending list of keys (duplicates allowed)
  children  child node ids; empty for a leaf
  parent    id of the parent node, None for the root
  next      id of the next leaf in key order (leaf-chained variants only)
  pivot     True for the single-key middle leaf of a three-way split
"""

from __future__ import annotations
from typing import Any, Iterator


class Node:
    """A single node of a multi-way search tree."""

    __slots__ = ("id", "keys", "children", "parent", "next", "pivot")

    def __init__(self, node_id: int, pivot: bool = False) -> None:
        self.id        : int          = node_id
        self.keys      : list[Any]    = []
        self.children  : list[int]    = []
        self.parent    : int | None   = None
        self.next      : int | None   = None
        self.pivot     : bool         = pivot

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def is_full(self, degree: int) -> bool:
        return len(self.keys) >= 2 * degree - 1

    def __repr__(self) -> str:  # pragma: no cover
        kind = "Leaf" if self.is_leaf else "Internal"
        if self.pivot:
            kind = "Pivot"
        return f"{kind}#{self.id}({self.keys})"


class NodeArena:
    """
    Owns every node of one tree and hands out stable integer ids.

    Ids are list indices and are never reused; the simplified delete
    never frees a node.
    """

    def __init__(self) -> None:
        self._nodes: list[Node] = []

    def allocate(self, pivot: bool = False) -> Node:
        """Create an empty node and return it."""
        node = Node(len(self._nodes), pivot=pivot)
        self._nodes.append(node)
        return node

    def get(self, node_id: int | None) -> Node | None:
        if node_id is None:
            return None
        return self._nodes[node_id]

    def __getitem__(self, node_id: int) -> Node:
        if not 0 <= node_id < len(self._nodes):
            raise IndexError(f"node id {node_id} out of range (allocated={len(self._nodes)})")
        return self._nodes[node_id]

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

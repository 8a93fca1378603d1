"""
mwtree/render.py
Text rendering of a tree, one node per line, depth-first:

  [30]
  ├─ [10, 20]
  ├─ [30]
  └─ [40, 50]

Every line ends with a newline. An empty tree renders as "Empty Tree".
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from mwtree.node import Node

if TYPE_CHECKING:
    from mwtree.tree import MultiwayTree

EMPTY = "Empty Tree"

_BRANCH = "├─ "
_LAST   = "└─ "
_PIPE   = "│  "
_BLANK  = "   "


def format_keys(node: Node) -> str:
    return "[" + ", ".join(str(k) for k in node.keys) + "]"


def render(tree: MultiwayTree) -> str:
    if tree.root is None:
        return EMPTY
    return render_node(tree, tree.root)


def render_node(tree: MultiwayTree, node: Node) -> str:
    """Render the subtree rooted at node."""
    lines: list[str] = []
    _render(tree, node, "", "", lines)
    return "".join(line + "\n" for line in lines)


def _render(tree: MultiwayTree, node: Node, prefix: str, child_prefix: str, lines: list[str]) -> None:
    lines.append(prefix + format_keys(node))
    children = tree.children_of(node)
    for i, child in enumerate(children):
        last = i == len(children) - 1
        _render(
            tree,
            child,
            child_prefix + (_LAST if last else _BRANCH),
            child_prefix + (_BLANK if last else _PIPE),
            lines,
        )

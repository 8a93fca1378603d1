"""tests/test_render.py — Unit tests for the tree text renderer."""

from mwtree.render import EMPTY, format_keys, render_node
from mwtree.tree import construct


class TestRender:
    def test_empty_tree(self):
        assert construct(3).render() == "Empty Tree"
        assert construct(3, "bplus").render() == EMPTY

    def test_single_leaf(self):
        t = construct(3)
        t.insert(7)
        assert t.render() == "[7]\n"

    def test_str_matches_render(self):
        t = construct(2)
        for k in (10, 20, 5, 6):
            t.insert(k)
        assert str(t) == t.render()

    def test_format_keys(self):
        t = construct(3)
        for k in (3, 1, 2):
            t.insert(k)
        assert format_keys(t.root) == "[1, 2, 3]"

    def test_nested_prefixes(self):
        t = construct(2, "bstar")
        for k in range(1, 7):
            t.insert(k)
        assert t.render() == (
            "[4]\n"
            "├─ [2]\n"
            "│  ├─ [1]\n"
            "│  └─ [2, 3]\n"
            "└─ [5]\n"
            "   ├─ [4]\n"
            "   ├─ [5]\n"
            "   └─ [6]\n"
        )

    def test_render_subtree(self):
        t = construct(2)
        for k in (10, 20, 5, 6):
            t.insert(k)
        left = t.children_of(t.root)[0]
        assert render_node(t, left) == "[5, 6]\n"

    def test_every_line_ends_with_newline(self):
        t = construct(2, "bplus")
        for k in range(30):
            t.insert(k)
        text = t.render()
        assert text.endswith("\n")
        assert all(line for line in text.split("\n")[:-1])

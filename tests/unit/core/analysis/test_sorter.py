from __future__ import annotations

"""
Unit tests for the Sibling Sorter.

Verifies directories-first ordering, case handling, stability on equal
names and per-level independence.
"""

from unittest.mock import patch

from zipscope.core.analysis.sorter import sort_siblings, sort_tree
from zipscope.core.analysis.tree_builder import build_tree
from zipscope.domain.tree_models import DirectoryNode, LeafNode


def _names(nodes):
    return [n.name for n in nodes]

# -----------------------------------------------------------------------------
# SIBLING ORDERING
# -----------------------------------------------------------------------------

def test_directories_precede_files() -> None:
    nodes = [
        LeafNode(name="a.txt", path="a.txt"),
        DirectoryNode(name="z", path="z"),
        LeafNode(name="b.txt", path="b.txt"),
        DirectoryNode(name="m", path="m"),
    ]

    sort_siblings(nodes)

    assert _names(nodes) == ["m", "z", "a.txt", "b.txt"]


def test_default_order_ignores_case() -> None:
    nodes = [
        LeafNode(name="beta", path="beta"),
        LeafNode(name="Alpha", path="Alpha"),
        LeafNode(name="alpha2", path="alpha2"),
        LeafNode(name="Gamma", path="Gamma"),
    ]

    sort_siblings(nodes)

    assert _names(nodes) == ["Alpha", "alpha2", "beta", "Gamma"]


def test_case_sensitive_order_uses_code_points() -> None:
    nodes = [LeafNode(name="beta", path="beta"), LeafNode(name="Gamma", path="Gamma")]

    sort_siblings(nodes, case_sensitive=True)

    assert _names(nodes) == ["Gamma", "beta"]


def test_case_variants_have_fixed_order() -> None:
    """Names equal after case folding fall back to the raw name."""
    first = [LeafNode(name="a", path="a"), LeafNode(name="A", path="A")]
    second = [LeafNode(name="A", path="A"), LeafNode(name="a", path="a")]

    assert _names(sort_siblings(first)) == _names(sort_siblings(second)) == ["A", "a"]


def test_equal_names_keep_encounter_order() -> None:
    """Duplicated entries stay in archive order after sorting."""
    first = LeafNode(name="x.txt", path="x.txt", raw_size=1)
    second = LeafNode(name="x.txt", path="x.txt", raw_size=2)
    nodes = [second, LeafNode(name="a", path="a"), first]

    sort_siblings(nodes)

    assert nodes[0].name == "a"
    assert nodes[1] is second
    assert nodes[2] is first


def test_sort_returns_same_list() -> None:
    nodes = [LeafNode(name="b", path="b")]
    assert sort_siblings(nodes) is nodes


def test_locale_aware_uses_strxfrm() -> None:
    nodes = [LeafNode(name="b", path="b"), LeafNode(name="a", path="a")]

    with patch("zipscope.core.analysis.sorter.locale.strxfrm", side_effect=lambda s: s) as mock_xfrm:
        sort_siblings(nodes, locale_aware=True)

    assert mock_xfrm.called
    assert _names(nodes) == ["a", "b"]

# -----------------------------------------------------------------------------
# TREE ORDERING
# -----------------------------------------------------------------------------

def test_sort_tree_orders_every_level(file_entry) -> None:
    tree = build_tree([
        file_entry("root.txt"),
        file_entry("src/z.py"),
        file_entry("src/a.py"),
        file_entry("src/lib/m.py"),
        file_entry("docs/index.md"),
    ])

    sort_tree(tree)

    assert _names(tree.top_level) == ["docs", "src", "root.txt"]
    assert _names(tree.folder_map["src"].children) == ["lib", "a.py", "z.py"]


def test_sort_tree_is_deterministic(file_entry) -> None:
    """Two builds from differently ordered input render identically after sorting."""
    paths = ["b/2.txt", "a/1.txt", "b/1.txt", "c.txt", "a/sub/x.txt"]
    forward = sort_tree(build_tree([file_entry(p) for p in paths]))
    backward = sort_tree(build_tree([file_entry(p) for p in reversed(paths)]))

    def flatten(nodes):
        out = []
        stack = list(reversed(nodes))
        while stack:
            node = stack.pop()
            out.append(node.path)
            if isinstance(node, DirectoryNode):
                stack.extend(reversed(node.children))
        return out

    assert flatten(forward.top_level) == flatten(backward.top_level)

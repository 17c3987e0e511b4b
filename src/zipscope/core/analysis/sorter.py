from __future__ import annotations

"""
Sibling Sorter.

Orders each sibling list of the archive tree: directories first, then by
name. Sorting is per level and never moves nodes across levels.
"""

import locale
from typing import Any, Callable, List, Tuple

from zipscope.domain.tree_models import ArchiveTree, Node


def sort_siblings(
        nodes: List[Node],
        *,
        case_sensitive: bool = False,
        locale_aware: bool = False,
) -> List[Node]:
    """
    Sort a sibling list in place and return it.

    Python's sort is stable, so nodes whose keys are fully equal (e.g.
    duplicate file paths) keep their archive encounter order.

    Args:
        nodes: Children of one directory, or the top-level list.
        case_sensitive: Compare names exactly instead of case-folded.
        locale_aware: Collate names with the active locale (locale.strxfrm).

    Returns:
        List[Node]: The same list object, now ordered.
    """
    nodes.sort(key=_make_sort_key(case_sensitive, locale_aware))
    return nodes


def sort_tree(
        tree: ArchiveTree,
        *,
        case_sensitive: bool = False,
        locale_aware: bool = False,
) -> ArchiveTree:
    """Sort the top-level list and every directory's children independently."""
    sort_siblings(tree.top_level, case_sensitive=case_sensitive, locale_aware=locale_aware)
    for folder in tree.folder_map.values():
        sort_siblings(folder.children, case_sensitive=case_sensitive, locale_aware=locale_aware)
    return tree


def _make_sort_key(case_sensitive: bool, locale_aware: bool) -> Callable[[Node], Tuple[Any, ...]]:
    collate: Callable[[str], Any] = locale.strxfrm if locale_aware else str

    def key(node: Node) -> Tuple[Any, ...]:
        primary = node.name if case_sensitive else node.name.casefold()
        # Raw name as secondary key keeps 'A' and 'a' in a fixed order
        return (not node.is_directory, collate(primary), node.name)

    return key

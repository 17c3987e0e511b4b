from __future__ import annotations

"""
Archive Tree Builder.

Reconstructs a folder hierarchy from the flat, order-dependent entry list
of an archive. Directories that the archive never declares are synthesized
from their descendants' paths, and every node lands in an arena addressed
by integer ids alongside two path indices (folders and files).
"""

import logging
from typing import Iterable, List, Optional, Tuple

from zipscope.domain.constants import (
    DEFAULT_DATE_FORMAT,
    DEFAULT_SIZE_PRECISION,
    PATH_SEPARATOR,
)
from zipscope.domain.tree_models import (
    ArchiveTree,
    DirectoryNode,
    LeafNode,
    Node,
    RawEntry,
)
from zipscope.utils.size_format import format_size

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_tree(
        raw_entries: Iterable[RawEntry],
        *,
        date_format: str = DEFAULT_DATE_FORMAT,
        size_precision: int = DEFAULT_SIZE_PRECISION,
        cache_content: bool = True,
) -> ArchiveTree:
    """
    Build the node tree and lookup indices from raw archive entries.

    Entry order is irrelevant: parents may appear before, after, or not at
    all. The result is neither aggregated nor sorted; see the aggregator and
    sorter modules for those passes.

    Args:
        raw_entries: Entries in archive order.
        date_format: strftime pattern for leaf modification times.
        size_precision: Significant digits for leaf size strings.
        cache_content: Whether leaves keep their bytes after the first read.

    Returns:
        ArchiveTree: Top-level list, folder map, file map and node arena.
    """
    builder = _TreeBuilder(date_format, size_precision, cache_content)

    # 1. Attach entries, synthesizing every missing ancestor
    builder.attach_entries(raw_entries)

    # 2. Link nested directories into their parents
    builder.link_directories()

    tree = builder.tree
    logger.debug(
        f"Tree built: {tree.file_count} files, {tree.folder_count} folders, "
        f"{len(tree.top_level)} top-level nodes."
    )
    return tree


def normalize_entry_path(path: str) -> str:
    """
    Canonicalize an archive path: drop empty components so that leading,
    trailing and doubled separators disappear ('a//b/' -> 'a/b').
    """
    return PATH_SEPARATOR.join(p for p in path.split(PATH_SEPARATOR) if p)


def split_entry_path(path: str) -> Tuple[str, str]:
    """Split a normalized path into (parent_path, name); parent is '' at depth 1."""
    parent, _, name = path.rpartition(PATH_SEPARATOR)
    return parent, name

# -----------------------------------------------------------------------------
# INTERNAL BUILDER
# -----------------------------------------------------------------------------

class _TreeBuilder:
    """Mutable state shared by both build phases."""

    def __init__(self, date_format: str, size_precision: int, cache_content: bool) -> None:
        self.tree = ArchiveTree()
        self._date_format = date_format
        self._precision = size_precision
        self._cache_content = cache_content

        # Nested directories awaiting linkage, in creation order
        self._pending: List[DirectoryNode] = []

    # -- Phase 1 ---------------------------------------------------------------

    def attach_entries(self, raw_entries: Iterable[RawEntry]) -> None:
        for entry in raw_entries:
            path = normalize_entry_path(entry.path)
            if not path:
                logger.debug(f"Skipping archive entry with empty path: {entry.path!r}")
                continue

            if entry.is_directory:
                self._ensure_directory(path)
                continue

            parent_path, name = split_entry_path(path)
            leaf = self._make_leaf(entry, path, name)

            if parent_path:
                parent = self._ensure_directory(parent_path)
                leaf.parent_id = parent.node_id
                parent.children.append(leaf)
            else:
                self.tree.top_level.append(leaf)

            self._register_leaf(leaf)

    def _ensure_directory(self, path: str) -> DirectoryNode:
        """
        Return the directory at path, creating it and any missing ancestors.

        Walks the ancestor chain upward until an existing folder (or the
        root) is reached, then creates the missing ones top-down.
        """
        existing = self.tree.folder_map.get(path)
        if existing is not None:
            return existing

        missing: List[str] = []
        current = path
        while current and current not in self.tree.folder_map:
            missing.append(current)
            current, _ = split_entry_path(current)

        for dir_path in reversed(missing):
            self._create_directory(dir_path)

        return self.tree.folder_map[path]

    def _create_directory(self, path: str) -> DirectoryNode:
        parent_path, name = split_entry_path(path)
        zero = format_size(0, self._precision)
        node = DirectoryNode(
            name=name,
            path=path,
            raw_size_display=zero,
            compressed_size_display=zero,
        )
        self._add_to_arena(node)

        if path in self.tree.file_map:
            logger.warning(
                f"Archive path '{path}' is both a file and a folder; "
                f"the folder takes precedence in the index."
            )
            del self.tree.file_map[path]

        self.tree.folder_map[path] = node
        if parent_path:
            self._pending.append(node)
        else:
            self.tree.top_level.append(node)
        return node

    def _make_leaf(self, entry: RawEntry, path: str, name: str) -> LeafNode:
        raw_size = int(entry.raw_size or 0)
        compressed_size = int(entry.compressed_size or 0)
        modified_display = ""
        if entry.modified_at is not None:
            modified_display = entry.modified_at.strftime(self._date_format)

        leaf = LeafNode(
            name=name,
            path=path,
            raw_size=raw_size,
            compressed_size=compressed_size,
            raw_size_display=format_size(raw_size, self._precision),
            compressed_size_display=format_size(compressed_size, self._precision),
            modified_at=entry.modified_at,
            modified_display=modified_display,
            content_accessor=entry.content_accessor,
            cache_content=self._cache_content,
        )
        self._add_to_arena(leaf)
        return leaf

    def _register_leaf(self, leaf: LeafNode) -> None:
        if leaf.path in self.tree.folder_map:
            logger.warning(
                f"Archive path '{leaf.path}' is both a file and a folder; "
                f"the file is kept in the tree but not indexed."
            )
            return

        if leaf.path in self.tree.file_map:
            logger.debug(f"Duplicate archive path '{leaf.path}': later entry wins.")
        self.tree.file_map[leaf.path] = leaf

    def _add_to_arena(self, node: Node) -> None:
        node.node_id = len(self.tree.nodes)
        self.tree.nodes.append(node)

    # -- Phase 2 ---------------------------------------------------------------

    def link_directories(self) -> None:
        """
        Attach each nested directory to its immediate parent.

        Phase 1 created every ancestor, so the parent lookup cannot miss.
        Depth-1 directories were already placed in the top-level list.
        """
        for node in self._pending:
            parent_path, _ = split_entry_path(node.path)
            parent = self._lookup_parent(parent_path)
            node.parent_id = parent.node_id
            parent.children.append(node)
        self._pending = []

    def _lookup_parent(self, parent_path: str) -> DirectoryNode:
        parent: Optional[DirectoryNode] = self.tree.folder_map.get(parent_path)
        if parent is None:
            raise RuntimeError(f"Ancestor '{parent_path}' missing after synthesis.")
        return parent

from __future__ import annotations

"""
Directory Size Aggregator.

Computes, for every directory, the total raw and compressed size of all
descendant files. Uses an explicit post-order work stack so that nesting
depth is bounded by heap memory rather than the interpreter call stack.
"""

import logging
from typing import Dict, List, Tuple

from zipscope.domain.constants import DEFAULT_SIZE_PRECISION
from zipscope.domain.tree_models import DirectoryNode
from zipscope.utils.size_format import format_size

logger = logging.getLogger(__name__)


def aggregate_sizes(
        folder_map: Dict[str, DirectoryNode],
        precision: int = DEFAULT_SIZE_PRECISION,
) -> None:
    """
    Populate aggregate sizes and display strings on every directory.

    Each directory is computed exactly once, strictly after all of its
    child directories. Directories contribute no size of their own.

    Args:
        folder_map: Every directory of the tree, keyed by path.
        precision: Significant digits for the display strings.
    """
    done = set()

    for root in folder_map.values():
        if id(root) in done:
            continue

        # (node, children_expanded) pairs; a node is summed on its second visit
        stack: List[Tuple[DirectoryNode, bool]] = [(root, False)]
        while stack:
            node, expanded = stack.pop()
            if id(node) in done:
                continue

            if not expanded:
                stack.append((node, True))
                for child in node.children:
                    if isinstance(child, DirectoryNode) and id(child) not in done:
                        stack.append((child, False))
                continue

            _sum_children(node, precision)
            done.add(id(node))

    logger.debug(f"Aggregated sizes for {len(done)} folders.")


def _sum_children(node: DirectoryNode, precision: int) -> None:
    """Sum immediate children; child directories already hold their totals."""
    raw_total = sum(child.raw_size for child in node.children)
    compressed_total = sum(child.compressed_size for child in node.children)

    node.raw_size = raw_total
    node.compressed_size = compressed_total
    node.raw_size_display = format_size(raw_total, precision)
    node.compressed_size_display = format_size(compressed_total, precision)

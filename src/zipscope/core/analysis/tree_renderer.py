from __future__ import annotations

"""
Tree Renderer.

Converts a built archive tree into an ASCII listing for terminals and into
plain dictionaries for JSON output. Sibling order is taken as-is, so the
tree is expected to be sorted already.
"""

from typing import Any, Dict, List

from zipscope.domain.tree_models import ArchiveTree, DirectoryNode, LeafNode, Node

# -----------------------------------------------------------------------------
# ASCII RENDERING
# -----------------------------------------------------------------------------

def render_tree_structure(
        nodes: List[Node],
        lines: List[str],
        prefix: str = "",
        show_sizes: bool = True,
) -> None:
    """
    Append one line per node to lines, walking directories depth-first.

    Uses standard ASCII connectors (├──, └──). Directories carry a trailing
    '/' and, like files, an optional '[raw / compressed]' size suffix.

    Args:
        nodes: Sibling list to render.
        lines: Accumulator for output strings.
        prefix: Indentation carried down from the parent level.
        show_sizes: Append display sizes to each line.
    """
    # (siblings, index, prefix) frames instead of recursion; archives can nest deeply
    stack = [(nodes, 0, prefix)]
    while stack:
        siblings, index, current_prefix = stack.pop()
        if index >= len(siblings):
            continue

        node = siblings[index]
        is_last = index == len(siblings) - 1
        connector = "└── " if is_last else "├── "
        lines.append(f"{current_prefix}{connector}{_label(node, show_sizes)}")

        stack.append((siblings, index + 1, current_prefix))
        if isinstance(node, DirectoryNode) and node.children:
            child_prefix = current_prefix + ("    " if is_last else "│   ")
            stack.append((node.children, 0, child_prefix))


def render_tree(tree: ArchiveTree, title: str = "", show_sizes: bool = True) -> List[str]:
    """Render a full tree, optionally headed by the archive name."""
    lines: List[str] = []
    if title:
        lines.append(title)
    render_tree_structure(tree.top_level, lines, show_sizes=show_sizes)
    return lines


def _label(node: Node, show_sizes: bool) -> str:
    name = f"{node.name}/" if node.is_directory else node.name
    if not show_sizes:
        return name
    return f"{name} [{node.raw_size_display} / {node.compressed_size_display}]"

# -----------------------------------------------------------------------------
# SERIALIZATION
# -----------------------------------------------------------------------------

def node_to_dict(node: Node) -> Dict[str, Any]:
    """Serialize a node and its subtree into JSON-compatible primitives."""
    out = _node_fields(node)
    if not isinstance(node, DirectoryNode):
        return out

    # Iterative copy: (source directory, target dict) pairs
    stack = [(node, out)]
    while stack:
        src, dst = stack.pop()
        dst["children"] = []
        for child in src.children:
            child_dict = _node_fields(child)
            dst["children"].append(child_dict)
            if isinstance(child, DirectoryNode):
                stack.append((child, child_dict))
    return out


def tree_to_dict(tree: ArchiveTree) -> Dict[str, Any]:
    """
    Serialize the whole tree plus its indices and summary counters.

    Returns:
        Dict[str, Any]: Keys 'files', 'folder_paths', 'file_paths', 'summary'.
    """
    return {
        "files": [node_to_dict(node) for node in tree.top_level],
        "folder_paths": sorted(tree.folder_map),
        "file_paths": sorted(tree.file_map),
        "summary": tree_summary(tree),
    }


def tree_summary(tree: ArchiveTree) -> Dict[str, Any]:
    return {
        "files": tree.file_count,
        "folders": tree.folder_count,
        "top_level": len(tree.top_level),
        "raw_size": tree.total_raw_size,
        "compressed_size": tree.total_compressed_size,
    }


def _node_fields(node: Node) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "name": node.name,
        "path": node.path,
        "is_directory": node.is_directory,
        "raw_size": node.raw_size,
        "compressed_size": node.compressed_size,
        "raw_size_display": node.raw_size_display,
        "compressed_size_display": node.compressed_size_display,
    }
    if isinstance(node, LeafNode):
        data["modified"] = node.modified_display
    return data

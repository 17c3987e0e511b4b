from __future__ import annotations

"""
Unit tests for Tree Rendering and Serialization.

Checks ASCII connectors, size labels and the JSON-ready dictionary form.
"""

import json

from zipscope.core.analysis.aggregator import aggregate_sizes
from zipscope.core.analysis.sorter import sort_tree
from zipscope.core.analysis.tree_builder import build_tree
from zipscope.core.analysis.tree_renderer import (
    node_to_dict,
    render_tree,
    render_tree_structure,
    tree_summary,
    tree_to_dict,
)


def _ready_tree(file_entry):
    tree = build_tree([
        file_entry("src/main.py", 2048, 1024),
        file_entry("src/util/helpers.py", 100, 60),
        file_entry("README.md", 10, 10),
    ])
    aggregate_sizes(tree.folder_map)
    return sort_tree(tree)

# -----------------------------------------------------------------------------
# ASCII RENDERING
# -----------------------------------------------------------------------------

def test_render_tree_structure_without_sizes(file_entry) -> None:
    tree = _ready_tree(file_entry)
    lines = []

    render_tree_structure(tree.top_level, lines, show_sizes=False)

    assert lines == [
        "├── src/",
        "│   ├── util/",
        "│   │   └── helpers.py",
        "│   └── main.py",
        "└── README.md",
    ]


def test_render_tree_includes_title_and_sizes(file_entry) -> None:
    tree = _ready_tree(file_entry)

    lines = render_tree(tree, title="project.zip")

    assert lines[0] == "project.zip"
    assert lines[1] == "├── src/ [2.1 KB / 1.06 KB]"
    assert lines[-1] == "└── README.md [10 B / 10 B]"


def test_render_empty_tree() -> None:
    tree = build_tree([])
    assert render_tree(tree) == []


def test_last_child_prefix_uses_spaces(file_entry) -> None:
    tree = sort_tree(build_tree([file_entry("only/inner/leaf.txt")]))

    lines = render_tree(tree, show_sizes=False)

    assert lines == [
        "└── only/",
        "    └── inner/",
        "        └── leaf.txt",
    ]

# -----------------------------------------------------------------------------
# SERIALIZATION
# -----------------------------------------------------------------------------

def test_node_to_dict_nests_children(file_entry) -> None:
    tree = _ready_tree(file_entry)

    data = node_to_dict(tree.folder_map["src"])

    assert data["is_directory"] is True
    assert data["raw_size"] == 2148
    assert [c["name"] for c in data["children"]] == ["util", "main.py"]
    assert data["children"][0]["children"][0]["path"] == "src/util/helpers.py"
    assert "modified" in data["children"][1]
    assert "children" not in data["children"][1]


def test_tree_to_dict_is_json_serializable(file_entry) -> None:
    tree = _ready_tree(file_entry)

    data = tree_to_dict(tree)
    encoded = json.dumps(data)

    assert json.loads(encoded)["folder_paths"] == ["src", "src/util"]
    assert data["file_paths"] == ["README.md", "src/main.py", "src/util/helpers.py"]
    assert [n["name"] for n in data["files"]] == ["src", "README.md"]


def test_tree_summary_counts(file_entry) -> None:
    tree = _ready_tree(file_entry)

    summary = tree_summary(tree)

    assert summary == {
        "files": 3,
        "folders": 2,
        "top_level": 2,
        "raw_size": 2158,
        "compressed_size": 1094,
    }

from __future__ import annotations

"""
ZipScope: browse the folder tree of a zip archive without extracting it.
"""

from zipscope.core.analysis.aggregator import aggregate_sizes
from zipscope.core.analysis.sorter import sort_siblings, sort_tree
from zipscope.core.analysis.tree_builder import build_tree
from zipscope.core.pipeline.engine import parse_archive_as_tree, run_pipeline
from zipscope.core.services.archive_session import ArchiveSession
from zipscope.domain.constants import APP_VERSION as __version__
from zipscope.domain.tree_models import ArchiveTree, DirectoryNode, LeafNode, RawEntry

__all__ = [
    "ArchiveSession",
    "ArchiveTree",
    "DirectoryNode",
    "LeafNode",
    "RawEntry",
    "aggregate_sizes",
    "build_tree",
    "parse_archive_as_tree",
    "run_pipeline",
    "sort_siblings",
    "sort_tree",
    "__version__",
]

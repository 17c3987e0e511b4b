from __future__ import annotations

"""
Archive Tree Data Models.

Provides the records exchanged between the archive reader and the tree
builder, the node types of the reconstructed hierarchy and the container
holding the final tree plus its lookup indices.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, Iterator, List, Optional, Union

ContentAccessor = Callable[[], bytes]

# -----------------------------------------------------------------------------
# READER OUTPUT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class RawEntry:
    """
    Immutable record describing one archive entry as decoded by the reader.

    Attributes:
        path: Archive-internal path, '/'-delimited, no leading slash.
        is_directory: True if the archive declares this entry a directory.
        raw_size: Uncompressed size in bytes.
        compressed_size: Stored size in bytes.
        modified_at: Modification timestamp, None if unavailable.
        content_accessor: Callable returning the decompressed bytes on demand.
    """
    path: str
    is_directory: bool = False
    raw_size: int = 0
    compressed_size: int = 0
    modified_at: Optional[datetime] = None
    content_accessor: Optional[ContentAccessor] = field(
        default=None, compare=False, repr=False
    )

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(eq=False)
class LeafNode:
    """
    A file in the reconstructed tree.

    Content is fetched lazily through the accessor forwarded from the
    raw entry and kept in a per-node cache after the first read.
    """
    name: str
    path: str
    raw_size: int = 0
    compressed_size: int = 0
    raw_size_display: str = "0 B"
    compressed_size_display: str = "0 B"
    modified_at: Optional[datetime] = None
    modified_display: str = ""
    content_accessor: Optional[ContentAccessor] = field(default=None, repr=False)
    node_id: int = -1
    parent_id: Optional[int] = None
    cache_content: bool = field(default=True, repr=False)
    _content: Optional[bytes] = field(default=None, init=False, repr=False)

    @property
    def is_directory(self) -> bool:
        return False

    def read_bytes(self) -> bytes:
        """
        Return the decompressed content of this entry.

        Returns:
            bytes: Entry payload (empty when the entry has no accessor).
        """
        if self._content is not None:
            return self._content
        if self.content_accessor is None:
            return b""

        data = self.content_accessor()
        if self.cache_content:
            self._content = data
        return data

    def clear_cache(self) -> None:
        self._content = None


@dataclass(eq=False)
class DirectoryNode:
    """
    A folder in the reconstructed tree, explicit or synthesized.

    Sizes are the aggregate over all descendant leaves and stay at zero
    until the aggregator has run.
    """
    name: str
    path: str
    children: List[Node] = field(default_factory=list)
    raw_size: int = 0
    compressed_size: int = 0
    raw_size_display: str = "0 B"
    compressed_size_display: str = "0 B"
    node_id: int = -1
    parent_id: Optional[int] = None

    @property
    def is_directory(self) -> bool:
        return True


Node = Union[LeafNode, DirectoryNode]

# -----------------------------------------------------------------------------
# TREE CONTAINER
# -----------------------------------------------------------------------------

@dataclass
class ArchiveTree:
    """
    Final output of the build pipeline.

    Attributes:
        top_level: Ordered depth-1 nodes.
        folder_map: Directory path -> DirectoryNode (explicit and synthesized).
        file_map: File path -> LeafNode (last-write-wins on duplicates).
        nodes: Arena of every node; a node's node_id is its index here.
    """
    top_level: List[Node] = field(default_factory=list)
    folder_map: Dict[str, DirectoryNode] = field(default_factory=dict)
    file_map: Dict[str, LeafNode] = field(default_factory=dict)
    nodes: List[Node] = field(default_factory=list)

    def get(self, node_id: int) -> Node:
        return self.nodes[node_id]

    def parent_of(self, node: Node) -> Optional[DirectoryNode]:
        """Return the owning directory of a node, None for top-level nodes."""
        if node.parent_id is None:
            return None
        parent = self.nodes[node.parent_id]
        assert isinstance(parent, DirectoryNode)
        return parent

    def find(self, path: str) -> Optional[Node]:
        """Look up a node by archive path in either index."""
        key = path.strip("/")
        if key in self.folder_map:
            return self.folder_map[key]
        return self.file_map.get(key)

    def iter_leaves(self) -> Iterator[LeafNode]:
        for node in self.nodes:
            if isinstance(node, LeafNode):
                yield node

    @property
    def file_count(self) -> int:
        return len(self.file_map)

    @property
    def folder_count(self) -> int:
        return len(self.folder_map)

    @property
    def total_raw_size(self) -> int:
        return sum(leaf.raw_size for leaf in self.iter_leaves())

    @property
    def total_compressed_size(self) -> int:
        return sum(leaf.compressed_size for leaf in self.iter_leaves())

from __future__ import annotations

"""
Archive Session Service.

Holds one opened archive for an interactive consumer: the built tree, the
shared reader backing lazy content access, and a private temp workspace for
single-entry extraction. Adding a file persists new archive bytes to the
source and rebuilds the tree in full, so the indices never go stale.
"""

import io
import logging
import os
import zipfile
from typing import Any, Dict, Optional

from zipscope.core.pipeline.engine import (
    archive_display_name,
    load_archive_bytes,
    parse_archive_as_tree,
)
from zipscope.core.pipeline.stages.validator import validate_config
from zipscope.domain.errors import (
    ArchiveFormatError,
    ArchiveSourceError,
    EntryIsFolderError,
    EntryNotFoundError,
)
from zipscope.domain.tree_models import ArchiveTree, LeafNode, Node
from zipscope.infra.archive_reader import ZipArchiveReader
from zipscope.infra.fs import (
    create_temp_workspace,
    normalize_path,
    read_file_bytes,
    remove_tree,
    resolve_inside,
    safe_mkdir,
    write_file_bytes,
)
from zipscope.infra.network import is_remote_source

logger = logging.getLogger(__name__)


class ArchiveSession:
    """
    An opened archive and the operations a viewer performs on it.

    Use ArchiveSession.open() to construct; call dispose() (or use the
    session as a context manager) to drop the temp workspace.
    """

    def __init__(self, source: str, data: bytes, config: Optional[Dict[str, Any]] = None) -> None:
        self._cfg, warnings = validate_config(config or {})
        for warning in warnings:
            logger.warning(f"Configuration Warning: {warning}")

        self.source = source
        self.archive_name = archive_display_name(source)
        self._workspace = create_temp_workspace(self._cfg["temp_dir"] or None)
        self._reader: Optional[ZipArchiveReader] = None
        self._tree: Optional[ArchiveTree] = None

        self._load(data)

    @classmethod
    def open(cls, source: str, config: Optional[Dict[str, Any]] = None) -> ArchiveSession:
        """
        Load an archive from a local path or URL and build its tree.

        Raises:
            ArchiveSourceError: If the source cannot be read.
            ArchiveFormatError: If the bytes are not a valid archive.
        """
        data = load_archive_bytes(source, config)
        logger.info(f"Opening archive '{source}' ({len(data)} bytes)")
        return cls(source, data, config)

    # -------------------------------------------------------------------------
    # TREE ACCESS
    # -------------------------------------------------------------------------

    @property
    def tree(self) -> ArchiveTree:
        if self._tree is None:
            raise ValueError("Archive session has been disposed.")
        return self._tree

    @property
    def workspace(self) -> str:
        return self._workspace

    @property
    def is_remote(self) -> bool:
        return is_remote_source(self.source)

    def lookup(self, path: str) -> Node:
        """
        Resolve an archive path to its node.

        Raises:
            EntryNotFoundError: If neither index contains the path.
        """
        node = self.tree.find(path)
        if node is None:
            raise EntryNotFoundError(path)
        return node

    def read_entry(self, path: str) -> bytes:
        """Return the decompressed content of a file entry."""
        return self._require_leaf(path).read_bytes()

    # -------------------------------------------------------------------------
    # EXTRACTION
    # -------------------------------------------------------------------------

    def extract_entry(self, path: str, target_dir: Optional[str] = None) -> str:
        """
        Write one file entry to disk, keeping its archive-relative path.

        Args:
            path: Archive path of a file entry.
            target_dir: Destination root, defaults to the session workspace.

        Returns:
            str: Absolute path of the written file.
        """
        leaf = self._require_leaf(path)
        target = resolve_inside(target_dir or self._workspace, leaf.path)
        write_file_bytes(target, leaf.read_bytes())
        logger.debug(f"Extracted '{leaf.path}' to {target}")
        return target

    def extract_all(self, target: Optional[str] = None) -> str:
        """
        Extract every entry to disk.

        Without an explicit target, files go next to the archive; when the
        archive has more than one top-level node they are grouped in a
        folder named after the archive. Existing files are overwritten.

        Returns:
            str: The directory the archive was extracted into.
        """
        target_dir = target or self._cfg["extract_dir"]
        if not target_dir:
            if self.is_remote:
                raise ArchiveSourceError("Remote archives need an explicit extraction target.")
            target_dir = os.path.dirname(normalize_path(self.source, os.getcwd()))
            if len(self.tree.top_level) > 1:
                stem = os.path.splitext(self.archive_name)[0]
                target_dir = os.path.join(target_dir, stem)
        target_dir = os.path.abspath(target_dir)

        # Every destination is checked before anything touches the disk
        folders = [resolve_inside(target_dir, f.path) for f in self.tree.folder_map.values()]
        files = [(resolve_inside(target_dir, leaf.path), leaf) for leaf in self.tree.file_map.values()]

        ok, err = safe_mkdir(target_dir)
        if not ok:
            raise ArchiveSourceError(f"Cannot create '{target_dir}': {err}")

        logger.info(f"Extracting {self.tree.file_count} files to {target_dir}")
        for destination, leaf in files:
            write_file_bytes(destination, leaf.read_bytes())
        for folder in folders:
            safe_mkdir(folder)

        return target_dir

    # -------------------------------------------------------------------------
    # MUTATION
    # -------------------------------------------------------------------------

    def add_file(self, file_path: str, arcname: Optional[str] = None) -> ArchiveTree:
        """
        Append a local file to the archive, persist it and rebuild the tree.

        Args:
            file_path: File to add.
            arcname: Archive path for the new entry (default: its basename).

        Returns:
            ArchiveTree: The rebuilt tree.
        """
        if self.is_remote:
            raise ArchiveSourceError("Remote archives are read-only.")

        name = (arcname or os.path.basename(file_path)).replace(os.sep, "/").strip("/")
        payload = read_file_bytes(file_path)

        buffer = io.BytesIO(self._require_reader().data)
        try:
            with zipfile.ZipFile(buffer, mode="a", compression=zipfile.ZIP_DEFLATED) as zf:
                zf.writestr(name, payload)
        except zipfile.BadZipFile as e:
            raise ArchiveFormatError(f"Cannot append to archive: {e}") from e

        new_data = buffer.getvalue()
        write_file_bytes(normalize_path(self.source, os.getcwd()), new_data)
        logger.info(f"Added '{name}' to {self.archive_name}; rebuilding tree.")

        self._release()
        self._load(new_data)
        return self.tree

    # -------------------------------------------------------------------------
    # LIFECYCLE
    # -------------------------------------------------------------------------

    def dispose(self) -> None:
        """Drop the temp workspace, leaf caches and the archive reader."""
        if remove_tree(self._workspace):
            logger.debug(f"Removed workspace {self._workspace}")
        self._release()

    def __enter__(self) -> ArchiveSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()

    # -------------------------------------------------------------------------
    # INTERNAL HELPERS
    # -------------------------------------------------------------------------

    def _load(self, data: bytes) -> None:
        self._reader, self._tree = parse_archive_as_tree(data, self._cfg)

    def _release(self) -> None:
        if self._tree is not None:
            for leaf in self._tree.iter_leaves():
                leaf.clear_cache()
            self._tree = None
        if self._reader is not None:
            self._reader.close()
            self._reader = None

    def _require_reader(self) -> ZipArchiveReader:
        if self._reader is None:
            raise ValueError("Archive session has been disposed.")
        return self._reader

    def _require_leaf(self, path: str) -> LeafNode:
        node = self.lookup(path)
        if not isinstance(node, LeafNode):
            raise EntryIsFolderError(path)
        return node

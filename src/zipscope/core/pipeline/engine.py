from __future__ import annotations

"""
Archive Tree Pipeline.

Coordinates the one-shot transform from archive bytes to a browsable tree:
1. Validates configuration.
2. Loads archive bytes from a local path or URL.
3. Decodes entries (Archive Reader).
4. Builds the node tree and indices (Tree Builder).
5. Aggregates directory sizes (Aggregator).
6. Orders sibling lists (Sibling Sorter).
7. Renders the result for the interface layer.
"""

import logging
import os
from typing import Any, Dict, Optional, Tuple
from urllib.parse import unquote, urlparse

from zipscope.core.analysis.aggregator import aggregate_sizes
from zipscope.core.analysis.sorter import sort_tree
from zipscope.core.analysis.tree_builder import build_tree
from zipscope.core.analysis.tree_renderer import render_tree, tree_summary
from zipscope.core.pipeline.stages.validator import validate_config
from zipscope.domain.errors import ArchiveFormatError, ArchiveSourceError
from zipscope.domain.pipeline_models import (
    PipelineResult,
    create_error_result,
    create_success_result,
)
from zipscope.domain.tree_models import ArchiveTree
from zipscope.infra.archive_reader import read_archive_entries, ZipArchiveReader
from zipscope.infra.fs import normalize_path, read_file_bytes
from zipscope.infra.network import fetch_archive_bytes, is_remote_source

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def parse_archive_as_tree(
        data: bytes,
        config: Optional[Dict[str, Any]] = None,
) -> Tuple[ZipArchiveReader, ArchiveTree]:
    """
    Decode archive bytes and build the final, aggregated, sorted tree.

    The returned reader backs every leaf's content accessor and must stay
    open for as long as leaf content may be read.

    Args:
        data: Complete archive bytes.
        config: Session configuration (validated here; None for defaults).

    Returns:
        Tuple[ZipArchiveReader, ArchiveTree]: Open reader and the tree.

    Raises:
        ArchiveFormatError: If the bytes are not a valid archive.
    """
    cfg, _ = validate_config(config or {})

    reader, raw_entries = read_archive_entries(data)

    tree = build_tree(
        raw_entries,
        date_format=cfg["date_format"],
        size_precision=cfg["size_precision"],
        cache_content=cfg["cache_content"],
    )
    aggregate_sizes(tree.folder_map, precision=cfg["size_precision"])
    sort_tree(
        tree,
        case_sensitive=cfg["sort_case_sensitive"],
        locale_aware=cfg["sort_locale_aware"],
    )

    logger.info(
        f"Archive parsed: {tree.file_count} files in {tree.folder_count} folders."
    )
    return reader, tree


def load_archive_bytes(source: str, config: Optional[Dict[str, Any]] = None) -> bytes:
    """
    Read archive bytes from a local path or an http(s) URL.

    Raises:
        ArchiveSourceError: If the source cannot be read.
    """
    cfg, _ = validate_config(config or {})

    if is_remote_source(source):
        return fetch_archive_bytes(
            source,
            timeout=cfg["network_timeout"],
            max_bytes=cfg["max_download_bytes"],
        )

    path = normalize_path(source, os.getcwd())
    if not os.path.isfile(path):
        raise ArchiveSourceError(f"Archive file not found: {path}")
    return read_file_bytes(path)


def archive_display_name(source: str) -> str:
    """Basename of a local path or of a URL's path component."""
    if is_remote_source(source):
        path = unquote(urlparse(source).path)
        return os.path.basename(path.rstrip("/")) or source
    return os.path.basename(os.path.abspath(source))


def run_pipeline(config: Optional[Dict[str, Any]]) -> PipelineResult:
    """
    Open the configured archive and build its tree.

    Expected failures (missing file, download error, invalid archive) are
    returned as error results rather than raised.

    Args:
        config: Raw or partial configuration; 'input_path' names the source.

    Returns:
        PipelineResult: Status, tree, rendering and summary counters.
    """
    logger.info("Pipeline execution started.")

    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    source = cfg["input_path"]
    if not source:
        msg = "No archive given (input_path is empty)."
        logger.error(msg)
        return create_error_result(msg, source)

    name = archive_display_name(source)

    try:
        data = load_archive_bytes(source, cfg)
        _, tree = parse_archive_as_tree(data, cfg)
    except (ArchiveSourceError, ArchiveFormatError) as e:
        logger.error(f"Cannot open archive '{source}': {e}")
        return create_error_result(str(e), source, name)

    lines = render_tree(tree, title=name, show_sizes=cfg["show_sizes"])
    if cfg["print_tree"]:
        logger.debug("Tree Preview:\n" + "\n".join(lines))

    summary = tree_summary(tree)
    summary["archive_bytes"] = len(data)
    return create_success_result(source, name, tree, lines, summary)

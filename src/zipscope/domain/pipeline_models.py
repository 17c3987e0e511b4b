from __future__ import annotations

"""
Pipeline Domain Data Models.

Result record exchanged between the archive pipeline and the interface
layer, plus the factories that build it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from zipscope.domain.tree_models import ArchiveTree

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class PipelineResult:
    """
    Outcome of opening an archive and building its tree.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        source: Archive path or URL that was opened.
        archive_name: Display name of the archive.
        tree: The built tree, None on failure.
        tree_lines: ASCII rendering of the tree.
        summary: Counters (files, folders, sizes) and run metadata.
    """
    ok: bool
    error: str
    source: str
    archive_name: str = ""
    tree: Optional[ArchiveTree] = field(default=None, repr=False)
    tree_lines: List[str] = field(default_factory=list)
    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        source: str,
        archive_name: str = "",
        summary_extra: Optional[Dict[str, Any]] = None,
) -> PipelineResult:
    """Create a failed pipeline result."""
    return PipelineResult(
        ok=False,
        error=error,
        source=source,
        archive_name=archive_name,
        summary=summary_extra or {},
    )


def create_success_result(
        source: str,
        archive_name: str,
        tree: ArchiveTree,
        tree_lines: Optional[List[str]] = None,
        summary_extra: Optional[Dict[str, Any]] = None,
) -> PipelineResult:
    """
    Create a successful pipeline result.

    Args:
        source: Archive path or URL.
        archive_name: Display name of the archive.
        tree: Fully aggregated and sorted tree.
        tree_lines: Rendered tree.
        summary_extra: Counters and metadata.
    """
    return PipelineResult(
        ok=True,
        error="",
        source=source,
        archive_name=archive_name,
        tree=tree,
        tree_lines=tree_lines or [],
        summary=summary_extra or {},
    )

from __future__ import annotations

"""
Network Infrastructure.

HTTP access for archives opened from a URL instead of a local path.
"""

from zipscope.infra.network.archive_client import fetch_archive_bytes
from zipscope.infra.network.common import is_remote_source

__all__ = [
    "fetch_archive_bytes",
    "is_remote_source",
]

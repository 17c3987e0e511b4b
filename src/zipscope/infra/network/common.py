from __future__ import annotations

from zipscope.domain.constants import APP_VERSION, REMOTE_SCHEMES

USER_AGENT = f"ZipScope-Client/{APP_VERSION}"
CHUNK_SIZE = 64 * 1024


def is_remote_source(source: str) -> bool:
    """True when the archive source is an http(s) URL rather than a local path."""
    return source.strip().lower().startswith(REMOTE_SCHEMES)

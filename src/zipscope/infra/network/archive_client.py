from __future__ import annotations

import logging
from typing import Optional

import requests

from zipscope.domain.constants import DEFAULT_MAX_DOWNLOAD_BYTES, DEFAULT_NETWORK_TIMEOUT
from zipscope.domain.errors import ArchiveSourceError
from zipscope.infra.network.common import CHUNK_SIZE, USER_AGENT

logger = logging.getLogger(__name__)


def fetch_archive_bytes(
        url: str,
        timeout: int = DEFAULT_NETWORK_TIMEOUT,
        max_bytes: Optional[int] = DEFAULT_MAX_DOWNLOAD_BYTES,
) -> bytes:
    """
    Download a remote archive into memory using buffered streaming.

    Args:
        url: http(s) location of the archive.
        timeout: Connect/read timeout in seconds.
        max_bytes: Abort once the body exceeds this size (None disables).

    Returns:
        bytes: The complete archive payload.

    Raises:
        ArchiveSourceError: On HTTP/transport failure or size overflow.
    """
    headers = {"User-Agent": USER_AGENT}
    logger.info(f"Downloading archive from {url}")

    try:
        with requests.get(url, headers=headers, stream=True, timeout=timeout) as response:
            response.raise_for_status()

            declared = int(response.headers.get("content-length", 0) or 0)
            if max_bytes is not None and declared > max_bytes:
                raise ArchiveSourceError(
                    f"Remote archive too large: {declared} bytes (limit {max_bytes})."
                )

            buffer = bytearray()
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if not chunk:
                    continue
                buffer.extend(chunk)
                if max_bytes is not None and len(buffer) > max_bytes:
                    raise ArchiveSourceError(
                        f"Remote archive exceeded the {max_bytes} byte limit."
                    )

    except requests.exceptions.RequestException as e:
        msg = f"Archive download failed for '{url}': {e}"
        logger.error(msg)
        raise ArchiveSourceError(msg) from e

    logger.debug(f"Downloaded {len(buffer)} bytes from {url}")
    return bytes(buffer)

from __future__ import annotations

"""
Zip Archive Reader.

Decodes raw archive bytes into the ordered list of RawEntry records
consumed by the tree builder. A single read-only ZipFile handle over an
in-memory buffer is shared by every entry's content accessor; each call
to an accessor decompresses the entry again.
"""

import io
import logging
import threading
import zipfile
import zlib
from datetime import datetime
from typing import List, Optional, Tuple

from zipscope.domain.errors import ArchiveFormatError
from zipscope.domain.tree_models import ContentAccessor, RawEntry

logger = logging.getLogger(__name__)


class ZipArchiveReader:
    """
    Read-only view over a zip archive held in memory.

    Args:
        data: Complete archive bytes.

    Raises:
        ArchiveFormatError: If the bytes are not a readable zip archive.
    """

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._lock = threading.Lock()
        try:
            self._zip: Optional[zipfile.ZipFile] = zipfile.ZipFile(io.BytesIO(data), mode="r")
        except (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError) as e:
            raise ArchiveFormatError(f"Invalid zip archive: {e}") from e

    @property
    def data(self) -> bytes:
        return self._data

    def entries(self) -> List[RawEntry]:
        """
        List archive entries in central-directory order.

        Returns:
            List[RawEntry]: One record per entry, directories included.
        """
        handle = self._require_open()
        out: List[RawEntry] = []
        for info in handle.infolist():
            out.append(
                RawEntry(
                    path=info.filename,
                    is_directory=info.is_dir(),
                    raw_size=info.file_size,
                    compressed_size=info.compress_size,
                    modified_at=_to_datetime(info.date_time),
                    content_accessor=None if info.is_dir() else self._accessor_for(info.filename),
                )
            )
        logger.debug(f"Archive reader decoded {len(out)} entries.")
        return out

    def read(self, name: str) -> bytes:
        """
        Decompress a single entry by its archive name.

        Raises:
            KeyError: If the archive has no member with that name.
            ArchiveFormatError: If the member data is corrupt, encrypted or
                uses an unsupported compression method.
        """
        handle = self._require_open()
        with self._lock:
            try:
                return handle.read(name)
            except (zipfile.BadZipFile, zlib.error) as e:
                raise ArchiveFormatError(f"Corrupt archive member '{name}': {e}") from e
            except NotImplementedError as e:
                raise ArchiveFormatError(f"Unsupported archive member '{name}': {e}") from e
            except RuntimeError as e:
                # zipfile raises RuntimeError for password-protected members
                raise ArchiveFormatError(f"Unreadable archive member '{name}': {e}") from e

    def close(self) -> None:
        if self._zip is not None:
            self._zip.close()
            self._zip = None

    def __enter__(self) -> ZipArchiveReader:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _accessor_for(self, name: str) -> ContentAccessor:
        def accessor() -> bytes:
            return self.read(name)
        return accessor

    def _require_open(self) -> zipfile.ZipFile:
        if self._zip is None:
            raise ValueError("Archive reader is closed.")
        return self._zip


def read_archive_entries(data: bytes) -> Tuple[ZipArchiveReader, List[RawEntry]]:
    """Open archive bytes and return the reader together with its entries."""
    reader = ZipArchiveReader(data)
    return reader, reader.entries()


def _to_datetime(date_time: Tuple[int, ...]) -> Optional[datetime]:
    """Convert a zip DOS timestamp tuple, tolerating malformed values."""
    try:
        return datetime(*date_time)
    except (TypeError, ValueError):
        return None

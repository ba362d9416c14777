# a2a_codegen/core/packager.py
"""
Zip packaging of a validated GenerationResult.

Path policy: separators are normalized and paths that are empty, absolute or
escape the archive root are rejected with PackagingError. Duplicate paths
resolve last-write-wins; the entry keeps the position of its first occurrence.
"""
import io
import logging
import time
import zipfile
from dataclasses import dataclass
from typing import Dict

from ..models import GenerationResult
from ..utils.config import ARCHIVE_COMPRESSION_LEVEL, ARCHIVE_FILENAME, ARCHIVE_MEDIA_TYPE
from ..utils.file_helpers import _safe_normalize
from .errors import PackagingError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArchivePayload:
    data: bytes
    size: int
    filename: str = ARCHIVE_FILENAME
    media_type: str = ARCHIVE_MEDIA_TYPE


def sanitize_archive_path(path: str) -> str:
    clean = _safe_normalize(path)
    if clean is None:
        raise PackagingError(f"Cannot package file with unsafe or empty path: {path!r}")
    return clean


def build_archive(result: GenerationResult, filename: str = ARCHIVE_FILENAME) -> ArchivePayload:
    entries: Dict[str, bytes] = {}
    for f in result.files:
        name = sanitize_archive_path(f.path)
        if name in entries:
            logger.warning("Duplicate archive path %s; keeping the last occurrence", name)
        entries[name] = f.content.encode("utf-8")

    date_time = time.localtime(time.time())[:6]
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=ARCHIVE_COMPRESSION_LEVEL) as zf:
        for name, data in entries.items():
            info = zipfile.ZipInfo(name, date_time=date_time)
            info.compress_type = zipfile.ZIP_DEFLATED
            info.external_attr = 0o644 << 16
            zf.writestr(info, data, compresslevel=ARCHIVE_COMPRESSION_LEVEL)

    data = buf.getvalue()
    logger.debug("Built archive %s: %d entries, %d bytes", filename, len(entries), len(data))
    return ArchivePayload(data=data, size=len(data), filename=filename)

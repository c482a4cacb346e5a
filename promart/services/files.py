"""File-metadata records and the lenient parsers used by listing edits.

Multipart form fields arrive as strings, so the kept-file lists and the
feature list may be JSON text. Malformed input never raises here: kept-file
lists fall back to what the listing already stores, and features fall back
to the raw text.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredUpload:
    """An upload already written to durable storage by the ingestion layer."""

    name: str
    url: str
    type: str
    size: int


def file_record(upload: StoredUpload, uploaded_at: datetime | None = None) -> dict[str, Any]:
    when = uploaded_at or datetime.now(timezone.utc)
    return {
        "name": upload.name,
        "url": upload.url,
        "type": upload.type,
        "size": upload.size,
        "uploadedAt": when.isoformat(),
    }


def file_records(uploads: list[StoredUpload] | None) -> list[dict[str, Any]]:
    return [file_record(u) for u in uploads or []]


def parse_kept_files(raw: Any, current: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Return the list of existing files the caller wants to keep.

    ``raw`` is JSON text or an already-decoded list. ``None`` or blank text
    keeps ``current`` unchanged; anything that does not decode to a list of
    objects also falls back to ``current``.
    """
    if raw is None:
        return list(current)
    if isinstance(raw, str):
        if not raw.strip():
            return list(current)
        try:
            raw = json.loads(raw)
        except ValueError:
            logger.warning("Malformed kept-file list; keeping stored files")
            return list(current)
    if not isinstance(raw, list) or not all(isinstance(item, dict) for item in raw):
        logger.warning("Kept-file list is not a list of objects; keeping stored files")
        return list(current)
    # Preserve order and every key the client sent back
    return [dict(item) for item in raw]


def parse_features(raw: Any) -> list[str] | None:
    """Decode the feature list; ``None`` means the field was not sent.

    Blank text counts as not sent, so an empty form field never becomes ``[""]``.
    """
    if raw is None:
        return None
    if isinstance(raw, list):
        return [str(f) for f in raw]
    text = str(raw)
    if not text.strip():
        return None
    try:
        decoded = json.loads(text)
    except ValueError:
        return [text]
    if isinstance(decoded, list):
        return [str(f) for f in decoded]
    return [text]


def merge_files(kept: list[dict[str, Any]], uploads: list[StoredUpload] | None) -> list[dict[str, Any]]:
    """New collection = kept existing files followed by freshly uploaded ones."""
    return kept + file_records(uploads)


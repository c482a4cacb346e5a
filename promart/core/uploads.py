"""Multipart upload ingestion. This is an HTTP concern, so it lives outside the services.

Every file of a request is read and checked before any byte is written, then
the whole batch is written to ``settings.upload_dir`` under random names and
served back from ``/uploads``. If the request fails after that, the route
discards the batch so no file is left without a listing. The workflow only
ever receives the resulting :class:`StoredUpload` tuples.
"""


import logging
import secrets
from dataclasses import dataclass
from pathlib import Path

from fastapi import Request, UploadFile
from starlette.concurrency import run_in_threadpool

from promart.core.config import settings
from promart.core.exceptions import ValidationError
from promart.services.files import StoredUpload

logger = logging.getLogger(__name__)

UPLOAD_ROUTE = "/uploads"


def upload_root() -> Path:
    root = Path(settings.upload_dir)
    root.mkdir(parents=True, exist_ok=True)
    return root


@dataclass(frozen=True)
class _PendingFile:
    filename: str
    content_type: str
    contents: bytes


async def _read_field(files: list[UploadFile] | None, field: str) -> list[_PendingFile]:
    files = [f for f in files or [] if f.filename]
    if len(files) > settings.max_files_per_field:
        raise ValidationError(
            f"Too many files for '{field}' (max {settings.max_files_per_field})"
        )

    pending: list[_PendingFile] = []
    for upload in files:
        contents = await upload.read()
        if len(contents) == 0:
            raise ValidationError(f"Uploaded file '{upload.filename}' is empty.")
        if len(contents) > settings.max_upload_size_bytes:
            raise ValidationError(
                f"File '{upload.filename}' exceeds the {settings.max_upload_size_mb}MB limit."
            )
        pending.append(
            _PendingFile(
                filename=upload.filename,
                content_type=upload.content_type or "application/octet-stream",
                contents=contents,
            )
        )
    return pending


class UploadBatch:
    """All files sent with one request, keyed by multipart field name."""

    def __init__(self, request: Request):
        self._base_url = str(request.base_url).rstrip("/")
        self._pending: dict[str, list[_PendingFile]] = {}
        self._written: list[Path] = []

    async def add(self, field: str, files: list[UploadFile] | None) -> None:
        """Read and validate one field. Nothing touches the disk yet."""
        self._pending[field] = await _read_field(files, field)

    async def write(self) -> dict[str, list[StoredUpload]]:
        root = upload_root()
        stored: dict[str, list[StoredUpload]] = {}
        for field, pending in self._pending.items():
            stored[field] = []
            for item in pending:
                name = f"{secrets.token_hex(16)}{Path(item.filename).suffix.lower()}"
                path = root / name
                await run_in_threadpool(path.write_bytes, item.contents)
                self._written.append(path)
                stored[field].append(
                    StoredUpload(
                        name=item.filename,
                        url=f"{self._base_url}{UPLOAD_ROUTE}/{name}",
                        type=item.content_type,
                        size=len(item.contents),
                    )
                )
        if self._written:
            logger.info("Stored %d upload(s)", len(self._written))
        return stored

    async def discard(self) -> None:
        """Remove every file this batch wrote."""
        for path in self._written:
            await run_in_threadpool(path.unlink, missing_ok=True)
        if self._written:
            logger.info("Discarded %d upload(s) from a failed request", len(self._written))
        self._written = []

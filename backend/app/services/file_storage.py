"""
Local filesystem storage for notice attachments.

Uploads land in settings.UPLOAD_DIR under generated names; the original
filename is kept on the notice for downloads.
"""
import secrets
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import aiofiles
import aiofiles.os
from fastapi import UploadFile

from app.core.config import settings
from app.core.exceptions import (
    FileTooLargeError,
    InvalidFileTypeError,
    StorageError,
    ValidationError,
)
from app.core.logging_config import logger

ALLOWED_CONTENT_TYPES = {"application/pdf"}
PDF_MAGIC = b"%PDF"


@dataclass
class StoredFile:
    original_name: str
    stored_name: str
    path: str
    size: int


class NoticeFileStorage:
    """Save, locate and remove uploaded notice PDFs"""

    def __init__(self, base_dir: Optional[Path] = None):
        self._base_dir = base_dir

    @property
    def base_dir(self) -> Path:
        return self._base_dir or settings.UPLOAD_PATH

    def _validate(self, upload: UploadFile, content: bytes) -> str:
        filename = upload.filename or ""
        ext = Path(filename).suffix.lower().lstrip(".")
        allowed = settings.ALLOWED_EXTENSIONS

        if ext not in allowed:
            raise InvalidFileTypeError(ext or "unknown", allowed)

        if upload.content_type and upload.content_type not in ALLOWED_CONTENT_TYPES:
            raise InvalidFileTypeError(upload.content_type, sorted(ALLOWED_CONTENT_TYPES))

        if not content:
            raise ValidationError("Empty file", field="pdf_file")

        if len(content) > settings.MAX_UPLOAD_SIZE:
            raise FileTooLargeError(len(content), settings.MAX_UPLOAD_SIZE)

        if not content.startswith(PDF_MAGIC):
            raise ValidationError("Only PDF files are allowed", field="pdf_file")

        return ext

    async def save_pdf(self, upload: UploadFile) -> StoredFile:
        content = await upload.read()
        ext = self._validate(upload, content)

        stored_name = f"pdfFile-{int(time.time() * 1000)}-{secrets.token_hex(4)}.{ext}"
        target = self.base_dir / stored_name

        try:
            await aiofiles.os.makedirs(self.base_dir, exist_ok=True)
            async with aiofiles.open(target, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.log_error_with_context(e, context="save notice attachment")
            raise StorageError("Failed to store uploaded file")

        logger.info(f"[Storage] Saved {upload.filename} as {stored_name} ({len(content)} bytes)")

        return StoredFile(
            original_name=Path(upload.filename).name,
            stored_name=stored_name,
            path=str(target),
            size=len(content),
        )

    def resolve(self, path: Optional[str]) -> Optional[Path]:
        """Path of a stored file, or None if it is missing or outside the upload dir"""
        if not path:
            return None
        candidate = Path(path).resolve()
        if self.base_dir.resolve() not in candidate.parents:
            logger.warning(f"[Storage] Refusing path outside upload dir: {path}")
            return None
        return candidate if candidate.is_file() else None

    async def delete(self, path: Optional[str]) -> bool:
        target = self.resolve(path)
        if target is None:
            return False
        try:
            await aiofiles.os.remove(target)
        except OSError as e:
            # The notice row is already gone; a leftover file is only logged
            logger.warning(f"[Storage] Failed to delete {target}: {e}")
            return False
        logger.info(f"[Storage] Deleted {target.name}")
        return True


file_storage = NoticeFileStorage()

from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Protocol

from werkzeug.utils import secure_filename

from ..core.exceptions import StoreError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".pdf", ".png", ".jpg", ".jpeg"}


class UploadStore(Protocol):
    def upload_file(self, data: bytes, filename: str) -> str:
        """Store the bytes and return a reference (URL) to them."""

        raise NotImplementedError


class LocalUploadStore(UploadStore):
    """Keeps uploads on local disk and hands out URLs served by the app."""

    def __init__(self, root_dir: str | Path, *, base_url: str = "/uploads"):
        self._root = Path(root_dir)
        self._base_url = base_url.rstrip("/")

    @property
    def root(self) -> Path:
        return self._root

    def upload_file(self, data: bytes, filename: str) -> str:
        if not data:
            raise ValidationError("Uploaded file is empty")

        safe = secure_filename(filename or "")
        suffix = Path(safe).suffix.lower()
        if suffix not in ALLOWED_EXTENSIONS:
            raise ValidationError(f"File type not allowed: {suffix or filename!r}")

        stored_name = f"{uuid.uuid4().hex}{suffix}"
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            (self._root / stored_name).write_bytes(data)
        except OSError as e:
            logger.error("Could not write upload %s: %s", stored_name, e)
            raise StoreError() from e

        return f"{self._base_url}/{stored_name}"

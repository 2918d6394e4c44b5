from __future__ import annotations

import logging
import re
import secrets
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from cvdesk.errors import ValidationError


logger = logging.getLogger(__name__)

ALLOWED_SUFFIXES = {".pdf", ".doc", ".docx"}


@dataclass(frozen=True)
class BlobInfo:
    exists: bool
    size: int
    uploaded_at: datetime


@dataclass(frozen=True)
class Upload:
    filename: str
    content: bytes


class BlobStore:
    """Stores uploaded CV files on local disk under generated names."""

    def __init__(self, root: str | Path, max_bytes: int) -> None:
        self.root = Path(root)
        self.max_bytes = max_bytes

    def validate(self, upload: Upload) -> None:
        suffix = Path(upload.filename or "").suffix.lower()
        if suffix not in ALLOWED_SUFFIXES:
            raise ValidationError({"cv_file": ["Only PDF, DOC and DOCX files are supported"]})
        if len(upload.content) > self.max_bytes:
            raise ValidationError({"cv_file": [f"File exceeds {self.max_bytes // (1024 * 1024)}MB"]})

    def store(self, upload: Upload) -> str:
        self.validate(upload)
        original = Path(upload.filename).name
        safe_stem = re.sub(r"[^A-Za-z0-9._-]", "_", Path(original).stem)[:80] or "cv"
        reference = f"{secrets.token_hex(8)}_{safe_stem}{Path(original).suffix.lower()}"
        self.root.mkdir(parents=True, exist_ok=True)
        (self.root / reference).write_bytes(upload.content)
        logger.info("Stored upload %s (%d bytes)", reference, len(upload.content))
        return reference

    def path_for(self, reference: str) -> Path | None:
        candidate = (self.root / reference).resolve()
        if candidate.parent != self.root.resolve():
            return None
        return candidate

    def delete(self, reference: str) -> bool:
        path = self.path_for(reference)
        if path is None or not path.exists():
            return False
        try:
            path.unlink()
        except OSError:
            logger.warning("Could not remove upload %s", reference, exc_info=True)
            return False
        return True

    def info(self, reference: str) -> BlobInfo | None:
        path = self.path_for(reference)
        if path is None or not path.is_file():
            return None
        stat = path.stat()
        return BlobInfo(
            exists=True,
            size=stat.st_size,
            uploaded_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
        )
